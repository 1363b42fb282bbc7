from awsprovider.provider.service_package import ServicePackage, register_service_package
from awsprovider.services.meta.data_sources import (
    data_source_aws_arn,
    data_source_aws_default_tags,
    data_source_aws_partition,
    data_source_aws_region,
)


class MetaServicePackage(ServicePackage):
    """Data sources about the provider itself. Calls no service API of its own."""

    name = "meta"

    def data_sources(self):
        return [
            ("aws_arn", data_source_aws_arn),
            ("aws_default_tags", data_source_aws_default_tags),
            ("aws_partition", data_source_aws_partition),
            ("aws_region", data_source_aws_region),
        ]

    def resources(self):
        return []

    def custom_endpoint_key(self):
        return None


service_package = register_service_package(MetaServicePackage())
