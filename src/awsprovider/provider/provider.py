"""
The provider descriptor handed to the host runtime.

new_provider() assembles the provider schema, the data source and resource
tables (static entries first, then each service package), and the list of
custom endpoint keys. Any duplicate name aborts assembly.
"""

from typing import TYPE_CHECKING, Any, Iterable, Optional

from botocore.exceptions import BotoCoreError

from awsprovider._package import DEFAULT_HOST_VERSION
from awsprovider.aws.errors import convert_botocore_error
from awsprovider.exceptions import ProviderError, SchemaError
from awsprovider.helpers.logger import get_logger
from awsprovider.provider.configure import provider_configure
from awsprovider.provider.descriptions import DESCRIPTIONS
from awsprovider.provider.endpoints import ENDPOINT_SERVICE_NAMES
from awsprovider.provider.registry import RegistrationTable, register_custom_endpoints
from awsprovider.provider.service_package import ServicePackage, service_packages as registered_service_packages
from awsprovider.sdk.schema import (
    Diagnostics,
    Resource,
    Schema,
    ValueType,
    hash_string_value,
    multi_env_default_func,
)
from awsprovider.sdk.schema.validation import string_is_json, validate_arn
from awsprovider.services.acm import resource_aws_acm_certificate
from awsprovider.services.cloudwatchlogs import (
    resource_aws_cloudwatch_log_group,
    resource_aws_cloudwatch_log_stream,
)
from awsprovider.services.ds import resource_aws_directory_service_directory
from awsprovider.services.ec2 import (
    data_source_aws_availability_zones,
    resource_aws_ec2_client_vpn_authorization_rule,
    resource_aws_ec2_client_vpn_endpoint,
    resource_aws_ec2_client_vpn_network_association,
    resource_aws_ec2_client_vpn_route,
    resource_aws_subnet,
    resource_aws_vpc,
)
from awsprovider.services.elbv2 import resource_aws_lb_target_group_attachment
from awsprovider.services.sts import data_source_aws_caller_identity

if TYPE_CHECKING:
    from awsprovider.aws.client import AWSClient

logger = get_logger(__name__)

DATA_SOURCES = [
    ("aws_availability_zones", data_source_aws_availability_zones),
    ("aws_caller_identity", data_source_aws_caller_identity),
]

RESOURCES = [
    ("aws_acm_certificate", resource_aws_acm_certificate),
    ("aws_cloudwatch_log_group", resource_aws_cloudwatch_log_group),
    ("aws_cloudwatch_log_stream", resource_aws_cloudwatch_log_stream),
    ("aws_directory_service_directory", resource_aws_directory_service_directory),
    ("aws_ec2_client_vpn_authorization_rule", resource_aws_ec2_client_vpn_authorization_rule),
    ("aws_ec2_client_vpn_endpoint", resource_aws_ec2_client_vpn_endpoint),
    ("aws_ec2_client_vpn_network_association", resource_aws_ec2_client_vpn_network_association),
    ("aws_ec2_client_vpn_route", resource_aws_ec2_client_vpn_route),
    ("aws_subnet", resource_aws_subnet),
    ("aws_vpc", resource_aws_vpc),
    # ALBs are LBs; both names point at the same descriptor.
    ("aws_alb_target_group_attachment", resource_aws_lb_target_group_attachment),
    ("aws_lb_target_group_attachment", resource_aws_lb_target_group_attachment),
]


def _string_set(**kwargs) -> Schema:
    return Schema(type=ValueType.SET, elem=Schema(type=ValueType.STRING), set_func=hash_string_value, **kwargs)


def assume_role_schema() -> Schema:
    return Schema(
        type=ValueType.LIST,
        optional=True,
        max_items=1,
        elem=Resource(
            schema={
                "duration_seconds": Schema(
                    type=ValueType.INT,
                    optional=True,
                    description="Seconds to restrict the assume role session duration.",
                ),
                "external_id": Schema(
                    type=ValueType.STRING,
                    optional=True,
                    description="Unique identifier that might be required for assuming a role in another account.",
                ),
                "policy": Schema(
                    type=ValueType.STRING,
                    optional=True,
                    description="IAM Policy JSON describing further restricting permissions "
                    "for the IAM Role being assumed.",
                    validate_func=string_is_json,
                ),
                "policy_arns": Schema(
                    type=ValueType.SET,
                    optional=True,
                    description="Amazon Resource Names (ARNs) of IAM Policies describing further "
                    "restricting permissions for the IAM Role being assumed.",
                    elem=Schema(type=ValueType.STRING, validate_func=validate_arn),
                ),
                "role_arn": Schema(
                    type=ValueType.STRING,
                    optional=True,
                    description="Amazon Resource Name of an IAM Role to assume prior to making API calls.",
                    validate_func=validate_arn,
                ),
                "session_name": Schema(
                    type=ValueType.STRING,
                    optional=True,
                    description="Identifier for the assumed role session.",
                ),
                "tags": Schema(
                    type=ValueType.MAP,
                    optional=True,
                    description="Assume role session tags.",
                    elem=Schema(type=ValueType.STRING),
                ),
                "transitive_tag_keys": Schema(
                    type=ValueType.SET,
                    optional=True,
                    description="Assume role session tag keys to pass to any subsequent sessions.",
                    elem=Schema(type=ValueType.STRING),
                ),
            }
        ),
    )


def endpoints_schema(endpoint_service_names: Iterable[str]) -> Schema:
    return Schema(
        type=ValueType.SET,
        optional=True,
        elem=Resource(
            schema={
                name: Schema(type=ValueType.STRING, optional=True, default="", description=DESCRIPTIONS["endpoint"])
                for name in endpoint_service_names
            }
        ),
    )


def _optional_string(name: str) -> Schema:
    return Schema(type=ValueType.STRING, optional=True, default="", description=DESCRIPTIONS[name])


def _optional_bool(name: str) -> Schema:
    return Schema(type=ValueType.BOOL, optional=True, default=False, description=DESCRIPTIONS[name])


def provider_schema(endpoint_service_names: Iterable[str]) -> dict[str, Schema]:
    return {
        "access_key": _optional_string("access_key"),
        "secret_key": _optional_string("secret_key"),
        "profile": _optional_string("profile"),
        "assume_role": assume_role_schema(),
        "shared_credentials_file": _optional_string("shared_credentials_file"),
        "token": _optional_string("token"),
        "region": Schema(
            type=ValueType.STRING,
            required=True,
            default_func=multi_env_default_func(["AWS_REGION", "AWS_DEFAULT_REGION"]),
            description=DESCRIPTIONS["region"],
            input_default="us-east-1",
        ),
        "max_retries": Schema(
            type=ValueType.INT,
            optional=True,
            default=25,
            description=DESCRIPTIONS["max_retries"],
        ),
        "allowed_account_ids": _string_set(optional=True, conflicts_with=["forbidden_account_ids"]),
        "forbidden_account_ids": _string_set(optional=True, conflicts_with=["allowed_account_ids"]),
        "default_tags": Schema(
            type=ValueType.LIST,
            optional=True,
            max_items=1,
            description="Configuration block with settings to default resource tags across all resources.",
            elem=Resource(
                schema={
                    "tags": Schema(
                        type=ValueType.MAP,
                        optional=True,
                        elem=Schema(type=ValueType.STRING),
                        description="Resource tags to default across all resources",
                    ),
                }
            ),
        ),
        "endpoints": endpoints_schema(endpoint_service_names),
        "ignore_tags": Schema(
            type=ValueType.LIST,
            optional=True,
            max_items=1,
            description="Configuration block with settings to ignore resource tags across all resources.",
            elem=Resource(
                schema={
                    "keys": _string_set(
                        optional=True,
                        description="Resource tag keys to ignore across all resources.",
                    ),
                    "key_prefixes": _string_set(
                        optional=True,
                        description="Resource tag key prefixes to ignore across all resources.",
                    ),
                }
            ),
        ),
        "insecure": _optional_bool("insecure"),
        "skip_credentials_validation": _optional_bool("skip_credentials_validation"),
        "skip_get_ec2_platforms": _optional_bool("skip_get_ec2_platforms"),
        "skip_region_validation": _optional_bool("skip_region_validation"),
        "skip_requesting_account_id": _optional_bool("skip_requesting_account_id"),
        "skip_metadata_api_check": _optional_bool("skip_metadata_api_check"),
        "s3_force_path_style": _optional_bool("s3_force_path_style"),
    }


class Provider:
    """Schema, registration tables and configured client handle."""

    def __init__(
        self,
        schema: dict[str, Schema],
        data_sources: RegistrationTable,
        resources: RegistrationTable,
        endpoint_service_names: list[str],
    ) -> None:
        self.schema = schema
        self.data_sources = data_sources
        self.resources = resources
        self.endpoint_service_names = endpoint_service_names
        self.meta: Optional["AWSClient"] = None
        self._terraform_version = ""

    @property
    def terraform_version(self) -> str:
        return self._terraform_version or DEFAULT_HOST_VERSION

    @terraform_version.setter
    def terraform_version(self, value: str) -> None:
        self._terraform_version = value or ""

    @property
    def configuration(self) -> Resource:
        return Resource(schema=self.schema)

    def internal_validate(self) -> None:
        """Raise SchemaError listing every problem in the provider and its descriptors."""
        errors = [f"provider: {e}" for e in self.configuration.internal_validate(top_level=False)]
        for name, resource in self.resources.items():
            errors.extend(f"resource {name}: {e}" for e in resource.internal_validate(top_level=True))
        for name, data_source in self.data_sources.items():
            errors.extend(
                f"data source {name}: {e}"
                for e in data_source.internal_validate(top_level=True, data_source=True)
            )
        if errors:
            raise SchemaError(f"{len(errors)} schema error(s) found", errors)

    def validate(self, raw: Optional[dict[str, Any]]) -> Diagnostics:
        return self.configuration.validate(raw)

    def configure(self, raw: Optional[dict[str, Any]]) -> Diagnostics:
        """Validate and decode the provider block, then build the client handle."""
        diags = self.validate(raw)
        if diags.has_error():
            return diags

        d = self.configuration.decode(raw)
        client, configure_diags = provider_configure(d, self.terraform_version, self.endpoint_service_names)
        diags.extend(configure_diags)
        if client is not None:
            self.meta = client
        return diags

    def resource(self, name: str) -> Resource:
        return self.resources.get(name)

    def data_source(self, name: str) -> Resource:
        return self.data_sources.get(name)

    def read_data_source(self, name: str, raw: Optional[dict[str, Any]]) -> tuple[dict[str, str], Diagnostics]:
        """Validate, decode and read a data source. Returns its flat attributes."""
        data_source = self.data_source(name)
        diags = data_source.validate(raw)
        if diags.has_error():
            return {}, diags

        if self.meta is None:
            diags.add_error(
                "Provider not configured",
                f"The provider must be configured before reading data source {name}.",
            )
            return {}, diags

        d = data_source.decode(raw)
        try:
            data_source.read(d, self.meta)
        except (BotoCoreError, ProviderError) as e:
            error = convert_botocore_error(e, name) if isinstance(e, BotoCoreError) else e
            logger.error("Error reading data source %s: %s", name, error)
            diags.add_error(f"error reading {name}", str(error))
            return {}, diags
        return d.state(), diags

    def get_schema(self) -> dict[str, Any]:
        """JSON-serialisable dump of the provider, resource and data source schemas."""
        return {
            "provider": self.configuration.to_dict(),
            "resource_schemas": {name: resource.to_dict() for name, resource in self.resources.items()},
            "data_source_schemas": {name: ds.to_dict() for name, ds in self.data_sources.items()},
        }


def new_provider(service_packages: Optional[list[ServicePackage]] = None) -> Provider:
    """
    Assemble the provider. Raises DuplicateRegistrationError on any duplicate
    data source, resource or custom endpoint name.
    """
    packages = registered_service_packages() if service_packages is None else service_packages

    data_sources = RegistrationTable("data source")
    data_sources.register_all(DATA_SOURCES)
    resources = RegistrationTable("resource")
    resources.register_all(RESOURCES)

    for package in packages:
        data_sources.register_all(package.data_sources(), source=package.name)
        resources.register_all(package.resources(), source=package.name)

    endpoint_service_names = register_custom_endpoints(ENDPOINT_SERVICE_NAMES, packages)

    logger.debug(
        "Provider assembled: %d data sources, %d resources, %d endpoint keys",
        len(data_sources),
        len(resources),
        len(endpoint_service_names),
    )
    return Provider(provider_schema(endpoint_service_names), data_sources, resources, endpoint_service_names)
