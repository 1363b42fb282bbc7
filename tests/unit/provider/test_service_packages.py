import pytest

from awsprovider.exceptions import DuplicateRegistrationError
from awsprovider.provider.service_package import register_service_package, service_packages
from awsprovider.services.meta import MetaServicePackage


@pytest.mark.unit
class TestServicePackages:
    def test_builtin_meta_package(self):
        packages = {package.name: package for package in service_packages()}

        meta = packages["meta"]
        assert [name for name, _ in meta.data_sources()] == [
            "aws_arn",
            "aws_default_tags",
            "aws_partition",
            "aws_region",
        ]
        assert meta.resources() == []
        assert meta.custom_endpoint_key() is None

    def test_packages_are_sorted_by_name(self):
        names = [package.name for package in service_packages()]

        assert names == sorted(names)

    def test_duplicate_package_name_is_rejected(self):
        with pytest.raises(DuplicateRegistrationError, match="service package named 'meta'"):
            register_service_package(MetaServicePackage())
