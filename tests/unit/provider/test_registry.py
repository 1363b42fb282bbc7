"""Tests for registration tables and the custom endpoint registry."""

import threading

import pytest

from awsprovider.exceptions import DuplicateRegistrationError, RegistrationError, UnknownTypeError
from awsprovider.provider.registry import RegistrationTable, register_custom_endpoints
from awsprovider.provider.service_package import ServicePackage
from awsprovider.sdk.schema import Resource


def factory():
    return Resource(schema={})


class FakePackage(ServicePackage):
    def __init__(self, name, endpoint_key="default"):
        self.name = name
        self._endpoint_key = name if endpoint_key == "default" else endpoint_key

    def data_sources(self):
        return []

    def resources(self):
        return []

    def custom_endpoint_key(self):
        return self._endpoint_key


@pytest.mark.unit
class TestRegistrationTable:
    def test_register_and_get(self):
        table = RegistrationTable("resource")
        table.register("aws_vpc", factory)

        assert "aws_vpc" in table
        assert table.is_registered("aws_vpc")
        assert isinstance(table.get("aws_vpc"), Resource)
        assert len(table) == 1

    def test_duplicate_is_rejected_at_registration(self):
        table = RegistrationTable("resource")
        table.register("aws_vpc", factory)

        with pytest.raises(DuplicateRegistrationError) as exc_info:
            table.register("aws_vpc", factory)

        assert str(exc_info.value) == "A resource named 'aws_vpc' is already registered"
        assert exc_info.value.name == "aws_vpc"
        assert isinstance(exc_info.value, RegistrationError)

    def test_duplicate_message_names_the_source(self):
        table = RegistrationTable("data source")
        table.register("aws_region", factory)

        with pytest.raises(DuplicateRegistrationError, match=r"^\(meta\) A data source named 'aws_region'"):
            table.register("aws_region", factory, source="meta")

    def test_register_all_keeps_duplicates_visible(self):
        table = RegistrationTable("resource")

        with pytest.raises(DuplicateRegistrationError):
            table.register_all([("aws_a", factory), ("aws_b", factory), ("aws_a", factory)])

    def test_factory_is_called_once(self):
        calls = []

        def counting_factory():
            calls.append(1)
            return Resource(schema={})

        table = RegistrationTable("resource")
        table.register("aws_vpc", counting_factory)

        assert table.get("aws_vpc") is table.get("aws_vpc")
        assert len(calls) == 1

    def test_unknown_name(self):
        table = RegistrationTable("resource")

        with pytest.raises(UnknownTypeError, match="resource type 'aws_nope' is not registered"):
            table.get("aws_nope")

    def test_unknown_name_is_a_key_error(self):
        with pytest.raises(KeyError):
            RegistrationTable("resource").get("aws_nope")

    def test_names_sorted_and_source(self):
        table = RegistrationTable("resource")
        table.register("aws_b", factory)
        table.register("aws_a", factory, source="ec2")

        assert table.names() == ["aws_a", "aws_b"]
        assert table.source("aws_a") == "ec2"
        assert table.source("aws_b") is None
        assert [name for name, _ in table.items()] == ["aws_a", "aws_b"]

    def test_concurrent_registration_admits_one(self):
        table = RegistrationTable("resource")
        errors = []

        def register():
            try:
                table.register("aws_vpc", factory)
            except DuplicateRegistrationError as e:
                errors.append(e)

        threads = [threading.Thread(target=register) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(table) == 1
        assert len(errors) == 9


@pytest.mark.unit
class TestCustomEndpoints:
    def test_static_names_keep_order(self):
        assert register_custom_endpoints(["ec2", "acm", "sts"]) == ["ec2", "acm", "sts"]

    def test_duplicate_static_name(self):
        with pytest.raises(DuplicateRegistrationError) as exc_info:
            register_custom_endpoints(["ec2", "acm", "ec2"])

        assert str(exc_info.value) == "A service named 'ec2' is already registered for custom endpoints"

    def test_packages_are_appended(self):
        keys = register_custom_endpoints(["ec2"], [FakePackage("newservice")])

        assert keys == ["ec2", "newservice"]

    def test_package_without_endpoint_is_skipped(self):
        assert register_custom_endpoints(["ec2"], [FakePackage("meta", endpoint_key=None)]) == ["ec2"]

    def test_package_clashing_with_static_name(self):
        with pytest.raises(DuplicateRegistrationError, match=r"^\(ec2\) A service named 'ec2'"):
            register_custom_endpoints(["ec2"], [FakePackage("ec2")])
