"""Tests for Resource.decode and ResourceData lookups."""

import pytest

from awsprovider.exceptions import ConfigurationError
from awsprovider.sdk.schema import UNKNOWN_VALUE, Resource, Schema, SchemaSet, ValueType, hash_string_value


@pytest.fixture
def resource():
    return Resource(
        schema={
            "name": Schema(type=ValueType.STRING, optional=True),
            "size": Schema(type=ValueType.INT, optional=True, default=3),
            "region": Schema(type=ValueType.STRING, optional=True, default_func=lambda: "us-west-2"),
            "enabled": Schema(type=ValueType.BOOL, optional=True),
            "ids": Schema(
                type=ValueType.SET, optional=True, elem=Schema(type=ValueType.STRING), set_func=hash_string_value
            ),
            "tags": Schema(type=ValueType.MAP, optional=True, elem=Schema(type=ValueType.STRING)),
            "settings": Schema(
                type=ValueType.LIST,
                optional=True,
                elem=Resource(
                    schema={
                        "role_arn": Schema(type=ValueType.STRING, optional=True),
                        "duration": Schema(type=ValueType.INT, optional=True),
                        "keys": Schema(type=ValueType.SET, optional=True, elem=Schema(type=ValueType.STRING)),
                    }
                ),
            ),
            "arn": Schema(type=ValueType.STRING, computed=True),
        }
    )


@pytest.mark.unit
class TestDecode:
    def test_top_level_keeps_only_configured_or_defaulted(self, resource):
        d = resource.decode({"name": "web"})

        assert d.values() == {"name": "web", "size": 3, "region": "us-west-2"}

    def test_strings_are_coerced(self, resource):
        d = resource.decode({"size": "7", "enabled": "true"})

        assert d.get("size") == 7
        assert d.get("enabled") is True

    def test_sets_become_schema_sets(self, resource):
        d = resource.decode({"ids": ["b", "a", "a"]})

        ids = d.get("ids")
        assert isinstance(ids, SchemaSet)
        assert len(ids) == 2
        assert "a" in ids

    def test_nested_blocks_are_zero_filled(self, resource):
        d = resource.decode({"settings": [{"role_arn": "arn:aws:iam::123456789012:role/x"}]})

        block = d.get("settings")[0]
        assert block["role_arn"] == "arn:aws:iam::123456789012:role/x"
        assert block["duration"] == 0
        assert isinstance(block["keys"], SchemaSet) and len(block["keys"]) == 0

    def test_single_block_dict_is_accepted(self, resource):
        d = resource.decode({"settings": {"duration": 900}})

        assert d.get("settings.0.duration") == 900

    def test_unknown_values_become_the_sentinel(self, resource):
        d = resource.decode({"name": "${aws_vpc.main.id}", "tags": {"Name": "${var.name}"}})

        assert d.get("name") == UNKNOWN_VALUE
        assert d.get("tags.Name") == UNKNOWN_VALUE

    def test_decode_carries_id(self, resource):
        assert resource.decode({}, id="vpc-123").id == "vpc-123"


@pytest.mark.unit
class TestResourceDataGet:
    def test_absent_attribute_returns_zero_value(self, resource):
        d = resource.data()

        assert d.get("name") == ""
        assert d.get("enabled") is False
        assert d.get("size") == 0
        assert d.get("tags") == {}
        assert len(d.get("ids")) == 0

    def test_get_ok_false_for_absent_and_zero(self, resource):
        d = resource.data({"name": "", "size": 0})

        assert d.get_ok("name") == ("", False)
        assert d.get_ok("size") == (0, False)
        assert d.get_ok("enabled") == (False, False)

    def test_get_ok_true_for_value(self, resource):
        d = resource.data({"name": "web"})

        assert d.get_ok("name") == ("web", True)

    def test_get_ok_false_for_unknown(self, resource):
        d = resource.data({"name": UNKNOWN_VALUE})

        assert d.get_ok("name") == (UNKNOWN_VALUE, False)

    def test_nested_paths(self, resource):
        d = resource.decode(
            {"settings": [{"role_arn": "arn", "keys": ["k1"]}], "tags": {"Name": "x"}, "ids": ["a", "b"]}
        )

        assert d.get("settings.#") == 1
        assert d.get("settings.0.role_arn") == "arn"
        assert d.get("settings.0.keys.#") == 1
        assert d.get("tags.%") == 1
        assert d.get("tags.Name") == "x"
        assert d.get("ids.#") == 2
        assert d.get(f"ids.{hash_string_value('a')}") == "a"

    def test_out_of_range_index(self, resource):
        d = resource.decode({"settings": [{}]})

        assert d.get_ok("settings.3") == (None, False)

    def test_unknown_attribute_raises(self, resource):
        with pytest.raises(ConfigurationError):
            resource.data().get("missing")


@pytest.mark.unit
class TestResourceDataSet:
    def test_set_and_id(self, resource):
        d = resource.data()
        d.set("arn", "arn:aws:ec2:us-east-1:123456789012:vpc/vpc-1")
        d.set_id("vpc-1")

        assert d.id == "vpc-1"
        assert d.get("arn") == "arn:aws:ec2:us-east-1:123456789012:vpc/vpc-1"

    def test_set_converts_lists_for_set_attributes(self, resource):
        d = resource.data()
        d.set("ids", ["x", "y"])

        assert isinstance(d.get("ids"), SchemaSet)

    def test_set_keeps_unknown_collections(self, resource):
        d = resource.data()
        d.set("ids", UNKNOWN_VALUE)

        assert d.get("ids") == UNKNOWN_VALUE
        assert d.state()["ids.#"] == UNKNOWN_VALUE

    def test_set_unknown_key_raises(self, resource):
        with pytest.raises(ConfigurationError, match="Invalid address to set"):
            resource.data().set("nope", 1)

    def test_state_includes_id(self, resource):
        d = resource.data({"name": "web", "enabled": True}, id="i-1")

        assert d.state() == {"name": "web", "enabled": "true", "id": "i-1"}
