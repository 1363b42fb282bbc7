import string

import pytest

from awsprovider.acctest import (
    ResourceState,
    State,
    check_no_resource_attr,
    check_resource_attr,
    check_resource_attr_pair,
    check_resource_attr_set,
    check_resource_exists,
    compose_test_check_func,
    rand_string,
)


@pytest.fixture
def state():
    return State(
        resources={
            "aws_vpc.test": ResourceState(
                "aws_vpc",
                "vpc-1",
                {"id": "vpc-1", "cidr_block": "10.0.0.0/16", "tags.%": "1", "tags.Name": "test"},
                None,
            ),
            "aws_subnet.test": ResourceState(
                "aws_subnet",
                "subnet-1",
                {"id": "subnet-1", "vpc_id": "vpc-1", "cidr_block": "10.0.1.0/24"},
                None,
            ),
        }
    )


@pytest.mark.unit
class TestChecks:
    def test_attr(self, state):
        check_resource_attr("aws_vpc.test", "cidr_block", "10.0.0.0/16")(state)

    def test_attr_mismatch(self, state):
        with pytest.raises(AssertionError, match="expected '10.1.0.0/16', got '10.0.0.0/16'"):
            check_resource_attr("aws_vpc.test", "cidr_block", "10.1.0.0/16")(state)

    def test_attr_missing(self, state):
        with pytest.raises(AssertionError, match="Attribute 'description' not found"):
            check_resource_attr("aws_vpc.test", "description", "")(state)

    def test_empty_count_matches_absent_key(self, state):
        check_resource_attr("aws_subnet.test", "tags.%", "0")(state)
        check_resource_attr("aws_subnet.test", "dns_servers.#", "0")(state)

    def test_unknown_resource(self, state):
        with pytest.raises(AssertionError, match="Not found: aws_vpc.other"):
            check_resource_exists("aws_vpc.other")(state)

    def test_exists(self, state):
        check_resource_exists("aws_subnet.test")(state)

    def test_attr_set(self, state):
        check_resource_attr_set("aws_vpc.test", "id")(state)
        with pytest.raises(AssertionError, match="expected to be set"):
            check_resource_attr_set("aws_vpc.test", "arn")(state)

    def test_no_attr(self, state):
        check_no_resource_attr("aws_subnet.test", "tags.%")(state)
        with pytest.raises(AssertionError, match="found when not expected"):
            check_no_resource_attr("aws_vpc.test", "tags.Name")(state)

    def test_attr_pair(self, state):
        check_resource_attr_pair("aws_subnet.test", "vpc_id", "aws_vpc.test", "id")(state)
        check_resource_attr_pair("aws_subnet.test", "description", "aws_vpc.test", "description")(state)
        with pytest.raises(AssertionError):
            check_resource_attr_pair("aws_subnet.test", "cidr_block", "aws_vpc.test", "cidr_block")(state)


@pytest.mark.unit
class TestComposeTestCheckFunc:
    def test_runs_every_check(self, state):
        calls = []

        compose_test_check_func(lambda s: calls.append(1), lambda s: calls.append(2))(state)

        assert calls == [1, 2]

    def test_stops_at_first_failure(self, state):
        calls = []
        check = compose_test_check_func(
            check_resource_attr("aws_vpc.test", "cidr_block", "10.0.0.0/16"),
            check_resource_attr("aws_vpc.test", "cidr_block", "wrong"),
            lambda s: calls.append("late"),
        )

        with pytest.raises(AssertionError, match=r"^Check 2/3 error: aws_vpc.test"):
            check(state)
        assert calls == []


def test_rand_string():
    value = rand_string(10)

    assert len(value) == 10
    assert set(value) <= set(string.ascii_lowercase + string.digits)
    assert rand_string(0) == ""
