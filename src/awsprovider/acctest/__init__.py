"""Offline acceptance-test scaffolding for provider descriptors."""

from awsprovider.acctest.checks import (
    check_no_resource_attr,
    check_resource_attr,
    check_resource_attr_pair,
    check_resource_attr_set,
    check_resource_exists,
    compose_test_check_func,
)
from awsprovider.acctest.harness import ResourceState, State, TestCase, TestStep, parallel_test, run
from awsprovider.acctest.hcl import Config, ConfigBlock, parse_config
from awsprovider.acctest.rand import rand_string

__all__ = [
    "Config",
    "ConfigBlock",
    "ResourceState",
    "State",
    "TestCase",
    "TestStep",
    "check_no_resource_attr",
    "check_resource_attr",
    "check_resource_attr_pair",
    "check_resource_attr_set",
    "check_resource_exists",
    "compose_test_check_func",
    "parallel_test",
    "parse_config",
    "rand_string",
    "run",
]
