"""
State assertions for acceptance-test steps.

A check is a callable taking the planned State. It raises AssertionError
with a message naming the resource and attribute when it fails.
"""

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from awsprovider.acctest.harness import ResourceState, State

CheckFunc = Callable[["State"], None]

# Empty collections are stored without their count key.
_EMPTY_COUNT_SUFFIXES = (".#", ".%")


def compose_test_check_func(*checks: CheckFunc) -> CheckFunc:
    """Run checks in order, stopping at the first failure."""

    def check(state: "State") -> None:
        for index, fn in enumerate(checks):
            try:
                fn(state)
            except AssertionError as e:
                raise AssertionError(f"Check {index + 1}/{len(checks)} error: {e}") from e

    return check


def _primary(state: "State", name: str) -> "ResourceState":
    resource = state.resources.get(name)
    if resource is None:
        raise AssertionError(f"Not found: {name} in {sorted(state.resources)}")
    return resource


def _is_empty_count(key: str, value: str) -> bool:
    return key.endswith(_EMPTY_COUNT_SUFFIXES) and value == "0"


def check_resource_attr(name: str, key: str, value: str) -> CheckFunc:
    def check(state: "State") -> None:
        attributes = _primary(state, name).attributes
        if key not in attributes:
            if _is_empty_count(key, value):
                return
            raise AssertionError(f"{name}: Attribute '{key}' not found")
        if attributes[key] != value:
            raise AssertionError(f"{name}: Attribute '{key}' expected {value!r}, got {attributes[key]!r}")

    return check


def check_resource_attr_set(name: str, key: str) -> CheckFunc:
    def check(state: "State") -> None:
        if not _primary(state, name).attributes.get(key):
            raise AssertionError(f"{name}: Attribute '{key}' expected to be set")

    return check


def check_no_resource_attr(name: str, key: str) -> CheckFunc:
    def check(state: "State") -> None:
        attributes = _primary(state, name).attributes
        if key in attributes and not _is_empty_count(key, attributes[key]):
            raise AssertionError(f"{name}: Attribute '{key}' found when not expected")

    return check


def check_resource_attr_pair(name_first: str, key_first: str, name_second: str, key_second: str) -> CheckFunc:
    """Both attributes must be absent, or present with equal values."""

    def check(state: "State") -> None:
        first = _primary(state, name_first).attributes
        second = _primary(state, name_second).attributes
        value_first = first.get(key_first)
        value_second = second.get(key_second)

        if value_first is None and value_second is None:
            return
        if value_first != value_second:
            raise AssertionError(
                f"{name_first}: Attribute '{key_first}' expected {value_second!r}, got {value_first!r}"
            )

    return check


def check_resource_exists(name: str) -> CheckFunc:
    def check(state: "State") -> None:
        _primary(state, name)

    return check
