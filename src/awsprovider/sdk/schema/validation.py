"""
Reusable validate functions.

Each factory returns ``func(value, key) -> (warnings, errors)``.
"""

import ipaddress
import json
import re
from typing import Any, Iterable

from awsprovider.sdk.schema.schema import ValidateFunc

_ARN_PATTERN = re.compile(r"^arn:[\w-]+:([a-zA-Z0-9\-])+:([a-z]{2}-(gov-)?[a-z]+-\d{1})?:(\d{12})?:(.*)$")
_ARN_PARTITION_PATTERN = re.compile(r"^aws(-[a-z]+)*$")


def string_is_json(value: Any, key: str) -> tuple[list[str], list[str]]:
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    if value == "":
        return [], []
    try:
        json.loads(value)
    except ValueError as e:
        return [], [f'"{key}" contains an invalid JSON: {e}']
    return [], []


def validate_arn(value: Any, key: str) -> tuple[list[str], list[str]]:
    if value == "":
        return [], []
    if not isinstance(value, str) or not _ARN_PATTERN.match(value):
        return [], [f'"{key}" doesn\'t look like a valid ARN ("{_ARN_PATTERN.pattern}"): "{value}"']
    partition = value.split(":")[1]
    if not _ARN_PARTITION_PATTERN.match(partition):
        return [], [f'"{key}" has an invalid partition ("{partition}"): "{value}"']
    return [], []


def string_in_slice(valid: Iterable[str], ignore_case: bool = False) -> ValidateFunc:
    choices = list(valid)

    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if not isinstance(value, str):
            return [], [f"expected type of {key} to be string"]
        for choice in choices:
            if value == choice or (ignore_case and value.lower() == choice.lower()):
                return [], []
        return [], [f"expected {key} to be one of {choices}, got {value}"]

    return _validate


def int_between(minimum: int, maximum: int) -> ValidateFunc:
    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if not isinstance(value, int) or isinstance(value, bool):
            return [], [f"expected type of {key} to be integer"]
        if value < minimum or value > maximum:
            return [], [f"expected {key} to be in the range ({minimum} - {maximum}), got {value}"]
        return [], []

    return _validate


def int_at_least(minimum: int) -> ValidateFunc:
    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if not isinstance(value, int) or isinstance(value, bool):
            return [], [f"expected type of {key} to be integer"]
        if value < minimum:
            return [], [f"expected {key} to be at least ({minimum}), got {value}"]
        return [], []

    return _validate


def string_len_between(minimum: int, maximum: int) -> ValidateFunc:
    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if not isinstance(value, str):
            return [], [f"expected type of {key} to be string"]
        if len(value) < minimum or len(value) > maximum:
            return [], [f"expected length of {key} to be in the range ({minimum} - {maximum}), got {value}"]
        return [], []

    return _validate


def string_match(pattern: str, message: str = "") -> ValidateFunc:
    compiled = re.compile(pattern)

    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if not isinstance(value, str):
            return [], [f"expected type of {key} to be string"]
        if not compiled.search(value):
            if message:
                return [], [f"invalid value for {key} ({message})"]
            return [], [f"invalid value for {key} (must match {pattern!r}), got {value}"]
        return [], []

    return _validate


def is_cidr_network(min_bits: int, max_bits: int) -> ValidateFunc:
    """CIDR block with a prefix length in range whose host bits are zero."""

    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if not isinstance(value, str):
            return [], [f"expected type of {key} to be string"]
        try:
            network = ipaddress.ip_network(value, strict=False)
        except ValueError:
            return [], [f"expected {key} to contain a valid CIDR, got: {value}"]
        if str(network) != value:
            return [], [f"expected {key} to contain a valid network CIDR, expected {network}, got {value}"]
        if network.prefixlen < min_bits or network.prefixlen > max_bits:
            return [], [
                f"expected {key} to contain a network CIDR with between {min_bits} and {max_bits} "
                f"significant bits, got: {network.prefixlen}"
            ]
        return [], []

    return _validate


def is_ipv4_address(value: Any, key: str) -> tuple[list[str], list[str]]:
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return [], [f"expected {key} to contain a valid IPv4 address, got: {value}"]
    return [], []


def int_in_slice(valid: Iterable[int]) -> ValidateFunc:
    choices = list(valid)

    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if not isinstance(value, int) or isinstance(value, bool):
            return [], [f"expected type of {key} to be integer"]
        if value not in choices:
            return [], [f"expected {key} to be one of {choices}, got {value}"]
        return [], []

    return _validate
