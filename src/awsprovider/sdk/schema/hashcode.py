import zlib

# Placeholder for values that are not known until the host applies the plan.
UNKNOWN_VALUE = "74D93920-ED26-11E3-AC10-0800200C9A66"


def hash_string(value: str) -> int:
    """Hash a string to a non-negative int using CRC-32 (IEEE)."""
    return zlib.crc32(value.encode("utf-8")) & 0xFFFFFFFF


def is_unknown(value) -> bool:
    """True for the unknown placeholder and for unresolved ${...} interpolations."""
    if not isinstance(value, str):
        return False
    return value == UNKNOWN_VALUE or "${" in value
