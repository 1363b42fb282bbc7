"""
Flat attribute representation.

Nested values are addressed with dotted keys: ``name.#`` holds the length of
a list or set, ``name.%`` the size of a map, list elements live under their
index and set elements under their hash code.
"""

from typing import TYPE_CHECKING, Any, Mapping

from awsprovider.sdk.schema.hashcode import UNKNOWN_VALUE, is_unknown
from awsprovider.sdk.schema.schema import Schema, ValueType
from awsprovider.sdk.schema.set import SchemaSet

if TYPE_CHECKING:
    from awsprovider.sdk.schema.resource import Resource


def format_primitive(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def flatten(resource: "Resource", values: Mapping[str, Any]) -> dict[str, str]:
    result: dict[str, str] = {}
    _flatten_block(result, "", resource.schema, values)
    return result


def _flatten_block(result: dict[str, str], prefix: str, schema_map: Mapping[str, Schema], values: Any) -> None:
    if not values:
        return
    for key, attr in schema_map.items():
        if key in values:
            _flatten_value(result, prefix + key, attr, values[key])


def _flatten_value(result: dict[str, str], key: str, attr: Schema, value: Any) -> None:
    if value is None:
        return

    if is_unknown(value):
        if attr.type in (ValueType.LIST, ValueType.SET):
            result[f"{key}.#"] = UNKNOWN_VALUE
        elif attr.type is ValueType.MAP:
            result[f"{key}.%"] = UNKNOWN_VALUE
        else:
            result[key] = UNKNOWN_VALUE
        return

    if attr.type.is_primitive:
        result[key] = format_primitive(value)
    elif attr.type is ValueType.LIST:
        result[f"{key}.#"] = str(len(value))
        for index, item in enumerate(value):
            _flatten_element(result, f"{key}.{index}", attr.elem, item)
    elif attr.type is ValueType.SET:
        members = value if isinstance(value, SchemaSet) else SchemaSet(attr.hash_func(), value)
        result[f"{key}.#"] = str(len(members))
        for code, item in members.items():
            _flatten_element(result, f"{key}.{code}", attr.elem, item)
    elif attr.type is ValueType.MAP:
        result[f"{key}.%"] = str(len(value))
        for map_key, item in value.items():
            result[f"{key}.{map_key}"] = format_primitive(item)


def _flatten_element(result: dict[str, str], key: str, elem: Any, item: Any) -> None:
    if isinstance(elem, Schema):
        _flatten_value(result, key, elem, item)
    elif elem is not None:
        _flatten_block(result, f"{key}.", elem.schema, item)
