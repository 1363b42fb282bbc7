"""
Hash-keyed sets.

Set elements can be nested blocks (dicts), which Python cannot hash, so each
element is keyed by a hash function derived from its schema. Two elements
with the same hash code are the same element.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Optional

from awsprovider.sdk.schema.hashcode import hash_string
from awsprovider.sdk.schema.schema import Schema, ValueType

if TYPE_CHECKING:
    from awsprovider.sdk.schema.resource import Resource


def _format_number(value: Any) -> str:
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def _serialize_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return _format_number(value)
    return str(value)


def serialize_resource_for_hash(parts: list[str], value: Optional[dict], resource: "Resource") -> None:
    """
    Write the canonical form of a nested block.

    Only required and optional attributes take part, in sorted key order, so
    computed values that are unknown at plan time never change the hash.
    """
    if value is None:
        return
    for key in sorted(resource.schema):
        inner = resource.schema[key]
        if not (inner.required or inner.optional):
            continue
        parts.append(f"{key}:")
        serialize_value_for_hash(parts, value.get(key), inner)


def serialize_value_for_hash(parts: list[str], value: Any, schema: Schema) -> None:
    if value is None:
        parts.append(";")
        return

    if schema.type is ValueType.BOOL:
        parts.append("1" if value else "0")
    elif schema.type in (ValueType.INT, ValueType.FLOAT):
        parts.append(_format_number(value))
    elif schema.type is ValueType.STRING:
        parts.append(str(value))
    elif schema.type is ValueType.LIST:
        parts.append("(")
        for item in value:
            _serialize_collection_member(parts, item, schema.elem)
        parts.append(")")
    elif schema.type is ValueType.MAP:
        parts.append("[")
        for key in sorted(value):
            item = value[key]
            if item is None:
                continue
            parts.append(f"{key}:{_serialize_scalar(item)};")
        parts.append("]")
    elif schema.type is ValueType.SET:
        parts.append("{")
        items = value.list() if isinstance(value, SchemaSet) else list(value)
        for item in items:
            _serialize_collection_member(parts, item, schema.elem)
        parts.append("}")
    parts.append(";")


def _serialize_collection_member(parts: list[str], value: Any, elem: Any) -> None:
    if isinstance(elem, Schema):
        serialize_value_for_hash(parts, value, elem)
    elif elem is not None:
        parts.append("<")
        serialize_resource_for_hash(parts, value, elem)
        parts.append(">;")


def hash_resource(resource: "Resource") -> Callable[[Any], int]:
    """Hash function for sets of nested blocks."""

    def _hash(value: Any) -> int:
        parts: list[str] = []
        serialize_resource_for_hash(parts, value, resource)
        return hash_string("".join(parts))

    return _hash


def hash_schema(schema: Schema) -> Callable[[Any], int]:
    """Hash function for sets of scalars."""

    def _hash(value: Any) -> int:
        parts: list[str] = []
        serialize_value_for_hash(parts, value, schema)
        return hash_string("".join(parts))

    return _hash


def hash_string_value(value: Any) -> int:
    """Set function for string sets: the CRC-32 of the string itself."""
    return hash_string(str(value))


class SchemaSet:
    """Set keyed by a hash function. Iteration is in sorted hash-code order."""

    def __init__(self, hash_func: Callable[[Any], int], items: Iterable[Any] = ()) -> None:
        self.hash_func = hash_func
        self._items: dict[str, Any] = {}
        for item in items:
            self.add(item)

    def _code(self, item: Any) -> str:
        return str(self.hash_func(item))

    def add(self, item: Any) -> str:
        code = self._code(item)
        self._items[code] = item
        return code

    def remove(self, item: Any) -> None:
        self._items.pop(self._code(item), None)

    def contains(self, item: Any) -> bool:
        return self._code(item) in self._items

    def list(self) -> list[Any]:
        return [self._items[code] for code in sorted(self._items)]

    def items(self) -> list[tuple[str, Any]]:
        """(hash code, element) pairs in iteration order."""
        return [(code, self._items[code]) for code in sorted(self._items)]

    def hash_code(self, item: Any) -> str:
        return self._code(item)

    def difference(self, other: "SchemaSet") -> "SchemaSet":
        result = SchemaSet(self.hash_func)
        result._items = {k: v for k, v in self._items.items() if k not in other._items}
        return result

    def intersection(self, other: "SchemaSet") -> "SchemaSet":
        result = SchemaSet(self.hash_func)
        result._items = {k: v for k, v in self._items.items() if k in other._items}
        return result

    def union(self, other: "SchemaSet") -> "SchemaSet":
        result = SchemaSet(self.hash_func)
        result._items = {**self._items, **other._items}
        return result

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SchemaSet):
            return set(self._items) == set(other._items)
        return NotImplemented

    def __repr__(self) -> str:
        return f"SchemaSet({self.list()!r})"
