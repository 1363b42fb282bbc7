from typing import TYPE_CHECKING, Any, Optional

from awsprovider.exceptions import ConfigurationError
from awsprovider.sdk.schema.flatmap import flatten
from awsprovider.sdk.schema.hashcode import is_unknown
from awsprovider.sdk.schema.schema import Schema, ValueType
from awsprovider.sdk.schema.set import SchemaSet

if TYPE_CHECKING:
    from awsprovider.sdk.schema.resource import Resource

_MISSING = object()


def is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, list, dict, SchemaSet)):
        return len(value) == 0
    return False


class ResourceData:
    """
    Decoded attribute values for one resource or data source.

    Paths use the flat-map addressing: ``assume_role.0.role_arn``,
    ``tags.Name``, ``subnet_ids.#``.
    """

    def __init__(self, resource: "Resource", values: Optional[dict[str, Any]] = None, id: str = "") -> None:
        self.resource = resource
        self._values: dict[str, Any] = dict(values or {})
        self._id = id

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str) -> None:
        self._id = value

    def get(self, path: str) -> Any:
        """Value at path, or the attribute's zero value when it is absent."""
        value, _found = self._lookup(path)
        return value

    def get_ok(self, path: str) -> tuple[Any, bool]:
        """Value at path and whether it is set to a known, non-zero value."""
        value, found = self._lookup(path)
        return value, found and not is_unknown(value) and not is_zero(value)

    def has(self, key: str) -> bool:
        return key in self._values

    def set(self, key: str, value: Any) -> None:
        attr = self.resource.schema.get(key)
        if attr is None:
            raise ConfigurationError(f"Invalid address to set: {key!r}")
        if attr.type is ValueType.SET and isinstance(value, (list, tuple, set)):
            value = SchemaSet(attr.hash_func(), value)
        self._values[key] = value

    def values(self) -> dict[str, Any]:
        return dict(self._values)

    def state(self) -> dict[str, str]:
        """Flat attribute map including ``id``."""
        result = flatten(self.resource, self._values)
        result["id"] = self._id
        return result

    def _lookup(self, path: str) -> tuple[Any, bool]:
        parts = path.split(".")
        attr = self.resource.schema.get(parts[0])
        if attr is None:
            raise ConfigurationError(f"Invalid address to get: {path!r}")

        value = self._values.get(parts[0], _MISSING)
        found = value is not _MISSING
        if not found:
            value = attr.zero_value()

        current: Any = attr
        for part in parts[1:]:
            if value is None or is_unknown(value):
                return value, found
            value, current, ok = _step(value, current, part)
            found = found and ok
        return value, found


def _step(value: Any, current: Any, part: str) -> tuple[Any, Any, bool]:
    """
    Descend one path segment. current is the Schema describing value, or a
    dict of Schemas when value is a nested block.
    """
    if isinstance(current, dict):
        attr = current.get(part)
        if attr is None:
            raise ConfigurationError(f"Unknown attribute {part!r}")
        if part in value:
            return value[part], attr, True
        return attr.zero_value(), attr, False

    attr: Schema = current
    if attr.type in (ValueType.LIST, ValueType.SET, ValueType.MAP) and part in ("#", "%"):
        return len(value), Schema(type=ValueType.INT, computed=True), True

    elem_schema = attr.elem.schema if attr.is_nested_block else (
        attr.elem if isinstance(attr.elem, Schema) else Schema(type=ValueType.STRING, optional=True)
    )

    if attr.type is ValueType.LIST:
        index = int(part)
        if 0 <= index < len(value):
            return value[index], elem_schema, True
        return None, elem_schema, False
    if attr.type is ValueType.SET:
        members = dict(value.items()) if isinstance(value, SchemaSet) else {}
        if part in members:
            return members[part], elem_schema, True
        return None, elem_schema, False
    if attr.type is ValueType.MAP:
        if part in value:
            return value[part], elem_schema, True
        return None, elem_schema, False
    raise ConfigurationError(f"Cannot index into {attr.type.value} attribute with {part!r}")
