"""
Attribute schema definitions.

An attribute is either a scalar (bool/int/float/string), a collection of
scalars (list/set/map), or a list/set of nested blocks whose element is itself
a Resource.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

if TYPE_CHECKING:
    from awsprovider.sdk.schema.resource import Resource

# Returns (warnings, errors) for a user-supplied value.
ValidateFunc = Callable[[Any, str], tuple[list[str], list[str]]]
SchemaSetFunc = Callable[[Any], int]


class ValueType(str, Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    LIST = "list"
    SET = "set"
    MAP = "map"

    @property
    def is_primitive(self) -> bool:
        return self in (ValueType.BOOL, ValueType.INT, ValueType.FLOAT, ValueType.STRING)

    @property
    def is_block_capable(self) -> bool:
        return self in (ValueType.LIST, ValueType.SET)

    def __str__(self) -> str:
        return self.value


def coerce_primitive(value_type: ValueType, value: Any) -> Any:
    """
    Convert a decoded HCL value to the attribute's primitive type.

    HCL freely converts between strings, numbers and bools; this follows the
    same rules. Raises ValueError when no conversion exists.
    """
    if value_type is ValueType.STRING:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return str(value)
    elif value_type is ValueType.BOOL:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value in ("true", "false"):
            return value == "true"
    elif value_type is ValueType.INT:
        if isinstance(value, bool):
            raise ValueError(f"expected type int, got bool {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value, 10)
            except ValueError:
                pass
    elif value_type is ValueType.FLOAT:
        if isinstance(value, bool):
            raise ValueError(f"expected type float, got bool {value!r}")
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass
    raise ValueError(f"expected type {value_type.value}, got {type(value).__name__} {value!r}")


@dataclass
class Schema:
    """Definition of a single attribute."""

    type: ValueType
    optional: bool = False
    required: bool = False
    computed: bool = False
    default: Any = None
    default_func: Optional[Callable[[], Any]] = None
    input_default: Optional[str] = None
    description: str = ""
    elem: Union["Schema", "Resource", None] = None
    max_items: int = 0
    min_items: int = 0
    conflicts_with: list[str] = field(default_factory=list)
    validate_func: Optional[ValidateFunc] = None
    set_func: Optional[SchemaSetFunc] = None
    force_new: bool = False
    sensitive: bool = False
    deprecated: str = ""

    @property
    def is_nested_block(self) -> bool:
        return self.type.is_block_capable and self.elem is not None and not isinstance(self.elem, Schema)

    @property
    def is_computed_only(self) -> bool:
        return self.computed and not self.optional and not self.required

    def element_type(self) -> ValueType:
        """Primitive type of list/set/map elements (maps default to string)."""
        if isinstance(self.elem, Schema):
            return self.elem.type
        return ValueType.STRING

    def hash_func(self) -> SchemaSetFunc:
        from awsprovider.sdk.schema.set import hash_resource, hash_schema

        if self.set_func is not None:
            return self.set_func
        if self.is_nested_block:
            return hash_resource(self.elem)
        return hash_schema(self.elem if isinstance(self.elem, Schema) else Schema(type=ValueType.STRING))

    def zero_value(self) -> Any:
        from awsprovider.sdk.schema.set import SchemaSet

        if self.type is ValueType.BOOL:
            return False
        if self.type is ValueType.INT:
            return 0
        if self.type is ValueType.FLOAT:
            return 0.0
        if self.type is ValueType.STRING:
            return ""
        if self.type is ValueType.LIST:
            return []
        if self.type is ValueType.MAP:
            return {}
        return SchemaSet(self.hash_func())

    def default_value(self) -> Any:
        """Static default, else the default func's value, else None."""
        if self.default is not None:
            return self.default
        if self.default_func is not None:
            return self.default_func()
        return None

    def internal_validate(self, name: str) -> list[str]:
        """Return programmer errors in this attribute definition."""
        errors: list[str] = []

        if not (self.optional or self.required or self.computed):
            errors.append(f"{name}: One of optional, required, or computed must be set")
        if self.optional and self.required:
            errors.append(f"{name}: Optional or Required must be set, not both")
        if self.required and self.computed:
            errors.append(f"{name}: Cannot be both Required and Computed")
        if self.required and self.default is not None:
            errors.append(f"{name}: Default must be nil if Required")
        if self.computed and self.default is not None:
            errors.append(f"{name}: Default must be nil if computed")
        if self.default is not None and self.default_func is not None:
            errors.append(f"{name}: Default and DefaultFunc cannot both be set")
        if self.conflicts_with and self.required:
            errors.append(f"{name}: ConflictsWith cannot be set with Required")
        if (self.max_items or self.min_items) and not self.type.is_block_capable:
            errors.append(f"{name}: MaxItems and MinItems are only supported on lists or sets")
        if self.min_items and self.max_items and self.min_items > self.max_items:
            errors.append(f"{name}: MinItems cannot be greater than MaxItems")

        if self.validate_func is not None:
            if self.is_computed_only:
                errors.append(
                    f"{name}: ValidateFunc is for validating user input, "
                    "there's nothing to validate on computed-only field"
                )
            if self.type.is_block_capable:
                errors.append(f"{name}: ValidateFunc is not yet supported on lists or sets")

        if self.type.is_block_capable:
            if self.elem is None:
                errors.append(f"{name}: Elem must be set for lists and sets")
            if self.default is not None:
                errors.append(f"{name}: Default is not valid for lists or sets")

        if self.set_func is not None and self.type is not ValueType.SET:
            errors.append(f"{name}: Set function is only valid for sets")

        if isinstance(self.elem, Schema):
            if not self.elem.type.is_primitive:
                errors.append(f"{name}: Elem must be a primitive type or a nested resource")
        elif self.elem is not None and self.type is ValueType.MAP:
            errors.append(f"{name}: Map elements must be primitive types")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """JSON-serialisable description of the attribute."""
        result: dict[str, Any] = {"type": self.type.value}
        for flag in ("required", "optional", "computed", "sensitive", "force_new"):
            if getattr(self, flag):
                result[flag] = True
        if self.default is not None:
            result["default"] = self.default
        if self.description:
            result["description"] = self.description
        if self.max_items:
            result["max_items"] = self.max_items
        if self.min_items:
            result["min_items"] = self.min_items
        if self.conflicts_with:
            result["conflicts_with"] = list(self.conflicts_with)
        if self.deprecated:
            result["deprecated"] = self.deprecated
        if isinstance(self.elem, Schema):
            result["elem"] = self.elem.to_dict()
        elif self.elem is not None:
            result["block"] = self.elem.to_dict()
        return result
