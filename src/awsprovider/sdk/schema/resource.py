"""
Resource and data source descriptors.

A descriptor is a schema map plus optional lifecycle callables. The same
type is used for nested blocks, where only the schema map is meaningful.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from awsprovider.exceptions import ConfigurationError
from awsprovider.sdk.schema.diagnostics import Diagnostics
from awsprovider.sdk.schema.hashcode import UNKNOWN_VALUE, is_unknown
from awsprovider.sdk.schema.resource_data import ResourceData
from awsprovider.sdk.schema.schema import Schema, ValueType, coerce_primitive
from awsprovider.sdk.schema.set import SchemaSet

# Lifecycle callables take the decoded data and the configured client handle.
# They raise ProviderError subclasses on failure.
CRUDFunc = Callable[[ResourceData, Any], None]

# Names the host runtime reserves in resource and data blocks.
RESERVED_DATA_SOURCE_FIELDS = ("connection", "count", "depends_on", "lifecycle", "provider", "provisioner")
RESERVED_RESOURCE_FIELDS = RESERVED_DATA_SOURCE_FIELDS + ("id",)


@dataclass
class Importer:
    state: Callable[[ResourceData, Any], list[ResourceData]]


def _passthrough(d: ResourceData, meta: Any) -> list[ResourceData]:
    return [d]


import_state_passthrough = Importer(state=_passthrough)


@dataclass
class Resource:
    schema: dict[str, Schema] = field(default_factory=dict)
    description: str = ""
    create: Optional[CRUDFunc] = None
    read: Optional[CRUDFunc] = None
    update: Optional[CRUDFunc] = None
    delete: Optional[CRUDFunc] = None
    importer: Optional[Importer] = None
    deprecation_message: str = ""

    @property
    def importable(self) -> bool:
        return self.importer is not None

    def internal_validate(
        self,
        top_level: bool = True,
        data_source: bool = False,
        prefix: str = "",
        root: Optional[dict[str, Schema]] = None,
    ) -> list[str]:
        """Return programmer errors in this descriptor and its nested blocks."""
        errors: list[str] = []
        root = root if root is not None else self.schema

        if top_level:
            if data_source:
                if self.read is None:
                    errors.append("data source must implement Read")
                if self.create or self.update or self.delete:
                    errors.append("data source must not implement Create, Update or Delete")
            elif self.importer is not None and self.read is None and (self.create or self.update or self.delete):
                errors.append("resource with lifecycle functions must implement Read")

            reserved = RESERVED_DATA_SOURCE_FIELDS if data_source else RESERVED_RESOURCE_FIELDS
            for name in self.schema:
                if name in reserved:
                    errors.append(f"{name}: {name} is a reserved field name")

        for name, attr in self.schema.items():
            path = f"{prefix}{name}"
            errors.extend(attr.internal_validate(path))
            for target in attr.conflicts_with:
                target_attr = _schema_at(root, target)
                if target_attr is None:
                    errors.append(f"{path}: ConflictsWith references unknown attribute ({target})")
                elif target_attr.required:
                    errors.append(f"{path}: ConflictsWith cannot contain Required attribute ({target})")
            if attr.is_nested_block:
                errors.extend(attr.elem.internal_validate(top_level=False, prefix=f"{path}.", root=root))
        return errors

    def validate(self, raw: Optional[dict[str, Any]]) -> Diagnostics:
        """Check a raw (HCL-decoded) configuration against the schema."""
        diags = Diagnostics()
        raw = raw or {}
        _validate_block(self.schema, raw, (), raw, diags)
        if self.deprecation_message:
            diags.add_warning("Deprecated resource", self.deprecation_message)
        return diags

    def decode(self, raw: Optional[dict[str, Any]], id: str = "") -> ResourceData:
        """Build ResourceData from a raw configuration, applying defaults."""
        return ResourceData(self, _decode_block(self.schema, raw or {}, top_level=True), id=id)

    def data(self, values: Optional[dict[str, Any]] = None, id: str = "") -> ResourceData:
        return ResourceData(self, values, id=id)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"attributes": {name: attr.to_dict() for name, attr in sorted(self.schema.items())}}
        if self.description:
            result["description"] = self.description
        if self.deprecation_message:
            result["deprecated"] = self.deprecation_message
        if self.importer is not None:
            result["importable"] = True
        return result


def _schema_at(root: dict[str, Schema], path: str) -> Optional[Schema]:
    """Schema for a dotted path such as ``assume_role.0.role_arn``."""
    current: Any = root
    attr: Optional[Schema] = None
    for part in path.split("."):
        if isinstance(current, dict):
            attr = current.get(part)
            if attr is None:
                return None
            current = attr
            continue
        if not isinstance(current, Schema):
            return None
        if current.is_nested_block:
            current = current.elem.schema
        elif isinstance(current.elem, Schema):
            current = attr = current.elem
        else:
            return None
    return attr


def _value_at(raw: Any, path: str) -> Any:
    current = raw
    for part in path.split("."):
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, list):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return None
        else:
            return None
        if current is None:
            return None
    return current


def _as_block_list(value: Any) -> Optional[list]:
    if isinstance(value, dict):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    return None


def _run_validate_func(attr: Schema, value: Any, key: str, path: tuple[str, ...], diags: Diagnostics) -> None:
    if attr.validate_func is None:
        return
    warnings, errors = attr.validate_func(value, key)
    for warning in warnings:
        diags.add_warning(str(warning), path=path)
    for error in errors:
        diags.add_error("Invalid value", str(error), path=path)


def _validate_block(
    schema_map: dict[str, Schema],
    raw: dict[str, Any],
    path: tuple[str, ...],
    root_raw: dict[str, Any],
    diags: Diagnostics,
) -> None:
    for key in raw:
        if key not in schema_map:
            diags.add_error(
                "Unsupported argument",
                f'An argument named "{key}" is not expected here.',
                path=path + (key,),
            )

    for key, attr in schema_map.items():
        value = raw.get(key)
        attr_path = path + (key,)

        if value is None:
            if attr.required and (attr.default_func is None or attr.default_func() is None):
                diags.add_error(
                    "Missing required argument",
                    f'The argument "{key}" is required, but no definition was found.',
                    path=attr_path,
                )
            continue

        if attr.is_computed_only:
            diags.add_error(
                "Value for unconfigurable attribute",
                f'Can\'t configure a value for "{key}": its value will be decided automatically '
                "based on the result of applying this configuration.",
                path=attr_path,
            )
            continue

        if attr.deprecated:
            diags.add_warning(f'Argument "{key}" is deprecated', attr.deprecated, path=attr_path)

        for target in attr.conflicts_with:
            if _value_at(root_raw, target) is not None:
                diags.add_error(f'"{".".join(attr_path)}": conflicts with {target}', path=attr_path)

        if is_unknown(value):
            continue

        if attr.type.is_primitive:
            try:
                coerced = coerce_primitive(attr.type, value)
            except ValueError as e:
                diags.add_error("Incorrect attribute value type", str(e), path=attr_path)
                continue
            _run_validate_func(attr, coerced, key, attr_path, diags)
        elif attr.type is ValueType.MAP:
            if not isinstance(value, dict):
                diags.add_error("Incorrect attribute value type", f"{key}: expected a map", path=attr_path)
                continue
            elem_type = attr.element_type()
            for map_key, item in value.items():
                if item is None or is_unknown(item):
                    continue
                try:
                    coerce_primitive(elem_type, item)
                except ValueError as e:
                    diags.add_error("Incorrect attribute value type", str(e), path=attr_path + (str(map_key),))
            _run_validate_func(attr, value, key, attr_path, diags)
        else:
            _validate_collection(key, attr, value, attr_path, root_raw, diags)


def _validate_collection(
    key: str,
    attr: Schema,
    value: Any,
    path: tuple[str, ...],
    root_raw: dict[str, Any],
    diags: Diagnostics,
) -> None:
    items = _as_block_list(value) if attr.is_nested_block else value
    if not isinstance(items, (list, tuple, set, frozenset)):
        diags.add_error("Incorrect attribute value type", f"{key}: expected a {attr.type.value}", path=path)
        return

    noun = "blocks" if attr.is_nested_block else "items"
    if attr.max_items and len(items) > attr.max_items:
        diags.add_error(
            f'Too many "{key}" {noun}',
            f'No more than {attr.max_items} "{key}" {noun} are allowed',
            path=path,
        )
    if attr.min_items and len(items) < attr.min_items:
        diags.add_error(
            f'Insufficient "{key}" {noun}',
            f'At least {attr.min_items} "{key}" {noun} are required.',
            path=path,
        )

    for index, item in enumerate(items):
        item_path = path + (str(index),)
        if attr.is_nested_block:
            if item is None:
                item = {}
            if not isinstance(item, dict):
                diags.add_error("Incorrect attribute value type", f"{key}: expected a block", path=item_path)
                continue
            _validate_block(attr.elem.schema, item, item_path, root_raw, diags)
            continue

        if item is None or is_unknown(item):
            continue
        elem = attr.elem if isinstance(attr.elem, Schema) else Schema(type=ValueType.STRING, optional=True)
        try:
            coerced = coerce_primitive(elem.type, item)
        except ValueError as e:
            diags.add_error("Incorrect attribute value type", str(e), path=item_path)
            continue
        _run_validate_func(elem, coerced, key, item_path, diags)


def _decode_value(attr: Schema, value: Any) -> Any:
    if is_unknown(value):
        return UNKNOWN_VALUE

    try:
        if attr.type.is_primitive:
            return coerce_primitive(attr.type, value)

        if attr.type is ValueType.MAP:
            elem_type = attr.element_type()
            return {
                str(k): UNKNOWN_VALUE if is_unknown(v) else coerce_primitive(elem_type, v)
                for k, v in value.items()
                if v is not None
            }
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    if attr.is_nested_block:
        decoded = [_decode_block(attr.elem.schema, item or {}, top_level=False) for item in _as_block_list(value)]
    else:
        elem = attr.elem if isinstance(attr.elem, Schema) else Schema(type=ValueType.STRING, optional=True)
        decoded = [_decode_value(elem, item) for item in value if item is not None]

    if attr.type is ValueType.SET:
        return SchemaSet(attr.hash_func(), decoded)
    return decoded


def _decode_block(schema_map: dict[str, Schema], raw: dict[str, Any], top_level: bool) -> dict[str, Any]:
    """
    Decode one block. Top-level values are kept only when configured or
    defaulted; nested blocks carry every attribute, zero-filled.
    """
    result: dict[str, Any] = {}
    for key, attr in schema_map.items():
        value = raw.get(key)
        if value is None:
            value = attr.default_value()
        if value is None:
            if not top_level:
                result[key] = attr.zero_value()
            continue
        result[key] = _decode_value(attr, value)
    return result
