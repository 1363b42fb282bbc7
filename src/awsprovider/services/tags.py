from awsprovider.sdk.schema import Schema, ValueType


def tags_schema() -> Schema:
    return Schema(type=ValueType.MAP, optional=True, elem=Schema(type=ValueType.STRING))


def tags_schema_computed() -> Schema:
    return Schema(type=ValueType.MAP, optional=True, computed=True, elem=Schema(type=ValueType.STRING))


def tags_schema_force_new() -> Schema:
    return Schema(type=ValueType.MAP, optional=True, force_new=True, elem=Schema(type=ValueType.STRING))
