from awsprovider.sdk.schema.defaults import env_default_func, multi_env_default_func
from awsprovider.sdk.schema.diagnostics import Diagnostic, Diagnostics, Severity
from awsprovider.sdk.schema.flatmap import flatten
from awsprovider.sdk.schema.hashcode import UNKNOWN_VALUE, hash_string, is_unknown
from awsprovider.sdk.schema.resource import Importer, Resource, import_state_passthrough
from awsprovider.sdk.schema.resource_data import ResourceData
from awsprovider.sdk.schema.schema import Schema, ValueType
from awsprovider.sdk.schema.set import SchemaSet, hash_resource, hash_schema, hash_string_value

__all__ = [
    "UNKNOWN_VALUE",
    "Diagnostic",
    "Diagnostics",
    "Importer",
    "Resource",
    "ResourceData",
    "Schema",
    "SchemaSet",
    "Severity",
    "ValueType",
    "env_default_func",
    "flatten",
    "hash_resource",
    "hash_schema",
    "hash_string",
    "hash_string_value",
    "import_state_passthrough",
    "is_unknown",
    "multi_env_default_func",
]
