from awsprovider.sdk.schema import Resource, Schema, ValueType, import_state_passthrough
from awsprovider.sdk.schema.validation import int_in_slice, string_len_between, string_match, validate_arn
from awsprovider.services.tags import tags_schema

LOG_GROUP_RETENTION_DAYS = [0, 1, 3, 5, 7, 14, 30, 60, 90, 120, 150, 180, 365, 400, 545, 731, 1827, 3653]

_LOG_GROUP_NAME_PATTERN = r"^[\.\-_/#A-Za-z0-9]+$"


def resource_aws_cloudwatch_log_group() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "name": Schema(
                type=ValueType.STRING,
                optional=True,
                computed=True,
                force_new=True,
                conflicts_with=["name_prefix"],
                validate_func=string_len_between(1, 512),
            ),
            "name_prefix": Schema(
                type=ValueType.STRING,
                optional=True,
                force_new=True,
                conflicts_with=["name"],
                validate_func=string_len_between(1, 483),
            ),
            "retention_in_days": Schema(
                type=ValueType.INT,
                optional=True,
                default=0,
                validate_func=int_in_slice(LOG_GROUP_RETENTION_DAYS),
            ),
            "kms_key_id": Schema(type=ValueType.STRING, optional=True, validate_func=validate_arn),
            "arn": Schema(type=ValueType.STRING, computed=True),
            "tags": tags_schema(),
        },
    )


def resource_aws_cloudwatch_log_stream() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "name": Schema(
                type=ValueType.STRING,
                required=True,
                force_new=True,
                validate_func=string_match(r"^[^:*]{1,512}$", "must be 1-512 characters without ':' or '*'"),
            ),
            "log_group_name": Schema(
                type=ValueType.STRING,
                required=True,
                force_new=True,
                validate_func=string_match(_LOG_GROUP_NAME_PATTERN, "must contain only alphanumerics and ._-/#"),
            ),
            "arn": Schema(type=ValueType.STRING, computed=True),
        },
    )
