from awsprovider.sdk.schema import (
    Resource,
    Schema,
    ValueType,
    hash_string,
    hash_string_value,
    import_state_passthrough,
)
from awsprovider.sdk.schema.validation import string_in_slice, validate_arn
from awsprovider.services.tags import tags_schema

CERTIFICATE_VALIDATION_METHODS = ["DNS", "EMAIL", "NONE"]

# Importing a certificate and requesting one are mutually exclusive.
_IMPORT_ARGUMENTS = ["private_key", "certificate_body", "certificate_chain"]
_REQUEST_ARGUMENTS = ["domain_name", "validation_method"]


def _domain_validation_option_hash(value) -> int:
    return hash_string(value.get("domain_name", ""))


def resource_aws_acm_certificate() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "certificate_body": Schema(type=ValueType.STRING, optional=True, conflicts_with=_REQUEST_ARGUMENTS),
            "certificate_chain": Schema(type=ValueType.STRING, optional=True, conflicts_with=_REQUEST_ARGUMENTS),
            "private_key": Schema(
                type=ValueType.STRING, optional=True, sensitive=True, conflicts_with=_REQUEST_ARGUMENTS
            ),
            "certificate_authority_arn": Schema(
                type=ValueType.STRING,
                optional=True,
                force_new=True,
                validate_func=validate_arn,
                conflicts_with=_IMPORT_ARGUMENTS,
            ),
            "domain_name": Schema(
                type=ValueType.STRING,
                optional=True,
                computed=True,
                force_new=True,
                conflicts_with=_IMPORT_ARGUMENTS,
            ),
            "subject_alternative_names": Schema(
                type=ValueType.SET,
                optional=True,
                computed=True,
                force_new=True,
                elem=Schema(type=ValueType.STRING),
                set_func=hash_string_value,
                conflicts_with=_IMPORT_ARGUMENTS,
            ),
            "validation_method": Schema(
                type=ValueType.STRING,
                optional=True,
                computed=True,
                force_new=True,
                validate_func=string_in_slice(CERTIFICATE_VALIDATION_METHODS),
                conflicts_with=_IMPORT_ARGUMENTS,
            ),
            "options": Schema(
                type=ValueType.LIST,
                optional=True,
                max_items=1,
                elem=Resource(
                    schema={
                        "certificate_transparency_logging_preference": Schema(
                            type=ValueType.STRING,
                            optional=True,
                            force_new=True,
                            default="ENABLED",
                            validate_func=string_in_slice(["ENABLED", "DISABLED"]),
                        ),
                    }
                ),
            ),
            "arn": Schema(type=ValueType.STRING, computed=True),
            "status": Schema(type=ValueType.STRING, computed=True),
            "domain_validation_options": Schema(
                type=ValueType.SET,
                computed=True,
                set_func=_domain_validation_option_hash,
                elem=Resource(
                    schema={
                        "domain_name": Schema(type=ValueType.STRING, computed=True),
                        "resource_record_name": Schema(type=ValueType.STRING, computed=True),
                        "resource_record_type": Schema(type=ValueType.STRING, computed=True),
                        "resource_record_value": Schema(type=ValueType.STRING, computed=True),
                    }
                ),
            ),
            "validation_emails": Schema(type=ValueType.LIST, computed=True, elem=Schema(type=ValueType.STRING)),
            "tags": tags_schema(),
        },
    )
