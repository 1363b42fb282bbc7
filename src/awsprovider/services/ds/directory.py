from awsprovider.sdk.schema import Resource, Schema, ValueType, hash_string_value, import_state_passthrough
from awsprovider.sdk.schema.validation import string_in_slice
from awsprovider.services.tags import tags_schema

DIRECTORY_TYPES = ["SimpleAD", "ADConnector", "MicrosoftAD"]
DIRECTORY_SIZES = ["Small", "Large"]
DIRECTORY_EDITIONS = ["Enterprise", "Standard"]


def _string_set(**kwargs) -> Schema:
    return Schema(type=ValueType.SET, elem=Schema(type=ValueType.STRING), set_func=hash_string_value, **kwargs)


def resource_aws_directory_service_directory() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "name": Schema(type=ValueType.STRING, required=True, force_new=True),
            "password": Schema(type=ValueType.STRING, required=True, force_new=True, sensitive=True),
            "size": Schema(
                type=ValueType.STRING,
                optional=True,
                computed=True,
                force_new=True,
                validate_func=string_in_slice(DIRECTORY_SIZES),
            ),
            "alias": Schema(type=ValueType.STRING, optional=True, computed=True, force_new=True),
            "description": Schema(type=ValueType.STRING, optional=True, force_new=True),
            "short_name": Schema(type=ValueType.STRING, optional=True, computed=True, force_new=True),
            "vpc_settings": Schema(
                type=ValueType.LIST,
                optional=True,
                force_new=True,
                max_items=1,
                elem=Resource(
                    schema={
                        "subnet_ids": _string_set(required=True, force_new=True),
                        "vpc_id": Schema(type=ValueType.STRING, required=True, force_new=True),
                        "availability_zones": _string_set(computed=True),
                    }
                ),
            ),
            "connect_settings": Schema(
                type=ValueType.LIST,
                optional=True,
                force_new=True,
                max_items=1,
                elem=Resource(
                    schema={
                        "customer_username": Schema(type=ValueType.STRING, required=True, force_new=True),
                        "customer_dns_ips": _string_set(required=True, force_new=True),
                        "subnet_ids": _string_set(required=True, force_new=True),
                        "vpc_id": Schema(type=ValueType.STRING, required=True, force_new=True),
                        "connect_ips": _string_set(computed=True),
                        "availability_zones": _string_set(computed=True),
                    }
                ),
            ),
            "enable_sso": Schema(type=ValueType.BOOL, optional=True, default=False),
            "type": Schema(
                type=ValueType.STRING,
                optional=True,
                force_new=True,
                default="SimpleAD",
                validate_func=string_in_slice(DIRECTORY_TYPES),
            ),
            "edition": Schema(
                type=ValueType.STRING,
                optional=True,
                computed=True,
                force_new=True,
                validate_func=string_in_slice(DIRECTORY_EDITIONS),
            ),
            "access_url": Schema(type=ValueType.STRING, computed=True),
            "dns_ip_addresses": _string_set(computed=True),
            "security_group_id": Schema(type=ValueType.STRING, computed=True),
            "tags": tags_schema(),
        },
    )
