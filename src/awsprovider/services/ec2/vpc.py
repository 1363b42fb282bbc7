from awsprovider.sdk.schema import Resource, Schema, ValueType, import_state_passthrough
from awsprovider.sdk.schema.validation import is_cidr_network, string_in_slice
from awsprovider.services.tags import tags_schema


def _computed_string() -> Schema:
    return Schema(type=ValueType.STRING, computed=True)


def resource_aws_vpc() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "cidr_block": Schema(
                type=ValueType.STRING,
                required=True,
                force_new=True,
                validate_func=is_cidr_network(16, 28),
            ),
            "instance_tenancy": Schema(
                type=ValueType.STRING,
                optional=True,
                force_new=True,
                default="default",
                validate_func=string_in_slice(["default", "dedicated"]),
            ),
            "enable_dns_hostnames": Schema(type=ValueType.BOOL, optional=True, computed=True),
            "enable_dns_support": Schema(type=ValueType.BOOL, optional=True, default=True),
            "enable_classiclink": Schema(type=ValueType.BOOL, optional=True, computed=True),
            "assign_generated_ipv6_cidr_block": Schema(type=ValueType.BOOL, optional=True, default=False),
            "arn": _computed_string(),
            "main_route_table_id": _computed_string(),
            "default_network_acl_id": _computed_string(),
            "dhcp_options_id": _computed_string(),
            "default_security_group_id": _computed_string(),
            "default_route_table_id": _computed_string(),
            "ipv6_association_id": _computed_string(),
            "ipv6_cidr_block": _computed_string(),
            "owner_id": _computed_string(),
            "tags": tags_schema(),
        },
    )


def resource_aws_subnet() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "vpc_id": Schema(type=ValueType.STRING, required=True, force_new=True),
            "cidr_block": Schema(
                type=ValueType.STRING,
                required=True,
                force_new=True,
                validate_func=is_cidr_network(16, 28),
            ),
            "ipv6_cidr_block": Schema(type=ValueType.STRING, optional=True),
            "availability_zone": Schema(
                type=ValueType.STRING,
                optional=True,
                computed=True,
                force_new=True,
                conflicts_with=["availability_zone_id"],
            ),
            "availability_zone_id": Schema(
                type=ValueType.STRING,
                optional=True,
                computed=True,
                force_new=True,
                conflicts_with=["availability_zone"],
            ),
            "map_public_ip_on_launch": Schema(type=ValueType.BOOL, optional=True, default=False),
            "assign_ipv6_address_on_creation": Schema(type=ValueType.BOOL, optional=True, default=False),
            "ipv6_cidr_block_association_id": _computed_string(),
            "arn": _computed_string(),
            "owner_id": _computed_string(),
            "tags": tags_schema(),
        },
    )
