"""
Client VPN endpoint and its sub-resources.

The endpoint can manage its network associations, authorization rules and
routes inline, or they can be managed as standalone resources.
"""

from awsprovider.sdk.schema import Resource, Schema, ValueType, hash_string_value, import_state_passthrough
from awsprovider.sdk.schema.validation import (
    int_in_slice,
    is_cidr_network,
    is_ipv4_address,
    string_in_slice,
    validate_arn,
)
from awsprovider.services.tags import tags_schema

CLIENT_VPN_AUTHENTICATION_TYPES = [
    "certificate-authentication",
    "directory-service-authentication",
    "federated-authentication",
]

CLIENT_VPN_TRANSPORT_PROTOCOLS = ["tcp", "udp"]


def _cidr(**kwargs) -> Schema:
    return Schema(type=ValueType.STRING, validate_func=is_cidr_network(0, 32), **kwargs)


def _computed_string() -> Schema:
    return Schema(type=ValueType.STRING, computed=True)


def _network_association_block() -> Resource:
    return Resource(
        schema={
            "subnet_id": Schema(type=ValueType.STRING, required=True),
            "association_id": _computed_string(),
            "security_groups": Schema(
                type=ValueType.SET, computed=True, elem=Schema(type=ValueType.STRING), set_func=hash_string_value
            ),
            "status": _computed_string(),
            "vpc_id": _computed_string(),
        }
    )


def _authorization_rule_block() -> Resource:
    return Resource(
        schema={
            "target_network_cidr": _cidr(required=True),
            "access_group_id": Schema(type=ValueType.STRING, optional=True),
            "authorize_all_groups": Schema(type=ValueType.BOOL, optional=True),
            "description": Schema(type=ValueType.STRING, optional=True),
        }
    )


def _route_block() -> Resource:
    return Resource(
        schema={
            "destination_network_cidr": _cidr(required=True),
            "subnet_id": Schema(type=ValueType.STRING, required=True),
            "description": Schema(type=ValueType.STRING, optional=True),
            "origin": _computed_string(),
            "type": _computed_string(),
        }
    )


def resource_aws_ec2_client_vpn_endpoint() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "description": Schema(type=ValueType.STRING, optional=True),
            "client_cidr_block": Schema(
                type=ValueType.STRING,
                required=True,
                force_new=True,
                validate_func=is_cidr_network(12, 22),
            ),
            "dns_servers": Schema(
                type=ValueType.LIST,
                optional=True,
                max_items=2,
                elem=Schema(type=ValueType.STRING, validate_func=is_ipv4_address),
            ),
            "server_certificate_arn": Schema(type=ValueType.STRING, required=True, validate_func=validate_arn),
            "split_tunnel": Schema(type=ValueType.BOOL, optional=True, default=False),
            "transport_protocol": Schema(
                type=ValueType.STRING,
                optional=True,
                force_new=True,
                default="udp",
                validate_func=string_in_slice(CLIENT_VPN_TRANSPORT_PROTOCOLS),
            ),
            "vpn_port": Schema(
                type=ValueType.INT,
                optional=True,
                default=443,
                validate_func=int_in_slice([443, 1194]),
            ),
            "authentication_options": Schema(
                type=ValueType.LIST,
                required=True,
                force_new=True,
                max_items=2,
                elem=Resource(
                    schema={
                        "type": Schema(
                            type=ValueType.STRING,
                            required=True,
                            force_new=True,
                            validate_func=string_in_slice(CLIENT_VPN_AUTHENTICATION_TYPES),
                        ),
                        "active_directory_id": Schema(type=ValueType.STRING, optional=True, force_new=True),
                        "root_certificate_chain_arn": Schema(
                            type=ValueType.STRING, optional=True, force_new=True, validate_func=validate_arn
                        ),
                        "saml_provider_arn": Schema(
                            type=ValueType.STRING, optional=True, force_new=True, validate_func=validate_arn
                        ),
                    }
                ),
            ),
            "connection_log_options": Schema(
                type=ValueType.LIST,
                required=True,
                max_items=1,
                elem=Resource(
                    schema={
                        "cloudwatch_log_group": Schema(type=ValueType.STRING, optional=True),
                        "cloudwatch_log_stream": Schema(type=ValueType.STRING, optional=True),
                        "enabled": Schema(type=ValueType.BOOL, required=True),
                    }
                ),
            ),
            "network_association": Schema(type=ValueType.SET, optional=True, elem=_network_association_block()),
            "authorization_rule": Schema(type=ValueType.SET, optional=True, elem=_authorization_rule_block()),
            "route": Schema(type=ValueType.SET, optional=True, elem=_route_block()),
            "arn": _computed_string(),
            "dns_name": _computed_string(),
            "status": _computed_string(),
            "tags": tags_schema(),
        },
    )


def resource_aws_ec2_client_vpn_network_association() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "client_vpn_endpoint_id": Schema(type=ValueType.STRING, required=True, force_new=True),
            "subnet_id": Schema(type=ValueType.STRING, required=True, force_new=True),
            "security_groups": Schema(
                type=ValueType.SET,
                optional=True,
                computed=True,
                min_items=1,
                max_items=5,
                elem=Schema(type=ValueType.STRING),
                set_func=hash_string_value,
            ),
            "association_id": _computed_string(),
            "status": _computed_string(),
            "vpc_id": _computed_string(),
        },
    )


def resource_aws_ec2_client_vpn_authorization_rule() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "client_vpn_endpoint_id": Schema(type=ValueType.STRING, required=True, force_new=True),
            "target_network_cidr": _cidr(required=True, force_new=True),
            "access_group_id": Schema(
                type=ValueType.STRING,
                optional=True,
                force_new=True,
                conflicts_with=["authorize_all_groups"],
            ),
            "authorize_all_groups": Schema(
                type=ValueType.BOOL,
                optional=True,
                force_new=True,
                conflicts_with=["access_group_id"],
            ),
            "description": Schema(type=ValueType.STRING, optional=True, force_new=True),
        },
    )


def resource_aws_ec2_client_vpn_route() -> Resource:
    return Resource(
        importer=import_state_passthrough,
        schema={
            "client_vpn_endpoint_id": Schema(type=ValueType.STRING, required=True, force_new=True),
            "destination_cidr_block": _cidr(required=True, force_new=True),
            "target_vpc_subnet_id": Schema(type=ValueType.STRING, required=True, force_new=True),
            "description": Schema(type=ValueType.STRING, optional=True, force_new=True),
            "origin": _computed_string(),
            "type": _computed_string(),
        },
    )
