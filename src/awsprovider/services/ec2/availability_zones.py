from botocore.exceptions import BotoCoreError, ClientError

from awsprovider.aws.errors import convert_botocore_error, convert_client_error
from awsprovider.helpers.logger import get_logger
from awsprovider.sdk.schema import Resource, ResourceData, Schema, ValueType, hash_string_value
from awsprovider.sdk.schema.validation import string_in_slice

logger = get_logger(__name__)

AVAILABILITY_ZONE_STATES = ["available", "information", "impaired", "unavailable"]


def _string_set(**kwargs) -> Schema:
    return Schema(type=ValueType.SET, elem=Schema(type=ValueType.STRING), set_func=hash_string_value, **kwargs)


def data_source_aws_availability_zones() -> Resource:
    return Resource(
        read=data_source_aws_availability_zones_read,
        schema={
            "all_availability_zones": Schema(type=ValueType.BOOL, optional=True),
            "exclude_names": _string_set(optional=True),
            "exclude_zone_ids": _string_set(optional=True),
            "filter": Schema(
                type=ValueType.SET,
                optional=True,
                elem=Resource(
                    schema={
                        "name": Schema(type=ValueType.STRING, required=True),
                        "values": _string_set(required=True),
                    }
                ),
            ),
            "group_names": _string_set(computed=True),
            "names": Schema(type=ValueType.LIST, computed=True, elem=Schema(type=ValueType.STRING)),
            "state": Schema(
                type=ValueType.STRING,
                optional=True,
                validate_func=string_in_slice(AVAILABILITY_ZONE_STATES),
            ),
            "zone_ids": Schema(type=ValueType.LIST, computed=True, elem=Schema(type=ValueType.STRING)),
        },
    )


def build_filters(d: ResourceData) -> list[dict]:
    filters = []
    state, ok = d.get_ok("state")
    if ok:
        filters.append({"Name": "state", "Values": [state]})
    for block in d.get("filter"):
        filters.append({"Name": block["name"], "Values": sorted(block["values"].list())})
    return filters


def data_source_aws_availability_zones_read(d: ResourceData, meta) -> None:
    conn = meta.ec2_client

    request: dict = {}
    all_zones, ok = d.get_ok("all_availability_zones")
    if ok:
        request["AllAvailabilityZones"] = all_zones
    filters = build_filters(d)
    if filters:
        request["Filters"] = filters

    logger.debug("Reading Availability Zones: %s", request)
    try:
        response = conn.describe_availability_zones(**request)
    except ClientError as e:
        raise convert_client_error(e, "DescribeAvailabilityZones") from e
    except BotoCoreError as e:
        raise convert_botocore_error(e, "DescribeAvailabilityZones") from e

    exclude_names = set(d.get("exclude_names").list())
    exclude_zone_ids = set(d.get("exclude_zone_ids").list())

    zones = sorted(response.get("AvailabilityZones", []), key=lambda z: z["ZoneName"])
    group_names: set[str] = set()
    names: list[str] = []
    zone_ids: list[str] = []
    for zone in zones:
        if zone["ZoneName"] in exclude_names or zone.get("ZoneId") in exclude_zone_ids:
            continue
        if zone.get("GroupName"):
            group_names.add(zone["GroupName"])
        names.append(zone["ZoneName"])
        zone_ids.append(zone.get("ZoneId", ""))

    d.set_id(meta.region)
    d.set("group_names", sorted(group_names))
    d.set("names", names)
    d.set("zone_ids", zone_ids)
