"""Data sources answered from the client handle and botocore's endpoint data."""

from typing import Any, Optional

from botocore.loaders import create_loader

from awsprovider.exceptions import ConfigurationError
from awsprovider.sdk.schema import Resource, ResourceData, Schema, ValueType
from awsprovider.sdk.schema.validation import validate_arn
from awsprovider.services.tags import tags_schema_computed


def _computed_string() -> Schema:
    return Schema(type=ValueType.STRING, computed=True)


def data_source_aws_arn() -> Resource:
    return Resource(
        read=data_source_aws_arn_read,
        schema={
            "arn": Schema(type=ValueType.STRING, required=True, validate_func=validate_arn),
            "partition": _computed_string(),
            "service": _computed_string(),
            "region": _computed_string(),
            "account": _computed_string(),
            "resource": _computed_string(),
        },
    )


def data_source_aws_arn_read(d: ResourceData, meta: Any) -> None:
    arn = d.get("arn")
    parts = arn.split(":", 5)
    if len(parts) != 6 or parts[0] != "arn":
        raise ConfigurationError(f"error parsing ARN ({arn}): arn: invalid prefix")

    _, partition, service, region, account, resource = parts
    d.set_id(arn)
    d.set("partition", partition)
    d.set("service", service)
    d.set("region", region)
    d.set("account", account)
    d.set("resource", resource)


def data_source_aws_partition() -> Resource:
    return Resource(
        read=data_source_aws_partition_read,
        schema={
            "partition": _computed_string(),
            "dns_suffix": _computed_string(),
            "reverse_dns_prefix": _computed_string(),
        },
    )


def data_source_aws_partition_read(d: ResourceData, meta: Any) -> None:
    d.set_id(meta.partition)
    d.set("partition", meta.partition)
    d.set("dns_suffix", meta.dns_suffix)
    d.set("reverse_dns_prefix", meta.reverse_dns_prefix())


def region_descriptions() -> dict[str, str]:
    """Region name to description for every partition botocore knows."""
    endpoints = create_loader().load_data("endpoints")
    descriptions: dict[str, str] = {}
    for partition in endpoints.get("partitions", []):
        for name, region in partition.get("regions", {}).items():
            descriptions[name] = region.get("description", "")
    return descriptions


def _region_from_endpoint(endpoint: str, regions: dict[str, str]) -> Optional[str]:
    for part in endpoint.split("."):
        if part in regions:
            return part
    return None


def data_source_aws_region() -> Resource:
    return Resource(
        read=data_source_aws_region_read,
        schema={
            "name": Schema(type=ValueType.STRING, optional=True, computed=True),
            "endpoint": Schema(type=ValueType.STRING, optional=True, computed=True),
            "description": _computed_string(),
        },
    )


def data_source_aws_region_read(d: ResourceData, meta: Any) -> None:
    regions = region_descriptions()

    name, has_name = d.get_ok("name")
    endpoint, has_endpoint = d.get_ok("endpoint")

    if has_name and name not in regions:
        raise ConfigurationError(f"region not found for name: {name}")
    if has_endpoint:
        from_endpoint = _region_from_endpoint(endpoint, regions)
        if from_endpoint is None:
            raise ConfigurationError(f"region not found for endpoint: {endpoint}")
        if has_name and from_endpoint != name:
            raise ConfigurationError("multiple regions matched; use additional constraints to reduce matches")
        name = from_endpoint
    if not has_name and not has_endpoint:
        name = meta.region

    d.set_id(name)
    d.set("name", name)
    d.set("endpoint", f"ec2.{name}.{meta.dns_suffix}")
    d.set("description", regions.get(name, ""))


def data_source_aws_default_tags() -> Resource:
    return Resource(
        read=data_source_aws_default_tags_read,
        schema={"tags": tags_schema_computed()},
    )


def data_source_aws_default_tags_read(d: ResourceData, meta: Any) -> None:
    default_tags = meta.default_tags_config
    ignore_tags = meta.ignore_tags_config

    tags: dict[str, str] = {}
    if default_tags is not None:
        tags = {
            key: value
            for key, value in default_tags.tags.items()
            if ignore_tags is None or not ignore_tags.ignores(key)
        }

    d.set_id(meta.partition)
    d.set("tags", tags)
