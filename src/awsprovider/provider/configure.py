"""Builds ProviderConfig from the decoded provider block and creates the client."""

from typing import TYPE_CHECKING, Any, Iterable, Optional

from pydantic import ValidationError

from awsprovider.config.provider_config import (
    DEFAULT_MAX_RETRIES,
    AssumeRoleConfig,
    DefaultTagsConfig,
    IgnoreTagsConfig,
    ProviderConfig,
)
from awsprovider.exceptions import ProviderError
from awsprovider.helpers.logger import get_logger
from awsprovider.sdk.schema import Diagnostics, ResourceData, SchemaSet

if TYPE_CHECKING:
    from awsprovider.aws.client import AWSClient

logger = get_logger(__name__)


def _first_block(value: Any) -> Optional[dict[str, Any]]:
    if not isinstance(value, list) or len(value) == 0 or value[0] is None:
        return None
    return value[0]


def _strings(values: Iterable[Any]) -> list[str]:
    return [v for v in values if isinstance(v, str)]


def expand_provider_default_tags(blocks: Any) -> Optional[DefaultTagsConfig]:
    block = _first_block(blocks)
    if block is None:
        return None
    tags = block.get("tags")
    if isinstance(tags, dict):
        return DefaultTagsConfig(tags={k: v for k, v in tags.items() if isinstance(v, str)})
    return DefaultTagsConfig()


def expand_provider_ignore_tags(blocks: Any) -> Optional[IgnoreTagsConfig]:
    block = _first_block(blocks)
    if block is None:
        return None
    config = IgnoreTagsConfig()
    if isinstance(block.get("keys"), SchemaSet):
        config.keys = _strings(block["keys"].list())
    if isinstance(block.get("key_prefixes"), SchemaSet):
        config.key_prefixes = _strings(block["key_prefixes"].list())
    return config


def expand_assume_role(blocks: Any) -> Optional[AssumeRoleConfig]:
    """Copy only the assume_role fields that are present and non-zero."""
    block = _first_block(blocks)
    if block is None:
        return None

    config = AssumeRoleConfig()

    duration = block.get("duration_seconds")
    if isinstance(duration, int) and duration != 0:
        config.duration_seconds = duration

    for field_name in ("external_id", "policy", "role_arn", "session_name"):
        value = block.get(field_name)
        if isinstance(value, str) and value != "":
            setattr(config, field_name, value)

    policy_arns = block.get("policy_arns")
    if isinstance(policy_arns, SchemaSet) and len(policy_arns) > 0:
        config.policy_arns = _strings(policy_arns.list())

    tags = block.get("tags")
    if isinstance(tags, dict) and len(tags) > 0:
        config.tags = {k: v for k, v in tags.items() if isinstance(v, str)}

    transitive = block.get("transitive_tag_keys")
    if isinstance(transitive, SchemaSet) and len(transitive) > 0:
        config.transitive_tag_keys = _strings(transitive.list())

    logger.info(
        "assume_role configuration set: (ARN: %r, SessionID: %r, ExternalID: %r)",
        config.role_arn,
        config.session_name,
        config.external_id,
    )
    return config


def expand_endpoints(endpoints: Any, endpoint_service_names: Iterable[str]) -> dict[str, str]:
    result: dict[str, str] = {}
    if not isinstance(endpoints, SchemaSet):
        return result
    names = list(endpoint_service_names)
    for block in endpoints.list():
        for name in names:
            value = block.get(name)
            if isinstance(value, str) and value:
                result[name] = value
    return result


def build_provider_config(
    d: ResourceData, terraform_version: str, endpoint_service_names: Iterable[str]
) -> ProviderConfig:
    allowed, has_allowed = d.get_ok("allowed_account_ids")
    forbidden, has_forbidden = d.get_ok("forbidden_account_ids")

    return ProviderConfig(
        access_key=d.get("access_key"),
        secret_key=d.get("secret_key"),
        profile=d.get("profile"),
        token=d.get("token"),
        region=d.get("region"),
        shared_credentials_file=d.get("shared_credentials_file"),
        default_tags=expand_provider_default_tags(d.get("default_tags")),
        ignore_tags=expand_provider_ignore_tags(d.get("ignore_tags")),
        assume_role=expand_assume_role(d.get("assume_role")),
        endpoints=expand_endpoints(d.get("endpoints"), endpoint_service_names),
        max_retries=d.get("max_retries") if d.has("max_retries") else DEFAULT_MAX_RETRIES,
        allowed_account_ids=_strings(allowed.list()) if has_allowed else [],
        forbidden_account_ids=_strings(forbidden.list()) if has_forbidden else [],
        insecure=d.get("insecure"),
        skip_credentials_validation=d.get("skip_credentials_validation"),
        skip_get_ec2_platforms=d.get("skip_get_ec2_platforms"),
        skip_region_validation=d.get("skip_region_validation"),
        skip_requesting_account_id=d.get("skip_requesting_account_id"),
        skip_metadata_api_check=d.get("skip_metadata_api_check"),
        s3_force_path_style=d.get("s3_force_path_style"),
        terraform_version=terraform_version,
    )


def provider_configure(
    d: ResourceData, terraform_version: str, endpoint_service_names: Iterable[str]
) -> tuple[Optional["AWSClient"], Diagnostics]:
    """
    Build the client handle. Every failure is returned as a diagnostic.
    """
    try:
        config = build_provider_config(d, terraform_version, endpoint_service_names)
    except ValidationError as e:
        logger.error("Invalid provider configuration: %s", e)
        diags = Diagnostics()
        for error in e.errors():
            location = tuple(str(part) for part in error.get("loc", ()))
            diags.add_error("Invalid provider configuration", error.get("msg", str(e)), path=location)
        return None, diags

    try:
        client = config.client()
    except ProviderError as e:
        logger.error("Error configuring the AWS provider: %s", e)
        return None, Diagnostics.from_error(e)

    return client, Diagnostics()
