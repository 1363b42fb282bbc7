"""Provider configuration models."""

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from awsprovider._package import DEFAULT_HOST_VERSION

if TYPE_CHECKING:
    from awsprovider.aws.client import AWSClient

DEFAULT_MAX_RETRIES = 25


class AssumeRoleConfig(BaseModel):
    """Role to assume before making API calls. Carried on the client handle."""

    model_config = ConfigDict(extra="forbid")

    role_arn: str = ""
    session_name: str = ""
    external_id: str = ""
    duration_seconds: int = Field(default=0, ge=0)
    policy: str = ""
    policy_arns: list[str] = Field(default_factory=list)
    tags: dict[str, str] = Field(default_factory=dict)
    transitive_tag_keys: list[str] = Field(default_factory=list)

    @property
    def is_set(self) -> bool:
        return bool(self.role_arn)


class DefaultTagsConfig(BaseModel):
    """Tags applied to every resource that supports tagging."""

    tags: dict[str, str] = Field(default_factory=dict)


class IgnoreTagsConfig(BaseModel):
    """Tag keys the provider leaves alone on every resource."""

    keys: list[str] = Field(default_factory=list)
    key_prefixes: list[str] = Field(default_factory=list)

    def ignores(self, key: str) -> bool:
        if key in self.keys:
            return True
        return any(key.startswith(prefix) for prefix in self.key_prefixes)


class ProviderConfig(BaseModel):
    """
    Everything needed to build an authenticated client handle.

    Populated from the decoded provider block by provider_configure.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    access_key: str = ""
    secret_key: str = ""
    profile: str = ""
    token: str = ""
    region: str = ""
    shared_credentials_file: str = ""

    assume_role: Optional[AssumeRoleConfig] = None
    default_tags: Optional[DefaultTagsConfig] = None
    ignore_tags: Optional[IgnoreTagsConfig] = None

    endpoints: dict[str, str] = Field(default_factory=dict)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)

    allowed_account_ids: list[str] = Field(default_factory=list)
    forbidden_account_ids: list[str] = Field(default_factory=list)

    insecure: bool = False
    skip_credentials_validation: bool = False
    skip_get_ec2_platforms: bool = False
    skip_region_validation: bool = False
    skip_requesting_account_id: bool = False
    skip_metadata_api_check: bool = False
    s3_force_path_style: bool = False

    terraform_version: str = DEFAULT_HOST_VERSION

    @model_validator(mode="after")
    def validate_account_lists(self) -> "ProviderConfig":
        if self.allowed_account_ids and self.forbidden_account_ids:
            raise ValueError("allowed_account_ids and forbidden_account_ids are mutually exclusive")
        return self

    def client(self) -> "AWSClient":
        """Build the authenticated client handle. Raises AWSError subclasses."""
        from awsprovider.aws.client import AWSClient

        return AWSClient.from_config(self)
