"""Authenticated AWS client handle shared by all resources and data sources."""

import os
import threading
from typing import TYPE_CHECKING, Any, Optional

import boto3
import botocore.session
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, ProfileNotFound

from awsprovider.aws.errors import convert_client_error
from awsprovider.exceptions import AccountNotAllowedError, AWSConfigurationError
from awsprovider.helpers.logger import get_logger
from awsprovider.helpers.utils import reverse_dns
from awsprovider.provider.endpoints import boto3_service_name, endpoint_key_for_service

if TYPE_CHECKING:
    from awsprovider.config.provider_config import (
        AssumeRoleConfig,
        DefaultTagsConfig,
        IgnoreTagsConfig,
        ProviderConfig,
    )

logger = get_logger(__name__)

# Region prefixes of the non-commercial partitions, longest first.
_PARTITION_PREFIXES = (
    ("us-isob-", "aws-iso-b"),
    ("us-iso-", "aws-iso"),
    ("us-gov-", "aws-us-gov"),
    ("cn-", "aws-cn"),
)

_DNS_SUFFIXES = {
    "aws": "amazonaws.com",
    "aws-cn": "amazonaws.com.cn",
    "aws-us-gov": "amazonaws.com",
    "aws-iso": "c2s.ic.gov",
    "aws-iso-b": "sc2s.sgov.gov",
}

# Credential providers that query the instance or container metadata endpoints.
_METADATA_CREDENTIAL_PROVIDERS = ("iam-role", "container-role")


def partition_for_region(region: str) -> str:
    for prefix, partition in _PARTITION_PREFIXES:
        if region.startswith(prefix):
            return partition
    return "aws"


def dns_suffix_for_partition(partition: str) -> str:
    return _DNS_SUFFIXES.get(partition, "amazonaws.com")


def known_regions(session: boto3.Session) -> set[str]:
    regions: set[str] = set()
    for partition in session.get_available_partitions():
        regions.update(session.get_available_regions("ec2", partition_name=partition))
    return regions


def build_session(config: "ProviderConfig") -> boto3.Session:
    """boto3 session from the static credentials, profile and shared credentials file."""
    core_session = botocore.session.get_session()

    # The credential resolver reads the profile when it is built.
    if config.profile:
        core_session.set_config_variable("profile", config.profile)
    if config.shared_credentials_file:
        core_session.set_config_variable(
            "credentials_file", os.path.expanduser(config.shared_credentials_file)
        )

    if config.skip_metadata_api_check:
        resolver = core_session.get_component("credential_provider")
        for name in _METADATA_CREDENTIAL_PROVIDERS:
            resolver.remove(name)

    return boto3.Session(
        aws_access_key_id=config.access_key or None,
        aws_secret_access_key=config.secret_key or None,
        aws_session_token=config.token or None,
        region_name=config.region or None,
        profile_name=config.profile or None,
        botocore_session=core_session,
    )


class AWSClient:
    """
    Client handle passed as meta to every lifecycle and read function.

    Service clients are created on first use and cached.
    """

    def __init__(
        self,
        session: boto3.Session,
        config: "ProviderConfig",
        boto_config: Config,
        account_id: str = "",
        partition: Optional[str] = None,
    ) -> None:
        self.session = session
        self.config = config
        self.boto_config = boto_config
        self.region = config.region
        self.account_id = account_id
        self.partition = partition or partition_for_region(config.region)
        self._clients: dict[str, Any] = {}
        self._client_lock = threading.RLock()

    @classmethod
    def from_config(cls, config: "ProviderConfig") -> "AWSClient":
        logger.debug("Configuring AWS client for region %s", config.region)

        try:
            session = build_session(config)
        except ProfileNotFound as e:
            raise AWSConfigurationError(f"error configuring AWS provider: {e}") from e
        except BotoCoreError as e:
            raise AWSConfigurationError(f"error creating AWS session: {e}") from e

        if not config.skip_region_validation and config.region not in known_regions(session):
            raise AWSConfigurationError(f"Invalid AWS Region: {config.region}")

        boto_config = Config(
            region_name=config.region,
            retries={"max_attempts": config.max_retries, "mode": "standard"},
            user_agent_extra=f"APN/1.0 HashiCorp/1.0 Terraform/{config.terraform_version}",
            s3={"addressing_style": "path"} if config.s3_force_path_style else None,
        )
        client = cls(session, config, boto_config)

        identity: Optional[dict[str, Any]] = None
        if not config.skip_credentials_validation:
            if session.get_credentials() is None:
                raise AWSConfigurationError(
                    "No valid credential sources found for AWS Provider. "
                    "Please see https://registry.terraform.io/providers/hashicorp/aws "
                    "for more information on providing credentials for the AWS Provider"
                )
            identity = client.get_caller_identity()

        if not config.skip_requesting_account_id:
            identity = identity or client.get_caller_identity()
            client.account_id = identity["Account"]
            arn = identity.get("Arn", "")
            if arn.startswith("arn:"):
                client.partition = arn.split(":")[1]

        if client.account_id:
            client.validate_account_id()

        logger.info(
            "AWS client initialized with region: %s, profile: %s, retries: %d",
            config.region,
            config.profile or "default",
            config.max_retries,
        )
        return client

    def get_caller_identity(self) -> dict[str, Any]:
        try:
            return self.client("sts").get_caller_identity()
        except ClientError as e:
            raise convert_client_error(e, "GetCallerIdentity") from e
        except NoCredentialsError as e:
            raise AWSConfigurationError(f"error validating provider credentials: {e}") from e
        except BotoCoreError as e:
            raise AWSConfigurationError(f"error calling sts:GetCallerIdentity: {e}") from e

    def validate_account_id(self) -> None:
        if self.account_id in self.config.forbidden_account_ids:
            raise AccountNotAllowedError(f"Forbidden account ID ({self.account_id})")
        if self.config.allowed_account_ids and self.account_id not in self.config.allowed_account_ids:
            raise AccountNotAllowedError(f"Account ID not allowed ({self.account_id})")

    def endpoint_for(self, service_name: str) -> Optional[str]:
        endpoints = self.config.endpoints
        return endpoints.get(endpoint_key_for_service(service_name)) or endpoints.get(service_name) or None

    def client(self, service: str) -> Any:
        """
        Cached boto3 client for a service.

        service may be an endpoint key ("cloudwatchlogs") or a boto3 service
        name ("logs").
        """
        name = boto3_service_name(service)
        with self._client_lock:
            if name not in self._clients:
                kwargs: dict[str, Any] = {"config": self.boto_config}
                endpoint = self.endpoint_for(name)
                if endpoint:
                    kwargs["endpoint_url"] = endpoint
                if self.config.insecure:
                    kwargs["verify"] = False
                logger.debug("Initializing %s client on first use", name)
                self._clients[name] = self.session.client(name, **kwargs)
            return self._clients[name]

    @property
    def ec2_client(self):
        return self.client("ec2")

    @property
    def sts_client(self):
        return self.client("sts")

    @property
    def dns_suffix(self) -> str:
        return dns_suffix_for_partition(self.partition)

    def reverse_dns_prefix(self) -> str:
        return reverse_dns(self.dns_suffix)

    @property
    def default_tags_config(self) -> Optional["DefaultTagsConfig"]:
        return self.config.default_tags

    @property
    def ignore_tags_config(self) -> Optional["IgnoreTagsConfig"]:
        return self.config.ignore_tags

    @property
    def assume_role(self) -> Optional["AssumeRoleConfig"]:
        return self.config.assume_role

    @property
    def terraform_version(self) -> str:
        return self.config.terraform_version
