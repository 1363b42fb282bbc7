"""Exception hierarchy for the AWS provider."""

from typing import Any, Optional


class ProviderError(Exception):
    """Base class for all provider errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ProviderError):
    """Invalid provider configuration."""


class RegistrationError(ProviderError):
    """
    Invalid registration table.

    Registration errors are programmer errors detected while the provider is
    being assembled. They are never turned into diagnostics: callers let them
    propagate and abort start-up.
    """


class DuplicateRegistrationError(RegistrationError):
    """A type name (or custom endpoint key) was registered twice."""

    def __init__(self, message: str, name: str, source: Optional[str] = None) -> None:
        super().__init__(message, {"name": name, "source": source})
        self.name = name
        self.source = source


class UnknownTypeError(ProviderError, KeyError):
    """A resource or data source type name is not registered."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} type {name!r} is not registered", {"kind": kind, "name": name})
        self.kind = kind
        self.name = name

    def __str__(self) -> str:
        return self.message


class SchemaError(ProviderError):
    """A schema descriptor failed internal validation."""

    def __init__(self, message: str, errors: Optional[list[str]] = None) -> None:
        super().__init__(message, {"errors": errors or []})
        self.errors = errors or []


class HCLParseError(ProviderError):
    """An HCL configuration could not be decoded."""


# AWS-side errors, mapped from botocore ClientError codes


class AWSError(ProviderError):
    """Base class for errors returned by AWS APIs."""


class AWSConfigurationError(AWSError, ConfigurationError):
    """The AWS session or client could not be set up."""


class AuthorizationError(AWSError):
    """Credentials were rejected or lack permission."""


class AccountNotAllowedError(AuthorizationError):
    """The caller account is forbidden or not in the allowed list."""


class AWSValidationError(AWSError):
    """AWS rejected request parameters."""


class AWSEntityNotFoundError(AWSError):
    """The requested AWS entity does not exist."""


class RateLimitError(AWSError):
    """AWS throttled the request."""


class NetworkError(AWSError):
    """The AWS endpoint could not be reached or timed out."""


class QuotaExceededError(AWSError):
    """An AWS service limit was reached."""


class ResourceInUseError(AWSError):
    """The AWS resource is in use by another operation."""


class AcceptanceTestError(ProviderError, AssertionError):
    """An acceptance-test step failed."""
