from botocore.exceptions import BotoCoreError, ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as EndpointUnreachableError

from awsprovider.exceptions import (
    AuthorizationError,
    AWSEntityNotFoundError,
    AWSError,
    AWSValidationError,
    NetworkError,
    QuotaExceededError,
    RateLimitError,
    ResourceInUseError,
)


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def is_not_found(error: ClientError) -> bool:
    code = error_code(error)
    return code == "ResourceNotFound" or code.endswith(".NotFound") or code.endswith("NotFoundException")


def convert_client_error(error: ClientError, operation_name: str = "unknown") -> AWSError:
    """Convert a botocore ClientError to a provider exception."""
    code = error_code(error)
    message = error.response.get("Error", {}).get("Message", str(error))
    details = {"code": code, "operation": operation_name}

    if code in ["ValidationError", "InvalidParameterValue"]:
        return AWSValidationError(message, details)
    elif code in ["LimitExceeded", "LimitExceededException", "ClientVpnEndpointLimitExceeded"]:
        return QuotaExceededError(message, details)
    elif code in ["ResourceInUse", "ResourceInUseException"]:
        return ResourceInUseError(message, details)
    elif code in ["UnauthorizedOperation", "AccessDenied", "InvalidClientTokenId", "ExpiredToken"]:
        return AuthorizationError(message, details)
    elif code in ["RequestLimitExceeded", "Throttling", "ThrottlingException"]:
        return RateLimitError(message, details)
    elif is_not_found(error):
        return AWSEntityNotFoundError(message, details)
    elif code in ["RequestTimeout", "ServiceUnavailable"]:
        return NetworkError(message, details)
    else:
        return AWSError(f"AWS Error: {code} - {message}", details)


def convert_botocore_error(error: BotoCoreError, operation_name: str = "unknown") -> AWSError:
    """Convert a botocore transport or client-side error to a provider exception."""
    details = {"code": type(error).__name__, "operation": operation_name}
    if isinstance(error, (EndpointUnreachableError, HTTPClientError)):
        return NetworkError(f"error calling {operation_name}: {error}", details)
    return AWSError(f"error calling {operation_name}: {error}", details)
