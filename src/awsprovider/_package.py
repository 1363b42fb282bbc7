"""Package metadata."""

PACKAGE_NAME = "awsprovider"
__version__ = "0.3.0"
DESCRIPTION = "AWS resource provider plugin: schema descriptors, registration tables and provider configuration"

# Reported to the provider when the host runtime does not announce itself.
DEFAULT_HOST_VERSION = "0.11+compatible"
