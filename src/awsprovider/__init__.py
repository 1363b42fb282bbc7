"""AWS resource provider: schema descriptors, registration tables and provider configuration."""

from awsprovider._package import __version__
from awsprovider.provider.provider import Provider, new_provider

__all__ = ["Provider", "__version__", "new_provider"]
