"""Resource and data source descriptors, grouped by AWS service."""

# Imported for the side effect of registering the built-in service packages.
from awsprovider.services import meta  # noqa: F401
