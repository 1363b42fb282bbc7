"""
Service packages contribute data sources, resources and an endpoint key.

Packages register themselves when their module is imported; the built-in
packages are imported by ``awsprovider.services``.
"""

import threading
from abc import ABC, abstractmethod
from typing import Optional

from awsprovider.exceptions import DuplicateRegistrationError
from awsprovider.provider.registry import ResourceFactory


class ServicePackage(ABC):
    name: str = ""

    @abstractmethod
    def data_sources(self) -> list[tuple[str, ResourceFactory]]:
        """(type name, factory) pairs for the package's data sources."""

    @abstractmethod
    def resources(self) -> list[tuple[str, ResourceFactory]]:
        """(type name, factory) pairs for the package's resources."""

    def custom_endpoint_key(self) -> Optional[str]:
        """Key accepted in the endpoints block, or None when the package calls no API."""
        return self.name


_packages: dict[str, ServicePackage] = {}
_packages_lock = threading.Lock()


def register_service_package(package: ServicePackage) -> ServicePackage:
    with _packages_lock:
        if package.name in _packages:
            raise DuplicateRegistrationError(
                f"A service package named {package.name!r} is already registered", package.name
            )
        _packages[package.name] = package
    return package


def service_packages() -> list[ServicePackage]:
    """Registered packages, ordered by name."""
    import awsprovider.services  # noqa: F401

    with _packages_lock:
        return [_packages[name] for name in sorted(_packages)]
