"""
Registration tables.

A table maps a type name to a zero-argument factory producing the descriptor.
Duplicate names are rejected when they are registered, never at lookup time,
so a provider with a broken table fails while it is being assembled.
"""

import threading
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional

from awsprovider.exceptions import DuplicateRegistrationError, UnknownTypeError
from awsprovider.helpers.logger import get_logger
from awsprovider.sdk.schema import Resource

if TYPE_CHECKING:
    from awsprovider.provider.service_package import ServicePackage

logger = get_logger(__name__)

ResourceFactory = Callable[[], Resource]


class RegistrationTable:
    """Name to descriptor-factory table for one kind ("resource" or "data source")."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._registrations: dict[str, ResourceFactory] = {}
        self._sources: dict[str, Optional[str]] = {}
        self._instances: dict[str, Resource] = {}
        self._registry_lock = threading.RLock()

    def register(self, name: str, factory: ResourceFactory, source: Optional[str] = None) -> None:
        with self._registry_lock:
            if name in self._registrations:
                prefix = f"({source}) " if source else ""
                raise DuplicateRegistrationError(
                    f"{prefix}A {self.kind} named {name!r} is already registered", name, source
                )
            self._registrations[name] = factory
            self._sources[name] = source

    def register_all(self, entries: Iterable[tuple[str, ResourceFactory]], source: Optional[str] = None) -> None:
        """Register (name, factory) pairs in order."""
        for name, factory in entries:
            self.register(name, factory, source)

    def get(self, name: str) -> Resource:
        """Descriptor for name, built on first use and cached."""
        with self._registry_lock:
            if name not in self._registrations:
                raise UnknownTypeError(self.kind, name)
            if name not in self._instances:
                self._instances[name] = self._registrations[name]()
                logger.debug("Built %s descriptor %s", self.kind, name)
            return self._instances[name]

    def source(self, name: str) -> Optional[str]:
        return self._sources.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._registrations

    def names(self) -> list[str]:
        return sorted(self._registrations)

    def items(self) -> Iterator[tuple[str, Resource]]:
        for name in self.names():
            yield name, self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def __repr__(self) -> str:
        return f"RegistrationTable(kind={self.kind!r}, size={len(self)})"


def register_custom_endpoints(
    names: Iterable[str], packages: Iterable["ServicePackage"] = ()
) -> list[str]:
    """
    Ordered, unique list of custom endpoint service keys.

    Static names come first, then each service package's key. Packages that
    have no endpoint of their own return None and are skipped.
    """
    keys: list[str] = []
    seen: set[str] = set()

    for name in names:
        if name in seen:
            raise DuplicateRegistrationError(
                f"A service named {name!r} is already registered for custom endpoints", name
            )
        seen.add(name)
        keys.append(name)

    for package in packages:
        name = package.custom_endpoint_key()
        if name is None:
            continue
        if name in seen:
            raise DuplicateRegistrationError(
                f"({package.name}) A service named {name!r} is already registered for custom endpoints",
                name,
                package.name,
            )
        seen.add(name)
        keys.append(name)

    return keys
