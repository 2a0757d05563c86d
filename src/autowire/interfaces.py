"""Structural interface shared by containers."""

from typing import Any, Protocol, runtime_checkable

__all__ = ["ContainerInterface"]


@runtime_checkable
class ContainerInterface(Protocol):
    """Anything that can look up services by identifier."""

    def get(self, identifier: Any) -> Any:
        """Return the service for ``identifier`` or raise NotFoundError."""
        ...

    def has(self, identifier: Any) -> bool:
        """Report whether ``identifier`` has an explicit binding."""
        ...
