__all__ = ["ContainerError", "NotFoundError", "CircularDependencyError"]


class ContainerError(Exception):
    """Raised when an identifier can be located but cannot be auto-wired."""

    pass


class NotFoundError(ContainerError, LookupError):
    """Raised when an identifier is unbound and names no locatable type."""

    pass


class CircularDependencyError(ContainerError):
    """Raised when an identifier is requested while it is already being resolved.

    Attributes:
        chain: The identifiers being resolved, ending with the repeated one.
    """

    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__(f"Circular dependency detected: {' -> '.join(chain)}")
