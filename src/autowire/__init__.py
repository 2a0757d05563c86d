"""Autowire dependency injection container.

Autowire maps string identifiers to services and builds object graphs on
demand. Services are bound explicitly as factories or aliases, or left unbound
and constructed automatically from the type annotations on their constructors.
Auto-wired classes are bound after their first resolution, so introspection
happens once per class.

Key Features:
    - Factory and alias bindings with fluent registration
    - Constructor auto-wiring from standard type hints
    - Classes that manage their own shared instance via ``Singleton``
    - Circular dependency detection for aliases and constructors
    - Thread-safe lookups

Basic Usage:
    >>> from autowire import Container
    >>>
    >>> class Database:
    ...     pass
    >>>
    >>> class UserService:
    ...     def __init__(self, db: Database):
    ...         self.db = db
    >>>
    >>> container = Container()
    >>> service = container.get(UserService)
    >>> container.has(UserService)
    True

The package consists of several modules:
    - container: The Container and its resolution algorithm
    - introspection: Type location and constructor parameter descriptors
    - singleton: Base class for self-managed shared instances
    - shared: Explicit init/reset hooks for a process-wide container
    - domain: Binding and parameter models
    - errors: Container exceptions
"""

from autowire.container import Container
from autowire.domain import Alias, Factory, Parameter, ParameterKind
from autowire.errors import CircularDependencyError, ContainerError, NotFoundError
from autowire.interfaces import ContainerInterface
from autowire.introspection import identifier_of
from autowire.shared import init_container, reset_container, shared_container
from autowire.singleton import Singleton, is_singleton

__all__ = [
    "Container",
    "ContainerInterface",
    "Alias",
    "Factory",
    "Parameter",
    "ParameterKind",
    "ContainerError",
    "NotFoundError",
    "CircularDependencyError",
    "identifier_of",
    "init_container",
    "shared_container",
    "reset_container",
    "Singleton",
    "is_singleton",
]
