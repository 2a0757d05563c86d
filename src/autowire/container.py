"""The dependency injection container.

A :class:`Container` maps identifiers to bindings. A binding is either a
factory, invoked on every lookup, or an alias forwarding to another
identifier. Identifiers with no binding are auto-wired: the class they name is
located, its constructor's annotated parameters are resolved through the
container, and a factory closing over the resolved dependencies is bound in
its place so later lookups skip introspection.

Example:
    >>> container = Container()
    >>> container.set("mailer", SmtpMailer).set("clock", lambda: FixedClock(0))
    >>> container.get(SignupService)  # SignupService(mailer: SmtpMailer) is auto-wired
"""

import inspect
import logging
import threading
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional, get_type_hints

from autowire.domain import Alias, Binding, Factory, Parameter, ParameterKind
from autowire.errors import CircularDependencyError, ContainerError
from autowire.introspection import (
    constructor_parameters,
    is_instantiable,
    locate,
    to_identifier,
)
from autowire.singleton import is_singleton

__all__ = ["Container"]

logger = logging.getLogger(__name__)


class Container:
    """Registry of bindings that builds object graphs on demand.

    All operations accept either a string identifier or a class, which stands
    for its fully-qualified name. A top-level lookup holds the container's lock
    until it completes, so concurrent lookups of an unbound class auto-wire it
    only once.

    Args:
        bindings: Optional initial bindings, each applied with :meth:`set`.
    """

    def __init__(self, bindings: Optional[Mapping[Any, Any]] = None):
        self._bindings: dict[str, Binding] = {}
        self._lock = threading.RLock()
        self._resolving: list[str] = []
        for identifier, implementation in (bindings or {}).items():
            self.set(identifier, implementation)

    @property
    def bindings(self) -> Mapping[str, Binding]:
        """Read-only view of the registered bindings."""
        return MappingProxyType(self._bindings)

    def set(self, identifier: Any, implementation: Any) -> "Container":
        """Bind an implementation to an identifier, replacing any existing binding.

        Functions and other non-class callables become factories and are called
        with no arguments on every lookup. Strings and classes become aliases,
        resolved by looking them up in turn. Nothing else is checked until the
        identifier is requested.

        Args:
            identifier: The identifier to bind.
            implementation: A zero-argument factory, or the identifier to alias.

        Returns:
            This container, so calls can be chained.
        """
        key = to_identifier(identifier)
        if callable(implementation) and not inspect.isclass(implementation):
            binding = Factory(implementation)
        else:
            binding = Alias(implementation)

        with self._lock:
            self._bindings[key] = binding
        logger.debug("Bound %s to %s", key, binding)
        return self

    def has(self, identifier: Any) -> bool:
        """Report whether an identifier has a binding. Never triggers resolution."""
        key = to_identifier(identifier)
        with self._lock:
            return key in self._bindings

    def get(self, identifier: Any) -> Any:
        """Return an instance for an identifier.

        Factories are invoked and aliases followed. Unbound identifiers are
        auto-wired with :meth:`resolve`.

        Raises:
            NotFoundError: If the identifier is unbound and names no locatable type.
            CircularDependencyError: If resolution reaches an identifier already being resolved.
            ContainerError: If the named type cannot be auto-wired.
        """
        key = to_identifier(identifier)
        with self._lock, self._resolving_key(key):
            return self._lookup(identifier, key)

    def resolve(self, identifier: Any) -> Any:
        """Auto-wire the class named by an identifier, bind it, and return an instance.

        Any existing binding for the identifier is replaced. If a dependency
        fails to resolve or the class fails to instantiate, the identifier keeps
        whatever binding it had before.

        Raises:
            NotFoundError: If the type cannot be located or its constructor introspected.
            ContainerError: If the type is not instantiable or a parameter cannot be injected.
        """
        key = to_identifier(identifier)
        with self._lock, self._resolving_key(key):
            return self._autowire(identifier, key)

    def resolve_dependencies(self, identifier: Any, parameters: list[Parameter]) -> list[Any]:
        """Resolve constructor parameters to instances, in order.

        Only parameters annotated with a single non-builtin class can be
        injected; each is looked up with :meth:`get`.

        Args:
            identifier: The identifier whose constructor is being resolved, used in errors.
            parameters: Descriptors as produced by ``constructor_parameters``.

        Returns:
            The resolved instances, positionally matching ``parameters``.

        Raises:
            ContainerError: If a parameter is untyped, a union, or of a type that
                cannot be injected.
        """
        key = to_identifier(identifier)
        dependencies = []
        with self._lock:
            for parameter in parameters:
                if parameter.kind is ParameterKind.CLASS:
                    dependencies.append(self.get(parameter.annotation))
                elif parameter.kind is ParameterKind.UNTYPED:
                    raise ContainerError(
                        f"Parameter '{parameter.name}' of {key} has no type annotation"
                    )
                elif parameter.kind is ParameterKind.UNION:
                    raise ContainerError(
                        f"Parameter '{parameter.name}' of {key} has union type "
                        f"{parameter.annotation}, which is not supported"
                    )
                else:
                    raise ContainerError(
                        f"Parameter '{parameter.name}' of {key} has type "
                        f"{parameter.annotation!r}, which cannot be injected - "
                        "bind a factory for it instead"
                    )
        return dependencies

    def provides(self, identifier: Any = None) -> Callable:
        """Decorator to bind a function or class.

        A decorated function becomes a factory for ``identifier``, or for its
        annotated return type if no identifier is given. A decorated class
        becomes the alias target of ``identifier``, which is then required.

        Example:
            @container.provides()
            def make_settings() -> Settings:
                return Settings.from_env()
        """
        def decorator(obj):
            key = identifier
            if key is None:
                key = _inferred_identifier(obj)
            self.set(key, obj)
            return obj

        return decorator

    def __getitem__(self, identifier: Any) -> Any:
        return self.get(identifier)

    def __contains__(self, identifier: Any) -> bool:
        return self.has(identifier)

    def _lookup(self, target: Any, key: str) -> Any:
        binding = self._bindings.get(key)
        if binding is None:
            return self._autowire(target, key)
        if isinstance(binding, Factory):
            return binding.func()
        return self.get(binding.target)

    def _autowire(self, target: Any, key: str) -> Any:
        cls = target if inspect.isclass(target) else locate(key)
        if not is_instantiable(cls):
            raise ContainerError(f"{key} is not instantiable")

        parameters = constructor_parameters(cls)
        dependencies = self.resolve_dependencies(key, parameters)

        previous = self._bindings.get(key)
        self.set(key, _make_factory(cls, dependencies))
        try:
            instance = self._lookup(cls, key)
        except Exception:
            # Only a class that instantiated once stays bound.
            if previous is None:
                del self._bindings[key]
            else:
                self._bindings[key] = previous
            raise

        logger.debug("Auto-wired %s with %d dependencies", key, len(dependencies))
        return instance

    @contextmanager
    def _resolving_key(self, key: str) -> Iterator[None]:
        """Track ``key`` as in progress, failing if it already is."""
        if key in self._resolving:
            chain = self._resolving[self._resolving.index(key):] + [key]
            raise CircularDependencyError(chain)

        self._resolving.append(key)
        try:
            yield
        finally:
            self._resolving.pop()


def _make_factory(cls: type, dependencies: list[Any]) -> Callable[[], Any]:
    if is_singleton(cls):
        return lambda: cls.instance(*dependencies)
    return lambda: cls(*dependencies)


def _inferred_identifier(obj: Any) -> Any:
    """Identifier a decorated provider is bound to when none is given.

    Raises:
        ContainerError: If ``obj`` is a class, or a function without a class return annotation.
    """
    if inspect.isfunction(obj):
        return_type = get_type_hints(obj).get("return")
        if inspect.isclass(return_type):
            return return_type
    raise ContainerError(
        f"{obj!r} needs an explicit identifier or an annotated class return type"
    )
