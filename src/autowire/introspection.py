"""Type location and constructor introspection for auto-wiring.

Identifiers are fully-qualified type names such as ``"app.services.Mailer"``.
This module turns such an identifier back into the object it names, decides
whether that object can be constructed, and describes the constructor's
parameters so the container can decide what to inject.
"""

import importlib
import inspect
import types
from typing import Any, Callable, Optional, Union, get_origin, get_type_hints

from autowire.domain import Parameter, ParameterKind
from autowire.errors import ContainerError, NotFoundError

__all__ = [
    "identifier_of",
    "to_identifier",
    "locate",
    "is_instantiable",
    "constructor_parameters",
]


def identifier_of(cls: type) -> str:
    """Return the fully-qualified identifier for a class.

    Example:
        >>> identifier_of(collections.OrderedDict)
        'collections.OrderedDict'
    """
    return f"{cls.__module__}.{cls.__qualname__}"


def to_identifier(key: Any) -> str:
    """Normalise a lookup key, which may be a string or a class, to a string identifier.

    Raises:
        ContainerError: If the key is neither.
    """
    if isinstance(key, str):
        return key
    if inspect.isclass(key):
        return identifier_of(key)
    raise ContainerError(f"{key!r} is not a valid identifier")


def locate(identifier: str) -> Any:
    """Find the object named by a dotted identifier.

    The longest importable module prefix is imported and the remaining parts
    are looked up as attributes, so nested classes (``"pkg.mod.Outer.Inner"``)
    can be located.

    Args:
        identifier: Dotted path of the object to find.

    Returns:
        The located object.

    Raises:
        NotFoundError: If no module prefix can be imported or an attribute is missing.
            The underlying ImportError or AttributeError is chained.
    """
    parts = identifier.split(".")
    if not all(parts):
        raise NotFoundError(f"Cannot locate {identifier!r}: malformed identifier")

    last_error = None
    for split in range(len(parts), 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if not _is_missing_module(e, module_name):
                raise NotFoundError(f"Cannot locate {identifier!r}: {e}") from e
            last_error = e
            continue
        except ImportError as e:
            raise NotFoundError(f"Cannot locate {identifier!r}: {e}") from e

        return _walk_attributes(identifier, target, parts[split:])

    raise NotFoundError(f"Cannot locate {identifier!r}: no importable module") from last_error


def _is_missing_module(error: ModuleNotFoundError, module_name: str) -> bool:
    """True if the error is about the module being tried, not something it imports."""
    return error.name is None or module_name == error.name or module_name.startswith(error.name + ".")


def _walk_attributes(identifier: str, target: Any, attributes: list[str]) -> Any:
    for attribute in attributes:
        try:
            target = getattr(target, attribute)
        except AttributeError as e:
            raise NotFoundError(f"Cannot locate {identifier!r}: {e}") from e
    return target


def is_instantiable(target: Any) -> bool:
    """Report whether ``target`` is a concrete class that can be constructed.

    Abstract base classes with unimplemented abstract methods and
    ``typing.Protocol`` definitions are not instantiable, nor is anything that
    is not a class.
    """
    return (
        inspect.isclass(target)
        and not inspect.isabstract(target)
        and not getattr(target, "_is_protocol", False)
    )


def constructor_parameters(cls: type) -> list[Parameter]:
    """Describe the parameters of a class's constructor, excluding ``self``.

    Classes whose constructor is inherited from ``object`` or a builtin type
    have no parameters. Without a Python ``__init__``, a Python ``__new__`` is
    used instead, as generated for ``typing.NamedTuple``.

    Args:
        cls: The class to analyse.

    Returns:
        One :class:`Parameter` per constructor parameter, in declaration order.

    Raises:
        NotFoundError: If the constructor's signature or annotations cannot be read.

    Example:
        >>> class Service:
        ...     def __init__(self, db: Database, name: str, untyped): ...
        >>> constructor_parameters(Service)
        >>> # [Parameter("db", Database, ParameterKind.CLASS),
        >>> #  Parameter("name", str, ParameterKind.PRIMITIVE),
        >>> #  Parameter("untyped", None, ParameterKind.UNTYPED)]
    """
    constructor = _python_constructor(cls)
    if constructor is None and _inherits_builtin_constructor(cls):
        return []

    try:
        if constructor is None:
            # Extension type: rely on its text signature, which carries no annotations.
            declared = list(inspect.signature(cls).parameters.values())
            hints = {}
        else:
            # Drop the bound instance or class parameter.
            declared = list(inspect.signature(constructor).parameters.values())[1:]
            hints = get_type_hints(constructor)
    except (ValueError, TypeError, NameError) as e:
        raise NotFoundError(f"Cannot introspect constructor of {identifier_of(cls)}") from e

    return [_make_parameter(parameter, hints.get(parameter.name)) for parameter in declared]


def _python_constructor(cls: type) -> Optional[Callable]:
    """The Python-level ``__init__`` or, failing that, ``__new__`` that builds instances."""
    if inspect.isfunction(cls.__init__):
        return cls.__init__
    if inspect.isfunction(cls.__new__):
        return cls.__new__
    return None


def _inherits_builtin_constructor(cls: type) -> bool:
    return all(
        _defining_class(cls, name).__module__ == "builtins" for name in ("__init__", "__new__")
    )


def _defining_class(cls: type, name: str) -> type:
    return next(klass for klass in cls.__mro__ if name in vars(klass))


def _make_parameter(parameter: inspect.Parameter, annotation: Any) -> Parameter:
    if parameter.kind in (
        inspect.Parameter.VAR_POSITIONAL,
        inspect.Parameter.VAR_KEYWORD,
        inspect.Parameter.KEYWORD_ONLY,
    ):
        return Parameter(parameter.name, annotation, ParameterKind.UNSUPPORTED)
    return Parameter(parameter.name, annotation, _classify(annotation))


def _classify(annotation: Any) -> ParameterKind:
    if annotation is None:
        return ParameterKind.UNTYPED

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return ParameterKind.UNION
    if origin is not None:
        return ParameterKind.UNSUPPORTED

    if not inspect.isclass(annotation):
        return ParameterKind.UNSUPPORTED
    if annotation.__module__ == "builtins":
        return ParameterKind.PRIMITIVE
    if annotation.__module__ == "typing":
        return ParameterKind.UNSUPPORTED
    return ParameterKind.CLASS
