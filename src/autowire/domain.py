"""Domain models used throughout the container."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

__all__ = ["Factory", "Alias", "Binding", "ParameterKind", "Parameter"]


@dataclass(frozen=True)
class Factory:
    """A binding resolved by calling a zero-argument function."""

    func: Callable[[], Any]


@dataclass(frozen=True)
class Alias:
    """A binding that forwards resolution to another identifier."""

    target: Any


Binding = Union[Factory, Alias]


class ParameterKind(Enum):
    """Classification of a constructor parameter's declared type."""

    UNTYPED = "untyped"
    UNION = "union"
    CLASS = "class"
    PRIMITIVE = "primitive"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Parameter:
    """Describes one constructor parameter.

    Attributes:
        name: The parameter name in the constructor's signature.
        annotation: The declared type, with string annotations evaluated, or None.
        kind: How the declared type was classified for injection.
    """

    name: str
    annotation: Any
    kind: ParameterKind
