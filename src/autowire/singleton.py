"""Classes that manage their own single shared instance.

A class opts in by deriving from :class:`Singleton` and is then obtained
through :meth:`Singleton.instance` rather than by calling it directly. The
container honours this: auto-wiring a singleton type goes through
``instance`` so every lookup yields the same object.
"""

import threading
from typing import Any, ClassVar

__all__ = ["Singleton", "is_singleton"]


class Singleton:
    """Base class for types that hold one shared instance per concrete class.

    Example:
        >>> class Clock(Singleton):
        ...     pass
        >>> Clock.instance() is Clock.instance()
        True
    """

    _instances: ClassVar[dict[type, Any]] = {}
    _lock = threading.RLock()

    @classmethod
    def instance(cls, *args, **kwargs):
        """Return the shared instance, constructing it from the arguments on first use.

        Arguments passed after the instance exists are ignored.
        """
        with Singleton._lock:
            if cls not in Singleton._instances:
                Singleton._instances[cls] = cls(*args, **kwargs)
            return Singleton._instances[cls]

    @classmethod
    def reset(cls) -> None:
        """Discard the shared instance of this class, or of every class when called on Singleton."""
        with Singleton._lock:
            if cls is Singleton:
                Singleton._instances.clear()
            else:
                Singleton._instances.pop(cls, None)


def is_singleton(target: Any) -> bool:
    """Report whether a class manages its own shared instance."""
    return isinstance(target, type) and issubclass(target, Singleton)
