"""Explicit lifecycle for a process-wide container.

Libraries should accept a :class:`~autowire.container.Container` as an
argument. Where application code needs one container reachable from many
places, it installs it once at start-up with :func:`init_container` and tests
remove it with :func:`reset_container`. Nothing is created implicitly.
"""

import logging
import threading
from typing import Optional

from autowire.container import Container
from autowire.errors import ContainerError

__all__ = ["init_container", "shared_container", "reset_container"]

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_container: Optional[Container] = None


def init_container(container: Optional[Container] = None) -> Container:
    """Install the process-wide container.

    Args:
        container: The container to install. A new empty one is created if omitted.

    Returns:
        The installed container.

    Raises:
        ContainerError: If a container is already installed.
    """
    global _container
    with _lock:
        if _container is not None:
            raise ContainerError(
                "A shared container is already installed - call reset_container() first"
            )
        _container = container if container is not None else Container()
        logger.debug("Installed shared container")
        return _container


def shared_container() -> Container:
    """Return the installed container.

    Raises:
        ContainerError: If :func:`init_container` has not been called.
    """
    with _lock:
        if _container is None:
            raise ContainerError("No shared container installed - call init_container() first")
        return _container


def reset_container() -> None:
    """Remove the installed container, if any."""
    global _container
    with _lock:
        _container = None
