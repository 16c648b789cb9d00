"""Thread-safe holder for a shared Container.

Containers are immutable values; when several producers feed the same
subject, something must serialize the swaps of the "current" container.
ContainerHolder is that single writer: every update runs under one lock.
"""

import logging
import threading
from typing import Any, Callable, Optional

from seriescache.core import Container, merge, purge, put

logger = logging.getLogger(__name__)


class ContainerHolder:
    """Single-writer cell around the current Container.

    **Thread Safety:**

    All updates are serialized by an internal lock. ``snapshot()`` returns
    the current immutable container, which can be read freely without the
    lock.

    **Typical Usage:**

    Shared by the producers of one subject::

        holder = ContainerHolder(Container(schema))

        # producer threads
        holder.put("latency", 12.5)

        # readers
        current = holder.snapshot()
        print(current.read("latency"))
    """

    def __init__(self, container: Container, name: str = "ContainerHolder"):
        self.name = name
        self._container = container
        self._lock = threading.Lock()
        self._updates = 0
        logger.info("%s holding series: %s", self.name, ", ".join(container.names))

    def snapshot(self) -> Container:
        """Current container."""
        with self._lock:
            return self._container

    @property
    def updates(self) -> int:
        """Number of updates applied so far."""
        with self._lock:
            return self._updates

    def update(self, fun: Callable[[Container], Container]) -> Container:
        """Replace the current container with ``fun(current)``.

        ``fun`` runs under the lock; it must not call back into the holder.
        If it raises, the current container is left unchanged.
        """
        with self._lock:
            updated = fun(self._container)
            self._container = updated
            self._updates += 1
            return updated

    def put(self, name: str, value: Any, **overrides: Any) -> Container:
        """Admit ``value`` into ``name``."""
        return self.update(lambda c: put(c, name, value, **overrides))

    def purge(self, validator: Optional[Callable] = None) -> Container:
        """Re-validate all admitted values."""
        updated = self.update(lambda c: purge(c, validator))
        logger.debug("%s purged", self.name)
        return updated

    def merge(self, other: Container, resolver: Callable[[str, Any, Any], Any]) -> Container:
        """Merge ``other`` into the current container."""
        return self.update(lambda c: merge(c, other, resolver))

    def clear(self) -> Container:
        """Drop all values, keeping errors and meta."""
        return self.update(lambda c: c.clear())
