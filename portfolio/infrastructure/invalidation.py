"""Process-wide view invalidation signal.

Mutations announce which view paths have a stale render. The signal is
advisory: there is no acknowledgement, no persistence, and no ordering
between concurrent signals. Views either subscribe for a callback or
compare the version they rendered against ``version(path)``.
"""
from contextlib import asynccontextmanager
from typing import Callable, Optional
import logging
import threading

logger = logging.getLogger(__name__)

Subscriber = Callable[[str], None]


class ViewInvalidator:
    """Registry of stale view paths and their subscribers."""

    def __init__(self):
        self._versions: dict[str, int] = {}
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback(path)``; returns a function that unsubscribes it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def invalidate(self, path: str) -> None:
        """Mark ``path`` stale and notify subscribers.

        Subscriber failures are logged and never reach the caller.
        """
        with self._lock:
            self._versions[path] = self._versions.get(path, 0) + 1
            subscribers = list(self._subscribers)

        logger.debug("Invalidated view %s", path)
        for callback in subscribers:
            try:
                callback(path)
            except Exception:
                logger.exception("View invalidation subscriber failed for %s", path)

    def version(self, path: str) -> int:
        """Number of times ``path`` has been invalidated."""
        with self._lock:
            return self._versions.get(path, 0)

    def is_stale(self, path: str, rendered_version: int) -> bool:
        return self.version(path) != rendered_version


@asynccontextmanager
async def invalidates(invalidator: ViewInvalidator, *paths: str):
    """Invalidate ``paths`` when the block exits, whether it raised or not."""
    try:
        yield
    finally:
        for path in paths:
            invalidator.invalidate(path)


# Singleton instance
_invalidator: Optional[ViewInvalidator] = None


def get_invalidator() -> ViewInvalidator:
    """Get the process-wide invalidator."""
    global _invalidator
    if _invalidator is None:
        _invalidator = ViewInvalidator()
    return _invalidator


def reset_invalidator() -> None:
    """Reset invalidator singleton (useful for testing)."""
    global _invalidator
    _invalidator = None
