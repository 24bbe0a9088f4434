"""Side channel for Firestore permission errors.

Permission failures are answered to API callers with a generic message;
the full context (document path, operation, upstream detail) goes to the
listeners registered here. The default listener logs at ERROR.
"""

import logging
from collections.abc import Callable

from app.infrastructure.exceptions import StorePermissionError

logger = logging.getLogger(__name__)

Listener = Callable[[StorePermissionError], None]


class StoreErrorEmitter:
    """Fan-out of StorePermissionError to registered listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def on(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def off(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, error: StorePermissionError) -> None:
        for listener in list(self._listeners):
            try:
                listener(error)
            except Exception:
                logger.exception("Store error listener %r failed", listener)


def log_permission_error(error: StorePermissionError) -> None:
    logger.error(
        "Firestore permission denied: operation=%s path=%s detail=%s",
        error.operation,
        error.path,
        error.detail,
    )


store_error_emitter = StoreErrorEmitter()
store_error_emitter.on(log_permission_error)
