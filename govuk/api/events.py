"""
Data notifications for GOV.UK API clients.

Clients notify subscribers of every content item and every search page as
it arrives, so callers can stream results (for example into a file) while a
large request is still running.
"""

from typing import Any, Callable, List

from ..core.logging import get_logger


logger = get_logger(__name__)

DataCallback = Callable[[Any], Any]


class DataObservers:
    """
    Observer list attached to a client.

    Callbacks are called synchronously in subscription order. A callback that
    raises is logged and skipped; it never affects the value returned to the
    caller of the client method.
    """

    def __init__(self):
        self._callbacks: List[DataCallback] = []

    def subscribe(self, callback: DataCallback) -> Callable[[], None]:
        """
        Register a callback for data notifications.

        Args:
            callback: Called with each content item or search page

        Returns:
            Function that removes the callback again
        """
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def emit(self, data: Any) -> None:
        """Notify every subscriber of `data`."""
        for callback in list(self._callbacks):
            try:
                callback(data)
            except Exception:
                logger.exception(f"Data callback {getattr(callback, '__name__', callback)!r} failed")

    def __len__(self) -> int:
        return len(self._callbacks)
