# client/hooddeals/core/cancellation.py

import threading
from typing import Callable, List

from hooddeals.core.errors import RequestCancelled
from hooddeals.core.logger import get_logger

log = get_logger("cancellation")


class CancelToken:
    """
    Cancellation handle owned by a screen.

    Callbacks registered with on_cancel() run once, on the thread that calls
    cancel(). Registering on an already cancelled token runs the callback
    immediately.
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        for cb in callbacks:
            try:
                cb()
            except Exception as e:
                log.warning("cancel callback failed: %s", e)

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Returns a function that unregisters the callback."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._discard(callback)
        callback()
        return lambda: None

    def _discard(self, callback: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled()
