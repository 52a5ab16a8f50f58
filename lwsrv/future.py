import asyncio
import logging
import threading
from typing import Any, Callable, Optional

from .errors import CancelledError

_logger = logging.getLogger(__name__)

PENDING = "PENDING"
FINISHED = "FINISHED"
CANCELLED = "CANCELLED"


class Future:
    """Thread-safe Future compatible with rclpy.task.Future.

    A Future leaves PENDING exactly once, either FINISHED (with a result or
    an exception) or CANCELLED. Later attempts to resolve it are ignored.
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._state = PENDING
        self._result: Any = None
        self._exception: BaseException | None = None
        self._callbacks: list[Callable[["Future"], None]] = []

    def __repr__(self) -> str:
        return f"<Future state={self._state}>"

    def done(self) -> bool:
        return self._state != PENDING

    def cancelled(self) -> bool:
        return self._state == CANCELLED

    def result(self, timeout: Optional[float] = None):
        if not self._event.wait(timeout):
            raise TimeoutError("Future result not ready")
        if self._state == CANCELLED:
            raise CancelledError()
        if self._exception is not None:
            raise self._exception
        return self._result

    def exception(self) -> BaseException | None:
        if self._state == CANCELLED:
            raise CancelledError()
        return self._exception

    def set_result(self, value) -> bool:
        return self._resolve(FINISHED, result=value)

    def set_exception(self, exc: BaseException) -> bool:
        return self._resolve(FINISHED, exception=exc)

    def cancel(self) -> bool:
        return self._resolve(CANCELLED)

    def _resolve(self, state, *, result=None, exception=None) -> bool:
        with self._lock:
            if self._state != PENDING:
                return False
            self._result = result
            self._exception = exception
            self._state = state
            callbacks = self._callbacks
            self._callbacks = []
        self._event.set()
        for cb in callbacks:
            self._invoke(cb)
        return True

    def add_done_callback(self, callback: Callable[["Future"], None]) -> None:
        with self._lock:
            if self._state == PENDING:
                self._callbacks.append(callback)
                return
        self._invoke(callback)

    def _invoke(self, callback):
        try:
            callback(self)
        except Exception:
            _logger.exception("Future done callback %r raised", callback)

    async def _await_impl(self):
        if not self.done():
            loop = asyncio.get_running_loop()
            waiter = loop.create_future()

            def _wake(_future):
                if not loop.is_closed():
                    loop.call_soon_threadsafe(_release, waiter)

            self.add_done_callback(_wake)
            try:
                await waiter
            except asyncio.CancelledError:
                # The awaiting task went away; the call must not stay pending
                self.cancel()
                raise
        return self.result(0.0)

    def __await__(self):
        return self._await_impl().__await__()


def _release(waiter):
    if not waiter.done():
        waiter.set_result(None)
