import asyncio
import itertools
import threading
import time
from typing import Optional

from .context import get_graph, get_poll_interval, ok, track_entity, untrack_entity
from .errors import ExternalShutdownException, UnavailableError
from .future import Future
from .qos import QoSProfile
from .service import ServiceRequest
from .utils import resolve_service_type


class Client:
    """rclpy-like Client.

    Every request gets a sequence number; a response is only ever delivered
    to the Future that was created for the same sequence number.
    """

    # cancel pending calls before the services they wait on go away
    _shutdown_order = 0

    def __init__(self, node, srv_type, service_name: str, qos_profile: QoSProfile):
        self._node = node
        self._logger = node.get_logger()
        self._service_name = service_name
        self._qos_profile = qos_profile
        self._request_cls, self._response_cls = resolve_service_type(srv_type)
        self._graph = get_graph()
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._pending: dict[int, Future] = {}
        self._destroyed = False

        track_entity(self)

    @property
    def service_name(self) -> str:
        return self._service_name

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    # ------------------- discovery -------------------
    def service_is_ready(self) -> bool:
        """Non-blocking check for a bound service under this client's name."""
        return not self._destroyed and self._graph.has_service(self._service_name)

    def wait_for_service(self, timeout_sec: Optional[float] = None) -> bool:
        """Poll until the service is ready; False on timeout or context shutdown."""
        interval = get_poll_interval()
        deadline = None if timeout_sec is None else time.monotonic() + max(timeout_sec, 0.0)
        while ok():
            if self.service_is_ready():
                return True
            if deadline is None:
                time.sleep(interval)
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(interval, remaining))
        return False

    def await_availability(self, poll_interval_sec: float = 1.0, timeout_sec: Optional[float] = None) -> None:
        """Block until the service is reachable.

        Waits in slices of poll_interval_sec, logging each miss. Raises
        UnavailableError once timeout_sec has elapsed (timeout_sec=0 checks
        exactly once) and ExternalShutdownException if the context goes away.
        """
        if poll_interval_sec <= 0:
            raise ValueError("poll_interval_sec must be > 0")
        deadline = None if timeout_sec is None else time.monotonic() + max(timeout_sec, 0.0)
        while True:
            wait = poll_interval_sec
            if deadline is not None:
                wait = min(wait, max(0.0, deadline - time.monotonic()))
            if self.wait_for_service(timeout_sec=wait):
                return
            if not ok():
                raise ExternalShutdownException(
                    f"Context shut down while waiting for service '{self._service_name}'"
                )
            if deadline is not None and time.monotonic() >= deadline:
                raise UnavailableError(
                    f"Service '{self._service_name}' not available after {timeout_sec}s"
                )
            self._logger.info("service not available, waiting again...")

    async def await_availability_async(self, poll_interval_sec: float = 1.0, timeout_sec: Optional[float] = None) -> None:
        """Coroutine form of await_availability.

        Sleeps on the event loop between readiness checks, so other tasks keep
        running while the service is looked up.
        """
        if poll_interval_sec <= 0:
            raise ValueError("poll_interval_sec must be > 0")
        loop = asyncio.get_running_loop()
        interval = get_poll_interval()
        start = loop.time()
        deadline = None if timeout_sec is None else start + max(timeout_sec, 0.0)
        next_report = start + poll_interval_sec
        while True:
            if self.service_is_ready():
                return
            if not ok():
                raise ExternalShutdownException(
                    f"Context shut down while waiting for service '{self._service_name}'"
                )
            now = loop.time()
            if deadline is not None and now >= deadline:
                raise UnavailableError(
                    f"Service '{self._service_name}' not available after {timeout_sec}s"
                )
            if now >= next_report:
                self._logger.info("service not available, waiting again...")
                next_report = now + poll_interval_sec
            delay = interval if deadline is None else min(interval, deadline - now)
            await asyncio.sleep(delay)

    # ------------------- calls -------------------
    def call_async(self, request) -> Future:
        """Send request asynchronously, returning a Future resolved with the response."""
        if not isinstance(request, self._request_cls):
            raise TypeError(
                f"request must be {self._request_cls.__qualname__}, got {type(request).__name__}"
            )
        future = Future()
        with self._lock:
            if self._destroyed:
                raise RuntimeError(f"Client for '{self._service_name}' has been destroyed")
            sequence = next(self._sequence)
            self._pending[sequence] = future
        future.add_done_callback(lambda f: self._forget(sequence, f))

        endpoint = self._graph.lookup(self._service_name)
        if endpoint is None:
            future.set_exception(UnavailableError(f"Service '{self._service_name}' is not available"))
            return future
        # The service works on a snapshot; later edits to request do not leak into it
        endpoint._receive(ServiceRequest(sequence, request.copy(), self._on_response))
        return future

    def call(self, request, timeout_sec: Optional[float] = None):
        """Send request and block for its response.

        Returns None if timeout_sec elapses first; the call is cancelled in
        that case. Must not be used from a callback of the executor that
        serves the same service.
        """
        future = self.call_async(request)
        try:
            return future.result(timeout_sec)
        except TimeoutError:
            if not future.cancel():
                return future.result(0.0)
            return None
        except KeyboardInterrupt:
            future.cancel()
            raise

    def _on_response(self, sequence: int, response=None, error: BaseException | None = None) -> None:
        with self._lock:
            future = self._pending.pop(sequence, None)
        if future is None:
            self._logger.debug(
                "Dropping response for request %d on '%s' (no longer pending)", sequence, self._service_name
            )
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(response)

    def _forget(self, sequence: int, future: Future) -> None:
        with self._lock:
            if self._pending.get(sequence) is future:
                del self._pending[sequence]

    def destroy(self) -> None:
        """Cancel every pending call and stop accepting new ones."""
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
            pending = list(self._pending.values())
            self._pending.clear()
        untrack_entity(self)
        for future in pending:
            future.cancel()
