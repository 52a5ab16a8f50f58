import collections
import threading
from typing import Callable, NamedTuple

from .context import get_graph, track_entity, untrack_entity
from .errors import RequestRejectedError, ServiceCallError, UnavailableError
from .qos import QoSProfile
from .utils import resolve_service_type


class ServiceRequest(NamedTuple):
    """A request in flight, together with the route back to its client."""

    sequence: int
    request: object
    reply: Callable[..., None]


class Service:
    """rclpy-like Service: one callback invocation per request, in arrival order.

    Incoming requests are held in a bounded per-service queue and the node's
    executor runs them one at a time.
    """

    def __init__(self, node, srv_type, service_name: str, callback, qos_profile: QoSProfile):
        self._node = node
        self._logger = node.get_logger()
        self._service_name = service_name
        self._callback = callback
        self._request_cls, self._response_cls = resolve_service_type(srv_type)
        self._depth = qos_profile.depth
        self._lock = threading.Lock()
        self._requests: collections.deque[ServiceRequest] = collections.deque()
        self._destroyed = False

        self._graph = get_graph()
        self._graph.add(service_name, self)
        track_entity(self)

    @property
    def service_name(self) -> str:
        return self._service_name

    def queued_requests(self) -> int:
        with self._lock:
            return len(self._requests)

    def _receive(self, envelope: ServiceRequest) -> None:
        """Accept a request from a client; never blocks the caller."""
        with self._lock:
            if self._destroyed:
                error = UnavailableError(f"Service '{self._service_name}' is shutting down")
            elif len(self._requests) >= self._depth:
                error = RequestRejectedError(
                    f"Service '{self._service_name}' request queue is full (depth={self._depth})"
                )
            else:
                self._requests.append(envelope)
                error = None
        if error is not None:
            envelope.reply(envelope.sequence, error=error)
            return
        self._node._enqueue_callback(self._execute_next, None)

    def _execute_next(self) -> None:
        with self._lock:
            if not self._requests:
                return
            envelope = self._requests.popleft()

        response = self._response_cls()
        try:
            ret = self._callback(envelope.request, response)
            if ret is not None:
                response = ret
            if not isinstance(response, self._response_cls):
                raise TypeError(
                    f"service callback returned {type(response).__name__}, "
                    f"expected {self._response_cls.__qualname__}"
                )
        except Exception as exc:
            self._logger.error(
                "Service '%s' failed to handle request %d: %s", self._service_name, envelope.sequence, exc
            )
            failure = ServiceCallError(f"Service '{self._service_name}' failed: {exc}")
            failure.__cause__ = exc
            envelope.reply(envelope.sequence, error=failure)
            return
        envelope.reply(envelope.sequence, response=response.copy())

    def destroy(self) -> None:
        """Unbind the name and answer every request that will no longer be served."""
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
            orphaned = list(self._requests)
            self._requests.clear()
        untrack_entity(self)
        self._graph.remove(self._service_name, self)
        for envelope in orphaned:
            envelope.reply(
                envelope.sequence,
                error=UnavailableError(f"Service '{self._service_name}' was destroyed"),
            )
