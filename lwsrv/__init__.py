from .context import init, ok, shutdown, is_shutdown, get_graph
from .errors import (
    CancelledError,
    DuplicateBindingError,
    ExternalShutdownException,
    RequestRejectedError,
    ServiceCallError,
    UnavailableError,
)
from .executors import (
    Executor,
    SingleThreadedExecutor,
    spin,
    spin_once,
    spin_until_future_complete,
)
from .future import Future
from .node import Node, create_node
from .qos import QoSProfile
from .client import Client
from .service import Service

__all__ = [
    "init", "shutdown", "ok", "is_shutdown", "get_graph",
    "spin", "spin_once", "spin_until_future_complete",
    "Executor", "SingleThreadedExecutor", "ExternalShutdownException",
    "Node", "create_node", "QoSProfile", "Client", "Service", "Future",
    "CancelledError", "DuplicateBindingError", "RequestRejectedError",
    "ServiceCallError", "UnavailableError",
]
