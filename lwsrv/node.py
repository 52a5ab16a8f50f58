import logging
import queue

from .client import Client
from .context import get_graph, get_log_level
from .errors import DuplicateBindingError
from .qos import QoSProfile, as_qos_profile
from .service import Service
from .utils import resolve_name


class _NodeLogger:
    """Minimal rclpy get_logger() equivalent backed by Python logging."""

    _configured = False

    def __init__(self, name: str):
        if not _NodeLogger._configured and not logging.getLogger().handlers:
            logging.basicConfig(
                level=get_log_level(),
                format="[%(levelname)s] %(name)s: %(message)s",
            )
            _NodeLogger._configured = True
        self._logger = logging.getLogger(name)
        # level of the context this node was created in
        self._logger.setLevel(get_log_level())

    @property
    def name(self) -> str:
        return self._logger.name

    def set_level(self, level) -> None:
        self._logger.setLevel(level)

    def get_effective_level(self) -> int:
        return self._logger.getEffectiveLevel()

    def debug(self, msg, *args, **kwargs):
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def warn(self, msg, *args, **kwargs):
        self._logger.warning(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs):
        self._logger.exception(msg, *args, **kwargs)

    def fatal(self, msg, *args, **kwargs):
        self._logger.critical(msg, *args, **kwargs)


class Node:
    def __init__(self, name: str, namespace: str = ""):
        if not name or "/" in name or name.startswith("~"):
            raise ValueError(f"Invalid node name '{name}'")
        self._name = name
        self._namespace = namespace if namespace.startswith("/") or namespace == "" else "/" + namespace
        self._graph = get_graph()
        self._logger = _NodeLogger(self.get_fully_qualified_name().lstrip("/").replace("/", "."))
        self._services: dict[str, Service] = {}
        self._clients: list[Client] = []
        self._callback_queue: queue.Queue = queue.Queue()

    # ------------------- Logger / Namespace -------------------
    def get_logger(self) -> _NodeLogger:
        return self._logger

    def get_name(self) -> str:
        return self._name

    def get_namespace(self) -> str:
        return self._namespace if self._namespace else "/"

    def get_fully_qualified_name(self) -> str:
        ns = self.get_namespace().rstrip("/")
        return f"{ns}/{self._name}"

    def resolve_service_name(self, srv_name: str) -> str:
        return resolve_name(srv_name, self._namespace, self._name)

    def service_names(self) -> list[str]:
        """Services currently visible in the graph, not only this node's."""
        return self._graph.service_names()

    # ------------------- Services / Clients -------------------
    def create_service(self, srv_type, srv_name: str, callback, qos_profile: QoSProfile | int = 10) -> Service:
        resolved = self.resolve_service_name(srv_name)
        if resolved in self._services:
            raise DuplicateBindingError(f"Node '{self._name}' already provides service '{resolved}'")
        srv = Service(self, srv_type, resolved, callback, as_qos_profile(qos_profile))
        self._services[resolved] = srv
        return srv

    def create_client(self, srv_type, srv_name: str, qos_profile: QoSProfile | int = 10) -> Client:
        resolved = self.resolve_service_name(srv_name)
        cli = Client(self, srv_type, resolved, as_qos_profile(qos_profile))
        self._clients.append(cli)
        return cli

    def destroy_service(self, srv: Service) -> None:
        try:
            srv.destroy()
        finally:
            if self._services.get(srv.service_name) is srv:
                del self._services[srv.service_name]

    def destroy_client(self, cli: Client) -> None:
        try:
            cli.destroy()
        finally:
            if cli in self._clients:
                self._clients.remove(cli)

    def destroy_node(self) -> None:
        for cli in list(self._clients):
            self.destroy_client(cli)
        for srv in list(self._services.values()):
            self.destroy_service(srv)

    # ---- executor enqueue/dequeue -----------------------------------
    def _enqueue_callback(self, cb, msg) -> None:
        self._callback_queue.put((cb, msg))

    def _pop_callback(self):
        try:
            return self._callback_queue.get_nowait()
        except queue.Empty:
            return None


def create_node(name: str, **kwargs) -> Node:
    return Node(name, **kwargs)
