import threading

from .errors import DuplicateBindingError


class ServiceGraph:
    """Name -> service endpoint registry shared by every node of a context.

    Clients use it for discovery and to hand requests over to the bound
    service. Only one endpoint may hold a given name at a time.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._services = {}

    def add(self, name: str, endpoint) -> None:
        with self._lock:
            if name in self._services:
                raise DuplicateBindingError(f"Service '{name}' is already bound")
            self._services[name] = endpoint

    def remove(self, name: str, endpoint) -> bool:
        with self._lock:
            if self._services.get(name) is not endpoint:
                return False
            del self._services[name]
            return True

    def lookup(self, name: str):
        with self._lock:
            return self._services.get(name)

    def has_service(self, name: str) -> bool:
        with self._lock:
            return name in self._services

    def service_names(self) -> list[str]:
        with self._lock:
            return sorted(self._services)
