import logging
import os
import threading

from .graph import ServiceGraph

__all__ = ["init", "shutdown", "ok", "is_shutdown", "get_graph", "get_poll_interval"]

_lock = threading.RLock()
_initialized = False
_shutdown = False
_graph: ServiceGraph | None = None
_tracked_entities = []  # destroyed on shutdown, lowest _shutdown_order first
_log_level = logging.INFO
_poll_interval = 0.01


def _read_env():
    global _log_level, _poll_interval
    level_name = os.environ.get("LWSRV_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    _log_level = level if isinstance(level, int) else logging.INFO
    try:
        interval = float(os.environ.get("LWSRV_POLL_INTERVAL", "0.01"))
    except ValueError:
        interval = 0.01
    _poll_interval = interval if interval > 0 else 0.01


def init(args=None):
    """Create the process-wide service graph. Calling it twice is harmless."""
    global _initialized, _shutdown, _graph
    del args  # command line remapping is not supported
    with _lock:
        if _initialized:
            return
        _read_env()
        _graph = ServiceGraph()
        _initialized = True
        _shutdown = False


def shutdown():
    """Shutdown the context.

    Every tracked client cancels its pending calls and every tracked service
    is unbound, so nothing is left waiting on a response that cannot arrive.
    """
    global _initialized, _shutdown, _graph
    with _lock:
        if not _initialized or _shutdown:
            return
        # Mark first so that spinning executors and pollers bail out
        _shutdown = True
        entities = sorted(_tracked_entities, key=lambda e: getattr(e, "_shutdown_order", 1))
        _tracked_entities.clear()

    for entity in entities:
        entity.destroy()

    with _lock:
        _graph = None
        _initialized = False


def ok() -> bool:
    return _initialized and not _shutdown


def is_shutdown() -> bool:
    """Return True if context is shutting down or has shutdown."""
    return _shutdown


def get_graph() -> ServiceGraph:
    graph = _graph
    if not _initialized or graph is None:
        raise RuntimeError("lwsrv.init() must be called first")
    return graph


def get_log_level() -> int:
    return _log_level


def get_poll_interval() -> float:
    return _poll_interval


def track_entity(entity):
    """Track an entity so that shutdown() can destroy it."""
    with _lock:
        if entity not in _tracked_entities:
            _tracked_entities.append(entity)


def untrack_entity(entity):
    """Remove an entity from tracking (when manually destroyed)."""
    with _lock:
        try:
            _tracked_entities.remove(entity)
        except ValueError:
            pass
