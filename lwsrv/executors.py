import time
from typing import Iterable

from .context import ok
from .errors import ExternalShutdownException

__all__ = [
    "Executor",
    "SingleThreadedExecutor",
    "ExternalShutdownException",
    "spin",
    "spin_once",
    "spin_until_future_complete",
]


class Executor:
    """Base executor compatible with rclpy's Executor surface."""

    def __init__(self):
        self._nodes = []
        self._stopped = False

    def add_node(self, node):
        if node not in self._nodes:
            self._nodes.append(node)

    def remove_node(self, node):
        if node in self._nodes:
            self._nodes.remove(node)

    def get_nodes(self):
        return list(self._nodes)

    def spin(self):
        while ok() and not self._stopped:
            self.spin_once(0.01)
        if not ok() and not self._stopped:
            raise ExternalShutdownException()

    def spin_once(self, timeout_sec: float | None = None):
        try:
            handler, _group, _node = self.wait_for_ready_callbacks(timeout_sec=timeout_sec)
        except StopIteration:
            return
        handler()

    def shutdown(self):
        self._stopped = True

    def wait_for_ready_callbacks(self, timeout_sec: float | None = None):
        item = _pop_any_callback(self._nodes, timeout_sec, lambda: self._stopped)
        if not item:
            raise StopIteration()
        cb, msg, node = item
        return (lambda: _invoke_callback(cb, msg), None, node)


class SingleThreadedExecutor(Executor):
    """Runs callbacks sequentially in the calling thread."""


def spin(node, executor: Executor | None = None):
    """Serve node's callbacks until shutdown.

    Raises ExternalShutdownException when the context is shut down from
    elsewhere; KeyboardInterrupt propagates to the caller.
    """
    if executor is None:
        executor = SingleThreadedExecutor()
        executor.add_node(node)
        try:
            executor.spin()
        finally:
            executor.remove_node(node)
            executor.shutdown()
    else:
        added = False
        if node not in executor.get_nodes():
            executor.add_node(node)
            added = True
        try:
            executor.spin()
        finally:
            if added:
                executor.remove_node(node)


def spin_once(node, timeout_sec: float | None = None):
    """Execute at most one ready callback of node."""
    executor = SingleThreadedExecutor()
    executor.add_node(node)
    executor.spin_once(timeout_sec)


def spin_until_future_complete(node, future, timeout_sec: float | None = None, *, executor: Executor | None = None):
    """Spin node until future is done.

    Returns True once the future is done, False on timeout or shutdown.
    A KeyboardInterrupt cancels the future before propagating.
    """
    start = time.monotonic()
    own_executor = executor is None
    exec_obj = executor or SingleThreadedExecutor()
    added = False
    if node not in exec_obj.get_nodes():
        exec_obj.add_node(node)
        added = True
    try:
        while ok():
            if future.done():
                return True
            if timeout_sec is not None:
                remaining = timeout_sec - (time.monotonic() - start)
                if remaining <= 0:
                    return False
                exec_obj.spin_once(min(0.01, remaining))
            else:
                exec_obj.spin_once(0.01)
        return future.done()
    except KeyboardInterrupt:
        future.cancel()
        raise
    finally:
        if added:
            exec_obj.remove_node(node)
        if own_executor:
            exec_obj.shutdown()


def _invoke_callback(cb, msg):
    return cb(msg) if msg is not None else cb()


def _pop_any_callback(nodes: Iterable, timeout_sec: float | None, stopped):
    start = time.monotonic()
    while ok() and not stopped():
        for node in list(nodes):
            item = node._pop_callback()
            if item:
                cb, msg = item
                return (cb, msg, node)
        if timeout_sec is not None and time.monotonic() - start >= max(timeout_sec, 0):
            return None
        time.sleep(0.001)
    return None
