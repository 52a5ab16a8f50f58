import threading

from lwsrv import ExternalShutdownException, SingleThreadedExecutor


def add_two_ints(request, response):
    response.sum = request.a + request.b
    return response


class BackgroundExecutor:
    """Spins an executor on a daemon thread for the duration of a test."""

    def __init__(self, *nodes):
        self.executor = SingleThreadedExecutor()
        for node in nodes:
            self.executor.add_node(node)
        self.error = None
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self):
        try:
            self.executor.spin()
        except ExternalShutdownException as exc:
            self.error = exc

    def start(self):
        self._thread.start()
        return self

    def stop(self):
        self.executor.shutdown()
        self._thread.join(timeout=2.0)

    def join(self, timeout=None):
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()
