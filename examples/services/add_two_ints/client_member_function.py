#!/usr/bin/env python3
"""AddTwoInts client.

The service runs on a background executor in the same process:
    python client_member_function.py 41 1
With --no-service only the client starts and keeps waiting for discovery.
"""
import sys
import threading

import lwsrv
from lwsrv import ExternalShutdownException, SingleThreadedExecutor
from lwsrv.node import Node
from lwsrv.srv import AddTwoInts

from service_member_function import MinimalService


class MinimalClientAsync(Node):

    def __init__(self):
        super().__init__("minimal_client_async")
        self.cli = self.create_client(AddTwoInts, "add_two_ints")
        while not self.cli.wait_for_service(timeout_sec=1.0):
            self.get_logger().info("service not available, waiting again...")
        self.req = AddTwoInts.Request()

    def send_request(self, a, b):
        self.req.a = a
        self.req.b = b
        return self.cli.call_async(self.req)


def _serve(executor):
    try:
        executor.spin()
    except ExternalShutdownException:
        pass


def parse_args(argv):
    no_service = "--no-service" in argv
    argv = [arg for arg in argv if arg != "--no-service"]
    a, b = (int(argv[0]), int(argv[1])) if len(argv) >= 2 else (41, 1)
    return a, b, no_service


def main(argv=None):
    a, b, no_service = parse_args(sys.argv[1:] if argv is None else argv)

    lwsrv.init()
    executor = SingleThreadedExecutor()
    worker = None
    service_node = None
    minimal_client = None
    try:
        if not no_service:
            service_node = MinimalService()
            executor.add_node(service_node)
            worker = threading.Thread(target=_serve, args=(executor,), daemon=True)
            worker.start()

        minimal_client = MinimalClientAsync()
        future = minimal_client.send_request(a, b)
        lwsrv.spin_until_future_complete(minimal_client, future)
        response = future.result()
        minimal_client.get_logger().info(
            "Result of add_two_ints: for %d + %d = %d" % (a, b, response.sum))
    except (KeyboardInterrupt, ExternalShutdownException):
        pass
    finally:
        executor.shutdown()
        if worker is not None:
            worker.join(timeout=1.0)
        if minimal_client is not None:
            minimal_client.destroy_node()
        if service_node is not None:
            service_node.destroy_node()
        lwsrv.shutdown()


if __name__ == "__main__":
    main()
