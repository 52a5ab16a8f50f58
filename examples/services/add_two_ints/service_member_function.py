#!/usr/bin/env python3
"""AddTwoInts service. Serves /add_two_ints until Ctrl-C."""
import lwsrv
from lwsrv import ExternalShutdownException
from lwsrv.node import Node
from lwsrv.srv import AddTwoInts


class MinimalService(Node):

    def __init__(self):
        super().__init__("minimal_service")
        self.srv = self.create_service(AddTwoInts, "add_two_ints", self.add_two_ints_callback)

    def add_two_ints_callback(self, request, response):
        response.sum = request.a + request.b
        self.get_logger().info("Incoming request\na: %d b: %d" % (request.a, request.b))
        return response


def main(args=None):
    lwsrv.init(args=args)
    minimal_service = None
    try:
        minimal_service = MinimalService()
        minimal_service.get_logger().info("Ready to add two ints on %s" % minimal_service.srv.service_name)
        lwsrv.spin(minimal_service)
    except (KeyboardInterrupt, ExternalShutdownException):
        pass
    finally:
        if minimal_service is not None:
            minimal_service.destroy_node()
        lwsrv.shutdown()


if __name__ == "__main__":
    main()
