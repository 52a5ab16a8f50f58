#!/usr/bin/env python3
"""AddTwoInts client awaiting the response from an asyncio coroutine.

The event loop keeps running other tasks while the service is looked up and
while the call is in flight:
    python client_async_await.py 41 1
With --no-service only the client starts and keeps waiting for discovery.
"""
import asyncio
import sys
import threading

import lwsrv
from lwsrv import ExternalShutdownException, SingleThreadedExecutor, UnavailableError
from lwsrv.srv import AddTwoInts

from client_member_function import parse_args
from service_member_function import MinimalService


async def _heartbeat(node, stop: asyncio.Event):
    while not stop.is_set():
        node.get_logger().debug("event loop alive")
        await asyncio.sleep(0.05)


async def run(a: int, b: int, timeout_sec=None):
    node = lwsrv.create_node("minimal_client_await")
    stop = asyncio.Event()
    heartbeat = asyncio.create_task(_heartbeat(node, stop))
    try:
        cli = node.create_client(AddTwoInts, "add_two_ints")
        await cli.await_availability_async(poll_interval_sec=1.0, timeout_sec=timeout_sec)
        response = await cli.call_async(AddTwoInts.Request(a=a, b=b))
        node.get_logger().info("Result of add_two_ints: for %d + %d = %d" % (a, b, response.sum))
        return response.sum
    except UnavailableError as exc:
        node.get_logger().error(str(exc))
        return None
    finally:
        stop.set()
        await heartbeat
        node.destroy_node()


def main(argv=None):
    a, b, no_service = parse_args(sys.argv[1:] if argv is None else argv)

    lwsrv.init()
    executor = SingleThreadedExecutor()
    worker = None
    service_node = None

    def serve():
        try:
            executor.spin()
        except ExternalShutdownException:
            pass

    try:
        if not no_service:
            service_node = MinimalService()
            executor.add_node(service_node)
            worker = threading.Thread(target=serve, daemon=True)
            worker.start()
        asyncio.run(run(a, b, timeout_sec=None if no_service else 5.0))
    except (KeyboardInterrupt, ExternalShutdownException):
        pass
    finally:
        executor.shutdown()
        if worker is not None:
            worker.join(timeout=1.0)
        if service_node is not None:
            service_node.destroy_node()
        lwsrv.shutdown()


if __name__ == "__main__":
    main()
