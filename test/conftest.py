"""
Shared fixtures

Each test gets a fresh lwsrv context; anything left running is torn down by
lwsrv.shutdown() so tests cannot leak services into each other.
"""

import pytest

import lwsrv
from lwsrv.srv import AddTwoInts

from helpers import BackgroundExecutor, add_two_ints


@pytest.fixture
def context():
    lwsrv.init()
    yield
    lwsrv.shutdown()


@pytest.fixture
def adder(context):
    """A node serving /add_two_ints, spinning in the background."""
    node = lwsrv.create_node("adder")
    node.create_service(AddTwoInts, "add_two_ints", add_two_ints, qos_profile=64)
    runner = BackgroundExecutor(node).start()
    yield node
    runner.stop()
    node.destroy_node()
