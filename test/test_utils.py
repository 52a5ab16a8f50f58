import pytest

from lwsrv.qos import QoSProfile, as_qos_profile
from lwsrv.srv import AddTwoInts
from lwsrv.utils import resolve_name, resolve_service_type


@pytest.mark.parametrize(
    "name, namespace, expected",
    [
        ("add_two_ints", "", "/add_two_ints"),
        ("add_two_ints", "/robot", "/robot/add_two_ints"),
        ("add_two_ints", "robot/", "/robot/add_two_ints"),
        ("/add_two_ints", "/robot", "/add_two_ints"),
        ("~add", "/robot", "/robot/node/add"),
        ("~add", "", "/node/add"),
        ("", "/robot", "/robot"),
        ("", "", "/"),
    ],
)
def test_resolve_name(name, namespace, expected):
    assert resolve_name(name, namespace, "node") == expected


def test_resolve_service_type():
    assert resolve_service_type(AddTwoInts) == (AddTwoInts.Request, AddTwoInts.Response)
    with pytest.raises(TypeError):
        resolve_service_type(AddTwoInts.Request)


def test_qos_profile_depth():
    assert as_qos_profile(3).depth == 3
    profile = QoSProfile(depth=5)
    assert as_qos_profile(profile) is profile
    with pytest.raises(ValueError):
        QoSProfile(depth=0)
