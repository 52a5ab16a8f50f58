"""Name resolution and service type helpers."""


def _normalize_namespace(ns: str) -> str:
    """Leading slash, no trailing slash (except for the root namespace)."""
    if not ns:
        return "/"
    ns = "/" + ns.strip("/")
    return ns


def _join(base: str, name: str) -> str:
    base = base.rstrip("/")
    name = name.strip("/")
    if not name:
        return base or "/"
    return f"{base}/{name}"


def resolve_name(name: str, namespace: str, node_name: str) -> str:
    """
    Resolve a service name the way ROS 2 resolves graph names:
      - absolute: /foo stays /foo
      - relative: foo -> <namespace>/foo
      - private: ~foo -> <namespace>/<node_name>/foo
    The result always starts with "/".
    """
    ns = _normalize_namespace(namespace)
    if not name:
        return ns
    if name.startswith("~"):
        return _join(_join(ns, node_name), name[1:])
    if name.startswith("/"):
        return _join("", name)
    return _join(ns, name)


def resolve_service_type(srv_type):
    """Return (request_cls, response_cls) of a service type with nested Request/Response."""
    req = getattr(srv_type, "Request", None)
    res = getattr(srv_type, "Response", None)
    if not isinstance(req, type) or not isinstance(res, type):
        raise TypeError(
            f"{getattr(srv_type, '__name__', srv_type)!r} is not a service type "
            "(expected nested Request and Response classes)"
        )
    return req, res
