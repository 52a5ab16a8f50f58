"""Service message types.

Messages are plain slotted classes whose fields validate on assignment, so a
value that could not travel as the declared wire type is refused where it is
set rather than somewhere inside the transport.
"""

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def check_int64(name: str, value) -> int:
    # bool is an int subclass but never a valid integer field value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field '{name}' expects int, got {type(value).__name__}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"field '{name}' value {value} does not fit in int64")
    return value


class Int64:
    """Signed 64-bit integer field."""

    def __init__(self, default: int = 0):
        self.default = default

    def __set_name__(self, owner, name):
        self._name = name
        self._slot = "_" + name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return getattr(obj, self._slot)

    def __set__(self, obj, value):
        object.__setattr__(obj, self._slot, check_int64(self._name, value))


class Message:
    """Base for request/response messages; subclasses list their _fields."""

    __slots__ = ()
    _fields: tuple[str, ...] = ()

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(self._fields)
        if unknown:
            raise TypeError(
                f"{type(self).__qualname__} got unexpected field(s): {', '.join(sorted(unknown))}"
            )
        cls = type(self)
        for name in self._fields:
            setattr(self, name, kwargs.get(name, getattr(cls, name).default))

    def copy(self):
        return type(self)(**{name: getattr(self, name) for name in self._fields})

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(getattr(self, n) == getattr(other, n) for n in self._fields)

    __hash__ = None

    def __repr__(self) -> str:
        values = ", ".join(f"{n}={getattr(self, n)!r}" for n in self._fields)
        return f"{type(self).__qualname__}({values})"


class AddTwoInts:
    """int64 a, int64 b --- int64 sum"""

    class Request(Message):
        __slots__ = ("_a", "_b")
        _fields = ("a", "b")
        a = Int64()
        b = Int64()

    class Response(Message):
        __slots__ = ("_sum",)
        _fields = ("sum",)
        sum = Int64()


__all__ = ["AddTwoInts", "Int64", "Message", "check_int64", "INT64_MIN", "INT64_MAX"]
