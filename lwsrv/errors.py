from asyncio import CancelledError

__all__ = [
    "CancelledError",
    "DuplicateBindingError",
    "ExternalShutdownException",
    "RequestRejectedError",
    "ServiceCallError",
    "UnavailableError",
]


class DuplicateBindingError(RuntimeError):
    """A service with the same name is already bound."""


class UnavailableError(TimeoutError):
    """No service is reachable under the requested name."""


class ServiceCallError(RuntimeError):
    """The service received the request but could not produce a response."""


class RequestRejectedError(ServiceCallError):
    """The service request queue was full."""


class ExternalShutdownException(RuntimeError):
    """Raised when spin exits because the context was shutdown externally."""
