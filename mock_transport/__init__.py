from mock_transport.client import ClientConfig, ErrorHandler, default_error_handler
from mock_transport.contracts import Callback, ErrorKind, InvocationStyle, Single
from mock_transport.core.errors import MockHttpException, TransportError
from mock_transport.dispatch.executors import SynchronousExecutor
from mock_transport.mock_client import MockClient

__all__ = [
    "Callback",
    "ClientConfig",
    "ErrorHandler",
    "ErrorKind",
    "InvocationStyle",
    "MockClient",
    "MockHttpException",
    "Single",
    "SynchronousExecutor",
    "TransportError",
    "default_error_handler",
]
