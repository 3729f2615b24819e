from mock_transport.contracts.callbacks import Callback
from mock_transport.contracts.enums import CallState, ErrorKind, InvocationStyle
from mock_transport.contracts.single import Single, SingleEmitter

__all__ = [
    "CallState",
    "Callback",
    "ErrorKind",
    "InvocationStyle",
    "Single",
    "SingleEmitter",
]
