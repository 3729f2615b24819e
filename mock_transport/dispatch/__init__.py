from mock_transport.dispatch.engine import CallOutcome, DispatchEngine
from mock_transport.dispatch.executors import SynchronousExecutor, submit_in_context
from mock_transport.dispatch.methods import ServiceMethod, service_methods

__all__ = [
    "CallOutcome",
    "DispatchEngine",
    "ServiceMethod",
    "SynchronousExecutor",
    "service_methods",
    "submit_in_context",
]
