from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor
from dataclasses import dataclass, field

from mock_transport.core.errors import TransportError
from mock_transport.dispatch.executors import SynchronousExecutor

ErrorHandler = Callable[[TransportError], BaseException | None]


def default_error_handler(error: TransportError) -> BaseException:
    return error


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    error_handler: ErrorHandler = default_error_handler
    callback_executor: Executor = field(default_factory=SynchronousExecutor)
