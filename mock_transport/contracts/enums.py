from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NETWORK = "network"
    HTTP = "http"
    UNEXPECTED = "unexpected"


class InvocationStyle(str, Enum):
    SYNCHRONOUS = "synchronous"
    CALLBACK = "callback"
    STREAM = "stream"


class CallState(str, Enum):
    PENDING = "pending"
    DELAY_ELAPSED = "delay_elapsed"
    INVOKING = "invoking"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    DELIVERED = "delivered"
