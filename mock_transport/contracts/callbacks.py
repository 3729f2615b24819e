from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

import httpx

if TYPE_CHECKING:
    from mock_transport.core.errors import TransportError

T = TypeVar("T")


class Callback(ABC, Generic[T]):
    @abstractmethod
    def success(self, value: T, response: httpx.Response | None) -> None: ...

    @abstractmethod
    def failure(self, error: TransportError) -> None: ...
