from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")

SuccessHandler = Callable[[Any], None]
ErrorHandler = Callable[[BaseException], None]


class SingleEmitter(Generic[T]):
    def __init__(self, on_success: SuccessHandler, on_error: ErrorHandler | None) -> None:
        self._on_success = on_success
        self._on_error = on_error
        self._lock = threading.Lock()
        self._terminated = False

    @property
    def terminated(self) -> bool:
        return self._terminated

    def _claim(self) -> bool:
        with self._lock:
            if self._terminated:
                return False
            self._terminated = True
            return True

    def success(self, value: T) -> None:
        if self._claim():
            self._on_success(value)

    def error(self, error: BaseException) -> None:
        if not self._claim():
            return
        if self._on_error is None:
            raise error
        self._on_error(error)


class Single(Generic[T]):
    def __init__(self, on_subscribe: Callable[[SingleEmitter[T]], None]) -> None:
        self._on_subscribe = on_subscribe
        self._lock = threading.Lock()
        self._subscribed = False

    @classmethod
    def just(cls, value: T) -> Single[T]:
        return cls(lambda emitter: emitter.success(value))

    @classmethod
    def error(cls, error: BaseException) -> Single[T]:
        return cls(lambda emitter: emitter.error(error))

    @classmethod
    def defer(cls, factory: Callable[[], T]) -> Single[T]:
        def on_subscribe(emitter: SingleEmitter[T]) -> None:
            try:
                value = factory()
            except Exception as exc:  # noqa: BLE001
                emitter.error(exc)
                return
            emitter.success(value)

        return cls(on_subscribe)

    def subscribe(
        self, on_success: SuccessHandler, on_error: ErrorHandler | None = None
    ) -> None:
        with self._lock:
            if self._subscribed:
                raise RuntimeError("Single already subscribed.")
            self._subscribed = True
        self._on_subscribe(SingleEmitter(on_success, on_error))

    def blocking_get(self, timeout: float | None = None) -> T:
        done = threading.Event()
        outcome: dict[str, Any] = {}

        def on_success(value: Any) -> None:
            outcome["value"] = value
            done.set()

        def on_error(error: BaseException) -> None:
            outcome["error"] = error
            done.set()

        self.subscribe(on_success, on_error)
        if not done.wait(timeout):
            raise TimeoutError("Single did not terminate in time.")
        if "error" in outcome:
            raise outcome["error"]
        return outcome["value"]
