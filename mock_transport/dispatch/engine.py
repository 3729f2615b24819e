from __future__ import annotations

import contextvars
import threading
import time
from collections.abc import Callable
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from opentelemetry import trace

from mock_transport.contracts.callbacks import Callback
from mock_transport.contracts.enums import CallState, InvocationStyle
from mock_transport.contracts.single import Single, SingleEmitter
from mock_transport.core.errors import TransportError
from mock_transport.core.metrics import calls_total, failures_total, simulated_delay_ms
from mock_transport.dispatch.executors import submit_in_context
from mock_transport.dispatch.methods import ServiceMethod, service_methods
from mock_transport.logging import (
    CALL_ID,
    DELAY_MS,
    ERROR_TYPE,
    METHOD,
    STATE,
    STYLE,
    get_logger,
    update_correlation_context,
)
from mock_transport.simulation.model import SimulationModel
from mock_transport.translation.translator import ErrorTranslator
from mock_transport.utils.ids import new_call_id

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CallOutcome:
    value: Any = None
    response: httpx.Response | None = None
    error: BaseException | None = None


class CollectingCallback(Callback[Any]):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outcome: CallOutcome | None = None
        self._listener: Callable[[CallOutcome], None] | None = None
        self._closed = False

    def _record(self, outcome: CallOutcome) -> None:
        with self._lock:
            if self._closed or self._outcome is not None:
                return
            self._outcome = outcome
            listener = self._listener
        if listener is not None:
            listener(outcome)

    def on_complete(self, listener: Callable[[CallOutcome], None]) -> None:
        with self._lock:
            if self._closed:
                return
            self._listener = listener
            outcome = self._outcome
        if outcome is not None:
            listener(outcome)

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def success(self, value: Any, response: httpx.Response | None) -> None:
        self._record(CallOutcome(value=value, response=response))

    def failure(self, error: TransportError) -> None:
        self._record(CallOutcome(error=error))


def _success_response() -> httpx.Response:
    return httpx.Response(200)


def _log_state(state: CallState, **fields: Any) -> None:
    logger.debug("call_state", extra={"extra_fields": {STATE: state.value, **fields}})


class DispatchEngine:
    def __init__(
        self,
        model: SimulationModel,
        translator: ErrorTranslator,
        transport_executor: Executor,
        delivery_executor: Executor,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._model = model
        self._translator = translator
        self._transport_executor = transport_executor
        self._delivery_executor = delivery_executor
        self._sleep = sleep or time.sleep
        self._tracer = trace.get_tracer(__name__)

    def wrap(self, interface: type[T], implementation: T) -> T:
        namespace: dict[str, Any] = {
            "__init__": lambda proxy: None,
            "__repr__": lambda proxy: f"<mock {interface.__name__} of {implementation!r}>",
        }
        for name, method in service_methods(interface).items():
            namespace[name] = self._interceptor(method, getattr(implementation, name))
        proxy_type = type(f"Mock{interface.__name__}", (interface,), namespace)
        return proxy_type()

    def _interceptor(self, method: ServiceMethod, target: Callable[..., Any]) -> Callable[..., Any]:
        def intercept(proxy: Any, *args: Any, **kwargs: Any) -> Any:
            context = contextvars.copy_context()
            return context.run(self.dispatch, method, target, args, kwargs)

        intercept.__name__ = method.name
        return intercept

    def dispatch(
        self,
        method: ServiceMethod,
        target: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        update_correlation_context(
            {CALL_ID: new_call_id(), METHOD: method.name, STYLE: method.style.value}
        )
        calls_total.add(1, {"style": method.style.value})
        _log_state(CallState.PENDING)
        if method.style is InvocationStyle.CALLBACK:
            return self._dispatch_callback(method, target, args, kwargs)
        if method.style is InvocationStyle.STREAM:
            return self._dispatch_stream(method, target, args, kwargs)
        return self._dispatch_sync(method, target, args, kwargs)

    def _span(self, method: ServiceMethod) -> Any:
        return self._tracer.start_as_current_span(
            "mock_transport.call",
            attributes={"mock.method": method.name, "mock.style": method.style.value},
        )

    def _wait(self, method: ServiceMethod) -> CallOutcome | None:
        if self._model.is_failure():
            self._pause(method, self._model.delay_for_failure(), "failure")
            error = self._translator.translate(method.style, method.success_type)
            return self._failed(method, error)
        self._pause(method, self._model.delay_for_success(), "success")
        _log_state(CallState.INVOKING)
        return None

    def _simulate(self, method: ServiceMethod, invoke: Callable[[], CallOutcome]) -> CallOutcome:
        with self._span(method):
            failed = self._wait(method)
            if failed is not None:
                return failed
            try:
                outcome = invoke()
            except Exception as exc:  # noqa: BLE001
                return self._translate_failure(method, exc)
            _log_state(CallState.SUCCEEDED)
            return outcome

    def _pause(self, method: ServiceMethod, delay_ms: int, outcome: str) -> None:
        simulated_delay_ms.record(delay_ms, {"style": method.style.value, "outcome": outcome})
        if delay_ms > 0:
            self._sleep(delay_ms / 1000)
        _log_state(CallState.DELAY_ELAPSED, **{DELAY_MS: delay_ms})

    def _translate_failure(self, method: ServiceMethod, error: BaseException) -> CallOutcome:
        return self._failed(
            method, self._translator.translate(method.style, method.success_type, error)
        )

    def _failed(self, method: ServiceMethod, error: BaseException) -> CallOutcome:
        kind = getattr(error, "kind", None)
        failures_total.add(
            1,
            {"style": method.style.value, "kind": kind.value if kind is not None else "replaced"},
        )
        _log_state(CallState.FAILED, **{ERROR_TYPE: type(error).__name__})
        return CallOutcome(error=error)

    def _dispatch_sync(
        self,
        method: ServiceMethod,
        target: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        outcome = self._simulate(method, lambda: CallOutcome(value=target(*args, **kwargs)))
        _log_state(CallState.DELIVERED)
        if outcome.error is not None:
            raise outcome.error
        return outcome.value

    def _dispatch_callback(
        self,
        method: ServiceMethod,
        target: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        collector = CollectingCallback()
        callback, args, kwargs = method.swap_callback(args, kwargs, collector)
        submit_in_context(
            self._transport_executor,
            self._run_callback,
            method,
            collector,
            lambda: target(*args, **kwargs),
            callback,
        )

    def _run_callback(
        self,
        method: ServiceMethod,
        collector: CollectingCallback,
        invoke: Callable[[], Any],
        callback: Callback[Any],
    ) -> None:
        with self._span(method):
            try:
                failed = self._start_callback(method, invoke)
            except Exception:
                collector.close()
                logger.exception("callback_dispatch_failed")
                raise
            if failed is not None:
                collector.close()
                self._deliver(failed, callback)
                return
            context = contextvars.copy_context()
            collector.on_complete(
                lambda outcome: context.run(self._complete_callback, method, outcome, callback)
            )

    def _start_callback(
        self, method: ServiceMethod, invoke: Callable[[], Any]
    ) -> CallOutcome | None:
        failed = self._wait(method)
        if failed is not None:
            return failed
        try:
            invoke()
        except Exception as exc:  # noqa: BLE001
            return self._translate_failure(method, exc)
        return None

    def _complete_callback(
        self, method: ServiceMethod, outcome: CallOutcome, callback: Callback[Any]
    ) -> None:
        try:
            if outcome.error is not None:
                outcome = self._translate_failure(method, outcome.error)
            else:
                _log_state(CallState.SUCCEEDED)
            self._deliver(outcome, callback)
        except Exception:
            logger.exception("callback_dispatch_failed")
            raise

    def _deliver(self, outcome: CallOutcome, callback: Callback[Any]) -> None:
        submit_in_context(self._delivery_executor, self._deliver_callback, outcome, callback)

    def _deliver_callback(self, outcome: CallOutcome, callback: Callback[Any]) -> None:
        try:
            if outcome.error is not None:
                callback.failure(outcome.error)
            else:
                response = outcome.response if outcome.response is not None else _success_response()
                callback.success(outcome.value, response)
        except Exception:
            logger.exception("callback_delivery_failed")
            raise
        _log_state(CallState.DELIVERED)

    def _dispatch_stream(
        self,
        method: ServiceMethod,
        target: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Single[Any]:
        context = contextvars.copy_context()

        def invoke() -> CallOutcome:
            result = target(*args, **kwargs)
            if isinstance(result, Single):
                result = result.blocking_get()
            return CallOutcome(value=result)

        def on_subscribe(emitter: SingleEmitter[Any]) -> None:
            submit_in_context(
                self._transport_executor, self._run_stream, method, invoke, emitter, context=context
            )

        return Single(on_subscribe)

    def _run_stream(
        self, method: ServiceMethod, invoke: Callable[[], CallOutcome], emitter: SingleEmitter[Any]
    ) -> None:
        try:
            outcome = self._simulate(method, invoke)
            if outcome.error is not None:
                emitter.error(outcome.error)
            else:
                emitter.success(outcome.value)
        except Exception:
            logger.exception("stream_delivery_failed")
            raise
        _log_state(CallState.DELIVERED)
