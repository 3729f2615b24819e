from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from mock_transport import (
    Callback,
    ClientConfig,
    ErrorKind,
    MockClient,
    MockHttpException,
    TransportError,
)
from tests.helpers import BASE_URL, RecordingCallback, make_harness, make_settings
from tests.helpers.services import AsyncCallbackSubtypeExample, AsyncExample


class RaisingAsyncExample(AsyncExample):
    def __init__(self, error: Exception) -> None:
        self._error = error

    def do_stuff(self, cb: Callback[str]) -> None:
        raise self._error


def test_async_failure_triggers_network_error() -> None:
    harness = make_harness()
    harness.client.set_delay(1)
    harness.client.set_error_percentage(100)
    service = harness.client.create(AsyncExample, RaisingAsyncExample(AssertionError()))
    callback = RecordingCallback()

    service.do_stuff(callback)

    assert harness.transport.submissions == 1
    assert harness.delivery.submissions == 1
    assert callback.values == []
    error = callback.errors[0]
    assert error.kind is ErrorKind.NETWORK
    assert str(error.cause) == "Mock network error!"


def test_async_api_is_called_with_delay() -> None:
    harness = make_harness()
    harness.client.set_delay(100)
    harness.client.set_variance_percentage(0)
    harness.client.set_error_percentage(0)
    expected = "".join(["H", "i"])

    class MockAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            cb.success(expected, None)

    service = harness.client.create(AsyncExample, MockAsyncExample())
    took: list[float] = []

    class TimingCallback(RecordingCallback):
        def success(self, value: str, response: httpx.Response | None) -> None:
            took.append((time.perf_counter() - start) * 1000)
            super().success(value, response)

    callback = TimingCallback()
    start = time.perf_counter()
    service.do_stuff(callback)

    assert harness.transport.submissions == 1
    assert harness.delivery.submissions == 1
    assert callback.values[0] is expected
    assert took[0] >= 100


def test_async_success_without_response_gets_synthesized_ok_response() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)

    class MockAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            cb.success("ok", None)

    callback = RecordingCallback()
    harness.client.create(AsyncExample, MockAsyncExample()).do_stuff(callback)

    response = callback.responses[0]
    assert response is not None
    assert response.status_code == 200
    assert response.reason_phrase == "OK"


def test_async_success_keeps_implementation_response() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)
    response = httpx.Response(201, headers={"Location": "/things/1"})

    class MockAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            cb.success("created", response)

    callback = RecordingCallback()
    harness.client.create(AsyncExample, MockAsyncExample()).do_stuff(callback)

    assert callback.responses == [response]


def test_async_http_exception_becomes_error() -> None:
    harness = make_harness()
    harness.client.set_delay(100)
    harness.client.set_variance_percentage(0)
    harness.client.set_error_percentage(0)
    body = "".join(["Greet", "ings"])
    service = harness.client.create(
        AsyncExample, RaisingAsyncExample(MockHttpException(404, "Not Found", body))
    )
    callback = RecordingCallback()

    start = time.perf_counter()
    service.do_stuff(callback)
    took_ms = (time.perf_counter() - start) * 1000

    assert harness.transport.submissions == 1
    assert harness.delivery.submissions == 1
    error = callback.errors[0]
    assert took_ms >= 100
    assert error.kind is ErrorKind.HTTP
    assert error.response is not None
    assert error.response.status_code == 404
    assert error.response.reason_phrase == "Not Found"
    assert error.body is body
    assert error.success_type is str


def test_async_error_uses_error_handler() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)
    service = harness.client.create(
        AsyncExample, RaisingAsyncExample(MockHttpException.new_not_found(object()))
    )
    harness.error_handler.next_error = ValueError("Test")
    callback = RecordingCallback()

    service.do_stuff(callback)

    assert callback.done.wait(1)
    error = callback.errors[0]
    assert isinstance(error, TransportError)
    assert isinstance(error.cause, ValueError)
    assert str(error.cause) == "Test"
    assert error.kind is None


def test_async_implementation_failure_reported_through_collector() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)

    class MockAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            cb.failure(TransportError.unexpected_error(BASE_URL, RuntimeError("backend down")))

    callback = RecordingCallback()
    harness.client.create(AsyncExample, MockAsyncExample()).do_stuff(callback)

    error = callback.errors[0]
    assert error.kind is ErrorKind.UNEXPECTED
    assert str(error.cause) == "backend down"
    assert len(harness.error_handler.received) == 1


def test_async_implementation_can_call_back_after_returning() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)
    timers: list[threading.Timer] = []

    class DeferredAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            timer = threading.Timer(0.05, cb.success, args=("late", None))
            timers.append(timer)
            timer.start()

    callback = RecordingCallback()
    harness.client.create(AsyncExample, DeferredAsyncExample()).do_stuff(callback)

    assert callback.values == []
    assert callback.done.wait(1)
    timers[0].join(1)
    assert callback.values == ["late"]
    assert callback.errors == []
    assert callback.responses[0] is not None
    assert callback.responses[0].status_code == 200
    assert harness.delivery.submissions == 1


def test_async_late_failure_goes_through_error_handler() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)

    class DeferredFailingAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            error = TransportError.unexpected_error(BASE_URL, RuntimeError("late failure"))
            threading.Timer(0.05, cb.failure, args=(error,)).start()

    callback = RecordingCallback()
    harness.client.create(AsyncExample, DeferredFailingAsyncExample()).do_stuff(callback)

    assert callback.done.wait(1)
    error = callback.errors[0]
    assert error.kind is ErrorKind.UNEXPECTED
    assert str(error.cause) == "late failure"
    assert len(harness.error_handler.received) == 1


def test_async_implementation_that_never_calls_back_delivers_nothing() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)

    class SilentAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            return None

    callback = RecordingCallback()
    harness.client.create(AsyncExample, SilentAsyncExample()).do_stuff(callback)

    assert harness.transport.submissions == 1
    assert harness.delivery.submissions == 0
    assert callback.values == []
    assert callback.errors == []


def test_async_callback_after_raising_is_ignored() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)

    class RaisingThenCallingAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            threading.Timer(0.01, cb.success, args=("ignored", None)).start()
            raise RuntimeError("boom")

    callback = RecordingCallback()
    harness.client.create(AsyncExample, RaisingThenCallingAsyncExample()).do_stuff(callback)
    time.sleep(0.05)

    assert callback.values == []
    assert [str(error.cause) for error in callback.errors] == ["boom"]
    assert harness.delivery.submissions == 1


def test_async_error_handler_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    harness = make_harness()

    def broken_handler(error: TransportError) -> BaseException:
        raise LookupError("handler broke")

    config = ClientConfig(
        base_url=BASE_URL, error_handler=broken_handler, callback_executor=harness.delivery
    )
    client = MockClient.from_config(
        config, harness.transport, settings=make_settings(delay_ms=1, error_percentage=100)
    )
    callback = RecordingCallback()
    caplog.set_level(logging.ERROR, logger="mock_transport")

    client.create(AsyncExample, RaisingAsyncExample(AssertionError())).do_stuff(callback)

    records = [
        record for record in caplog.records if record.getMessage() == "callback_dispatch_failed"
    ]
    assert len(records) == 1
    assert records[0].exc_info is not None
    assert isinstance(records[0].exc_info[1], LookupError)
    assert callback.errors == []


def test_async_only_first_collector_outcome_is_delivered() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)

    class ChattyAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            cb.success("first", None)
            cb.success("second", None)

    callback = RecordingCallback()
    harness.client.create(AsyncExample, ChattyAsyncExample()).do_stuff(callback)

    assert callback.values == ["first"]
    assert harness.delivery.submissions == 1


def test_async_can_use_callback_subtype() -> None:
    harness = make_harness(delay_ms=1, variance_percentage=0)

    class MockAsyncCallbackSubtypeExample(AsyncCallbackSubtypeExample):
        def do_stuff(self, foo: AsyncCallbackSubtypeExample.Foo) -> None:
            foo.success("Hello!", None)

    actual: list[str] = []

    class RecordingFoo(AsyncCallbackSubtypeExample.Foo):
        def success(self, value: str, response: httpx.Response | None) -> None:
            actual.append(value)

        def failure(self, error: TransportError) -> None:
            raise AssertionError(error)

    service = harness.client.create(
        AsyncCallbackSubtypeExample, MockAsyncCallbackSubtypeExample()
    )
    service.do_stuff(RecordingFoo())

    assert actual == ["Hello!"]


def test_async_call_does_not_block_caller_with_thread_pools() -> None:
    release = threading.Event()

    class BlockingAsyncExample(AsyncExample):
        def do_stuff(self, cb: Callback[str]) -> None:
            release.wait(1)
            cb.success("late", None)

    with ThreadPoolExecutor(max_workers=1) as transport, ThreadPoolExecutor(
        max_workers=1
    ) as delivery:
        config = ClientConfig(base_url=BASE_URL, callback_executor=delivery)
        client = MockClient.from_config(
            config, transport, settings=make_settings(delay_ms=1, variance_percentage=0)
        )
        callback = RecordingCallback()

        client.create(AsyncExample, BlockingAsyncExample()).do_stuff(callback)
        assert callback.values == []

        release.set()
        assert callback.done.wait(2)

    assert callback.values == ["late"]
