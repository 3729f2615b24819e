from __future__ import annotations

import contextvars
from collections.abc import Callable
from concurrent.futures import Executor, Future
from typing import Any


class SynchronousExecutor(Executor):
    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        future: Future[Any] = Future()
        if not future.set_running_or_notify_cancel():
            return future
        try:
            result = fn(*args, **kwargs)
        except BaseException as exc:  # noqa: BLE001
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


def submit_in_context(
    executor: Executor,
    fn: Callable[..., Any],
    *args: Any,
    context: contextvars.Context | None = None,
) -> Future[Any]:
    snapshot = context.copy() if context is not None else contextvars.copy_context()
    return executor.submit(snapshot.run, fn, *args)
