from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from mock_transport.contracts.callbacks import Callback
from mock_transport.contracts.enums import InvocationStyle
from mock_transport.contracts.single import Single


@dataclass(frozen=True)
class ServiceMethod:
    name: str
    style: InvocationStyle
    success_type: Any
    callback_index: int | None = None
    callback_name: str | None = None

    def swap_callback(
        self, args: tuple[Any, ...], kwargs: dict[str, Any], replacement: Callback[Any]
    ) -> tuple[Callback[Any], tuple[Any, ...], dict[str, Any]]:
        if self.callback_name is not None and self.callback_name in kwargs:
            swapped_kwargs = dict(kwargs)
            original = swapped_kwargs[self.callback_name]
            swapped_kwargs[self.callback_name] = replacement
            return original, args, swapped_kwargs
        if self.callback_index is None or self.callback_index >= len(args):
            raise TypeError(f"{self.name}() requires a callback argument.")
        swapped_args = list(args)
        original = swapped_args[self.callback_index]
        swapped_args[self.callback_index] = replacement
        return original, tuple(swapped_args), kwargs


def _resolve_hints(interface: type, function: Callable[..., Any]) -> dict[str, Any]:
    localns = {name: value for name, value in vars(interface).items() if isinstance(value, type)}
    localns.setdefault(interface.__name__, interface)
    try:
        return typing.get_type_hints(function, localns=localns)
    except NameError:
        return dict(getattr(function, "__annotations__", {}))


def _callback_class(annotation: Any) -> type | None:
    candidate = typing.get_origin(annotation) or annotation
    if isinstance(candidate, type) and issubclass(candidate, Callback):
        return candidate
    return None


def callback_success_type(annotation: Any) -> Any:
    if typing.get_origin(annotation) is not None:
        arguments = typing.get_args(annotation)
        origin = typing.get_origin(annotation)
        if origin is Callback and arguments:
            return _concrete(arguments[0])
        annotation = origin
    for base in getattr(annotation, "__orig_bases__", ()):
        if _callback_class(base) is None:
            continue
        found = callback_success_type(base)
        if found is not object:
            return found
    return object


def _concrete(annotation: Any) -> Any:
    if isinstance(annotation, typing.TypeVar) or annotation is Any:
        return object
    return annotation


def _stream_success_type(annotation: Any) -> Any:
    arguments = typing.get_args(annotation)
    return _concrete(arguments[0]) if arguments else object


def _is_stream(annotation: Any) -> bool:
    candidate = typing.get_origin(annotation) or annotation
    return isinstance(candidate, type) and issubclass(candidate, Single)


def classify(interface: type, name: str, function: Callable[..., Any]) -> ServiceMethod:
    hints = _resolve_hints(interface, function)
    parameters = [
        parameter
        for parameter in inspect.signature(function).parameters.values()
        if parameter.name != "self"
        and parameter.kind not in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
    ]
    if parameters:
        last = parameters[-1]
        annotation = hints.get(last.name, inspect.Parameter.empty)
        if _callback_class(annotation) is not None:
            index = None if last.kind is last.KEYWORD_ONLY else len(parameters) - 1
            return ServiceMethod(
                name=name,
                style=InvocationStyle.CALLBACK,
                success_type=callback_success_type(annotation),
                callback_index=index,
                callback_name=last.name,
            )
    returns = hints.get("return", object)
    if _is_stream(returns):
        return ServiceMethod(
            name=name, style=InvocationStyle.STREAM, success_type=_stream_success_type(returns)
        )
    return ServiceMethod(
        name=name, style=InvocationStyle.SYNCHRONOUS, success_type=_concrete(returns)
    )


def _declared_functions(interface: type) -> dict[str, Callable[..., Any]]:
    functions: dict[str, Callable[..., Any]] = {}
    for klass in reversed(interface.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name.startswith("_") or not inspect.isfunction(value):
                continue
            functions[name] = value
    return functions


@lru_cache(maxsize=None)
def service_methods(interface: type) -> dict[str, ServiceMethod]:
    return {
        name: classify(interface, name, function)
        for name, function in _declared_functions(interface).items()
    }
