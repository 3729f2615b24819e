from __future__ import annotations

from typing import Any


def _require_int(value: Any, message: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(message)
    return value


def require_delay(value: Any, maximum: int) -> int:
    delay = _require_int(value, "Delay must be an integer number of milliseconds.")
    if delay < 0:
        raise ValueError("Delay must be positive value.")
    if delay > maximum:
        raise ValueError(f"Delay value too large. Max: {maximum}")
    return delay


def require_percentage(value: Any, *, label: str) -> int:
    message = f"{label} percentage must be between 0 and 100."
    percentage = _require_int(value, message)
    if percentage < 0 or percentage > 100:
        raise ValueError(message)
    return percentage
