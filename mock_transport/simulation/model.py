from __future__ import annotations

import random
import threading

from mock_transport.core.config import MAX_DELAY_MS
from mock_transport.utils.validation import require_delay, require_percentage


class SimulationConfig:
    def __init__(
        self, delay_ms: int = 2000, variance_percentage: int = 40, error_percentage: int = 0
    ) -> None:
        self._delay_ms = require_delay(delay_ms, MAX_DELAY_MS)
        self._variance_percentage = require_percentage(variance_percentage, label="Variance")
        self._error_percentage = require_percentage(error_percentage, label="Error")

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def variance_percentage(self) -> int:
        return self._variance_percentage

    @property
    def error_percentage(self) -> int:
        return self._error_percentage

    def set_delay(self, delay_ms: int) -> None:
        self._delay_ms = require_delay(delay_ms, MAX_DELAY_MS)

    def set_variance_percentage(self, variance_percentage: int) -> None:
        self._variance_percentage = require_percentage(variance_percentage, label="Variance")

    def set_error_percentage(self, error_percentage: int) -> None:
        self._error_percentage = require_percentage(error_percentage, label="Error")


class SimulationModel:
    def __init__(self, config: SimulationConfig, rng: random.Random) -> None:
        self._config = config
        self._rng = rng
        self._lock = threading.Lock()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def rng(self) -> random.Random:
        return self._rng

    def seed(self, value: int) -> None:
        with self._lock:
            self._rng.seed(value)

    def is_failure(self) -> bool:
        with self._lock:
            draw = self._rng.randrange(100)
        return draw < self._config.error_percentage

    def delay_for_success(self) -> int:
        delay_ms = self._config.delay_ms
        variance = self._config.variance_percentage
        if variance == 0:
            return delay_ms
        lower = delay_ms * (100 - variance) / 100
        upper = delay_ms * (100 + variance) / 100
        with self._lock:
            sample = self._rng.random()
        return int(lower + sample * (upper - lower))

    def delay_for_failure(self) -> int:
        # Failures give up anywhere between immediately and three times the nominal delay.
        delay_ms = self._config.delay_ms
        with self._lock:
            sample = self._rng.random()
        return max(0, int(sample * 3 * delay_ms))
