from __future__ import annotations

import random
from collections.abc import Callable
from concurrent.futures import Executor
from typing import TypeVar

from mock_transport.client import ClientConfig
from mock_transport.core.config import Settings, get_settings
from mock_transport.dispatch.engine import DispatchEngine
from mock_transport.logging import configure_logging, get_logger
from mock_transport.simulation.model import SimulationConfig, SimulationModel
from mock_transport.translation.translator import ErrorTranslator

logger = get_logger(__name__)

T = TypeVar("T")

ValuesChangedListener = Callable[[int, int, int], None]


class MockClient:
    def __init__(
        self,
        client_config: ClientConfig,
        transport_executor: Executor,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.random = random.Random(settings.random_seed)
        self._config = SimulationConfig(
            delay_ms=settings.delay_ms,
            variance_percentage=settings.variance_percentage,
            error_percentage=settings.error_percentage,
        )
        self._model = SimulationModel(self._config, self.random)
        self._engine = DispatchEngine(
            model=self._model,
            translator=ErrorTranslator(client_config.error_handler, client_config.base_url),
            transport_executor=transport_executor,
            delivery_executor=client_config.callback_executor,
        )
        self._listener: ValuesChangedListener | None = None

    @classmethod
    def from_config(
        cls,
        client_config: ClientConfig,
        transport_executor: Executor,
        settings: Settings | None = None,
    ) -> MockClient:
        settings = settings or get_settings()
        if settings.log_json:
            configure_logging(settings.log_level)
        return cls(client_config, transport_executor, settings)

    @property
    def delay_ms(self) -> int:
        return self._config.delay_ms

    @property
    def variance_percentage(self) -> int:
        return self._config.variance_percentage

    @property
    def error_percentage(self) -> int:
        return self._config.error_percentage

    def seed(self, value: int) -> None:
        self._model.seed(value)

    def set_delay(self, delay_ms: int) -> None:
        self._config.set_delay(delay_ms)
        self._notify()

    def set_variance_percentage(self, variance_percentage: int) -> None:
        self._config.set_variance_percentage(variance_percentage)
        self._notify()

    def set_error_percentage(self, error_percentage: int) -> None:
        self._config.set_error_percentage(error_percentage)
        self._notify()

    def set_values_changed_listener(self, listener: ValuesChangedListener | None) -> None:
        self._listener = listener
        self._notify()

    def _notify(self) -> None:
        logger.debug(
            "simulation_values_changed",
            extra={
                "extra_fields": {
                    "delay_ms": self.delay_ms,
                    "variance_percentage": self.variance_percentage,
                    "error_percentage": self.error_percentage,
                }
            },
        )
        if self._listener is not None:
            self._listener(self.delay_ms, self.variance_percentage, self.error_percentage)

    def calculate_is_failure(self) -> bool:
        return self._model.is_failure()

    def calculate_delay_for_call(self) -> int:
        return self._model.delay_for_success()

    def calculate_delay_for_error(self) -> int:
        return self._model.delay_for_failure()

    def create(self, interface: type[T], implementation: T) -> T:
        return self._engine.wrap(interface, implementation)
