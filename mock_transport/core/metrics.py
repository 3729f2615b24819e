from __future__ import annotations

from opentelemetry import metrics

meter = metrics.get_meter("mock-transport")
calls_total = meter.create_counter(
    "mock_transport_calls_total", description="Mocked service calls dispatched"
)
failures_total = meter.create_counter(
    "mock_transport_failures_total", description="Mocked service calls delivered as failures"
)
simulated_delay_ms = meter.create_histogram(
    "mock_transport_simulated_delay_ms", description="Simulated network delay per call"
)
