from __future__ import annotations

import pytest
from pydantic import ValidationError

from mock_transport.core.config import Settings, get_settings


def test_settings_loads_values_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MOCK_TRANSPORT_DELAY_MS", "150")
    monkeypatch.setenv("MOCK_TRANSPORT_VARIANCE_PERCENTAGE", "10")
    monkeypatch.setenv("MOCK_TRANSPORT_ERROR_PERCENTAGE", "25")
    monkeypatch.setenv("MOCK_TRANSPORT_RANDOM_SEED", "123")

    settings = Settings()

    assert settings.delay_ms == 150
    assert settings.variance_percentage == 10
    assert settings.error_percentage == 25
    assert settings.random_seed == 123


def test_settings_defaults_do_not_inject_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DELAY_MS", "VARIANCE_PERCENTAGE", "ERROR_PERCENTAGE", "RANDOM_SEED"):
        monkeypatch.delenv(f"MOCK_TRANSPORT_{name}", raising=False)

    settings = Settings(_env_file=None)

    assert settings.delay_ms == 2000
    assert settings.variance_percentage == 40
    assert settings.error_percentage == 0
    assert settings.random_seed is None


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("MOCK_TRANSPORT_DELAY_MS", "-1"),
        ("MOCK_TRANSPORT_DELAY_MS", str(2**31)),
        ("MOCK_TRANSPORT_VARIANCE_PERCENTAGE", "101"),
        ("MOCK_TRANSPORT_ERROR_PERCENTAGE", "-3"),
    ],
)
def test_settings_rejects_out_of_range_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached_until_cache_clear() -> None:
    get_settings.cache_clear()
    first = get_settings()
    second = get_settings()

    assert first is second

    get_settings.cache_clear()
    third = get_settings()
    assert third is not first
