from __future__ import annotations

import pytest

from ridelocate.config import LocatorConfig
from ridelocate.exceptions import LocatorConfigError


def test_defaults_match_recommended_values() -> None:
    config = LocatorConfig()
    assert config.debounce_ms == 300
    assert config.min_query_length == 2
    assert config.max_suggestions == 6
    assert 8.0 <= config.primary_timeout <= 12.0
    assert config.service_area.name == "Malmö"


def test_from_env_reads_variables_and_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIDELOCATE_USER_AGENT", "TaxiApp/2.0 (ops@example.com)")
    monkeypatch.setenv("RIDELOCATE_PRIMARY_TIMEOUT", "9.5")
    monkeypatch.setenv("RIDELOCATE_DEBOUNCE_MS", "250")
    monkeypatch.setenv("RIDELOCATE_RECENTER_ON_FIX", "always")

    config = LocatorConfig.from_env(debounce_ms=100)

    assert config.user_agent == "TaxiApp/2.0 (ops@example.com)"
    assert config.primary_timeout == 9.5
    assert config.debounce_ms == 100
    assert config.recenter_on_fix == "always"


def test_from_env_rejects_non_numeric_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIDELOCATE_BACKUP_TIMEOUT", "soon")
    with pytest.raises(LocatorConfigError):
        LocatorConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"primary_timeout": 0},
        {"search_timeout": -1.0},
        {"debounce_ms": -5},
        {"min_query_length": 0},
        {"max_suggestions": 0},
        {"recenter_on_fix": "sometimes"},
    ],
)
def test_invalid_values_raise_config_error(kwargs: dict[str, object]) -> None:
    with pytest.raises(LocatorConfigError):
        LocatorConfig(**kwargs)  # type: ignore[arg-type]


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "NaN"])
def test_from_env_rejects_non_finite_timeout(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("RIDELOCATE_PRIMARY_TIMEOUT", value)
    with pytest.raises(LocatorConfigError, match="finite"):
        LocatorConfig.from_env()


@pytest.mark.parametrize("value", ["nan", "inf", "2.9", "two"])
def test_from_env_rejects_non_integer_counts(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("RIDELOCATE_DEBOUNCE_MS", value)
    with pytest.raises(LocatorConfigError, match="RIDELOCATE_DEBOUNCE_MS"):
        LocatorConfig.from_env()


@pytest.mark.parametrize("timeout", [float("nan"), float("inf")])
def test_non_finite_timeouts_are_rejected_directly(timeout: float) -> None:
    with pytest.raises(LocatorConfigError):
        LocatorConfig(backup_timeout=timeout)


def test_from_env_reads_search_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIDELOCATE_SEARCH_LIMIT", "12")
    monkeypatch.setenv("RIDELOCATE_MAX_SUGGESTIONS", " 4 ")

    config = LocatorConfig.from_env()

    assert config.search_limit == 12
    assert config.max_suggestions == 4
