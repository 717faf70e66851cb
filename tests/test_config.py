from __future__ import annotations

import logging

import pytest

from dontpanic.config import GuardConfig, default_config
from dontpanic.errors import ConfigurationError

pytestmark = pytest.mark.unit


def test_defaults_log_recovered_faults_at_debug() -> None:
    cfg = GuardConfig()

    assert cfg.log_recovered is True
    assert cfg.log_level == logging.DEBUG


@pytest.mark.parametrize(
    ("level", "expected"),
    [("INFO", logging.INFO), ("warning", logging.WARNING), ("15", 15), (30, 30)],
)
def test_log_level_is_normalized_to_int(level: int | str, expected: int) -> None:
    assert GuardConfig(log_level=level).log_level == expected


@pytest.mark.parametrize("level", ["LOUD", -1, True])
def test_invalid_log_level_raises(level: object) -> None:
    with pytest.raises(ConfigurationError):
        GuardConfig(log_level=level)  # type: ignore[arg-type]


def test_log_recovered_must_be_bool() -> None:
    with pytest.raises(ConfigurationError):
        GuardConfig(log_recovered="yes")  # type: ignore[arg-type]


def test_config_is_frozen() -> None:
    cfg = GuardConfig()
    with pytest.raises(AttributeError):
        cfg.log_recovered = False  # type: ignore[misc]


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DONTPANIC_LOG_RECOVERED", "off")
    monkeypatch.setenv("DONTPANIC_LOG_LEVEL", "warning")

    cfg = GuardConfig.from_env()

    assert cfg.log_recovered is False
    assert cfg.log_level == logging.WARNING


def test_from_env_without_variables_uses_defaults() -> None:
    assert GuardConfig.from_env() == GuardConfig()


def test_from_env_rejects_unparseable_bool(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DONTPANIC_LOG_RECOVERED", "maybe")

    with pytest.raises(ConfigurationError) as exc:
        GuardConfig.from_env()

    assert exc.value.hint is not None
    assert "DONTPANIC_LOG_RECOVERED" in str(exc.value)


def test_from_env_loads_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[bool] = []
    monkeypatch.setattr("dontpanic.config.load_dotenv", lambda: calls.append(True))

    GuardConfig.from_env()

    assert calls == [True]


def test_default_config_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = default_config()
    monkeypatch.setenv("DONTPANIC_LOG_LEVEL", "ERROR")

    assert default_config() is first

    default_config.cache_clear()
    assert default_config().log_level == logging.ERROR


def test_default_config_falls_back_on_invalid_environment(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("DONTPANIC_LOG_LEVEL", "LOUD")
    caplog.set_level(logging.WARNING, logger="dontpanic")

    assert default_config() == GuardConfig()
    assert default_config() == GuardConfig()

    warnings = [r for r in caplog.records if r.name == "dontpanic.config"]
    assert len(warnings) == 1
    assert "LOUD" in warnings[0].getMessage()
