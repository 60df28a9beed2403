from __future__ import annotations

import pytest

from orx_engines.config import DEFAULT_LOG_LEVEL, DEFAULT_TIMEOUT_SECONDS, Settings


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    keys = [
        "ORX_ENGINES_TIMEOUT_SECONDS",
        "ORX_ENGINES_PROXY",
        "ORX_ENGINES_HTTP2",
        "ORX_ENGINES_USER_AGENT",
        "ORX_ENGINES_LOG_LEVEL",
    ]
    for key in keys:
        monkeypatch.delenv(key, raising=False)


def test_settings_defaults() -> None:
    settings = Settings.from_env()

    assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert settings.proxy is None
    assert settings.http2 is True
    assert settings.user_agent is None
    assert settings.log_level == DEFAULT_LOG_LEVEL


def test_settings_reads_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ORX_ENGINES_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("ORX_ENGINES_PROXY", " socks5://127.0.0.1:9050 ")
    monkeypatch.setenv("ORX_ENGINES_HTTP2", "off")
    monkeypatch.setenv("ORX_ENGINES_USER_AGENT", "Mozilla/5.0 test")
    monkeypatch.setenv("ORX_ENGINES_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.timeout_seconds == 2.5
    assert settings.proxy == "socks5://127.0.0.1:9050"
    assert settings.http2 is False
    assert settings.user_agent == "Mozilla/5.0 test"
    assert settings.log_level == "DEBUG"


def test_settings_blank_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ORX_ENGINES_TIMEOUT_SECONDS", " ")
    monkeypatch.setenv("ORX_ENGINES_PROXY", "")
    monkeypatch.setenv("ORX_ENGINES_LOG_LEVEL", "")

    settings = Settings.from_env()

    assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert settings.proxy is None
    assert settings.log_level == DEFAULT_LOG_LEVEL


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_settings_rejects_bad_timeout(
    monkeypatch: pytest.MonkeyPatch, value: str
) -> None:
    monkeypatch.setenv("ORX_ENGINES_TIMEOUT_SECONDS", value)

    with pytest.raises(RuntimeError) as exc:
        Settings.from_env()

    assert "ORX_ENGINES_TIMEOUT_SECONDS" in str(exc.value)


def test_settings_rejects_bad_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ORX_ENGINES_LOG_LEVEL", "chatty")

    with pytest.raises(RuntimeError) as exc:
        Settings.from_env()

    assert "ORX_ENGINES_LOG_LEVEL" in str(exc.value)
