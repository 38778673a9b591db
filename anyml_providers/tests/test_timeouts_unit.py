from __future__ import annotations

from anyml_providers.base.timeouts import TimeoutConfig, get_timeout_config


def test_defaults():
    cfg = get_timeout_config()
    assert cfg == TimeoutConfig()  # nosec B101
    assert (cfg.start_timeout_seconds, cfg.stream_timeout_seconds, cfg.http_timeout_seconds) == (30.0, 60.0, 30.0)  # nosec B101


def test_env_overrides_and_cache_refresh(monkeypatch):
    first = get_timeout_config()
    assert get_timeout_config() is first  # nosec B101
    monkeypatch.setenv("ANYML_TIMEOUT_STREAM_SECONDS", "5")
    monkeypatch.setenv("ANYML_TIMEOUT_START_SECONDS", "-1")
    monkeypatch.setenv("ANYML_TIMEOUT_HTTP_SECONDS", "soon")
    cfg = get_timeout_config()
    assert cfg.stream_timeout_seconds == 5.0  # nosec B101
    assert cfg.start_timeout_seconds == 30.0  # nosec B101
    assert cfg.http_timeout_seconds == 30.0  # nosec B101
