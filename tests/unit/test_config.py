import pytest

from rtsp_resolver.config import (
    ConfigManager,
    LiveModeSettings,
    OutputMode,
    get_config,
    parse_output_mode,
)
from rtsp_resolver.exceptions import ConfigurationError


@pytest.mark.parametrize("selector,mode", [
    ("args", OutputMode.ARGS),
    ("nl", OutputMode.NEW_LINES),
    ("json", OutputMode.JSON),
    ("csv", OutputMode.CSV),
])
def test_parse_one_shot_modes(selector, mode):
    assert parse_output_mode(selector) == (mode, None)


def test_parse_live_mode():
    assert parse_output_mode("http:8123:3600") == (OutputMode.HTTP, LiveModeSettings(port=8123, interval_seconds=3600))


@pytest.mark.parametrize("selector", [
    "xml",
    "jsonl",
    "argsx",
    "http",
    "http:8123",
    "http:abc:10",
    "http:8123:abc",
    "http:70000:10",
    "http:8123:0",
    "http:8123:10:5",
])
def test_parse_invalid_modes(selector):
    with pytest.raises(ConfigurationError):
        parse_output_mode(selector)


def test_defaults(monkeypatch):
    for key in ("REMOTE_FETCH_TIMEOUT", "RTSP_TIMEOUT", "RTSP_MAX_REDIRECTS", "LIVE_HOST",
                "JSON_OUTPUT_PATH", "CSV_OUTPUT_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    config = get_config()

    assert config.resolver.remote_fetch_timeout == 5
    assert config.resolver.rtsp_timeout == 15
    assert config.resolver.rtsp_max_redirects == 10
    assert config.server.host == "0.0.0.0"
    assert config.output.json_path == "redirect_sources.json"
    assert config.output.csv_path == "redirect_sources.csv"
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RTSP_TIMEOUT", "2.5")
    monkeypatch.setenv("RTSP_MAX_REDIRECTS", "3")
    monkeypatch.setenv("RTSP_TLS_VERIFY", "false")
    monkeypatch.setenv("LIVE_HOST", "127.0.0.1")
    monkeypatch.setenv("JSON_OUTPUT_PATH", "/tmp/out.json")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = ConfigManager().get_config()

    assert config.resolver.rtsp_timeout == 2.5
    assert config.resolver.rtsp_max_redirects == 3
    assert config.resolver.verify_tls is False
    assert config.server.host == "127.0.0.1"
    assert config.output.json_path == "/tmp/out.json"
    assert config.log_level == "DEBUG"


def test_config_is_cached_until_forced(monkeypatch):
    manager = ConfigManager()
    monkeypatch.setenv("LIVE_HOST", "127.0.0.1")
    first = manager.get_config()

    monkeypatch.setenv("LIVE_HOST", "10.0.0.1")

    assert manager.get_config() is first
    assert manager.get_config(force_reload=True).server.host == "10.0.0.1"


@pytest.mark.parametrize("key,value", [
    ("RTSP_TIMEOUT", "soon"),
    ("RTSP_TIMEOUT", "0"),
    ("REMOTE_FETCH_TIMEOUT", "-1"),
    ("RTSP_MAX_REDIRECTS", "-2"),
    ("LOG_LEVEL", "LOUD"),
    ("RTSP_TLS_VERIFY", "sometimes"),
    ("LIVE_SHUTDOWN_TIMEOUT", "-5"),
])
def test_invalid_environment_values(monkeypatch, key, value):
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigurationError):
        ConfigManager().get_config()
