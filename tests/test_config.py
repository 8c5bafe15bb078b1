"""Tests for config.py -- defaults, env var overrides, validation."""

import pytest
from pydantic import ValidationError

from watch_submit.config import WatchConfig

# Env vars that pydantic-settings reads -- must be cleaned for default tests
_CONFIG_ENV_VARS = [
    "WATCH_SUBMIT_DEBUGGER_ADDRESS", "WATCH_SUBMIT_WEBDRIVER_URL",
    "WATCH_SUBMIT_TARGET_URL", "WATCH_SUBMIT_INPUT_ID", "WATCH_SUBMIT_BUTTON_ID",
    "WATCH_SUBMIT_SETTLE_DELAY", "WATCH_SUBMIT_PREFLIGHT_TIMEOUT",
    "WATCH_SUBMIT_VERBOSE", "WATCH_SUBMIT_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove watch-submit env vars so defaults tests see actual defaults."""
    for var in _CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_endpoints(self):
        config = WatchConfig()
        assert config.debugger_address == "localhost:9222"
        assert config.webdriver_url == "http://localhost:9515"
        assert config.target_url == "http://localhost:8082"

    def test_element_ids(self):
        config = WatchConfig()
        assert config.input_id == "peerAddress"
        assert config.button_id == "runDemo"

    def test_behavior_defaults(self):
        config = WatchConfig()
        assert config.settle_delay == 0.1
        assert config.preflight_timeout == 2.0
        assert config.verbose is False
        assert config.log_level == "INFO"


class TestOverrides:
    def test_constructor_override(self):
        config = WatchConfig(verbose=True, settle_delay=0.5)
        assert config.verbose is True
        assert config.settle_delay == 0.5

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("WATCH_SUBMIT_TARGET_URL", "http://localhost:9000")
        monkeypatch.setenv("WATCH_SUBMIT_SETTLE_DELAY", "0.25")
        config = WatchConfig()
        assert config.target_url == "http://localhost:9000"
        assert config.settle_delay == 0.25

    def test_constructor_beats_env(self, monkeypatch):
        monkeypatch.setenv("WATCH_SUBMIT_LOG_LEVEL", "WARNING")
        config = WatchConfig(log_level="DEBUG")
        assert config.log_level == "DEBUG"

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("INPUT_ID", "somethingElse")
        assert WatchConfig().input_id == "peerAddress"


class TestValidation:
    def test_negative_settle_delay_rejected(self):
        with pytest.raises(ValidationError):
            WatchConfig(settle_delay=-1)

    def test_zero_settle_delay_allowed(self):
        assert WatchConfig(settle_delay=0).settle_delay == 0

    def test_webdriver_url_trailing_slash_stripped(self):
        config = WatchConfig(webdriver_url="http://localhost:9515/")
        assert config.webdriver_url == "http://localhost:9515"
