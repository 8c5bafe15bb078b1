"""Watch-submit configuration via pydantic-settings (env vars only)."""

import sys

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WatchConfig(BaseSettings):
    """All configuration with layered resolution:
    environment variables < constructor kwargs.

    Defaults match the endpoints the target demo page expects.
    """

    model_config = SettingsConfigDict(
        env_prefix="WATCH_SUBMIT_",
        env_file=None,
        extra="ignore",
    )

    # -- Browser endpoints --
    debugger_address: str = "localhost:9222"
    webdriver_url: str = "http://localhost:9515"
    target_url: str = "http://localhost:8082"

    # -- Page elements --
    input_id: str = "peerAddress"
    button_id: str = "runDemo"

    # -- Timing (seconds) --
    settle_delay: float = 0.1
    preflight_timeout: float = 2.0

    # -- Behavior --
    verbose: bool = False
    log_level: str = "INFO"

    @field_validator("settle_delay", "preflight_timeout")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @field_validator("webdriver_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def setup_logging(self) -> None:
        """Configure loguru with a single stderr sink.

        verbose forces DEBUG regardless of log_level.
        """
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<10} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level="DEBUG" if self.verbose else self.log_level.upper(),
            filter=_default_extra,
        )
