"""Runtime configuration for the supervisor."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from stillalive.tasks.models import ConfigurationError

DEFAULT_CONFIG_PATH = Path("localSettings.json")
DEFAULT_PS_COMMAND = "ps aux"


@dataclass(slots=True)
class Settings:
    """Where to find the declared tasks and how to inspect and launch them."""

    config_path: Path = DEFAULT_CONFIG_PATH
    ps_command: str = DEFAULT_PS_COMMAND
    launch_pause_seconds: float = 1.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, config_path: Path | None = None) -> Settings:
        """Load settings from environment with defaults suited to a cron job."""

        return cls(
            config_path=config_path
            or Path(os.getenv("STILLALIVE_CONFIG_PATH", str(DEFAULT_CONFIG_PATH))),
            ps_command=os.getenv("STILLALIVE_PS_COMMAND", DEFAULT_PS_COMMAND),
            launch_pause_seconds=_env_float("STILLALIVE_LAUNCH_PAUSE_SECONDS", 1.0),
            log_level=os.getenv("STILLALIVE_LOG_LEVEL", "WARNING").strip().upper(),
        )

    def validate(self) -> None:
        """Raise configuration error on values the supervisor cannot work with."""

        if not self.ps_command.strip():
            raise ConfigurationError("STILLALIVE_PS_COMMAND must not be empty.")
        if self.launch_pause_seconds < 0:
            raise ConfigurationError("STILLALIVE_LAUNCH_PAUSE_SECONDS must be >= 0.")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Invalid STILLALIVE_LOG_LEVEL: {self.log_level!r}")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as error:
        raise ConfigurationError(f"Invalid number for {name}: {value!r}") from error
