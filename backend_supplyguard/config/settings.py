"""
Application settings.

Responsibilities:
- Read configuration once from environment variables and the .env file.
- Provide defaults for every setting.
- Expose typed settings (risk threshold, time-gap warning, bind address, log level and format)
  for the analyzer, the API server and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from backend_supplyguard.config import env


@dataclass(frozen=True)
class Settings:
    """Process-wide settings. Only risk_threshold and time_gap_warning_sec feed scoring."""

    risk_threshold: int = env.DEFAULT_RISK_THRESHOLD
    time_gap_warning_sec: int = env.DEFAULT_TIME_GAP_WARNING_SEC
    locations_path: Path | None = None
    api_host: str = env.DEFAULT_API_HOST
    api_port: int = env.DEFAULT_API_PORT
    log_level: str = "INFO"
    log_format: str = "json"


def load_settings() -> Settings:
    """Build Settings from the current environment (uncached)."""
    return Settings(
        risk_threshold=env.get_risk_threshold(),
        time_gap_warning_sec=env.get_time_gap_warning_sec(),
        locations_path=env.get_locations_path(),
        api_host=env.get_api_host(),
        api_port=env.get_api_port(),
        log_level=env.get_log_level(),
        log_format=env.get_log_format(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the settings read at first call.

    Later environment changes are not seen; tests call get_settings.cache_clear().
    """
    return load_settings()
