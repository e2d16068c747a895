"""
Environment variable loading and validation for SupplyGuard.

- RISK_THRESHOLD: score at or above which an item is flagged (default: 70)
- TIME_GAP_WARNING: seconds between stages above which a delay is reported (default: 86400)
- SUPPLYGUARD_LOCATIONS_PATH: optional JSON file replacing the known-location table
- PORT / API_PORT, API_HOST: HTTP bind address
- LOG_LEVEL, LOG_FORMAT: structlog level and renderer (json or console)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from backend_supplyguard.supplyguard_logging import get_logger

logger = get_logger(__name__)

# Project root: config is backend_supplyguard/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_RISK_THRESHOLD = 70
DEFAULT_TIME_GAP_WARNING_SEC = 86400
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 5000


def load_supplyguard_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides the real environment."""
    load_dotenv(_ENV_PATH, override=False)


def _env_int(name: str, default: int) -> int:
    """Integer env var; empty or non-numeric values fall back to default."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("config_invalid_int", name=name, value=raw, default=default)
        return default


def get_risk_threshold() -> int:
    load_supplyguard_env()
    return _env_int("RISK_THRESHOLD", DEFAULT_RISK_THRESHOLD)


def get_time_gap_warning_sec() -> int:
    load_supplyguard_env()
    return _env_int("TIME_GAP_WARNING", DEFAULT_TIME_GAP_WARNING_SEC)


def get_locations_path() -> Path | None:
    """Return SUPPLYGUARD_LOCATIONS_PATH as a Path, or None when unset."""
    load_supplyguard_env()
    raw = (os.getenv("SUPPLYGUARD_LOCATIONS_PATH") or "").strip()
    return Path(raw) if raw else None


def get_api_host() -> str:
    load_supplyguard_env()
    return (os.getenv("API_HOST") or "").strip() or DEFAULT_API_HOST


def get_api_port() -> int:
    """PORT wins over API_PORT."""
    load_supplyguard_env()
    if (os.getenv("PORT") or "").strip():
        return _env_int("PORT", DEFAULT_API_PORT)
    return _env_int("API_PORT", DEFAULT_API_PORT)


def get_log_level() -> str:
    load_supplyguard_env()
    return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()


def get_log_format() -> str:
    """'json' (default) or anything else for the console renderer."""
    load_supplyguard_env()
    return (os.getenv("LOG_FORMAT") or "json").strip().lower()
