"""
Structured logging for SupplyGuard: one JSON line per event.

Every line carries event_type, level, an ISO timestamp, the module name under
"logger", and any request context bound through structlog.contextvars
(request_id from the HTTP middleware). Domain keys follow the event:
product_id, risk_score, anomaly_types, actor.

The module configures structlog from LOG_LEVEL / LOG_FORMAT in the process
environment on import, so logging works before settings exist. Entrypoints
call configure_structlog(settings.log_level, settings.log_format) once the
.env file has been read; loggers obtained earlier pick up the new level.

Imports nothing from backend_supplyguard so config can log while loading.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"


def _level_value(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's positional 'event' becomes event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _renderer(fmt: str) -> Any:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """
    (Re)configure structlog. level and fmt default to LOG_LEVEL and LOG_FORMAT
    from the environment, then INFO and json. Unknown level names mean INFO;
    any format other than json selects the console renderer.
    """
    fmt_name = (fmt or os.getenv("LOG_FORMAT") or DEFAULT_LOG_FORMAT).strip().lower()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _add_timestamp,
            _event_type,
            _renderer(fmt_name),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_value(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Module-level loggers exist before settings are read; they must see a later configure.
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Logger for a module, tagged with logger=<name>.

        logger = get_logger(__name__)
        logger.info("risk_analysis_completed", product_id=7, risk_score=45)
    """
    return structlog.get_logger(name, logger=name)


def bind_product(product_id: Any) -> Any:
    """Logger with product_id attached to every line."""
    return structlog.get_logger("backend_supplyguard", logger="backend_supplyguard", product_id=product_id)
