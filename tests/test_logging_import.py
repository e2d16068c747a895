"""
Test that supplyguard_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from supplyguard_logging and use the logger."""
    from backend_supplyguard.supplyguard_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    logger.info("test_message", key="value")


def test_bind_product_logger():
    """bind_product returns a logger usable like get_logger."""
    from backend_supplyguard.supplyguard_logging import bind_product

    log = bind_product(42)
    assert hasattr(log, "info")
    log.info("test_product_message", risk_score=10)


def test_configure_level_reaches_existing_loggers(capsys):
    """A logger created before configure_structlog() follows the new level."""
    from backend_supplyguard.supplyguard_logging import configure_structlog, get_logger

    logger = get_logger("tests.level")
    try:
        configure_structlog("ERROR", "json")
        logger.info("suppressed_line")
        logger.error("kept_line")
    finally:
        configure_structlog()
    out = capsys.readouterr().out
    assert "suppressed_line" not in out
    assert '"event_type": "kept_line"' in out
    assert '"logger": "tests.level"' in out


def test_create_app_applies_settings_log_level(capsys):
    """Settings.log_level (from the environment or .env) drives structlog filtering."""
    from backend_supplyguard.api_server.server import create_app
    from backend_supplyguard.config import Settings
    from backend_supplyguard.supplyguard_logging import configure_structlog, get_logger

    logger = get_logger("tests.app_level")
    try:
        create_app(settings=Settings(log_level="ERROR"))
        logger.info("suppressed_after_app")
        logger.warning("suppressed_warning_after_app")
    finally:
        configure_structlog()
    out = capsys.readouterr().out
    assert "suppressed_after_app" not in out
    assert "suppressed_warning_after_app" not in out
