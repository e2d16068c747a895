"""
Structured logging for SupplyGuard.

JSON logs with timestamp, product_id, event_type and anomaly types.
Use get_logger() in all modules; entrypoints call configure_structlog() with
the loaded settings.
"""

from backend_supplyguard.supplyguard_logging.logger import bind_product, configure_structlog, get_logger

__all__ = ["bind_product", "configure_structlog", "get_logger"]
