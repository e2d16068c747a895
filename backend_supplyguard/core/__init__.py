"""
Core — shared exceptions used across ingestion, analysis engine and API server.
"""

from backend_supplyguard.core.exceptions import (
    InvalidHistoryError,
    InvalidRequestError,
    SupplyGuardError,
)

__all__ = ["InvalidHistoryError", "InvalidRequestError", "SupplyGuardError"]
