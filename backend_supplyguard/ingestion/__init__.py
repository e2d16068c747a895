"""
Ingestion — turns raw product histories from the ledger client into Events.
"""

from backend_supplyguard.ingestion.normalizer import normalize_event, normalize_history

__all__ = ["normalize_event", "normalize_history"]
