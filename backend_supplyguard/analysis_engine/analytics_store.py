"""
In-memory supplier analytics and flagged-product registry.

Process-lifetime state shared by every request: lost on restart, cleared only
by clear(). All reads and writes go through one lock; readers get copies so
callers can never mutate stored records.
"""

from __future__ import annotations

import copy
import threading
from typing import Iterable

from backend_supplyguard.analysis_engine.models import Event, RiskResult, SupplierAnalytics


class AnalyticsStore:
    """Thread-safe supplier analytics (by address) and flagged results (by product id)."""

    def __init__(self) -> None:
        self._suppliers: dict[str | None, SupplierAnalytics] = {}
        self._flagged: dict[object, RiskResult] = {}
        self._lock = threading.Lock()

    def record_evaluation(self, history: Iterable[Event], result: RiskResult) -> None:
        """
        Apply one evaluation's side effects atomically.

        Every history row bumps its actor's total_products (and flagged_products
        when the item is flagged) and adds its stage; rows without an actor land
        under None. A flagged result replaces any stored result for the same
        product id.
        """
        with self._lock:
            for event in history:
                record = self._suppliers.get(event.actor)
                if record is None:
                    record = SupplierAnalytics(address=event.actor)
                    self._suppliers[event.actor] = record
                record.total_products += 1
                if result.is_flagged:
                    record.flagged_products += 1
                if event.stage is not None and event.stage not in record.stages:
                    record.stages.append(event.stage)
            if result.is_flagged:
                self._flagged[result.product_id] = copy.deepcopy(result)

    def flagged_products(self) -> list[RiskResult]:
        """Latest result per flagged product, in order of first flag."""
        with self._lock:
            return [copy.deepcopy(r) for r in self._flagged.values()]

    def supplier(self, address: str | None) -> SupplierAnalytics:
        """Stored record for address, or a zero record for an unseen address."""
        with self._lock:
            record = self._suppliers.get(address)
            if record is None:
                return SupplierAnalytics(address=address)
            return copy.deepcopy(record)

    def clear(self) -> None:
        with self._lock:
            self._suppliers.clear()
            self._flagged.clear()
