"""
Risk analyzer — the engine entry point.

analyze_product runs every detector over a product history, sums their
weights into a 0–100 risk score, decides the flag and recommendation, then
records supplier analytics and (when flagged) the result. Detection is pure;
shared state is only touched after the whole result exists, so a failing
detector leaves analytics untouched.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

from backend_supplyguard.analysis_engine.analytics_store import AnalyticsStore
from backend_supplyguard.analysis_engine.detectors import (
    DEFAULT_DETECTORS,
    DetectionConfig,
    DetectorSpec,
    run_detectors,
)
from backend_supplyguard.analysis_engine.locations import LocationResolver, build_location_resolver
from backend_supplyguard.analysis_engine.models import Event, RiskResult, SupplierAnalytics
from backend_supplyguard.analysis_engine.scorer import (
    compute_risk_score,
    get_recommendation,
    risk_level_for,
)
from backend_supplyguard.config import Settings, get_settings
from backend_supplyguard.supplyguard_logging import bind_product, get_logger

logger = get_logger(__name__)


class RiskAnalyzer:
    """
    Stateless detectors plus an owned AnalyticsStore.

    One instance per process (or per test). Safe to call from concurrent requests.
    """

    def __init__(
        self,
        risk_threshold: int,
        detection_config: DetectionConfig | None = None,
        detectors: Sequence[DetectorSpec] = DEFAULT_DETECTORS,
        store: AnalyticsStore | None = None,
    ) -> None:
        self.risk_threshold = risk_threshold
        self.detection_config = detection_config or DetectionConfig()
        self.detectors = tuple(detectors)
        self.store = store if store is not None else AnalyticsStore()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        location_resolver: LocationResolver | None = None,
    ) -> RiskAnalyzer:
        s = settings or get_settings()
        resolver = location_resolver or build_location_resolver(s.locations_path)
        return cls(
            risk_threshold=s.risk_threshold,
            detection_config=DetectionConfig(
                time_gap_warning_sec=s.time_gap_warning_sec,
                location_resolver=resolver,
            ),
        )

    def assess(self, product_id: Any, history: Sequence[Event]) -> RiskResult:
        """Compute the RiskResult without touching analytics or the flagged registry."""
        results = run_detectors(history, self.detection_config, self.detectors)
        risk_score = compute_risk_score(results)
        return RiskResult(
            product_id=product_id,
            risk_score=risk_score,
            is_flagged=risk_score >= self.risk_threshold,
            anomalies=[result for _, result in results if result.anomaly_detected],
            recommendation=get_recommendation(risk_score),
            risk_level=risk_level_for(risk_score),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def analyze_product(self, product_id: Any, history: Sequence[Event]) -> RiskResult:
        """
        Score a product history and record its side effects.

        Side effects are not idempotent: analyzing the same history twice
        counts its rows twice in supplier analytics.
        """
        events = list(history)
        result = self.assess(product_id, events)
        self.store.record_evaluation(events, result)

        log = bind_product(product_id)
        log.info(
            "risk_analysis_completed",
            risk_score=result.risk_score,
            is_flagged=result.is_flagged,
            anomaly_types=result.anomaly_types,
            history_length=len(events),
        )
        if result.is_flagged:
            log.warning(
                "product_flagged",
                risk_score=result.risk_score,
                threshold=self.risk_threshold,
                risk_level=result.risk_level,
            )
        return result

    def get_flagged_products(self) -> list[RiskResult]:
        return self.store.flagged_products()

    def get_supplier_analytics(self, address: str | None) -> SupplierAnalytics:
        return self.store.supplier(address)

    def clear_cache(self) -> None:
        """Clear supplier analytics and flagged products together."""
        self.store.clear()
        logger.info("analytics_cache_cleared")

    # Short names used by callers that think in evaluate/list/reset terms
    evaluate = analyze_product
    list_flagged = get_flagged_products
    get_analytics = get_supplier_analytics
    reset = clear_cache
