"""
Analysis engine package — counterfeit risk scoring for product histories.

Consumes normalized stage events, applies rule-based detectors and produces
risk scores, anomalies and supplier analytics.
"""

from backend_supplyguard.analysis_engine.analytics_store import AnalyticsStore
from backend_supplyguard.analysis_engine.detectors import (
    DEFAULT_DETECTORS,
    DetectionConfig,
    DetectorSpec,
    check_actor_behavior,
    check_completeness,
    check_duplicates,
    check_locations,
    check_time_gaps,
    run_detectors,
)
from backend_supplyguard.analysis_engine.locations import (
    DEFAULT_LOCATIONS,
    AllowListLocationResolver,
    LocationResolver,
    build_location_resolver,
)
from backend_supplyguard.analysis_engine.models import (
    AnomalyType,
    DetectionResult,
    Event,
    RiskResult,
    Severity,
    SupplierAnalytics,
)
from backend_supplyguard.analysis_engine.risk_analyzer import RiskAnalyzer
from backend_supplyguard.analysis_engine.scorer import (
    compute_risk_score,
    get_recommendation,
    risk_level_for,
)
from backend_supplyguard.analysis_engine.stages import Stage, stage_name

__all__ = [
    "AnalyticsStore",
    "DEFAULT_DETECTORS",
    "DetectionConfig",
    "DetectorSpec",
    "check_actor_behavior",
    "check_completeness",
    "check_duplicates",
    "check_locations",
    "check_time_gaps",
    "run_detectors",
    "DEFAULT_LOCATIONS",
    "AllowListLocationResolver",
    "LocationResolver",
    "build_location_resolver",
    "AnomalyType",
    "DetectionResult",
    "Event",
    "RiskResult",
    "Severity",
    "SupplierAnalytics",
    "RiskAnalyzer",
    "compute_risk_score",
    "get_recommendation",
    "risk_level_for",
    "Stage",
    "stage_name",
]
