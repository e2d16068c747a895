"""
Risk score computation — weighted sum of triggered detectors.

Responsibilities:
- Sum detector weights into a 0–100 risk score.
- Map a score to a recommendation and a risk level for the dashboard.
"""

from __future__ import annotations

from typing import Iterable

from backend_supplyguard.analysis_engine.detectors import DetectorSpec
from backend_supplyguard.analysis_engine.models import DetectionResult

SCORE_MIN = 0
SCORE_MAX = 100

# Recommendation / risk level bands (score >= band)
BAND_CRITICAL = 80
BAND_HIGH = 70
BAND_MEDIUM = 40

RECOMMENDATION_CRITICAL = "IMMEDIATE ACTION REQUIRED: Product should be recalled and investigated"
RECOMMENDATION_HIGH = "HIGH RISK: Flag product and investigate before allowing sale"
RECOMMENDATION_MEDIUM = "MEDIUM RISK: Monitor closely and verify with participants"
RECOMMENDATION_LOW = "LOW RISK: Product appears authentic"

RISK_LEVEL_CRITICAL = "CRITICAL"
RISK_LEVEL_HIGH = "HIGH"
RISK_LEVEL_MEDIUM = "MEDIUM"
RISK_LEVEL_LOW = "LOW"


def clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def compute_risk_score(results: Iterable[tuple[DetectorSpec, DetectionResult]]) -> int:
    """Sum weights of detectors that found an anomaly, clamped to [0, 100]."""
    total = sum(spec.weight for spec, result in results if result.anomaly_detected)
    return clamp(total, SCORE_MIN, SCORE_MAX)


def get_recommendation(risk_score: int) -> str:
    if risk_score >= BAND_CRITICAL:
        return RECOMMENDATION_CRITICAL
    if risk_score >= BAND_HIGH:
        return RECOMMENDATION_HIGH
    if risk_score >= BAND_MEDIUM:
        return RECOMMENDATION_MEDIUM
    return RECOMMENDATION_LOW


def risk_level_for(risk_score: int) -> str:
    if risk_score >= BAND_CRITICAL:
        return RISK_LEVEL_CRITICAL
    if risk_score >= BAND_HIGH:
        return RISK_LEVEL_HIGH
    if risk_score >= BAND_MEDIUM:
        return RISK_LEVEL_MEDIUM
    return RISK_LEVEL_LOW
