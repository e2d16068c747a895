"""
Data model for the anomaly engine: events, detection results, risk results
and per-supplier analytics.

to_dict() produces the camelCase wire format the dashboard and the
SupplyChain contract client read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class AnomalyType(str, Enum):
    TIME_GAP = "TIME_GAP_ANOMALY"
    LOCATION = "LOCATION_ANOMALY"
    DATA_COMPLETENESS = "DATA_COMPLETENESS_ANOMALY"
    DUPLICATE = "DUPLICATE_ANOMALY"
    ACTOR_BEHAVIOR = "ACTOR_BEHAVIOR_ANOMALY"


@dataclass
class Event:
    """
    One stage transition in an item's history.

    Any field may be None when the ledger entry lacks it; the engine reports
    that as a completeness anomaly rather than rejecting the history.
    """

    stage: int | None
    timestamp: int | None
    location: str | None
    actor: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage,
            "timestamp": self.timestamp,
            "location": self.location,
            "actor": self.actor,
        }


@dataclass
class DetectionResult:
    """Output of one detector. details are detector-specific evidence records."""

    anomaly_detected: bool
    type: AnomalyType
    severity: Severity
    details: list[dict[str, Any]] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "anomalyDetected": self.anomaly_detected,
            "type": self.type.value,
            "severity": self.severity.value,
            "details": [dict(d) for d in self.details],
            "description": self.description,
        }


@dataclass
class RiskResult:
    """Result of one full evaluation of an item's history."""

    product_id: Any
    risk_score: int
    is_flagged: bool
    anomalies: list[DetectionResult]
    recommendation: str
    risk_level: str
    timestamp: str
    """ISO 8601 (UTC) time of the evaluation."""

    @property
    def anomaly_types(self) -> list[str]:
        return [a.type.value for a in self.anomalies]

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "riskScore": self.risk_score,
            "isFlagged": self.is_flagged,
            "anomalies": [a.to_dict() for a in self.anomalies],
            "recommendation": self.recommendation,
            "riskLevel": self.risk_level,
            "timestamp": self.timestamp,
        }


@dataclass
class SupplierAnalytics:
    """
    Cumulative counters for one participant address.

    total_products counts history rows attributed to the address across all
    evaluations (not distinct items). flagged_products counts those rows that
    belonged to a flagged item. stages holds distinct stage codes in first-seen order.
    Rows without an actor are tallied under address None.
    """

    address: str | None
    total_products: int = 0
    flagged_products: int = 0
    stages: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "totalProducts": self.total_products,
            "flaggedProducts": self.flagged_products,
            "stages": list(self.stages),
        }
