"""
Rule-based anomaly detectors for an item's stage history.

Five independent detectors: time gaps, location validity, data completeness,
duplicate events and actor behavior. Each is a pure function of the history
and a DetectionConfig, returns a DetectionResult (anomaly or not) and never
raises for any history, including an empty one. No ML; thresholds are
configurable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from backend_supplyguard.analysis_engine.locations import (
    AllowListLocationResolver,
    LocationResolver,
)
from backend_supplyguard.analysis_engine.models import (
    AnomalyType,
    DetectionResult,
    Event,
    Severity,
)
from backend_supplyguard.analysis_engine.stages import stage_name
from backend_supplyguard.config.env import DEFAULT_TIME_GAP_WARNING_SEC

SECONDS_PER_MINUTE = 60
SECONDS_PER_DAY = 86400

FAST_TRANSITION_SEC = 3600
# More than this many suspicious gaps in one history -> HIGH
TIME_GAP_HIGH_SEVERITY_COUNT = 2
# An actor with more than this many events in one history is suspicious
ACTOR_MAX_EVENTS = 2

ISSUE_FAST = "Impossibly fast transition"
ISSUE_SLOW = "Unusually long delay"
ISSUE_UNKNOWN_LOCATION = "Unknown or unverified location"
ISSUE_MISSING_DATA = "Missing required data fields"
ISSUE_DUPLICATE = "Duplicate event detected"
ISSUE_ACTOR = "Same actor in multiple stages (possible fraud)"


@dataclass
class DetectionConfig:
    """Thresholds and reference data shared by the detectors."""

    time_gap_warning_sec: int = DEFAULT_TIME_GAP_WARNING_SEC
    fast_transition_sec: int = FAST_TRANSITION_SEC
    location_resolver: LocationResolver = field(default_factory=AllowListLocationResolver)


def _missing(value: Any) -> bool:
    """None and "" are missing; 0 and whitespace are real values."""
    return value is None or value == ""


def _iso_utc(timestamp: Any) -> str | None:
    """Unix seconds -> '2024-01-01T00:00:00.000Z'."""
    if timestamp is None:
        return None
    try:
        dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError, TypeError):
        return str(timestamp)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def check_time_gaps(history: Sequence[Event], config: DetectionConfig) -> DetectionResult:
    """
    Flag transitions faster than fast_transition_sec or slower than
    time_gap_warning_sec. Deltas are taken between consecutive entries as
    given; ordering is not enforced. Pairs missing a timestamp are skipped.
    """
    gaps: list[dict[str, Any]] = []
    for prev, cur in zip(history, history[1:]):
        if _missing(prev.timestamp) or _missing(cur.timestamp):
            continue
        delta = cur.timestamp - prev.timestamp
        if delta < config.fast_transition_sec:
            gaps.append({
                "from": stage_name(prev.stage),
                "to": stage_name(cur.stage),
                "duration": f"{delta // SECONDS_PER_MINUTE} minutes",
                "issue": ISSUE_FAST,
            })
        if delta > config.time_gap_warning_sec:
            gaps.append({
                "from": stage_name(prev.stage),
                "to": stage_name(cur.stage),
                "duration": f"{delta // SECONDS_PER_DAY} days",
                "issue": ISSUE_SLOW,
            })
    return DetectionResult(
        anomaly_detected=len(gaps) > 0,
        type=AnomalyType.TIME_GAP,
        severity=Severity.HIGH if len(gaps) > TIME_GAP_HIGH_SEVERITY_COUNT else Severity.MEDIUM,
        details=gaps,
        description="Suspicious time gaps detected between stages",
    )


def check_locations(history: Sequence[Event], config: DetectionConfig) -> DetectionResult:
    invalid = [
        {
            "location": event.location,
            "stage": stage_name(event.stage),
            "issue": ISSUE_UNKNOWN_LOCATION,
        }
        for event in history
        if not config.location_resolver.is_known(event.location)
    ]
    return DetectionResult(
        anomaly_detected=len(invalid) > 0,
        type=AnomalyType.LOCATION,
        severity=Severity.MEDIUM,
        details=invalid,
        description="Invalid or unverified locations detected",
    )


def check_completeness(history: Sequence[Event], config: DetectionConfig) -> DetectionResult:
    missing = [
        {"stage": stage_name(event.stage), "issue": ISSUE_MISSING_DATA}
        for event in history
        if _missing(event.timestamp) or _missing(event.location) or event.stage is None
    ]
    return DetectionResult(
        anomaly_detected=len(missing) > 0,
        type=AnomalyType.DATA_COMPLETENESS,
        severity=Severity.LOW,
        details=missing,
        description="Incomplete data detected in product history",
    )


def check_duplicates(history: Sequence[Event], config: DetectionConfig) -> DetectionResult:
    """Second and later events sharing (stage, timestamp, actor); the first occurrence is not reported."""
    seen: set[tuple[Any, Any, Any]] = set()
    duplicates: list[dict[str, Any]] = []
    for event in history:
        key = (event.stage, event.timestamp, event.actor)
        if key in seen:
            duplicates.append({
                "stage": stage_name(event.stage),
                "timestamp": _iso_utc(event.timestamp),
                "issue": ISSUE_DUPLICATE,
            })
        seen.add(key)
    return DetectionResult(
        anomaly_detected=len(duplicates) > 0,
        type=AnomalyType.DUPLICATE,
        severity=Severity.HIGH,
        details=duplicates,
        description="Duplicate product events detected - possible counterfeit",
    )


def check_actor_behavior(history: Sequence[Event], config: DetectionConfig) -> DetectionResult:
    """
    Actors responsible for more than ACTOR_MAX_EVENTS events of one item.

    Rows without an actor are grouped together under None, so three or more
    unattributed rows are suspicious as well.
    """
    actor_stages: dict[str | None, list[Any]] = {}
    for event in history:
        actor_stages.setdefault(event.actor, []).append(event.stage)

    suspicious = [
        {
            "actor": actor,
            "stages": [stage_name(s) for s in stages],
            "issue": ISSUE_ACTOR,
        }
        for actor, stages in actor_stages.items()
        if len(stages) > ACTOR_MAX_EVENTS
    ]
    return DetectionResult(
        anomaly_detected=len(suspicious) > 0,
        type=AnomalyType.ACTOR_BEHAVIOR,
        severity=Severity.MEDIUM,
        details=suspicious,
        description="Suspicious actor behavior patterns detected",
    )


Detector = Callable[[Sequence[Event], DetectionConfig], DetectionResult]


@dataclass(frozen=True)
class DetectorSpec:
    """A registered detector and the score it adds when it fires."""

    name: str
    weight: int
    detect: Detector


# Order is the order anomalies appear in a RiskResult. Weights sum to 100.
DEFAULT_DETECTORS: tuple[DetectorSpec, ...] = (
    DetectorSpec("time_gap", 25, check_time_gaps),
    DetectorSpec("location", 20, check_locations),
    DetectorSpec("completeness", 15, check_completeness),
    DetectorSpec("duplicate", 30, check_duplicates),
    DetectorSpec("actor_behavior", 10, check_actor_behavior),
)


def run_detectors(
    history: Sequence[Event],
    config: DetectionConfig | None = None,
    detectors: Sequence[DetectorSpec] = DEFAULT_DETECTORS,
) -> list[tuple[DetectorSpec, DetectionResult]]:
    """Run every detector; no short-circuit after an early hit."""
    cfg = config or DetectionConfig()
    events = list(history)
    return [(spec, spec.detect(events, cfg)) for spec in detectors]
