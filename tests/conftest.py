"""
Pytest fixtures for SupplyGuard tests. Each test gets its own analyzer, so
supplier analytics and flagged products never leak between tests.
"""

from __future__ import annotations

import pytest

from backend_supplyguard.analysis_engine import Event, RiskAnalyzer

BASE_TS = 1_700_000_000
HOUR = 3600


@pytest.fixture
def analyzer():
    """Fresh analyzer with the default threshold (70) and default detectors."""
    return RiskAnalyzer(risk_threshold=70)


@pytest.fixture
def client(analyzer):
    """FastAPI TestClient over a fresh app wired to the analyzer fixture."""
    from fastapi.testclient import TestClient

    from backend_supplyguard.api_server.server import create_app

    return TestClient(create_app(analyzer=analyzer))


@pytest.fixture
def clean_history():
    """Five stages, two hours apart, known locations, one actor per stage: no anomaly."""
    return [
        Event(stage=0, timestamp=BASE_TS, location="System", actor="0xowner"),
        Event(stage=1, timestamp=BASE_TS + 2 * HOUR, location="Mumbai", actor="0xsupplier"),
        Event(stage=2, timestamp=BASE_TS + 4 * HOUR, location="Pune", actor="0xmanufacturer"),
        Event(stage=3, timestamp=BASE_TS + 6 * HOUR, location="Delhi", actor="0xdistributor"),
        Event(stage=4, timestamp=BASE_TS + 8 * HOUR, location="Delhi", actor="0xretailer"),
    ]


@pytest.fixture
def flagged_history():
    """Replayed Distribution entry at an unknown location: time gap + location + duplicate = 75."""
    return [
        Event(stage=2, timestamp=BASE_TS, location="Mumbai", actor="0xmanufacturer"),
        Event(stage=3, timestamp=BASE_TS + 2 * HOUR, location="Atlantis", actor="0xdistributor"),
        Event(stage=3, timestamp=BASE_TS + 2 * HOUR, location="Atlantis", actor="0xdistributor"),
    ]
