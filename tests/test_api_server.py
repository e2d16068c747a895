"""
Pytest tests for the FastAPI server (analyze-risk, flagged products,
supplier analytics, clear-cache, health).
"""

from __future__ import annotations

from backend_supplyguard.analysis_engine import DEFAULT_DETECTORS, DetectorSpec, RiskAnalyzer
from backend_supplyguard.api_server.server import (
    INVALID_BODY_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    PRODUCT_ID_TYPE_MESSAGE,
    create_app,
)

BASE_TS = 1_700_000_000

FAST_HISTORY = [
    {"stage": "0", "timestamp": "0", "location": "Mumbai", "actor": "0xA"},
    {"stage": "1", "timestamp": "1800", "location": "Mumbai", "actor": "0xA"},
]

# Replayed Distribution entry at an unknown location (web3 positional arrays)
FLAGGED_HISTORY = [
    ["2", str(BASE_TS), "Mumbai", "0xM"],
    ["3", str(BASE_TS + 7200), "Atlantis", "0xD"],
    ["3", str(BASE_TS + 7200), "Atlantis", "0xD"],
]


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "service": "anomaly-detection"}


def test_analyze_risk(client):
    r = client.post("/api/analyze-risk", json={"productId": 1, "productHistory": FAST_HISTORY})
    assert r.status_code == 200
    data = r.json()
    assert data["productId"] == 1
    assert data["riskScore"] == 25
    assert data["isFlagged"] is False
    assert data["riskLevel"] == "LOW"
    assert data["recommendation"] == "LOW RISK: Product appears authentic"
    assert len(data["anomalies"]) == 1
    anomaly = data["anomalies"][0]
    assert anomaly["anomalyDetected"] is True
    assert anomaly["type"] == "TIME_GAP_ANOMALY"
    assert anomaly["severity"] == "MEDIUM"
    assert anomaly["details"][0]["duration"] == "30 minutes"
    assert data["timestamp"]


def test_analyze_risk_missing_fields(client):
    for body in ({}, {"productId": 1}, {"productHistory": []}, {"productId": "", "productHistory": []}):
        r = client.post("/api/analyze-risk", json=body)
        assert r.status_code == 400
        assert r.json()["error"] == MISSING_FIELDS_MESSAGE


def test_analyze_risk_history_not_array(client):
    r = client.post("/api/analyze-risk", json={"productId": 1, "productHistory": "oops"})
    assert r.status_code == 400
    assert r.json()["code"] == "invalid_history"


def test_analyze_risk_product_id_wrong_type(client):
    """Ids other than strings and integers are rejected with 400, not a schema 422."""
    for product_id in (1.5, {"id": 1}, [1], True):
        r = client.post("/api/analyze-risk", json={"productId": product_id, "productHistory": []})
        assert r.status_code == 400
        assert r.json() == {"error": PRODUCT_ID_TYPE_MESSAGE, "code": "invalid_request"}
    assert client.get("/api/flagged-products").json() == {"flaggedProducts": []}


def test_analyze_risk_body_not_object(client):
    for kwargs in ({"json": [1, 2]}, {"content": b"{not json", "headers": {"Content-Type": "application/json"}}):
        r = client.post("/api/analyze-risk", **kwargs)
        assert r.status_code == 400
        assert r.json() == {"error": INVALID_BODY_MESSAGE, "code": "invalid_request"}


def test_analyze_risk_empty_history_is_valid(client):
    r = client.post("/api/analyze-risk", json={"productId": "abc", "productHistory": []})
    assert r.status_code == 200
    assert r.json()["riskScore"] == 0


def test_flagged_products_and_supplier_analytics(client):
    r = client.post("/api/analyze-risk", json={"productId": 9, "productHistory": FLAGGED_HISTORY})
    assert r.json()["riskScore"] == 75
    assert r.json()["isFlagged"] is True

    flagged = client.get("/api/flagged-products").json()["flaggedProducts"]
    assert [p["productId"] for p in flagged] == [9]

    analytics = client.get("/api/supplier-analytics/0xD").json()
    assert analytics == {"address": "0xD", "totalProducts": 2, "flaggedProducts": 2, "stages": [3]}


def test_supplier_analytics_unseen(client):
    r = client.get("/api/supplier-analytics/0xnobody")
    assert r.status_code == 200
    assert r.json() == {"address": "0xnobody", "totalProducts": 0, "flaggedProducts": 0, "stages": []}


def test_clear_cache(client):
    client.post("/api/analyze-risk", json={"productId": 9, "productHistory": FLAGGED_HISTORY})
    r = client.post("/api/clear-cache")
    assert r.status_code == 200
    assert r.json() == {"message": "Cache cleared successfully"}
    assert client.get("/api/flagged-products").json() == {"flaggedProducts": []}
    assert client.get("/api/supplier-analytics/0xD").json()["totalProducts"] == 0


def test_internal_error_is_500_without_side_effects():
    """A failing detector surfaces as 500 and no analytics are recorded."""
    from fastapi.testclient import TestClient

    def boom(history, cfg):
        raise RuntimeError("detector failure")

    analyzer = RiskAnalyzer(risk_threshold=70, detectors=DEFAULT_DETECTORS + (DetectorSpec("boom", 0, boom),))
    client = TestClient(create_app(analyzer=analyzer))
    r = client.post("/api/analyze-risk", json={"productId": 1, "productHistory": FLAGGED_HISTORY})
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error", "message": "detector failure"}
    assert analyzer.get_supplier_analytics("0xD").total_products == 0


def test_request_id_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"
    generated = client.get("/health").headers["X-Request-ID"]
    assert len(generated) == 32
