"""
Pytest tests for the analyze_history CLI tool.
"""

from __future__ import annotations

import json

import pytest

from backend_supplyguard.tools.analyze_history import EXIT_FLAGGED, EXIT_INPUT_ERROR, EXIT_OK, main

FAST_HISTORY = [
    {"stage": 0, "timestamp": 0, "location": "Mumbai", "actor": "A"},
    {"stage": 1, "timestamp": 1800, "location": "Mumbai", "actor": "A"},
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("RISK_THRESHOLD", raising=False)
    monkeypatch.delenv("TIME_GAP_WARNING", raising=False)


def _write(tmp_path, payload, name="history.json"):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_history_array_not_flagged(tmp_path, capsys):
    code = main([str(_write(tmp_path, FAST_HISTORY))])
    assert code == EXIT_OK
    out = capsys.readouterr().out
    assert '"riskScore": 25' in out
    assert '"productId": "cli"' in out


def test_product_object_with_lower_threshold_is_flagged(tmp_path, capsys):
    path = _write(tmp_path, {"productId": 7, "productHistory": FAST_HISTORY})
    code = main([str(path), "--risk-threshold", "20"])
    assert code == EXIT_FLAGGED
    out = capsys.readouterr().out
    assert '"productId": 7' in out
    assert '"isFlagged": true' in out


def test_product_id_option_overrides_file(tmp_path, capsys):
    path = _write(tmp_path, {"productId": 7, "productHistory": FAST_HISTORY})
    main([str(path), "--product-id", "override"])
    assert '"productId": "override"' in capsys.readouterr().out


def test_invalid_json_is_input_error(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    assert main([str(path)]) == EXIT_INPUT_ERROR
    assert "Cannot analyze" in capsys.readouterr().err


def test_missing_file_is_input_error(tmp_path):
    assert main([str(tmp_path / "absent.json")]) == EXIT_INPUT_ERROR


def test_object_without_history_is_input_error(tmp_path):
    assert main([str(_write(tmp_path, {"productId": 1}))]) == EXIT_INPUT_ERROR
