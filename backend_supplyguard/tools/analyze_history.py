#!/usr/bin/env python3
"""
Analyze one product history from a JSON file and print the risk result.

The file holds either a history array or {"productId": ..., "productHistory": [...]}.
Runs a fresh analyzer (no shared analytics), so output depends only on the file
and the thresholds.

Exit codes: 0 not flagged, 2 flagged, 1 unreadable or invalid input.

Usage:
  python -m backend_supplyguard.tools.analyze_history history.json
  python -m backend_supplyguard.tools.analyze_history history.json --product-id 7 --risk-threshold 50
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from backend_supplyguard.analysis_engine import RiskAnalyzer
from backend_supplyguard.config import load_settings
from backend_supplyguard.core.exceptions import InvalidRequestError
from backend_supplyguard.ingestion import normalize_history
from backend_supplyguard.supplyguard_logging import configure_structlog, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_FLAGGED = 2

DEFAULT_PRODUCT_ID = "cli"


def _read_payload(path: Path) -> tuple[Any, Any]:
    """Return (product_id or None, raw history) from the JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        if "productHistory" not in data:
            raise InvalidRequestError("JSON object must contain productHistory")
        return data.get("productId"), data["productHistory"]
    return None, data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score a product history JSON file for counterfeit risk.",
    )
    parser.add_argument("path", type=Path, help="JSON file with a history array or {productId, productHistory}")
    parser.add_argument("--product-id", default=None, help="Product id (overrides productId in the file)")
    parser.add_argument("--risk-threshold", type=int, default=None, help="Flag threshold (default: RISK_THRESHOLD or 70)")
    parser.add_argument(
        "--time-gap-warning",
        type=int,
        default=None,
        help="Long-delay threshold in seconds (default: TIME_GAP_WARNING or 86400)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    if args.risk_threshold is not None:
        settings = replace(settings, risk_threshold=args.risk_threshold)
    if args.time_gap_warning is not None:
        settings = replace(settings, time_gap_warning_sec=args.time_gap_warning)
    configure_structlog(settings.log_level, settings.log_format)

    try:
        file_product_id, raw_history = _read_payload(args.path)
        history = normalize_history(raw_history)
    except (OSError, ValueError, InvalidRequestError) as e:
        logger.error("analyze_history_input_error", path=str(args.path), error=str(e))
        print(f"Cannot analyze {args.path}: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    product_id = args.product_id or file_product_id or DEFAULT_PRODUCT_ID
    analyzer = RiskAnalyzer.from_settings(settings)
    result = analyzer.analyze_product(product_id, history)
    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_FLAGGED if result.is_flagged else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
