"""
History normalizer — raw ledger/API history entries to Event models.

The SupplyChain contract client returns history entries as structs that
serialize either to JSON objects ({"stage": "2", "timestamp": "1700000000",
"location": "Pune", "actor": "0xabc..."}, sometimes with positional keys
"0".."3" as well) or to positional arrays. Numbers usually arrive as strings.

Only structural problems raise (history not a list, an entry neither object
nor array). Missing or unparseable field values become None so the
completeness detector can report them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from backend_supplyguard.analysis_engine.models import Event
from backend_supplyguard.core.exceptions import InvalidHistoryError
from backend_supplyguard.supplyguard_logging import get_logger

logger = get_logger(__name__)

FIELDS = ("stage", "timestamp", "location", "actor")


def _to_int(value: Any) -> int | None:
    """int or integral string -> int; floats with no fraction accepted; anything else -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            try:
                as_float = float(raw)
            except ValueError:
                return None
            return int(as_float) if as_float.is_integer() else None
    return None


def _to_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _field(entry: Mapping[str, Any], index: int) -> Any:
    name = FIELDS[index]
    if name in entry:
        return entry[name]
    return entry.get(str(index))


def normalize_event(entry: Any, index: int = 0) -> Event:
    """Convert one raw history entry (object or positional array) into an Event."""
    if isinstance(entry, Mapping):
        raw = [_field(entry, i) for i in range(len(FIELDS))]
    elif isinstance(entry, Sequence) and not isinstance(entry, (str, bytes)):
        raw = list(entry[: len(FIELDS)]) + [None] * (len(FIELDS) - len(entry))
    else:
        raise InvalidHistoryError(
            f"History entry {index} must be an object or an array, got {type(entry).__name__}",
            index=index,
        )
    stage, timestamp, location, actor = raw
    return Event(
        stage=_to_int(stage),
        timestamp=_to_int(timestamp),
        location=_to_str(location),
        actor=_to_str(actor),
    )


def normalize_history(raw_history: Any) -> list[Event]:
    """Convert a raw history list into Events, preserving order."""
    if not isinstance(raw_history, (list, tuple)):
        raise InvalidHistoryError(
            f"productHistory must be an array, got {type(raw_history).__name__}"
        )
    events = [normalize_event(entry, i) for i, entry in enumerate(raw_history)]
    logger.debug("history_normalized", event_count=len(events))
    return events
