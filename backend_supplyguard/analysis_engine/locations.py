"""
Known-location reference for the location validator.

Simulated validation: a location is valid when it appears in a fixed
allow-list of city names. Real GPS/geocoding belongs behind the
LocationResolver protocol; swap the resolver, not the detector.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Protocol

from backend_supplyguard.supplyguard_logging import get_logger

logger = get_logger(__name__)

DEFAULT_LOCATIONS: dict[str, str] = {
    "Mumbai": "West India",
    "Delhi": "North India",
    "Bangalore": "South India",
    "Chennai": "South India",
    "Kolkata": "East India",
    "Hyderabad": "South India",
    "Pune": "West India",
    "System": "System",
}


class LocationResolver(Protocol):
    def is_known(self, location: Any) -> bool: ...

    def region_for(self, location: Any) -> str | None: ...


class AllowListLocationResolver:
    """Exact, case-sensitive lookup in a name -> region table."""

    def __init__(self, locations: Mapping[str, str] | None = None) -> None:
        self._locations = dict(DEFAULT_LOCATIONS if locations is None else locations)

    def is_known(self, location: Any) -> bool:
        return isinstance(location, str) and location in self._locations

    def region_for(self, location: Any) -> str | None:
        if not self.is_known(location):
            return None
        return self._locations[location]

    @property
    def names(self) -> list[str]:
        return list(self._locations)


def _load_locations_file(path: Path) -> dict[str, str] | None:
    """
    Read a location table from JSON: {"City": "Region", ...} or ["City", ...].
    Returns None when the file is missing or unusable.
    """
    if not path.is_file():
        logger.warning("locations_file_missing", path=str(path))
        return None
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("locations_file_load_failed", path=str(path), error=str(e))
        return None
    if isinstance(data, dict):
        return {str(k): str(v) for k, v in data.items() if k}
    if isinstance(data, list):
        return {str(name): "" for name in data if name}
    logger.warning("locations_file_bad_shape", path=str(path), kind=type(data).__name__)
    return None


def build_location_resolver(path: Path | None = None) -> AllowListLocationResolver:
    """Resolver from a JSON file when given and readable, else from DEFAULT_LOCATIONS."""
    if path is not None:
        table = _load_locations_file(path)
        if table is not None:
            logger.info("locations_file_loaded", path=str(path), count=len(table))
            return AllowListLocationResolver(table)
    return AllowListLocationResolver()
