"""
Supply-chain stage codes and their human-readable names.

Codes match the on-chain SupplyChain contract:
Init -> RawMaterialSupply -> Manufacture -> Distribution -> Retail -> Sold.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class Stage(IntEnum):
    INIT = 0
    RAW_MATERIAL_SUPPLY = 1
    MANUFACTURE = 2
    DISTRIBUTION = 3
    RETAIL = 4
    SOLD = 5


STAGE_NAMES: tuple[str, ...] = (
    "Init",
    "RawMaterialSupply",
    "Manufacture",
    "Distribution",
    "Retail",
    "Sold",
)

UNKNOWN_STAGE = "Unknown"


def stage_name(stage: Any) -> str:
    """Label for a stage code; anything outside 0..5 (or None) is 'Unknown'."""
    if isinstance(stage, bool) or not isinstance(stage, int):
        return UNKNOWN_STAGE
    if 0 <= stage < len(STAGE_NAMES):
        return STAGE_NAMES[stage]
    return UNKNOWN_STAGE
