"""Numeric tolerances shared by the layout stages."""

from __future__ import annotations

import copy
from dataclasses import dataclass

SMALL = 1e-10
BEST_OF_EPSILON = 1e-8
BEST_OF_MIN_SETS = 8


@dataclass
class ToleranceConfig:
    """Absolute tolerances used when classifying set relationships.

    ``containment`` decides when a pairwise overlap counts as full subset or
    as disjoint; ``best_of`` is the margin by which constrained MDS must beat
    the greedy layout before it is preferred.
    """

    containment: float = SMALL
    best_of: float = BEST_OF_EPSILON
    best_of_min_sets: int = BEST_OF_MIN_SETS


_TOLERANCE_CONFIG = ToleranceConfig()


def get_tolerance_config() -> ToleranceConfig:
    return copy.deepcopy(_TOLERANCE_CONFIG)


def set_tolerance_config(config: ToleranceConfig) -> None:
    global _TOLERANCE_CONFIG
    _TOLERANCE_CONFIG = copy.deepcopy(config)


def active_tolerances() -> ToleranceConfig:
    """Return the live configuration without copying (read-only use)."""

    return _TOLERANCE_CONFIG
