"""Layout fitness and the pairwise distance inversion used by every heuristic."""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Sequence, Set, Tuple

from scipy.optimize import bisect

from ..config import active_tolerances
from ..geometry import circle_overlap, distance, intersection_area
from ..model import Area, CircleRecord, SetId

logger = logging.getLogger(__name__)

_BISECT_XTOL = 1e-10


def distance_from_intersect_area(r1: float, r2: float, overlap: float) -> float:
    """Centre distance at which circles of radii ``r1``/``r2`` share ``overlap`` area."""

    smallest = min(r1, r2)
    if smallest * smallest * math.pi <= overlap + active_tolerances().containment:
        return abs(r1 - r2)

    return float(
        bisect(
            lambda d: circle_overlap(r1, r2, d) - overlap,
            0.0,
            r1 + r2,
            xtol=_BISECT_XTOL,
            maxiter=200,
        )
    )


def add_missing_areas(areas: Sequence[Area]) -> List[Area]:
    """Append a zero-size area for every pair of sets with no explicit overlap.

    Unspecified pairwise relationships are treated as disjoint rather than
    unknown, otherwise the optimizer happily lays those sets on top of each
    other.
    """

    result = list(areas)
    ids: List[SetId] = []
    pairs: Set[Tuple[SetId, SetId]] = set()

    for area in areas:
        if len(area.sets) == 1:
            ids.append(area.sets[0])
        elif len(area.sets) == 2:
            a, b = area.sets
            pairs.add((a, b))
            pairs.add((b, a))

    ids.sort(key=str)
    added = 0
    for i, a in enumerate(ids):
        for b in ids[i + 1 :]:
            if (a, b) not in pairs:
                result.append(Area(sets=(a, b), size=0.0))
                added += 1

    if added:
        logger.debug("add_missing_areas: added %d disjoint pair(s)", added)
    return result


def loss(circles: CircleRecord, areas: Sequence[Area]) -> float:
    """Weighted squared error between achieved and requested overlap areas.

    Single-set areas are skipped, their fit is fixed by the radius. Areas
    naming a set that is absent from ``circles`` are skipped as well.
    """

    output = 0.0
    for area in areas:
        if len(area.sets) == 1:
            continue

        if len(area.sets) == 2:
            left = circles.get(area.sets[0])
            right = circles.get(area.sets[1])
            if left is None or right is None:
                continue
            overlap = circle_overlap(left.radius, right.radius, distance(left, right))
        else:
            members = [circles[s] for s in area.sets if s in circles]
            if len(members) != len(area.sets):
                continue
            overlap = intersection_area(members).area

        output += area.weight * (overlap - area.size) * (overlap - area.size)

    return output


def single_set_index(areas: Sequence[Area]) -> Tuple[List[Area], Dict[SetId, int]]:
    """Return the single-set areas in input order together with a row lookup."""

    sets: List[Area] = []
    rows: Dict[SetId, int] = {}
    for area in areas:
        if len(area.sets) == 1:
            rows[area.sets[0]] = len(sets)
            sets.append(area)
    return sets, rows


__all__ = [
    "add_missing_areas",
    "distance_from_intersect_area",
    "loss",
    "single_set_index",
]
