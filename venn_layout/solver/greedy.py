"""Greedy incremental placement, most-overlapped set first."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set

from ..config import active_tolerances
from ..geometry import circle_circle_intersection
from ..logging_utils import apply_debug_logging
from ..model import Area, Circle, CircleRecord, LayoutError, LayoutOptions, Point, SetId, radius_for_size
from .loss import distance_from_intersect_area, loss

logger = logging.getLogger(__name__)

_UNPLACED = 1e10


@dataclass
class _Overlap:
    set: SetId
    size: float
    weight: float


def _initial_circles(areas: Sequence[Area]) -> CircleRecord:
    circles: CircleRecord = {}
    for area in areas:
        if len(area.sets) != 1:
            continue
        setid = area.sets[0]
        circles[setid] = Circle(
            setid=setid,
            x=_UNPLACED,
            y=_UNPLACED,
            radius=radius_for_size(area.size),
            size=area.size,
            rowid=len(circles),
        )
    return circles


def _collect_overlaps(circles: CircleRecord, pairwise: Sequence[Area]) -> Dict[SetId, List[_Overlap]]:
    overlaps: Dict[SetId, List[_Overlap]] = {setid: [] for setid in circles}
    small = active_tolerances().containment
    for area in pairwise:
        left, right = area.sets
        if left not in circles or right not in circles:
            raise LayoutError(f"overlap {area.key} references an undeclared set")

        weight = area.weight
        # full subsets constrain placement only through their distance
        if area.size + small >= min(circles[left].size, circles[right].size):
            weight = 0.0

        overlaps[left].append(_Overlap(right, area.size, weight))
        overlaps[right].append(_Overlap(left, area.size, weight))
    return overlaps


def _candidate_points(circle: Circle, neighbours: Sequence[_Overlap], circles: CircleRecord) -> List[Point]:
    points: List[Point] = []
    for j, item in enumerate(neighbours):
        p1 = circles[item.set]
        d1 = distance_from_intersect_area(circle.radius, p1.radius, item.size)

        # axis-aligned positions read best
        points.append(Point(p1.x + d1, p1.y))
        points.append(Point(p1.x - d1, p1.y))
        points.append(Point(p1.x, p1.y + d1))
        points.append(Point(p1.x, p1.y - d1))

        for other in neighbours[j + 1 :]:
            p2 = circles[other.set]
            d2 = distance_from_intersect_area(circle.radius, p2.radius, other.size)
            points.extend(
                circle_circle_intersection(
                    Circle(setid=p1.setid, x=p1.x, y=p1.y, radius=d1),
                    Circle(setid=p2.setid, x=p2.x, y=p2.y, radius=d2),
                )
            )
    return points


def greedy_layout(areas: Sequence[Area], options: Optional[LayoutOptions] = None) -> CircleRecord:
    """Place sets one at a time so their pairwise overlaps come out about right."""

    circles = _initial_circles(areas)
    pairwise = [area for area in areas if len(area.sets) == 2]
    set_overlaps = _collect_overlaps(circles, pairwise)
    if not circles:
        return circles

    totals = [
        (setid, sum(item.size * item.weight for item in items)) for setid, items in set_overlaps.items()
    ]
    totals.sort(key=lambda entry: entry[1], reverse=True)

    positioned: Set[SetId] = set()

    def position_set(point: Point, setid: SetId) -> None:
        circles[setid].x = point.x
        circles[setid].y = point.y
        positioned.add(setid)

    position_set(Point(0.0, 0.0), totals[0][0])

    for setid, _ in totals[1:]:
        neighbours = [item for item in set_overlaps[setid] if item.set in positioned]
        if not neighbours:
            raise LayoutError(f"missing pairwise overlap information for set {setid!r}")
        neighbours.sort(key=lambda item: item.size, reverse=True)

        circle = circles[setid]
        points = _candidate_points(circle, neighbours, circles)

        best_loss = 1e50
        best_point = points[0]
        for point in points:
            circle.x = point.x
            circle.y = point.y
            local_loss = loss(circles, pairwise)
            if local_loss < best_loss:
                best_loss = local_loss
                best_point = point

        logger.debug("greedy_layout: placed %r at (%.6g, %.6g) loss=%.6g", setid, best_point.x, best_point.y, best_loss)
        position_set(best_point, setid)

    return circles


apply_debug_logging(globals(), logger=logger)


__all__ = ["greedy_layout"]
