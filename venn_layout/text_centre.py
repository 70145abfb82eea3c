"""Label anchors: the point of largest clearance inside each area."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import numpy as np

from .config import active_tolerances
from .geometry import distance, get_center, intersection_area
from .logging_utils import apply_debug_logging
from .model import Area, Circle, CircleRecord, Point, SetId, TextCentre
from .solver.refine import nelder_mead

logger = logging.getLogger(__name__)

DISJOINT_SENTINEL = (0.0, -1000.0)


def circle_margin(current: Point, interior: Sequence[Circle], exterior: Sequence[Circle]) -> float:
    """Clearance of ``current`` from the interior boundary, capped by nearby exterior circles."""

    margin = min(c.radius - distance(c, current) for c in interior)
    for c in exterior:
        margin = min(margin, distance(c, current) - c.radius)
    return margin


def get_overlapping_circles(circles: CircleRecord) -> Dict[SetId, List[SetId]]:
    """Map every set id to the ids of circles that fully contain it."""

    small = active_tolerances().containment
    ret: Dict[SetId, List[SetId]] = {setid: [] for setid in circles}
    ids = list(circles)
    for i, a_id in enumerate(ids):
        a = circles[a_id]
        for b_id in ids[i + 1 :]:
            b = circles[b_id]
            d = distance(a, b)
            if d + b.radius <= a.radius + small:
                ret[b_id].append(a_id)
            elif d + a.radius <= b.radius + small:
                ret[a_id].append(b_id)
    return ret


def _is_inside(point: Point, interior: Sequence[Circle], exterior: Sequence[Circle]) -> bool:
    if any(distance(point, c) > c.radius for c in interior):
        return False
    if any(distance(point, c) < c.radius for c in exterior):
        return False
    return True


def compute_text_centre(interior: Sequence[Circle], exterior: Sequence[Circle]) -> TextCentre:
    """Maximise :func:`circle_margin` over the region covered by ``interior``.

    Falls back to simpler anchors when the optimum is not a valid point of
    the region (fully nested circles, empty intersections).
    """

    points: List[Point] = []
    for c in interior:
        half = c.radius / 2.0
        points.append(Point(c.x, c.y))
        points.append(Point(c.x + half, c.y))
        points.append(Point(c.x - half, c.y))
        points.append(Point(c.x, c.y + half))
        points.append(Point(c.x, c.y - half))

    initial = points[0]
    margin = circle_margin(initial, interior, exterior)
    for point in points[1:]:
        m = circle_margin(point, interior, exterior)
        if m >= margin:
            initial = point
            margin = m

    solution = nelder_mead(
        lambda p: -circle_margin(Point(float(p[0]), float(p[1])), interior, exterior),
        np.array([initial.x, initial.y]),
        max_iterations=500,
        fatol=1e-10,
    )
    ret = Point(float(solution.x[0]), float(solution.x[1]))
    if _is_inside(ret, interior, exterior):
        return TextCentre(ret.x, ret.y)

    if len(interior) == 1:
        return TextCentre(interior[0].x, interior[0].y)

    stats = intersection_area(interior)
    if not stats.arcs:
        return TextCentre(DISJOINT_SENTINEL[0], DISJOINT_SENTINEL[1], disjoint=True)
    if len(stats.arcs) == 1:
        return TextCentre(stats.arcs[0].circle.x, stats.arcs[0].circle.y)
    if exterior:
        return compute_text_centre(interior, [])
    # rarely reached: average of the intersection polygon corners
    center = get_center([arc.p1 for arc in stats.arcs])
    return TextCentre(center.x, center.y)


def compute_text_centres(
    circles: CircleRecord, areas: Sequence[Area], delimiter: str = ","
) -> Dict[str, TextCentre]:
    """Return a label anchor for each area, keyed by its set ids joined with ``delimiter``."""

    ret: Dict[str, TextCentre] = {}
    overlapped = get_overlapping_circles(circles)

    for area in areas:
        members = set(area.sets)
        # circles containing a member never push the label around
        exclude = {other for setid in area.sets for other in overlapped.get(setid, [])}

        interior = [circles[setid] for setid in area.sets if setid in circles]
        exterior = [c for setid, c in circles.items() if setid not in members and setid not in exclude]

        key = delimiter.join(str(s) for s in area.sets)
        if not interior:
            ret[key] = TextCentre(DISJOINT_SENTINEL[0], DISJOINT_SENTINEL[1], disjoint=True)
            continue

        centre = compute_text_centre(interior, exterior)
        ret[key] = centre
        if centre.disjoint and area.size > 0:
            logger.warning("area %s not represented on screen", key)
    return ret


apply_debug_logging(globals(), logger=logger, skip={"circle_margin", "compute_text_centre"})


__all__ = [
    "DISJOINT_SENTINEL",
    "circle_margin",
    "compute_text_centre",
    "compute_text_centres",
    "get_overlapping_circles",
]
