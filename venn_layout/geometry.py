"""Circle geometry: pairwise lens areas, intersection points, N-way overlaps."""

from __future__ import annotations

import math
from typing import Iterable, List, Protocol, Sequence

from .config import SMALL
from .model import Arc, Circle, IntersectionStats, Point


class _HasXY(Protocol):
    x: float
    y: float


class _Disc(_HasXY, Protocol):
    radius: float


def distance(p1: _HasXY, p2: _HasXY) -> float:
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def circle_area(r: float, width: float) -> float:
    """Area of the circular segment of height ``width`` cut from a circle of radius ``r``."""

    if r <= 0.0:
        return 0.0
    cos_arg = min(1.0, max(-1.0, 1.0 - width / r))
    return r * r * math.acos(cos_arg) - (r - width) * math.sqrt(max(width * (2.0 * r - width), 0.0))


def circle_overlap(r1: float, r2: float, d: float) -> float:
    """Lens area shared by two circles whose centres are ``d`` apart."""

    if d >= r1 + r2:
        return 0.0

    if d <= abs(r1 - r2):
        return math.pi * min(r1, r2) * min(r1, r2)

    w1 = r1 - (d * d - r2 * r2 + r1 * r1) / (2.0 * d)
    w2 = r2 - (d * d - r1 * r1 + r2 * r2) / (2.0 * d)
    return circle_area(r1, w1) + circle_area(r2, w2)


def circle_circle_intersection(p1: _Disc, p2: _Disc) -> List[Point]:
    """Return the points where the circumferences of ``p1`` and ``p2`` cross.

    Concentric circles (including identical ones) yield no points; tangent
    circles yield the single touching point.
    """

    d = distance(p1, p2)
    r1 = p1.radius
    r2 = p2.radius

    if d <= 0.0 or d > r1 + r2 or d < abs(r1 - r2):
        return []

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    x0 = p1.x + a * (p2.x - p1.x) / d
    y0 = p1.y + a * (p2.y - p1.y) / d

    if d == r1 + r2 or d == abs(r1 - r2):
        return [Point(x0, y0)]

    h = math.sqrt(max(r1 * r1 - a * a, 0.0))
    rx = -(p2.y - p1.y) * (h / d)
    ry = -(p2.x - p1.x) * (h / d)
    return [Point(x0 + rx, y0 - ry), Point(x0 - rx, y0 + ry)]


def get_center(points: Sequence[_HasXY]) -> Point:
    """Arithmetic centroid of ``points``."""

    if not points:
        return Point(0.0, 0.0)
    sx = sum(p.x for p in points)
    sy = sum(p.y for p in points)
    return Point(sx / len(points), sy / len(points))


def contained_in_circles(point: _HasXY, circles: Iterable[_Disc]) -> bool:
    for circle in circles:
        if distance(point, circle) > circle.radius + SMALL:
            return False
    return True


def intersection_points(circles: Sequence[_Disc]) -> List[Point]:
    """Pairwise crossing points of ``circles``, each tagged with the circles it lies on.

    Points shared by several pairs (identical circles, three circumferences
    through one spot) are merged and carry the union of their parents.
    """

    ret: List[Point] = []
    for i in range(len(circles)):
        for j in range(i + 1, len(circles)):
            for p in circle_circle_intersection(circles[i], circles[j]):
                for existing in ret:
                    if distance(existing, p) <= SMALL:
                        existing.parent_index = tuple(sorted(set(existing.parent_index) | {i, j}))
                        break
                else:
                    p.parent_index = (i, j)
                    ret.append(p)
    return ret


def polygon_area(points: Sequence[_HasXY]) -> float:
    """Signed area of the closed polygon through ``points``, positive when counter-clockwise."""

    if len(points) < 3:
        return 0.0
    total = 0.0
    prev = points[-1]
    for p in points:
        total += (prev.x + p.x) * (p.y - prev.y)
        prev = p
    return total / 2.0


def intersection_area(circles: Sequence[Circle]) -> IntersectionStats:
    """Area common to every circle in ``circles`` and the arcs bounding it.

    The region is described by its inner polygon (pairwise intersection
    points lying inside all circles, walked in angular order) plus the
    circular segment hanging off each polygon edge.
    """

    all_points = intersection_points(circles)
    inner = [p for p in all_points if contained_in_circles(p, circles)]

    arc_area = 0.0
    polygon = 0.0
    arcs: List[Arc] = []

    if len(inner) > 1:
        center = get_center(inner)
        for p in inner:
            p.angle = math.atan2(p.x - center.x, p.y - center.y)
        inner.sort(key=lambda p: p.angle, reverse=True)

        polygon = polygon_area(inner)

        p2 = inner[-1]
        for p1 in inner:
            mid = Point((p1.x + p2.x) / 2.0, (p1.y + p2.y) / 2.0)
            arc = None
            for index in p1.parent_index:
                if index not in p2.parent_index:
                    continue
                circle = circles[index]
                a1 = math.atan2(p1.x - circle.x, p1.y - circle.y)
                a2 = math.atan2(p2.x - circle.x, p2.y - circle.y)
                angle_diff = a2 - a1
                if angle_diff < 0:
                    angle_diff += 2.0 * math.pi

                a = a2 - angle_diff / 2.0
                width = distance(
                    mid,
                    Point(circle.x + circle.radius * math.sin(a), circle.y + circle.radius * math.cos(a)),
                )
                # floating point can push the width slightly past the diameter
                width = min(width, circle.radius * 2.0)

                if arc is None or arc.width > width:
                    arc = Arc(circle=circle, width=width, p1=p1, p2=p2)

            if arc is not None:
                arcs.append(arc)
                arc_area += circle_area(arc.circle.radius, arc.width)
                p2 = p1
    elif circles:
        # no crossing points: either disjoint or the smallest circle sits
        # inside every other one
        smallest = min(circles, key=lambda c: c.radius)
        disjoint = any(distance(c, smallest) > abs(smallest.radius - c.radius) for c in circles)

        if not disjoint:
            arc_area = smallest.radius * smallest.radius * math.pi
            arcs.append(
                Arc(
                    circle=smallest,
                    width=smallest.radius * 2.0,
                    p1=Point(smallest.x, smallest.y + smallest.radius),
                    p2=Point(smallest.x - SMALL, smallest.y + smallest.radius),
                )
            )

    return IntersectionStats(
        area=arc_area + polygon,
        arc_area=arc_area,
        polygon_area=polygon,
        arcs=arcs,
        inner_points=inner,
        intersection_points=all_points,
    )


__all__ = [
    "circle_area",
    "circle_circle_intersection",
    "circle_overlap",
    "contained_in_circles",
    "distance",
    "get_center",
    "intersection_area",
    "intersection_points",
    "polygon_area",
]
