"""Orientation and packing of solved layouts for rendering."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Dict, List, Optional, Sequence

from .config import SMALL
from .geometry import distance
from .logging_utils import apply_debug_logging
from .model import Circle, CircleOrder, CircleRecord, SetId

logger = logging.getLogger(__name__)


@dataclass
class Bounds:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass
class _Cluster:
    circles: List[Circle]
    bounds: Bounds


def get_bounding_box(circles: Sequence[Circle]) -> Bounds:
    return Bounds(
        x_min=min(c.x - c.radius for c in circles),
        x_max=max(c.x + c.radius for c in circles),
        y_min=min(c.y - c.radius for c in circles),
        y_max=max(c.y + c.radius for c in circles),
    )


def disjoint_cluster(circles: Sequence[Circle]) -> List[List[Circle]]:
    """Group ``circles`` into maximal sets connected by pairwise overlap.

    Union-find runs over list indices, the circles themselves are not
    touched. Clusters come back in order of first appearance.
    """

    parent = list(range(len(circles)))

    def find(i: int) -> int:
        root = i
        while parent[root] != root:
            root = parent[root]
        while parent[i] != root:
            parent[i], i = root, parent[i]
        return root

    for i in range(len(circles)):
        for j in range(i + 1, len(circles)):
            max_distance = circles[i].radius + circles[j].radius
            if distance(circles[i], circles[j]) + SMALL < max_distance:
                parent[find(j)] = find(i)

    clusters: Dict[int, List[Circle]] = {}
    for i, circle in enumerate(circles):
        clusters.setdefault(find(i), []).append(circle)
    return list(clusters.values())


def _rotate(circles: Sequence[Circle], cos_t: float, sin_t: float) -> None:
    for circle in circles:
        x, y = circle.x, circle.y
        circle.x = cos_t * x - sin_t * y
        circle.y = sin_t * x + cos_t * y


def _reflect_across_slope(circles: Sequence[Circle], slope: float) -> None:
    for circle in circles:
        d = (circle.x + slope * circle.y) / (1.0 + slope * slope)
        circle.x = 2.0 * d - circle.x
        circle.y = 2.0 * d * slope - circle.y


def orientate_circles(
    circles: List[Circle],
    orientation: float = math.pi / 2,
    orientation_order: Optional[CircleOrder] = None,
) -> None:
    """Rotate ``circles`` in place so the second circle sits at ``orientation`` from the first.

    The list is sorted (largest radius first unless ``orientation_order`` is
    given), shifted so its first circle is at the origin, and mirrored when
    the third circle would land on the far side of the line through the
    first two.
    """

    if orientation_order is None:
        circles.sort(key=lambda c: c.radius, reverse=True)
    else:
        circles.sort(key=cmp_to_key(orientation_order))

    if not circles:
        return

    largest_x, largest_y = circles[0].x, circles[0].y
    for circle in circles:
        circle.x -= largest_x
        circle.y -= largest_y

    if len(circles) == 2:
        c1, c2 = circles
        # nested pair: push the inner circle against the outer rim so it
        # does not render concentric
        if distance(c1, c2) < abs(c2.radius - c1.radius):
            c2.x = c1.x + abs(c1.radius - c2.radius) - SMALL
            c2.y = c1.y

    if len(circles) > 1:
        rotation = math.atan2(circles[1].x, circles[1].y) - orientation
        _rotate(circles, math.cos(rotation), math.sin(rotation))

    if len(circles) > 2:
        angle = math.atan2(circles[2].x, circles[2].y) - orientation
        angle %= 2.0 * math.pi
        if angle > math.pi:
            slope = circles[1].y / (SMALL + circles[1].x)
            _reflect_across_slope(circles, slope)


def _offset_cluster(cluster: _Cluster, placed: Bounds, spacing: float, right: bool, bottom: bool) -> None:
    bounds = cluster.bounds

    if right:
        x_offset = placed.x_max - bounds.x_min + spacing
    else:
        x_offset = placed.x_max - bounds.x_max
        centring = bounds.width / 2.0 - placed.width / 2.0
        if centring < 0:
            x_offset += centring

    if bottom:
        y_offset = placed.y_max - bounds.y_min + spacing
    else:
        y_offset = placed.y_max - bounds.y_max
        centring = bounds.height / 2.0 - placed.height / 2.0
        if centring < 0:
            y_offset += centring

    for circle in cluster.circles:
        circle.x += x_offset
        circle.y += y_offset


def normalize_solution(
    solution: CircleRecord,
    orientation: Optional[float] = None,
    orientation_order: Optional[CircleOrder] = None,
) -> CircleRecord:
    """Orient every disjoint cluster of ``solution`` and pack the clusters in a grid.

    The largest cluster (by bounding-box area) stays in place; the others
    are laid out to its right, below it and diagonally, three per row.
    ``solution`` itself is left untouched.
    """

    if orientation is None:
        orientation = math.pi / 2
    if not solution:
        return {}

    circles = [circle.copy(setid=setid) for setid, circle in solution.items()]

    clusters: List[_Cluster] = []
    for group in disjoint_cluster(circles):
        orientate_circles(group, orientation, orientation_order)
        clusters.append(_Cluster(circles=group, bounds=get_bounding_box(group)))

    clusters.sort(key=lambda cluster: cluster.bounds.area, reverse=True)
    logger.debug("normalize_solution: %d cluster(s)", len(clusters))

    placed: List[Circle] = list(clusters[0].circles)
    placed_bounds = clusters[0].bounds
    spacing = placed_bounds.width / 50.0

    index = 1
    while index < len(clusters):
        for offset, (right, bottom) in enumerate(((True, False), (False, True), (True, True))):
            if index + offset >= len(clusters):
                break
            cluster = clusters[index + offset]
            _offset_cluster(cluster, placed_bounds, spacing, right, bottom)
            placed.extend(cluster.circles)
        index += 3
        placed_bounds = get_bounding_box(placed)

    ordered: Dict[SetId, Circle] = {circle.setid: circle for circle in placed}
    return {setid: ordered[setid] for setid in solution}


apply_debug_logging(globals(), logger=logger, skip={"get_bounding_box"})


__all__ = [
    "Bounds",
    "disjoint_cluster",
    "get_bounding_box",
    "normalize_solution",
    "orientate_circles",
]
