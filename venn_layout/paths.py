"""SVG path data for circles and intersection regions."""

from __future__ import annotations

from typing import List, Sequence

from .geometry import intersection_area
from .model import Circle


def _fmt(value: float) -> str:
    return format(float(value), ".10g")


def circle_path(x: float, y: float, r: float) -> str:
    """Closed path drawing a full circle as two half arcs."""

    parts = [
        "\nM", _fmt(x), _fmt(y),
        "\nm", _fmt(-r), "0",
        "\na", _fmt(r), _fmt(r), "0", "1", "0", _fmt(r * 2), "0",
        "\na", _fmt(r), _fmt(r), "0", "1", "0", _fmt(-r * 2), "0",
    ]
    return " ".join(parts)


def intersection_area_path(circles: Sequence[Circle]) -> str:
    """Path outlining the region shared by all of ``circles``.

    An empty region gives ``"M 0 0"``; a region that is exactly one circle
    gives that circle's path.
    """

    arcs = intersection_area(circles).arcs
    if not arcs:
        return "M 0 0"

    if len(arcs) == 1:
        circle = arcs[0].circle
        return circle_path(circle.x, circle.y, circle.radius)

    parts: List[str] = ["\nM", _fmt(arcs[0].p2.x), _fmt(arcs[0].p2.y)]
    for arc in arcs:
        r = arc.circle.radius
        wide = arc.width > r
        parts.extend(["\nA", _fmt(r), _fmt(r), "0", "1" if wide else "0", "1", _fmt(arc.p1.x), _fmt(arc.p1.y)])
    return " ".join(parts)


__all__ = ["circle_path", "intersection_area_path"]
