"""End-to-end pipeline producing renderer-ready records."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from .logging_utils import apply_debug_logging
from .model import CircleDatum, IntersectionDatum, LayoutOptions, VennSolution
from .orientation import normalize_solution
from .paths import intersection_area_path
from .scaling import scale_solution
from .solver import venn
from .text_centre import compute_text_centres
from .validate import AreaLike, normalize_areas

logger = logging.getLogger(__name__)


def venn_solution(areas: Iterable[AreaLike], options: Optional[LayoutOptions] = None) -> VennSolution:
    """Solve, orient, scale and annotate ``areas`` for drawing.

    Areas of size zero are dropped up front. Intersection records are
    emitted for combinations of two or more sets; their text anchor is left
    unset when the region is not visible.

    Orientation and cluster packing only run when ``options.orientation``
    differs from pi/2. At the default angle the solved layout is scaled as
    is, ``options.orientation_order`` is ignored and disjoint clusters keep
    their solved positions.
    """

    options = options or LayoutOptions()
    safe = [area for area in normalize_areas(areas) if area.size != 0 and area.sets]
    if not safe:
        return VennSolution()

    solution = venn(safe, options)
    if options.orientation != math.pi / 2:
        solution = normalize_solution(solution, options.orientation, options.orientation_order)
    solution = scale_solution(solution, options.width, options.height, options.padding)
    text_centres = compute_text_centres(solution, safe)

    intersections = []
    for area in safe:
        if len(area.sets) < 2:
            continue
        centre = text_centres[area.key]
        intersections.append(
            IntersectionDatum(
                set_id=options.set_id_delimiter.join(str(s) for s in area.sets),
                sets=list(area.sets),
                path=intersection_area_path([solution[s] for s in area.sets]),
                size=area.size,
                text_x=None if centre.disjoint else centre.x,
                text_y=None if centre.disjoint else centre.y,
            )
        )

    circles = []
    for setid, circle in solution.items():
        centre = text_centres[str(setid)]
        circles.append(
            CircleDatum(
                set_id=str(setid),
                x=circle.x,
                y=circle.y,
                size=(circle.radius * 2) ** 2,
                text_x=centre.x,
                text_y=centre.y,
            )
        )

    logger.info("Built diagram with %d circle(s) and %d intersection(s)", len(circles), len(intersections))
    return VennSolution(circles=circles, intersections=intersections)


apply_debug_logging(globals(), logger=logger)


__all__ = ["venn_solution"]
