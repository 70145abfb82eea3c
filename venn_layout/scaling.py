"""Fit a layout into a padded viewport."""

from __future__ import annotations

import logging

from .logging_utils import apply_debug_logging
from .model import CircleRecord, copy_record
from .orientation import get_bounding_box

logger = logging.getLogger(__name__)


def scale_solution(solution: CircleRecord, width: float, height: float, padding: float) -> CircleRecord:
    """Uniformly scale and centre ``solution`` inside ``width`` x ``height`` minus ``padding``.

    A degenerate bounding box (zero width or height) is returned unscaled.
    """

    if not solution:
        return {}

    width -= 2 * padding
    height -= 2 * padding

    bounds = get_bounding_box(list(solution.values()))
    if bounds.width == 0 or bounds.height == 0:
        logger.debug("scale_solution: degenerate bounds, leaving layout unscaled")
        return copy_record(solution)

    scaling = min(width / bounds.width, height / bounds.height)
    x_offset = (width - bounds.width * scaling) / 2
    y_offset = (height - bounds.height * scaling) / 2

    return {
        setid: circle.copy(
            radius=scaling * circle.radius,
            x=padding + x_offset + (circle.x - bounds.x_min) * scaling,
            y=padding + y_offset + (circle.y - bounds.y_min) * scaling,
        )
        for setid, circle in solution.items()
    }


apply_debug_logging(globals(), logger=logger)


__all__ = ["scale_solution"]
