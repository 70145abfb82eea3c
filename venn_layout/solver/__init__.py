"""Layout façade: strategy dispatch, best-of selection and global refinement."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, Optional, Sequence

import numpy as np

from ..config import active_tolerances
from ..logging_utils import apply_debug_logging
from ..model import Area, CircleRecord, LayoutKind, LayoutOptions, LayoutResult
from ..validate import AreaLike, normalize_areas
from .greedy import greedy_layout
from .loss import add_missing_areas, distance_from_intersect_area, loss, single_set_index
from .mds import constrained_mds_gradient, constrained_mds_layout, get_distance_matrices
from .refine import nelder_mead, refine_layout

logger = logging.getLogger(__name__)

LayoutFunction = Callable[[Sequence[Area], LayoutOptions], CircleRecord]


def best_initial_layout(areas: Sequence[Area], options: Optional[LayoutOptions] = None) -> CircleRecord:
    """Greedy layout, replaced by constrained MDS on larger inputs when it scores better.

    Greedy is kept for small diagrams since it axis-aligns two and three
    circle layouts nicely.
    """

    options = options or LayoutOptions()
    tolerances = active_tolerances()
    initial = greedy_layout(areas, options)

    sets, _ = single_set_index(areas)
    if len(sets) >= tolerances.best_of_min_sets:
        constrained = constrained_mds_layout(areas, options)
        constrained_loss = loss(constrained, areas)
        greedy_loss = loss(initial, areas)
        logger.debug("best_initial_layout: greedy=%.6g mds=%.6g", greedy_loss, constrained_loss)
        if constrained_loss + tolerances.best_of < greedy_loss:
            initial = constrained
    return initial


LAYOUT_FUNCTIONS: Dict[LayoutKind, LayoutFunction] = {
    LayoutKind.GREEDY: greedy_layout,
    LayoutKind.MDS: constrained_mds_layout,
    LayoutKind.BEST: best_initial_layout,
}


def _resolve_seed(seed: Optional[int]) -> int:
    if seed is not None:
        return int(seed)
    return int(np.random.SeedSequence().generate_state(1)[0])


def venn_with_result(areas: Iterable[AreaLike], options: Optional[LayoutOptions] = None) -> LayoutResult:
    """Lay out circles for ``areas`` and report how the refinement went."""

    options = options or LayoutOptions()
    kind = LayoutKind.coerce(options.layout)
    seed = _resolve_seed(options.seed)
    effective = replace(options, layout=kind, seed=seed)

    normalized = add_missing_areas(normalize_areas(areas))
    logger.info("Laying out %d area(s) with layout=%s seed=%d", len(normalized), kind.value, seed)

    initial = LAYOUT_FUNCTIONS[kind](normalized, effective)
    initial_loss = loss(initial, normalized)

    circles, refinement = refine_layout(
        initial,
        normalized,
        max_iterations=effective.max_iterations,
        record_history=effective.history,
    )
    return LayoutResult(
        circles=circles,
        initial_loss=initial_loss,
        refinement=refinement,
        seed=seed,
        layout=kind,
    )


def venn(areas: Iterable[AreaLike], options: Optional[LayoutOptions] = None) -> CircleRecord:
    """Return circles whose overlaps approximate the sizes given in ``areas``."""

    return venn_with_result(areas, options).circles


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "LAYOUT_FUNCTIONS",
    "add_missing_areas",
    "best_initial_layout",
    "constrained_mds_gradient",
    "constrained_mds_layout",
    "distance_from_intersect_area",
    "get_distance_matrices",
    "greedy_layout",
    "loss",
    "nelder_mead",
    "refine_layout",
    "venn",
    "venn_with_result",
]
