"""Constrained multidimensional scaling seed layout."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import minimize

from ..config import active_tolerances
from ..logging_utils import apply_debug_logging
from ..model import Area, Circle, CircleRecord, LayoutOptions, OptimizeResult, SetId, radius_for_size
from .loss import distance_from_intersect_area, single_set_index

logger = logging.getLogger(__name__)


def get_distance_matrices(
    areas: Sequence[Area], sets: Sequence[Area], setids: Dict[SetId, int]
) -> Tuple[np.ndarray, np.ndarray]:
    """Return target centre distances and subset/disjoint constraints between sets.

    ``constraints[i, j]`` is ``1`` when one set is contained in the other,
    ``-1`` when they are disjoint and ``0`` otherwise.
    """

    n = len(sets)
    distances = np.zeros((n, n), dtype=float)
    constraints = np.zeros((n, n), dtype=float)
    small = active_tolerances().containment

    for area in areas:
        if len(area.sets) != 2:
            continue
        left = setids.get(area.sets[0])
        right = setids.get(area.sets[1])
        if left is None or right is None:
            continue

        r1 = radius_for_size(sets[left].size)
        r2 = radius_for_size(sets[right].size)
        d = distance_from_intersect_area(r1, r2, area.size)
        distances[left, right] = distances[right, left] = d

        c = 0.0
        if area.size + small >= min(sets[left].size, sets[right].size):
            c = 1.0
        elif area.size <= small:
            c = -1.0
        constraints[left, right] = constraints[right, left] = c

    return distances, constraints


def constrained_mds_gradient(
    x: np.ndarray, distances: np.ndarray, constraints: np.ndarray
) -> Tuple[float, np.ndarray]:
    """Stress and gradient for the flattened coordinates ``x``.

    Pairs whose subset (or disjoint) constraint is already met contribute
    nothing, which turns those targets into one-sided bounds.
    """

    n = distances.shape[0]
    pts = x.reshape(n, 2)
    diff = pts[:, None, :] - pts[None, :, :]
    squared = np.sum(diff * diff, axis=2)
    dist = np.sqrt(squared)
    delta = squared - distances * distances

    satisfied = ((constraints > 0) & (dist <= distances)) | ((constraints < 0) & (dist >= distances))
    active = np.triu(~satisfied, k=1)
    delta = np.where(active, delta, 0.0)

    fx = float(np.sum(delta * delta))
    sym = delta + delta.T
    grad = 4.0 * np.sum(sym[:, :, None] * diff, axis=1)
    return fx, grad.reshape(-1)


def _minimize_stress(
    initial: np.ndarray, distances: np.ndarray, constraints: np.ndarray, max_iterations: int
) -> OptimizeResult:
    history: List[float] = []

    def fun(x: np.ndarray) -> Tuple[float, np.ndarray]:
        return constrained_mds_gradient(x, distances, constraints)

    result = minimize(
        fun,
        initial,
        jac=True,
        method="CG",
        callback=lambda xk: history.append(fun(xk)[0]),
        options={"maxiter": max_iterations},
    )
    return OptimizeResult(
        x=np.asarray(result.x, dtype=float),
        fx=float(result.fun),
        iterations=int(result.nit),
        history=history,
    )


def constrained_mds_layout(areas: Sequence[Area], options: Optional[LayoutOptions] = None) -> CircleRecord:
    """Seed positions via stress minimisation over the pairwise target distances."""

    options = options or LayoutOptions()
    sets, setids = single_set_index(areas)
    if not sets:
        return {}

    distances, constraints = get_distance_matrices(areas, sets, setids)

    # keep distances bounded, the optimizer misbehaves on large raw values
    norm = float(np.linalg.norm(np.linalg.norm(distances, axis=1))) / len(sets)
    if norm <= 0.0:
        norm = 1.0
    distances = distances / norm

    rng = np.random.default_rng(options.seed)
    best: Optional[OptimizeResult] = None
    for restart in range(options.restarts):
        initial = rng.random(2 * len(sets))
        current = _minimize_stress(initial, distances, constraints, options.max_iterations)
        logger.debug("constrained_mds_layout: restart=%d stress=%.6g iterations=%d", restart, current.fx, current.iterations)
        if best is None or current.fx < best.fx:
            best = current

    assert best is not None
    positions = best.x * norm

    circles: CircleRecord = {}
    for i, area in enumerate(sets):
        setid = area.sets[0]
        circles[setid] = Circle(
            setid=setid,
            x=float(positions[2 * i]),
            y=float(positions[2 * i + 1]),
            radius=radius_for_size(area.size),
            size=area.size,
            rowid=len(circles),
        )
    return circles


apply_debug_logging(globals(), logger=logger, skip={"constrained_mds_gradient"})


__all__ = [
    "constrained_mds_gradient",
    "constrained_mds_layout",
    "get_distance_matrices",
]
