"""Derivative-free refinement of circle centres against the layout loss."""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence, Tuple

import numpy as np
from scipy.optimize import minimize

from ..logging_utils import apply_debug_logging
from ..model import Area, CircleRecord, OptimizeResult, SetId, copy_record
from .loss import loss

logger = logging.getLogger(__name__)


def nelder_mead(
    fun: Callable[[np.ndarray], float],
    x0: Sequence[float],
    *,
    max_iterations: int = 500,
    xatol: float = 1e-5,
    fatol: float = 1e-10,
    record_history: bool = False,
) -> OptimizeResult:
    """Minimise ``fun`` from ``x0`` with a simplex search.

    Never returns a point worse than ``x0``: if the search wanders off, the
    starting point is handed back.
    """

    x0 = np.asarray(x0, dtype=float)
    start = float(fun(x0))
    history: List[float] = [start] if record_history else []

    def callback(xk: np.ndarray) -> None:
        history.append(float(fun(xk)))

    result = minimize(
        fun,
        x0,
        method="Nelder-Mead",
        callback=callback if record_history else None,
        options={"maxiter": max_iterations, "xatol": xatol, "fatol": fatol},
    )
    x = np.asarray(result.x, dtype=float)
    fx = float(result.fun)
    if not np.isfinite(fx) or fx > start:
        x, fx = x0.copy(), start
    return OptimizeResult(x=x, fx=fx, iterations=int(result.nit), history=history)


def _flatten(circles: CircleRecord) -> Tuple[List[SetId], np.ndarray]:
    setids = list(circles)
    vector = np.empty(2 * len(setids), dtype=float)
    for i, setid in enumerate(setids):
        vector[2 * i] = circles[setid].x
        vector[2 * i + 1] = circles[setid].y
    return setids, vector


def refine_layout(
    circles: CircleRecord,
    areas: Sequence[Area],
    *,
    max_iterations: int = 500,
    record_history: bool = False,
) -> Tuple[CircleRecord, OptimizeResult]:
    """Move every centre (radii fixed) to minimise :func:`loss` over ``areas``."""

    setids, initial = _flatten(circles)
    current = copy_record(circles)
    if not setids:
        return current, OptimizeResult(x=initial, fx=0.0, iterations=0)

    def objective(values: np.ndarray) -> float:
        for i, setid in enumerate(setids):
            current[setid].x = float(values[2 * i])
            current[setid].y = float(values[2 * i + 1])
        return loss(current, areas)

    result = nelder_mead(objective, initial, max_iterations=max_iterations, record_history=record_history)

    for i, setid in enumerate(setids):
        current[setid].x = float(result.x[2 * i])
        current[setid].y = float(result.x[2 * i + 1])

    logger.info("Refined %d circle(s): loss=%.6g after %d iteration(s)", len(setids), result.fx, result.iterations)
    return current, result


apply_debug_logging(globals(), logger=logger, skip={"nelder_mead"})


__all__ = ["nelder_mead", "refine_layout"]
