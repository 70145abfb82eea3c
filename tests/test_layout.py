import math

import numpy as np
import pytest

from venn_layout import (
    Area,
    LayoutError,
    LayoutKind,
    LayoutOptions,
    ValidationError,
    add_missing_areas,
    best_initial_layout,
    circle_overlap,
    compute_text_centres,
    constrained_mds_layout,
    distance,
    greedy_layout,
    loss,
    normalize_areas,
    scale_solution,
    venn,
    venn_with_result,
)
from venn_layout.solver import constrained_mds_gradient, get_distance_matrices
from venn_layout.solver.loss import single_set_index


def _prepared(raw):
    return add_missing_areas(normalize_areas(raw))


def _chain_areas(count: int):
    raw = [{"sets": [f"S{i}"], "size": 10.0 + i} for i in range(count)]
    for i in range(count - 1):
        raw.append({"sets": [f"S{i}", f"S{i + 1}"], "size": 2.0})
    return raw


THREE_SETS = [
    {"sets": ["A"], "size": 16},
    {"sets": ["B"], "size": 16},
    {"sets": ["C"], "size": 12},
    {"sets": ["A", "B"], "size": 4},
    {"sets": ["A", "C"], "size": 4},
    {"sets": ["B", "C"], "size": 3},
    {"sets": ["A", "B", "C"], "size": 2},
]


def test_radii_match_set_sizes():
    circles = venn(THREE_SETS, LayoutOptions(seed=1))
    sizes = {"A": 16, "B": 16, "C": 12}
    assert set(circles) == set(sizes)
    for setid, size in sizes.items():
        assert math.pi * circles[setid].radius ** 2 == pytest.approx(size)


def test_identical_sets_are_concentric():
    circles = venn(
        [{"sets": ["A"], "size": 10}, {"sets": ["B"], "size": 10}, {"sets": ["A", "B"], "size": 10}],
        LayoutOptions(seed=3),
    )
    assert distance(circles["A"], circles["B"]) < 1e-6


def test_disjoint_sets_do_not_touch():
    circles = venn(
        [{"sets": ["A"], "size": 10}, {"sets": ["B"], "size": 5}, {"sets": ["A", "B"], "size": 0}],
        LayoutOptions(seed=3),
    )
    assert distance(circles["A"], circles["B"]) >= circles["A"].radius + circles["B"].radius - 1e-12


def test_missing_pair_is_laid_out_disjoint():
    circles = venn([{"sets": ["A"], "size": 10}, {"sets": ["B"], "size": 10}], LayoutOptions(seed=3))
    assert distance(circles["A"], circles["B"]) >= circles["A"].radius + circles["B"].radius - 1e-12


def test_two_set_end_to_end():
    areas = [{"sets": ["A"], "size": 12}, {"sets": ["B"], "size": 12}, {"sets": ["A", "B"], "size": 2}]
    circles = venn(areas, LayoutOptions(layout="best", seed=11))

    expected_radius = math.sqrt(12 / math.pi)
    assert circles["A"].radius == pytest.approx(expected_radius)
    assert circles["B"].radius == pytest.approx(expected_radius)
    overlap = circle_overlap(circles["A"].radius, circles["B"].radius, distance(circles["A"], circles["B"]))
    assert overlap == pytest.approx(2.0, abs=1e-6)

    scaled = scale_solution(circles, 500, 500, 0)
    assert scaled["A"].radius == pytest.approx(scaled["B"].radius)
    factor = scaled["A"].radius / circles["A"].radius
    scaled_overlap = circle_overlap(scaled["A"].radius, scaled["B"].radius, distance(scaled["A"], scaled["B"]))
    assert scaled_overlap / factor ** 2 == pytest.approx(2.0, abs=1e-6)

    centres = compute_text_centres(scaled, normalize_areas(areas))
    centre = centres["A,B"]
    assert not centre.disjoint
    for setid in ("A", "B"):
        c = scaled[setid]
        assert math.hypot(centre.x - c.x, centre.y - c.y) < c.radius


def test_refinement_never_increases_loss():
    result = venn_with_result(THREE_SETS, LayoutOptions(seed=5, history=True))
    assert result.refinement.fx <= result.initial_loss + 1e-12
    assert result.refinement.history
    assert result.refinement.history[0] == pytest.approx(result.initial_loss)
    assert result.seed == 5
    assert result.layout is LayoutKind.BEST


def test_venn_does_not_mutate_input():
    raw = [dict(area) for area in THREE_SETS]
    venn(raw, LayoutOptions(seed=2))
    assert raw == THREE_SETS


def test_greedy_pins_most_overlapped_set_at_origin():
    circles = greedy_layout(_prepared(THREE_SETS))
    assert (circles["A"].x, circles["A"].y) == (0.0, 0.0)
    assert [c.rowid for c in circles.values()] == [0, 1, 2]


def test_greedy_requires_pairwise_information():
    areas = normalize_areas([{"sets": ["A"], "size": 1}, {"sets": ["B"], "size": 1}])
    with pytest.raises(LayoutError):
        greedy_layout(areas)


def test_greedy_rejects_unknown_set_in_overlap():
    areas = [Area(sets=("A",), size=1.0), Area(sets=("A", "Z"), size=0.5)]
    with pytest.raises(LayoutError):
        greedy_layout(areas)


def test_distance_matrices_classify_subsets_and_disjoint_pairs():
    areas = _prepared(
        [
            {"sets": ["A"], "size": 10},
            {"sets": ["B"], "size": 2},
            {"sets": ["C"], "size": 5},
            {"sets": ["A", "B"], "size": 2},
            {"sets": ["A", "C"], "size": 1},
        ]
    )
    sets, rows = single_set_index(areas)
    distances, constraints = get_distance_matrices(areas, sets, rows)

    assert constraints[rows["A"], rows["B"]] == 1.0
    assert constraints[rows["A"], rows["C"]] == 0.0
    assert constraints[rows["B"], rows["C"]] == -1.0
    assert np.allclose(constraints, constraints.T)
    assert np.allclose(distances, distances.T)
    rb, rc = math.sqrt(2 / math.pi), math.sqrt(5 / math.pi)
    assert distances[rows["B"], rows["C"]] == pytest.approx(rb + rc)


def test_constrained_mds_gradient_matches_finite_differences():
    rng = np.random.default_rng(0)
    distances = np.array([[0.0, 1.0, 2.0], [1.0, 0.0, 1.5], [2.0, 1.5, 0.0]])
    constraints = np.zeros((3, 3))
    x = rng.random(6)

    fx, grad = constrained_mds_gradient(x, distances, constraints)
    step = 1e-6
    numeric = np.zeros_like(x)
    for i in range(x.size):
        bumped = x.copy()
        bumped[i] += step
        lowered = x.copy()
        lowered[i] -= step
        numeric[i] = (
            constrained_mds_gradient(bumped, distances, constraints)[0]
            - constrained_mds_gradient(lowered, distances, constraints)[0]
        ) / (2 * step)

    assert fx > 0
    assert np.allclose(grad, numeric, rtol=1e-4, atol=1e-6)


def test_constrained_mds_gradient_ignores_satisfied_constraints():
    distances = np.array([[0.0, 2.0], [2.0, 0.0]])
    x = np.array([0.0, 0.0, 1.0, 0.0])

    subset = np.array([[0.0, 1.0], [1.0, 0.0]])
    fx, grad = constrained_mds_gradient(x, distances, subset)
    assert fx == 0.0
    assert np.all(grad == 0.0)

    disjoint = np.array([[0.0, -1.0], [-1.0, 0.0]])
    fx, grad = constrained_mds_gradient(x, distances, disjoint)
    assert fx == pytest.approx(9.0)
    assert np.any(grad != 0.0)


def test_constrained_mds_is_reproducible_with_seed():
    areas = _prepared(_chain_areas(5))
    first = constrained_mds_layout(areas, LayoutOptions(layout="MDS", seed=42, restarts=3))
    second = constrained_mds_layout(areas, LayoutOptions(layout="MDS", seed=42, restarts=3))
    for setid in first:
        assert first[setid].x == second[setid].x
        assert first[setid].y == second[setid].y


def test_venn_is_reproducible_with_seed():
    options = LayoutOptions(layout=LayoutKind.MDS, seed=9, restarts=2, max_iterations=200)
    first = venn(_chain_areas(4), options)
    second = venn(_chain_areas(4), options)
    assert {k: (c.x, c.y) for k, c in first.items()} == {k: (c.x, c.y) for k, c in second.items()}


def test_best_layout_uses_greedy_for_small_inputs():
    areas = _prepared(THREE_SETS)
    options = LayoutOptions(seed=4)
    best = best_initial_layout(areas, options)
    greedy = greedy_layout(areas, options)
    assert {k: (c.x, c.y) for k, c in best.items()} == {k: (c.x, c.y) for k, c in greedy.items()}


def test_best_layout_never_worse_than_greedy_for_many_sets():
    areas = _prepared(_chain_areas(8))
    options = LayoutOptions(seed=4, restarts=3)
    best = best_initial_layout(areas, options)
    greedy = greedy_layout(areas, options)
    assert len(best) == 8
    assert loss(best, areas) <= loss(greedy, areas) + 1e-12


def test_venn_rejects_malformed_areas():
    with pytest.raises(ValidationError):
        venn([{"sets": ["A"], "size": -1}])
    with pytest.raises(ValidationError):
        venn([{"sets": ["A"], "size": 1}, {"sets": ["A", "B"], "size": 1}])


def test_layout_options_validate_layout_name():
    assert LayoutOptions(layout="mds").layout is LayoutKind.MDS
    with pytest.raises(ValueError):
        LayoutOptions(layout="spring")
