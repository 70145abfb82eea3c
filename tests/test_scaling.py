import pytest

from venn_layout import Circle, scale_solution
from venn_layout.orientation import get_bounding_box


def _solution():
    return {
        "A": Circle(setid="A", x=0.0, y=0.0, radius=2.0),
        "B": Circle(setid="B", x=3.0, y=0.0, radius=1.5),
    }


def test_scale_solution_fits_padded_box():
    scaled = scale_solution(_solution(), 600, 350, 15)
    bounds = get_bounding_box(list(scaled.values()))

    assert bounds.x_min >= 15 - 1e-9
    assert bounds.y_min >= 15 - 1e-9
    assert bounds.x_max <= 585 + 1e-9
    assert bounds.y_max <= 335 + 1e-9
    # the limiting dimension is filled exactly, the other is centred
    assert bounds.height == pytest.approx(320)
    assert (bounds.x_min + bounds.x_max) / 2 == pytest.approx(300)


def test_scale_solution_preserves_ratios():
    original = _solution()
    scaled = scale_solution(original, 400, 400, 0)
    factor = scaled["A"].radius / original["A"].radius
    assert scaled["B"].radius / original["B"].radius == pytest.approx(factor)
    assert scaled["B"].x - scaled["A"].x == pytest.approx(3.0 * factor)


def test_scale_solution_is_idempotent():
    once = scale_solution(_solution(), 500, 300, 10)
    twice = scale_solution(once, 500, 300, 10)
    for key in once:
        assert twice[key].x == pytest.approx(once[key].x)
        assert twice[key].y == pytest.approx(once[key].y)
        assert twice[key].radius == pytest.approx(once[key].radius)


def test_scale_solution_degenerate_returns_copy():
    solution = {"A": Circle(setid="A", x=1.0, y=1.0, radius=0.0)}
    scaled = scale_solution(solution, 100, 100, 5)
    assert scaled == solution
    assert scaled["A"] is not solution["A"]


def test_scale_solution_empty():
    assert scale_solution({}, 100, 100, 5) == {}
