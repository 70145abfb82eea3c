import pytest

from venn_layout import Area, distance_from_intersect_area, get_tolerance_config, set_tolerance_config
from venn_layout.config import BEST_OF_EPSILON, BEST_OF_MIN_SETS, SMALL, ToleranceConfig
from venn_layout.solver import get_distance_matrices
from venn_layout.solver.loss import single_set_index


@pytest.fixture
def restore_tolerances():
    saved = get_tolerance_config()
    yield
    set_tolerance_config(saved)


def test_defaults():
    config = get_tolerance_config()
    assert config == ToleranceConfig(SMALL, BEST_OF_EPSILON, BEST_OF_MIN_SETS)


def test_get_returns_copy(restore_tolerances):
    config = get_tolerance_config()
    config.containment = 0.5
    assert get_tolerance_config().containment == SMALL


def test_containment_tolerance_changes_classification(restore_tolerances):
    areas = [Area(("A",), 10.0), Area(("B",), 2.0), Area(("A", "B"), 1.9)]
    sets, rows = single_set_index(areas)
    _, constraints = get_distance_matrices(areas, sets, rows)
    assert constraints[0, 1] == 0

    set_tolerance_config(ToleranceConfig(containment=0.2))
    _, constraints = get_distance_matrices(areas, sets, rows)
    assert constraints[0, 1] == 1


def test_distance_inversion_uses_containment(restore_tolerances):
    r1, r2 = 2.0, 1.0
    set_tolerance_config(ToleranceConfig(containment=0.5))
    assert distance_from_intersect_area(r1, r2, 3.0) == pytest.approx(r1 - r2)
