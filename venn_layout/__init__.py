from .model import (
    Arc,
    Area,
    Circle,
    CircleDatum,
    CircleRecord,
    IntersectionDatum,
    IntersectionStats,
    LayoutError,
    LayoutKind,
    LayoutOptions,
    LayoutResult,
    OptimizeResult,
    Point,
    TextCentre,
    ValidationError,
    VennSolution,
)
from .config import ToleranceConfig, get_tolerance_config, set_tolerance_config
from .validate import normalize_areas
from .geometry import (
    circle_circle_intersection,
    circle_overlap,
    distance,
    get_center,
    intersection_area,
)
from .solver import (
    add_missing_areas,
    best_initial_layout,
    constrained_mds_layout,
    distance_from_intersect_area,
    greedy_layout,
    loss,
    venn,
    venn_with_result,
)
from .orientation import disjoint_cluster, normalize_solution
from .scaling import scale_solution
from .text_centre import compute_text_centre, compute_text_centres
from .paths import circle_path, intersection_area_path
from .diagram import venn_solution

__all__ = [
    'Arc',
    'Area',
    'Circle',
    'CircleDatum',
    'CircleRecord',
    'IntersectionDatum',
    'IntersectionStats',
    'LayoutError',
    'LayoutKind',
    'LayoutOptions',
    'LayoutResult',
    'OptimizeResult',
    'Point',
    'TextCentre',
    'ToleranceConfig',
    'ValidationError',
    'VennSolution',
    'add_missing_areas',
    'best_initial_layout',
    'circle_circle_intersection',
    'circle_overlap',
    'circle_path',
    'compute_text_centre',
    'compute_text_centres',
    'constrained_mds_layout',
    'disjoint_cluster',
    'distance',
    'distance_from_intersect_area',
    'get_center',
    'get_tolerance_config',
    'greedy_layout',
    'intersection_area',
    'intersection_area_path',
    'loss',
    'normalize_areas',
    'normalize_solution',
    'scale_solution',
    'set_tolerance_config',
    'venn',
    'venn_solution',
    'venn_with_result',
]
