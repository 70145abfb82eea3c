"""Core data structures shared by the layout pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

SetId = Union[str, int]


class ValidationError(ValueError):
    """Raised when the supplied areas are malformed or inconsistent."""


class LayoutError(RuntimeError):
    """Raised when a layout heuristic reaches an impossible configuration."""


@dataclass
class Area:
    """Target size for a single set or a combination of sets."""

    sets: Tuple[SetId, ...]
    size: float
    weight: float = 1.0
    label: Optional[str] = None

    @property
    def key(self) -> str:
        return ",".join(str(s) for s in self.sets)


@dataclass
class Point:
    x: float
    y: float
    parent_index: Tuple[int, ...] = ()
    angle: float = 0.0


@dataclass
class Circle:
    """Simulated set: a disc positioned in the plane."""

    setid: SetId
    x: float
    y: float
    radius: float
    size: float = 0.0
    rowid: int = 0

    def copy(self, **changes: Any) -> "Circle":
        return replace(self, **changes)


CircleRecord = Dict[SetId, Circle]


def copy_record(record: CircleRecord) -> CircleRecord:
    return {setid: circle.copy() for setid, circle in record.items()}


def radius_for_size(size: float) -> float:
    return math.sqrt(size / math.pi)


@dataclass
class Arc:
    """Portion of ``circle``'s circumference bounding an intersection region."""

    circle: Circle
    width: float
    p1: Point
    p2: Point


@dataclass
class IntersectionStats:
    area: float
    arc_area: float
    polygon_area: float
    arcs: List[Arc] = field(default_factory=list)
    inner_points: List[Point] = field(default_factory=list)
    intersection_points: List[Point] = field(default_factory=list)


@dataclass
class TextCentre:
    x: float
    y: float
    disjoint: bool = False


class LayoutKind(str, Enum):
    GREEDY = "greedy"
    MDS = "MDS"
    BEST = "best"

    @classmethod
    def coerce(cls, value: Union["LayoutKind", str]) -> "LayoutKind":
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        raise ValueError(f"unknown layout '{value}' (expected greedy|MDS|best)")


CircleOrder = Callable[[Circle, Circle], float]


@dataclass
class LayoutOptions:
    """Options recognised by the layout pipeline."""

    layout: Union[LayoutKind, str] = LayoutKind.BEST
    restarts: int = 10
    max_iterations: int = 500
    seed: Optional[int] = None
    orientation: float = math.pi / 2
    orientation_order: Optional[CircleOrder] = None
    width: float = 600.0
    height: float = 350.0
    padding: float = 15.0
    set_id_delimiter: str = "_"
    history: bool = False

    def __post_init__(self) -> None:
        self.layout = LayoutKind.coerce(self.layout)
        if self.restarts < 1:
            raise ValueError("restarts must be at least 1")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")


@dataclass
class OptimizeResult:
    """Final state of a numeric optimizer run."""

    x: np.ndarray
    fx: float
    iterations: int
    history: List[float] = field(default_factory=list)


@dataclass
class LayoutResult:
    circles: CircleRecord
    initial_loss: float
    refinement: OptimizeResult
    seed: int
    layout: LayoutKind


@dataclass
class CircleDatum:
    set_id: str
    x: float
    y: float
    size: float
    text_x: float
    text_y: float


@dataclass
class IntersectionDatum:
    set_id: str
    sets: Sequence[SetId]
    path: str
    size: float
    text_x: Optional[float] = None
    text_y: Optional[float] = None


@dataclass
class VennSolution:
    circles: List[CircleDatum] = field(default_factory=list)
    intersections: List[IntersectionDatum] = field(default_factory=list)


__all__ = [
    "Arc",
    "Area",
    "Circle",
    "CircleDatum",
    "CircleOrder",
    "CircleRecord",
    "IntersectionDatum",
    "IntersectionStats",
    "LayoutError",
    "LayoutKind",
    "LayoutOptions",
    "LayoutResult",
    "OptimizeResult",
    "Point",
    "SetId",
    "TextCentre",
    "ValidationError",
    "VennSolution",
    "copy_record",
    "radius_for_size",
]
