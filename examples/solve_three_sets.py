"""Example pipeline: lay out three overlapping sets and print the circles."""

from venn_layout import LayoutOptions, intersection_area, venn_with_result

AREAS = [
    {"sets": ["A"], "size": 12},
    {"sets": ["B"], "size": 12},
    {"sets": ["C"], "size": 12},
    {"sets": ["A", "B"], "size": 2},
    {"sets": ["A", "C"], "size": 2},
    {"sets": ["B", "C"], "size": 2},
    {"sets": ["A", "B", "C"], "size": 1},
]


def main() -> None:
    result = venn_with_result(AREAS, LayoutOptions(seed=123, history=True))
    print(f"Layout: {result.layout.value} (seed={result.seed})")
    print(f"  Initial loss: {result.initial_loss:.6g}")
    print(f"  Final loss:   {result.refinement.fx:.6g} after {result.refinement.iterations} iteration(s)")

    for setid, circle in result.circles.items():
        print(f"  {setid}: x={circle.x:.4f} y={circle.y:.4f} r={circle.radius:.4f}")

    triple = intersection_area(list(result.circles.values()))
    print(f"  A,B,C overlap: {triple.area:.4f} (target 1)")


if __name__ == "__main__":
    main()
