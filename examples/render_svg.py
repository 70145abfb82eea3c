"""Example pipeline: build a drawable diagram and write it out as SVG."""

import sys

from venn_layout import LayoutOptions, circle_path, venn_solution

AREAS = [
    {"sets": ["Python"], "size": 20},
    {"sets": ["Data"], "size": 14},
    {"sets": ["Web"], "size": 10},
    {"sets": ["Python", "Data"], "size": 8},
    {"sets": ["Python", "Web"], "size": 4},
    {"sets": ["Data", "Web"], "size": 1},
]

COLOURS = ["#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd"]


def main(path: str = "venn.svg") -> None:
    options = LayoutOptions(seed=7, width=600, height=350)
    solution = venn_solution(AREAS, options)

    parts = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{options.width}" height="{options.height}">']
    for i, circle in enumerate(solution.circles):
        radius = circle.size ** 0.5 / 2
        colour = COLOURS[i % len(COLOURS)]
        parts.append(f'<path d="{circle_path(circle.x, circle.y, radius)}" fill="{colour}" fill-opacity="0.25"/>')
        parts.append(f'<text x="{circle.text_x:.2f}" y="{circle.text_y:.2f}" text-anchor="middle">{circle.set_id}</text>')
    for intersection in solution.intersections:
        parts.append(f'<path d="{intersection.path}" fill="none" stroke="#333"/>')
        if intersection.text_x is not None:
            parts.append(
                f'<text x="{intersection.text_x:.2f}" y="{intersection.text_y:.2f}" '
                f'text-anchor="middle" font-size="10">{intersection.size:g}</text>'
            )
    parts.append("</svg>")

    with open(path, "w", encoding="utf-8") as fout:
        fout.write("\n".join(parts) + "\n")
    print(f"Wrote {path}")


if __name__ == "__main__":
    main(*sys.argv[1:])
