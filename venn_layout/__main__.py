import argparse
import json
import logging
import math
import sys
from dataclasses import asdict
from typing import Optional, Sequence

from venn_layout import LayoutOptions, ValidationError, venn_solution

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out area-proportional Venn/Euler diagrams")
    parser.add_argument("path", help="Path to a JSON list of areas ({sets, size, weight?, label?})")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--layout",
        choices=["greedy", "MDS", "best"],
        default="best",
        help="Initial layout heuristic (default: best)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the MDS restarts (default: fresh seed)",
    )
    parser.add_argument("--restarts", type=int, default=10, help="Number of MDS restarts")
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=500,
        help="Iteration cap for refinement and MDS",
    )
    parser.add_argument("--width", type=float, default=600.0)
    parser.add_argument("--height", type=float, default=350.0)
    parser.add_argument("--padding", type=float, default=15.0)
    parser.add_argument(
        "--orientation",
        type=float,
        default=math.pi / 2,
        help="Angle in radians between the two largest circles",
    )
    parser.add_argument("--delimiter", default="_", help="Joiner for intersection set ids")
    parser.add_argument("--output", help="Write the JSON result here instead of stdout")
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    with open(args.path) as fin:
        areas = json.load(fin)

    options = LayoutOptions(
        layout=args.layout,
        restarts=args.restarts,
        max_iterations=args.max_iterations,
        seed=args.seed,
        orientation=args.orientation,
        width=args.width,
        height=args.height,
        padding=args.padding,
        set_id_delimiter=args.delimiter,
    )

    logger.info("Loaded %d area(s) from %s", len(areas), args.path)
    try:
        solution = venn_solution(areas, options)
    except ValidationError as exc:
        logger.error("Invalid areas: %s", exc)
        raise SystemExit(1) from exc

    text = json.dumps(asdict(solution), indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fout:
            fout.write(text + "\n")
        logger.info("Wrote diagram to %s", args.output)
    else:
        sys.stdout.write(text + "\n")


if __name__ == "__main__":  # pragma: no cover
    main()
