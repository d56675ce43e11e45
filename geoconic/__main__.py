import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from geoconic import Line, create, sample

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_point(value: str) -> Tuple[float, float]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected 'x,y', got {value!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected 'x,y', got {value!r}") from exc


def _finite_or_none(value: float) -> Optional[float]:
    return float(value) if math.isfinite(value) else None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sample points on a conic section")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--samples", type=int, default=None, help="Number of samples (default: from config)")
    parser.add_argument(
        "--range",
        nargs=2,
        type=float,
        metavar=("FROM", "TO"),
        help="Parameter range (default depends on the conic kind)",
    )
    parser.add_argument("--output-path", help="Write the JSON result to this path instead of stdout")

    sub = parser.add_subparsers(dest="kind", required=True)
    for kind in ("ellipse", "hyperbola"):
        focal = sub.add_parser(kind, help=f"{kind} from two foci and a point or axis length")
        focal.add_argument("--foci", nargs=2, type=_parse_point, required=True, metavar="X,Y")
        third = focal.add_mutually_exclusive_group(required=True)
        third.add_argument("--point", type=_parse_point, metavar="X,Y", help="Point on the curve")
        third.add_argument("--axis", type=float, help="Length of the major axis")

    parabola = sub.add_parser("parabola", help="parabola from a focus and a directrix")
    parabola.add_argument("--focus", type=_parse_point, required=True, metavar="X,Y")
    parabola.add_argument(
        "--directrix", nargs=2, type=_parse_point, required=True, metavar="X,Y", help="Two points on the directrix"
    )

    conic = sub.add_parser("conic", help="general conic from five points or six coefficients")
    source = conic.add_mutually_exclusive_group(required=True)
    source.add_argument("--points", nargs=5, type=_parse_point, metavar="X,Y")
    source.add_argument(
        "--coeffs", nargs=6, type=float, metavar=("A00", "A11", "A22", "A01", "A02", "A12")
    )
    return parser


def _parents(args: argparse.Namespace) -> List[Any]:
    if args.kind in ("ellipse", "hyperbola"):
        third = args.point if args.point is not None else args.axis
        return [args.foci[0], args.foci[1], third]
    if args.kind == "parabola":
        return [args.focus, Line.through(*args.directrix)]
    if args.points is not None:
        return list(args.points)
    return list(args.coeffs)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    parents = _parents(args)
    if args.range is not None:
        if args.kind == "conic":
            logger.warning("--range is ignored for general conics; using the configured default")
        else:
            parents.extend(args.range)

    conic = create(args.kind, *parents)
    logger.info("Created %r", conic)

    points = sample(conic, args.samples)
    mx, my = conic.midpoint
    result: Dict[str, Any] = {
        "kind": conic.kind,
        "t_range": list(conic.t_range),
        "midpoint": [_finite_or_none(mx), _finite_or_none(my)],
        "quadraticform": [[_finite_or_none(v) for v in row] for row in conic.quadraticform],
        "points": [[_finite_or_none(x), _finite_or_none(y)] for x, y in points],
    }
    text = json.dumps(result, indent=2)

    if args.output_path:
        output_path = Path(args.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing %d samples to %s", len(points), output_path)
        output_path.write_text(text, encoding="utf-8")
    else:
        print(text)


if __name__ == "__main__":
    main(sys.argv[1:])
