"""
Command-line interface for bendspline.

Usage:
    bendspline sample curve.yml --finder natural -n 50
    bendspline approx curve.yml --max-dist 0.01 -o lines.json
    bendspline list-finders
    bendspline validate config.yml
    bendspline info

Curve files are described in bendspline.factory. Every command exits with 0 on
success and 1 when the curve or configuration cannot be used.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from bendspline import __version__

EPILOG = """
Examples:
  bendspline sample curve.yml                       101 points, Catmull-Rom
  bendspline sample curve.yml --finder natural -n 50
  bendspline approx curve.yml -d 0.01 -o lines.json
  bendspline list-finders
  bendspline validate config.yml
"""


# =============================================================================
# Parser
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="bendspline",
        description="Evaluate Hermite, Cardinal and Natural splines from YAML curve files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="More log output (-vv for debug)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    sample = commands.add_parser("sample", help="Evaluate a curve at evenly spaced parameters")
    _add_curve_options(sample)
    sample.add_argument("-n", "--num-samples", type=int, help="Number of points (default 101)")
    sample.set_defaults(func=cmd_sample)

    approx = commands.add_parser("approx", help="Approximate a curve by a polyline")
    _add_curve_options(approx)
    approx.add_argument(
        "-d", "--max-dist", type=float,
        help="Largest allowed distance between curve and polyline (default 0.02)",
    )
    approx.set_defaults(func=cmd_approx)

    finders = commands.add_parser("list-finders", help="List tangent finders")
    finders.set_defaults(func=cmd_list_finders)

    validate = commands.add_parser("validate", help="Check a configuration file")
    validate.add_argument("config_file", type=Path, help="YAML configuration file")
    validate.set_defaults(func=cmd_validate)

    info = commands.add_parser("info", help="Show version and dependency information")
    info.set_defaults(func=cmd_info)

    return parser


def _add_curve_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("curve_file", type=Path, help="YAML curve file")
    parser.add_argument("-f", "--config", type=Path, help="YAML configuration file")
    parser.add_argument("--finder", help="hermite, cardinal, catmull_rom or natural")
    parser.add_argument("--tension", type=float, help="Tension of the cardinal finder")
    parser.add_argument("-o", "--output", type=Path, help="Write JSON to this file")


def configure_logging(verbose: int, quiet: bool) -> None:
    """Map -v/-q to a log level for the package logger."""
    from bendspline.logging import setup_logging

    if quiet:
        level = logging.ERROR
    else:
        level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    setup_logging(level=level, force=True)


# =============================================================================
# Helpers
# =============================================================================


def _build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Configuration file and environment, then command-line overrides."""
    from bendspline.config import ConfigManager

    config = ConfigManager(args.config).load().to_dict()
    overrides = {
        ("tangents", "finder"): args.finder,
        ("tangents", "tension"): args.tension,
        ("sampling", "num_samples"): getattr(args, "num_samples", None),
        ("approx", "max_dist"): getattr(args, "max_dist", None),
    }
    for (section, key), value in overrides.items():
        if value is not None:
            config[section][key] = value
    return config


def _load(args: argparse.Namespace):
    """Configuration and spline for a curve command."""
    from bendspline.factory import load_curve

    config = _build_config(args)
    return config, load_curve(args.curve_file, config)


def _emit(args: argparse.Namespace, payload: Dict[str, Any], rows: List[List[float]]) -> None:
    """Write ``payload`` as JSON with -o, otherwise print ``rows``."""
    from bendspline.logging import LOG_INFO

    if args.output:
        with open(args.output, "w") as f:
            json.dump(payload, f, indent=2)
        LOG_INFO(f"Results saved to {args.output}")
        return
    for row in rows:
        print(" ".join(f"{v:.6f}" for v in row))


# =============================================================================
# Commands
# =============================================================================


def cmd_sample(args: argparse.Namespace) -> int:
    from bendspline.exceptions import BendSplineError
    from bendspline.logging import LOG_ERROR
    from bendspline.runner import sample_spline

    try:
        config, spline = _load(args)
        samples = sample_spline(spline, config["sampling"]["num_samples"])
        points = [[float(x), float(y)] for x, y in samples]
        _emit(args, {"samples": points}, points)
    except (BendSplineError, OSError, ValueError) as e:
        LOG_ERROR(f"Cannot sample {args.curve_file}: {e}")
        return 1
    return 0


def cmd_approx(args: argparse.Namespace) -> int:
    from bendspline.exceptions import BendSplineError
    from bendspline.logging import LOG_ERROR
    from bendspline.runner import run_curve

    try:
        config, spline = _load(args)
        result = run_curve(spline, config)
        lines = [[ln.pstartx, ln.pstarty, ln.pendx, ln.pendy] for ln in result["lines"]]
        payload = {
            "segment_count": result["segment_count"],
            "tstart": result["tstart"],
            "tend": result["tend"],
            "lines": lines,
        }
        _emit(args, payload, lines)
    except (BendSplineError, OSError, ValueError) as e:
        LOG_ERROR(f"Cannot approximate {args.curve_file}: {e}")
        return 1
    return 0


def cmd_list_finders(args: argparse.Namespace) -> int:
    from bendspline.config import HERMITE
    from bendspline.registry import list_tangent_finders

    print("Available tangent finders:")
    print(f"  - {HERMITE} (tangents taken from the curve file)")
    for name in list_tangent_finders():
        print(f"  - {name}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    from bendspline.config import ConfigManager
    from bendspline.exceptions import ConfigurationError

    try:
        config = ConfigManager(args.config_file).load(validate=True)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error reading configuration: {e}", file=sys.stderr)
        return 1

    print(f"Configuration file '{args.config_file}' is valid.")
    print(f"  Tangent finder: {config.tangents.finder} (tension {config.tangents.tension})")
    print(f"  Approximation: max_dist {config.approx.max_dist}, max_depth {config.approx.max_depth}")
    print(f"  Samples: {config.sampling.num_samples}")
    print(f"  Knots: {config.knots if config.knots else 'uniform'}")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    import platform
    from importlib import import_module

    print(f"bendspline {__version__}")
    print(f"Python {platform.python_version()} on {platform.platform()}")
    print("Dependencies:")
    for module in ("numpy", "yaml"):
        try:
            version = getattr(import_module(module), "__version__", "unknown")
        except ImportError:
            version = "NOT INSTALLED"
        print(f"  {module}: {version}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
