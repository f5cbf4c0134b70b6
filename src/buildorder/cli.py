"""Command-line interface for buildorder."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from buildorder.analysis import suggest_exclusions
from buildorder.exceptions import BuildOrderError, DependencyCycleError
from buildorder.pipeline import run
from buildorder.renderer.report import FORMATS

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="buildorder",
        description="Resolve the build order of inter-dependent .csproj and .sln files.",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        help="Project (.csproj) and solution (.sln) files to start from",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        type=Path,
        default=[],
        metavar="SLN",
        help="Solution to leave out of the order, e.g. to break a cycle (repeatable)",
    )
    parser.add_argument(
        "-b",
        "--base-path",
        type=Path,
        default=None,
        help="Directory searched for .sln and .csproj files (default: current directory)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail when several projects share an assembly name",
    )
    parser.add_argument(
        "--solutions",
        action="store_true",
        help="Print the solution build order instead of the project build order",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("buildorder").setLevel(logging.DEBUG)

    try:
        result = run(
            args.inputs,
            exclude=args.exclude,
            base_path=args.base_path,
            strict=args.strict,
            solutions=args.solutions,
            fmt=args.format,
            verbose=args.verbose,
        )
    except DependencyCycleError as e:
        logger.error("%s", e)
        if args.solutions and e.graph is not None:
            for members in suggest_exclusions(e.graph):
                logger.error(
                    "Consider excluding one of: %s", ", ".join(str(m) for m in members)
                )
        else:
            logger.error("Run with --solutions to see which solutions to exclude")
        return 1
    except BuildOrderError as e:
        logger.error("%s", e)
        return 1

    sys.stdout.write(result.report)
    return 0
