"""Command-line interface for mlekit.

Usage:
    mlekit estimate problem.yaml   Estimate parameters and show intervals
    mlekit info problem.py         Show problem definition
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argparse import Namespace

    from mlekit.io import EstimationProblem


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mlekit",
        description="Maximum likelihood estimation with Hessian-based intervals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mlekit estimate problem.yaml                 Estimate and print 95% intervals
  mlekit estimate problem.py --init 0,0 -p 0.05
  mlekit estimate problem.yaml --scale none -o estimates.csv
  mlekit info problem.yaml                     Show problem definition
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # =========================================================================
    # estimate command
    # =========================================================================
    estimate_parser = subparsers.add_parser(
        "estimate",
        help="Run maximum likelihood estimation",
        description="Find the mode of the log-likelihood and report intervals.",
    )
    estimate_parser.add_argument("problem", help="Problem file (.yaml, .py)")
    estimate_parser.add_argument(
        "--init",
        help="Comma-separated initial values (default: from problem file)",
    )
    estimate_parser.add_argument(
        "--names",
        help="Comma-separated parameter names (default: from problem file)",
    )
    estimate_parser.add_argument(
        "--scale",
        help="Log-likelihood scale: default, none, or a positive number",
    )
    estimate_parser.add_argument(
        "--method",
        help="scipy.optimize.minimize method (default: from problem file, BFGS)",
    )
    estimate_parser.add_argument(
        "--max-iter",
        type=int,
        help="Maximum optimizer iterations",
    )
    estimate_parser.add_argument(
        "-p", "--tail",
        type=float,
        default=0.025,
        help="Tail probability for intervals (default: 0.025)",
    )
    estimate_parser.add_argument(
        "-o", "--output",
        help="Output CSV with estimates, standard errors and intervals",
    )
    estimate_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show optimizer and Hessian debug output",
    )

    # =========================================================================
    # info command
    # =========================================================================
    info_parser = subparsers.add_parser(
        "info",
        help="Show problem information",
        description="Display the problem definition and optimizer settings.",
    )
    info_parser.add_argument("problem", help="Problem file (.yaml, .py)")

    return parser


def _get_version() -> str:
    """Get package version."""
    try:
        from mlekit._version import __version__

        return __version__
    except ImportError:
        return "unknown"


def _load_problem(problem_path: str) -> EstimationProblem:
    """Load problem from file."""
    from mlekit import load_problem

    path = Path(problem_path)
    if not path.exists():
        print(f"Error: Problem file not found: {path}", file=sys.stderr)
        sys.exit(1)

    try:
        return load_problem(path)
    except Exception as e:
        print(f"Error loading problem: {e}", file=sys.stderr)
        sys.exit(1)


def _parse_floats(text: str, label: str) -> list[float]:
    try:
        return [float(item) for item in text.split(",") if item.strip()]
    except ValueError as exc:
        raise ValueError(f"{label} must be comma-separated numbers: {text!r}") from exc


def cmd_estimate(args: Namespace) -> int:
    """Estimate command."""
    if args.max_iter is not None and args.max_iter < 0:
        print("Error: --max-iter must be >= 0", file=sys.stderr)
        return 1
    if not (0.0 < args.tail < 0.5):
        print("Error: --tail must satisfy 0 < p < 0.5", file=sys.stderr)
        return 1
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print(f"Loading problem: {args.problem}")
    problem = _load_problem(args.problem)

    overrides: dict = {}
    initial_theta = problem.initial_theta
    try:
        if args.init:
            initial_theta = _parse_floats(args.init, "--init")
        if args.names:
            overrides["varnames"] = [n.strip() for n in args.names.split(",") if n.strip()]
        elif args.init and len(initial_theta) != len(problem.initial_theta):
            overrides["varnames"] = None
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.scale is not None:
        overrides["scale"] = args.scale
    if args.method is not None:
        overrides["method"] = args.method
    if args.max_iter is not None:
        options = dict(problem.options)
        options["maxiter"] = args.max_iter
        overrides["options"] = options

    print(f"Running maximum likelihood estimation ({problem.name})...")

    try:
        result = problem.estimate(initial_theta, **overrides)
    except Exception as e:
        print(f"Error during estimation: {e}", file=sys.stderr)
        return 1

    print()
    print(f"Log-likelihood: {result.log_likelihood:.6g}")
    print(f"Iterations:     {result.n_iterations}")
    print()
    print(result.summary(args.tail), end="")

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        result.to_frame(args.tail).to_csv(out_path, index=False)
        print(f"\nEstimation output saved to: {out_path}")

    return 0


def cmd_info(args: Namespace) -> int:
    """Info command."""
    print(f"Loading problem: {args.problem}")
    problem = _load_problem(args.problem)

    print()
    print(problem.summary())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "estimate": cmd_estimate,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
