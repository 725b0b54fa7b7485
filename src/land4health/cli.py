# src/land4health/cli.py

import argparse
import logging
import sys
import warnings

import polars as pl

from land4health import __version__
from land4health.catalog import list_metrics
from land4health.errors import InvalidInputKind, RepresentativityWarning
from land4health.representativity import check_representativity

EXIT_NOT_REPRESENTATIVE = 2

def setup_logging(level: int = logging.INFO) -> None:
    """
    Configures the standard logging format and level for the command-line interface.

    Args:
        level (int): The logging threshold level.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

def run_list_metrics(category: str = None, metric: str = None, provider: str = None) -> int:
    """
    Prints the catalog of available metrics, optionally filtered.

    Returns:
        int: Process exit code.
    """
    try:
        df = list_metrics(category=category, metric=metric, provider=provider)
    except ValueError as e:
        logging.error(str(e))
        return 1

    with pl.Config(tbl_rows=-1, tbl_cols=-1, tbl_width_chars=1000, fmt_str_lengths=120):
        print(df)
    return 0

def run_check_region(path: str, scale: float, min_pixels: float = 1) -> int:
    """
    Runs the area-based representativity check on a vector file.

    Returns:
        int: 0 if representative, 2 if not, 1 on input errors.
    """
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RepresentativityWarning)
            verdict = check_representativity(path, scale=scale, min_pixels=min_pixels)
    except (FileNotFoundError, InvalidInputKind, ValueError) as e:
        logging.error(f"Cannot check region {path}: {e}")
        return 1

    status = "representative" if verdict.is_representative else "NOT representative"
    print(
        f"{path}: {status} at {verdict.scale}m "
        f"(smallest feature {verdict.min_area_km2:.6g} km², required {verdict.required_area_km2:.6g} km²)"
    )
    return 0 if verdict.is_representative else EXIT_NOT_REPRESENTATIVE

def main() -> None:
    """
    Parses command-line arguments and routes execution to the appropriate subcommand.
    """
    parser = argparse.ArgumentParser(
        prog="land4health",
        description="Remote sensing metrics for spatial health analysis"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list-metrics",
        help="Lists the metrics available in land4health."
    )
    list_parser.add_argument("--category", type=str, default=None, help="Filter by thematic category.")
    list_parser.add_argument("--metric", type=str, default=None, help="Filter by metric short name.")
    list_parser.add_argument("--provider", type=str, default=None, help="Filter by provider.")

    check_parser = subparsers.add_parser(
        "check-region",
        help="Checks whether the smallest feature of a vector file covers enough pixels."
    )
    check_parser.add_argument("path", type=str, help="Vector file readable by GeoPandas.")
    check_parser.add_argument("--scale", type=float, required=True, help="Pixel size in meters.")
    check_parser.add_argument(
        "--min-pixels",
        type=float,
        default=1,
        help="Number of pixels the smallest feature must cover. Defaults to 1."
    )

    args = parser.parse_args()
    setup_logging()

    if args.command == "list-metrics":
        code = run_list_metrics(category=args.category, metric=args.metric, provider=args.provider)
    else:
        code = run_check_region(args.path, scale=args.scale, min_pixels=args.min_pixels)
    sys.exit(code)

if __name__ == "__main__":
    main()
