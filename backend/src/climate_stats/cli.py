"""CLI entry point for climate-stats."""

import argparse
import json
import logging
import sys

from climate_stats.config import (
    DEFAULT_BOOTSTRAP_ITERATIONS,
    DEFAULT_CONFIDENCE_LEVEL,
    LOG_LEVEL,
    PORT,
)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="climate-stats",
        description="Climatological statistics for yearly observation series",
    )
    subparsers = parser.add_subparsers(dest="command")

    # analyze subcommand
    analyze_parser = subparsers.add_parser("analyze", help="Summarize a year,value CSV")
    analyze_parser.add_argument("--input", required=True, help="CSV file with 'year' and 'value' columns")
    analyze_parser.add_argument("--variable", default="temperature", help="Variable name (for units)")
    analyze_parser.add_argument("--threshold", type=float, help="Exceedance threshold")
    analyze_parser.add_argument("--baseline", type=_parse_period, help="Baseline years, e.g. 1981-2010")
    analyze_parser.add_argument("--recent", type=_parse_period, help="Recent years, e.g. 2011-2023")
    analyze_parser.add_argument("--iterations", type=int, default=DEFAULT_BOOTSTRAP_ITERATIONS, help="Bootstrap resamples")
    analyze_parser.add_argument("--confidence", type=float, default=DEFAULT_CONFIDENCE_LEVEL, help="Bootstrap confidence level")
    analyze_parser.add_argument("--seed", type=int, help="Seed for reproducible bootstrap intervals")
    analyze_parser.add_argument("--tie-correction", action="store_true", help="Tie-adjusted Mann-Kendall variance")

    # serve subcommand
    subparsers.add_parser("serve", help="Start the FastAPI server")

    args = parser.parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        _serve()
    elif args.command == "analyze":
        _analyze(args)


def _parse_period(text: str):
    from climate_stats.compute.series import YearRange

    try:
        start, end = (int(part) for part in text.split("-", 1))
        return YearRange(start_year=start, end_year=end)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected START-END years, got {text!r}")


def _serve() -> None:
    try:
        import uvicorn
        from climate_stats.api.app import create_app  # noqa: F401

        uvicorn.run("climate_stats.api.app:create_app", factory=True, host="0.0.0.0", port=PORT)
    except ImportError as e:
        print(f"Missing dependency: {e}", file=sys.stderr)
        sys.exit(1)


def _analyze(args: argparse.Namespace) -> None:
    import pandas as pd

    from climate_stats.compute.summary import compute_statistics

    df = pd.read_csv(args.input)
    missing = {"year", "value"} - set(df.columns)
    if missing:
        print(f"Error: {args.input} is missing columns: {', '.join(sorted(missing))}", file=sys.stderr)
        sys.exit(2)

    df = df.dropna(subset=["year", "value"])
    try:
        summary = compute_statistics(
            variable=args.variable,
            series=zip(df["year"], df["value"]),
            threshold=args.threshold,
            baseline_period=args.baseline,
            recent_period=args.recent,
            iterations=args.iterations,
            confidence_level=args.confidence,
            seed=args.seed,
            tie_correction=args.tie_correction,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print(json.dumps(summary.as_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
