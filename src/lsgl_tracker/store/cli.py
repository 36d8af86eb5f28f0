"""CLI for the LSGL flight tracker."""

import argparse
import logging
import sys
from datetime import date

from lsgl_tracker.store.service import DEFAULT_DAYS, FlightDataController
from lsgl_tracker.store.sources.github import GitHubCsvSource
from lsgl_tracker.store.stats import daily_counts_dataframe


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Show tracked arrivals and departures at LSGL"
    )
    parser.add_argument(
        "--days",
        "-n",
        type=int,
        default=DEFAULT_DAYS,
        help=f"Past N days from midnight (default {DEFAULT_DAYS})",
    )
    parser.add_argument(
        "--start",
        help="Start date (YYYY-MM-DD). Use with --end; overrides --days",
    )
    parser.add_argument(
        "--end",
        help="End date (YYYY-MM-DD), inclusive. Use with --start",
    )
    parser.add_argument(
        "--counts",
        "-c",
        action="store_true",
        help="Print daily arrival/departure counts instead of flights",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Write results to CSV file",
    )
    parser.add_argument(
        "--base-url",
        help="Override the CSV data base URL",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if bool(args.start) != bool(args.end):
        print("Error: --start and --end must be given together", file=sys.stderr)
        sys.exit(1)

    start = end = None
    if args.start:
        try:
            start = date.fromisoformat(args.start)
            end = date.fromisoformat(args.end)
        except ValueError as e:
            print(f"Error: Invalid date format: {e}", file=sys.stderr)
            sys.exit(1)
        if start > end:
            print("Error: --start must be on or before --end", file=sys.stderr)
            sys.exit(1)

    controller = FlightDataController(source=GitHubCsvSource(base_url=args.base_url))
    controller.load_data()
    if controller.error:
        print(f"Error: {controller.error}", file=sys.stderr)
        sys.exit(1)

    controller.set_date_range(args.days, start, end)

    if args.counts:
        df = daily_counts_dataframe(controller.get_daily_counts())
    else:
        df = controller.to_dataframe(controller.get_filtered_flights())

    if df.empty:
        print("No flights found.", file=sys.stderr)
    else:
        print(df.to_string(index=False))

    if args.output and not df.empty:
        df.to_csv(args.output, index=False)
        print(f"\nWrote {len(df)} rows to {args.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
