#!/usr/bin/env python3
"""Chemical usage EDA report - run from the command line.

Usage:
    python run_report.py                          # CSV from CHEM_DATA_CSV
    python run_report.py data/raw/chemical_usage.csv -o output/
    python run_report.py --chemicals Atrazine Glyphosate
    python run_report.py --no-lookup              # charts only, no PubChem calls
"""

from __future__ import annotations

import argparse
import sys

from dotenv import load_dotenv

load_dotenv()

from src.analysis.toxicity import TOXICITY_SEED  # noqa: E402
from src.data_pipeline.load_usage import CHEM_DATA_CSV, load_chemical_usage, print_summary  # noqa: E402
from src.report.eda_report import REPORT_OUTPUT_DIR, build_report, format_hazards, save_report  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Exploratory report on agricultural chemical usage with GHS hazard lookups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_report.py data/raw/chemical_usage.csv
  python run_report.py --top 15 --lookup-count 3
  python run_report.py --chemicals Atrazine "2,4-D" --output reports/
        """,
    )
    parser.add_argument("csv", nargs="?", default=str(CHEM_DATA_CSV),
                        help=f"Chemical usage CSV (default: {CHEM_DATA_CSV})")
    parser.add_argument("--output", "-o", default=str(REPORT_OUTPUT_DIR),
                        help=f"Directory for chart files (default: {REPORT_OUTPUT_DIR})")
    parser.add_argument("--chemicals", nargs="+", default=None,
                        help="Chemical names to look up (default: highest-usage chemicals)")
    parser.add_argument("--top", type=int, default=10,
                        help="Number of chemicals in the top-usage chart (default: 10)")
    parser.add_argument("--lookup-count", type=int, default=5,
                        help="How many top chemicals to look up when --chemicals is not given (default: 5)")
    parser.add_argument("--seed", type=int, default=TOXICITY_SEED,
                        help=f"Seed for the simulated toxicity scores (default: {TOXICITY_SEED})")
    parser.add_argument("--no-lookup", action="store_true",
                        help="Skip the PubChem hazard lookups")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    print("=" * 60)
    print("Chemical Usage EDA Report")
    print("=" * 60)

    try:
        df = load_chemical_usage(args.csv)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    print_summary(df)

    print("\nBuilding charts ...")
    report = build_report(
        df,
        chemicals=args.chemicals,
        top_n=args.top,
        lookup_count=args.lookup_count,
        seed=args.seed,
        lookup=not args.no_lookup,
    )

    written = save_report(report, args.output)

    if report.hazards:
        print("\nGHS hazard statements:")
        print(format_hazards(report.hazards))

    print("\n" + "=" * 60)
    print(f"Report written to {args.output} ({len(written)} files)")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
