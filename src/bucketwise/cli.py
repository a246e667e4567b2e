#!/usr/bin/env python3
"""Command-line interface for bucketwise."""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

import requests

from bucketwise.config import (
    Config,
    ConfigError,
    config_to_dict,
    create_default_config,
    get_config_path,
    get_history_start,
    get_simplefin_access_url,
    load_config,
    save_json_config,
)
from bucketwise.goals import GoalProgress
from bucketwise.importer import TransactionImporter
from bucketwise.logging_setup import configure_logging
from bucketwise.models import (
    DateOperator,
    FilterField,
    GoalType,
    NumericOperator,
    StringOperator,
    Transaction,
)
from bucketwise.simplefin import SimpleFinClient, SimpleFinError
from bucketwise.summary import BucketSummary, summarize_buckets
from bucketwise.utils import parse_date


def format_goal(progress: GoalProgress) -> str:
    """One-line description of a bucket's goal progress."""
    if not progress.is_valid_period:
        return f"Goal: {progress.target_amount} - {progress.period_label} (check goal settings)"

    status = "on track" if progress.is_met_or_on_track else "off track"
    if progress.goal_type == GoalType.SAVINGS:
        status = "met" if progress.is_met_or_on_track else "not met"
        verb = "saved"
    else:
        verb = "spent"

    return (
        f"Goal: {progress.target_amount} - {progress.period_label}: "
        f"{progress.relevant_amount} {verb}, {progress.remaining} remaining "
        f"({progress.progress_percentage:.1f}%) [{status}]"
    )


def print_report(summaries: list[BucketSummary], out: TextIO | None = None) -> None:
    """Print bucket totals and goal progress (to stdout by default)."""
    out = out or sys.stdout
    if not summaries:
        print("No buckets or transactions to report.", file=out)
        return

    for summary in summaries:
        count = len(summary.transactions)
        print(
            f"{summary.name} ({count} transaction{'s' if count != 1 else ''}): "
            f"{summary.total_amount} {summary.currency}",
            file=out,
        )
        if summary.goal_progress.is_configured:
            print(f"  {format_goal(summary.goal_progress)}", file=out)


def collect_files(inputs: list[str]) -> list[Path]:
    """Expand input arguments into JSON payload files."""
    files: list[Path] = []
    for inp in inputs:
        path = Path(inp)
        if path.is_dir():
            files.extend(sorted(path.glob("*.json")))
        elif path.exists():
            files.append(path)
        else:
            print(f"Warning: {inp} not found", file=sys.stderr)
    return files


def list_fields() -> None:
    print("Fields:")
    for field in FilterField:
        print(f"  - {field.value}")
    print("String operators: " + ", ".join(op.value for op in StringOperator))
    print("Numeric operators: " + ", ".join(op.value for op in NumericOperator))
    print("Date operators: " + ", ".join(op.value for op in DateOperator))


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sort SimpleFIN transactions into budget buckets and track goals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bucketwise --init
  bucketwise ~/simplefin-exports/
  bucketwise --fetch --start-date 2024-01-01
  bucketwise --fetch -o categorized.csv
  bucketwise --list-fields
        """,
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Saved SimpleFIN /accounts JSON files or directories",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Write an empty config file",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration",
    )
    parser.add_argument(
        "--list-fields",
        action="store_true",
        help="List rule fields and operators",
    )

    # SimpleFIN
    parser.add_argument(
        "--fetch",
        action="store_true",
        help="Fetch transactions from SimpleFIN",
    )
    parser.add_argument(
        "--access-url",
        help="SimpleFIN access URL (or configure in config file)",
    )
    parser.add_argument(
        "--start-date",
        help="Earliest transaction date to fetch, YYYY-MM-DD (default: two years ago)",
    )

    # Output
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write categorized transactions to a CSV file",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "tsv"],
        default="csv",
        help="Output format (default: csv)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else None)

    if args.list_fields:
        list_fields()
        return 0

    if args.init:
        path = args.config or get_config_path()
        if path.exists():
            print(f"Error: {path} already exists", file=sys.stderr)
            return 1
        save_json_config(create_default_config(), path)
        print(f"Wrote empty configuration to {path}")
        return 0

    try:
        config: Config | None = load_config(args.config)
    except (ConfigError, OSError, ValueError) as e:
        print(f"Error: could not load configuration: {e}", file=sys.stderr)
        return 1

    if args.show_config:
        if config:
            print(json.dumps(config_to_dict(config), indent=2))
        else:
            print("No configuration found.")
            print("Run 'bucketwise --init' to create one.")
        return 0

    if config is None and not args.inputs and not args.fetch:
        print("Welcome to bucketwise!")
        print("\nNo configuration found. To set up, run:")
        print("  bucketwise --init")
        print("\nThen add rules and buckets to the generated config file.")
        return 0

    if not args.inputs and not args.fetch:
        parser.print_help()
        return 1

    config = config or Config()
    transactions: list[Transaction] = []

    if args.inputs:
        files = collect_files(args.inputs)
        if not files and not args.fetch:
            print("Error: No valid input files found", file=sys.stderr)
            return 1

        importer = TransactionImporter()
        transactions.extend(importer.process_files(files))
        for filepath, error in importer.errors:
            print(f"Warning: {filepath.name}: {error}", file=sys.stderr)
        print(f"Processed {len(files)} files", file=sys.stderr)

    if args.fetch:
        access_url = get_simplefin_access_url(config, args.access_url)
        if not access_url:
            print("Error: access URL required. Use --access-url or configure simplefin.access_url",
                  file=sys.stderr)
            return 1

        start_date = parse_date(args.start_date) if args.start_date else get_history_start(config)
        if start_date is None:
            print(f"Error: invalid start date {args.start_date!r}", file=sys.stderr)
            return 1

        try:
            client = SimpleFinClient(access_url)
            _, fetched = client.fetch_transactions(start_date)
        except (SimpleFinError, requests.RequestException) as e:
            print(f"Error fetching from SimpleFIN: {e}", file=sys.stderr)
            return 1
        transactions.extend(fetched)

    print(f"Found {len(transactions)} transactions", file=sys.stderr)

    summaries = summarize_buckets(transactions, config.buckets, config.rule_by_id, datetime.now())
    print_report(summaries)

    if args.output:
        categorized = [tx for summary in summaries for tx in summary.transactions]
        delimiter = "\t" if args.format == "tsv" else ","
        TransactionImporter.write_csv(categorized, args.output, delimiter)
        print(f"Wrote {len(categorized)} transactions to {args.output}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
