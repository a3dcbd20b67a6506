"""Command-line interface for text statistics."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .aggregator import StatisticsAggregator
from .config import Config
from .exceptions import InvalidText, TextStatsError
from .models import StatisticsResult, TextSnapshot, format_status
from .pipeline import StatisticsPipeline

COMMANDS = {"count", "report"}


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    if argv is None:
        argv = sys.argv[1:]
    # Without a subcommand, treat arguments as a count command
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help")):
        argv = ["count", *argv]

    parser = argparse.ArgumentParser(
        prog="textstats",
        description="Count Unicode words and grapheme clusters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Count a file with the default locale
  textstats notes.txt

  # Read from stdin with Thai word rules
  echo "สวัสดีครับ" | textstats count --locale th

  # Report on a directory tree
  textstats report --input docs/ --output stats.csv --workers 4
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    count_parser = subparsers.add_parser("count", help="Count words and graphemes")
    setup_count_parser(count_parser)

    report_parser = subparsers.add_parser(
        "report", help="Write statistics for many files to CSV/JSON"
    )
    setup_report_parser(report_parser)

    return parser.parse_args(argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--engine",
        choices=["icu", "regex"],
        help="Segmentation engine (default: icu)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def setup_count_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for count command."""
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Files to count (default: read stdin)",
    )
    parser.add_argument(
        "--locale",
        help='BCP-47 locale tag, or "default" (default: configured default)',
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    _add_common_arguments(parser)


def setup_report_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for report command."""
    parser.add_argument(
        "--input",
        type=Path,
        nargs="+",
        help="Input files or directories",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Output file for the report",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "json"],
        help="Report format (default: csv)",
    )
    parser.add_argument(
        "--pattern",
        help="Glob pattern for files inside directories (default: *.txt)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of parallel workers (default: 1)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    _add_common_arguments(parser)


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    # Start with config file if provided
    if getattr(args, "config", None):
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    if getattr(args, "engine", None):
        config.segmentation.engine = args.engine

    # Report overrides
    if getattr(args, "input", None):
        config.input.paths = list(args.input)
    if getattr(args, "pattern", None):
        config.input.pattern = args.pattern
    if getattr(args, "output", None):
        config.output.output_path = args.output
    if getattr(args, "format", None):
        config.output.format = args.format
    if getattr(args, "workers", None) is not None:
        config.processing.workers = args.workers
    if getattr(args, "no_progress", False):
        config.processing.show_progress = False

    # Re-validate after attribute overrides
    return Config.model_validate(config.model_dump())


def handle_count(args: argparse.Namespace) -> int:
    """Handle count command."""
    try:
        config = build_config(args)
        aggregator = StatisticsAggregator.from_config(config)
    except (ValidationError, TextStatsError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sources = [(str(path), path) for path in args.files] or [("<stdin>", None)]
    exit_code = 0
    records = []

    for name, path in sources:
        try:
            data = path.read_bytes() if path else sys.stdin.buffer.read()
            snapshot = TextSnapshot.from_bytes(data, encoding=config.input.encoding)
        except OSError as e:
            print(f"Error: cannot read {name}: {e}", file=sys.stderr)
            exit_code = 1
            continue
        except InvalidText as e:
            print(f"Error: {name}: {e}", file=sys.stderr)
            exit_code = 1
            continue

        result = aggregator.compute(snapshot, args.locale)
        if args.json:
            records.append({"path": name, **result.as_dict()})
        elif len(sources) > 1:
            print(f"{name}: {format_status(result)}")
        else:
            print(format_status(result))

    if args.json:
        print(json.dumps(records, ensure_ascii=False, indent=2))
    return exit_code


def handle_report(args: argparse.Namespace) -> int:
    """Handle report command."""
    try:
        config = build_config(args)
    except (ValidationError, TextStatsError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.input.paths:
        print("Error: Input paths are required (use --input or --config)", file=sys.stderr)
        return 1

    try:
        pipeline = StatisticsPipeline(config)
        rows = pipeline.run()
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1

    if not config.output.output_path:
        for row in rows:
            if row.error:
                print(f"{row.path}: error: {row.error}")
            else:
                result = StatisticsResult(row.word_count, row.grapheme_count)
                print(f"{row.path}: {format_status(result)}")

    print(f"\nProcessed {len(rows)} files", file=sys.stderr)
    return 1 if any(row.error for row in rows) else 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(getattr(args, "verbose", False))

    if args.command == "report":
        return handle_report(args)
    return handle_count(args)


if __name__ == "__main__":
    sys.exit(main())
