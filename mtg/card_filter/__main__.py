"""
CLI entry point for the MTG card filter.

Usage:
    python -m mtg.card_filter filter -i cards.txt -d all-cards.json -o matched.json
    python -m mtg.card_filter filter -i cards.txt -d all-cards.json -o matched.json --report report.xlsx
    python -m mtg.card_filter export -i matched.json -o notes/
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from . import __version__
from .card_parser import parse_card_file
from .catalog_loader import load_catalog
from .config import load_config
from .errors import OutputError
from .index import build_index
from .logging_setup import configure_logging
from .markdown import write_markdown
from .matcher import match_queries
from .output_writer import write_cards_json
from .report import format_console, generate_report_filename, write_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mtg-card-filter",
        description="Filter Magic: The Gathering cards from Scryfall JSON data",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    filter_cmd = subparsers.add_parser("filter", help="Match a card list against a card database")
    filter_cmd.add_argument(
        "-i", "--input",
        required=True,
        metavar="FILE",
        help="Input text file containing card queries",
    )
    filter_cmd.add_argument(
        "-d", "--database",
        required=True,
        metavar="FILE",
        help="JSON file containing Scryfall card data",
    )
    filter_cmd.add_argument(
        "-o", "--output",
        required=True,
        metavar="FILE",
        help="Output JSON file for matched cards",
    )
    filter_cmd.add_argument(
        "--report",
        metavar="FILE",
        help="Write a per-query match report (.json, .csv or .xlsx, or a directory)",
    )
    filter_cmd.add_argument(
        "--markdown",
        metavar="DIR",
        help="Also export matched cards as Markdown notes",
    )
    filter_cmd.add_argument(
        "--no-partial",
        action="store_true",
        help="Disable partial (substring) name matching",
    )
    _add_common_options(filter_cmd)

    export_cmd = subparsers.add_parser("export", help="Export a JSON card file to Markdown")
    export_cmd.add_argument(
        "-i", "--input",
        required=True,
        metavar="FILE",
        help="JSON file containing an array of cards",
    )
    export_cmd.add_argument(
        "-o", "--output",
        required=True,
        metavar="DIR",
        help="Output directory for Markdown files",
    )
    _add_common_options(export_cmd)

    return parser


def _add_common_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help="YAML config file",
    )
    subparser.add_argument("--log-level", default=None, help="Set logging level")
    subparser.add_argument("--log-file", default=None, metavar="FILE", help="Also log to this file")


def _warn_extensions(args) -> None:
    if not args.input.lower().endswith(".txt"):
        logger.warning("Input file should have .txt extension")
    if not args.database.lower().endswith(".json"):
        logger.warning("Database file should have .json extension")
    if not args.output.lower().endswith(".json"):
        logger.warning("Output file should have .json extension")


def run_filter(args, config) -> int:
    start = time.perf_counter()
    _warn_extensions(args)

    if args.no_partial:
        config.matching.partial_match = False

    queries = parse_card_file(args.input)
    records = load_catalog(args.database)
    index = build_index(records, separator=config.matching.key_separator)

    report = match_queries(queries, index, config)

    output_path = write_cards_json(report, args.output, config.output)

    if args.report:
        report_path = Path(args.report)
        if report_path.is_dir():
            report_path = report_path / generate_report_filename()
        write_report(report, report_path)

    if args.markdown:
        write_markdown(report.cards, args.markdown)

    elapsed_ms = (time.perf_counter() - start) * 1000
    print(format_console(report, elapsed_ms=elapsed_ms))
    print(f"\nResults written to: {output_path.resolve()}")
    return 0


def run_export(args, config) -> int:
    cards = load_catalog(args.input)
    write_markdown(cards, args.output)
    print(f"Exported {len(cards)} cards to {Path(args.output).resolve()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        configure_logging(
            level=args.log_level or config.logging.level,
            log_file=args.log_file or config.logging.file,
        )

        if args.command == "filter":
            print(f"MTG Card Filter Tool v{__version__}")
            print("=" * 30 + "\n")
            return run_filter(args, config)
        return run_export(args, config)

    except (FileNotFoundError, ValueError, OutputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
