# MTG card filter: resolve a card list against a Scryfall dump

from .models import CardRecord, CardQuery, CardMatch, MatchReport, MatchTier, MatchKind
from .config import load_config, Config
from .errors import CardFilterError, CardListError, CatalogError, OutputError
from .card_parser import parse_card_file, parse_card_list, parse_card_line
from .catalog_loader import load_catalog
from .index import build_index, CatalogIndex
from .recency import select_most_recent
from .matcher import match_queries, resolve_query, summarize_results
from .output_writer import write_cards_json, report_to_dict
from .report import format_console, export_csv, export_xlsx, write_report
from .markdown import MarkdownGenerator, write_markdown

__version__ = "1.0.0"

__all__ = [
    # Models
    "CardRecord",
    "CardQuery",
    "CardMatch",
    "MatchReport",
    "MatchTier",
    "MatchKind",
    # Config
    "Config",
    "load_config",
    # Errors
    "CardFilterError",
    "CardListError",
    "CatalogError",
    "OutputError",
    # Input
    "parse_card_file",
    "parse_card_list",
    "parse_card_line",
    "load_catalog",
    # Index
    "build_index",
    "CatalogIndex",
    # Matcher
    "select_most_recent",
    "match_queries",
    "resolve_query",
    "summarize_results",
    # Output
    "write_cards_json",
    "report_to_dict",
    "format_console",
    "export_csv",
    "export_xlsx",
    "write_report",
    "MarkdownGenerator",
    "write_markdown",
]
