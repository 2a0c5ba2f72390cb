"""
Card List Parser - Read card queries from a text file.

Expected line format:
    Lightning Bolt [LEA]
    4 Serra's Angel [LEA]      <- leading count is ignored
    Counterspell [LEA]  # a trailing comment

Blank lines and lines starting with '#' are skipped.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import CardListError
from .models import CardQuery

logger = logging.getLogger(__name__)

LINE_PATTERN = re.compile(r"^(?:\d+\s+)?(.+?)\s*\[([^\]]+)\]$")


@dataclass
class ParseResult:
    """Queries parsed from a list, plus per-line error messages."""
    queries: list[CardQuery] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def should_skip_line(line: str) -> bool:
    """Check if a line is empty or a comment."""
    trimmed = line.strip()
    return trimmed == "" or trimmed.startswith("#")


def parse_card_line(line: str) -> Optional[tuple[str, str]]:
    """
    Parse "Card Name [SET]" (optionally prefixed by a count).

    Returns:
        (name, set_code) tuple, or None if the line doesn't match
    """
    clean = line.split("#", 1)[0].strip()
    if not clean:
        return None

    match = LINE_PATTERN.match(clean)
    if not match:
        return None

    name = match.group(1).strip()
    set_code = match.group(2).strip()
    if not name or not set_code:
        return None

    return name, set_code


def parse_card_list(text: str) -> ParseResult:
    """
    Parse the full contents of a card list.

    Line numbers are 1-based physical lines, so they still point at the
    right place when blank lines and comments are present.
    """
    result = ParseResult()

    for line_number, line in enumerate(re.split(r"\r?\n", text), start=1):
        if should_skip_line(line):
            continue

        parsed = parse_card_line(line)
        if parsed is None:
            result.errors.append(
                f"Line {line_number}: Invalid format. "
                f"Expected \"Card Name [SET]\" but got: \"{line.strip()}\""
            )
            continue

        name, set_code = parsed
        result.queries.append(CardQuery(
            name=name,
            set_code=set_code,
            source_line=line.strip(),
            line_number=line_number,
        ))

    return result


def parse_card_file(file_path: str | Path) -> list[CardQuery]:
    """
    Parse a text file containing card names and sets.

    Args:
        file_path: Path to the input list

    Returns:
        Parsed queries in file order

    Raises:
        FileNotFoundError: If the file does not exist
        CardListError: If no valid query was found
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    result = parse_card_list(path.read_text(encoding="utf-8"))

    if result.errors:
        logger.warning(f"Found {len(result.errors)} parsing errors:")
        for error in result.errors:
            logger.warning(f"  {error}")

    if not result.queries:
        raise CardListError("No valid card queries found in input file")

    logger.info(f"Parsed {len(result.queries)} card queries from {path.name}")
    return result.queries
