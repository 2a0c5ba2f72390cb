"""
Output Writer - Write matched cards as JSON.

The cards file is a JSON array of the original catalog objects, so it can
be fed back into any tool that reads Scryfall data.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .config import OutputSettings
from .errors import OutputError
from .matcher import summarize_results
from .models import CardRecord, MatchReport

logger = logging.getLogger(__name__)


def card_to_json(card: CardRecord) -> dict[str, Any]:
    """Return the original catalog object for a record."""
    return dict(card.payload)


def write_cards_json(
    report: MatchReport,
    output_path: str | Path,
    settings: Optional[OutputSettings] = None,
) -> Path:
    """
    Write matched cards to a JSON file.

    Args:
        report: Result of the matching run
        output_path: Destination file
        settings: Output settings (indent, directory creation)

    Returns:
        Path written

    Raises:
        OutputError: If the file cannot be written
    """
    settings = settings or OutputSettings()
    path = Path(output_path)
    cards = [card_to_json(card) for card in report.cards]

    try:
        if settings.create_dirs:
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cards, f, indent=settings.indent, ensure_ascii=False)
    except OSError as e:
        raise OutputError(f"Failed to write output file: {e}") from e

    logger.info(f"Successfully wrote {len(cards)} cards to {path.name}")
    return path


def report_to_dict(report: MatchReport) -> dict[str, Any]:
    """
    Serialize a report with per-query tier tags.

    Returns:
        {"summary": {...}, "matches": [...], "unmatched": [...]}
    """
    return {
        "summary": summarize_results(report),
        "matches": [
            {
                "line": m.query.line_number,
                "query": m.query.name,
                "set": m.query.set_code,
                "tier": m.tier.value,
                "kind": m.kind.value,
                "card": {
                    "id": m.card.identity,
                    "name": m.card.name,
                    "set": m.card.set_code,
                    "released_at": m.card.released_at or None,
                },
            }
            for m in report.matches
        ],
        "unmatched": [
            {
                "line": q.line_number,
                "name": q.name,
                "set": q.set_code,
                "source_line": q.source_line,
            }
            for q in report.unmatched
        ],
    }
