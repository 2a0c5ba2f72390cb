"""
Catalog Loader - Parse a Scryfall JSON dump into CardRecords.

The dump is a single JSON array of card objects. Only id, name, set and
released_at are read here; the whole object is kept as the record payload.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from dateutil import parser as date_parser

from .errors import CatalogError
from .models import CardRecord

logger = logging.getLogger(__name__)

# Missing month or day parts resolve to the first of the period
_DATE_DEFAULT = datetime(1, 1, 1)


def parse_release_date(value: Any) -> Optional[date]:
    """
    Parse a released_at value.

    Returns:
        date, or None when missing or unparseable
    """
    if value is None:
        return None
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        return date_parser.parse(text, default=_DATE_DEFAULT).date()
    except (ValueError, OverflowError):
        logger.debug(f"Unparseable release date: {text!r}")
        return None


def record_from_json(obj: dict, position: int) -> CardRecord:
    """
    Build a CardRecord from one card object.

    Args:
        obj: Card object from the dump
        position: Index in the dump, used when the object has no id

    Returns:
        CardRecord with the original object attached as payload
    """
    identity = obj.get("id")
    return CardRecord(
        identity=str(identity) if identity else f"#{position}",
        name=str(obj.get("name") or ""),
        set_code=str(obj.get("set") or ""),
        release_date=parse_release_date(obj.get("released_at")),
        payload=MappingProxyType(dict(obj)),
    )


def load_catalog(file_path: str | Path) -> list[CardRecord]:
    """
    Load card records from a JSON database file.

    Args:
        file_path: Path to the Scryfall JSON file

    Returns:
        List of CardRecord in file order

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogError: If the file is not valid JSON or not an array
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Database file not found: {path}")

    logger.info(f"Loading card database from {path.name}...")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in database file: {e}") from e

    if not isinstance(data, list):
        raise CatalogError("Database file must contain an array of card objects")

    records = []
    skipped = 0
    for position, obj in enumerate(data):
        if not isinstance(obj, dict):
            skipped += 1
            continue
        records.append(record_from_json(obj, position))

    if skipped:
        logger.warning(f"Skipped {skipped} non-object entries in {path.name}")

    logger.info(f"Loaded {len(records)} cards from database")
    return records
