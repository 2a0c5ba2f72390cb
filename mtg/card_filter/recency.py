"""
Recency Selector - pick one printing out of several candidates.

Most recent release date wins. Records without a date sort as the oldest.
Python's sort is stable (also with reverse=True), so candidates sharing a
release date keep catalog order and the earliest one wins.
"""

from datetime import date
from typing import Sequence

from .models import CardRecord


def _release_sort_key(card: CardRecord) -> date:
    return card.release_date or date.min


def select_most_recent(candidates: Sequence[CardRecord]) -> CardRecord:
    """
    Select the most recently released candidate.

    Args:
        candidates: Non-empty sequence of records, in catalog order

    Returns:
        The record with the latest release date (first in order on ties)

    Raises:
        ValueError: If candidates is empty
    """
    if not candidates:
        raise ValueError("Cannot select most recent card from empty candidates")

    return sorted(candidates, key=_release_sort_key, reverse=True)[0]
