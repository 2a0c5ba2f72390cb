"""
Data models for the card filter.

Catalog records and queries are frozen dataclasses so the index can share
the same instances between lookup tables without copies.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class MatchTier(Enum):
    """
    Classification reported to consumers of a match.

    EXACT: name and set code both matched.
    FALLBACK: matched on name only or by partial name containment.
    """
    EXACT = "exact"
    FALLBACK = "fallback"


class MatchKind(Enum):
    """Which matching stage produced a result (finer than MatchTier)."""
    EXACT = "exact"
    NAME_ONLY = "name_only"
    PARTIAL = "partial"

    @property
    def tier(self) -> MatchTier:
        if self is MatchKind.EXACT:
            return MatchTier.EXACT
        return MatchTier.FALLBACK


@dataclass(frozen=True)
class CardRecord:
    """
    A single printing from the reference catalog (Scryfall dump).

    Only name, set code and release date are used for matching. Everything
    else in the source object lives in payload and is written back out
    unchanged.
    """
    identity: str
    name: str
    set_code: str
    release_date: Optional[date] = None
    payload: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )

    @property
    def set_name(self) -> str:
        return str(self.payload.get("set_name") or "")

    @property
    def type_line(self) -> str:
        return str(self.payload.get("type_line") or "")

    @property
    def rarity(self) -> str:
        return str(self.payload.get("rarity") or "")

    @property
    def released_at(self) -> str:
        """Release date as ISO text, empty when unknown."""
        return self.release_date.isoformat() if self.release_date else ""


@dataclass(frozen=True)
class CardQuery:
    """One requested card parsed from a line of the input list."""
    name: str
    set_code: str
    source_line: str = ""   # Trimmed original line, for diagnostics
    line_number: int = 0


@dataclass(frozen=True)
class CardMatch:
    """A query resolved to a catalog record."""
    query: CardQuery
    card: CardRecord
    kind: MatchKind

    @property
    def tier(self) -> MatchTier:
        return self.kind.tier


@dataclass
class MatchReport:
    """
    Accumulated outcomes for a whole query list.

    Matches and unmatched queries each keep input order. Every query added
    lands in exactly one bucket.
    """
    matches: list[CardMatch] = field(default_factory=list)
    unmatched: list[CardQuery] = field(default_factory=list)

    def add(self, query: CardQuery, match: Optional[CardMatch]) -> None:
        """Record the outcome for one query (None means no match)."""
        if match is None:
            self.unmatched.append(query)
        else:
            self.matches.append(match)

    @property
    def total(self) -> int:
        return len(self.matches) + len(self.unmatched)

    @property
    def exact_count(self) -> int:
        return sum(1 for m in self.matches if m.tier is MatchTier.EXACT)

    @property
    def fallback_count(self) -> int:
        return sum(1 for m in self.matches if m.tier is MatchTier.FALLBACK)

    @property
    def unmatched_count(self) -> int:
        return len(self.unmatched)

    @property
    def cards(self) -> list[CardRecord]:
        """Matched catalog records in query order."""
        return [m.card for m in self.matches]

    @property
    def match_rate(self) -> float:
        """Fraction of queries that matched (0.0 for an empty report)."""
        if self.total == 0:
            return 0.0
        return len(self.matches) / self.total
