"""
Card Matcher - Core resolution engine.

Resolves each query against the catalog index using tiers, stopping at the
first tier that yields a candidate:

| Tier | Lookup                         | Selection          | Reported as |
|------|--------------------------------|--------------------|-------------|
| 1    | exact (name, set)              | first in catalog   | exact       |
| 2    | name only                      | most recent        | fallback    |
| 3    | substring containment, full scan | most recent      | fallback    |
| -    | nothing found                  | -                  | unmatched   |

Tier 3 is bidirectional: "Ballista Watcher" finds
"Ballista Watcher // Ballista Wielder", and "Arborea Pegasus (Showcase)"
finds "Arborea Pegasus".
"""

import logging
from typing import Iterable, Optional

from .config import Config
from .index import CatalogIndex
from .models import CardMatch, CardQuery, CardRecord, MatchKind, MatchReport
from .naming import normalize_name
from .recency import select_most_recent

logger = logging.getLogger(__name__)


def match_queries(
    queries: Iterable[CardQuery],
    index: CatalogIndex,
    config: Optional[Config] = None,
) -> MatchReport:
    """
    Resolve every query against the catalog.

    Args:
        queries: Parsed queries, in input order
        index: Catalog index built for this run
        config: Optional configuration (tier 3 can be switched off)

    Returns:
        MatchReport with one outcome per query
    """
    partial_match = config.matching.partial_match if config else True
    queries = list(queries)
    report = MatchReport()

    logger.info(f"Searching for {len(queries)} cards...")

    for query in queries:
        report.add(query, resolve_query(query, index, partial_match=partial_match))

    logger.info(
        f"Found {report.exact_count} exact matches, {report.fallback_count} "
        f"fallback matches, {report.unmatched_count} unmatched"
    )
    if report.unmatched:
        logger.warning("Unmatched queries:")
        for query in report.unmatched:
            logger.warning(f"  Line {query.line_number}: {query.name} [{query.set_code}]")

    return report


def resolve_query(
    query: CardQuery,
    index: CatalogIndex,
    partial_match: bool = True,
) -> Optional[CardMatch]:
    """
    Resolve a single query.

    Logic flow:
    1. Exact (name, set) - first record in catalog order
    2. Name only - most recent printing
    3. Partial name containment - most recent candidate
    4. None - unmatched

    Returns:
        CardMatch, or None when no tier found a candidate
    """
    # 1. Exact match. A (name, set) pair should be unique in the catalog.
    exact = index.lookup_exact(query.name, query.set_code)
    if exact:
        return CardMatch(query=query, card=exact[0], kind=MatchKind.EXACT)

    # 2. Same card, different set
    candidates = index.lookup_by_name(query.name)
    if candidates:
        card = select_most_recent(candidates)
        logger.info(
            f"  Fallback: {query.name} [{query.set_code}] -> found in "
            f"[{card.set_code.upper()}] ({_display_date(card)})"
        )
        return CardMatch(query=query, card=card, kind=MatchKind.NAME_ONLY)

    if not partial_match:
        return None

    # 3. Naming drift (variant suffixes, double-faced names)
    candidates = find_partial_candidates(query.name, index.records)
    if candidates:
        card = select_most_recent(candidates)
        logger.info(
            f"  Partial match: {query.name} [{query.set_code}] -> found "
            f"\"{card.name}\" in [{card.set_code.upper()}] ({_display_date(card)})"
        )
        return CardMatch(query=query, card=card, kind=MatchKind.PARTIAL)

    return None


def find_partial_candidates(
    query_name: str,
    records: Iterable[CardRecord],
) -> list[CardRecord]:
    """
    Collect records whose name contains the query name or vice versa.

    Records with an identical normalized name are excluded; those belong
    to the name-only tier.
    """
    wanted = normalize_name(query_name)
    candidates = []

    for record in records:
        name = normalize_name(record.name)
        if name == wanted:
            continue
        if wanted in name or name in wanted:
            candidates.append(record)

    return candidates


def _display_date(card: CardRecord) -> str:
    return card.released_at or "unknown date"


def summarize_results(report: MatchReport) -> dict:
    """Generate summary statistics for a report."""
    counts = {
        "total": report.total,
        "exact": 0,
        "fallback": 0,
        "name_only": 0,
        "partial": 0,
        "unmatched": report.unmatched_count,
    }

    for match in report.matches:
        if match.kind is MatchKind.EXACT:
            counts["exact"] += 1
        else:
            counts["fallback"] += 1
            if match.kind is MatchKind.NAME_ONLY:
                counts["name_only"] += 1
            elif match.kind is MatchKind.PARTIAL:
                counts["partial"] += 1

    counts["matched"] = counts["exact"] + counts["fallback"]
    counts["match_rate"] = round(report.match_rate, 4)

    return counts
