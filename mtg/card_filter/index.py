"""
Catalog Index - Fast lookup structures for card matching.

Instead of scanning the whole catalog for every query, we build two
lookup tables once per run:
- by_name_set: O(1) exact (name, set) match
- by_name: O(1) fallback lookup by name alone

The index is an immutable value. Both tables hold tuples that reference
the same CardRecord instances as `records`.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .models import CardRecord
from .naming import DEFAULT_KEY_SEPARATOR, index_key, normalize_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogIndex:
    """
    Indexed catalog snapshot.

    Attributes:
        records: All records in original catalog order
        by_name_set: Exact key -> records sharing that name and set (catalog order)
        by_name: Normalized name -> records sharing that name (catalog order)
        separator: Separator used when building exact keys
    """
    records: tuple[CardRecord, ...]
    by_name_set: Mapping[str, tuple[CardRecord, ...]]
    by_name: Mapping[str, tuple[CardRecord, ...]]
    separator: str = DEFAULT_KEY_SEPARATOR

    @property
    def record_count(self) -> int:
        return len(self.records)

    @property
    def exact_key_count(self) -> int:
        return len(self.by_name_set)

    @property
    def name_count(self) -> int:
        return len(self.by_name)

    def lookup_exact(self, name: str, set_code: str) -> tuple[CardRecord, ...]:
        """Look up records by exact (name, set) match."""
        return self.by_name_set.get(index_key(name, set_code, self.separator), ())

    def lookup_by_name(self, name: str) -> tuple[CardRecord, ...]:
        """Look up every printing of a card name regardless of set."""
        return self.by_name.get(normalize_name(name), ())


def build_index(
    records: Iterable[CardRecord],
    separator: str = DEFAULT_KEY_SEPARATOR,
) -> CatalogIndex:
    """
    Build lookup index from catalog records.

    Args:
        records: CardRecords from the catalog loader, in catalog order
        separator: Separator between name and set in exact keys

    Returns:
        CatalogIndex with exact and name-only lookups
    """
    snapshot = tuple(records)
    by_name_set: dict[str, list[CardRecord]] = {}
    by_name: dict[str, list[CardRecord]] = {}

    for record in snapshot:
        # Duplicates are kept; first in catalog order wins on exact lookups
        exact = index_key(record.name, record.set_code, separator)
        by_name_set.setdefault(exact, []).append(record)

        by_name.setdefault(normalize_name(record.name), []).append(record)

    index = CatalogIndex(
        records=snapshot,
        by_name_set=MappingProxyType({k: tuple(v) for k, v in by_name_set.items()}),
        by_name=MappingProxyType({k: tuple(v) for k, v in by_name.items()}),
        separator=separator,
    )
    logger.info(
        f"Index built with {index.exact_key_count} exact matches "
        f"and {index.name_count} unique card names"
    )
    return index
