"""
Shared fixtures for the card filter test suite.

Provides:
- make_card / make_query factories
- A small catalog matching the Lightning Bolt scenarios
- Paths to the on-disk fixtures
"""
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Optional

import pytest

from mtg.card_filter.index import build_index
from mtg.card_filter.models import CardQuery, CardRecord


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_card(
    name: str,
    set_code: str,
    released: Optional[str] = None,
    identity: Optional[str] = None,
    **extra,
) -> CardRecord:
    """Build a CardRecord whose payload mirrors a Scryfall object."""
    payload = {"id": identity or f"{set_code}-{name}", "name": name, "set": set_code, **extra}
    if released:
        payload["released_at"] = released
    return CardRecord(
        identity=payload["id"],
        name=name,
        set_code=set_code,
        release_date=date.fromisoformat(released) if released else None,
        payload=MappingProxyType(payload),
    )


def make_query(name: str, set_code: str, line_number: int = 1) -> CardQuery:
    return CardQuery(
        name=name,
        set_code=set_code,
        source_line=f"{name} [{set_code}]",
        line_number=line_number,
    )


@pytest.fixture
def bolt_catalog():
    """Two Lightning Bolt printings plus one Counterspell."""
    return [
        make_card("Lightning Bolt", "lea", "1993-08-05", identity="1"),
        make_card("Lightning Bolt", "m20", "2019-07-12", identity="2"),
        make_card("Counterspell", "lea", "1993-08-05", identity="3"),
    ]


@pytest.fixture
def bolt_index(bolt_catalog):
    return build_index(bolt_catalog)


@pytest.fixture
def sample_cards_path():
    return FIXTURES_DIR / "sample_cards.json"


@pytest.fixture
def sample_list_path():
    return FIXTURES_DIR / "sample_list.txt"
