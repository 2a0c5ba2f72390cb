"""
Tests for the catalog loader.

Run with: pytest mtg/card_filter/tests/test_catalog_loader.py -v
"""

import json
from datetime import date

import pytest

from mtg.card_filter.catalog_loader import load_catalog, parse_release_date, record_from_json
from mtg.card_filter.errors import CatalogError


class TestParseReleaseDate:

    def test_iso_date(self):
        assert parse_release_date("2019-07-12") == date(2019, 7, 12)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date"])
    def test_missing_or_invalid(self, value):
        assert parse_release_date(value) is None

    @pytest.mark.parametrize("value, expected", [
        ("2019-07", date(2019, 7, 1)),
        ("2019", date(2019, 1, 1)),
    ])
    def test_partial_date_fills_first_of_period(self, value, expected):
        assert parse_release_date(value) == expected

    def test_date_passthrough(self):
        assert parse_release_date(date(2001, 1, 1)) == date(2001, 1, 1)


class TestRecordFromJson:

    def test_core_fields(self):
        record = record_from_json(
            {"id": "abc", "name": "Lightning Bolt", "set": "lea", "released_at": "1993-08-05", "rarity": "common"},
            position=0,
        )
        assert record.identity == "abc"
        assert record.name == "Lightning Bolt"
        assert record.set_code == "lea"
        assert record.release_date == date(1993, 8, 5)
        assert record.rarity == "common"

    def test_payload_carried_through(self):
        obj = {"id": "abc", "name": "X", "set": "y", "prices": {"usd": "1.00"}, "custom": [1, 2]}
        record = record_from_json(obj, position=0)
        assert dict(record.payload) == obj

    def test_missing_fields_default_empty(self):
        record = record_from_json({}, position=7)
        assert record.identity == "#7"
        assert record.name == ""
        assert record.set_code == ""
        assert record.release_date is None
        assert record.released_at == ""


class TestLoadCatalog:

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Database file not found"):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("invalid json")

        with pytest.raises(CatalogError, match="Invalid JSON in database file"):
            load_catalog(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text('{"not": "array"}')

        with pytest.raises(CatalogError, match="must contain an array"):
            load_catalog(path)

    def test_catalog_error_is_value_error(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text('"text"')

        with pytest.raises(ValueError):
            load_catalog(path)

    def test_load_sample(self, sample_cards_path):
        records = load_catalog(sample_cards_path)

        assert len(records) == 5
        assert [r.identity for r in records] == ["a1", "a2", "a3", "a4", "a5"]
        assert records[1].release_date == date(2019, 7, 12)

    def test_skips_non_objects(self, tmp_path):
        path = tmp_path / "mixed.json"
        path.write_text(json.dumps([{"name": "A", "set": "x"}, 42, "str", {"name": "B", "set": "y"}]))

        records = load_catalog(path)
        assert [r.name for r in records] == ["A", "B"]

    def test_empty_array(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        assert load_catalog(path) == []
