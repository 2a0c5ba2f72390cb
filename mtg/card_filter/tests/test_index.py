"""
Tests for catalog index building and lookups.

Run with: pytest mtg/card_filter/tests/test_index.py -v
"""

import pytest

from mtg.card_filter.index import build_index, CatalogIndex
from mtg.card_filter.naming import index_key, normalize_name, sanitize_filename

from conftest import make_card


class TestNaming:
    """Test key normalization."""

    def test_normalize_trims_and_lowercases(self):
        assert normalize_name("  Lightning Bolt  ") == "lightning bolt"

    def test_normalize_empty_string(self):
        assert normalize_name("") == ""
        assert normalize_name("   ") == ""

    def test_index_key(self):
        assert index_key(" Lightning Bolt", "LEA ") == "lightning bolt|lea"

    def test_sanitize_filename(self):
        assert sanitize_filename("Jace, the Mind Sculptor") == "jace-the-mind-sculptor"
        assert sanitize_filename("Serra's Angel") == "serras-angel"
        assert sanitize_filename("Lim-Dûl's Vault") == "lim-dls-vault"


class TestCatalogIndex:
    """Test index building and lookups."""

    def test_build_index(self, bolt_index):
        assert bolt_index.record_count == 3
        assert bolt_index.exact_key_count == 3
        assert bolt_index.name_count == 2

    def test_exact_lookup_case_insensitive(self, bolt_index):
        matches = bolt_index.lookup_exact("LIGHTNING BOLT", " Lea ")
        assert len(matches) == 1
        assert matches[0].identity == "1"

    def test_exact_lookup_missing(self, bolt_index):
        assert bolt_index.lookup_exact("Lightning Bolt", "xyz") == ()

    def test_name_lookup_keeps_catalog_order(self, bolt_index):
        matches = bolt_index.lookup_by_name("lightning bolt")
        assert [m.identity for m in matches] == ["1", "2"]

    def test_name_lookup_missing(self, bolt_index):
        assert bolt_index.lookup_by_name("Black Lotus") == ()

    def test_tables_share_record_instances(self, bolt_catalog, bolt_index):
        exact = bolt_index.lookup_exact("Lightning Bolt", "lea")[0]
        by_name = bolt_index.lookup_by_name("Lightning Bolt")[0]
        assert exact is by_name is bolt_catalog[0]

    def test_records_keep_catalog_order(self, bolt_catalog, bolt_index):
        assert bolt_index.records == tuple(bolt_catalog)

    def test_index_is_read_only(self, bolt_index):
        with pytest.raises(TypeError):
            bolt_index.by_name["new"] = ()
        with pytest.raises(AttributeError):
            bolt_index.records = ()

    def test_custom_separator(self, bolt_catalog):
        index = build_index(bolt_catalog, separator="::")
        assert "lightning bolt::lea" in index.by_name_set
        assert index.lookup_exact("Lightning Bolt", "LEA")


class TestCatalogIndexEdgeCases:
    """Test edge cases for index."""

    def test_empty_records(self):
        index = build_index([])
        assert isinstance(index, CatalogIndex)
        assert index.record_count == 0
        assert index.lookup_exact("anything", "any") == ()
        assert index.lookup_by_name("anything") == ()

    def test_duplicate_name_and_set_retained(self):
        """Duplicates are kept in insertion order, not deduplicated."""
        records = [
            make_card("Dup", "abc", "2000-01-01", identity="first"),
            make_card("Dup", "abc", "2010-01-01", identity="second"),
        ]
        index = build_index(records)

        matches = index.lookup_exact("Dup", "ABC")
        assert [m.identity for m in matches] == ["first", "second"]

    def test_empty_name_and_set(self):
        index = build_index([make_card("", "", identity="blank")])
        assert index.lookup_exact("", "")[0].identity == "blank"

    def test_accepts_generator(self):
        index = build_index(make_card(f"Card {i}", "set") for i in range(3))
        assert index.record_count == 3
