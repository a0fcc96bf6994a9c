"""
Unit tests for hex key normalization, favorites and deduplication.
"""

from palette_atlas.services.colors.hexkeys import (
    FavoritesIndex, dedupe_by_hex, normalize_hex, same_color
)
from palette_atlas.services.colors.models import NamedColor


class TestNormalizeHex:
    """Test canonical hex keys"""
    
    def test_case_prefix_and_whitespace_insensitive(self):
        assert normalize_hex("#ffAA00") == normalize_hex("FFAA00") == normalize_hex(" ffaa00 ")
        assert normalize_hex("#ffAA00") == "FFAA00"
    
    def test_strips_only_one_hash(self):
        assert normalize_hex("##ABCDEF") == "#ABCDEF"
    
    def test_malformed_values_normalize_without_error(self):
        assert normalize_hex("  #xyz ") == "XYZ"
        assert normalize_hex("") == ""
        assert normalize_hex("#") == ""
    
    def test_same_color(self):
        assert same_color("#abcdef", "ABCDEF")
        assert not same_color("#abcdef", "#abcdee")


class TestFavoritesIndex:
    """Test favorites membership predicate"""
    
    def test_membership_uses_normalized_keys(self):
        favorites = FavoritesIndex(["#ff0000", "00FF00"])
        assert favorites.is_favorite("FF0000")
        assert " #00ff00" in favorites
        assert not favorites.is_favorite("#0000FF")
    
    def test_add_ignores_equivalent_spellings(self):
        favorites = FavoritesIndex()
        assert favorites.add("#abcdef") is True
        assert favorites.add("ABCDEF") is False
        assert len(favorites) == 1
    
    def test_toggle_and_remove(self):
        favorites = FavoritesIndex()
        assert favorites.toggle("#123456") is True
        assert favorites.is_favorite("123456")
        assert favorites.toggle("123456") is False
        assert not favorites.is_favorite("#123456")
        assert favorites.remove("#123456") is False
    
    def test_keys_are_a_copy(self):
        favorites = FavoritesIndex(["#111111"])
        keys = favorites.keys()
        keys.add("222222")
        assert len(favorites) == 1


class TestDedupeByHex:
    """Test first-wins deduplication"""
    
    def test_keeps_first_in_input_order(self, vendor_catalog):
        unique = dedupe_by_hex(vendor_catalog)
        assert [c.name for c in unique] == ["Tomato", "Coral", "Navy", "White"]
        assert unique[1].vendor.code == "AC-12"
    
    def test_empty(self):
        assert dedupe_by_hex([]) == []
    
    def test_no_duplicates_is_identity(self):
        colors = [NamedColor("A", "#000001"), NamedColor("B", "#000002")]
        assert dedupe_by_hex(colors) == colors
