"""
Unit tests for catalog search and luminance ordering.
"""

from palette_atlas.services.colors.models import NamedColor
from palette_atlas.services.colors.search import (
    ColorSearchEngine, search_colors, sort_by_luminance
)


def names_and_hexes(colors):
    return [(c.name, c.hex) for c in colors]


class TestSearchColors:
    """Test query matching and name ordering"""
    
    def test_empty_query_lists_everything_by_name(self, vendor_catalog):
        results = search_colors(vendor_catalog, "   ")
        assert [c.name for c in results] == ["Coral", "Coral", "Navy", "Tomato", "White"]
    
    def test_descending_keeps_equal_names_in_input_order(self, vendor_catalog):
        results = search_colors(vendor_catalog, "", ascending=False)
        assert names_and_hexes(results) == [
            ("White", " #ffffff "), ("Tomato", "#FF6347"), ("Navy", "#000080"),
            ("Coral", "ff7f50"), ("Coral", "#FF7F50"),
        ]
    
    def test_name_match_is_case_insensitive_and_trimmed(self, vendor_catalog):
        assert [c.name for c in search_colors(vendor_catalog, "  TOM ")] == ["Tomato"]
    
    def test_brand_and_vendor_code(self, vendor_catalog):
        assert len(search_colors(vendor_catalog, "acme")) == 2
        
        by_code = search_colors(vendor_catalog, "ac-03")
        assert [c.vendor.code for c in by_code] == ["AC-03"]
    
    def test_hex_fragment_ignores_case_and_hash(self, vendor_catalog):
        results = search_colors(vendor_catalog, "#ff7f")
        assert names_and_hexes(results) == [("Coral", "ff7f50"), ("Coral", "#FF7F50")]
    
    def test_hex_substring_anywhere(self, vendor_catalog):
        """'ff' appears in Tomato, both Corals and White"""
        results = search_colors(vendor_catalog, "ff")
        assert [c.name for c in results] == ["Coral", "Coral", "Tomato", "White"]
    
    def test_no_match(self, vendor_catalog):
        assert search_colors(vendor_catalog, "zzz") == []


class TestColorSearchEngine:
    """Test incremental narrowing"""
    
    def test_extending_query_narrows(self, vendor_catalog):
        engine = ColorSearchEngine(vendor_catalog)
        assert len(engine.search("c")) == 2
        assert len(engine.search("co")) == 2
        assert engine.search("cor", ascending=False)[0].hex == "ff7f50"
    
    def test_shorter_query_rescans_catalog(self):
        """Results of '#a' do not bound the results of 'a'"""
        engine = ColorSearchEngine([NamedColor("Azure", "#000000"), NamedColor("Black", "#0000AA")])
        
        assert [c.name for c in engine.search("#a")] == ["Black"]
        assert [c.name for c in engine.search("a")] == ["Azure", "Black"]
    
    def test_replace_all_resets_cache(self, vendor_catalog):
        engine = ColorSearchEngine(vendor_catalog)
        engine.search("navy")
        engine.replace_all([NamedColor("Navy Blue", "#1F2F5F")])
        assert [c.name for c in engine.search("navy")] == ["Navy Blue"]


class TestSortByLuminance:
    """Test brightness ordering"""
    
    def test_ascending_and_descending(self, vendor_catalog):
        ascending = sort_by_luminance(vendor_catalog)
        assert [c.name for c in ascending] == ["Navy", "Tomato", "Coral", "Coral", "White"]
        
        descending = sort_by_luminance(vendor_catalog, ascending=False)
        assert [c.name for c in descending][:2] == ["White", "Coral"]
