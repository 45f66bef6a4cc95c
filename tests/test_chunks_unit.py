"""
Unit tests — Chunk placement and limits (sitemap_builder.chunks).
"""

from unittest.mock import patch

import pytest

from sitemap_builder.chunks import ChunkManager
from sitemap_builder.errors import ValidationError
from sitemap_builder.limits import MAX_SITEMAP_SIZE, MAX_URLS_PER_SITEMAP, SITEMAPINDEX, URLSET
from sitemap_builder.records import IndexEntry, UrlEntry
from sitemap_builder.size import chunk_base_length, url_element_length
from sitemap_builder.xmlio import serialize
from tests.conftest import locs

# 22 characters -> 44-byte <url> element
SHORT_URL = "https://example.com/p1"
SHORT_LENGTH = 44


def counts(chunks):
    return [chunk.entry_count for chunk in chunks]


class TestValidation:
    """ChunkManager.append_url — location and character checks."""

    def test_empty_location_rejected(self):
        manager = ChunkManager()
        with pytest.raises(ValidationError, match="mandatory"):
            manager.append_url(UrlEntry(""))
        assert manager.sitemap_chunks == []

    def test_oversized_location_rejected(self):
        manager = ChunkManager()
        with pytest.raises(ValidationError, match="2048"):
            manager.append_url(UrlEntry("https://example.com/" + "a" * 2029))

    def test_max_length_accepted(self):
        manager = ChunkManager()
        manager.append_url(UrlEntry("https://example.com/" + "a" * 2028))
        assert manager.url_count == 1

    def test_length_checked_before_escaping(self):
        manager = ChunkManager()
        # 2048 characters, far longer once every & becomes &amp;
        manager.append_url(UrlEntry("https://example.com/" + "&" * 2028))
        assert manager.url_count == 1

    @pytest.mark.parametrize("entry", [
        UrlEntry("https://example.com/a\x01b"),
        UrlEntry("https://example.com/a", "2025-12-01\x00"),
        UrlEntry("https://example.com/a", "", "daily\x1b"),
        UrlEntry("https://example.com/a", "", "", "0.5\uFFFE"),
    ])
    def test_characters_outside_xml_rejected(self, entry):
        manager = ChunkManager()
        with pytest.raises(ValidationError, match="not allowed in XML"):
            manager.append_url(entry)
        assert manager.sitemap_chunks == []

    def test_tab_newline_and_astral_characters_accepted(self):
        manager = ChunkManager()
        manager.append_url(UrlEntry("https://example.com/\U0001F680", "", "daily\tweekly\n"))
        assert manager.url_count == 1

    def test_index_entry_characters_checked(self):
        manager = ChunkManager()
        with pytest.raises(ValidationError, match="not allowed in XML"):
            manager.append_index_entry(IndexEntry("https://example.com/\x07.xml"))


class TestAppendUrl:
    """ChunkManager.append_url — chunk opening rules."""

    def test_first_entry_opens_chunk(self):
        manager = ChunkManager()
        chunk = manager.append_url(UrlEntry(SHORT_URL))
        assert manager.sitemap_chunks == [chunk]
        assert chunk.kind == URLSET
        assert chunk.entry_count == 1
        assert chunk.byte_length == chunk_base_length(URLSET) + SHORT_LENGTH

    def test_entry_cap_opens_second_chunk(self):
        manager = ChunkManager()
        for n in range(MAX_URLS_PER_SITEMAP + 1):
            manager.append_url(UrlEntry(f"https://example.com/{n}"))

        assert counts(manager.sitemap_chunks) == [MAX_URLS_PER_SITEMAP, 1]
        assert locs(serialize(manager.sitemap_chunks[1])) == [f"https://example.com/{MAX_URLS_PER_SITEMAP}"]

    def test_patched_entry_cap(self, three_per_chunk):
        manager = ChunkManager()
        for n in range(7):
            manager.append_url(UrlEntry(f"https://example.com/{n}"))
        assert counts(manager.sitemap_chunks) == [3, 3, 1]

    def test_exact_byte_fit_stays_in_chunk(self, base_length):
        manager = ChunkManager()
        with patch("sitemap_builder.limits.MAX_SITEMAP_SIZE", base_length + 2 * SHORT_LENGTH):
            for _ in range(3):
                manager.append_url(UrlEntry(SHORT_URL))
        assert counts(manager.sitemap_chunks) == [2, 1]
        assert manager.sitemap_chunks[0].byte_length == base_length + 2 * SHORT_LENGTH

    def test_crossing_entry_starts_new_chunk(self, base_length):
        manager = ChunkManager()
        cap = base_length + 2 * SHORT_LENGTH - 1
        with patch("sitemap_builder.limits.MAX_SITEMAP_SIZE", cap):
            for _ in range(3):
                manager.append_url(UrlEntry(SHORT_URL))
        assert counts(manager.sitemap_chunks) == [1, 1, 1]
        for chunk in manager.sitemap_chunks:
            assert chunk.byte_length <= cap
            assert len(serialize(chunk)) <= cap

    def test_entry_larger_than_cap_rejected(self, base_length):
        manager = ChunkManager()
        with patch("sitemap_builder.limits.MAX_SITEMAP_SIZE", base_length + 10):
            with pytest.raises(ValidationError, match="does not fit"):
                manager.append_url(UrlEntry(SHORT_URL))
        assert manager.sitemap_chunks == []

    def test_oversized_optional_field_rejected_at_real_cap(self):
        manager = ChunkManager()
        manager.append_url(UrlEntry("https://example.com/a"))
        with pytest.raises(ValidationError, match="does not fit"):
            manager.append_url(UrlEntry("https://example.com/b", "", "", "9" * (MAX_SITEMAP_SIZE + 10)))
        assert counts(manager.sitemap_chunks) == [1]
        assert all(chunk.byte_length <= MAX_SITEMAP_SIZE for chunk in manager.sitemap_chunks)

    def test_entry_filling_an_empty_chunk_exactly_accepted(self, base_length):
        manager = ChunkManager()
        with patch("sitemap_builder.limits.MAX_SITEMAP_SIZE", base_length + SHORT_LENGTH):
            manager.append_url(UrlEntry(SHORT_URL))
            manager.append_url(UrlEntry(SHORT_URL))
        assert counts(manager.sitemap_chunks) == [1, 1]

    def test_byte_length_matches_serialized(self):
        manager = ChunkManager()
        manager.append_url(UrlEntry("https://example.com/a&b", "2025-12-01", "daily", "0.5"))
        manager.append_url(UrlEntry("https://example.com/it's"))
        chunk = manager.sitemap_chunks[0]
        assert chunk.byte_length == len(serialize(chunk))

    def test_real_byte_cap_respected(self):
        manager = ChunkManager()
        long_url = "https://example.com/" + "x" * 2000
        needed = MAX_SITEMAP_SIZE // url_element_length(UrlEntry(long_url)) + 1
        for _ in range(needed):
            manager.append_url(UrlEntry(long_url))

        assert len(manager.sitemap_chunks) == 2
        for chunk in manager.sitemap_chunks:
            assert chunk.byte_length <= MAX_SITEMAP_SIZE
            assert len(serialize(chunk)) == chunk.byte_length


class TestAppendIndexEntry:
    """ChunkManager.append_index_entry — same rules, index caps."""

    def test_index_entry_cap(self):
        manager = ChunkManager()
        with patch("sitemap_builder.limits.MAX_SITEMAPS_PER_INDEX", 2):
            for n in range(5):
                manager.append_index_entry(IndexEntry(f"https://example.com/sitemap{n}.xml", "2026-10-19"))
        assert counts(manager.index_chunks) == [2, 2, 1]
        assert all(chunk.kind == SITEMAPINDEX for chunk in manager.index_chunks)
        assert manager.sitemap_chunks == []

    def test_index_byte_cap(self):
        manager = ChunkManager()
        base = chunk_base_length(SITEMAPINDEX)
        with patch("sitemap_builder.limits.MAX_INDEX_SIZE", base + 100):
            for n in range(3):
                manager.append_index_entry(IndexEntry(f"https://example.com/sitemap{n}.xml", "2026-10-19"))
        # each <sitemap> element is 19 + 11 + 32 + 19 + 10 = 91 bytes
        assert counts(manager.index_chunks) == [1, 1, 1]

    def test_clear_index_chunks(self):
        manager = ChunkManager()
        manager.append_index_entry(IndexEntry("https://example.com/sitemap1.xml"))
        manager.clear_index_chunks()
        assert manager.index_chunks == []

    def test_index_entry_larger_than_cap_rejected(self):
        manager = ChunkManager()
        base = chunk_base_length(SITEMAPINDEX)
        with patch("sitemap_builder.limits.MAX_INDEX_SIZE", base + 50):
            with pytest.raises(ValidationError, match="does not fit"):
                manager.append_index_entry(IndexEntry("https://example.com/sitemap1.xml", "2026-10-19"))
        assert manager.index_chunks == []
