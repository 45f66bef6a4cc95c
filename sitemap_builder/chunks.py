"""
sitemap_builder.chunks — Chunk store and the chunking rules.

A chunk is one output file's worth of entries.  Only the last chunk of a
collection accepts entries; a new one is opened when either the entry cap
or the byte cap would be exceeded.  An entry is never split across chunks.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from sitemap_builder import limits
from sitemap_builder.errors import ValidationError
from sitemap_builder.limits import SITEMAPINDEX, URLSET
from sitemap_builder.records import IndexEntry, UrlEntry
from sitemap_builder.size import chunk_base_length, sitemap_element_length, url_element_length
from sitemap_builder.xmlio import append_entry, new_document

logger = logging.getLogger(__name__)


@dataclass
class Chunk:
    kind: str
    document: ET.Element = field(repr=False)
    entry_count: int = 0
    byte_length: int = 0
    filename: str = ""

    @classmethod
    def empty(cls, kind: str) -> "Chunk":
        return cls(kind=kind, document=new_document(kind), byte_length=chunk_base_length(kind))

    def add(self, fields: list[tuple[str, str]], length: int) -> None:
        append_entry(self.document, fields)
        self.entry_count += 1
        self.byte_length += length


# Characters outside the XML 1.0 Char production
INVALID_XML_CHARS = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def validate_text(name: str, value: str) -> None:
    match = INVALID_XML_CHARS.search(value)
    if match:
        raise ValidationError(
            f"The {name} value contains a character not allowed in XML: {match.group()!r}"
        )


def validate_location(location: str) -> None:
    if location == "":
        raise ValidationError("The URL argument is mandatory. Please provide a URL.")
    if len(location) > limits.MAX_URL_LENGTH:
        raise ValidationError(
            f"URL length must not be bigger than {limits.MAX_URL_LENGTH} characters."
        )
    validate_text("loc", location)


class ChunkManager:
    """Owns the sitemap and index chunk collections."""

    def __init__(self):
        self.sitemap_chunks: list[Chunk] = []
        self.index_chunks: list[Chunk] = []

    # -- opening ------------------------------------------------------------

    def open_sitemap_chunk(self) -> Chunk:
        chunk = Chunk.empty(URLSET)
        self.sitemap_chunks.append(chunk)
        logger.debug("Opened sitemap chunk #%d", len(self.sitemap_chunks))
        return chunk

    def open_index_chunk(self) -> Chunk:
        chunk = Chunk.empty(SITEMAPINDEX)
        self.index_chunks.append(chunk)
        logger.debug("Opened index chunk #%d", len(self.index_chunks))
        return chunk

    # -- appending ----------------------------------------------------------

    @staticmethod
    def _place(chunks: list[Chunk], open_chunk, kind: str, max_entries: int, max_bytes: int, length: int) -> Chunk:
        """Return the chunk that should receive an entry of *length* bytes."""
        if chunk_base_length(kind) + length > max_bytes:
            raise ValidationError(
                f"Entry of {length} bytes does not fit in a {max_bytes}-byte file."
            )
        if not chunks:
            open_chunk()
        if chunks[-1].entry_count >= max_entries:
            open_chunk()
        if chunks[-1].byte_length + length > max_bytes:
            open_chunk()
        return chunks[-1]

    def append_url(self, entry: UrlEntry) -> Chunk:
        """
        Add a URL entry to the active sitemap chunk, opening a new chunk first
        when the entry cap is reached or the entry would push the chunk past
        the byte cap.  Returns the chunk that received the entry.

        Raises ``ValidationError`` for a bad location, for field values with
        characters XML cannot carry, and for an entry too large for any file.
        """
        validate_location(entry.location)
        validate_text("lastmod", entry.last_modified)
        validate_text("changefreq", entry.change_frequency)
        validate_text("priority", entry.priority)
        length = url_element_length(entry)
        chunk = self._place(
            self.sitemap_chunks,
            self.open_sitemap_chunk,
            URLSET,
            limits.MAX_URLS_PER_SITEMAP,
            limits.MAX_SITEMAP_SIZE,
            length,
        )
        chunk.add(
            [
                ("loc", entry.location),
                ("lastmod", entry.last_modified),
                ("changefreq", entry.change_frequency),
                ("priority", entry.priority),
            ],
            length,
        )
        return chunk

    def append_index_entry(self, entry: IndexEntry) -> Chunk:
        """Same rules as ``append_url``, using the index caps."""
        validate_text("loc", entry.location)
        validate_text("lastmod", entry.last_modified)
        length = sitemap_element_length(entry)
        chunk = self._place(
            self.index_chunks,
            self.open_index_chunk,
            SITEMAPINDEX,
            limits.MAX_SITEMAPS_PER_INDEX,
            limits.MAX_INDEX_SIZE,
            length,
        )
        chunk.add([("loc", entry.location), ("lastmod", entry.last_modified)], length)
        return chunk

    def clear_index_chunks(self) -> None:
        self.index_chunks = []

    @property
    def url_count(self) -> int:
        return sum(chunk.entry_count for chunk in self.sitemap_chunks)
