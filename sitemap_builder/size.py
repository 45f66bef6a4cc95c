"""
sitemap_builder.size — Byte-length estimates for entries, without building XML.

The numbers here must agree with ``xmlio.serialize`` byte for byte: chunk
overflow is decided from these estimates before anything is serialized.
"""

from sitemap_builder.limits import (
    LENGTH_CHANGEFREQ,
    LENGTH_LASTMOD,
    LENGTH_LOC,
    LENGTH_PRIORITY,
    LENGTH_SITEMAP,
    LENGTH_URL,
    LENGTH_XML,
)
from sitemap_builder.records import IndexEntry, UrlEntry
from sitemap_builder.xmlio import document_header, escape_value


def value_length(value: str) -> int:
    """UTF-8 length of a value once escaped."""
    return len(escape_value(value).encode("utf-8"))


def _optional_length(value: str, tag_length: int) -> int:
    if value == "":
        return 0
    return tag_length + value_length(value)


def url_element_length(entry: UrlEntry) -> int:
    return (
        LENGTH_URL
        + LENGTH_LOC
        + value_length(entry.location)
        + _optional_length(entry.last_modified, LENGTH_LASTMOD)
        + _optional_length(entry.change_frequency, LENGTH_CHANGEFREQ)
        + _optional_length(entry.priority, LENGTH_PRIORITY)
    )


def sitemap_element_length(entry: IndexEntry) -> int:
    return (
        LENGTH_SITEMAP
        + LENGTH_LOC
        + value_length(entry.location)
        + _optional_length(entry.last_modified, LENGTH_LASTMOD)
    )


def chunk_base_length(kind: str) -> int:
    """Length of a chunk before any entry is added (declaration, root, line breaks)."""
    return len(document_header(kind).encode("utf-8")) + LENGTH_XML
