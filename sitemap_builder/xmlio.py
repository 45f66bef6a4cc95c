"""
sitemap_builder.xmlio — Sitemap document construction and serialization.

Documents are plain ``xml.etree.ElementTree`` trees.  ElementTree escapes
``&``, ``<`` and ``>`` in element text but writes quotes verbatim, so the
serialized text gets a second pass (``escape_quotes``) that encodes quotes
inside the entry blocks.  The pass is skipped only if the serializer is
swapped for one that sets ``SERIALIZER_ESCAPES_TEXT_QUOTES``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from functools import lru_cache
from xml.sax.saxutils import escape

from sitemap_builder.limits import (
    ENTRY_TAGS,
    SCHEMA_LOCATIONS,
    SITEMAP_NS_URI,
    XSI_NS_URI,
)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# ElementTree leaves ' and " unescaped in text nodes
SERIALIZER_ESCAPES_TEXT_QUOTES = False

QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def new_document(kind: str) -> ET.Element:
    """Return a fresh, empty ``urlset`` or ``sitemapindex`` root."""
    if kind not in SCHEMA_LOCATIONS:
        raise ValueError(f"Unknown sitemap document kind: {kind!r}")
    root = ET.Element(kind)
    # Literal attribute names keep the prefixes exactly as written
    root.set("xmlns:xsi", XSI_NS_URI)
    root.set("xsi:schemaLocation", SCHEMA_LOCATIONS[kind])
    root.set("xmlns", SITEMAP_NS_URI)
    return root


def append_entry(root: ET.Element, fields: list[tuple[str, str]]) -> ET.Element:
    """
    Append one ``<url>`` / ``<sitemap>`` child to *root*.

    *fields* is an ordered list of ``(tag, value)`` pairs; pairs with an
    empty value are skipped.
    """
    entry = ET.SubElement(root, ENTRY_TAGS[root.tag])
    for tag, value in fields:
        if value != "":
            ET.SubElement(entry, tag).text = value
    return entry


def escape_value(value: str) -> str:
    """Escape a text value the way it appears in the final bytes."""
    return escape(value, QUOTE_ENTITIES)


def escape_quotes(xml_text: str, marker: str) -> str:
    """
    Replace ``"`` and ``'`` with entities from the first *marker* onward.

    Everything before the marker (declaration, root attributes) is left as
    is.  Text without the marker is returned unchanged.
    """
    pos = xml_text.find(marker)
    if pos == -1:
        return xml_text
    tail = xml_text[pos:].replace('"', QUOTE_ENTITIES['"']).replace("'", QUOTE_ENTITIES["'"])
    return xml_text[:pos] + tail


def serialize_document(root: ET.Element) -> bytes:
    """Render a document root as UTF-8 bytes, declaration included."""
    body = ET.tostring(root, encoding="unicode", short_empty_elements=False)
    xml_text = f"{XML_DECLARATION}\n{body}\n"
    if not SERIALIZER_ESCAPES_TEXT_QUOTES:
        xml_text = escape_quotes(xml_text, f"<{ENTRY_TAGS[root.tag]}>")
    return xml_text.encode("utf-8")


def serialize(chunk) -> bytes:
    """Render a chunk's accumulated document."""
    return serialize_document(chunk.document)


@lru_cache(maxsize=None)
def document_header(kind: str) -> str:
    """Declaration plus the empty root element, without line breaks."""
    body = ET.tostring(new_document(kind), encoding="unicode", short_empty_elements=False)
    return XML_DECLARATION + body
