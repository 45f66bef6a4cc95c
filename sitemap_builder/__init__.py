"""
sitemap_builder — Streaming sitemap and sitemap-index writer.

Re-exports every public symbol so that callers can use
``from sitemap_builder import StreamingSitemap`` without knowing the
module layout.
"""

from sitemap_builder.limits import (
    MAX_URLS_PER_SITEMAP,
    MAX_SITEMAP_SIZE,
    MAX_SITEMAPS_PER_INDEX,
    MAX_INDEX_SIZE,
    MAX_URL_LENGTH,
    SITEMAP_NS_URI,
    DEFAULT_SITEMAP_FILENAME,
    DEFAULT_INDEX_FILENAME,
)

from sitemap_builder.errors import (
    SitemapError,
    ValidationError,
    PreconditionError,
)

from sitemap_builder.records import (
    UrlEntry,
    IndexEntry,
    entry_from_item,
    entries_from_dataframe,
)

from sitemap_builder.xmlio import (
    SERIALIZER_ESCAPES_TEXT_QUOTES,
    new_document,
    escape_value,
    escape_quotes,
    serialize,
)

from sitemap_builder.size import (
    url_element_length,
    sitemap_element_length,
    chunk_base_length,
)

from sitemap_builder.chunks import Chunk, ChunkManager

from sitemap_builder.naming import numbered_filename, assign_filenames

from sitemap_builder.index import build_index

from sitemap_builder.sink import write_file

from sitemap_builder.reader import read_xml, is_sitemap_index, parse_sitemap

from sitemap_builder.sitemap import StreamingSitemap
