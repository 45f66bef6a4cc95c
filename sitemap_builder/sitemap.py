"""
sitemap_builder.sitemap — StreamingSitemap: add URLs, write sitemap and index files.

Typical use::

    sitemap = StreamingSitemap("https://example.com", "public")
    sitemap.add_url("/about", "2025-12-01", "monthly", "0.5")
    sitemap.add_urls([("/", "", "daily"), {"url": "/blog", "priority": "0.8"}])
    sitemap.write_sitemap()
    sitemap.get_urls()   # ['https://example.com/sitemap.xml.gz']

Failures never raise out of these methods: they return False (or an empty
list) and log through the ``sitemap_builder.sitemap`` logger.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

from sitemap_builder.chunks import ChunkManager
from sitemap_builder.errors import PreconditionError, SitemapError
from sitemap_builder.index import build_index
from sitemap_builder.limits import DEFAULT_INDEX_FILENAME, DEFAULT_SITEMAP_FILENAME
from sitemap_builder.naming import assign_filenames
from sitemap_builder.records import UrlEntry, as_text, entries_from_dataframe, entry_from_item
from sitemap_builder.sink import write_file
from sitemap_builder.xmlio import serialize

logger = logging.getLogger(__name__)


class StreamingSitemap:
    """
    Builds sitemap files for one site, splitting across numbered files when
    the protocol limits are reached and listing them in an index.

    Parameters
    ----------
    base_url : str
        The site's base URL; a single trailing slash is enforced.
    base_path : str
        Directory the files are written to.  Empty means the current
        working directory.

    The attributes below may be changed at any time before ``write_sitemap``.
    """

    def __init__(self, base_url: str, base_path: str = ""):
        self.base_url = base_url.rstrip("/") + "/"
        self.base_path = base_path.rstrip(os.sep) + os.sep if base_path else ""

        self.create_indexes = True
        self.gzip_sitemaps = True
        self.gzip_indexes = False
        self.index_filename = DEFAULT_INDEX_FILENAME
        self.sitemap_filename = DEFAULT_SITEMAP_FILENAME
        self.relative_urls = True

        self._chunks = ChunkManager()
        self._filenames: list[str] = []

    # -- adding -------------------------------------------------------------

    def _expand(self, entry: UrlEntry) -> UrlEntry:
        if self.relative_urls:
            return dataclasses.replace(entry, location=self.base_url + entry.location.lstrip("/"))
        return entry

    def _add_entry(self, entry: UrlEntry) -> bool:
        try:
            self._chunks.append_url(self._expand(entry))
        except SitemapError as e:
            logger.warning("Rejected URL %r: %s", entry.location[:100], e)
            return False
        return True

    def add_url(self, location: Any, last_modified: Any = "", change_frequency: Any = "", priority: Any = "") -> bool:
        """
        Add a single URL.

        With ``relative_urls`` on, leading slashes are stripped and the base
        URL is prepended.  Returns False if the resulting location is empty
        or longer than 2048 characters, if a value holds characters XML
        cannot carry, or if the entry would not fit in a file on its own.
        """
        entry = UrlEntry(
            as_text(location),
            as_text(last_modified),
            as_text(change_frequency),
            as_text(priority),
        )
        return self._add_entry(entry)

    def add_urls(self, entries: Iterable) -> bool:
        """
        Add several URLs.  Each item is a URL string, a mapping keyed
        ``url``/``lastmod``/``changefreq``/``priority``, or a tuple/list of
        those values in order.

        Invalid items are logged and skipped; the rest are still added.
        Returns True only if every item was accepted.
        """
        if isinstance(entries, pd.DataFrame):
            return self.add_dataframe(entries)
        if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Iterable):
            logger.warning("add_urls expects a collection of entries, got %s", type(entries).__name__)
            return False

        all_added = True
        for item in entries:
            try:
                entry = entry_from_item(item)
            except SitemapError as e:
                logger.warning("Rejected URL entry %r: %s", item, e)
                all_added = False
                continue
            if not self._add_entry(entry):
                all_added = False
        return all_added

    def add_dataframe(self, df: pd.DataFrame) -> bool:
        """Add one URL per DataFrame row (``url`` column required)."""
        try:
            entries = entries_from_dataframe(df)
        except SitemapError as e:
            logger.warning("Rejected DataFrame: %s", e)
            return False

        all_added = True
        for entry in entries:
            if not self._add_entry(entry):
                all_added = False
        return all_added

    # -- writing ------------------------------------------------------------

    def _write_chunks(self, chunks: list, compressed: bool) -> None:
        for chunk in chunks:
            write_file(self.base_path + chunk.filename, serialize(chunk), compressed)

    def _final_filenames(self) -> list[str]:
        sitemaps = self._chunks.sitemap_chunks
        if len(sitemaps) == 1:
            return [sitemaps[0].filename]
        if self._chunks.index_chunks:
            return [chunk.filename for chunk in self._chunks.index_chunks]
        return [chunk.filename for chunk in sitemaps]

    def write_sitemap(self) -> bool:
        """
        Write every sitemap chunk, then the index when ``create_indexes`` is
        on and there are at least two sitemaps.

        Stops at the first file that cannot be written and returns False;
        files written before it are left in place.
        """
        try:
            if not self._chunks.sitemap_chunks:
                raise PreconditionError("To write the sitemap into files, first add URLs to it.")

            assign_filenames(self._chunks.sitemap_chunks, self.sitemap_filename, self.gzip_sitemaps)
            self._write_chunks(self._chunks.sitemap_chunks, self.gzip_sitemaps)

            indexed = self.create_indexes and build_index(
                self._chunks, self.base_url, self.index_filename, self.gzip_indexes,
            )
            if indexed:
                self._write_chunks(self._chunks.index_chunks, self.gzip_indexes)
            else:
                self._chunks.clear_index_chunks()
        except SitemapError as e:
            logger.warning("%s", e)
            return False
        except OSError as e:
            logger.error("Failed to write sitemap file: %s", e)
            return False

        self._filenames = self._final_filenames()
        logger.info(
            "Wrote %d URL(s) into %d sitemap file(s) and %d index file(s)",
            self.url_count, self.sitemap_count, self.index_count,
        )
        return True

    def get_urls(self) -> list[str]:
        """Fully-qualified URLs of the written sitemap (or index) files."""
        if not self._filenames:
            logger.warning(
                "To get the sitemap URLs, first write the sitemap into files with write_sitemap()."
            )
            return []
        return [self.base_url + filename for filename in self._filenames]

    # -- state --------------------------------------------------------------

    @property
    def url_count(self) -> int:
        return self._chunks.url_count

    @property
    def sitemap_count(self) -> int:
        return len(self._chunks.sitemap_chunks)

    @property
    def index_count(self) -> int:
        return len(self._chunks.index_chunks)
