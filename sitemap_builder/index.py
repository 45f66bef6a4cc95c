"""
sitemap_builder.index — Sitemap index construction.
"""

import logging
from datetime import datetime, timezone

from sitemap_builder.chunks import ChunkManager
from sitemap_builder.naming import assign_filenames
from sitemap_builder.records import IndexEntry

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    """Current UTC time, ISO-8601 with seconds precision."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def build_index(manager: ChunkManager, base_url: str, filename: str, gzip: bool) -> bool:
    """
    Rebuild ``manager.index_chunks`` from the named sitemap chunks.

    Any previous index is discarded first.  Returns False (leaving no index
    chunks) when there are fewer than two sitemap chunks to reference.
    Sitemap filenames must already be assigned.
    """
    manager.clear_index_chunks()
    if len(manager.sitemap_chunks) < 2:
        return False

    manager.open_index_chunk()
    for sitemap in manager.sitemap_chunks:
        manager.append_index_entry(IndexEntry(base_url + sitemap.filename, _timestamp()))

    assign_filenames(manager.index_chunks, filename, gzip)
    logger.debug(
        "Built %d index chunk(s) for %d sitemaps",
        len(manager.index_chunks), len(manager.sitemap_chunks),
    )
    return True
