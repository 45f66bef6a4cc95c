"""
sitemap_builder.sink — Write finished XML bytes to disk.
"""

import gzip
import logging

logger = logging.getLogger(__name__)


def write_file(path: str, data: bytes, compressed: bool) -> None:
    """
    Write *data* to *path*, gzip-compressed when *compressed* is set.

    ``OSError`` propagates; nothing already on disk is rolled back.
    """
    if compressed:
        with gzip.open(path, "wb") as f:
            f.write(data)
    else:
        with open(path, "wb") as f:
            f.write(data)
    logger.debug("Wrote %s (%d bytes uncompressed)", path, len(data))
