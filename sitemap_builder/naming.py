"""
sitemap_builder.naming — Output filenames for a frozen chunk collection.
"""

import os

from sitemap_builder.limits import GZIP_SUFFIX


def numbered_filename(filename: str, number: int) -> str:
    """
    Splice *number* in before the ``.xml`` extension.

    ``sitemap.xml`` -> ``sitemap3.xml``.  Names without ``.xml`` get the
    number before their last extension, or at the end if they have none.
    """
    pos = filename.rfind(".xml")
    if pos == -1:
        stem, ext = os.path.splitext(filename)
        return f"{stem}{number}{ext}"
    return f"{filename[:pos]}{number}{filename[pos:]}"


def assign_filenames(chunks: list, filename: str, gzip: bool) -> None:
    """
    Name every chunk from its position in *chunks*.

    One chunk keeps the plain name; two or more are numbered from 1 in
    creation order.  ``.gz`` is appended when *gzip* is set.  Safe to call
    repeatedly.
    """
    suffix = GZIP_SUFFIX if gzip else ""
    if len(chunks) == 1:
        chunks[0].filename = filename + suffix
        return
    for number, chunk in enumerate(chunks, start=1):
        chunk.filename = numbered_filename(filename, number) + suffix
