"""
sitemap_builder.errors — Exceptions raised by the chunking engine.

The public ``StreamingSitemap`` methods catch these and report failure
through their return value; lower-level helpers let them propagate.
"""


class SitemapError(Exception):
    """Base class for every sitemap_builder error."""


class ValidationError(SitemapError, ValueError):
    """An entry was rejected: empty or oversized URL, or malformed batch item."""


class PreconditionError(SitemapError, RuntimeError):
    """An operation was called out of order (write before add, read before write)."""
