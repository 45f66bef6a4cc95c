"""
sitemap_builder.reader — Read written sitemap files back: open, detect index/urlset, recurse.
"""

import gzip
import logging
import os
import xml.etree.ElementTree as ET
from typing import Optional

from sitemap_builder.limits import GZIP_SUFFIX, SITEMAP_NS_URI

# XML namespace used in the sitemap protocol
SITEMAP_NS = {"sm": SITEMAP_NS_URI}

logger = logging.getLogger(__name__)


def read_xml(path: str) -> Optional[ET.Element]:
    """Read and parse a plain or gzip-compressed XML file."""
    try:
        if path.endswith(GZIP_SUFFIX):
            with gzip.open(path, "rb") as f:
                content = f.read()
        else:
            with open(path, "rb") as f:
                content = f.read()
        return ET.fromstring(content)
    except (OSError, ET.ParseError) as e:
        logger.error("Failed to read %s: %s", path, e)
        return None


def is_sitemap_index(root: ET.Element) -> bool:
    """Check if the XML root is a sitemap index (contains nested sitemaps)."""
    tag = root.tag.split("}")[-1] if "}" in root.tag else root.tag
    return tag == "sitemapindex"


def _text(elem: ET.Element, name: str) -> Optional[str]:
    child = elem.find(f"sm:{name}", SITEMAP_NS)
    return child.text if child is not None and child.text else None


def _local_path(path: str, loc: str, base_url: Optional[str]) -> Optional[str]:
    """Map a child sitemap URL onto a file next to *path*, if it lives under *base_url*."""
    if not base_url or not loc.startswith(base_url):
        return None
    return os.path.join(os.path.dirname(path), loc[len(base_url):])


def parse_sitemap(path: str, base_url: Optional[str] = None, depth: int = 0) -> list[dict]:
    """
    Recursively parse a sitemap file.

    Index children are followed only when their URL starts with *base_url*;
    the remainder of the URL is resolved against the directory of *path*.
    Returns a list of dicts with keys: loc, lastmod, changefreq, priority,
    source_sitemap, sitemap_type.  Text values are returned as decoded by
    the parser, i.e. entities resolved, without stripping.
    """
    indent = "  " * depth
    logger.debug("%sProcessing: %s", indent, path)

    root = read_xml(path)
    if root is None:
        return []

    results = []

    if is_sitemap_index(root):
        sitemap_entries = root.findall("sm:sitemap", SITEMAP_NS)
        logger.debug("%s  -> Sitemap Index with %d child sitemap(s)", indent, len(sitemap_entries))

        for sitemap in sitemap_entries:
            child_loc = _text(sitemap, "loc")
            child_path = _local_path(path, child_loc, base_url) if child_loc else None
            if child_path is None:
                logger.warning("%s  -> Skipping child sitemap outside %s: %s", indent, base_url, child_loc)
                continue
            results.extend(parse_sitemap(child_path, base_url, depth + 1))
    else:
        url_entries = root.findall("sm:url", SITEMAP_NS)
        logger.debug("%s  -> URL Set with %d URL(s)", indent, len(url_entries))

        for entry in url_entries:
            loc = _text(entry, "loc")
            if loc:
                results.append({
                    "loc": loc,
                    "lastmod": _text(entry, "lastmod"),
                    "changefreq": _text(entry, "changefreq"),
                    "priority": _text(entry, "priority"),
                    "source_sitemap": path,
                    "sitemap_type": "urlset",
                })

    return results
