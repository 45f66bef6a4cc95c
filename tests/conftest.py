"""
tests/conftest.py — Shared fixtures and sample XML payloads for the test suite.
"""

import xml.etree.ElementTree as ET
from unittest.mock import patch

import pytest

from sitemap_builder import StreamingSitemap
from sitemap_builder.limits import URLSET
from sitemap_builder.size import chunk_base_length

SITEMAP_NS_URI = "http://www.sitemaps.org/schemas/sitemap/0.9"
SM = {"sm": SITEMAP_NS_URI}

BASE_URL = "https://example.com/"

URLSET_XML = f"""\
<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="{SITEMAP_NS_URI}">
  <url>
    <loc>https://example.com/page1</loc>
    <lastmod>2025-12-01</lastmod>
    <changefreq>weekly</changefreq>
    <priority>0.8</priority>
  </url>
  <url>
    <loc>https://example.com/page2</loc>
  </url>
</urlset>
""".encode("utf-8")

SITEMAP_INDEX_XML = f"""\
<?xml version="1.0" encoding="UTF-8"?>
<sitemapindex xmlns="{SITEMAP_NS_URI}">
  <sitemap>
    <loc>https://example.com/sitemap1.xml</loc>
  </sitemap>
  <sitemap>
    <loc>https://example.com/sitemap2.xml</loc>
  </sitemap>
</sitemapindex>
""".encode("utf-8")

CHILD_URLSET_XML = f"""\
<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="{SITEMAP_NS_URI}">
  <url>
    <loc>https://example.com/child-page</loc>
    <lastmod>2025-11-15</lastmod>
  </url>
</urlset>
""".encode("utf-8")

# Value exercising every character that needs an entity
TRICKY_LOC = "https://example.com/a?x=1&y=<2>&q='single'&d=\"double\""


def locs(path_or_bytes) -> list:
    """Return the decoded <loc> texts of a urlset/sitemapindex document."""
    if isinstance(path_or_bytes, bytes):
        root = ET.fromstring(path_or_bytes)
    else:
        root = ET.parse(path_or_bytes).getroot()
    return [elem.text for elem in root.iter(f"{{{SITEMAP_NS_URI}}}loc")]


@pytest.fixture
def sitemap(tmp_path):
    """A StreamingSitemap writing uncompressed files into tmp_path."""
    sm = StreamingSitemap("https://example.com", str(tmp_path))
    sm.gzip_sitemaps = False
    return sm


@pytest.fixture
def three_per_chunk():
    """Shrink the sitemap entry cap to 3 so overflow needs only a few URLs."""
    with patch("sitemap_builder.limits.MAX_URLS_PER_SITEMAP", 3):
        yield 3


@pytest.fixture
def base_length():
    return chunk_base_length(URLSET)
