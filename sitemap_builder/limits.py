"""
sitemap_builder.limits — Protocol limits, tag lengths and default names.

Limits come from https://www.sitemaps.org/protocol.html and apply to every
written file, compressed or not.
"""

MAX_URLS_PER_SITEMAP = 50000
MAX_SITEMAP_SIZE = 10485760                # 10 MB
MAX_SITEMAPS_PER_INDEX = 50000
MAX_INDEX_SIZE = 10485760                  # 10 MB
MAX_URL_LENGTH = 2048

# Bytes added by the opening + closing tags of each element
LENGTH_URL = len("<url></url>")                     # 11
LENGTH_SITEMAP = len("<sitemap></sitemap>")         # 19
LENGTH_LOC = len("<loc></loc>")                     # 11
LENGTH_LASTMOD = len("<lastmod></lastmod>")         # 19
LENGTH_CHANGEFREQ = len("<changefreq></changefreq>")  # 25
LENGTH_PRIORITY = len("<priority></priority>")      # 21

# Line breaks after the declaration and at the end of the document
LENGTH_XML = 2

SITEMAP_NS_URI = "http://www.sitemaps.org/schemas/sitemap/0.9"
XSI_NS_URI = "http://www.w3.org/2001/XMLSchema-instance"

URLSET = "urlset"
SITEMAPINDEX = "sitemapindex"

SCHEMA_LOCATIONS = {
    URLSET: f"{SITEMAP_NS_URI} {SITEMAP_NS_URI}/sitemap.xsd",
    SITEMAPINDEX: f"{SITEMAP_NS_URI} {SITEMAP_NS_URI}/siteindex.xsd",
}

# Child element written for each entry of a given root
ENTRY_TAGS = {
    URLSET: "url",
    SITEMAPINDEX: "sitemap",
}

DEFAULT_SITEMAP_FILENAME = "sitemap.xml"
DEFAULT_INDEX_FILENAME = "sitemap-index.xml"
GZIP_SUFFIX = ".gz"
