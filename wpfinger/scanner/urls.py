"""
URL helpers for WordPress locations.

All helpers take the site base (a full URL such as ``https://example.com/blog``
or a bare path) and append normalized segments to it.
"""

import re
from urllib.parse import urlsplit

from ..config import settings


def build_url(base: str, *segments: str) -> str:
    """
    Join segments onto base, collapsing duplicate slashes in the path.

    A trailing slash on the last segment is preserved, so ``feed/rdf/`` stays
    a directory URL.
    """
    parts = urlsplit(base)
    origin = f"{parts.scheme}://{parts.netloc}" if parts.netloc else ""
    path = "/".join([parts.path] + [s for s in segments if s])
    path = re.sub(r"/{2,}", "/", "/" + path)
    return origin + path


def wordpress_url_readme(base: str) -> str:
    return build_url(base, "readme.html")


def wordpress_url_rss(base: str) -> str:
    return build_url(base, "?feed=rss2")


def wordpress_url_rdf(base: str) -> str:
    return build_url(base, "feed/rdf/")


def wordpress_url_atom(base: str) -> str:
    return build_url(base, "feed/atom/")


def wordpress_url_sitemap(base: str) -> str:
    return build_url(base, "sitemap.xml")


def wordpress_url_opml(base: str) -> str:
    return build_url(base, "wp-links-opml.php")


def wordpress_url_wp_content(base: str, content_dir: str = None) -> str:
    return build_url(base, content_dir or settings.WP_CONTENT_DIR)


def wordpress_url_themes(base: str, content_dir: str = None) -> str:
    return build_url(wordpress_url_wp_content(base, content_dir), "themes")


def wordpress_url_plugins(base: str, content_dir: str = None) -> str:
    return build_url(wordpress_url_wp_content(base, content_dir), "plugins")
