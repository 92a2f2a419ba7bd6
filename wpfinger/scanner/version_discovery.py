import re
import logging
from typing import Optional, Sequence, Tuple

from ..constants import LogLevel
from .models import Probe, Fetcher, LogCallback
from .urls import (
    build_url,
    wordpress_url_readme,
    wordpress_url_rss,
    wordpress_url_rdf,
    wordpress_url_atom,
    wordpress_url_sitemap,
    wordpress_url_opml,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PROBE DEFINITIONS
# =============================================================================

# Must contain at least one dot
WORDPRESS_VERSION_PATTERN = r"""([^\r\n"']+\.[^\r\n"']+)"""


def _pattern(template: str) -> "re.Pattern[str]":
    return re.compile(template.format(v=WORDPRESS_VERSION_PATTERN), re.IGNORECASE)


# Priority order: cheapest and most common signal first
DEFAULT_PROBES: Tuple[Probe, ...] = (
    Probe(
        name="generator",
        locator=build_url,
        pattern=_pattern(r'<meta name="generator" content="WordPress {v}" />'),
    ),
    Probe(
        name="readme",
        locator=wordpress_url_readme,
        pattern=_pattern(r"<br />\sversion {v}"),
    ),
    Probe(
        name="rss",
        locator=wordpress_url_rss,
        pattern=_pattern(r"<generator>http://wordpress\.org/\?v={v}</generator>"),
    ),
    Probe(
        name="rdf",
        locator=wordpress_url_rdf,
        pattern=_pattern(r'<admin:generatorAgent rdf:resource="http://wordpress\.org/\?v={v}" />'),
    ),
    Probe(
        name="atom",
        locator=wordpress_url_atom,
        pattern=_pattern(r'<generator uri="http://wordpress\.org/" version="{v}">WordPress</generator>'),
    ),
    Probe(
        name="sitemap",
        locator=wordpress_url_sitemap,
        pattern=_pattern(r'generator="wordpress/{v}"'),
    ),
    Probe(
        name="opml",
        locator=wordpress_url_opml,
        pattern=_pattern(r'generator="wordpress/{v}"'),
    ),
)


class VersionDiscoverer:
    """
    Fingerprints the WordPress core version of a site.

    Probes are tried strictly in order, one request each; the first probe
    whose pattern matches the response body wins and the cascade stops.
    """

    def __init__(
        self,
        http_client: Fetcher,
        log_callback: LogCallback = None,
        probes: Sequence[Probe] = DEFAULT_PROBES,
    ):
        """
        Initialize VersionDiscoverer.

        Args:
            http_client: Transport exposing ``async fetch(url)``
            log_callback: Optional async callback for logging
            probes: Ordered probe table (default: DEFAULT_PROBES)
        """
        self.http_client = http_client
        self.log_callback = log_callback
        self.probes = tuple(probes)

    async def discover(self, base_url: str) -> Optional[str]:
        """
        Returns the first version string extracted by the probe table, or None.
        """
        for probe in self.probes:
            version = await self._run_probe(base_url, probe)
            if version is not None:
                if self.log_callback:
                    await self.log_callback(LogLevel.INFO, f"WordPress version {version} found via {probe.name}")
                return version

        if self.log_callback:
            await self.log_callback(LogLevel.INFO, "WordPress version not found")
        return None

    async def _run_probe(self, base_url: str, probe: Probe) -> Optional[str]:
        url = probe.locator(base_url)
        if self.log_callback:
            await self.log_callback(LogLevel.DEBUG, f"Probing {probe.name}: {url}")

        response = await self.http_client.fetch(url)
        if response is None:
            logger.debug("Probe %s got no response from %s", probe.name, url)
            return None

        return probe.extract(response.body)
