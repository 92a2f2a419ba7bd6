import logging
from typing import Optional

from ..config import Settings, settings as default_settings
from ..constants import ItemKind, LogLevel, SourceKind, Verdict, README_CANDIDATES, STYLESHEET_NAME
from .models import FetchResult, Fetcher, LogCallback
from .urls import build_url, wordpress_url_plugins, wordpress_url_themes
from .version_checks import VulnerabilityEvaluator

logger = logging.getLogger(__name__)

ITEM_FOLDERS = {
    ItemKind.PLUGIN: wordpress_url_plugins,
    ItemKind.THEME: wordpress_url_themes,
}


class ReadmeCascade:
    """
    Checks a plugin or theme version against a vulnerable range.

    Lookup order:
      1. readme.txt / Readme.txt / README.txt under the item folder
      2. style.css of the theme, when the item is a theme and the readme is
         missing or carries no version

    Plugins have no stylesheet fallback.
    """

    def __init__(
        self,
        http_client: Fetcher,
        base_url: str,
        log_callback: LogCallback = None,
        evaluator: VulnerabilityEvaluator = None,
        config: Settings = None,
    ):
        self.http_client = http_client
        self.base_url = base_url
        self.log_callback = log_callback
        self.evaluator = evaluator or VulnerabilityEvaluator()
        self.config = config or default_settings

    async def check_plugin_version_from_readme(
        self, plugin_name: str, fixed_version: Optional[str] = None, introduced_version: Optional[str] = None
    ) -> Verdict:
        return await self.check_version(ItemKind.PLUGIN, plugin_name, fixed_version, introduced_version)

    async def check_theme_version_from_readme(
        self, theme_name: str, fixed_version: Optional[str] = None, introduced_version: Optional[str] = None
    ) -> Verdict:
        return await self.check_version(ItemKind.THEME, theme_name, fixed_version, introduced_version)

    async def check_version(
        self,
        kind: ItemKind,
        name: str,
        fixed_version: Optional[str] = None,
        introduced_version: Optional[str] = None,
    ) -> Verdict:
        """
        Runs the readme cascade for a plugin or theme.

        Raises:
            TypeError: If kind is not an ItemKind
            InvalidVersionBound: If a bound cannot be parsed
        """
        if not isinstance(kind, ItemKind):
            raise TypeError(f"Unknown readme type {kind!r}")
        self.evaluator.validate_bounds(fixed_version, introduced_version)

        response = await self._find_readme(kind, name)

        if response is None:
            if kind is ItemKind.PLUGIN:
                # No readme present for plugin
                return await self._report(kind, name, Verdict.UNKNOWN)
            return await self.check_theme_version_from_style(name, fixed_version, introduced_version)

        verdict = self.evaluator.evaluate(response.body, SourceKind.README, fixed_version, introduced_version)
        if verdict is Verdict.DETECTED and kind is ItemKind.THEME:
            # No version in the theme readme, try style.css
            if self.log_callback:
                await self.log_callback(LogLevel.DEBUG, f"No version in {response.url}, falling back to {STYLESHEET_NAME}")
            return await self.check_theme_version_from_style(name, fixed_version, introduced_version)

        return await self._report(kind, name, verdict)

    async def check_theme_version_from_style(
        self, theme_name: str, fixed_version: Optional[str] = None, introduced_version: Optional[str] = None
    ) -> Verdict:
        """Checks the version header of a theme's style.css."""
        self.evaluator.validate_bounds(fixed_version, introduced_version)

        style_url = build_url(wordpress_url_themes(self.base_url, self.config.WP_CONTENT_DIR), theme_name, STYLESHEET_NAME)
        response = await self._get(style_url)

        # No style.css file present
        if response is None or not response.ok:
            return await self._report(ItemKind.THEME, theme_name, Verdict.UNKNOWN)

        verdict = self.evaluator.evaluate(response.body, SourceKind.STYLESHEET, fixed_version, introduced_version)
        return await self._report(ItemKind.THEME, theme_name, verdict)

    async def _find_readme(self, kind: ItemKind, name: str) -> Optional[FetchResult]:
        """Returns the first readme candidate answering 200, or None."""
        folder = build_url(ITEM_FOLDERS[kind](self.base_url, self.config.WP_CONTENT_DIR), name)
        for readme_name in README_CANDIDATES:
            response = await self._get(build_url(folder, readme_name))
            if response is not None and response.ok:
                return response
        return None

    async def _get(self, url: str) -> Optional[FetchResult]:
        if self.log_callback:
            await self.log_callback(LogLevel.DEBUG, f"Checking {url}")
        return await self.http_client.fetch(url)

    async def _report(self, kind: ItemKind, name: str, verdict: Verdict) -> Verdict:
        logger.debug("%s %s: %s", kind, name, verdict)
        if self.log_callback:
            await self.log_callback(LogLevel.INFO, f"{kind} {name}: {verdict.description}")
        return verdict
