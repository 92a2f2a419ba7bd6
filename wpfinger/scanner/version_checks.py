"""
Vulnerability range checks for plugin and theme versions.

A version token is extracted from a readme or a stylesheet header and placed
against an optional vulnerable range:

    introduced <= version < fixed

Either bound may be missing, in which case that side of the range is open.
Ties on the fixed bound count as patched; ties on the introduced bound count
as vulnerable.
"""

import re
import logging
from typing import Dict, Optional

from ..constants import SourceKind, Verdict
from ..exceptions import InvalidVersionBound
from .versions import VersionComparator, compare_versions, is_valid_version

logger = logging.getLogger(__name__)

# Example lines:
#   Stable tag: 2.6.6
#   Version: 1.5.2
VERSION_PATTERNS: Dict[SourceKind, "re.Pattern[str]"] = {
    SourceKind.README: re.compile(r"(?:stable tag|version):\s*(?!trunk)([0-9a-z.-]+)", re.IGNORECASE),
    SourceKind.STYLESHEET: re.compile(r"version:\s*([0-9a-z.-]+)", re.IGNORECASE),
}


def extract_version(body: str, source_kind: SourceKind) -> Optional[str]:
    """
    Extract the first version token from a readme or stylesheet body.

    Raises:
        TypeError: If source_kind is not a SourceKind
    """
    if not isinstance(source_kind, SourceKind):
        raise TypeError(f"Unknown source kind {source_kind!r}")

    match = VERSION_PATTERNS[source_kind].search(body)
    return match.group(1) if match else None


def classify(
    version: str,
    fixed_version: Optional[str] = None,
    introduced_version: Optional[str] = None,
    comparator: VersionComparator = compare_versions,
) -> Verdict:
    """Place an extracted version against the vulnerable range."""
    if fixed_version is not None and comparator(version, fixed_version) >= 0:
        # Patched
        return Verdict.SAFE
    if introduced_version is None or comparator(version, introduced_version) >= 0:
        return Verdict.APPEARS
    # Older than the version that introduced the vulnerability
    return Verdict.SAFE


class VulnerabilityEvaluator:
    """
    Extracts a version from a document body and classifies it into a Verdict.

    Bounds are validated before anything else: a bound the comparator cannot
    parse is a call-site error and raises InvalidVersionBound.
    """

    def __init__(self, comparator: VersionComparator = compare_versions):
        self.comparator = comparator

    def validate_bounds(self, fixed_version: Optional[str], introduced_version: Optional[str]) -> None:
        for bound, role in ((fixed_version, "fixed"), (introduced_version, "introduced")):
            if bound is not None and not is_valid_version(bound, self.comparator):
                raise InvalidVersionBound(bound, role)

    def evaluate(
        self,
        body: str,
        source_kind: SourceKind,
        fixed_version: Optional[str] = None,
        introduced_version: Optional[str] = None,
    ) -> Verdict:
        self.validate_bounds(fixed_version, introduced_version)

        version = extract_version(body, source_kind)
        if version is None:
            return Verdict.DETECTED

        if not is_valid_version(version, self.comparator):
            # Token without any digit, e.g. "Version: beta"
            logger.warning("Ignoring unparseable %s version token %r", source_kind, version)
            return Verdict.DETECTED

        logger.debug("Found version %s in %s", version, source_kind)
        return classify(version, fixed_version, introduced_version, self.comparator)
