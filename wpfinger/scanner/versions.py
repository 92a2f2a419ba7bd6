"""
Version ordering used by the vulnerability range checks.

Versions follow the RubyGems ordering that WordPress vulnerability databases
are written against:

- a version is split into numeric and alphabetic segments on ``.``, ``-`` and
  digit/letter boundaries (``1.0b2`` -> ``1, 0, b, 2``)
- a hyphen starts a pre-release (``2.0-1`` sorts below ``2.0``)
- numeric segments compare as numbers, alphabetic segments as strings
- an alphabetic segment sorts below any number, so ``1.0.x`` < ``1.0``
- trailing zeros are ignored (``1.0`` == ``1.0.0``)

Any callable with the ``compare_versions`` signature can be injected in its
place.
"""

import re
import logging
from itertools import zip_longest
from typing import Callable, List, Union

logger = logging.getLogger(__name__)

# compare(a, b) -> -1 if a < b, 0 if equal, 1 if a > b
VersionComparator = Callable[[str, str], int]

Segment = Union[int, str]

VERSION_CHARS = re.compile(r"\A[0-9A-Za-z.-]*[0-9][0-9A-Za-z.-]*\Z")
SEGMENT_PATTERN = re.compile(r"[0-9]+|[a-z]+", re.IGNORECASE)


class InvalidVersion(ValueError):
    """A string that cannot be placed in the version order."""


def _drop_trailing_zeros(segments: List[Segment]) -> List[Segment]:
    while segments and segments[-1] == 0:
        segments = segments[:-1]
    return segments


def version_segments(value: str) -> List[Segment]:
    """
    Split a version into its canonical segments.

    Raises:
        InvalidVersion: If value holds characters outside ``[0-9A-Za-z.-]``
            or no digit at all
    """
    value = value.strip()
    if not VERSION_CHARS.match(value):
        raise InvalidVersion(f"Invalid version: {value!r}")

    segments = [
        int(s) if s.isdigit() else s
        for s in SEGMENT_PATTERN.findall(value.replace("-", ".pre."))
    ]
    first_string = next((i for i, s in enumerate(segments) if isinstance(s, str)), len(segments))
    release, prerelease = segments[:first_string], segments[first_string:]
    return _drop_trailing_zeros(release) + _drop_trailing_zeros(prerelease)


def compare_versions(a: str, b: str) -> int:
    """
    Compare two version strings.

    Raises:
        InvalidVersion: If either string is not a version
    """
    left = version_segments(a)
    right = version_segments(b)
    for lhs, rhs in zip_longest(left, right, fillvalue=0):
        if lhs == rhs:
            continue
        if isinstance(lhs, str) and isinstance(rhs, int):
            return -1
        if isinstance(lhs, int) and isinstance(rhs, str):
            return 1
        return -1 if lhs < rhs else 1
    return 0


def is_valid_version(value: str, comparator: VersionComparator = compare_versions) -> bool:
    """Return True when the comparator accepts value as a version bound."""
    try:
        comparator(value, value)
    except (ValueError, TypeError):
        logger.debug("Invalid version format: %s", value)
        return False
    return True
