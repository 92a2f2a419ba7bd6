import re
from dataclasses import dataclass
from typing import Callable, Awaitable, Optional, Protocol

# Async observer invoked as log_callback(level, message)
LogCallback = Callable[[str, str], Awaitable[None]]


@dataclass(frozen=True)
class FetchResult:
    """
    Minimal view of an HTTP response handed to the version cascades.

    Attributes:
        url: URL that was requested
        status_code: HTTP status code of the response
        body: Decoded response body
    """
    url: str
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class Fetcher(Protocol):
    """Transport capability consumed by the cascades."""

    async def fetch(self, url: str) -> Optional[FetchResult]:
        ...


@dataclass(frozen=True)
class Probe:
    """
    One (locator, pattern) pair tried during whole-site version discovery.

    The pattern must define exactly one capturing group holding the version.
    """
    name: str
    locator: Callable[[str], str]
    pattern: "re.Pattern[str]"

    def __post_init__(self):
        if self.pattern.groups != 1:
            raise ValueError(
                f"Probe '{self.name}' pattern must define exactly one capturing group, "
                f"got {self.pattern.groups}"
            )

    def extract(self, body: str) -> Optional[str]:
        """Return the captured version, or None when absent or empty."""
        match = self.pattern.search(body)
        if match and match.group(1):
            return match.group(1)
        return None
