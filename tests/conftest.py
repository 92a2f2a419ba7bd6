"""
Shared fixtures: a scripted transport returning canned (status, body) pairs per URL.
"""

import pytest
from typing import Dict, List, Optional, Tuple

from wpfinger.scanner.models import FetchResult


class ScriptedFetcher:
    """
    Fake transport for the cascades.

    Responses are keyed by URL. A value of None simulates a connection
    failure; unknown URLs answer 404 with an empty body.
    """

    def __init__(self, responses: Dict[str, Optional[Tuple[int, str]]]):
        self.responses = responses
        self.requested: List[str] = []

    async def fetch(self, url: str) -> Optional[FetchResult]:
        self.requested.append(url)
        if url in self.responses:
            scripted = self.responses[url]
            if scripted is None:
                return None
            status, body = scripted
            return FetchResult(url=url, status_code=status, body=body)
        return FetchResult(url=url, status_code=404, body="")


@pytest.fixture
def make_fetcher():
    def _make(responses: Dict[str, Optional[Tuple[int, str]]]) -> ScriptedFetcher:
        return ScriptedFetcher(responses)
    return _make
