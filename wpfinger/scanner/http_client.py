import httpx
import asyncio
import time
import logging
from typing import Optional, List, Dict, Any
from ..config import Settings, settings as default_settings
from ..constants import LogLevel
from .models import FetchResult, LogCallback

logger = logging.getLogger(__name__)


class HttpClient:
    def __init__(
        self,
        config: Settings = None,
        log_callback: LogCallback = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or default_settings
        self.log_callback = log_callback
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None
        self.history: List[Dict[str, Any]] = []
        self.last_request_time = 0.0
        self._lock = asyncio.Lock() # Guard for rate limiting state

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            verify=self.config.VERIFY_TLS,
            follow_redirects=self.config.FOLLOW_REDIRECTS,
            timeout=self.config.DEFAULT_TIMEOUT,
            headers={"User-Agent": self.config.USER_AGENT},
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def _wait_for_rate_limit(self):
        elapsed = time.time() - self.last_request_time
        if elapsed < self.config.RATE_LIMIT_DELAY:
            await asyncio.sleep(self.config.RATE_LIMIT_DELAY - elapsed)

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        if not self.client:
            raise RuntimeError("HttpClient not initialized. Use 'async with'.")

        async with self._lock:
            await self._wait_for_rate_limit()
            self.last_request_time = time.time()

        start_time = time.time()
        response = await self.client.request(method, url, **kwargs)
        latency = time.time() - start_time

        self.history.append({
            "timestamp": start_time,
            "method": method,
            "url": url,
            "status": response.status_code,
            "latency": latency
        })
        return response

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def fetch(self, url: str) -> Optional[FetchResult]:
        """
        GET a URL and return its status and body.

        Connection errors and timeouts are folded into None so that a cascade
        can treat them as a failed step.
        """
        try:
            response = await self.get(url)
        except httpx.HTTPError as e:
            logger.debug("Request to %s failed: %s", url, e)
            if self.log_callback:
                await self.log_callback(LogLevel.WARNING, f"Request to {url} failed: {type(e).__name__}")
            return None

        return FetchResult(url=url, status_code=response.status_code, body=response.text)
