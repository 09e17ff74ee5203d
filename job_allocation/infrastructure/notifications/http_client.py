"""
HTTP client used by the notification adapters.
"""

import time
from typing import Any, Dict, Optional

import httpx

from job_allocation.config.logging import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """Thin async wrapper around httpx with request timing logs."""

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()
            self.client = None

    async def post(
        self,
        url: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make POST request."""
        if self.client is None:
            raise RuntimeError("HTTPClient must be used as an async context manager")

        start_time = time.time()

        try:
            response = await self.client.post(url, json=data, headers=headers)
        except httpx.HTTPError as e:
            logger.error(
                "HTTP POST request failed",
                url=url,
                error=str(e),
                response_time_ms=(time.time() - start_time) * 1000,
            )
            raise

        logger.debug(
            "HTTP POST request completed",
            url=url,
            status_code=response.status_code,
            response_time_ms=(time.time() - start_time) * 1000,
        )
        return response
