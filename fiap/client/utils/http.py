"""HTTP client helper for SOAP POST exchanges."""

from typing import Dict, NamedTuple, Optional

import aiohttp


class HTTPResponse(NamedTuple):
    """Status, content type and raw body of a finished request."""

    status: int
    body: bytes
    content_type: str = ""


class HTTPClient:
    """Async HTTP client wrapper.

    Error statuses are returned rather than raised: SOAP servers report
    faults with a 500 status and an envelope body that still has to be read.
    """

    def __init__(self, timeout: float = 30.0, headers: Optional[Dict[str, str]] = None) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.default_headers = dict(headers or {})
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout, headers=self.default_headers
            )
        return self._session

    async def post(
        self,
        url: str,
        data: bytes,
        headers: Optional[Dict[str, str]] = None,
    ) -> HTTPResponse:
        """POST data and read the whole response body."""
        async with self.session.post(url, data=data, headers=headers) as response:
            body = await response.read()
            return HTTPResponse(response.status, body, response.content_type or "")

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
