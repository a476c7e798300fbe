"""Remote call adapter for the FIAP query operation.

The pagination core only depends on the RemoteCaller protocol, so tests and
alternative transports can be swapped in. SOAPTransport is the production
implementation: a SOAP 1.1 POST over aiohttp.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, runtime_checkable

import aiohttp

from ..codec.soap import decode_query_rs, encode_query_rq
from ..core.exceptions import DecodeError, TransportError
from ..models.wire import QueryRQ, QueryRS
from ..utils.http import HTTPClient

logger = logging.getLogger(__name__)


@runtime_checkable
class RemoteCaller(Protocol):
    """Request/response exchange for one FIAP operation."""

    async def call(self, endpoint_url: str, operation: str, request: QueryRQ) -> QueryRS:
        """Send request to endpoint_url as operation and return the parsed response."""
        ...

    async def close(self) -> None:
        """Release connections held by the caller."""
        ...


class SOAPTransport:
    """SOAP 1.1 transport over HTTP POST."""

    def __init__(
        self,
        http: HTTPClient | None = None,
        *,
        timeout: float = 30.0,
        user_agent: str = "fiap-client",
    ) -> None:
        self._owns_http = http is None
        self._http = http or HTTPClient(timeout=timeout, headers={"User-Agent": user_agent})

    async def call(self, endpoint_url: str, operation: str, request: QueryRQ) -> QueryRS:
        """POST the request envelope and decode the response envelope.

        Raises:
            TransportError: On network failure, SOAP Fault, or an HTTP error
                status whose body is not a SOAP envelope
            DecodeError: If a successful response is not a SOAP envelope
        """
        payload = encode_query_rq(request)
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{operation}"',
        }
        logger.debug("soap_request", extra={"url": endpoint_url, "operation": operation})

        try:
            http_response = await self._http.post(endpoint_url, payload, headers=headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(
                f"request to {endpoint_url} failed: {str(exc) or type(exc).__name__}",
                url=endpoint_url,
            ) from exc

        status = http_response.status
        logger.debug(
            "soap_response",
            extra={
                "url": endpoint_url,
                "status": status,
                "content_type": http_response.content_type,
                "size": len(http_response.body),
            },
        )

        try:
            response = decode_query_rs(http_response.body, status)
        except TransportError as exc:
            exc.url = endpoint_url
            raise
        except DecodeError as exc:
            if status >= 400:
                raise TransportError(
                    f"request to {endpoint_url} failed with http status {status}",
                    status_code=status,
                    url=endpoint_url,
                ) from exc
            raise
        return response

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._owns_http:
            await self._http.close()
