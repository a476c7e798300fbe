"""Cursor-driven pagination over the FIAP query operation.

Architecture:
    A fetch walks these stages until the server stops returning a cursor:
    - request: build a query with the current cursor and call the server
    - decode: flatten the page into id indexes
    - merge: append the page into the fetch's accumulators by entity id
    Pages are requested strictly one after another. Any transport, decode or
    server error ends the fetch; accumulated pages are discarded so a fetch
    either returns everything or raises.

    Accumulators live in local variables of run(), so one driver can serve
    several fetches without them observing each other.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from time import perf_counter

from ..core.config import DEFAULT_ACCEPTABLE_SIZE, QUERY_OPERATION
from ..core.enums import ZeroTimePolicy
from ..core.exceptions import FIAPError, PaginationLimitError, TransportError
from ..models.key import UserInputKey
from ..models.processed import FetchResult, PageResult, PointMap, PointSetMap
from .decoder import decode_query_rs, merge_point_sets, merge_points
from .query_builder import build_query_rq
from .telemetry import log_fetch_complete, log_page_completed, log_page_error, log_page_requested
from .transport import RemoteCaller


class PaginationDriver:
    """Requests, decodes and merges query pages."""

    def __init__(
        self,
        caller: RemoteCaller,
        *,
        max_pages: int | None = None,
        zero_time_policy: ZeroTimePolicy = ZeroTimePolicy.OMIT,
        verbose: bool = False,
    ) -> None:
        """Initialize the driver.

        Args:
            caller: Remote call adapter used for every page
            max_pages: Optional cap on pages per fetch (None = unbounded)
            zero_time_policy: Serialization of zero-value filter timestamps
            verbose: Log per-page events at INFO instead of DEBUG for this driver
        """
        self._caller = caller
        self._max_pages = max_pages
        self._zero_time_policy = zero_time_policy
        self._page_log_level = logging.INFO if verbose else logging.DEBUG

    async def fetch_page(
        self,
        connection_url: str,
        keys: Sequence[UserInputKey],
        *,
        acceptable_size: int | None = None,
        cursor: str | None = None,
        page_index: int = 0,
    ) -> PageResult:
        """Request and decode a single page.

        Input is expected to be validated already.

        Raises:
            TransportError: If the remote call fails
            DecodeError: If the response envelope is malformed
            FIAPServerError: If the server reports an error
        """
        size = acceptable_size if acceptable_size is not None else DEFAULT_ACCEPTABLE_SIZE
        request = build_query_rq(size, cursor, keys, zero_time_policy=self._zero_time_policy)
        log_page_requested(
            connection_url=connection_url,
            page_index=page_index,
            cursor=cursor or "",
            acceptable_size=size,
            key_count=len(keys),
            level=self._page_log_level,
        )

        start = perf_counter()
        try:
            try:
                response = await self._caller.call(connection_url, QUERY_OPERATION, request)
            except FIAPError:
                raise
            except Exception as exc:
                raise TransportError(
                    f"remote call to {connection_url} failed: {exc}",
                    url=connection_url,
                ) from exc
            page = decode_query_rs(response)
        except FIAPError as exc:
            log_page_error(
                connection_url=connection_url,
                page_index=page_index,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            raise

        log_page_completed(
            connection_url=connection_url,
            page_index=page_index,
            point_count=len(page.points or {}),
            point_set_count=len(page.point_sets or {}),
            next_cursor=page.cursor,
            latency_ms=(perf_counter() - start) * 1000.0,
            level=self._page_log_level,
        )
        return page

    async def run(
        self,
        connection_url: str,
        keys: Sequence[UserInputKey],
        *,
        acceptable_size: int | None = None,
    ) -> FetchResult:
        """Fetch every page and merge them.

        Returns:
            FetchResult whose indexes are None when no page held that entity kind

        Raises:
            PaginationLimitError: If max_pages is set and the server keeps paging
        """
        start = perf_counter()
        point_sets: PointSetMap | None = None
        points: PointMap | None = None
        cursor = ""
        pages_used = 0

        while True:
            if self._max_pages is not None and pages_used >= self._max_pages:
                raise PaginationLimitError(self._max_pages, cursor)

            page = await self.fetch_page(
                connection_url,
                keys,
                acceptable_size=acceptable_size,
                cursor=cursor,
                page_index=pages_used,
            )
            pages_used += 1

            point_sets = merge_point_sets(point_sets, page.point_sets)
            points = merge_points(points, page.points)

            cursor = page.cursor
            if not cursor:
                break

        result = FetchResult(point_sets=point_sets, points=points)
        log_fetch_complete(
            connection_url=connection_url,
            pages_used=pages_used,
            result=result,
            total_latency_ms=(perf_counter() - start) * 1000.0,
        )
        return result
