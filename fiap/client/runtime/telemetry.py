"""Structured logging for query pagination.

Emits one log record per page and one per completed fetch, with the
details in ``extra`` so log handlers can index them.
"""

from __future__ import annotations

import logging

from ..models.processed import FetchResult

logger = logging.getLogger(__name__)


def log_page_requested(
    *,
    connection_url: str,
    page_index: int,
    cursor: str,
    acceptable_size: int,
    key_count: int,
    level: int = logging.DEBUG,
) -> None:
    """Log a page request about to be sent.

    Args:
        connection_url: Endpoint being queried
        page_index: Zero-based index of the page within the fetch
        cursor: Cursor sent with the request ("" for the first page)
        acceptable_size: Page size requested from the server
        key_count: Number of keys in the query
        level: Log level of the record
    """
    logger.log(
        level,
        "page_requested",
        extra={
            "connection_url": connection_url,
            "page_index": page_index,
            "cursor": cursor,
            "acceptable_size": acceptable_size,
            "key_count": key_count,
        },
    )


def log_page_completed(
    *,
    connection_url: str,
    page_index: int,
    point_count: int,
    point_set_count: int,
    next_cursor: str,
    latency_ms: float | None = None,
    level: int = logging.DEBUG,
) -> None:
    """Log a decoded page.

    Args:
        connection_url: Endpoint being queried
        page_index: Zero-based index of the page
        point_count: Number of point ids in the page
        point_set_count: Number of point-set ids in the page
        next_cursor: Cursor returned by the server ("" on the last page)
        latency_ms: Round trip plus decode time in milliseconds
        level: Log level of the record
    """
    logger.log(
        level,
        "page_completed",
        extra={
            "connection_url": connection_url,
            "page_index": page_index,
            "point_count": point_count,
            "point_set_count": point_set_count,
            "next_cursor": next_cursor,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    connection_url: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a page that failed; the fetch is abandoned after this."""
    logger.error(
        "page_error",
        extra={
            "connection_url": connection_url,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_fetch_complete(
    *,
    connection_url: str,
    pages_used: int,
    result: FetchResult,
    total_latency_ms: float | None = None,
) -> None:
    logger.info(
        "fetch_complete",
        extra={
            "connection_url": connection_url,
            "pages_used": pages_used,
            "point_count": len(result.points or {}),
            "point_set_count": len(result.point_sets or {}),
            "value_count": sum(len(v) for v in (result.points or {}).values()),
            "total_latency_ms": total_latency_ms,
        },
    )
