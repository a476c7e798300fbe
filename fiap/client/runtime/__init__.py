"""Query runtime: query building, response decoding, pagination and transport.

Architecture:
    - query_builder.py: filter keys -> wire query
    - decoder.py: wire response -> flat id indexes and cursor
    - pagination.py: page loop and merge (PaginationDriver)
    - transport.py: RemoteCaller protocol and the SOAP/aiohttp implementation
    - telemetry.py: structured logging
"""

from __future__ import annotations

from .decoder import (
    decode_query_rs,
    extract_cursor,
    flatten_point_sets,
    flatten_points,
    merge_point_sets,
    merge_points,
)
from .pagination import PaginationDriver
from .query_builder import build_query, build_query_rq, to_cursor, to_wire_key, to_wire_time
from .transport import RemoteCaller, SOAPTransport

__all__ = [
    "PaginationDriver",
    "RemoteCaller",
    "SOAPTransport",
    "build_query",
    "build_query_rq",
    "decode_query_rs",
    "extract_cursor",
    "flatten_point_sets",
    "flatten_points",
    "merge_point_sets",
    "merge_points",
    "to_cursor",
    "to_wire_key",
    "to_wire_time",
]
