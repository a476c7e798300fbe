"""Response decoding: flatten the nested response tree into id indexes.

The body of a query response holds points and arbitrarily nested
point-sets. Decoding produces:
    - a point index: point id -> values, concatenated across repeats
    - a point-set index: point-set id -> direct child ids, appended across
      repeats, with one entry for every point-set found at any depth

Entries are never replaced. A repeated id, whether from a sibling element
in the same page or from a later page, appends to what is already there.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..core.exceptions import DecodeError, FIAPServerError
from ..models.processed import (
    PageResult,
    PointMap,
    PointSetMap,
    ProcessedPointSet,
    ProcessedValue,
)
from ..models.wire import Point, PointSet, QueryRS


def flatten_point_sets(point_sets: Iterable[PointSet], into: PointSetMap) -> PointSetMap:
    """Index every point-set in the tree by id, keeping only direct children.

    A child point-set is listed under its parent and then visited as an
    entry of its own.
    """
    for point_set in point_sets:
        entry = into.get(point_set.id)
        if entry is None:
            entry = into[point_set.id] = ProcessedPointSet()
        entry.point_set_ids.extend(child.id for child in point_set.point_sets)
        entry.point_ids.extend(point.id for point in point_set.points)
        flatten_point_sets(point_set.point_sets, into)
    return into


def flatten_points(points: Iterable[Point], into: PointMap) -> PointMap:
    """Index point values by point id, concatenating repeated ids."""
    for point in points:
        values = into.setdefault(point.id, [])
        values.extend(ProcessedValue(time=v.time, value=v.value) for v in point.values)
    return into


def merge_point_sets(acc: PointSetMap | None, page: PointSetMap | None) -> PointSetMap | None:
    """Merge a page's point-set index into an accumulator (appending)."""
    if page is None:
        return acc
    if acc is None:
        acc = {}
    for key, entry in page.items():
        existing = acc.get(key)
        if existing is None:
            acc[key] = entry.model_copy(deep=True)
        else:
            existing.extend(entry)
    return acc


def merge_points(acc: PointMap | None, page: PointMap | None) -> PointMap | None:
    """Merge a page's point index into an accumulator (concatenating)."""
    if page is None:
        return acc
    if acc is None:
        acc = {}
    for key, values in page.items():
        acc.setdefault(key, []).extend(values)
    return acc


def extract_cursor(response: QueryRS) -> str:
    """Return the echoed cursor, or "" when the server signals the last page."""
    transport = response.transport
    if transport is None or transport.header is None or transport.header.query is None:
        return ""
    cursor = transport.header.query.cursor
    return str(cursor) if cursor is not None else ""


def decode_query_rs(response: QueryRS | None) -> PageResult:
    """Decode one query response page.

    Args:
        response: Parsed response envelope

    Returns:
        PageResult; ``point_sets``/``points`` are None when the body held no
        element of that kind

    Raises:
        DecodeError: If transport, header or body is missing
        FIAPServerError: If the header reports an error
    """
    if response is None:
        raise DecodeError("queryRS is nil")
    status = response.status_code
    transport = response.transport
    if transport is None:
        raise DecodeError("queryRS.Transport is nil", status)
    if transport.header is None:
        raise DecodeError("queryRS.Transport.Header is nil", status)
    if transport.header.error is not None:
        raise FIAPServerError(transport.header.error.type, transport.header.error.value)
    if transport.body is None:
        raise DecodeError("queryRS.Transport.Body is nil", status)

    body = transport.body
    point_sets = flatten_point_sets(body.point_sets, {}) if body.point_sets else None
    points = flatten_points(body.points, {}) if body.points else None

    return PageResult(point_sets=point_sets, points=points, cursor=extract_cursor(response))
