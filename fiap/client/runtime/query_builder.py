"""Query construction from user filter keys.

Turns validated UserInputKeys plus size/cursor options into the wire
``query`` element. Every call gets a fresh random request id.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime

from ..core.config import DEFAULT_ACCEPTABLE_SIZE
from ..core.enums import AttrName, QueryType, SelectType, ZeroTimePolicy
from ..models.key import UserInputKey
from ..models.wire import Header, Key, Query, QueryRQ, Transport
from ..utils.time import format_time, is_zero_time


def to_wire_time(
    dt: datetime | None,
    zero_time_policy: ZeroTimePolicy = ZeroTimePolicy.OMIT,
) -> str | None:
    """Format a filter timestamp, or None when the attribute must be omitted."""
    if dt is None:
        return None
    if zero_time_policy is ZeroTimePolicy.OMIT and is_zero_time(dt):
        return None
    return format_time(dt)


def to_wire_key(
    key: UserInputKey,
    zero_time_policy: ZeroTimePolicy = ZeroTimePolicy.OMIT,
) -> Key:
    """Translate one filter key; keys always filter on the time attribute."""
    return Key(
        id=key.id,
        attr_name=AttrName.TIME,
        eq=to_wire_time(key.eq, zero_time_policy),
        neq=to_wire_time(key.neq, zero_time_policy),
        lt=to_wire_time(key.lt, zero_time_policy),
        gt=to_wire_time(key.gt, zero_time_policy),
        lteq=to_wire_time(key.lteq, zero_time_policy),
        gteq=to_wire_time(key.gteq, zero_time_policy),
        select=None if key.select is SelectType.NONE else key.select,
    )


def to_cursor(cursor: str | None) -> uuid.UUID | None:
    """Map an absent or empty cursor to None; otherwise parse it as a UUID."""
    if not cursor:
        return None
    return uuid.UUID(cursor)


def build_query(
    acceptable_size: int | None,
    cursor: str | None,
    keys: Sequence[UserInputKey],
    *,
    zero_time_policy: ZeroTimePolicy = ZeroTimePolicy.OMIT,
) -> Query:
    """Build a storage query.

    Args:
        acceptable_size: Max values per page; None uses DEFAULT_ACCEPTABLE_SIZE
        cursor: Continuation token from a previous page, or None/"" for the first page
        keys: Non-empty, validated filter keys
        zero_time_policy: Serialization of zero-value timestamps

    Returns:
        Query with a new random id
    """
    return Query(
        id=uuid.uuid4(),
        type=QueryType.STORAGE,
        cursor=to_cursor(cursor),
        acceptable_size=acceptable_size if acceptable_size is not None else DEFAULT_ACCEPTABLE_SIZE,
        keys=[to_wire_key(key, zero_time_policy) for key in keys],
    )


def build_query_rq(
    acceptable_size: int | None,
    cursor: str | None,
    keys: Sequence[UserInputKey],
    *,
    zero_time_policy: ZeroTimePolicy = ZeroTimePolicy.OMIT,
) -> QueryRQ:
    """Wrap build_query() in the transport/header envelope of a request."""
    query = build_query(acceptable_size, cursor, keys, zero_time_policy=zero_time_policy)
    return QueryRQ(transport=Transport(header=Header(query=query)))
