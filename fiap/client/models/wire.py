"""FIAP wire models.

These models mirror the IEEE1888 ``transport`` schema one-to-one. Field names
are snake_case; the SOAP codec maps them to the XML element and attribute
names (``acceptableSize``, ``pointSet``, ``attrName``...). A field left as
None is omitted from the serialized document.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..core.enums import AttrName, QueryType, SelectType


class Key(BaseModel):
    """``key`` element of a query; time filters are RFC 3339 text."""

    id: str
    attr_name: AttrName | None = AttrName.TIME
    eq: str | None = None
    neq: str | None = None
    lt: str | None = None
    gt: str | None = None
    lteq: str | None = None
    gteq: str | None = None
    select: SelectType | None = None


class Query(BaseModel):
    """``query`` element; echoed back by the server with its ``cursor``."""

    id: UUID | None = None
    type: QueryType | None = None
    cursor: UUID | None = None
    acceptable_size: int | None = Field(None, ge=1)
    keys: list[Key] = Field(default_factory=list)


class ErrorInfo(BaseModel):
    """``error`` element reported in a response header."""

    type: str = ""
    value: str = ""


class Header(BaseModel):
    ok: bool = False
    error: ErrorInfo | None = None
    query: Query | None = None


class Value(BaseModel):
    """Single time-series value; ``value`` is the element text."""

    time: datetime | None = None
    value: str = ""


class Point(BaseModel):
    id: str = ""
    values: list[Value] = Field(default_factory=list)


class PointSet(BaseModel):
    """``pointSet`` element; may nest points and point-sets to any depth."""

    id: str = ""
    point_sets: list[PointSet] = Field(default_factory=list)
    points: list[Point] = Field(default_factory=list)


class Body(BaseModel):
    point_sets: list[PointSet] = Field(default_factory=list)
    points: list[Point] = Field(default_factory=list)


class Transport(BaseModel):
    header: Header | None = None
    body: Body | None = None


class QueryRQ(BaseModel):
    """Request payload of the query operation."""

    transport: Transport | None = None


class QueryRS(BaseModel):
    """Response payload of the query operation.

    ``status_code`` is the HTTP status the transport observed, kept for error
    messages; it is not part of the XML document.
    """

    transport: Transport | None = None
    status_code: int | None = None


PointSet.model_rebuild()

__all__ = [
    "Body",
    "ErrorInfo",
    "Header",
    "Key",
    "Point",
    "PointSet",
    "Query",
    "QueryRQ",
    "QueryRS",
    "Transport",
    "Value",
]
