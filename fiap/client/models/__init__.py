"""Data models for FIAP queries and their flattened results.

Model Categories:
    - Filter keys: UserInputKey, UserInputKeyNoID
    - Options: FetchOption, FetchOnceOption
    - Wire: Key, Query, Header, Body, Point, PointSet, Value, Transport, QueryRQ, QueryRS
    - Results: ProcessedValue, ProcessedPointSet, FetchResult, PageResult

See Also:
    - Pydantic documentation: https://docs.pydantic.dev/
"""

from .key import UserInputKey, UserInputKeyNoID
from .options import FetchOnceOption, FetchOption
from .processed import (
    FetchResult,
    PageResult,
    PointMap,
    PointSetMap,
    ProcessedPointSet,
    ProcessedValue,
)
from .wire import (
    Body,
    ErrorInfo,
    Header,
    Key,
    Point,
    PointSet,
    Query,
    QueryRQ,
    QueryRS,
    Transport,
    Value,
)

__all__ = [
    "Body",
    "ErrorInfo",
    "FetchOnceOption",
    "FetchOption",
    "FetchResult",
    "Header",
    "Key",
    "PageResult",
    "Point",
    "PointMap",
    "PointSet",
    "PointSetMap",
    "ProcessedPointSet",
    "ProcessedValue",
    "Query",
    "QueryRQ",
    "QueryRS",
    "Transport",
    "UserInputKey",
    "UserInputKeyNoID",
    "Value",
]
