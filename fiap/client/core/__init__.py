"""Core enums, configuration, exceptions and validation."""

from .config import DEFAULT_ACCEPTABLE_SIZE, QUERY_OPERATION, ClientConfig
from .enums import AttrName, QueryType, SelectType, ZeroTimePolicy
from .exceptions import (
    DecodeError,
    FIAPError,
    FIAPServerError,
    PaginationLimitError,
    ProtocolError,
    ServerReportedError,
    TransportError,
    ValidationError,
)
from .validation import collect_input_errors, is_uuid, validate_fetch_input

__all__ = [
    # Enums
    "AttrName",
    "QueryType",
    "SelectType",
    "ZeroTimePolicy",
    # Config
    "ClientConfig",
    "DEFAULT_ACCEPTABLE_SIZE",
    "QUERY_OPERATION",
    # Exceptions
    "FIAPError",
    "ValidationError",
    "TransportError",
    "ProtocolError",
    "DecodeError",
    "FIAPServerError",
    "ServerReportedError",
    "PaginationLimitError",
    # Validation
    "collect_input_errors",
    "is_uuid",
    "validate_fetch_input",
]
