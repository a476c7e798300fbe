"""FIAP Client - IEEE1888 (a.k.a. UGCCNet or FIAP) storage query library."""

__version__ = "0.1.0"

from .api import FetchClient, Fetcher, fetch
from .core import (
    ClientConfig,
    DecodeError,
    FIAPError,
    FIAPServerError,
    PaginationLimitError,
    ProtocolError,
    SelectType,
    ServerReportedError,
    TransportError,
    ValidationError,
    ZeroTimePolicy,
)
from .models import (
    FetchOnceOption,
    FetchOption,
    FetchResult,
    PageResult,
    ProcessedPointSet,
    ProcessedValue,
    UserInputKey,
    UserInputKeyNoID,
)
from .runtime import PaginationDriver, RemoteCaller, SOAPTransport

__all__ = [
    "__version__",
    # API
    "FetchClient",
    "Fetcher",
    "fetch",
    # Config and enums
    "ClientConfig",
    "SelectType",
    "ZeroTimePolicy",
    # Exceptions
    "FIAPError",
    "ValidationError",
    "TransportError",
    "ProtocolError",
    "DecodeError",
    "FIAPServerError",
    "ServerReportedError",
    "PaginationLimitError",
    # Models
    "UserInputKey",
    "UserInputKeyNoID",
    "FetchOption",
    "FetchOnceOption",
    "FetchResult",
    "PageResult",
    "ProcessedPointSet",
    "ProcessedValue",
    # Runtime
    "PaginationDriver",
    "RemoteCaller",
    "SOAPTransport",
]
