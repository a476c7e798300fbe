"""Client configuration and protocol constants."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import ZeroTimePolicy

# Server-side page size used when neither the call option nor the config sets one
DEFAULT_ACCEPTABLE_SIZE = 1000

# SOAP action of the FIAP query operation
QUERY_OPERATION = "http://soap.fiap.org/query"


@dataclass
class ClientConfig:
    acceptable_size: int = DEFAULT_ACCEPTABLE_SIZE
    timeout: float = 30.0  # seconds, whole request
    max_pages: int | None = None  # None = follow cursors until the server stops
    zero_time_policy: ZeroTimePolicy = ZeroTimePolicy.OMIT
    debug: bool = False
    user_agent: str = "fiap-client"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.acceptable_size < 1:
            raise ValueError("acceptable_size must be a positive integer")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_pages is not None and self.max_pages < 1:
            raise ValueError("max_pages must be a positive integer or None")
