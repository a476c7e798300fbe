"""Custom exception hierarchy."""

from __future__ import annotations


class FIAPError(Exception):
    """Base exception for all library errors."""

    pass


class ValidationError(FIAPError):
    """Input rejected before any request was sent.

    Every problem found is kept in ``errors`` so callers can report them
    together instead of fixing one at a time.
    """

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class TransportError(FIAPError):
    """The remote call failed (network, HTTP status or SOAP fault)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ProtocolError(FIAPError):
    """The response envelope did not have the expected FIAP shape."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        if status_code is not None:
            message = f"{message}, http status: {status_code}"
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ProtocolError):
    """The response could not be decoded into a query result."""

    pass


class FIAPServerError(FIAPError):
    """The server answered with an ``error`` element instead of ``OK``."""

    def __init__(self, error_type: str, value: str) -> None:
        super().__init__(f"fiap error: type {error_type}, value {value}")
        self.error_type = error_type
        self.value = value


ServerReportedError = FIAPServerError


class PaginationLimitError(FIAPError):
    """The server kept returning cursors past the configured page limit."""

    def __init__(self, max_pages: int, cursor: str) -> None:
        super().__init__(f"pagination exceeded {max_pages} pages (last cursor: {cursor})")
        self.max_pages = max_pages
        self.cursor = cursor
