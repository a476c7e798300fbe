"""FetchClient facade for FIAP storage queries.

The FetchClient is the caller-facing entry point. It validates input,
resolves options against the client configuration and delegates to the
PaginationDriver, which talks to the server through a RemoteCaller.

Architecture:
    FetchClient -> validate_fetch_input -> PaginationDriver -> RemoteCaller
    The convenience methods (fetch_latest, fetch_oldest, fetch_date_range)
    stamp one time filter onto several ids and reuse fetch().

Example:
    >>> async with FetchClient("http://example.org/axis2/services/FIAPStorage") as client:
    ...     result = await client.fetch_latest(None, None, "http://example.org/point/1")
    ...     print(result.points)
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from ..core.config import ClientConfig
from ..core.enums import SelectType
from ..core.validation import validate_fetch_input
from ..models.key import UserInputKey, UserInputKeyNoID
from ..models.options import FetchOnceOption, FetchOption
from ..models.processed import FetchResult, PageResult
from ..runtime.pagination import PaginationDriver
from ..runtime.transport import RemoteCaller, SOAPTransport


class Fetcher(Protocol):
    """Operations the command line needs from a fetch client."""

    async def fetch(
        self, keys: Sequence[UserInputKey], option: FetchOption | None = None
    ) -> FetchResult: ...

    async def fetch_once(
        self, keys: Sequence[UserInputKey], option: FetchOnceOption | None = None
    ) -> PageResult: ...

    async def fetch_by_ids_with_key(self, key: UserInputKeyNoID, *ids: str) -> FetchResult: ...

    async def fetch_latest(
        self, from_date: datetime | None, until_date: datetime | None, *ids: str
    ) -> FetchResult: ...

    async def fetch_oldest(
        self, from_date: datetime | None, until_date: datetime | None, *ids: str
    ) -> FetchResult: ...

    async def fetch_date_range(
        self, from_date: datetime | None, until_date: datetime | None, *ids: str
    ) -> FetchResult: ...

    async def close(self) -> None: ...


class FetchClient:
    """Client for the FIAP query operation against one storage endpoint."""

    def __init__(
        self,
        connection_url: str,
        *,
        config: ClientConfig | None = None,
        caller: RemoteCaller | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            connection_url: http(s) URL of the FIAP storage service
            config: Client configuration (defaults to ClientConfig())
            caller: Optional remote call adapter; a SOAPTransport is created if
                not provided

        Note:
            The connection URL is validated on each fetch together with the
            keys, so every input problem is reported at once.
        """
        self.connection_url = connection_url
        self.config = config or ClientConfig()
        self._owns_caller = caller is None
        self._caller: RemoteCaller = caller or SOAPTransport(
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
        )
        self._driver = PaginationDriver(
            self._caller,
            max_pages=self.config.max_pages,
            zero_time_policy=self.config.zero_time_policy,
            verbose=self.config.debug,
        )

    def _resolve_acceptable_size(self, option: FetchOption | None) -> int:
        if option is not None and option.acceptable_size is not None:
            return option.acceptable_size
        return self.config.acceptable_size

    async def fetch_once(
        self,
        keys: Sequence[UserInputKey],
        option: FetchOnceOption | None = None,
    ) -> PageResult:
        """Fetch a single page.

        Args:
            keys: Filter keys
            option: Page size and continuation cursor

        Returns:
            PageResult including the cursor for the next page ("" if none)

        Raises:
            ValidationError: If the URL, keys or cursor are invalid
            TransportError: If the remote call fails
            DecodeError: If the response is malformed
            FIAPServerError: If the server reports an error
        """
        cursor = option.cursor if option is not None else None
        validate_fetch_input(self.connection_url, keys, cursor)
        return await self._driver.fetch_page(
            self.connection_url,
            keys,
            acceptable_size=self._resolve_acceptable_size(option),
            cursor=cursor,
        )

    async def fetch(
        self,
        keys: Sequence[UserInputKey],
        option: FetchOption | None = None,
    ) -> FetchResult:
        """Fetch all pages and return the merged result.

        Raises:
            ValidationError: If the URL or keys are invalid
            TransportError: If any page request fails
            DecodeError: If any response is malformed
            FIAPServerError: If the server reports an error on any page
            PaginationLimitError: If config.max_pages is exceeded
        """
        validate_fetch_input(self.connection_url, keys)
        return await self._driver.run(
            self.connection_url,
            keys,
            acceptable_size=self._resolve_acceptable_size(option),
        )

    async def fetch_by_ids_with_key(self, key: UserInputKeyNoID, *ids: str) -> FetchResult:
        """Fetch several ids with the same filter."""
        keys = [key.with_id(id) for id in ids]
        return await self.fetch(keys)

    async def fetch_latest(
        self,
        from_date: datetime | None = None,
        until_date: datetime | None = None,
        *ids: str,
    ) -> FetchResult:
        """Fetch the newest value of each id within [from_date, until_date]."""
        key = UserInputKeyNoID(gteq=from_date, lteq=until_date, select=SelectType.MAXIMUM)
        return await self.fetch_by_ids_with_key(key, *ids)

    async def fetch_oldest(
        self,
        from_date: datetime | None = None,
        until_date: datetime | None = None,
        *ids: str,
    ) -> FetchResult:
        """Fetch the oldest value of each id within [from_date, until_date]."""
        key = UserInputKeyNoID(gteq=from_date, lteq=until_date, select=SelectType.MINIMUM)
        return await self.fetch_by_ids_with_key(key, *ids)

    async def fetch_date_range(
        self,
        from_date: datetime | None = None,
        until_date: datetime | None = None,
        *ids: str,
    ) -> FetchResult:
        """Fetch every value of each id within [from_date, until_date]."""
        key = UserInputKeyNoID(gteq=from_date, lteq=until_date)
        return await self.fetch_by_ids_with_key(key, *ids)

    async def close(self) -> None:
        """Close the remote caller if this client created it."""
        if self._owns_caller:
            await self._caller.close()

    async def __aenter__(self) -> FetchClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


async def fetch(
    connection_url: str,
    keys: Sequence[UserInputKey],
    option: FetchOption | None = None,
    config: ClientConfig | None = None,
) -> FetchResult:
    """One-shot paginated fetch with a temporary client."""
    async with FetchClient(connection_url, config=config) as client:
        return await client.fetch(keys, option)
