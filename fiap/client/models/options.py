"""Per-call fetch options."""

from pydantic import BaseModel, ConfigDict, Field


class FetchOption(BaseModel):
    """Options for a paginated fetch.

    ``acceptable_size`` maps to the query's ``acceptableSize`` attribute: the
    maximum number of values the server returns per page. None falls back to
    the client configuration.
    """

    acceptable_size: int | None = Field(None, ge=1)

    model_config = ConfigDict(frozen=True)


class FetchOnceOption(FetchOption):
    """Options for a single page request; ``cursor`` continues a previous page."""

    cursor: str | None = None
