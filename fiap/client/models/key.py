"""User-facing filter keys."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from ..core.enums import SelectType


class UserInputKeyNoID(BaseModel):
    """Time filter on the ``time`` attribute, without a target id.

    All comparison fields are optional and independent; the server combines
    whatever is set into a range.
    """

    eq: datetime | None = None
    neq: datetime | None = None
    lt: datetime | None = None
    gt: datetime | None = None
    lteq: datetime | None = None
    gteq: datetime | None = None
    select: SelectType = SelectType.NONE

    model_config = ConfigDict(frozen=True)

    @field_validator("eq", "neq", "lt", "gt", "lteq", "gteq")
    @classmethod
    def validate_aware(cls, v: datetime | None) -> datetime | None:
        """Require timezone-aware timestamps (the wire format carries an offset)."""
        if v is not None and v.tzinfo is None:
            raise ValueError("timestamps must be timezone-aware")
        return v

    def with_id(self, id: str) -> UserInputKey:
        """Return a UserInputKey targeting id with this key's filters."""
        return UserInputKey(id=id, **self.model_dump(exclude={"id"}))


class UserInputKey(UserInputKeyNoID):
    """Lookup key: a point or point-set id plus optional filters.

    An empty ``id`` is accepted at construction time and rejected by the
    fetch-time validation together with any other input problems.
    """

    id: str = ""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
