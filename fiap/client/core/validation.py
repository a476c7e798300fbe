"""Input validation shared by the fetch operations.

All checks run before the network is touched and every failure is
collected, so a single ValidationError names every problem at once.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .exceptions import ValidationError

if TYPE_CHECKING:
    from ..models.key import UserInputKey

_URL_SCHEME = re.compile(r"^https?://")
_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)

CURSOR_FORMAT_MESSAGE = (
    "cursor must be entered in UUID format. example: '123e4567-e89b-12d3-a456-426614174000'"
)


def is_uuid(value: str) -> bool:
    """Return True when value is a canonical 8-4-4-4-12 hex UUID."""
    return bool(_UUID_PATTERN.fullmatch(value))


def collect_input_errors(
    connection_url: str | None,
    keys: Sequence[UserInputKey] | None,
    cursor: str | None = None,
) -> list[str]:
    """Return every input problem found, in a stable order."""
    errors: list[str] = []

    if not connection_url:
        errors.append("connection_url is empty")
    elif not _URL_SCHEME.match(connection_url):
        errors.append(f"invalid connection_url: {connection_url}")

    if not keys:
        errors.append("keys is empty")
    else:
        for index, key in enumerate(keys):
            if not key.id:
                errors.append(f"keys[{index}].id is empty")

    if cursor and not is_uuid(cursor):
        errors.append(CURSOR_FORMAT_MESSAGE)

    return errors


def validate_fetch_input(
    connection_url: str | None,
    keys: Sequence[UserInputKey] | None,
    cursor: str | None = None,
) -> None:
    """Raise ValidationError naming every problem with the fetch input.

    Raises:
        ValidationError: If the URL, keys or cursor are unusable
    """
    errors = collect_input_errors(connection_url, keys, cursor)
    if errors:
        raise ValidationError(errors)
