"""Cursor pagination shared by the request board, moderation queue and inbox."""

import base64

from pydantic import BaseModel, Field


class PaginatedResponse[T](BaseModel):
    """One page of a newest-first listing.

    ``next_cursor`` is opaque to clients: pass it back unchanged to get the
    page of older items.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Cursor for the next (older) page. None on the last page.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether older items exist beyond this page.",
    )


def encode_cursor(last_id: int) -> str:
    """Cursor pointing just past the row with ``last_id``."""
    return base64.urlsafe_b64encode(str(last_id).encode()).decode()


def decode_cursor(cursor: str) -> int:
    """Row id a cursor points past.

    Raises:
        ValueError: If the cursor was not produced by encode_cursor.
    """
    try:
        return int(base64.urlsafe_b64decode(cursor.encode()).decode())
    except (ValueError, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid cursor: {cursor!r}") from e
