"""Column helpers shared by table models."""

from enum import Enum

from sqlalchemy import Column
from sqlalchemy import Enum as SAEnum


def enum_column(enum_cls: type[Enum], *, index: bool = False) -> Column:
    """Non-native enum column storing member values (e.g. ``"in_progress"``).

    VARCHAR on every backend, so migrations and SQLite tests see the same
    schema as PostgreSQL.
    """
    return Column(
        SAEnum(
            enum_cls,
            native_enum=False,
            length=32,
            values_callable=lambda members: [m.value for m in members],
            validate_strings=True,
        ),
        nullable=False,
        index=index,
    )
