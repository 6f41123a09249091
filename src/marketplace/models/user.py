"""User model - identities known to the marketplace."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now
from src.marketplace.models.columns import enum_column
from src.marketplace.models.enums import UserRole


class User(SQLModel, table=True):
    """Client, provider or admin account.

    Credentials live with the identity provider; only profile data the
    lifecycle engine needs is stored here.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255, unique=True, index=True)
    role: UserRole = Field(default=UserRole.CLIENT, sa_column=enum_column(UserRole, index=True))
    is_active: bool = Field(default=True)
    badge: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now)
