"""FastAPI dependency injection definitions."""

from src.marketplace.api.dependencies.auth import CurrentActor, get_current_actor
from src.marketplace.api.dependencies.db import DBSession, get_db_session
from src.marketplace.api.dependencies.repositories import (
    BidRepo,
    NotificationRepo,
    RequestRepo,
    ReviewRepo,
    UserRepo,
)
from src.marketplace.api.dependencies.services import (
    AdminServiceDep,
    BidServiceDep,
    ModerationServiceDep,
    NotificationServiceDep,
    RequestServiceDep,
    ReviewServiceDep,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentActor",
    "get_current_actor",
    # Repositories
    "BidRepo",
    "NotificationRepo",
    "RequestRepo",
    "ReviewRepo",
    "UserRepo",
    # Services
    "AdminServiceDep",
    "BidServiceDep",
    "ModerationServiceDep",
    "NotificationServiceDep",
    "RequestServiceDep",
    "ReviewServiceDep",
]
