"""Repository layer - data access abstraction."""

from src.marketplace.repositories.base import BaseRepository
from src.marketplace.repositories.bid import BidRepository
from src.marketplace.repositories.notification import NotificationRepository
from src.marketplace.repositories.request import ServiceRequestRepository
from src.marketplace.repositories.review import ReviewRepository
from src.marketplace.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BidRepository",
    "NotificationRepository",
    "ReviewRepository",
    "ServiceRequestRepository",
    "UserRepository",
]
