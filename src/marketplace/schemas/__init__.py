from src.marketplace.schemas.admin import ActiveUpdate, BadgeUpdate, StatsRead, UserRead
from src.marketplace.schemas.bid import BidCreate, BidRead, BidUpdate
from src.marketplace.schemas.notification import NotificationPage, NotificationRead
from src.marketplace.schemas.pagination import PaginatedResponse
from src.marketplace.schemas.request import ModerationRequest, RequestCreate, RequestRead
from src.marketplace.schemas.review import RatingRead, ReviewCreate, ReviewRead

__all__ = [
    # Admin
    "ActiveUpdate",
    "BadgeUpdate",
    "StatsRead",
    "UserRead",
    # Bid
    "BidCreate",
    "BidRead",
    "BidUpdate",
    # Notification
    "NotificationPage",
    "NotificationRead",
    # Pagination
    "PaginatedResponse",
    # Request
    "ModerationRequest",
    "RequestCreate",
    "RequestRead",
    # Review
    "RatingRead",
    "ReviewCreate",
    "ReviewRead",
]
