"""Model exports.

Import from here: `from src.marketplace.models import ServiceRequest, Bid`
"""

# Enums
from src.marketplace.models.enums import (
    BidStatus,
    ModerationDecision,
    NotificationType,
    RequestStatus,
    ReviewDirection,
    UserRole,
)

# Tables
from src.marketplace.models.bid import Bid
from src.marketplace.models.notification import Notification
from src.marketplace.models.request import ServiceRequest
from src.marketplace.models.review import Review
from src.marketplace.models.user import User

__all__ = [
    # Enums
    "BidStatus",
    "ModerationDecision",
    "NotificationType",
    "RequestStatus",
    "ReviewDirection",
    "UserRole",
    # Tables
    "Bid",
    "Notification",
    "Review",
    "ServiceRequest",
    "User",
]
