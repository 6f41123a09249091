from src.marketplace.services.admin_service import AdminService, PlatformStats
from src.marketplace.services.bid_service import BidService
from src.marketplace.services.moderation_service import ModerationService
from src.marketplace.services.notification_service import NotificationService, dispatch_events
from src.marketplace.services.request_service import RequestService
from src.marketplace.services.review_service import RatingSummary, ReviewService

__all__ = [
    "AdminService",
    "BidService",
    "ModerationService",
    "NotificationService",
    "PlatformStats",
    "RatingSummary",
    "RequestService",
    "ReviewService",
    "dispatch_events",
]
