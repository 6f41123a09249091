"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Platform role supplied by the identity provider."""

    CLIENT = "client"
    PROVIDER = "provider"
    ADMIN = "admin"


class RequestStatus(str, Enum):
    """Service request lifecycle status."""

    PENDING_REVIEW = "pending_review"
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class ModerationDecision(str, Enum):
    """Outcomes an admin may choose for a request awaiting review."""

    OPEN = "open"
    REJECTED = "rejected"


class BidStatus(str, Enum):
    """Bid arbitration status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ReviewDirection(str, Enum):
    """Which party reviewed which."""

    CLIENT_TO_PROVIDER = "client_to_provider"
    PROVIDER_TO_CLIENT = "provider_to_client"


class NotificationType(str, Enum):
    """Domain event that produced a notification."""

    NEW_REQUEST = "new_request"
    REQUEST_APPROVED = "request_approved"
    REQUEST_REJECTED = "request_rejected"
    REQUEST_CANCELLED = "request_cancelled"
    REQUEST_COMPLETED = "request_completed"
    NEW_BID = "new_bid"
    BID_ACCEPTED = "bid_accepted"
    BID_REJECTED = "bid_rejected"
    REQUEST_ASSIGNED = "request_assigned"
    NEW_REVIEW = "new_review"
