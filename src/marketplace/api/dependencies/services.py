"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.marketplace.api.dependencies.db import DBSession
from src.marketplace.api.dependencies.repositories import (
    BidRepo,
    NotificationRepo,
    RequestRepo,
    ReviewRepo,
    UserRepo,
)
from src.marketplace.services import (
    AdminService,
    BidService,
    ModerationService,
    NotificationService,
    RequestService,
    ReviewService,
)


def get_request_service(
    request_repo: RequestRepo,
    bid_repo: BidRepo,
    session: DBSession,
) -> RequestService:
    return RequestService(request_repo, bid_repo, session)


RequestServiceDep = Annotated[RequestService, Depends(get_request_service)]


def get_moderation_service(request_service: RequestServiceDep) -> ModerationService:
    return ModerationService(request_service)


def get_bid_service(
    bid_repo: BidRepo,
    request_repo: RequestRepo,
    request_service: RequestServiceDep,
    session: DBSession,
) -> BidService:
    """Get bid service sharing the request service's session."""
    return BidService(bid_repo, request_repo, request_service, session)


def get_review_service(
    review_repo: ReviewRepo,
    request_repo: RequestRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> ReviewService:
    return ReviewService(review_repo, request_repo, user_repo, session)


def get_notification_service(
    notification_repo: NotificationRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> NotificationService:
    """Notification reads and mark-read; dispatch uses its own session."""
    return NotificationService(notification_repo, user_repo, session)


def get_admin_service(
    user_repo: UserRepo,
    request_repo: RequestRepo,
    bid_repo: BidRepo,
    session: DBSession,
) -> AdminService:
    return AdminService(user_repo, request_repo, bid_repo, session)


ModerationServiceDep = Annotated[ModerationService, Depends(get_moderation_service)]
BidServiceDep = Annotated[BidService, Depends(get_bid_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
