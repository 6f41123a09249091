"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.marketplace.api.dependencies.db import DBSession
from src.marketplace.repositories import (
    BidRepository,
    NotificationRepository,
    ReviewRepository,
    ServiceRequestRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_request_repository(session: DBSession) -> ServiceRequestRepository:
    return ServiceRequestRepository(session)


def get_bid_repository(session: DBSession) -> BidRepository:
    return BidRepository(session)


def get_review_repository(session: DBSession) -> ReviewRepository:
    return ReviewRepository(session)


def get_notification_repository(session: DBSession) -> NotificationRepository:
    return NotificationRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
RequestRepo = Annotated[ServiceRequestRepository, Depends(get_request_repository)]
BidRepo = Annotated[BidRepository, Depends(get_bid_repository)]
ReviewRepo = Annotated[ReviewRepository, Depends(get_review_repository)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
