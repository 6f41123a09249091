from fastapi import APIRouter

from src.marketplace.api.v1 import admin, bids, notifications, requests, reviews

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(requests.router)
api_router.include_router(bids.router)
api_router.include_router(reviews.router)
api_router.include_router(notifications.router)
api_router.include_router(admin.router)
