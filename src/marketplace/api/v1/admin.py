"""Admin endpoints - moderation queue, completion and platform management."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Query

from src.marketplace.api.dependencies import (
    AdminServiceDep,
    CurrentActor,
    ModerationServiceDep,
    RequestServiceDep,
)
from src.marketplace.schemas.admin import ActiveUpdate, BadgeUpdate, StatsRead, UserRead
from src.marketplace.schemas.pagination import PaginatedResponse
from src.marketplace.schemas.request import ModerationRequest, RequestRead
from src.marketplace.services import dispatch_events

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/requests/pending",
    response_model=PaginatedResponse[RequestRead],
    summary="Moderation queue",
)
async def list_pending_requests(
    actor: CurrentActor,
    service: RequestServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[RequestRead]:
    requests, next_cursor, has_more = await service.list_pending_review(
        actor, cursor=cursor, limit=limit
    )
    return PaginatedResponse(
        items=[RequestRead.model_validate(r) for r in requests],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "/requests/{request_id}/moderate",
    response_model=RequestRead,
    summary="Moderate request",
    description="Publish (open) or reject a request awaiting review.",
    responses={
        200: {"description": "Decision applied"},
        403: {"description": "Admin only"},
        409: {"description": "Request is not pending review"},
    },
)
async def moderate_request(
    request_id: int,
    body: ModerationRequest,
    actor: CurrentActor,
    service: ModerationServiceDep,
    background_tasks: BackgroundTasks,
) -> RequestRead:
    outcome = await service.decide(actor, request_id, body.decision, body.notes)
    background_tasks.add_task(dispatch_events, outcome.events)
    return RequestRead.model_validate(outcome.value)


@router.post(
    "/requests/{request_id}/complete",
    response_model=RequestRead,
    summary="Complete request",
    responses={
        200: {"description": "Request completed"},
        403: {"description": "Admin only"},
        409: {"description": "Request is not in progress"},
    },
)
async def complete_request(
    request_id: int,
    actor: CurrentActor,
    service: RequestServiceDep,
    background_tasks: BackgroundTasks,
) -> RequestRead:
    outcome = await service.complete(actor, request_id)
    background_tasks.add_task(dispatch_events, outcome.events)
    return RequestRead.model_validate(outcome.value)


@router.get("/stats", response_model=StatsRead, summary="Platform statistics")
async def get_stats(actor: CurrentActor, service: AdminServiceDep) -> StatsRead:
    return StatsRead.model_validate(await service.stats(actor))


@router.put(
    "/users/{user_id}/badge",
    response_model=UserRead,
    summary="Set provider badge",
    responses={422: {"description": "User is not a provider"}},
)
async def set_badge(
    user_id: int,
    body: BadgeUpdate,
    actor: CurrentActor,
    service: AdminServiceDep,
) -> UserRead:
    return UserRead.model_validate(await service.set_badge(actor, user_id, body.badge))


@router.put(
    "/users/{user_id}/active",
    response_model=UserRead,
    summary="Activate or deactivate user",
)
async def set_active(
    user_id: int,
    body: ActiveUpdate,
    actor: CurrentActor,
    service: AdminServiceDep,
) -> UserRead:
    return UserRead.model_validate(await service.set_active(actor, user_id, body.is_active))
