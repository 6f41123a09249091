"""Service request endpoints - posting, browsing and cancelling requests."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Query, status

from src.marketplace.api.dependencies import CurrentActor, RequestServiceDep
from src.marketplace.schemas.pagination import PaginatedResponse
from src.marketplace.schemas.request import RequestCreate, RequestRead
from src.marketplace.services import dispatch_events

router = APIRouter(prefix="/requests", tags=["requests"])


@router.post(
    "",
    response_model=RequestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create request",
    description="Post a new service request. It stays in pending_review until moderated.",
    responses={
        201: {"description": "Request created, awaiting moderation"},
        403: {"description": "Only clients can post requests"},
        422: {"description": "Missing title/description or invalid budget"},
    },
)
async def create_request(
    body: RequestCreate,
    actor: CurrentActor,
    service: RequestServiceDep,
    background_tasks: BackgroundTasks,
) -> RequestRead:
    outcome = await service.create(actor, **body.model_dump())
    background_tasks.add_task(dispatch_events, outcome.events)
    return RequestRead.model_validate(outcome.value)


@router.get(
    "",
    response_model=PaginatedResponse[RequestRead],
    summary="List open requests",
    description="Public board of requests accepting bids, newest first.",
)
async def list_open_requests(
    actor: CurrentActor,
    service: RequestServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[RequestRead]:
    requests, next_cursor, has_more = await service.list_open(actor, cursor=cursor, limit=limit)
    return PaginatedResponse(
        items=[RequestRead.model_validate(r) for r in requests],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get(
    "/mine",
    response_model=list[RequestRead],
    summary="List my requests",
    description="All requests posted by the calling client, in any status.",
)
async def list_my_requests(actor: CurrentActor, service: RequestServiceDep) -> list[RequestRead]:
    return [RequestRead.model_validate(r) for r in await service.list_mine(actor)]


@router.get(
    "/{request_id}",
    response_model=RequestRead,
    summary="Get request",
    responses={
        200: {"description": "Request details"},
        404: {"description": "Request not found or not visible to the caller"},
    },
)
async def get_request(
    request_id: int,
    actor: CurrentActor,
    service: RequestServiceDep,
) -> RequestRead:
    return RequestRead.model_validate(await service.get(actor, request_id))


@router.post(
    "/{request_id}/cancel",
    response_model=RequestRead,
    summary="Cancel request",
    description="Cancel a request that has not finished. Pending bids are rejected.",
    responses={
        200: {"description": "Request cancelled"},
        403: {"description": "Caller is not the owner or an admin"},
        409: {"description": "Request already completed, rejected or cancelled"},
    },
)
async def cancel_request(
    request_id: int,
    actor: CurrentActor,
    service: RequestServiceDep,
    background_tasks: BackgroundTasks,
) -> RequestRead:
    outcome = await service.cancel(actor, request_id)
    background_tasks.add_task(dispatch_events, outcome.events)
    return RequestRead.model_validate(outcome.value)
