"""Bid endpoints - submitting, editing and arbitrating bids."""

from fastapi import APIRouter, BackgroundTasks, status

from src.marketplace.api.dependencies import BidServiceDep, CurrentActor
from src.marketplace.schemas.bid import BidCreate, BidRead, BidUpdate
from src.marketplace.services import dispatch_events

router = APIRouter(tags=["bids"])


@router.get(
    "/requests/{request_id}/bids",
    response_model=list[BidRead],
    summary="List bids on a request",
    description="The owner and admins see every bid; a provider sees only their own.",
)
async def list_bids(
    request_id: int,
    actor: CurrentActor,
    service: BidServiceDep,
) -> list[BidRead]:
    return [BidRead.model_validate(b) for b in await service.list_for_request(actor, request_id)]


@router.post(
    "/requests/{request_id}/bids",
    response_model=BidRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit bid",
    responses={
        201: {"description": "Bid placed"},
        403: {"description": "Only providers can bid"},
        409: {"description": "Duplicate bid or request not open"},
        422: {"description": "Price and days must be positive"},
    },
)
async def submit_bid(
    request_id: int,
    body: BidCreate,
    actor: CurrentActor,
    service: BidServiceDep,
    background_tasks: BackgroundTasks,
) -> BidRead:
    outcome = await service.submit(actor, request_id, body.price, body.days, body.note)
    background_tasks.add_task(dispatch_events, outcome.events)
    return BidRead.model_validate(outcome.value)


@router.patch(
    "/bids/{bid_id}",
    response_model=BidRead,
    summary="Update bid",
    responses={
        200: {"description": "Bid updated"},
        403: {"description": "Caller did not place this bid"},
        409: {"description": "Bid already accepted or rejected"},
    },
)
async def update_bid(
    bid_id: int,
    body: BidUpdate,
    actor: CurrentActor,
    service: BidServiceDep,
) -> BidRead:
    bid = await service.update(actor, bid_id, body.price, body.days, body.note)
    return BidRead.model_validate(bid)


@router.post(
    "/bids/{bid_id}/accept",
    response_model=BidRead,
    summary="Accept bid",
    description="Accept one bid: every other bid is rejected and the request goes in progress.",
    responses={
        200: {"description": "Bid accepted, provider assigned"},
        403: {"description": "Caller is not the request owner or an admin"},
        409: {"description": "Bid no longer pending or request no longer open"},
    },
)
async def accept_bid(
    bid_id: int,
    actor: CurrentActor,
    service: BidServiceDep,
    background_tasks: BackgroundTasks,
) -> BidRead:
    outcome = await service.accept(actor, bid_id)
    background_tasks.add_task(dispatch_events, outcome.events)
    return BidRead.model_validate(outcome.value)


@router.post(
    "/bids/{bid_id}/reject",
    response_model=BidRead,
    summary="Reject bid",
    responses={
        200: {"description": "Bid rejected"},
        403: {"description": "Caller is not the request owner or an admin"},
        409: {"description": "Bid already accepted or rejected"},
    },
)
async def reject_bid(
    bid_id: int,
    actor: CurrentActor,
    service: BidServiceDep,
    background_tasks: BackgroundTasks,
) -> BidRead:
    outcome = await service.reject(actor, bid_id)
    background_tasks.add_task(dispatch_events, outcome.events)
    return BidRead.model_validate(outcome.value)
