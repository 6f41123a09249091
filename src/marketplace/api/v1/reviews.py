"""Review endpoints and the rating projection."""

from fastapi import APIRouter, BackgroundTasks, status

from src.marketplace.api.dependencies import CurrentActor, ReviewServiceDep
from src.marketplace.schemas.review import RatingRead, ReviewCreate, ReviewRead
from src.marketplace.services import dispatch_events

router = APIRouter(tags=["reviews"])


@router.post(
    "/requests/{request_id}/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit review",
    description="Review the other party of a completed request. One review per party.",
    responses={
        201: {"description": "Review recorded"},
        403: {"description": "Caller is not a party to the request"},
        409: {"description": "Already reviewed, or request not completed"},
        422: {"description": "Rating outside 1-5 or wrong counterpart/direction"},
    },
)
async def submit_review(
    request_id: int,
    body: ReviewCreate,
    actor: CurrentActor,
    service: ReviewServiceDep,
    background_tasks: BackgroundTasks,
) -> ReviewRead:
    outcome = await service.submit(
        actor,
        request_id,
        reviewed_id=body.reviewed_id,
        rating=body.rating,
        comment=body.comment,
        direction=body.direction,
    )
    background_tasks.add_task(dispatch_events, outcome.events)
    return ReviewRead.model_validate(outcome.value)


@router.get(
    "/users/{user_id}/rating",
    response_model=RatingRead,
    summary="Get user rating",
    description="Mean of all ratings the user received; null when unreviewed.",
)
async def get_rating(
    user_id: int,
    _actor: CurrentActor,
    service: ReviewServiceDep,
) -> RatingRead:
    return RatingRead.model_validate(await service.rating_summary(user_id))
