"""Races that only a real database with row locks can arbitrate.

These run only when TEST_POSTGRES_URL points at a PostgreSQL database and
are skipped otherwise. SQLite serialises writers and ignores FOR UPDATE, so
the default run covers just the sequential stale-accept case in
test_bid_arbitration.py; a skipped module here means the truly concurrent
single-winner accept went unchecked.
"""

import asyncio

from src.marketplace.core.exceptions import ConflictError
from src.marketplace.models import Bid, BidStatus, RequestStatus, ServiceRequest
from tests.helpers import create_open_request


async def test_concurrent_accepts_have_one_winner(
    session,
    isolated_bid_service,
    request_service,
    moderation_service,
    bid_service,
    client_actor,
    provider_actor,
    second_provider_actor,
    admin_actor,
):
    request = await create_open_request(
        request_service, moderation_service, client_actor, admin_actor
    )
    request_id = request.id
    b1 = (await bid_service.submit(provider_actor, request_id, 100, 3)).value.id
    b2 = (await bid_service.submit(second_provider_actor, request_id, 90, 2)).value.id

    async def accept(bid_id: int):
        async with isolated_bid_service() as service:
            return await service.accept(client_actor, bid_id)

    results = await asyncio.gather(accept(b1), accept(b2), return_exceptions=True)

    winners = [r for r in results if not isinstance(r, BaseException)]
    losers = [r for r in results if isinstance(r, BaseException)]
    assert len(winners) == 1
    assert len(losers) == 1
    assert isinstance(losers[0], ConflictError)

    winner = winners[0].value
    reloaded = await session.get(ServiceRequest, request_id, populate_existing=True)
    assert reloaded.status is RequestStatus.IN_PROGRESS
    assert reloaded.accepted_bid_id == winner.id
    assert reloaded.assigned_provider_id == winner.provider_id

    statuses = {
        bid_id: (await session.get(Bid, bid_id, populate_existing=True)).status
        for bid_id in (b1, b2)
    }
    assert sorted(s.value for s in statuses.values()) == ["accepted", "rejected"]


async def test_concurrent_duplicate_bids_keep_one(
    isolated_bid_service,
    request_service,
    moderation_service,
    bid_service,
    client_actor,
    provider_actor,
    admin_actor,
):
    request = await create_open_request(
        request_service, moderation_service, client_actor, admin_actor
    )
    request_id = request.id

    async def submit(price: int):
        async with isolated_bid_service() as service:
            return await service.submit(provider_actor, request_id, price, 3)

    results = await asyncio.gather(submit(100), submit(95), return_exceptions=True)

    assert sum(1 for r in results if isinstance(r, ConflictError)) == 1
    bids = await bid_service.bid_repo.list_by_request(request_id)
    assert len(bids) == 1
    assert bids[0].status is BidStatus.PENDING
