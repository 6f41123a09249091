"""Request lifecycle transition table.

pending_review -> open -> in_progress -> completed
pending_review -> rejected
any non-terminal -> cancelled
"""

from src.marketplace.core.exceptions import InvalidStateError
from src.marketplace.models.enums import RequestStatus

TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING_REVIEW: frozenset(
        {RequestStatus.OPEN, RequestStatus.REJECTED, RequestStatus.CANCELLED}
    ),
    RequestStatus.OPEN: frozenset({RequestStatus.IN_PROGRESS, RequestStatus.CANCELLED}),
    RequestStatus.IN_PROGRESS: frozenset({RequestStatus.COMPLETED, RequestStatus.CANCELLED}),
    RequestStatus.COMPLETED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
}

_missing = set(RequestStatus) - set(TRANSITIONS)
if _missing:
    raise RuntimeError(f"Lifecycle transitions undefined for: {sorted(s.value for s in _missing)}")

TERMINAL_STATUSES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)


def can_transition(current: RequestStatus, target: RequestStatus) -> bool:
    return target in TRANSITIONS[current]


def ensure_transition(current: RequestStatus, target: RequestStatus) -> None:
    """Raise InvalidStateError unless current -> target is an edge of the graph."""
    if not can_transition(current, target):
        raise InvalidStateError(
            f"Cannot move request from '{current.value}' to '{target.value}'"
        )


def is_terminal(status: RequestStatus) -> bool:
    return status in TERMINAL_STATUSES
