"""Pure lifecycle rules and outbox event types."""

from src.marketplace.domain.events import NotificationEvent, Outcome
from src.marketplace.domain.lifecycle import (
    TERMINAL_STATUSES,
    TRANSITIONS,
    can_transition,
    ensure_transition,
    is_terminal,
)

__all__ = [
    "NotificationEvent",
    "Outcome",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "can_transition",
    "ensure_transition",
    "is_terminal",
]
