"""Notification events returned by state-changing operations (outbox)."""

from dataclasses import dataclass, field

from src.marketplace.models.enums import NotificationType, UserRole


@dataclass(frozen=True)
class NotificationEvent:
    """One user-facing event, addressed to a user or broadcast to a role.

    Exactly one of ``recipient_id`` / ``recipient_role`` is set.
    """

    title: str
    body: str
    type: NotificationType
    ref_id: int | None = None
    recipient_id: int | None = None
    recipient_role: UserRole | None = None

    def __post_init__(self) -> None:
        if (self.recipient_id is None) == (self.recipient_role is None):
            raise ValueError("NotificationEvent needs exactly one of recipient_id/recipient_role")

    @classmethod
    def to_user(
        cls,
        user_id: int,
        title: str,
        body: str,
        type: NotificationType,
        ref_id: int | None = None,
    ) -> "NotificationEvent":
        return cls(title=title, body=body, type=type, ref_id=ref_id, recipient_id=user_id)

    @classmethod
    def to_admins(
        cls,
        title: str,
        body: str,
        type: NotificationType,
        ref_id: int | None = None,
    ) -> "NotificationEvent":
        return cls(
            title=title, body=body, type=type, ref_id=ref_id, recipient_role=UserRole.ADMIN
        )


@dataclass
class Outcome[T]:
    """Result of a state-changing operation plus the events it produced.

    Events are dispatched only after the operation's transaction committed.
    """

    value: T
    events: list[NotificationEvent] = field(default_factory=list)
