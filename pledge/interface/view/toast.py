"""Toast queue shown on top of a view."""

import logfire

from pledge.domain.service import Notifier
from pledge.domain.value import Notification


class ToastQueue(Notifier):
    """Collects notifications until the UI displays them."""

    def __init__(self) -> None:
        self._pending: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        logfire.debug(
            "Toast queued",
            title=notification.title,
            variant=notification.variant.value,
        )
        self._pending.append(notification)

    @property
    def pending(self) -> tuple[Notification, ...]:
        return tuple(self._pending)

    @property
    def latest(self) -> Notification | None:
        return self._pending[-1] if self._pending else None

    def drain(self) -> list[Notification]:
        """Hand over every queued toast and empty the queue."""
        drained, self._pending = self._pending, []
        return drained
