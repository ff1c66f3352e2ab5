"""Notification port for user-facing toasts."""

from abc import ABC, abstractmethod

from pledge.domain.value import Notification, NotificationVariant


class Notifier(ABC):
    """Delivers transient notifications to the user."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        pass

    def success(self, title: str, description: str) -> None:
        self.notify(Notification(title=title, description=description))

    def error(self, description: str, title: str = "Error") -> None:
        self.notify(
            Notification(
                title=title,
                description=description,
                variant=NotificationVariant.DESTRUCTIVE,
            )
        )
