"""Domain value objects for Pledge."""

from enum import Enum

from pledge.domain.value.common import ValueObject


class NotificationVariant(str, Enum):
    """Visual weight of a user-facing notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(ValueObject):
    """Transient user-facing notification (a toast)."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT
