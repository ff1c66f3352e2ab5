"""Domain value objects for Pledge."""

from pledge.domain.value.identifiers import CampaignId, CommentId, UserId
from pledge.domain.value.types import Notification, NotificationVariant

__all__ = [
    # Identifiers
    "CampaignId",
    "CommentId",
    "UserId",
    # Types
    "Notification",
    "NotificationVariant",
]
