"""Strongly typed identifiers for Pledge domain entities.

The backend hands out opaque string identifiers; NewType keeps comment,
campaign and user ids from being mixed up.
"""

from typing import NewType

CommentId = NewType("CommentId", str)
CampaignId = NewType("CampaignId", str)
UserId = NewType("UserId", str)
