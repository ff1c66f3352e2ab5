"""Signed-in user as seen by the presentation layer."""

from typing import Optional

from pledge.domain.model.common import DomainModel
from pledge.domain.value import UserId


class Viewer(DomainModel):
    """The user looking at a comment thread.

    Session handling lives in the backend; the view only needs the id to
    decide which controls to offer and the names for the reply avatar.
    """

    id: UserId
    first_name: str = ""
    last_name: str = ""
    avatar: Optional[str] = None
