"""Comment thread state owned by a single view."""

from pledge.domain.tree import Tree
from pledge.domain.value import CampaignId


class ThreadState:
    """The comments a view has fetched, plus top-level pagination.

    ``comments`` is only ever replaced wholesale with the result of a
    function from ``pledge.domain.tree``.
    """

    def __init__(self, campaign_id: CampaignId) -> None:
        self.campaign_id = campaign_id
        self.comments: Tree = ()
        self.page = 1
        self.has_more = False
        self.loading = False
