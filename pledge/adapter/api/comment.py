"""HTTP implementation of the comment repository.

Talks to the crowdfunding backend's REST API. Every response is wrapped in
an envelope::

    {"success": true, "message": "...", "data": {...}}

Listings carry ``data.comments`` or ``data.replies`` plus
``data.pagination``; create and update return ``data.comment``.
"""

from typing import Any, Optional

import httpx
import logfire
from pydantic import ValidationError as PydanticValidationError

from pledge.adapter.error import ApiError
from pledge.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from pledge.domain.model.comment import CommentNode
from pledge.domain.model.page import CommentPage
from pledge.domain.repository.comment import CommentRepository
from pledge.domain.value import CampaignId, CommentId


def build_client(
    base_url: str,
    token: str | None = None,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared HTTP client for the comments API.

    Args:
        base_url: Backend base URL
        token: Bearer token of the signed-in user, if any
        timeout: Request timeout in seconds
        transport: Transport override, tests plug in httpx.MockTransport

    Returns:
        Configured async client (caller owns closing it)
    """
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=base_url, headers=headers, timeout=timeout, transport=transport
    )


class HttpCommentRepository(CommentRepository):
    """Comment repository backed by the remote REST API."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize HTTP comment repository.

        Args:
            client: HTTP client with base URL and auth headers configured
        """
        self.client = client

    async def _request(
        self,
        method: str,
        url: str,
        resource: tuple[str, str],
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send a request and unwrap the response envelope.

        Args:
            method: HTTP method
            url: Path relative to the client's base URL
            resource: (resource name, identifier) used in error messages

        Returns:
            The decoded envelope

        Raises:
            ValidationError: 400/422 responses
            NotAuthorizedError: 401/403 responses
            NotFoundError: 404 responses
            ApiError: Transport failures, other error statuses, bad payloads
        """
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logfire.error(
                "Comments API transport error", method=method, url=url, error=str(e)
            )
            raise ApiError(f"HTTP error during {method} {url}: {e}") from e

        if response.is_error:
            message = self._error_message(response)
            logfire.warn(
                "Comments API request failed",
                method=method,
                url=url,
                status_code=response.status_code,
                error=message,
            )
            status = response.status_code
            if status in (400, 422):
                raise ValidationError(message)
            if status in (401, 403):
                raise NotAuthorizedError(*resource, detail=message)
            if status == 404:
                raise NotFoundError(*resource)
            raise ApiError(message, status_code=status)

        if not response.content:
            return {"success": True}

        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(
                "Malformed response from comments API",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict) or not body.get("success", False):
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(
                message or "Request failed",
                status_code=response.status_code,
            )
        return body

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            message = response.json().get("message")
        except (ValueError, AttributeError):
            message = None
        return message or response.reason_phrase or "Request failed"

    @staticmethod
    def _page(body: dict[str, Any], key: str) -> CommentPage:
        data = body.get("data") or {}
        try:
            return CommentPage.model_validate(
                {"items": data.get(key) or [], "pagination": data.get("pagination") or {}}
            )
        except PydanticValidationError as e:
            raise ApiError(f"Malformed {key} page: {e}") from e

    @staticmethod
    def _comment(body: dict[str, Any]) -> CommentNode:
        data = body.get("data") or {}
        try:
            return CommentNode.model_validate(data["comment"])
        except (KeyError, TypeError, PydanticValidationError) as e:
            raise ApiError(f"Malformed comment in response: {e}") from e

    async def list_comments(
        self, campaign_id: CampaignId, page: int = 1, limit: int = 10
    ) -> CommentPage:
        """Fetch one page of top-level comments."""
        body = await self._request(
            "GET",
            f"/api/comments/campaign/{campaign_id}",
            ("campaign", campaign_id),
            params={"page": page, "limit": limit},
        )
        return self._page(body, "comments")

    async def list_replies(
        self, comment_id: CommentId, page: int = 1, limit: int = 50
    ) -> CommentPage:
        """Fetch one page of direct replies."""
        body = await self._request(
            "GET",
            f"/api/comments/{comment_id}/replies",
            ("comment", comment_id),
            params={"page": page, "limit": limit},
        )
        return self._page(body, "replies")

    async def create(
        self,
        campaign_id: CampaignId,
        content: str,
        parent_id: Optional[CommentId] = None,
    ) -> CommentNode:
        """Post a new comment or reply."""
        payload: dict[str, Any] = {"campaignId": campaign_id, "content": content}
        if parent_id:
            payload["parentId"] = parent_id
        body = await self._request(
            "POST",
            "/api/comments",
            ("comment", parent_id or campaign_id),
            json=payload,
        )
        return self._comment(body)

    async def update(self, comment_id: CommentId, content: str) -> CommentNode:
        """Replace a comment's text."""
        body = await self._request(
            "PUT",
            f"/api/comments/{comment_id}",
            ("comment", comment_id),
            json={"content": content},
        )
        return self._comment(body)

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        await self._request(
            "DELETE", f"/api/comments/{comment_id}", ("comment", comment_id)
        )
