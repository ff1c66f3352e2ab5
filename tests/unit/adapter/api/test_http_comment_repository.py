"""Unit tests for the HTTP comment repository."""

import json

import httpx
import pytest

from pledge.adapter.api import HttpCommentRepository, build_client
from pledge.adapter.error import ApiError
from pledge.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from pledge.domain.value import CampaignId, CommentId


def wire_comment(comment_id: str, content: str = "hi", parent_id: str | None = None):
    return {
        "id": comment_id,
        "campaignId": "camp-1",
        "userId": "u1",
        "content": content,
        "parentId": parent_id,
        "isApproved": True,
        "createdAt": "2026-03-01T10:00:00Z",
        "updatedAt": "2026-03-01T10:00:00Z",
        "replyCount": 0,
        "user": {"id": "u1", "firstName": "Grace", "lastName": "Hopper"},
    }


def pagination(page: int = 1, has_next: bool = False):
    return {
        "page": page,
        "limit": 10,
        "total": 1,
        "totalPages": 1,
        "hasNext": has_next,
        "hasPrev": page > 1,
    }


def repository(handler, token: str | None = None) -> HttpCommentRepository:
    """Repository whose client answers with ``handler``."""
    client = build_client(
        "http://api.test", token=token, transport=httpx.MockTransport(handler)
    )
    return HttpCommentRepository(client)


class TestListing:
    """Tests for list_comments and list_replies."""

    @pytest.mark.asyncio
    async def test_list_comments_sends_pagination_params(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {
                        "comments": [wire_comment("c1")],
                        "pagination": pagination(has_next=True),
                    },
                },
            )

        repo = repository(handler)
        page = await repo.list_comments(CampaignId("camp-1"), page=2, limit=10)

        assert seen["url"].path == "/api/comments/campaign/camp-1"
        assert seen["url"].params["page"] == "2"
        assert seen["url"].params["limit"] == "10"
        assert page.items[0].id == "c1"
        assert page.pagination.has_next

    @pytest.mark.asyncio
    async def test_list_replies(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/comments/c1/replies"
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {
                        "replies": [wire_comment("c2", parent_id="c1")],
                        "pagination": pagination(),
                    },
                },
            )

        page = await repository(handler).list_replies(CommentId("c1"), limit=50)

        assert [r.parent_id for r in page.items] == ["c1"]

    @pytest.mark.asyncio
    async def test_malformed_page_raises_api_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"success": True, "data": {"comments": [{"id": "c1"}]}},
            )

        with pytest.raises(ApiError, match="Malformed"):
            await repository(handler).list_comments(CampaignId("camp-1"))


class TestMutations:
    """Tests for create, update and delete."""

    @pytest.mark.asyncio
    async def test_create_posts_payload_with_auth_header(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                201,
                json={
                    "success": True,
                    "data": {"comment": wire_comment("c9", "nice work", "c1")},
                },
            )

        repo = repository(handler, token="secret")
        created = await repo.create(
            CampaignId("camp-1"), "nice work", parent_id=CommentId("c1")
        )

        assert seen["auth"] == "Bearer secret"
        assert seen["body"] == {
            "campaignId": "camp-1",
            "content": "nice work",
            "parentId": "c1",
        }
        assert created.id == "c9"

    @pytest.mark.asyncio
    async def test_create_top_level_omits_parent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(
                201, json={"success": True, "data": {"comment": wire_comment("c9")}}
            )

        await repository(handler).create(CampaignId("camp-1"), "hello")

        assert "parentId" not in seen["body"]
        assert seen["auth"] is None

    @pytest.mark.asyncio
    async def test_update_returns_server_copy(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PUT"
            assert json.loads(request.content) == {"content": "new text"}
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {"comment": wire_comment("c2", "new text (moderated)")},
                },
            )

        updated = await repository(handler).update(CommentId("c2"), "new text")

        assert updated.content == "new text (moderated)"

    @pytest.mark.asyncio
    async def test_delete_accepts_empty_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "DELETE"
            assert request.url.path == "/api/comments/c3"
            return httpx.Response(204)

        await repository(handler).delete(CommentId("c3"))


class TestErrors:
    """Tests for error mapping."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "error"),
        [
            (400, ValidationError),
            (401, NotAuthorizedError),
            (403, NotAuthorizedError),
            (404, NotFoundError),
            (500, ApiError),
        ],
    )
    async def test_status_codes_map_to_errors(self, status, error):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"message": "nope"})

        with pytest.raises(error):
            await repository(handler).update(CommentId("c1"), "text")

    @pytest.mark.asyncio
    async def test_error_message_comes_from_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"message": "Maintenance window"})

        with pytest.raises(ApiError, match="Maintenance window") as exc_info:
            await repository(handler).delete(CommentId("c1"))
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_error_without_json_uses_reason_phrase(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>bad gateway</html>")

        with pytest.raises(ApiError, match="Bad Gateway"):
            await repository(handler).delete(CommentId("c1"))

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"success": False, "message": "Failed to create comment"}
            )

        with pytest.raises(ApiError, match="Failed to create comment"):
            await repository(handler).create(CampaignId("camp-1"), "hello")

    @pytest.mark.asyncio
    async def test_transport_error_raises_api_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ApiError, match="connection refused"):
            await repository(handler).list_comments(CampaignId("camp-1"))
