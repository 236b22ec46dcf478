"""Tests for the backend HTTP client and its error mapping."""

import sys

import httpx
import pytest

sys.path.append("src")

from flit.exceptions import (
    ApiError,
    ForbiddenError,
    NetworkError,
    ServerError,
    UnauthorizedError,
)
from flit.services import ApiClient, handle_api_error


def client_for(handler, **kwargs):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test/api")
    return ApiClient(client=http, **kwargs)


def respond(status_code, json=None):
    def handler(request):
        return httpx.Response(status_code, json=json)

    return handler


class TestErrorMapping:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code, error_type",
        [
            (401, UnauthorizedError),
            (403, ForbiddenError),
            (404, ApiError),
            (409, ApiError),
            (422, ApiError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    async def test_status_maps_to_error_with_server_message(self, status_code, error_type):
        client = client_for(respond(status_code, {"message": "League is full"}))

        with pytest.raises(error_type) as exc_info:
            await client.get("/fantasy-leagues")

        assert exc_info.value.message == "League is full"
        assert exc_info.value.status_code == status_code

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code, message",
        [
            (401, "Unauthorized"),
            (404, "Resource not found"),
            (418, "Request failed with status 418"),
            (500, "Server error - please try again later"),
        ],
    )
    async def test_fallback_messages(self, status_code, message):
        client = client_for(respond(status_code))

        with pytest.raises(ApiError, match=message):
            await client.post("/fantasy-leagues", json={})

    @pytest.mark.asyncio
    async def test_transport_failure_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = client_for(handler)

        with pytest.raises(NetworkError) as exc_info:
            await client.get("/fantasy-leagues")

        assert exc_info.value.message == "Network error - please check your connection"

    def test_handle_api_error_passes_api_errors_through(self):
        error = ForbiddenError("Forbidden", 403)

        assert handle_api_error(error) is error

    def test_handle_api_error_wraps_anything_else(self):
        error = handle_api_error(RuntimeError())

        assert type(error) is ApiError
        assert error.message == "An unexpected error occurred"


class TestRequests:
    @pytest.mark.asyncio
    async def test_get_or_none_maps_404(self):
        client = client_for(respond(404, {"message": "League with identifier 'x' not found"}))

        assert await client.get_or_none("/fantasy-leagues/x") is None

    @pytest.mark.asyncio
    async def test_get_or_none_raises_other_errors(self):
        client = client_for(respond(500))

        with pytest.raises(ServerError):
            await client.get_or_none("/fantasy-leagues/x")

    @pytest.mark.asyncio
    async def test_empty_response_is_none(self):
        client = client_for(respond(204))

        assert await client.post("/fantasy-leagues/league_2/start", json={"userId": "user_1"}) is None

    @pytest.mark.asyncio
    async def test_none_params_are_dropped(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            return httpx.Response(200, json=[])

        client = client_for(handler)
        await client.get("/fantasy-leagues", params={"userId": None, "search": "app"})

        assert seen["url"].path == "/api/fantasy-leagues"
        assert dict(seen["url"].params) == {"search": "app"}

    @pytest.mark.asyncio
    async def test_no_auth_header_without_token(self):
        seen = {}

        def handler(request):
            seen["headers"] = request.headers
            return httpx.Response(200, json={})

        await client_for(handler).get("/health")
        assert "authorization" not in seen["headers"]

        await client_for(handler, token_provider=lambda: "abc123").get("/health")
        assert seen["headers"]["authorization"] == "Bearer abc123"

    @pytest.mark.asyncio
    async def test_owned_client_uses_settings(self, monkeypatch):
        monkeypatch.setenv("FLIT_API_BASE_URL", "https://fantasy.example.com/api/")

        async with ApiClient() as client:
            assert client.base_url == "https://fantasy.example.com/api"
            assert str(client._client.base_url) == "https://fantasy.example.com/api/"
