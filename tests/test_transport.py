"""Tests for the HTTP transport and the credential/URL checks"""
import httpx
import pytest

from conftest import RecordingHandler, make_settings
from helpdesk_bridge.services.errors import ApiError, TransportError
from helpdesk_bridge.services.transport import post_json, validate_credentials, validate_helpdesk_url


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestPostJson:

    @pytest.mark.asyncio
    async def test_success_decodes_json(self):
        handler = RecordingHandler(httpx.Response(201, json={"id": 7}))
        response = await post_json("https://h.example/api", {"a": 1}, {}, client=_client(handler))
        assert response.status_code == 201
        assert response.data == {"id": 7}

    @pytest.mark.asyncio
    async def test_success_with_bad_json_is_still_success(self):
        handler = RecordingHandler(httpx.Response(200, text="not json"))
        response = await post_json("https://h.example/api", {}, {}, client=_client(handler))
        assert response.data is None
        assert response.body == "not json"

    @pytest.mark.asyncio
    async def test_non_2xx_keeps_raw_body(self):
        handler = RecordingHandler(httpx.Response(302, text="<html>moved</html>"))
        with pytest.raises(ApiError) as exc_info:
            await post_json("https://h.example/api", {}, {}, client=_client(handler))
        assert exc_info.value.status_code == 302
        assert exc_info.value.body == "<html>moved</html>"
        assert exc_info.value.kind == "api_error"

    @pytest.mark.asyncio
    async def test_connection_error_message_preserved(self):
        handler = RecordingHandler(error=httpx.ConnectError("Name or service not known"))
        with pytest.raises(TransportError) as exc_info:
            await post_json("https://h.example/api", {}, {}, client=_client(handler))
        assert exc_info.value.message == "Name or service not known"
        assert isinstance(exc_info.value.original, httpx.ConnectError)


class TestValidateUrl:

    @pytest.mark.parametrize("url", ["https://support.example.com", "http://localhost:8080"])
    def test_valid(self, url):
        assert validate_helpdesk_url(url) is True

    @pytest.mark.parametrize("url", ["", None, "not-a-url", "just text with spaces", "ftp://x.example"])
    def test_invalid(self, url):
        assert validate_helpdesk_url(url) is False


class TestValidateCredentials:

    @pytest.mark.asyncio
    async def test_valid_freescout_credentials(self):
        handler = RecordingHandler(httpx.Response(200, json={"_embedded": {"mailboxes": [{"id": 1, "name": "Support"}]}}))
        assert await validate_credentials(make_settings(), client=_client(handler)) is True
        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/api/mailboxes"
        assert request.headers["X-FreeScout-API-Key"] == "test-api-key"

    @pytest.mark.asyncio
    async def test_libredesk_probe(self):
        handler = RecordingHandler(httpx.Response(200, json={"data": []}))
        settings = make_settings(vendor="libredesk", api_key="k", api_secret="s")
        assert await validate_credentials(settings, client=_client(handler)) is True
        request = handler.requests[0]
        assert request.url.path == "/api/v1/conversations/search"
        assert request.url.params["query"] == "0"
        assert request.headers["Authorization"] == "token k:s"

    @pytest.mark.asyncio
    async def test_invalid_credentials(self):
        handler = RecordingHandler(httpx.Response(401, text="Unauthorized"))
        assert await validate_credentials(make_settings(), client=_client(handler)) is False

    @pytest.mark.asyncio
    async def test_network_error(self):
        handler = RecordingHandler(error=httpx.ConnectError("refused"))
        assert await validate_credentials(make_settings(), client=_client(handler)) is False

    @pytest.mark.asyncio
    async def test_url_not_set(self):
        handler = RecordingHandler()
        assert await validate_credentials(make_settings(base_url=""), client=_client(handler)) is None
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_empty_key(self):
        handler = RecordingHandler()
        assert await validate_credentials(make_settings(api_key=""), client=_client(handler)) is False
        assert handler.requests == []
