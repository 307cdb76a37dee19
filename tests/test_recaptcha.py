import json

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from app.core.config import settings
from app.services.recaptcha import verify_recaptcha, verify_with_provider


# ------------------------------------------------------------
# RELAY ENDPOINT
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_relay_requires_token(client):
    res = await client.post("/api/verify-recaptcha", json={})

    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Token is required"}


@pytest.mark.asyncio
async def test_relay_rejects_empty_token(client):
    with patch("app.api.endpoints.recaptcha.verify_with_provider", new_callable=AsyncMock) as mock_verify:
        res = await client.post("/api/verify-recaptcha", json={"token": ""})

    assert res.status_code == 400
    mock_verify.assert_not_called()


@pytest.mark.asyncio
async def test_relay_unparseable_body_returns_500(client):
    with patch("app.api.endpoints.recaptcha.verify_with_provider", new_callable=AsyncMock) as mock_verify:
        res = await client.post(
            "/api/verify-recaptcha",
            content=b"token=abc",
            headers={"Content-Type": "application/json"},
        )

    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Internal server error"}
    mock_verify.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"token": 123}, {"token": ["abc"]}, ["abc"], "abc"])
async def test_relay_wrong_body_shape_is_missing_token(client, body):
    with patch("app.api.endpoints.recaptcha.verify_with_provider", new_callable=AsyncMock) as mock_verify:
        res = await client.post("/api/verify-recaptcha", json=body)

    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Token is required"}
    mock_verify.assert_not_called()

@pytest.mark.asyncio
async def test_relay_provider_failure_returns_500(client):
    with patch(
        "app.api.endpoints.recaptcha.verify_with_provider",
        new_callable=AsyncMock,
        side_effect=httpx.ConnectError("provider unreachable"),
    ):
        res = await client.post("/api/verify-recaptcha", json={"token": "abc"})

    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Internal server error"}


@pytest.mark.asyncio
async def test_relay_passes_verdict_through(client):
    verdict = {"success": True, "challenge_ts": "2024-07-01T09:30:00Z", "hostname": "forms.example.org"}

    with patch("app.api.endpoints.recaptcha.verify_with_provider", new_callable=AsyncMock) as mock_verify:
        mock_verify.return_value = verdict
        res = await client.post("/api/verify-recaptcha", json={"token": "valid"})

    assert res.status_code == 200
    assert res.json() == verdict
    assert mock_verify.call_args[0][0] == "valid"


@pytest.mark.asyncio
async def test_relay_negative_verdict_is_still_200(client):
    verdict = {"success": False, "error-codes": ["invalid-input-response"]}

    with patch("app.api.endpoints.recaptcha.verify_with_provider", new_callable=AsyncMock, return_value=verdict):
        res = await client.post("/api/verify-recaptcha", json={"token": "expired"})

    assert res.status_code == 200
    assert res.json() == verdict


# ------------------------------------------------------------
# PROVIDER CALL
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_provider_call_is_form_encoded_with_secret():
    url = settings.RECAPTCHA_VERIFY_URL
    response = httpx.Response(200, json={"success": True}, request=httpx.Request("POST", url))

    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock, return_value=response) as mock_post:
        verdict = await verify_with_provider("tok-1", "10.0.0.7")

    assert verdict == {"success": True}
    args, kwargs = mock_post.call_args
    assert args[0] == url
    assert kwargs["data"] == {
        "secret": "test-secret-key",
        "response": "tok-1",
        "remoteip": "10.0.0.7",
    }


@pytest.mark.asyncio
async def test_provider_non_json_response_raises():
    url = settings.RECAPTCHA_VERIFY_URL
    response = httpx.Response(502, text="<html>Bad Gateway</html>", request=httpx.Request("POST", url))

    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock, return_value=response):
        with pytest.raises(ValueError):
            await verify_with_provider("tok-1")


@pytest.mark.asyncio
async def test_debug_bypass_token(monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", True)

    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        verdict = await verify_with_provider("development-token-bypass")

    assert verdict == {"success": True}
    mock_post.assert_not_called()


# ------------------------------------------------------------
# VERIFICATION CLIENT
# ------------------------------------------------------------
def relay_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://relay.test")


@pytest.mark.asyncio
async def test_client_true_only_for_literal_success():
    sent = []

    def handler(request):
        sent.append(request)
        return httpx.Response(200, json={"success": True})

    async with relay_client(handler) as client:
        assert await verify_recaptcha(client, "tok") is True

    assert sent[0].url.path == "/api/verify-recaptcha"
    assert sent[0].headers["content-type"] == "application/json"
    assert json.loads(sent[0].content) == {"token": "tok"}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {"success": False},
    {"success": "true"},
    {"success": 1},
    {},
    ["success"],
])
async def test_client_false_for_anything_else(body):
    async with relay_client(lambda request: httpx.Response(200, json=body)) as client:
        assert await verify_recaptcha(client, "tok") is False


@pytest.mark.asyncio
async def test_client_false_on_error_status():
    body = {"success": False, "error": "Internal server error"}
    async with relay_client(lambda request: httpx.Response(500, json=body)) as client:
        assert await verify_recaptcha(client, "tok") is False


@pytest.mark.asyncio
async def test_client_false_on_unparseable_body():
    async with relay_client(lambda request: httpx.Response(200, text="not json")) as client:
        assert await verify_recaptcha(client, "tok") is False


@pytest.mark.asyncio
async def test_client_false_on_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with relay_client(handler) as client:
        assert await verify_recaptcha(client, "tok") is False
