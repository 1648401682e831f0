"""Unit tests for the OpenRouter chat-completions client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from services.ai.exceptions import BoundaryCallFailed
from services.ai.models import ChatCompletionRequest
from services.ai.openrouter import OpenRouterClient, _extract_content


REQUEST = ChatCompletionRequest(
    provider_model_id="mistralai/mistral-small-3.2-24b-instruct:free",
    system_instruction="You are an expert email template creator.",
    user_prompt="Create an email",
    max_tokens=2000,
)


def _client() -> OpenRouterClient:
    return OpenRouterClient(
        api_key="test-key",
        base_url="https://openrouter.test/api/v1/",
        app_title="Template Creator Tests",
        referer="http://localhost:5173",
        timeout=5.0,
    )


def _response(payload: object) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


class TestExtractContent:
    def test_returns_message_content(self) -> None:
        payload = {"choices": [{"message": {"content": "Hello {{name}}"}}]}
        assert _extract_content(payload) == "Hello {{name}}"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"choices": []},
            {"choices": [{}]},
            {"choices": [{"message": {}}]},
            {"choices": [{"message": {"content": "   "}}]},
            {"choices": [{"message": {"content": None}}]},
            None,
        ],
    )
    def test_rejects_missing_content(self, payload: object) -> None:
        with pytest.raises(BoundaryCallFailed):
            _extract_content(payload)


class TestComplete:
    @pytest.mark.asyncio
    async def test_missing_api_key(self) -> None:
        client = OpenRouterClient(api_key="")
        with pytest.raises(BoundaryCallFailed, match="not configured"):
            await client.complete(REQUEST)

    @pytest.mark.asyncio
    async def test_successful_completion(self) -> None:
        mock_response = _response(
            {"choices": [{"message": {"content": "Dear {{first_name}}"}}]}
        )
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post.return_value = (
                mock_response
            )
            content = await _client().complete(REQUEST)

        assert content == "Dear {{first_name}}"

    @pytest.mark.asyncio
    async def test_request_shape(self) -> None:
        mock_response = _response({"choices": [{"message": {"content": "x"}}]})
        with patch("httpx.AsyncClient") as mock_client:
            post = mock_client.return_value.__aenter__.return_value.post
            post.return_value = mock_response
            await _client().complete(REQUEST)

            args, kwargs = post.call_args

        assert args[0] == "https://openrouter.test/api/v1/chat/completions"
        headers = kwargs["headers"]
        assert headers["Authorization"] == "Bearer test-key"
        assert headers["HTTP-Referer"] == "http://localhost:5173"
        assert headers["X-Title"] == "Template Creator Tests"
        body = kwargs["json"]
        assert body["model"] == REQUEST.provider_model_id
        assert body["messages"] == [
            {"role": "system", "content": REQUEST.system_instruction},
            {"role": "user", "content": REQUEST.user_prompt},
        ]
        assert body["max_tokens"] == 2000
        assert body["temperature"] == 0.7
        assert body["top_p"] == 0.9

    @pytest.mark.asyncio
    async def test_http_status_error(self) -> None:
        request = httpx.Request("POST", "https://openrouter.test/api/v1/chat/completions")
        error_response = httpx.Response(429, request=request)
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "rate limited", request=request, response=error_response
        )
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post.return_value = (
                mock_response
            )
            with pytest.raises(BoundaryCallFailed, match="429"):
                await _client().complete(REQUEST)

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post.side_effect = (
                httpx.ConnectError("Connection failed")
            )
            with pytest.raises(BoundaryCallFailed) as exc_info:
                await _client().complete(REQUEST)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        mock_response = MagicMock()
        mock_response.json.side_effect = ValueError("Invalid JSON")
        mock_response.raise_for_status = MagicMock()
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post.return_value = (
                mock_response
            )
            with pytest.raises(BoundaryCallFailed, match="invalid JSON"):
                await _client().complete(REQUEST)

    @pytest.mark.asyncio
    async def test_empty_content_is_failure(self) -> None:
        mock_response = _response({"choices": [{"message": {"content": ""}}]})
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post.return_value = (
                mock_response
            )
            with pytest.raises(BoundaryCallFailed):
                await _client().complete(REQUEST)
