"""OpenRouter chat-completions client for the specialized template models."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import get_settings
from services.ai.exceptions import BoundaryCallFailed
from services.ai.models import ChatCompletionRequest


logger = logging.getLogger(__name__)


class OpenRouterClient:
    """Send one chat-completion request per call to OpenRouter.

    Any transport error, non-2xx status or response without message content
    is reported as `BoundaryCallFailed` so the caller can fall back.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        app_title: str | None = None,
        referer: str | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.OPENROUTER_API_KEY
        self.base_url = (base_url or settings.OPENROUTER_BASE_URL).rstrip("/")
        self.app_title = app_title or settings.OPENROUTER_APP_TITLE
        self.referer = referer or settings.OPENROUTER_REFERER
        self.timeout = timeout or settings.OPENROUTER_TIMEOUT_SECONDS

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.app_title,
        }

    @staticmethod
    def _payload(request: ChatCompletionRequest) -> dict[str, Any]:
        return {
            "model": request.provider_model_id,
            "messages": [
                {"role": "system", "content": request.system_instruction},
                {"role": "user", "content": request.user_prompt},
            ],
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "top_p": request.top_p,
        }

    async def complete(self, request: ChatCompletionRequest) -> str:
        if not self.api_key:
            raise BoundaryCallFailed("OpenRouter API key is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.endpoint,
                    headers=self._headers(),
                    json=self._payload(request),
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "OpenRouter returned status %s for model %s",
                exc.response.status_code,
                request.provider_model_id,
            )
            raise BoundaryCallFailed(
                f"OpenRouter API error: {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "OpenRouter request failed: %s - %s", type(exc).__name__, str(exc)
            )
            raise BoundaryCallFailed("OpenRouter request failed") from exc
        except ValueError as exc:
            raise BoundaryCallFailed("OpenRouter returned invalid JSON") from exc

        return _extract_content(payload)


def _extract_content(payload: Any) -> str:
    """Return `choices[0].message.content`, rejecting missing or empty text."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise BoundaryCallFailed("OpenRouter response has no message content") from exc
    if not isinstance(content, str) or not content.strip():
        raise BoundaryCallFailed("OpenRouter response has no message content")
    return content
