"""Factory for the standard text model used outside the specialized catalog.

The standard model backs the generation fallback, prompt enhancement,
template variations and insight summaries. It is served by Gemini or Azure
OpenAI depending on `LLM_PROVIDER`.

Usage:
    from services.ai.model_factory import get_text_model

    model = get_text_model()  # Returns pydantic-ai Model
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.openai import OpenAIProvider

from core.config import get_settings


if TYPE_CHECKING:
    from httpx import AsyncClient

logger = logging.getLogger(__name__)


def _normalize_azure_endpoint(endpoint: str) -> str:
    """Drop trailing slashes, which make Azure build `//openai/...` URLs."""
    return endpoint.rstrip("/")


def _is_azure_provider() -> bool:
    return get_settings().LLM_PROVIDER == "azure_openai"


def _validate_azure_credentials() -> bool:
    """Validate that Azure OpenAI credentials are properly configured."""
    settings = get_settings()
    if (
        not settings.AZURE_OPENAI_ENDPOINT
        or not settings.AZURE_OPENAI_API_KEY
        or not settings.AZURE_OPENAI_API_VERSION
    ):
        logger.warning(
            "LLM_PROVIDER=azure_openai but credentials missing, falling back to Gemini"
        )
        return False
    return True


def _validate_gemini_credentials() -> bool:
    if not get_settings().GEMINI_API_KEY:
        logger.warning("Gemini API key not configured")
        return False
    return True


def _create_azure_model(
    model_name: str,
    http_client: AsyncClient | None = None,
) -> Model:
    settings = get_settings()

    from openai import AsyncAzureOpenAI

    azure_client = AsyncAzureOpenAI(
        azure_endpoint=_normalize_azure_endpoint(settings.AZURE_OPENAI_ENDPOINT or ""),
        api_key=settings.AZURE_OPENAI_API_KEY,
        api_version=settings.AZURE_OPENAI_API_VERSION,
        http_client=http_client,
    )
    return OpenAIChatModel(
        model_name, provider=OpenAIProvider(openai_client=azure_client)
    )


def _create_gemini_model(
    model_name: str,
    http_client: AsyncClient | None = None,
) -> Model:
    settings = get_settings()
    provider = GoogleProvider(
        api_key=settings.GEMINI_API_KEY,
        http_client=http_client,
    )
    return cast(Model, GoogleModel(model_name, provider=provider))


def get_text_model(http_client: AsyncClient | None = None) -> Model:
    """Get the standard text model based on configuration.

    Args:
        http_client: Optional HTTP client for custom retry logic.

    Returns:
        A pydantic-ai Model configured for the selected provider.

    Raises:
        ValueError: If neither Azure OpenAI nor Gemini credentials are set.
    """
    settings = get_settings()

    if _is_azure_provider() and _validate_azure_credentials():
        logger.info(f"Using Azure OpenAI text model: {settings.TEXT_MODEL}")
        return _create_azure_model(settings.TEXT_MODEL, http_client)

    if not _validate_gemini_credentials():
        raise ValueError(
            "No valid LLM provider configured. Either set Azure OpenAI "
            "credentials (AZURE_OPENAI_ENDPOINT + AZURE_OPENAI_API_KEY) "
            "or Gemini credentials (GEMINI_API_KEY)."
        )

    logger.info(f"Using Gemini text model: {settings.TEXT_MODEL}")
    return _create_gemini_model(settings.TEXT_MODEL, http_client)
