"""Image generation through the OpenAI Images API."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from core.config import get_settings
from services.ai.exceptions import BoundaryCallFailed
from services.ai.models import ImageRequest


logger = logging.getLogger(__name__)


class OpenAIImageGenerator:
    def __init__(
        self, client: AsyncOpenAI | None = None, model: str | None = None
    ) -> None:
        self._client = client
        self.model = model or get_settings().IMAGE_MODEL

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            api_key = get_settings().OPENAI_API_KEY
            if not api_key:
                raise BoundaryCallFailed("OpenAI API key is not configured")
            self._client = AsyncOpenAI(api_key=api_key)
        return self._client

    async def generate_images(self, request: ImageRequest) -> list[str]:
        """Return one URL per generated image.

        Inline base64 results are returned as data URLs.
        """
        client = self._get_client()
        try:
            response = await client.images.generate(
                model=self.model,
                prompt=request.prompt,
                size=request.size,  # type: ignore[arg-type]
                quality=request.quality,  # type: ignore[arg-type]
                n=request.count,
            )
        except OpenAIError as exc:
            logger.warning(
                "Image generation failed: %s - %s", type(exc).__name__, str(exc)
            )
            raise BoundaryCallFailed("Image generation failed") from exc

        urls: list[str] = []
        for image in response.data or []:
            if image.url:
                urls.append(image.url)
            elif image.b64_json:
                urls.append(f"data:image/png;base64,{image.b64_json}")
        if not urls:
            raise BoundaryCallFailed("Image generation returned no images")
        return urls
