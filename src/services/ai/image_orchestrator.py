"""Preview image generation for design templates."""

from __future__ import annotations

import asyncio
import logging

from core.config import get_settings
from services.ai.categories import UserFieldValues
from services.ai.interfaces import ImageBoundary
from services.ai.models import GeneratedImage, ImageRequest
from services.ai.prompts import build_image_prompts


logger = logging.getLogger(__name__)


class ImageOrchestrator:
    def __init__(
        self,
        images: ImageBoundary,
        size: str | None = None,
        quality: str | None = None,
    ) -> None:
        settings = get_settings()
        self.images = images
        self.size = size or settings.IMAGE_SIZE
        self.quality = quality or settings.IMAGE_QUALITY

    async def _generate_one(self, prompt: str, alt: str) -> GeneratedImage:
        urls = await self.images.generate_images(
            ImageRequest(prompt=prompt, size=self.size, quality=self.quality, count=1)
        )
        return GeneratedImage(url=urls[0], prompt=prompt, alt=alt)

    async def generate_template_images(
        self, fields: UserFieldValues
    ) -> list[GeneratedImage]:
        """Generate one image per styled prompt, concurrently.

        Needs `title` and `style`; returns an empty list without them. Failed
        prompts are skipped.
        """
        prompts = build_image_prompts(fields)
        if not prompts:
            return []

        alt = f"Generated image for {str(fields['title']).strip()}"
        outcomes = await asyncio.gather(
            *(self._generate_one(prompt, alt) for prompt in prompts),
            return_exceptions=True,
        )

        images: list[GeneratedImage] = []
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                logger.warning("Template image generation failed: %s", outcome)
                continue
            images.append(outcome)
        return images
