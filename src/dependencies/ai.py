"""FastAPI dependencies wiring the AI services to their external boundaries.

Each provider builds its service from the configured clients. Tests override
these with `app.dependency_overrides` to inject stub boundaries.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from services.ai.image_orchestrator import ImageOrchestrator
from services.ai.images import OpenAIImageGenerator
from services.ai.openrouter import OpenRouterClient
from services.ai.orchestrator import GenerationOrchestrator
from services.ai.standard import StandardTextGenerator
from services.insights import AudienceInsightsService


@lru_cache
def get_standard_generator() -> StandardTextGenerator:
    return StandardTextGenerator()


def get_orchestrator() -> GenerationOrchestrator:
    return GenerationOrchestrator(
        primary=OpenRouterClient(),
        standard=get_standard_generator(),
    )


def get_image_orchestrator() -> ImageOrchestrator:
    return ImageOrchestrator(images=OpenAIImageGenerator())


def get_insights_service() -> AudienceInsightsService:
    return AudienceInsightsService(standard=get_standard_generator())


Orchestrator = Annotated[GenerationOrchestrator, Depends(get_orchestrator)]
Images = Annotated[ImageOrchestrator, Depends(get_image_orchestrator)]
Insights = Annotated[AudienceInsightsService, Depends(get_insights_service)]
