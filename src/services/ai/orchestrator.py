"""Generation orchestrator: model selection, prompt building and fallback.

A generation request runs through an explicit state machine
(`PRIMARY -> FALLBACK -> DONE | FAILED`). The specialized model is tried
once; on any boundary failure the same prompt goes once to the standard
model, and a second failure ends the request with `GenerationFailed`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from core.config import get_settings
from services.ai.catalog import (
    MODEL_CATALOG,
    STANDARD_MODEL_KEY,
    ModelDescriptor,
    find_model,
    get_model,
)
from services.ai.categories import TemplateCategory, UserFieldValues
from services.ai.exceptions import BoundaryCallFailed, GenerationFailed, ModelNotFound
from services.ai.interfaces import ChatCompletionBoundary, StandardTextBoundary
from services.ai.models import (
    ChatCompletionRequest,
    GeneratedArtifact,
    GenerationOptions,
    GenerationStage,
    ModelResult,
)
from services.ai.prompts import (
    build_enhancement_prompt,
    build_generation_prompt,
    build_system_instruction,
    build_variation_prompt,
)
from services.ai.router import select_model


logger = logging.getLogger(__name__)

ENHANCEMENT_MAX_TOKENS = 500
VARIATION_MAX_TOKENS = 1500


class GenerationOrchestrator:
    def __init__(
        self,
        primary: ChatCompletionBoundary,
        standard: StandardTextBoundary,
        catalog: Sequence[ModelDescriptor] = MODEL_CATALOG,
    ) -> None:
        settings = get_settings()
        self.primary = primary
        self.standard = standard
        self.catalog = catalog
        self.max_tokens = settings.GENERATION_MAX_TOKENS
        self.comparison_max_tokens = settings.COMPARISON_MAX_TOKENS
        self.temperature = settings.GENERATION_TEMPERATURE
        self.top_p = settings.GENERATION_TOP_P

    def resolve_model(
        self, category: TemplateCategory, explicit_model_key: str | None = None
    ) -> ModelDescriptor:
        """Explicitly requested model if it exists, automatic selection otherwise."""
        if explicit_model_key:
            try:
                return get_model(explicit_model_key, self.catalog)
            except ModelNotFound as exc:
                logger.info("%s; selecting automatically", exc.message)
        return select_model(category.value, catalog=self.catalog)

    def _completion_request(
        self,
        model: ModelDescriptor,
        category: TemplateCategory,
        prompt: str,
        max_tokens: int,
    ) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            provider_model_id=model.provider_model_id,
            system_instruction=build_system_instruction(model, category),
            user_prompt=prompt,
            max_tokens=max_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
        )

    async def enhance_prompt(self, prompt: str) -> str:
        """Rewrite a prompt to be more detailed; keep it unchanged on failure."""
        try:
            return await self.standard.generate_text(
                build_enhancement_prompt(prompt), ENHANCEMENT_MAX_TOKENS
            )
        except BoundaryCallFailed as exc:
            logger.warning("Prompt enhancement failed, using original: %s", exc.message)
            return prompt

    async def generate(
        self,
        category: TemplateCategory,
        fields: UserFieldValues,
        options: GenerationOptions | None = None,
    ) -> GeneratedArtifact:
        """Generate a template for a category from the user's field values.

        Raises:
            GenerationFailed: If the fallback call fails as well.
        """
        options = options or GenerationOptions()
        max_tokens = options.max_tokens or self.max_tokens

        model: ModelDescriptor | None = None
        stage = GenerationStage.FALLBACK
        if options.use_advanced_model:
            model = self.resolve_model(category, options.explicit_model_key)
            stage = GenerationStage.PRIMARY

        prompt = build_generation_prompt(category, fields)
        if options.enhance_prompt:
            prompt = await self.enhance_prompt(prompt)

        content = ""
        last_error: BoundaryCallFailed | None = None
        while stage not in (GenerationStage.DONE, GenerationStage.FAILED):
            if stage is GenerationStage.PRIMARY and model is not None:
                try:
                    content = await self.primary.complete(
                        self._completion_request(model, category, prompt, max_tokens)
                    )
                    stage = GenerationStage.DONE
                except BoundaryCallFailed as exc:
                    logger.warning(
                        "Primary generation with %s failed: %s", model.key, exc.message
                    )
                    stage = GenerationStage.FALLBACK
            else:
                try:
                    content = await self.standard.generate_text(prompt, max_tokens)
                    model = None
                    stage = GenerationStage.DONE
                except BoundaryCallFailed as exc:
                    last_error = exc
                    stage = GenerationStage.FAILED

        if stage is GenerationStage.FAILED:
            logger.error("Generation failed for category %s", category.value)
            raise GenerationFailed() from last_error

        logger.info(
            "Generated %s template (%d chars) with %s",
            category.value,
            len(content),
            model.key if model else STANDARD_MODEL_KEY,
        )
        return GeneratedArtifact(
            content=content,
            model_key_used=model.key if model else STANDARD_MODEL_KEY,
            category=category,
            used_fallback=model is None,
        )

    async def generate_with_models(
        self,
        prompt: str,
        category: TemplateCategory,
        model_keys: Sequence[str] = (),
    ) -> list[ModelResult]:
        """Run one prompt on several models concurrently.

        Each requested key gets its own call, duplicates included. Unknown
        keys are ignored and an empty key list means the recommended
        model. Failed calls are dropped; the result is empty if all fail.
        """
        if model_keys:
            models = [
                model
                for key in model_keys
                if (model := find_model(key, self.catalog)) is not None
            ]
        else:
            models = [select_model(category.value, catalog=self.catalog)]

        async def _run(model: ModelDescriptor) -> ModelResult:
            content = await self.primary.complete(
                self._completion_request(
                    model, category, prompt, self.comparison_max_tokens
                )
            )
            return ModelResult(model_key=model.key, content=content)

        outcomes = await asyncio.gather(
            *(_run(model) for model in models), return_exceptions=True
        )

        results: list[ModelResult] = []
        for model, outcome in zip(models, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.warning(
                    "Comparison call with %s failed: %s", model.key, outcome
                )
                continue
            results.append(outcome)
        return results

    async def generate_variation(self, content: str) -> str:
        """Reword a generated template, keeping its placeholders.

        Raises:
            GenerationFailed: If the standard model call fails.
        """
        try:
            return await self.standard.generate_text(
                build_variation_prompt(content), VARIATION_MAX_TOKENS
            )
        except BoundaryCallFailed as exc:
            raise GenerationFailed("Template variation failed") from exc
