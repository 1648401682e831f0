"""Tests for the generation orchestrator."""

from __future__ import annotations

import pytest

from services.ai.catalog import STANDARD_MODEL_KEY, get_model
from services.ai.categories import TemplateCategory
from services.ai.exceptions import GenerationFailed
from services.ai.models import GenerationOptions
from services.ai.orchestrator import (
    ENHANCEMENT_MAX_TOKENS,
    VARIATION_MAX_TOKENS,
    GenerationOrchestrator,
)
from services.ai.prompts import build_prompt


MISTRAL_ID = get_model("mistral-small").provider_model_id
KIMI_DEV_ID = get_model("kimi-dev").provider_model_id
DEEPCODER_ID = get_model("deepcoder").provider_model_id


@pytest.fixture
def orchestrator(fake_primary, fake_standard) -> GenerationOrchestrator:
    return GenerationOrchestrator(primary=fake_primary, standard=fake_standard)


class TestResolveModel:
    def test_explicit_key_wins(self, orchestrator: GenerationOrchestrator) -> None:
        model = orchestrator.resolve_model(TemplateCategory.EMAIL, "deepcoder")
        assert model.key == "deepcoder"

    def test_unknown_key_falls_back_to_selection(
        self, orchestrator: GenerationOrchestrator, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level("INFO")
        model = orchestrator.resolve_model(TemplateCategory.EMAIL, "gpt-99")
        assert model.key == "mistral-small"
        assert "gpt-99" in caplog.text

    def test_no_key_selects_by_category(
        self, orchestrator: GenerationOrchestrator
    ) -> None:
        assert orchestrator.resolve_model(TemplateCategory.WEB).key == "deepcoder"


class TestGenerate:
    @pytest.mark.asyncio
    async def test_primary_success(
        self, orchestrator: GenerationOrchestrator, fake_primary, fake_standard
    ) -> None:
        fake_primary.responses = {MISTRAL_ID: "Hi {{first_name}}"}

        artifact = await orchestrator.generate(
            TemplateCategory.EMAIL, {"subject": "Launch"}
        )

        assert artifact.content == "Hi {{first_name}}"
        assert artifact.model_key_used == "mistral-small"
        assert artifact.category is TemplateCategory.EMAIL
        assert artifact.used_fallback is False
        assert fake_standard.calls == []

    @pytest.mark.asyncio
    async def test_primary_request_shape(
        self, orchestrator: GenerationOrchestrator, fake_primary
    ) -> None:
        fields = {"subject": "Launch", "audience": "Founders"}
        await orchestrator.generate(TemplateCategory.EMAIL, fields)

        (request,) = fake_primary.requests
        assert request.provider_model_id == MISTRAL_ID
        assert request.user_prompt == build_prompt(TemplateCategory.EMAIL, fields)
        assert request.system_instruction.startswith(
            "You are an expert email template creator."
        )
        assert request.max_tokens == 2000
        assert request.temperature == 0.7
        assert request.top_p == 0.9

    @pytest.mark.asyncio
    async def test_fallback_on_primary_failure(
        self, orchestrator: GenerationOrchestrator, fake_primary, fake_standard
    ) -> None:
        fake_primary.failing = {"*"}
        fake_standard.reply = "Fallback {{name}}"

        artifact = await orchestrator.generate(TemplateCategory.DOCUMENTS, {})

        assert len(fake_primary.requests) == 1
        assert len(fake_standard.calls) == 1
        prompt, max_tokens = fake_standard.calls[0]
        assert prompt == build_prompt(TemplateCategory.DOCUMENTS, {})
        assert max_tokens == 2000
        assert artifact.content == "Fallback {{name}}"
        assert artifact.model_key_used == STANDARD_MODEL_KEY
        assert artifact.used_fallback is True

    @pytest.mark.asyncio
    async def test_total_failure_raises(
        self, orchestrator: GenerationOrchestrator, fake_primary, fake_standard
    ) -> None:
        fake_primary.failing = {"*"}
        fake_standard.fail = True

        with pytest.raises(GenerationFailed) as exc_info:
            await orchestrator.generate(TemplateCategory.WEB, {"siteName": "Acme"})

        assert exc_info.value.error_code == "generation_failed"
        assert exc_info.value.__cause__ is not None
        assert len(fake_primary.requests) == 1
        assert len(fake_standard.calls) == 1

    @pytest.mark.asyncio
    async def test_standard_only_when_advanced_disabled(
        self, orchestrator: GenerationOrchestrator, fake_primary, fake_standard
    ) -> None:
        artifact = await orchestrator.generate(
            TemplateCategory.EMAIL,
            {},
            GenerationOptions(use_advanced_model=False),
        )
        assert fake_primary.requests == []
        assert artifact.used_fallback is True

    @pytest.mark.asyncio
    async def test_standard_only_failure_raises(
        self, orchestrator: GenerationOrchestrator, fake_primary, fake_standard
    ) -> None:
        fake_standard.fail = True
        with pytest.raises(GenerationFailed):
            await orchestrator.generate(
                TemplateCategory.EMAIL,
                {},
                GenerationOptions(use_advanced_model=False),
            )
        assert fake_primary.requests == []

    @pytest.mark.asyncio
    async def test_explicit_model_and_token_override(
        self, orchestrator: GenerationOrchestrator, fake_primary
    ) -> None:
        artifact = await orchestrator.generate(
            TemplateCategory.EMAIL,
            {},
            GenerationOptions(explicit_model_key="deepcoder", max_tokens=321),
        )
        assert artifact.model_key_used == "deepcoder"
        assert fake_primary.requests[0].provider_model_id == DEEPCODER_ID
        assert fake_primary.requests[0].max_tokens == 321

    @pytest.mark.asyncio
    async def test_generic_category_uses_generic_prompt(
        self, orchestrator: GenerationOrchestrator, fake_primary
    ) -> None:
        await orchestrator.generate(TemplateCategory.VIDEO, {"title": "Intro"})
        (request,) = fake_primary.requests
        assert "professional video template" in request.user_prompt
        assert "title: Intro" in request.user_prompt

    @pytest.mark.asyncio
    async def test_enhanced_prompt_is_sent(
        self, orchestrator: GenerationOrchestrator, fake_primary, fake_standard
    ) -> None:
        fake_standard.reply = "ENHANCED PROMPT"
        await orchestrator.generate(
            TemplateCategory.EMAIL, {}, GenerationOptions(enhance_prompt=True)
        )
        assert fake_standard.calls[0][1] == ENHANCEMENT_MAX_TOKENS
        assert fake_primary.requests[0].user_prompt == "ENHANCED PROMPT"

    @pytest.mark.asyncio
    async def test_failed_enhancement_keeps_original(
        self, orchestrator: GenerationOrchestrator, fake_primary, fake_standard
    ) -> None:
        fake_standard.fail = True
        artifact = await orchestrator.generate(
            TemplateCategory.EMAIL, {}, GenerationOptions(enhance_prompt=True)
        )
        assert fake_primary.requests[0].user_prompt == build_prompt(
            TemplateCategory.EMAIL, {}
        )
        assert artifact.used_fallback is False


class TestGenerateWithModels:
    @pytest.mark.asyncio
    async def test_one_failure_is_dropped(
        self, orchestrator: GenerationOrchestrator, fake_primary
    ) -> None:
        fake_primary.responses = {MISTRAL_ID: "A", DEEPCODER_ID: "C"}
        fake_primary.failing = {KIMI_DEV_ID}

        results = await orchestrator.generate_with_models(
            "Write a newsletter",
            TemplateCategory.EMAIL,
            ["mistral-small", "kimi-dev", "deepcoder"],
        )

        assert [(r.model_key, r.content) for r in results] == [
            ("mistral-small", "A"),
            ("deepcoder", "C"),
        ]

    @pytest.mark.asyncio
    async def test_uses_comparison_budget(
        self, orchestrator: GenerationOrchestrator, fake_primary
    ) -> None:
        await orchestrator.generate_with_models(
            "p", TemplateCategory.EMAIL, ["mistral-small"]
        )
        assert fake_primary.requests[0].max_tokens == 1500
        assert fake_primary.requests[0].user_prompt == "p"

    @pytest.mark.asyncio
    async def test_all_fail_returns_empty(
        self, orchestrator: GenerationOrchestrator, fake_primary
    ) -> None:
        fake_primary.failing = {"*"}
        results = await orchestrator.generate_with_models(
            "p", TemplateCategory.EMAIL, ["mistral-small", "kimi-dev"]
        )
        assert results == []

    @pytest.mark.asyncio
    async def test_unknown_keys_skipped_and_duplicates_each_run(
        self, orchestrator: GenerationOrchestrator, fake_primary
    ) -> None:
        results = await orchestrator.generate_with_models(
            "p", TemplateCategory.EMAIL, ["deepcoder", "nope", "deepcoder"]
        )
        assert [r.model_key for r in results] == ["deepcoder", "deepcoder"]
        assert [r.provider_model_id for r in fake_primary.requests] == [
            DEEPCODER_ID,
            DEEPCODER_ID,
        ]

    @pytest.mark.asyncio
    async def test_empty_keys_use_recommended_model(
        self, orchestrator: GenerationOrchestrator, fake_primary
    ) -> None:
        results = await orchestrator.generate_with_models("p", TemplateCategory.WEB)
        assert [r.model_key for r in results] == ["deepcoder"]


class TestVariation:
    @pytest.mark.asyncio
    async def test_variation(
        self, orchestrator: GenerationOrchestrator, fake_standard
    ) -> None:
        fake_standard.reply = "Hey {{name}}"
        assert await orchestrator.generate_variation("Hi {{name}}") == "Hey {{name}}"
        prompt, max_tokens = fake_standard.calls[0]
        assert "Hi {{name}}" in prompt
        assert max_tokens == VARIATION_MAX_TOKENS

    @pytest.mark.asyncio
    async def test_variation_failure(
        self, orchestrator: GenerationOrchestrator, fake_standard
    ) -> None:
        fake_standard.fail = True
        with pytest.raises(GenerationFailed):
            await orchestrator.generate_variation("Hi")
