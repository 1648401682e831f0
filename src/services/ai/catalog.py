"""Static catalog of the specialized AI models offered for template generation.

The catalog is an immutable tuple; its order is significant because model
selection returns the first matching entry.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from services.ai.exceptions import ModelNotFound


@dataclass(frozen=True, slots=True)
class ModelDescriptor:
    """One AI text-generation backend reachable through OpenRouter."""

    key: str
    display_name: str
    provider_model_id: str
    description: str
    tags: frozenset[str]


def _model(
    key: str,
    display_name: str,
    provider_model_id: str,
    description: str,
    *tags: str,
) -> ModelDescriptor:
    return ModelDescriptor(
        key=key,
        display_name=display_name,
        provider_model_id=provider_model_id,
        description=description,
        tags=frozenset(tags),
    )


MODEL_CATALOG: tuple[ModelDescriptor, ...] = (
    _model(
        "mistral-small",
        "Mistral Small",
        "mistralai/mistral-small-3.2-24b-instruct:free",
        "Excellent for copywriting and marketing content",
        "email",
        "marketing",
        "copywriting",
        "social-media",
    ),
    _model(
        "kimi-dev",
        "Kimi Dev 72B",
        "moonshotai/kimi-dev-72b:free",
        "Advanced reasoning for complex document templates",
        "documents",
        "contracts",
        "reports",
        "technical",
    ),
    _model(
        "deepcoder",
        "DeepCoder 14B",
        "agentica-org/deepcoder-14b-preview:free",
        "Specialized for web templates and code generation",
        "web",
        "html",
        "css",
        "landing-pages",
    ),
    _model(
        "kimi-vl",
        "Kimi VL",
        "moonshotai/kimi-vl-a3b-thinking:free",
        "Visual understanding for design templates",
        "design",
        "visual",
        "layout",
        "graphics",
    ),
    _model(
        "qwen3",
        "Qwen3 235B",
        "qwen/qwen3-235b-a22b:free",
        "Excellent for presentations and structured content",
        "presentations",
        "slides",
        "structured",
        "business",
    ),
    _model(
        "deepseek-r1",
        "DeepSeek R1 Chimera",
        "tngtech/deepseek-r1t2-chimera:free",
        "Advanced reasoning for complex workflows",
        "workflow",
        "logic",
        "complex-reasoning",
    ),
    _model(
        "llama-nemotron",
        "Llama Nemotron Ultra",
        "nvidia/llama-3.1-nemotron-ultra-253b-v1:free",
        "High-performance model for premium templates",
        "premium",
        "high-quality",
        "professional",
    ),
    _model(
        "gemma-3n",
        "Gemma 3N",
        "google/gemma-3n-e4b-it:free",
        "Creative content generation",
        "creative",
        "storytelling",
        "content",
    ),
    _model(
        "mai-ds",
        "MAI DS R1",
        "microsoft/mai-ds-r1:free",
        "Microsoft specialized model for business templates",
        "business",
        "enterprise",
        "professional",
    ),
    _model(
        "qwq-32b",
        "QwQ 32B",
        "arliai/qwq-32b-arliai-rpr-v1:free",
        "Advanced reasoning and problem solving",
        "problem-solving",
        "analysis",
        "reasoning",
    ),
)

# Reported as the model of artifacts produced by the standard fallback path
STANDARD_MODEL_KEY = "standard"


def find_model(
    key: str, catalog: Sequence[ModelDescriptor] = MODEL_CATALOG
) -> ModelDescriptor | None:
    """Return the descriptor with the given key, or None."""
    for model in catalog:
        if model.key == key:
            return model
    return None


def get_model(
    key: str, catalog: Sequence[ModelDescriptor] = MODEL_CATALOG
) -> ModelDescriptor:
    """Return the descriptor with the given key.

    Raises:
        ModelNotFound: If no catalog entry has this key.
    """
    model = find_model(key, catalog)
    if model is None:
        raise ModelNotFound(key)
    return model
