"""Typed contract objects passed between the orchestrator and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from services.ai.categories import TemplateCategory


class GenerationStage(str, Enum):
    """States of a single generation request.

    PRIMARY -> DONE | FALLBACK, FALLBACK -> DONE | FAILED. Each state is
    entered at most once, so the primary and the fallback call each run at
    most once per request.
    """

    PRIMARY = "primary"
    FALLBACK = "fallback"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class GenerationOptions:
    use_advanced_model: bool = True
    explicit_model_key: str | None = None
    enhance_prompt: bool = False
    max_tokens: int | None = None


@dataclass(frozen=True, slots=True)
class GeneratedArtifact:
    """Generated template text plus the model that produced it."""

    content: str
    model_key_used: str
    category: TemplateCategory
    used_fallback: bool = False


@dataclass(frozen=True, slots=True)
class ModelResult:
    model_key: str
    content: str


@dataclass(frozen=True, slots=True)
class ChatCompletionRequest:
    """Request for the specialized (OpenRouter) text-generation boundary."""

    provider_model_id: str
    system_instruction: str
    user_prompt: str
    max_tokens: int
    temperature: float = 0.7
    top_p: float = 0.9


@dataclass(frozen=True, slots=True)
class ImageRequest:
    prompt: str
    size: str = "1024x1024"
    quality: str = "standard"
    count: int = 1


@dataclass(frozen=True, slots=True)
class GeneratedImage:
    url: str
    prompt: str
    alt: str
