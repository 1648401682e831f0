"""Protocols for the external AI boundaries.

The orchestrator depends on these protocols only, so tests and alternative
providers can be injected without patching module globals.
"""

from __future__ import annotations

from typing import Protocol

from services.ai.models import ChatCompletionRequest, ImageRequest


class ChatCompletionBoundary(Protocol):
    """Primary boundary: specialized models behind a chat-completions API."""

    async def complete(self, request: ChatCompletionRequest) -> str:
        """Return the generated text or raise BoundaryCallFailed."""
        ...


class StandardTextBoundary(Protocol):
    """Fallback boundary: one fixed general-purpose model."""

    async def generate_text(self, prompt: str, max_tokens: int) -> str:
        """Return the generated text or raise BoundaryCallFailed."""
        ...


class ImageBoundary(Protocol):
    async def generate_images(self, request: ImageRequest) -> list[str]:
        """Return image URLs or raise BoundaryCallFailed."""
        ...
