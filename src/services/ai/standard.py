"""Standard text generation through a pydantic-ai agent.

This is the single fixed general-purpose model used when specialized
generation is disabled or fails, and for the auxiliary text tasks.
"""

from __future__ import annotations

import logging

from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from services.ai.exceptions import BoundaryCallFailed
from services.ai.model_factory import get_text_model


logger = logging.getLogger(__name__)

STANDARD_SYSTEM_PROMPT = (
    "You are a professional template writer. Produce complete, ready-to-use "
    "content and keep every {{placeholder}} marker exactly as written."
)


class StandardTextGenerator:
    """Lazily builds one agent on the configured text model and reuses it."""

    def __init__(self, agent: Agent[None, str] | None = None) -> None:
        self._agent = agent

    def _get_agent(self) -> Agent[None, str]:
        if self._agent is None:
            self._agent = Agent(
                get_text_model(),
                output_type=str,
                system_prompt=STANDARD_SYSTEM_PROMPT,
            )
        return self._agent

    async def generate_text(self, prompt: str, max_tokens: int) -> str:
        try:
            agent = self._get_agent()
            result = await agent.run(
                prompt, model_settings=ModelSettings(max_tokens=max_tokens)
            )
        except Exception as exc:  # noqa: BLE001 - provider errors vary by backend
            logger.error(
                "Standard text generation failed: %s - %s",
                type(exc).__name__,
                str(exc),
            )
            raise BoundaryCallFailed("Standard text generation failed") from exc

        output = result.output
        if not output or not output.strip():
            raise BoundaryCallFailed("Standard text model returned no content")
        return output
