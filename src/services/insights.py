"""Audience pain-point insights from web search results."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from services.ai.exceptions import BoundaryCallFailed, GenerationFailed
from services.ai.interfaces import StandardTextBoundary
from services.ai.prompts import build_pain_points_prompt
from services.web_search import WebSearchOutcome, search_web


logger = logging.getLogger(__name__)

INSIGHTS_MAX_TOKENS = 300
MAX_PAIN_POINTS = 5
ORGANIC_SNIPPET_LIMIT = 5

SearchFn = Callable[..., Awaitable[WebSearchOutcome]]


def collect_snippets(outcome: WebSearchOutcome) -> list[str]:
    """All news snippets, then the first few organic ones."""
    snippets = [r.snippet for r in outcome.news_results if r.snippet]
    snippets.extend(
        r.snippet for r in outcome.results[:ORGANIC_SNIPPET_LIMIT] if r.snippet
    )
    return snippets


def parse_pain_points(text: str) -> list[str]:
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line][:MAX_PAIN_POINTS]


class AudienceInsightsService:
    def __init__(
        self, standard: StandardTextBoundary, search: SearchFn = search_web
    ) -> None:
        self.standard = standard
        self.search = search

    async def extract_audience_pain_points(self, audience: str) -> list[str]:
        """Summarize up to five social media pain points for an audience.

        Returns an empty list when the search yields nothing usable.

        Raises:
            GenerationFailed: If summarizing the search results fails.
        """
        outcome = await self.search(
            f"{audience} social media pain points problems challenges",
            result_type="news",
            limit=10,
        )
        if outcome.status != "ok":
            logger.info("Insight search unavailable: %s", outcome.message)
            return []

        snippets = collect_snippets(outcome)
        if not snippets:
            return []

        try:
            text = await self.standard.generate_text(
                build_pain_points_prompt(audience, snippets), INSIGHTS_MAX_TOKENS
            )
        except BoundaryCallFailed as exc:
            raise GenerationFailed("Pain point extraction failed") from exc
        return parse_pain_points(text)
