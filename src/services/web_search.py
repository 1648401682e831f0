"""Web search service using Brave Search API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

import httpx

from core.config import get_settings


logger = logging.getLogger(__name__)

BRAVE_SEARCH_ENDPOINT = "https://api.search.brave.com/res/v1/web/search"
SEARCH_RESULT_LIMIT = 10

ResultType = Literal["web", "news"]


@dataclass(frozen=True)
class WebSearchResult:
    title: str
    url: str
    snippet: str | None


@dataclass(frozen=True)
class WebSearchOutcome:
    status: Literal["ok", "unconfigured", "error"]
    provider: Literal["brave", "none"]
    results: list[WebSearchResult]
    news_results: list[WebSearchResult] = field(default_factory=list)
    message: str | None = None


def _get_api_key() -> str | None:
    settings = get_settings()
    return settings.BRAVE_SEARCH_API_KEY


async def search_web(
    query: str,
    *,
    result_type: ResultType = "web",
    limit: int = SEARCH_RESULT_LIMIT,
) -> WebSearchOutcome:
    """Search the web using Brave Search API.

    `result_type="news"` also requests the news section; organic results are
    always included. `limit` is capped at SEARCH_RESULT_LIMIT per section.
    """
    limit = min(limit, SEARCH_RESULT_LIMIT)
    api_key = _get_api_key()
    if not api_key:
        return WebSearchOutcome(
            status="unconfigured",
            provider="none",
            results=[],
            message="Brave Search API key is not configured.",
        )

    result_filter = "web,news" if result_type == "news" else "web"
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(
                BRAVE_SEARCH_ENDPOINT,
                params={"q": query, "count": limit, "result_filter": result_filter},
                headers={
                    "Accept": "application/json",
                    "X-Subscription-Token": api_key,
                },
            )
            response.raise_for_status()
            payload = response.json()

        return WebSearchOutcome(
            status="ok",
            provider="brave",
            results=_parse_brave_section(payload, "web", limit),
            news_results=_parse_brave_section(payload, "news", limit),
        )
    except httpx.HTTPError as exc:
        logger.warning(
            "Brave search request failed: %s - %s",
            type(exc).__name__,
            str(exc),
        )
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning(
            "Brave search parse failed: %s - %s",
            type(exc).__name__,
            str(exc),
        )

    return WebSearchOutcome(
        status="error",
        provider="brave",
        results=[],
        message="Unable to fetch search results right now.",
    )


def _parse_brave_section(
    payload: dict[str, Any], section: str, limit: int
) -> list[WebSearchResult]:
    data = payload.get(section) or {}
    items = data.get("results") or []
    results: list[WebSearchResult] = []
    for item in items[:limit]:
        url = item.get("url")
        title = item.get("title")
        if not url or not title:
            continue
        results.append(
            WebSearchResult(
                title=str(title),
                url=str(url),
                snippet=item.get("description"),
            )
        )
    return results
