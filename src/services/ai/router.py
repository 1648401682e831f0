"""Best-fit model selection for a template category.

Selection is a pure function over the catalog: the same catalog and inputs
always yield the same descriptor.
"""

from __future__ import annotations

from collections.abc import Sequence

from services.ai.catalog import MODEL_CATALOG, ModelDescriptor, find_model


# Used when no tag matches, keyed by lowercased category
CATEGORY_FALLBACKS: dict[str, str] = {
    "documents": "kimi-dev",
    "designs": "kimi-vl",
    "web": "deepcoder",
    "presentations": "qwen3",
    "email": "mistral-small",
}

DEFAULT_MODEL_KEY = "llama-nemotron"


def tag_matches(tag: str, query: str) -> bool:
    """Loose bidirectional substring match between a tag and a query term.

    Known sharp edge: this over-matches, e.g. tag "web" matches "webinar",
    and an empty query matches every tag.
    """
    return tag in query or query in tag


def model_matches(model: ModelDescriptor, category: str, purpose: str) -> bool:
    return any(
        tag_matches(tag, category) or tag_matches(tag, purpose) for tag in model.tags
    )


def select_model(
    category: str,
    purpose: str = "general",
    catalog: Sequence[ModelDescriptor] = MODEL_CATALOG,
) -> ModelDescriptor:
    """Select the best-fit model for a category and purpose.

    The first catalog entry with a matching tag wins. Without a match the
    per-category fallback applies, then the global default. Never raises for
    a non-empty catalog.
    """
    category_lower = category.lower()
    purpose_lower = purpose.lower()

    for model in catalog:
        if model_matches(model, category_lower, purpose_lower):
            return model

    fallback_key = CATEGORY_FALLBACKS.get(category_lower, DEFAULT_MODEL_KEY)
    return (
        find_model(fallback_key, catalog)
        or find_model(DEFAULT_MODEL_KEY, catalog)
        or catalog[0]
    )
