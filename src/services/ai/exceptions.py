"""Domain exceptions for template generation.

Each exception carries a stable `error_code` so the API layer and logs can
branch on the failure kind without string matching. Only `GenerationFailed`
is terminal for a generation request; `ModelNotFound` is recovered from by
automatic model selection and `BoundaryCallFailed` triggers the fallback.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, eq=False)
class TemplateAIError(Exception):
    """Base class for template generation domain errors."""

    message: str
    error_code: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.error_code}: {self.message}"


class ModelNotFound(TemplateAIError):
    def __init__(self, model_key: str) -> None:
        super().__init__(
            message=f"Unknown model key '{model_key}'",
            error_code="model_not_found",
        )


class UnsupportedCategory(TemplateAIError):
    def __init__(self, category: str) -> None:
        super().__init__(
            message=f"No specialized prompt template for category '{category}'",
            error_code="unsupported_category",
        )


class BoundaryCallFailed(TemplateAIError):
    """An external AI call failed: transport error, bad status or bad body."""

    def __init__(self, message: str = "External AI call failed") -> None:
        super().__init__(message=message, error_code="boundary_error")


class GenerationFailed(TemplateAIError):
    def __init__(
        self, message: str = "Both primary and fallback generation failed"
    ) -> None:
        super().__init__(message=message, error_code="generation_failed")
