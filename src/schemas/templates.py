"""Request and response schemas for the template generation API."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from services.ai.categories import TemplateCategory


FieldValues = dict[str, str | int | float | date]


class ModelInfo(BaseModel):
    """Public view of one catalog model."""

    key: str
    display_name: str
    provider_model_id: str
    description: str
    tags: list[str]


class FieldSpecOut(BaseModel):
    key: str
    label: str
    type: Literal["text", "textarea", "select", "number", "date"]
    required: bool
    options: list[str] = Field(default_factory=list)


class GenerateTemplateRequest(BaseModel):
    category: TemplateCategory
    fields: FieldValues = Field(default_factory=dict)
    use_advanced_model: bool = True
    model_key: str | None = Field(
        default=None, description="Catalog key; unknown keys use automatic selection"
    )
    enhance_prompt: bool = False
    max_tokens: int | None = Field(default=None, ge=1, le=8000)

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class GeneratedTemplate(BaseModel):
    content: str
    model_key_used: str
    category: TemplateCategory
    used_fallback: bool
    variables: list[str] = Field(
        default_factory=list, description="Placeholder names found in the content"
    )

    model_config = ConfigDict(protected_namespaces=())


class CompareModelsRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=20_000)
    category: TemplateCategory
    model_keys: list[str] = Field(default_factory=list, max_length=10)

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class ModelComparisonItem(BaseModel):
    model_key: str
    content: str

    model_config = ConfigDict(protected_namespaces=())


class VariationRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=50_000)

    model_config = ConfigDict(extra="forbid")


class TemplateImagesRequest(BaseModel):
    fields: FieldValues = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class TemplateImageOut(BaseModel):
    url: str
    prompt: str
    alt: str


class InsightsRequest(BaseModel):
    audience: str = Field(..., min_length=1, max_length=200)

    model_config = ConfigDict(extra="forbid")


class TemplateStyleIn(BaseModel):
    font_family: str = "Inter, sans-serif"
    font_size: str = "16px"
    color: str = "#1f2937"
    background_color: str = "#ffffff"
    padding: str = "24px"
    border_radius: str = "8px"


class PreviewRequest(BaseModel):
    content: str = Field(..., max_length=50_000)
    values: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class PreviewOut(BaseModel):
    content: str
    html: str
    variables: list[str]


class ExportRequest(PreviewRequest):
    format: Literal["html", "pdf", "png", "docx"] = "html"
    style: TemplateStyleIn = Field(default_factory=TemplateStyleIn)
