"""Template generation, comparison and export endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import Response

from dependencies.ai import Images, Insights, Orchestrator
from schemas.api import ApiResponse
from schemas.templates import (
    CompareModelsRequest,
    ExportRequest,
    FieldSpecOut,
    GeneratedTemplate,
    GenerateTemplateRequest,
    InsightsRequest,
    ModelComparisonItem,
    ModelInfo,
    PreviewOut,
    PreviewRequest,
    TemplateImageOut,
    TemplateImagesRequest,
    VariationRequest,
)
from services.ai.catalog import MODEL_CATALOG, ModelDescriptor
from services.ai.categories import (
    CATEGORY_FIELDS,
    TemplateCategory,
    missing_required_fields,
)
from services.ai.models import GenerationOptions
from services.ai.router import select_model
from services.template_export import (
    TemplateStyle,
    export_template,
    extract_variables,
    markdown_to_html,
    render_preview,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


def _model_info(model: ModelDescriptor) -> ModelInfo:
    return ModelInfo(
        key=model.key,
        display_name=model.display_name,
        provider_model_id=model.provider_model_id,
        description=model.description,
        tags=sorted(model.tags),
    )


@router.get("/models", response_model=ApiResponse[list[ModelInfo]])
def list_models() -> ApiResponse[list[ModelInfo]]:
    """List the specialized models in catalog order."""
    return ApiResponse(
        data=[_model_info(m) for m in MODEL_CATALOG],
        message="Models retrieved",
    )


@router.get("/models/recommended", response_model=ApiResponse[ModelInfo])
def recommended_model(
    category: str = Query(..., min_length=1, max_length=100),
    purpose: str = Query("general", min_length=1, max_length=100),
) -> ApiResponse[ModelInfo]:
    """Best-fit model for a category and purpose."""
    return ApiResponse(
        data=_model_info(select_model(category, purpose)),
        message="Recommended model selected",
    )


@router.get("/categories", response_model=ApiResponse[list[str]])
def list_categories() -> ApiResponse[list[str]]:
    return ApiResponse(
        data=[c.value for c in TemplateCategory],
        message="Categories retrieved",
    )


@router.get(
    "/categories/{category}/fields",
    response_model=ApiResponse[list[FieldSpecOut]],
)
def category_fields(category: TemplateCategory) -> ApiResponse[list[FieldSpecOut]]:
    """Form fields collected for a category."""
    return ApiResponse(
        data=[
            FieldSpecOut(
                key=spec.key,
                label=spec.label,
                type=spec.type,
                required=spec.required,
                options=list(spec.options),
            )
            for spec in CATEGORY_FIELDS[category]
        ],
        message="Category fields retrieved",
    )


@router.post("/generate", response_model=ApiResponse[GeneratedTemplate])
async def generate_template(
    body: GenerateTemplateRequest, orchestrator: Orchestrator
) -> ApiResponse[GeneratedTemplate]:
    """Generate a template from the category form fields."""
    missing = missing_required_fields(body.category, body.fields)
    if missing:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Missing required fields: {', '.join(missing)}",
        )

    artifact = await orchestrator.generate(
        body.category,
        body.fields,
        GenerationOptions(
            use_advanced_model=body.use_advanced_model,
            explicit_model_key=body.model_key,
            enhance_prompt=body.enhance_prompt,
            max_tokens=body.max_tokens,
        ),
    )
    return ApiResponse(
        data=GeneratedTemplate(
            content=artifact.content,
            model_key_used=artifact.model_key_used,
            category=artifact.category,
            used_fallback=artifact.used_fallback,
            variables=extract_variables(artifact.content),
        ),
        message="Template generated",
    )


@router.post("/compare", response_model=ApiResponse[list[ModelComparisonItem]])
async def compare_models(
    body: CompareModelsRequest, orchestrator: Orchestrator
) -> ApiResponse[list[ModelComparisonItem]]:
    """Run one prompt on several models; failed models are left out."""
    results = await orchestrator.generate_with_models(
        body.prompt, body.category, body.model_keys
    )
    return ApiResponse(
        data=[
            ModelComparisonItem(model_key=r.model_key, content=r.content)
            for r in results
        ],
        message=f"{len(results)} model(s) responded",
    )


@router.post("/variation", response_model=ApiResponse[str])
async def template_variation(
    body: VariationRequest, orchestrator: Orchestrator
) -> ApiResponse[str]:
    return ApiResponse(
        data=await orchestrator.generate_variation(body.content),
        message="Variation generated",
    )


@router.post("/images", response_model=ApiResponse[list[TemplateImageOut]])
async def template_images(
    body: TemplateImagesRequest, images: Images
) -> ApiResponse[list[TemplateImageOut]]:
    """Preview images for a design template (needs title and style)."""
    generated = await images.generate_template_images(body.fields)
    return ApiResponse(
        data=[
            TemplateImageOut(url=img.url, prompt=img.prompt, alt=img.alt)
            for img in generated
        ],
        message=f"{len(generated)} image(s) generated",
    )


@router.post("/insights", response_model=ApiResponse[list[str]])
async def audience_insights(
    body: InsightsRequest, insights: Insights
) -> ApiResponse[list[str]]:
    """Audience pain points for the email `pain_points` field."""
    points = await insights.extract_audience_pain_points(body.audience)
    return ApiResponse(data=points, message="Insights extracted")


@router.post("/preview", response_model=ApiResponse[PreviewOut])
def preview_template(body: PreviewRequest) -> ApiResponse[PreviewOut]:
    rendered = render_preview(body.content, body.values)
    return ApiResponse(
        data=PreviewOut(
            content=rendered,
            html=markdown_to_html(rendered),
            variables=extract_variables(body.content),
        ),
        message="Preview rendered",
    )


@router.post("/export")
def export(body: ExportRequest) -> Response:
    """Download the filled-in template as a file."""
    exported = export_template(
        body.content,
        body.values,
        body.format,
        TemplateStyle(**body.style.model_dump()),
    )
    return Response(
        content=exported.body,
        media_type=exported.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{exported.filename}"'
        },
    )
