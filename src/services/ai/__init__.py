"""Model selection, prompt building and generation for templates."""

from .catalog import MODEL_CATALOG, ModelDescriptor, get_model
from .categories import TemplateCategory
from .orchestrator import GenerationOrchestrator
from .prompts import build_prompt
from .router import select_model


__all__ = [
    "MODEL_CATALOG",
    "GenerationOrchestrator",
    "ModelDescriptor",
    "TemplateCategory",
    "build_prompt",
    "get_model",
    "select_model",
]
