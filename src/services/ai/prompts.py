"""Prompt construction for template generation.

Each specialized category renders one fixed instruction string from the user's
field values. Missing or blank values fall back to category-specific literals,
and every prompt asks the model to leave `{{field}}` placeholders in its
output so the generated template stays parametric.
"""

from __future__ import annotations

from collections.abc import Callable

from services.ai.catalog import ModelDescriptor
from services.ai.categories import FieldValue, TemplateCategory, UserFieldValues, is_blank
from services.ai.exceptions import UnsupportedCategory


def _value(fields: UserFieldValues, key: str, default: str) -> str:
    value: FieldValue | None = fields.get(key)
    if is_blank(value):
        return default
    return str(value).strip()


def _documents_prompt(fields: UserFieldValues) -> str:
    def f(key: str, default: str) -> str:
        return _value(fields, key, default)

    return (
        f"Create a professional {f('position', 'document')} template for "
        f"{f('name', 'the user')}. Company: {f('company', 'N/A')}. "
        f"Industry: {f('industry', 'General')}. Tone: {f('tone', 'Professional')}. "
        f"Experience: {f('experience', 'N/A')} years. Skills: {f('skills', 'N/A')}. "
        "Include placeholder variables like {{name}}, {{company}}, {{position}}, "
        "{{skills}} for easy customization. Make it ATS-friendly and modern."
    )


def _designs_prompt(fields: UserFieldValues) -> str:
    def f(key: str, default: str) -> str:
        return _value(fields, key, default)

    return (
        f"Create a {f('style', 'modern')} design template for "
        f"\"{f('title', 'Design')}\". Company/Brand: {f('company', 'N/A')}. "
        f"Description: {f('description', 'N/A')}. "
        f"Colors: {f('colors', 'Professional colors')}. "
        f"Target Audience: {f('target_audience', 'General')}. "
        f"Call to Action: {f('call_to_action', 'Learn More')}. "
        "Provide HTML/CSS structure with placeholder variables like {{title}}, "
        "{{description}} and responsive design."
    )


def _web_prompt(fields: UserFieldValues) -> str:
    def f(key: str, default: str) -> str:
        return _value(fields, key, default)

    return (
        f"Create a {f('style', 'modern')} website template for "
        f"\"{f('siteName', 'Website')}\". Company: {f('company', 'N/A')}. "
        f"Description: {f('description', 'N/A')}. "
        f"Industry: {f('industry', 'General')}. "
        f"Features: {f('features', 'Standard features')}. "
        f"Target Audience: {f('target_audience', 'General')}. "
        "Include HTML structure with placeholder variables like {{siteName}}, "
        "{{company}}, responsive design, and modern UI components."
    )


def _presentations_prompt(fields: UserFieldValues) -> str:
    def f(key: str, default: str) -> str:
        return _value(fields, key, default)

    return (
        f"Create a {f('purpose', 'professional')} presentation template titled "
        f"\"{f('title', 'Presentation')}\". Company: {f('company', 'N/A')}. "
        f"Audience: {f('audience', 'General')}. "
        f"Duration: {f('duration', 'N/A')} minutes. "
        f"Key Points: {f('key_points', 'Standard content')}. "
        f"Tone: {f('tone', 'Professional')}. "
        "Include slide structure with placeholder variables like {{title}}, "
        "{{company}} and speaker notes."
    )


def _email_prompt(fields: UserFieldValues) -> str:
    def f(key: str, default: str) -> str:
        return _value(fields, key, default)

    return (
        f"Create a {f('purpose', 'professional')} email template with subject "
        f"\"{f('subject', 'Email')}\". Company: {f('company', 'N/A')}. "
        f"Audience: {f('audience', 'General')}. Tone: {f('tone', 'Professional')}. "
        f"Call to Action: {f('call_to_action', 'Learn More')}. "
        f"Pain Points: {f('pain_points', 'General challenges')}. "
        "Include HTML email structure with placeholder variables like "
        "{{first_name}}, {{company}} and mobile-responsive design."
    )


PROMPT_BUILDERS: dict[TemplateCategory, Callable[[UserFieldValues], str]] = {
    TemplateCategory.DOCUMENTS: _documents_prompt,
    TemplateCategory.DESIGNS: _designs_prompt,
    TemplateCategory.WEB: _web_prompt,
    TemplateCategory.PRESENTATIONS: _presentations_prompt,
    TemplateCategory.EMAIL: _email_prompt,
}

# What the system instruction asks each specialized model to focus on
CATEGORY_FOCUS: dict[TemplateCategory, str] = {
    TemplateCategory.DOCUMENTS: "professional",
    TemplateCategory.DESIGNS: "visual",
    TemplateCategory.WEB: "responsive",
    TemplateCategory.PRESENTATIONS: "structured",
    TemplateCategory.EMAIL: "marketing",
}


def has_specialized_prompt(category: TemplateCategory) -> bool:
    return category in PROMPT_BUILDERS


def build_prompt(category: TemplateCategory, fields: UserFieldValues) -> str:
    """Render the specialized instruction for a category.

    Raises:
        UnsupportedCategory: If the category has no specialized template.
    """
    builder = PROMPT_BUILDERS.get(category)
    if builder is None:
        raise UnsupportedCategory(category.value)
    return builder(fields)


def build_generic_prompt(category: TemplateCategory, fields: UserFieldValues) -> str:
    """Prompt for categories without a specialized template.

    Embeds the raw field bag, one `key: value` line per non-blank field.
    """
    lines = "\n".join(
        f"{key}: {str(value).strip()}"
        for key, value in fields.items()
        if not is_blank(value)
    )
    return (
        f"Create a professional {category.value} template with the following "
        f"information:\n{lines or 'No details provided'}\n\n"
        "Generate a complete, ready-to-use template with proper formatting and "
        "sections. Use placeholder variables like {{name}}, {{title}} for every "
        "value the user may want to change later."
    )


def build_generation_prompt(category: TemplateCategory, fields: UserFieldValues) -> str:
    """Specialized prompt where one exists, generic prompt otherwise."""
    if has_specialized_prompt(category):
        return build_prompt(category, fields)
    return build_generic_prompt(category, fields)


def build_system_instruction(model: ModelDescriptor, category: TemplateCategory) -> str:
    focus = CATEGORY_FOCUS.get(category, "general")
    return (
        f"You are an expert {category.value} template creator. "
        f"{model.description}. Generate professional, high-quality content that "
        f"is ready to use. Focus on {focus} aspects."
    )


def build_enhancement_prompt(prompt: str) -> str:
    return (
        "Enhance this template creation prompt to be more detailed and specific. "
        f'Original prompt: "{prompt}". Make it more comprehensive and include '
        "specific formatting instructions. Keep every {{placeholder}} marker."
    )


def build_variation_prompt(content: str) -> str:
    return (
        "Create a variation of this template with the same structure but "
        "different wording and style. Keep all {{variables}} intact. "
        f"Original template: {content}"
    )


def build_pain_points_prompt(audience: str, snippets: list[str]) -> str:
    return (
        f"Analyze these search results about {audience} and extract 5 key pain "
        "points or challenges they face on social media: "
        f"{' '.join(snippets)}. Return as a simple list, one point per line."
    )


def build_image_prompts(fields: UserFieldValues) -> list[str]:
    """Three styled image prompts for a design template.

    Returns an empty list unless both `title` and `style` are provided.
    """
    title = _value(fields, "title", "")
    style = _value(fields, "style", "")
    if not title or not style:
        return []
    colors = _value(fields, "colors", "professional colors")
    audience = _value(fields, "target_audience", "general audience")
    return [
        f'{style} design for "{title}" with {colors}',
        f"Modern {style} layout for {title} targeting {audience}",
        f'Creative {style} visual for "{title}" with clean typography',
    ]
