"""Template categories and the form fields each one collects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Literal


class TemplateCategory(str, Enum):
    """Template domain requested by the end user."""

    DOCUMENTS = "documents"
    DESIGNS = "designs"
    WEB = "web"
    PRESENTATIONS = "presentations"
    EMAIL = "email"
    VIDEO = "video"
    EVENTS = "events"
    ECOMMERCE = "ecommerce"
    SOCIAL = "social"
    EDUCATIONAL = "educational"


FieldValue = str | int | float | date
UserFieldValues = Mapping[str, FieldValue]

FieldType = Literal["text", "textarea", "select", "number", "date"]


@dataclass(frozen=True, slots=True)
class FieldSpec:
    key: str
    label: str
    type: FieldType
    required: bool = False
    options: tuple[str, ...] = field(default_factory=tuple)


def _text(key: str, label: str, required: bool = False) -> FieldSpec:
    return FieldSpec(key, label, "text", required)


def _textarea(key: str, label: str, required: bool = False) -> FieldSpec:
    return FieldSpec(key, label, "textarea", required)


def _number(key: str, label: str, required: bool = False) -> FieldSpec:
    return FieldSpec(key, label, "number", required)


def _select(
    key: str, label: str, options: tuple[str, ...], required: bool = True
) -> FieldSpec:
    return FieldSpec(key, label, "select", required, options)


CATEGORY_FIELDS: dict[TemplateCategory, tuple[FieldSpec, ...]] = {
    TemplateCategory.DOCUMENTS: (
        _text("name", "Full Name", required=True),
        _text("company", "Company"),
        _text("position", "Position/Title"),
        _text("industry", "Industry"),
        _select("tone", "Tone", ("Professional", "Friendly", "Formal", "Creative")),
        _number("experience", "Years of Experience"),
        _textarea("skills", "Key Skills"),
    ),
    TemplateCategory.DESIGNS: (
        _text("title", "Design Title", required=True),
        _text("company", "Company/Brand"),
        _textarea("description", "Description"),
        _select(
            "style",
            "Style",
            (
                "Modern",
                "Minimalist",
                "Bold",
                "Elegant",
                "Playful",
                "Corporate",
                "Creative",
            ),
        ),
        _text("colors", "Color Preference"),
        _text("target_audience", "Target Audience"),
        _text("call_to_action", "Call to Action"),
    ),
    TemplateCategory.WEB: (
        _text("siteName", "Website Name", required=True),
        _text("company", "Company"),
        _textarea("description", "Website Description", required=True),
        _text("industry", "Industry"),
        _select(
            "style",
            "Style",
            (
                "Corporate",
                "Creative",
                "E-commerce",
                "Portfolio",
                "Blog",
                "SaaS",
                "Agency",
            ),
        ),
        _textarea("features", "Key Features"),
        _text("target_audience", "Target Audience"),
    ),
    TemplateCategory.PRESENTATIONS: (
        _text("title", "Presentation Title", required=True),
        _text("company", "Company"),
        _text("audience", "Target Audience", required=True),
        _select(
            "purpose",
            "Purpose",
            (
                "Pitch",
                "Training",
                "Report",
                "Marketing",
                "Educational",
                "Sales",
                "Product Launch",
            ),
        ),
        _number("duration", "Duration (minutes)"),
        _textarea("key_points", "Key Points"),
        _select(
            "tone",
            "Tone",
            ("Professional", "Casual", "Persuasive", "Educational", "Inspiring"),
            required=False,
        ),
    ),
    TemplateCategory.EMAIL: (
        _text("subject", "Email Subject", required=True),
        _text("company", "Company"),
        _text("audience", "Target Audience", required=True),
        _select(
            "purpose",
            "Email Purpose",
            (
                "Newsletter",
                "Promotion",
                "Welcome",
                "Follow-up",
                "Announcement",
                "Social Media Campaign",
                "Product Launch",
            ),
        ),
        _select(
            "tone", "Tone", ("Professional", "Friendly", "Casual", "Urgent", "Exciting")
        ),
        _text("call_to_action", "Call to Action"),
        _textarea("pain_points", "Pain Points to Address"),
    ),
    TemplateCategory.VIDEO: (
        _text("title", "Video Title", required=True),
        _select(
            "platform",
            "Platform",
            ("YouTube", "TikTok", "Instagram", "Facebook", "LinkedIn", "Twitter"),
        ),
        _number("duration", "Duration (minutes)", required=True),
        _text("audience", "Target Audience", required=True),
        _select(
            "purpose",
            "Video Purpose",
            (
                "Tutorial",
                "Product Demo",
                "Entertainment",
                "Educational",
                "Marketing",
                "Testimonial",
            ),
        ),
        _select(
            "tone", "Tone", ("Casual", "Professional", "Energetic", "Informative", "Funny")
        ),
        _textarea("key_points", "Key Points"),
    ),
    TemplateCategory.EVENTS: (
        _text("event_name", "Event Name", required=True),
        _select(
            "event_type",
            "Event Type",
            (
                "Conference",
                "Workshop",
                "Webinar",
                "Networking",
                "Product Launch",
                "Training",
                "Social",
            ),
        ),
        _text("date", "Event Date", required=True),
        _text("location", "Location/Platform", required=True),
        _text("audience", "Target Audience", required=True),
        _textarea("description", "Event Description"),
        _text("organizer", "Organizer"),
    ),
    TemplateCategory.ECOMMERCE: (
        _text("product_name", "Product Name", required=True),
        _text("category", "Product Category", required=True),
        _text("price", "Price"),
        _text("target_audience", "Target Audience", required=True),
        _textarea("key_features", "Key Features", required=True),
        _textarea("benefits", "Main Benefits"),
        _select(
            "brand_tone",
            "Brand Tone",
            ("Professional", "Friendly", "Luxury", "Casual", "Technical"),
        ),
    ),
    TemplateCategory.SOCIAL: (
        _select(
            "platform",
            "Social Platform",
            (
                "Instagram",
                "Facebook",
                "Twitter",
                "LinkedIn",
                "TikTok",
                "Pinterest",
                "YouTube",
            ),
        ),
        _select(
            "content_type",
            "Content Type",
            ("Post", "Story", "Reel", "Thread", "Carousel", "Video", "Live"),
        ),
        _text("topic", "Topic/Theme", required=True),
        _text("audience", "Target Audience", required=True),
        _select(
            "goal",
            "Goal",
            (
                "Engagement",
                "Brand Awareness",
                "Sales",
                "Education",
                "Entertainment",
                "Community Building",
            ),
        ),
        _select(
            "tone", "Tone", ("Casual", "Professional", "Funny", "Inspiring", "Educational")
        ),
        _text("hashtags", "Key Hashtags"),
    ),
    TemplateCategory.EDUCATIONAL: (
        _text("course_title", "Course/Lesson Title", required=True),
        _text("subject", "Subject Area", required=True),
        _select("level", "Level", ("Beginner", "Intermediate", "Advanced", "All Levels")),
        _text("duration", "Duration"),
        _textarea("learning_objectives", "Learning Objectives", required=True),
        _text("target_audience", "Target Audience", required=True),
        _select(
            "teaching_method",
            "Teaching Method",
            ("Lecture", "Interactive", "Hands-on", "Discussion", "Project-based"),
            required=False,
        ),
    ),
}


def is_blank(value: FieldValue | None) -> bool:
    """True for absent values and strings that are empty after stripping."""
    return value is None or str(value).strip() == ""


def missing_required_fields(
    category: TemplateCategory, fields: UserFieldValues
) -> list[str]:
    """Keys of required fields that are absent or blank, in form order."""
    return [
        spec.key
        for spec in CATEGORY_FIELDS[category]
        if spec.required and is_blank(fields.get(spec.key))
    ]
