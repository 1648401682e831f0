"""Placeholder handling, preview rendering and file export for templates."""

from __future__ import annotations

import html
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal


ExportFormat = Literal["html", "pdf", "png", "docx"]

PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


@dataclass(frozen=True, slots=True)
class TemplateStyle:
    font_family: str = "Inter, sans-serif"
    font_size: str = "16px"
    color: str = "#1f2937"
    background_color: str = "#ffffff"
    padding: str = "24px"
    border_radius: str = "8px"


@dataclass(frozen=True, slots=True)
class ExportedTemplate:
    filename: str
    media_type: str
    body: str


def extract_variables(content: str) -> list[str]:
    """Placeholder names in order of first appearance, without duplicates."""
    return list(dict.fromkeys(PLACEHOLDER_RE.findall(content)))


def render_preview(content: str, values: Mapping[str, object]) -> str:
    """Substitute `{{key}}` for every key in values; others stay as written."""

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in values:
            return str(values[key])
        return match.group(0)

    return PLACEHOLDER_RE.sub(_replace, content)


def markdown_to_html(text: str) -> str:
    """Convert the small markdown subset the editor supports to HTML.

    Text is escaped first, so markup in templates or filled-in values
    renders literally.
    """
    markup = re.sub(
        r"\*\*(.*?)\*\*", r"<strong>\1</strong>", html.escape(text, quote=True)
    )
    markup = re.sub(r"\*(.*?)\*", r"<em>\1</em>", markup)
    markup = re.sub(r"^### (.*)$", r"<h3>\1</h3>", markup, flags=re.MULTILINE)
    markup = re.sub(r"^## (.*)$", r"<h2>\1</h2>", markup, flags=re.MULTILINE)
    markup = re.sub(r"^# (.*)$", r"<h1>\1</h1>", markup, flags=re.MULTILINE)
    markup = re.sub(
        r"\[([^\]]+)\]\(([^)]+)\)",
        r'<a href="\2" target="_blank" rel="noopener noreferrer">\1</a>',
        markup,
    )
    return markup.replace("\n", "<br>")


def _html_document(body: str, style: TemplateStyle) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Generated Template</title>
    <style>
        body {{
            font-family: {style.font_family};
            font-size: {style.font_size};
            color: {style.color};
            background-color: {style.background_color};
            padding: {style.padding};
            border-radius: {style.border_radius};
            line-height: 1.6;
            max-width: 800px;
            margin: 0 auto;
        }}
        h1, h2, h3 {{ margin-top: 1.5em; margin-bottom: 0.5em; }}
        p {{ margin-bottom: 1em; }}
        a {{ color: #3b82f6; text-decoration: none; }}
        a:hover {{ text-decoration: underline; }}
        strong {{ font-weight: 600; }}
        em {{ font-style: italic; }}
    </style>
</head>
<body>
    {body}
</body>
</html>"""


def export_template(
    content: str,
    values: Mapping[str, object],
    fmt: ExportFormat = "html",
    style: TemplateStyle | None = None,
) -> ExportedTemplate:
    """Serialize a template with its placeholders filled in.

    Only HTML gets real formatting. Other formats are plain text under the
    requested extension, except docx which is written as `template.txt`.
    """
    rendered = render_preview(content, values)
    if fmt == "html":
        return ExportedTemplate(
            filename="template.html",
            media_type="text/html",
            body=_html_document(markdown_to_html(rendered), style or TemplateStyle()),
        )

    extension = "txt" if fmt == "docx" else fmt
    return ExportedTemplate(
        filename=f"template.{extension}",
        media_type="text/plain",
        body=rendered,
    )
