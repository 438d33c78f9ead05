from __future__ import annotations

import bleach
import markdown
from django import template
from django.utils.safestring import mark_safe

register = template.Library()

_MARKDOWN_EXTENSIONS = [
    "markdown.extensions.extra",
    "markdown.extensions.sane_lists",
]

_ALLOWED_TAGS = [
    "a",
    "b",
    "blockquote",
    "br",
    "code",
    "em",
    "i",
    "li",
    "ol",
    "p",
    "pre",
    "strong",
    "ul",
]

_ALLOWED_ATTRS = {
    "a": ["href", "title", "rel"],
}


@register.filter(name="render_description")
def render_description(value: str | None) -> str:
    if not value:
        return ""

    html = markdown.markdown(
        value,
        extensions=_MARKDOWN_EXTENSIONS,
        output_format="html5",
    )
    return mark_safe(
        bleach.clean(
            html,
            tags=_ALLOWED_TAGS,
            attributes=_ALLOWED_ATTRS,
            protocols=["http", "https", "mailto"],
            strip=True,
        )
    )
