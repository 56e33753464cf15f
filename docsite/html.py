"""HTML helpers shared by the signature, link and navigation builders."""

from __future__ import annotations

from typing import Sequence

from markupsafe import escape


def htmlsafe(text: str | None) -> str:
    """Return ``text`` escaped for use in element content and attribute values."""
    if not text:
        return ""
    return str(escape(text))


def attribute_markers(attributes: Sequence[str]) -> str:
    """Render attribute flags as one inline badge, or an empty string when there are none."""
    if not attributes:
        return ""
    joined = ", ".join(htmlsafe(attribute) for attribute in attributes)
    return f'<span class="signature-attributes">{joined}</span>'


def anchor(href: str, text: str, css_class: str | None = None) -> str:
    """Render ``<a>`` markup; ``text`` must already be HTML-safe."""
    class_attr = f' class="{htmlsafe(css_class)}"' if css_class else ""
    return f'<a href="{htmlsafe(href)}"{class_attr}>{text}</a>'


__all__ = ["anchor", "attribute_markers", "htmlsafe"]
