"""Display signatures and attribute badges for doclets."""

from __future__ import annotations

import copy
from typing import List, Optional, Sequence

from .html import attribute_markers, htmlsafe
from .linking import LinkRegistry
from .models import Doclet, Param

ELLIPSIS = "…"
RETURN_ARROW = "→"

_SIGNATURE_KINDS = frozenset({"function", "class"})
_SCOPED_KINDS = frozenset({"function", "member", "constant"})


def has_signature(doclet: Doclet) -> bool:
    """Return True when ``doclet`` is rendered with a parameter signature."""
    if doclet.kind in _SIGNATURE_KINDS:
        return True
    if doclet.kind == "typedef" and doclet.type is not None:
        return any(name.lower() == "function" for name in doclet.type.names)
    return False


def nullability_attribs(nullable: Optional[bool]) -> List[str]:
    if nullable is True:
        return ["nullable"]
    if nullable is False:
        return ["non-null"]
    return []


def get_attribs(doclet: Doclet) -> List[str]:
    """Extract the attribute flags shown next to a doclet's name."""
    attribs: List[str] = []
    if doclet.is_async:
        attribs.append("async")
    if doclet.generator:
        attribs.append("generator")
    if doclet.virtual:
        attribs.append("abstract")
    if doclet.access and doclet.access != "public":
        attribs.append(doclet.access)
    if doclet.scope and doclet.scope not in ("instance", "global") and doclet.kind in _SCOPED_KINDS:
        attribs.append(doclet.scope)
    if doclet.readonly and doclet.kind == "member":
        attribs.append("readonly")
    if doclet.kind == "constant":
        attribs.append("constant")
    attribs.extend(nullability_attribs(doclet.nullable))
    return attribs


class SignatureBuilder:
    """Builds signature and attribute markup; never mutates the doclet it is given."""

    def __init__(self, registry: LinkRegistry) -> None:
        self.registry = registry

    def build_signature(self, doclet: Doclet) -> Doclet:
        """Return a copy of ``doclet`` with ``signature`` and ``attribs`` populated."""
        result = copy.deepcopy(doclet)
        params = ", ".join(self.format_params(doclet.params))
        result.signature = (
            f'<span class="signature">{htmlsafe(doclet.name)}({params})</span>'
            f'<span class="type-signature">{self.format_returns(doclet)}</span>'
        )
        result.attribs = self.attribs_markup(doclet)
        return result

    def add_attribs_property(self, doclet: Doclet) -> Doclet:
        result = copy.deepcopy(doclet)
        result.attribs = self.attribs_markup(doclet)
        return result

    def build_type_signature(self, doclet: Doclet) -> Doclet:
        """Return a copy of a member-like doclet with its declared types folded into the signature."""
        result = copy.deepcopy(doclet)
        types = self.type_strings(doclet.type.names if doclet.type else [])
        type_markup = f" :{'|'.join(types)}" if types else ""
        result.signature = (
            f'<span class="signature">{htmlsafe(doclet.name)}</span>'
            f'<span class="type-signature">{type_markup}</span>'
        )
        return result

    def format_params(self, params: Sequence[Param]) -> List[str]:
        formatted = []
        for param in params:
            # Dotted names document properties of an earlier parameter.
            if not param.name or "." in param.name:
                continue
            formatted.append(self._format_param(param))
        return formatted

    def format_returns(self, doclet: Doclet) -> str:
        source = doclet.yields or doclet.returns
        if not source:
            return ""
        badges: List[str] = []
        types: List[str] = []
        for item in source:
            for attrib in nullability_attribs(item.nullable):
                if attrib not in badges:
                    badges.append(attrib)
            types.extend(self.type_strings(item.type.names if item.type else []))
        if not types:
            return ""
        badge_markup = f"{attribute_markers(badges)} " if badges else ""
        return f" {RETURN_ARROW} {badge_markup}{{{'|'.join(types)}}}"

    def type_strings(self, names: Sequence[str]) -> List[str]:
        return [self.registry.link_to(name) for name in names]

    def attribs_markup(self, doclet: Doclet) -> str:
        return f'<span class="type-signature">{attribute_markers(get_attribs(doclet))}</span>'

    @staticmethod
    def _format_param(param: Param) -> str:
        markers: List[str] = []
        if param.optional:
            markers.append("opt")
        markers.extend(nullability_attribs(param.nullable))
        name = htmlsafe(param.name)
        if param.variable:
            name = ELLIPSIS + name
        return name + attribute_markers(markers)


__all__ = [
    "SignatureBuilder",
    "get_attribs",
    "has_signature",
    "nullability_attribs",
]
