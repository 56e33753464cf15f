"""Symbol-to-URL registry and collision-free output file naming."""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Set

from .html import anchor, htmlsafe
from .logging import get_logger
from .models import GLOBAL_LONGNAME, Doclet

_NAMESPACE_PREFIX = re.compile(r"^(module|event|external):")
_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/?*:|'\"<>]")
_TRAILING_CALL = re.compile(r"\([\s\S]*\)$")
_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_.~:$-]")
_TYPE_EXPRESSION_SPLIT = re.compile(r"([<>,|()\[\]{}\s]+)")
_TYPE_EXPRESSION_CHARS = re.compile(r"[<>,|()\[\]{}\s]")

SCOPE_PUNCTUATION: Mapping[str, str] = {
    "static": ".",
    "inner": "~",
    "instance": "#",
}


class UrlGenerator:
    """Derives output file names and fragment ids that never collide within one render."""

    def __init__(self, extension: str = ".html") -> None:
        self.extension = extension
        self._by_seed: Dict[str, str] = {}
        self._taken: Set[str] = set()
        self._ids_by_longname: Dict[str, str] = {}
        self._ids_by_file: Dict[str, Set[str]] = {}

    def get_unique_filename(self, seed: str) -> str:
        """Return the file name for ``seed``; the same seed always maps to the same name."""
        existing = self._by_seed.get(seed)
        if existing is not None:
            return existing
        basename = _sanitize_filename(seed)
        candidate = basename
        counter = 0
        while candidate.lower() in self._taken:
            counter += 1
            candidate = f"{basename}_{counter}"
        self._taken.add(candidate.lower())
        filename = candidate + self.extension
        self._by_seed[seed] = filename
        return filename

    def get_unique_id(self, filename: str, longname: str, base: str) -> str:
        """Return a fragment id for ``longname`` that is unique within ``filename``."""
        existing = self._ids_by_longname.get(longname)
        if existing is not None:
            return existing
        used = self._ids_by_file.setdefault(filename, set())
        sanitized = _UNSAFE_ID_CHARS.sub("_", base) or "_"
        candidate = sanitized
        counter = 0
        while candidate in used:
            counter += 1
            candidate = f"{sanitized}_{counter}"
        used.add(candidate)
        self._ids_by_longname[longname] = candidate
        return candidate

    def tutorial_to_url(self, name: str) -> str:
        return self.get_unique_filename(f"tutorial-{name}")


class LinkRegistry:
    """Maps longnames to generated URLs for the duration of one render."""

    def __init__(self, url_generator: UrlGenerator | None = None) -> None:
        self.urls = url_generator or UrlGenerator()
        self.logger = get_logger("linking")
        self._links: Dict[str, str] = {}
        self.register_link(GLOBAL_LONGNAME, self.urls.get_unique_filename(GLOBAL_LONGNAME))

    def register_link(self, longname: str, url: str) -> None:
        previous = self._links.get(longname)
        if previous is not None and previous != url:
            self.logger.debug("Replacing link for %s: %s -> %s", longname, previous, url)
        self._links[longname] = url

    def resolve_link(self, longname: str | None) -> Optional[str]:
        if not longname:
            return None
        return self._links.get(longname)

    def create_link(self, doclet: Doclet) -> str:
        """Return the URL for ``doclet`` without registering it."""
        if doclet.is_container or doclet.is_module_exports:
            return self.urls.get_unique_filename(doclet.longname)

        filename = self.urls.get_unique_filename(doclet.memberof or GLOBAL_LONGNAME)
        if doclet.name == doclet.longname and doclet.scope != "global":
            return filename
        fragment = self.urls.get_unique_id(filename, doclet.longname, _fragment_base(doclet))
        return f"{filename}#{fragment}"

    def link_to(
        self,
        longname: str | None,
        text: str | None = None,
        css_class: str | None = None,
    ) -> str:
        """Render a link to ``longname``, or escaped text when it does not resolve."""
        label = text if text is not None else (longname or "")
        url = self.resolve_link(longname)
        if url is not None:
            return anchor(url, htmlsafe(label), css_class)
        if text is None and longname and _TYPE_EXPRESSION_CHARS.search(longname):
            return self._link_type_expression(longname, css_class)
        return htmlsafe(label)

    def __len__(self) -> int:
        return len(self._links)

    def _link_type_expression(self, expression: str, css_class: str | None) -> str:
        parts = []
        for token in _TYPE_EXPRESSION_SPLIT.split(expression):
            if not token:
                continue
            if _TYPE_EXPRESSION_SPLIT.fullmatch(token):
                parts.append(htmlsafe(token))
                continue
            url = self.resolve_link(token)
            parts.append(anchor(url, htmlsafe(token), css_class) if url else htmlsafe(token))
        return "".join(parts)


def _sanitize_filename(seed: str) -> str:
    basename = _NAMESPACE_PREFIX.sub(r"\1-", seed)
    basename = _UNSAFE_FILENAME_CHARS.sub("_", basename)
    basename = basename.replace("~", "-").replace("#", "_")
    basename = _TRAILING_CALL.sub("", basename)
    if basename.startswith("."):
        basename = basename[1:]
    return basename or "_"


def _fragment_base(doclet: Doclet) -> str:
    if doclet.kind == "event":
        return f"event:{doclet.name}"
    if doclet.scope in ("static", "inner"):
        return SCOPE_PUNCTUATION[doclet.scope] + doclet.name
    return doclet.name or doclet.longname


__all__ = ["LinkRegistry", "SCOPE_PUNCTUATION", "UrlGenerator"]
