"""Three-pass enrichment of raw doclets into renderable records.

Each pass consumes the stage value produced by the previous one and returns a
new stage holding fresh doclet copies:

1. ``normalize`` splits examples, turns ``#hash`` see-references into links
   and records every referenced source file.
2. ``link`` trims the source paths to their common directory, registers a
   URL for every doclet, then assigns ids, short paths and signatures.
3. ``derive`` builds ancestor trails and member type signatures, which need
   the links of *other* doclets and therefore the whole of pass 2.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .collection import DocletCollection
from .html import anchor, htmlsafe
from .linking import SCOPE_PUNCTUATION, LinkRegistry
from .logging import get_logger
from .models import Ancestor, Doclet, Example, SourceFileEntry
from .paths import SourcePathMapper, file_path
from .signature import SignatureBuilder, has_signature

_CAPTIONED_EXAMPLE = re.compile(
    r"^\s*<caption>([\s\S]+?)</caption>(\s*[\n\r])([\s\S]+)$", re.IGNORECASE
)
_HASH_REFERENCE = re.compile(r"^#.+")
_URL_FRAGMENT = re.compile(r"(#.+|$)")

_MEMBER_LIKE_KINDS = ("member", "constant")


@dataclass(frozen=True)
class NormalizedDoclets:
    """Output of pass 1."""

    doclets: Tuple[Doclet, ...]
    source_files: Dict[str, SourceFileEntry] = field(default_factory=dict)


@dataclass(frozen=True)
class LinkedDoclets:
    """Output of pass 2; every doclet's link is registered."""

    doclets: Tuple[Doclet, ...]
    source_files: Dict[str, SourceFileEntry] = field(default_factory=dict)


@dataclass(frozen=True)
class EnrichedDoclets:
    """Output of pass 3, ready for navigation and rendering."""

    doclets: Tuple[Doclet, ...]
    source_files: Dict[str, SourceFileEntry] = field(default_factory=dict)

    def collection(self) -> DocletCollection:
        return DocletCollection(self.doclets)


def split_example(example: object) -> Example:
    """Split an example into its ``<caption>`` and code parts."""
    if isinstance(example, Example):
        return example
    text = str(example)
    match = _CAPTIONED_EXAMPLE.match(text)
    if match:
        return Example(caption=match.group(1), code=match.group(3))
    return Example(caption="", code=text)


class DocletEnricher:
    """Runs the enrichment passes against one render's link registry."""

    def __init__(
        self,
        registry: LinkRegistry,
        signature_builder: SignatureBuilder | None = None,
        path_mapper: SourcePathMapper | None = None,
    ) -> None:
        self.registry = registry
        self.signatures = signature_builder or SignatureBuilder(registry)
        self.path_mapper = path_mapper or SourcePathMapper()
        self.logger = get_logger("enricher")

    def enrich(self, doclets: Iterable[Doclet]) -> EnrichedDoclets:
        normalized = self.normalize(doclets)
        linked = self.link(normalized)
        enriched = self.derive(linked)
        self.logger.debug(
            "Enriched %d doclets from %d source files",
            len(enriched.doclets),
            len(enriched.source_files),
        )
        return enriched

    # ------------------------------------------------------------------
    # Pass 1

    def normalize(self, doclets: Iterable[Doclet]) -> NormalizedDoclets:
        source_files: Dict[str, SourceFileEntry] = {}
        normalized: List[Doclet] = []
        for original in doclets:
            doclet = copy.deepcopy(original)
            doclet.attribs = ""
            doclet.examples = [split_example(example) for example in doclet.examples]
            doclet.see = [self.hash_to_link(doclet, reference) for reference in doclet.see]
            path = file_path(doclet)
            if path is not None and path not in source_files:
                source_files[path] = SourceFileEntry(full_path=path)
            normalized.append(doclet)
        return NormalizedDoclets(doclets=tuple(normalized), source_files=source_files)

    def hash_to_link(self, doclet: Doclet, reference: str) -> str:
        """Turn a ``#member`` reference into a link on the doclet's own page."""
        if not _HASH_REFERENCE.match(reference):
            return reference
        url = self.registry.create_link(doclet)
        url = _URL_FRAGMENT.sub(lambda _match: reference, url, count=1)
        return anchor(url, htmlsafe(reference))

    # ------------------------------------------------------------------
    # Pass 2

    def link(self, stage: NormalizedDoclets) -> LinkedDoclets:
        if not isinstance(stage, NormalizedDoclets):
            raise TypeError("link() requires the output of normalize()")
        source_files = copy.deepcopy(stage.source_files)
        self.path_mapper.compute_relative_paths(source_files)

        urls: List[str] = []
        for doclet in stage.doclets:
            url = self.registry.create_link(doclet)
            self.registry.register_link(doclet.longname, url)
            urls.append(url)

        linked: List[Doclet] = []
        for original, url in zip(stage.doclets, urls):
            doclet = copy.deepcopy(original)
            path = file_path(doclet)
            if path is not None and doclet.meta is not None and path in source_files:
                doclet.meta.shortpath = source_files[path].relative_path
            doclet.id = url.split("#")[-1] if "#" in url else doclet.name
            if has_signature(doclet):
                doclet = self.signatures.build_signature(doclet)
            linked.append(doclet)
        return LinkedDoclets(doclets=tuple(linked), source_files=source_files)

    # ------------------------------------------------------------------
    # Pass 3

    def derive(self, stage: LinkedDoclets) -> EnrichedDoclets:
        if not isinstance(stage, LinkedDoclets):
            raise TypeError("derive() requires the output of link()")
        index: Dict[str, Doclet] = {}
        for doclet in stage.doclets:
            index.setdefault(doclet.longname, doclet)

        derived: List[Doclet] = []
        for original in stage.doclets:
            doclet = copy.deepcopy(original)
            doclet.ancestors = self.ancestors(doclet, index)
            if doclet.kind in _MEMBER_LIKE_KINDS:
                doclet = self.signatures.build_type_signature(doclet)
                doclet = self.signatures.add_attribs_property(doclet)
                doclet.kind = "member"
            derived.append(doclet)
        return EnrichedDoclets(doclets=tuple(derived), source_files=dict(stage.source_files))

    def ancestors(self, doclet: Doclet, index: Mapping[str, Doclet]) -> List[Ancestor]:
        """Return the enclosing symbols of ``doclet``, outermost first."""
        chain: List[Ancestor] = []
        seen = {doclet.longname}
        parent_name: Optional[str] = doclet.memberof
        while parent_name and parent_name not in seen:
            parent = index.get(parent_name)
            if parent is None:
                break
            seen.add(parent_name)
            chain.insert(
                0,
                Ancestor(
                    name=SCOPE_PUNCTUATION.get(parent.scope or "", "") + parent.name,
                    link=self.registry.resolve_link(parent.longname),
                    longname=parent.longname,
                ),
            )
            parent_name = parent.memberof
        if chain:
            chain[-1].name += SCOPE_PUNCTUATION.get(doclet.scope or "", "")
        return chain


__all__ = [
    "DocletEnricher",
    "EnrichedDoclets",
    "LinkedDoclets",
    "NormalizedDoclets",
    "split_example",
]
