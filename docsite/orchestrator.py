"""Render pipeline: enrich doclets, build navigation and write the site."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

from markupsafe import Markup

from .collection import DEFAULT_SORT_KEYS, DocletCollection
from .config import SiteConfig
from .enricher import DocletEnricher, EnrichedDoclets
from .files import copy_all_files, create_directory, generate_file_path, write_file
from .linking import LinkRegistry
from .logging import get_logger
from .models import GLOBAL_LONGNAME, Doclet, Tutorial
from .navigation import Navigation, NavigationBuilder, get_members
from .templates import TemplateLoader
from .tutorials import iter_tutorials

# (heading, kinds) of the member listings on a container page.
PAGE_SECTIONS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Classes", ("class",)),
    ("Mixins", ("mixin",)),
    ("Namespaces", ("namespace",)),
    ("Interfaces", ("interface",)),
    ("Members", ("member",)),
    ("Methods", ("function",)),
    ("Type Definitions", ("typedef",)),
    ("Events", ("event",)),
)


@dataclass
class RenderResult:
    """Outcome of one render invocation."""

    destination: Path
    files: List[Path] = field(default_factory=list)
    navigation: Navigation = field(default_factory=Navigation)
    doclets: Optional[EnrichedDoclets] = None


class Orchestrator:
    """Coordinates one site render from loaded doclets and tutorials."""

    def __init__(
        self,
        config: SiteConfig | None = None,
        template_loader: TemplateLoader | None = None,
    ) -> None:
        self.config = config or SiteConfig(root=Path.cwd())
        self.templates = template_loader or TemplateLoader.from_config(self.config.templates)
        self.logger = get_logger("orchestrator")

    def render(
        self,
        collection: DocletCollection,
        tutorials: Tutorial | None = None,
        destination: Path | None = None,
    ) -> RenderResult:
        """Render ``collection`` into ``destination``; every call uses a fresh link registry."""
        destination = Path(destination or self.config.options.destination)
        tutorials = tutorials or Tutorial()
        self.logger.info("Rendering %d doclets into %s", len(collection), destination)

        registry = LinkRegistry()
        index_filename = registry.urls.get_unique_filename("index")
        doclets = collection.prune(include_private=self.config.options.include_private).sort_by(
            *DEFAULT_SORT_KEYS
        )
        self.logger.debug("%d doclets left after pruning", len(doclets))
        enriched = DocletEnricher(registry).enrich(doclets)

        for tutorial in iter_tutorials(tutorials):
            registry.register_link(
                str(tutorial.longname), registry.urls.tutorial_to_url(str(tutorial.name))
            )

        enriched_collection = enriched.collection()
        members = get_members(enriched_collection)
        navigation = NavigationBuilder.from_config(
            registry, self.config.templates, enriched_collection
        ).build(members, tutorials)

        create_directory(destination)
        result = RenderResult(destination=destination, navigation=navigation, doclets=enriched)
        result.files.extend(self._copy_static_files(destination))

        layout = self.templates.primary_layout_file(self.config.templates)
        context = {"navigation": Markup(navigation.markup), "link_to": registry.link_to}

        result.files.append(
            self._write_page(
                destination,
                layout,
                index_filename,
                "index.html.j2",
                title="Home",
                sections=_page_sections(
                    [doclet for doclet in enriched_collection if doclet.is_container]
                ),
                **context,
            )
        )

        global_url = registry.resolve_link(GLOBAL_LONGNAME) or f"{GLOBAL_LONGNAME}.html"
        reserved = {global_url, index_filename}
        written: Set[str] = set()
        for doclet in enriched_collection:
            if not doclet.is_container:
                continue
            url = registry.resolve_link(doclet.longname)
            if url is None or "#" in url or url in written:
                continue
            if url in reserved:
                self.logger.warning("Not writing %s to reserved page %s", doclet.longname, url)
                continue
            exports = [
                other
                for other in enriched_collection.find(longname=doclet.longname)
                if other.is_module_exports
            ]
            children = exports + enriched_collection.find(memberof=doclet.longname)
            written.add(url)
            result.files.append(
                self._write_page(
                    destination,
                    layout,
                    url,
                    "container.html.j2",
                    title=doclet.longname,
                    doclet=doclet,
                    sections=_page_sections(children),
                    **context,
                )
            )

        if members["globals"]:
            result.files.append(
                self._write_page(
                    destination,
                    layout,
                    global_url,
                    "container.html.j2",
                    title="Global",
                    doclet=None,
                    sections=_page_sections(members["globals"]),
                    **context,
                )
            )

        for tutorial in iter_tutorials(tutorials):
            url = registry.resolve_link(tutorial.longname)
            if url is None:
                continue
            children = [
                (child, registry.resolve_link(child.longname)) for child in tutorial.children
            ]
            result.files.append(
                self._write_page(
                    destination,
                    layout,
                    url,
                    "tutorial.html.j2",
                    title=tutorial.title,
                    tutorial=tutorial,
                    children=children,
                    **context,
                )
            )

        self.logger.info("Wrote %d files to %s", len(result.files), destination)
        return result

    def _write_page(
        self,
        destination: Path,
        layout: str,
        filename: str,
        view: str,
        *,
        title: str,
        navigation: Markup,
        **context: object,
    ) -> Path:
        content = self.templates.render(view, title=title, **context)
        page = self.templates.render(
            layout, title=title, navigation=navigation, content=Markup(content)
        )
        self.logger.debug("Writing %s", filename)
        return write_file(generate_file_path(destination, filename), page)

    def _copy_static_files(self, destination: Path) -> List[Path]:
        copied = copy_all_files(self.templates.static_dir(), destination)
        for include in self.config.templates.static_files:
            source = Path(include)
            if not source.is_absolute():
                source = self.config.root / source
            copied.extend(copy_all_files(source, destination))
        return copied


def _page_sections(doclets: Sequence[Doclet]) -> List[Tuple[str, List[Doclet]]]:
    grouped: Dict[str, List[Doclet]] = {heading: [] for heading, _ in PAGE_SECTIONS}
    for doclet in doclets:
        for heading, kinds in PAGE_SECTIONS:
            if doclet.kind in kinds:
                grouped[heading].append(doclet)
                break
    return [(heading, grouped[heading]) for heading, _ in PAGE_SECTIONS if grouped[heading]]


__all__ = ["Orchestrator", "PAGE_SECTIONS", "RenderResult"]
