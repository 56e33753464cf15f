"""Navigation tree construction and markup."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Set, Union

from .collection import UNDEFINED, DocletCollection
from .config import TemplateConfig
from .html import htmlsafe
from .linking import LinkRegistry
from .logging import get_logger
from .models import GLOBAL_LONGNAME, Doclet, NavigationNode, Tutorial

NavElement = Union[Doclet, Tutorial]
LinkFn = Callable[[str, str], str]

_QUALIFIER = re.compile(r"\b(module|event):")

# Kinds listed beneath their container when collapsible navigation is on.
_CHILD_KINDS = ("function", "member", "constant", "typedef")

SECTION_ORDER = (
    ("classes", "Classes"),
    ("modules", "Modules"),
    ("namespaces", "Namespaces"),
    ("mixins", "Mixins"),
    ("externals", "Externals"),
    ("events", "Events"),
    ("tutorials", None),
    ("globals", "Global"),
)


@dataclass
class NavSection:
    """One rendered navigation section."""

    key: str
    heading: str
    nodes: List[NavigationNode] = field(default_factory=list)
    markup: str = ""


@dataclass
class Navigation:
    """All navigation sections of a render, in display order."""

    sections: List[NavSection] = field(default_factory=list)

    @property
    def markup(self) -> str:
        return "".join(section.markup for section in self.sections)

    def section(self, key: str) -> Optional[NavSection]:
        for section in self.sections:
            if section.key == key:
                return section
        return None


def get_members(collection: DocletCollection) -> Dict[str, List[Doclet]]:
    """Group enriched doclets into the navigation categories."""
    return {
        "classes": collection.find(kind="class"),
        "externals": collection.find(kind="external"),
        "events": collection.find(kind="event"),
        "globals": [
            doclet
            for doclet in collection.find(
                kind=["member", "function", "constant", "typedef"], memberof=UNDEFINED
            )
            if not doclet.is_module_exports
        ],
        "interfaces": collection.find(kind="interface"),
        "mixins": collection.find(kind="mixin"),
        "modules": collection.find(kind="module"),
        "namespaces": collection.find(kind="namespace"),
    }


class NavigationBuilder:
    """Builds de-duplicated navigation sections for one render."""

    def __init__(
        self,
        registry: LinkRegistry,
        *,
        use_long_names: bool = False,
        use_collapsibles: bool = True,
        tutorials_heading: str = "Tutorials",
        collection: DocletCollection | None = None,
    ) -> None:
        self.registry = registry
        self.use_long_names = use_long_names
        self.use_collapsibles = use_collapsibles
        self.tutorials_heading = tutorials_heading
        self.collection = collection
        self.logger = get_logger("navigation")

    @classmethod
    def from_config(
        cls,
        registry: LinkRegistry,
        templates: TemplateConfig,
        collection: DocletCollection | None = None,
    ) -> "NavigationBuilder":
        return cls(
            registry,
            use_long_names=templates.use_long_names,
            use_collapsibles=templates.use_collapsibles,
            tutorials_heading=templates.tutorials_heading,
            collection=collection,
        )

    def build(
        self,
        members: Mapping[str, Sequence[Doclet]],
        tutorials: Tutorial | None = None,
    ) -> Navigation:
        visited: Set[str] = set()
        navigation = Navigation()
        for key, heading in SECTION_ORDER:
            if key == "tutorials":
                section = self._section(
                    key, self.tutorials_heading, [tutorials] if tutorials else [], visited
                )
            elif key == "globals":
                section = self._global_section(members.get("globals", []), visited)
            else:
                section = self._section(key, heading, members.get(key, []), visited)
            navigation.sections.append(section)
        self.logger.debug("Navigation lists %d symbols", len(visited))
        return navigation

    def build_section(
        self,
        elements: Sequence[NavElement],
        heading: str,
        visited: Set[str],
        link_fn: LinkFn,
    ) -> str:
        """Render one section; elements already in ``visited`` are left out."""
        if not elements:
            return ""
        nodes = self.collect_nodes(elements, visited, link_fn)
        return self.section_markup(heading, nodes)

    def collect_nodes(
        self,
        elements: Sequence[NavElement],
        visited: Set[str],
        link_fn: LinkFn,
    ) -> List[NavigationNode]:
        nodes: List[NavigationNode] = []
        for element in elements:
            longname = element.longname
            if not longname:
                nodes.extend(self.collect_nodes(self._children(element), visited, link_fn))
                continue
            if longname in visited:
                continue
            visited.add(longname)
            display_name = self.display_name(element)
            node = NavigationNode(
                display_name=display_name,
                link=link_fn(longname, display_name),
                kind=element.kind,
                longname=longname,
            )
            node.children = self.collect_nodes(self._children(element), visited, link_fn)
            nodes.append(node)
        return nodes

    def display_name(self, element: NavElement) -> str:
        """Label shown in the navigation; symbol names lose their ``module:``/``event:`` qualifier."""
        if isinstance(element, Tutorial):
            return element.title or element.name or ""
        if self.use_long_names or element.kind == "namespace":
            name = element.longname
        else:
            name = element.name
        return _QUALIFIER.sub("", name)

    def section_markup(self, heading: str, nodes: Sequence[NavigationNode]) -> str:
        if not nodes:
            return ""
        class_name = "examples hidden" if heading == self.tutorials_heading else "api hidden"
        items = "".join(self.render_node(node) for node in nodes)
        return f'<div class="{class_name}"><h3>{htmlsafe(heading)}</h3><ul>{items}</ul></div>'

    def render_node(self, node: NavigationNode) -> str:
        if self.use_collapsibles:
            return self._render_collapsible(node)
        return self._render_flat(node)

    def _render_collapsible(self, node: NavigationNode) -> str:
        if not node.children:
            return f"<li>{node.link}</li>"
        children = "".join(self._render_collapsible(child) for child in node.children)
        return (
            '<li class="collapsible">'
            '<span class="toggle" role="button" aria-expanded="false"></span>'
            f'{node.link}<ul class="collapsible-body">{children}</ul></li>'
        )

    def _render_flat(self, node: NavigationNode) -> str:
        if not node.children:
            return f"<li>{node.link}</li>"
        children = "".join(self._render_flat(child) for child in node.children)
        return f"<li>{node.link}<ul>{children}</ul></li>"

    def _section(
        self,
        key: str,
        heading: str,
        elements: Sequence[NavElement],
        visited: Set[str],
    ) -> NavSection:
        nodes = self.collect_nodes(elements, visited, self._link) if elements else []
        return NavSection(
            key=key, heading=heading, nodes=nodes, markup=self.section_markup(heading, nodes)
        )

    def _global_section(self, globals_: Sequence[Doclet], visited: Set[str]) -> NavSection:
        listed = [doclet for doclet in globals_ if doclet.kind != "typedef"]
        section = self._section("globals", "Global", listed, visited)
        for doclet in globals_:
            visited.add(doclet.longname)
        if not section.markup and globals_:
            section.markup = f"<h3>{self._link(GLOBAL_LONGNAME, 'Global')}</h3>"
        return section

    def _link(self, longname: str, text: str) -> str:
        return self.registry.link_to(longname, text)

    def _children(self, element: NavElement) -> List[NavElement]:
        if isinstance(element, Tutorial):
            return list(element.children)
        if not self.use_collapsibles or self.collection is None or not element.is_container:
            return []
        return list(self.collection.find(memberof=element.longname, kind=list(_CHILD_KINDS)))


__all__ = [
    "LinkFn",
    "NavElement",
    "NavSection",
    "Navigation",
    "NavigationBuilder",
    "SECTION_ORDER",
    "get_members",
]
