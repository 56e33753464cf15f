"""Tutorial tree loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Set

import yaml

from .files import all_file_paths
from .logging import get_logger
from .models import Tutorial

_TUTORIAL_SUFFIXES = {".html", ".htm"}
_HIERARCHY_FILES = ("tutorials.json", "tutorials.yml", "tutorials.yaml")

_LOGGER = get_logger("tutorials")


def load_tutorials(directory: Path | None) -> Tutorial:
    """Return an anonymous root tutorial holding every tutorial found in ``directory``."""
    root = Tutorial()
    if directory is None:
        return root
    directory = Path(directory)
    if not directory.is_dir():
        _LOGGER.warning("Tutorial directory does not exist: %s", directory)
        return root

    tutorials: Dict[str, Tutorial] = {}
    for path in all_file_paths(directory):
        if path.suffix.lower() not in _TUTORIAL_SUFFIXES:
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning("Skipping unreadable tutorial %s: %s", path, exc)
            continue
        name = path.stem
        if name in tutorials:
            _LOGGER.warning("Duplicate tutorial name %s ignored (%s)", name, path)
            continue
        tutorials[name] = Tutorial(name=name, title=name, content=content)

    claimed: Set[str] = set()
    _apply_hierarchy(_read_hierarchy(directory), tutorials, claimed, parent=None)
    root.children = [tutorial for name, tutorial in tutorials.items() if name not in claimed]
    return root


def iter_tutorials(root: Tutorial) -> Iterator[Tutorial]:
    """Yield every named tutorial below ``root`` once, depth first."""
    seen: Set[str] = set()
    stack = list(reversed(root.children))
    while stack:
        tutorial = stack.pop()
        if tutorial.name is None or tutorial.name in seen:
            continue
        seen.add(tutorial.name)
        yield tutorial
        stack.extend(reversed(tutorial.children))


def _read_hierarchy(directory: Path) -> Mapping[str, Any]:
    for filename in _HIERARCHY_FILES:
        path = directory / filename
        if not path.is_file():
            continue
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            _LOGGER.warning("Ignoring unreadable tutorial hierarchy %s: %s", path, exc)
            return {}
        if isinstance(loaded, dict):
            return loaded
        _LOGGER.warning("Tutorial hierarchy %s must contain a mapping", path)
        return {}
    return {}


def _apply_hierarchy(
    mapping: Mapping[str, Any],
    tutorials: Mapping[str, Tutorial],
    claimed: Set[str],
    parent: Optional[Tutorial],
) -> None:
    for name, entry in mapping.items():
        tutorial = tutorials.get(str(name))
        if tutorial is None:
            _LOGGER.warning("Tutorial hierarchy names unknown tutorial: %s", name)
            continue
        if parent is not None:
            if tutorial.name in claimed or _contains(tutorial, parent):
                _LOGGER.warning("Tutorial %s already has a parent; ignoring", tutorial.name)
                continue
            parent.children.append(tutorial)
            claimed.add(str(tutorial.name))
        if not isinstance(entry, dict):
            continue
        title = entry.get("title")
        if isinstance(title, str) and title:
            tutorial.title = title
        children = entry.get("children")
        if isinstance(children, list):
            children = {child: {} for child in children if isinstance(child, str)}
        if isinstance(children, dict):
            _apply_hierarchy(children, tutorials, claimed, tutorial)


def _contains(node: Tutorial, target: Tutorial) -> bool:
    if node is target:
        return True
    return any(_contains(child, target) for child in node.children)


__all__ = ["iter_tutorials", "load_tutorials"]
