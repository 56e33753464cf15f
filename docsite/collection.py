"""Queryable, sortable collection of doclets loaded from a JSON dump."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Sequence

from .logging import get_logger
from .models import Doclet

DEFAULT_SORT_KEYS = ("longname", "version", "since")

_LOGGER = get_logger("collection")


class DocletSourceError(RuntimeError):
    """Raised when a doclet dump cannot be read as a list of records."""


class _Undefined:
    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()
"""Criterion value matching attributes that are None or empty."""


class DocletCollection:
    """Ordered doclets with predicate and criteria queries."""

    def __init__(self, doclets: Iterable[Doclet] = ()) -> None:
        self._doclets: List[Doclet] = list(doclets)

    @classmethod
    def from_records(cls, records: Sequence[object]) -> "DocletCollection":
        doclets: List[Doclet] = []
        for index, record in enumerate(records):
            doclet = Doclet.from_dict(record) if isinstance(record, Mapping) else None
            if doclet is None:
                _LOGGER.warning("Skipping doclet record %d without a longname", index)
                continue
            doclets.append(doclet)
        return cls(doclets)

    @classmethod
    def from_json(cls, path: Path) -> "DocletCollection":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DocletSourceError(f"Failed to read doclets from {path}: {exc}") from exc
        if not isinstance(data, list):
            raise DocletSourceError(f"{path.name} must contain a JSON list of doclets")
        return cls.from_records(data)

    def __iter__(self) -> Iterator[Doclet]:
        return iter(self._doclets)

    def __len__(self) -> int:
        return len(self._doclets)

    def to_list(self) -> List[Doclet]:
        return list(self._doclets)

    def filter(self, predicate: Callable[[Doclet], bool]) -> "DocletCollection":
        return DocletCollection(doclet for doclet in self._doclets if predicate(doclet))

    def find(self, **criteria: Any) -> List[Doclet]:
        """Return doclets whose attributes match every criterion.

        A list or tuple value matches any of its members; ``UNDEFINED``
        matches a missing value.
        """
        return [doclet for doclet in self._doclets if _matches(doclet, criteria)]

    def first(self, **criteria: Any) -> Optional[Doclet]:
        for doclet in self._doclets:
            if _matches(doclet, criteria):
                return doclet
        return None

    def sort_by(self, *keys: str) -> "DocletCollection":
        """Return a stably sorted copy; missing values sort first."""
        ordered = list(self._doclets)
        for key in reversed(keys or DEFAULT_SORT_KEYS):
            ordered.sort(key=lambda doclet, key=key: _sort_value(getattr(doclet, key, None)))
        return DocletCollection(ordered)

    def prune(self, *, include_private: bool = False) -> "DocletCollection":
        """Drop doclets that are never rendered."""

        def _keep(doclet: Doclet) -> bool:
            if doclet.undocumented or doclet.ignore:
                return False
            if doclet.memberof == "<anonymous>":
                return False
            if not include_private and doclet.access == "private":
                return False
            return True

        return self.filter(_keep)


def _matches(doclet: Doclet, criteria: Mapping[str, Any]) -> bool:
    for key, expected in criteria.items():
        actual = getattr(doclet, key, None)
        if expected is UNDEFINED:
            if actual not in (None, ""):
                return False
        elif isinstance(expected, (list, tuple, set, frozenset)):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


def _sort_value(value: object) -> tuple[int, str]:
    if value is None:
        return (0, "")
    return (1, str(value))


__all__ = ["DEFAULT_SORT_KEYS", "DocletCollection", "DocletSourceError", "UNDEFINED"]
