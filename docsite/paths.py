"""Source file tracking and shared-prefix relative path mapping."""

from __future__ import annotations

import os
from typing import List, MutableMapping, Optional, Sequence

from .logging import get_logger
from .models import Doclet, SourceFileEntry

_LOGGER = get_logger("paths")


def file_path(doclet: Doclet) -> Optional[str]:
    """Return the full source path of ``doclet``, or None when its meta is incomplete."""
    if doclet.meta is None or not doclet.meta.filename:
        return None
    return os.path.join(doclet.meta.path or "", doclet.meta.filename)


def enforce_forward_slashes(path: str) -> str:
    return path.replace("\\", "/")


def common_prefix(paths: Sequence[str]) -> str:
    """Return the longest shared directory prefix of ``paths``, ending in ``/``.

    Paths are compared segment by segment so ``/repo/src`` and ``/repo/srcs``
    share ``/repo/`` only. A single path has no prefix to trim.
    """
    unique = sorted({enforce_forward_slashes(path) for path in paths})
    if len(unique) < 2:
        return ""
    split = [path.split("/")[:-1] for path in unique]
    shared: List[str] = []
    for segments in zip(*split):
        if any(segment != segments[0] for segment in segments[1:]):
            break
        shared.append(segments[0])
    if not shared:
        return ""
    return "/".join(shared) + "/"


class SourcePathMapper:
    """Assigns each source file a path relative to the files' common directory."""

    def compute_relative_paths(
        self, entries: MutableMapping[str, SourceFileEntry]
    ) -> MutableMapping[str, SourceFileEntry]:
        pending = [entry for entry in entries.values() if entry.relative_path is None]
        if not pending:
            return entries
        prefix = common_prefix([entry.full_path for entry in entries.values()])
        _LOGGER.debug("Trimming %r from %d source paths", prefix, len(pending))
        for entry in pending:
            normalized = enforce_forward_slashes(entry.full_path)
            if prefix and normalized.startswith(prefix):
                normalized = normalized[len(prefix):]
            entry.relative_path = normalized
        return entries


__all__ = ["SourcePathMapper", "common_prefix", "enforce_forward_slashes", "file_path"]
