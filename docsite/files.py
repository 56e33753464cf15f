"""Filesystem helpers used when writing the generated site."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .logging import get_logger

_LOGGER = get_logger("files")


def generate_file_path(target_dir: Path, filename: str) -> Path:
    return Path(target_dir) / filename


def write_file(outpath: Path, content: str, encoding: str = "utf-8") -> Path:
    outpath = Path(outpath)
    create_directory(outpath.parent)
    outpath.write_text(content, encoding=encoding)
    return outpath


def create_directory(directory: Path) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def all_file_paths(directory: Path) -> List[Path]:
    """Return every file below ``directory``, recursing into subdirectories."""
    directory = Path(directory)
    if not directory.is_dir():
        _LOGGER.warning("Directory does not exist: %s", directory)
        return []
    return sorted(path for path in directory.rglob("*") if path.is_file())


def all_dir_paths(directory: Path) -> List[Path]:
    directory = Path(directory)
    if not directory.is_dir():
        _LOGGER.warning("Directory does not exist: %s", directory)
        return []
    return sorted(path for path in directory.rglob("*") if path.is_dir())


def copy_all_files(existing_dir: Path, target_dir: Path) -> List[Path]:
    """Copy the tree under ``existing_dir`` into ``target_dir``, keeping its layout."""
    existing_dir = Path(existing_dir)
    copied: List[Path] = []
    for source in all_file_paths(existing_dir):
        destination = Path(target_dir) / source.relative_to(existing_dir)
        create_directory(destination.parent)
        shutil.copy2(source, destination)
        copied.append(destination)
    return copied


__all__ = [
    "all_dir_paths",
    "all_file_paths",
    "copy_all_files",
    "create_directory",
    "generate_file_path",
    "write_file",
]
