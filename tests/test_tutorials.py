"""Tests for docsite.tutorials."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from docsite.tutorials import iter_tutorials, load_tutorials


def _write(directory: Path, name: str, content: str = "<p>x</p>") -> None:
    (directory / name).write_text(content, encoding="utf-8")


def test_missing_directory_yields_empty_root(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    assert load_tutorials(None).children == []
    with caplog.at_level(logging.WARNING, logger="docsite"):
        root = load_tutorials(tmp_path / "missing")

    assert root.name is None
    assert root.children == []
    assert "Tutorial directory does not exist" in caplog.text


def test_flat_directory_without_hierarchy(tmp_path: Path) -> None:
    _write(tmp_path, "intro.html", "<p>Hello</p>")
    _write(tmp_path, "notes.txt")

    root = load_tutorials(tmp_path)

    assert [t.name for t in root.children] == ["intro"]
    assert root.children[0].title == "intro"
    assert root.children[0].content == "<p>Hello</p>"
    assert root.children[0].longname == "tutorial:intro"


def test_hierarchy_file_sets_titles_and_children(tmp_path: Path) -> None:
    for name in ("start.html", "install.html", "usage.html", "faq.html"):
        _write(tmp_path, name)
    hierarchy = {
        "start": {"title": "Getting started", "children": ["install", "usage"]},
        "faq": {"title": "FAQ"},
    }
    (tmp_path / "tutorials.json").write_text(json.dumps(hierarchy), encoding="utf-8")

    root = load_tutorials(tmp_path)

    assert [t.name for t in root.children] == ["faq", "start"]
    start = root.children[1]
    assert start.title == "Getting started"
    assert [child.name for child in start.children] == ["install", "usage"]
    assert [t.name for t in iter_tutorials(root)] == ["faq", "start", "install", "usage"]


def test_second_parent_and_unknown_names_are_ignored(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    for name in ("a.html", "b.html", "shared.html"):
        _write(tmp_path, name)
    (tmp_path / "tutorials.yml").write_text(
        "a:\n  children: [shared, ghost]\nb:\n  children: [shared, a]\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="docsite"):
        root = load_tutorials(tmp_path)

    by_name = {t.name: t for t in iter_tutorials(root)}
    assert [child.name for child in by_name["a"].children] == ["shared"]
    assert [child.name for child in by_name["b"].children] == ["a"]
    assert [t.name for t in root.children] == ["b"]
    assert "unknown tutorial: ghost" in caplog.text
    assert "Tutorial shared already has a parent; ignoring" in caplog.text


def test_cycles_in_hierarchy_are_ignored(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    _write(tmp_path, "a.html")
    _write(tmp_path, "b.html")
    (tmp_path / "tutorials.yml").write_text(
        "a:\n  children:\n    b:\n      children: [a]\n", encoding="utf-8"
    )

    with caplog.at_level(logging.WARNING, logger="docsite"):
        root = load_tutorials(tmp_path)

    assert [t.name for t in root.children] == ["a"]
    assert [t.name for t in iter_tutorials(root)] == ["a", "b"]
    assert "Tutorial a already has a parent; ignoring" in caplog.text
