"""Tests for docsite.templates."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from docsite.config import TemplateConfig
from docsite.templates import BUNDLED_DIR, DEFAULT_LAYOUT, TemplateLoader


def _custom_theme(tmp_path: Path) -> Path:
    views = tmp_path / "theme" / "tmpl"
    views.mkdir(parents=True)
    (views / "tutorial.html.j2").write_text("custom {{ tutorial.title }}", encoding="utf-8")
    return tmp_path / "theme"


def test_load_view_prefers_custom_directory(tmp_path: Path) -> None:
    loader = TemplateLoader(custom_dir=_custom_theme(tmp_path))

    assert loader.load_view("tutorial") == tmp_path / "theme" / "tmpl" / "tutorial.html.j2"
    assert loader.load_view("index") == BUNDLED_DIR / "tmpl" / "index.html.j2"


def test_load_view_returns_none_when_missing(caplog: pytest.LogCaptureFixture) -> None:
    loader = TemplateLoader()

    with caplog.at_level(logging.WARNING, logger="docsite"):
        assert loader.load_view("nope") is None

    assert "View nope (nope.html.j2) not found" in caplog.text
    assert loader.template_dir(custom=True) is None


def test_primary_layout_falls_back_to_default(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    loader = TemplateLoader(custom_dir=_custom_theme(tmp_path))

    assert loader.primary_layout_file(TemplateConfig()) == DEFAULT_LAYOUT
    with caplog.at_level(logging.WARNING, logger="docsite"):
        assert loader.primary_layout_file(TemplateConfig(layout_file="gone.html.j2")) == DEFAULT_LAYOUT
    assert "Layout gone.html.j2 not found" in caplog.text

    (tmp_path / "theme" / "tmpl" / "mine.html.j2").write_text("{{ content }}", encoding="utf-8")
    assert loader.primary_layout_file(TemplateConfig(layout_file="mine.html.j2")) == "mine.html.j2"


def test_render_uses_custom_views_and_escapes(tmp_path: Path) -> None:
    loader = TemplateLoader(custom_dir=_custom_theme(tmp_path))

    class _Tutorial:
        title = "<Intro>"

    assert loader.render("tutorial.html.j2", tutorial=_Tutorial()) == "custom &lt;Intro&gt;"


def test_render_missing_template_raises(caplog: pytest.LogCaptureFixture) -> None:
    loader = TemplateLoader()

    with caplog.at_level(logging.ERROR, logger="docsite"):
        with pytest.raises(TemplateNotFound):
            loader.render("missing.html.j2")

    assert "Template missing.html.j2 is missing" in caplog.text


def test_static_dir_ships_stylesheet() -> None:
    assert (TemplateLoader().static_dir() / "styles" / "docsite.css").is_file()
