"""Template lookup and rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from .config import TemplateConfig
from .logging import get_logger

BUNDLED_DIR = Path(__file__).parent
VIEW_DIR_NAME = "tmpl"
STATIC_DIR_NAME = "static"
DEFAULT_LAYOUT = "layout.html.j2"


class TemplateLoader:
    """Resolves views from a custom directory first, then the bundled templates."""

    def __init__(self, base_dir: Path | None = None, custom_dir: Path | None = None) -> None:
        self.base_dir = base_dir or BUNDLED_DIR
        self.custom_dir = custom_dir
        self.logger = get_logger("templates")
        self._env = self._create_env()

    @classmethod
    def from_config(cls, templates: TemplateConfig) -> "TemplateLoader":
        return cls(custom_dir=templates.custom_dir)

    def template_dir(self, custom: bool = False) -> Optional[Path]:
        if custom:
            return self.custom_dir / VIEW_DIR_NAME if self.custom_dir else None
        return self.base_dir / VIEW_DIR_NAME

    def static_dir(self) -> Path:
        return self.base_dir / STATIC_DIR_NAME

    def load_view(self, view_name: str, file_ending: str = "html.j2") -> Optional[Path]:
        """Return the path of a view, preferring a customized copy; None when neither exists."""
        filename = f"{view_name}.{file_ending}"
        checked: List[Path] = []
        for directory in (self.template_dir(custom=True), self.template_dir()):
            if directory is None:
                continue
            candidate = directory / filename
            if candidate.is_file():
                return candidate
            checked.append(candidate)
        self.logger.warning(
            "View %s (%s) not found; checked: %s",
            view_name,
            filename,
            ", ".join(str(path) for path in checked),
        )
        return None

    def primary_layout_file(self, templates: TemplateConfig) -> str:
        layout = templates.layout_file or DEFAULT_LAYOUT
        name = Path(layout).name
        for directory in (self.template_dir(custom=True), self.template_dir()):
            if directory is not None and (directory / name).is_file():
                return name
        self.logger.warning("Layout %s not found; using %s", layout, DEFAULT_LAYOUT)
        return DEFAULT_LAYOUT

    def render(self, template_name: str, **context: Any) -> str:
        try:
            template = self._env.get_template(template_name)
        except TemplateNotFound:
            self.logger.error("Template %s is missing", template_name)
            raise
        return template.render(**context)

    def _create_env(self) -> Environment:
        directories: List[str] = []
        custom = self.template_dir(custom=True)
        if custom is not None:
            directories.append(str(custom))
        directories.append(str(self.template_dir()))
        return Environment(
            loader=FileSystemLoader(directories),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )


__all__ = ["BUNDLED_DIR", "DEFAULT_LAYOUT", "TemplateLoader"]
