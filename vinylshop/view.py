"""Rendering of the page templates found in one directory."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, TemplateSyntaxError


class TemplateLoadError(Exception):
    """Raised when the template directory cannot be loaded."""


class TemplateRenderer:
    """Loads every ``*.tpl`` file in a directory and renders them by file name."""

    def __init__(self, directory: str | Path) -> None:
        root = Path(directory)
        paths = sorted(root.glob("*.tpl"))
        if not paths:
            raise TemplateLoadError(f"parse templates: no files match {root / '*.tpl'}")

        env = Environment(loader=FileSystemLoader(str(root)), autoescape=False)
        self._templates: dict[str, Template] = {}
        for path in paths:
            try:
                self._templates[path.name] = env.get_template(path.name)
            except TemplateSyntaxError as exc:
                raise TemplateLoadError(f"parse templates: {path.name}: {exc}") from exc

    def render(self, name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render template ``name`` with ``data`` as its context."""
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFound(name)
        return template.render(dict(data) if data else {})