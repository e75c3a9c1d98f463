"""Markdown conversion and page templating."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import jinja2
import markdown
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from .errors import TemplateError

DEFAULT_TEMPLATE_PATH = Path(__file__).with_name("templates") / "doc_template.html"
MARKDOWN_EXTENSIONS: Sequence[str] = ("extra", "fenced_code", "tables", "sane_lists")


def markdown_to_html(text: str) -> str:
    """Convert a markdown body into an HTML fragment (no surrounding page)."""
    return markdown.markdown(text, extensions=list(MARKDOWN_EXTENSIONS), output_format="html")


class PageTemplate:
    """Full-page HTML template receiving the title, body and navigation tree."""

    def __init__(self, template_path: Path | None = None) -> None:
        self.path = (template_path or DEFAULT_TEMPLATE_PATH).expanduser().resolve()
        env = Environment(
            loader=FileSystemLoader(str(self.path.parent)),
            autoescape=select_autoescape(["html", "htm"]),
            keep_trailing_newline=True,
        )
        try:
            self._template = env.get_template(self.path.name)
        except TemplateNotFound as exc:
            raise TemplateError(f"HTML template not found: {self.path}") from exc
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateError(
                f"Failed to parse HTML template {self.path} (line {exc.lineno}): {exc.message}"
            ) from exc

    def render(
        self, *, title: str, body_html: str, nav_tree_html: str, source_url: str = ""
    ) -> str:
        try:
            return self._template.render(
                page_title=title,
                page_body=body_html,
                nav_tree=nav_tree_html,
                source_url=source_url,
            )
        except jinja2.TemplateError as exc:
            raise TemplateError(f"Failed to render {title!r} with {self.path.name}: {exc}") from exc


__all__ = ["DEFAULT_TEMPLATE_PATH", "PageTemplate", "markdown_to_html"]
