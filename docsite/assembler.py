"""Drives a single source file through classification, rendering and nav insertion."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Dict, Optional

from .classify import classify
from .errors import OutputCollisionError
from .fileio import copy_file, read_file, write_file
from .logging import get_logger
from .models import DocumentKind, File, Page
from .nav.tree import NavTree
from .paths import replace_md_extension_with_html, resolve_output_path, title_for_output_path
from .postproc.links import PackageLinkResolver
from .render import PageTemplate, markdown_to_html


@dataclass
class AssemblyResult:
    """What happened to one source file."""

    file: File
    kind: DocumentKind
    page: Optional[Page] = None
    copied_to: Optional[Path] = None


class PageAssembler:
    """Turns source files into pages on a shared navigation tree.

    The output root, template and link resolver are passed in explicitly so
    several sites can be assembled in the same process.
    """

    def __init__(
        self,
        output_root: Path,
        *,
        template: PageTemplate,
        nav_tree: NavTree | None = None,
        link_resolver: PackageLinkResolver | None = None,
        to_html: Callable[[str], str] = markdown_to_html,
    ) -> None:
        self.output_root = Path(output_root)
        self.template = template
        self.nav_tree = nav_tree or NavTree()
        self.link_resolver = link_resolver or PackageLinkResolver()
        self.to_html = to_html
        self.logger = get_logger("assembler")
        # Output path -> input path of every image copied so far.
        self._copied: Dict[str, str] = {}

    def process(self, file: File) -> AssemblyResult:
        """Classify ``file`` and, for documents, add a populated page to the tree."""
        kind = classify(file.input_path)
        if kind is DocumentKind.SKIP:
            self.logger.debug("Skipping %s", file.input_path)
            return AssemblyResult(file=file, kind=kind)

        resolved = replace(file, output_path=resolve_output_path(kind, file.input_path))

        if not kind.is_document:
            existing = self._copied.get(resolved.output_path)
            if existing is not None:
                raise OutputCollisionError(resolved.output_path, resolved.input_path, existing)
            destination = self.output_root / resolved.output_path
            self.logger.info("Copying %s to %s", resolved.input_path, destination)
            copy_file(resolved.full_input_path, destination)
            self._copied[resolved.output_path] = resolved.input_path
            return AssemblyResult(file=resolved, kind=kind, copied_to=destination)

        page = Page.from_file(resolved)
        self.populate(page)
        self.nav_tree.add_page(page)
        return AssemblyResult(file=resolved, kind=kind, page=page)

    def populate(self, page: Page) -> None:
        """Fill in the title, rewritten markdown, HTML body and source URL."""
        page.title = title_for_output_path(page.output_path)
        body = read_file(page.full_input_path)
        page.body_markdown = self.link_resolver.rewrite(page.input_path, body)
        page.body_html = self.to_html(page.body_markdown)
        if self.link_resolver.is_package_path(page.input_path):
            page.github_url = self.link_resolver.resolve(page.input_path, "./")

    def write_page(self, page: Page) -> Path:
        """Render ``page`` with the full nav tree and write it under the output root."""
        nav_tree_html = self.nav_tree.get_as_nav_tree_html(page)
        full_html = self.template.render(
            title=page.title,
            body_html=page.body_html,
            nav_tree_html=nav_tree_html,
            source_url=page.github_url,
        )
        destination = self.output_root / replace_md_extension_with_html(page.output_path)
        self.logger.info("Outputting %s to %s", page.input_path, destination)
        write_file(full_html, destination)
        return destination


__all__ = ["AssemblyResult", "PageAssembler"]
