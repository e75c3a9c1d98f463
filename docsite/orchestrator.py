"""Pipeline orchestration for a full site build."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .assembler import PageAssembler
from .config import SiteConfig, load_config
from .errors import ConfigError, DocsiteError
from .logging import get_logger
from .models import DocumentKind, Page
from .nav.tree import NavTree
from .postproc.links import DEFAULT_URL_TEMPLATE, PackageLinkResolver
from .render import PageTemplate
from .repo_scanner import SourceScanner


@dataclass
class BuildFailure:
    """A source file that could not be published."""

    input_path: str
    error: DocsiteError

    def describe(self) -> str:
        return f"{self.input_path}: {self.error}"


@dataclass
class BuildReport:
    """Summary of a completed build."""

    output_root: Path
    pages: List[Page] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: List[BuildFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class BuildOptions:
    """Effective settings for a build after merging CLI flags over config."""

    input_root: Path
    output_root: Path
    template_path: Optional[Path] = None
    excludes: Sequence[str] = ()
    base_url: str = "/"
    github_host: str = "github.com"
    github_org: str = "gruntwork-io"
    github_branch: str = "master"
    github_url_template: str = DEFAULT_URL_TEMPLATE


class Orchestrator:
    """Coordinates scanning, per-file assembly and page output."""

    def __init__(self, scanner: SourceScanner | None = None) -> None:
        self._scanner = scanner
        self.logger = get_logger("orchestrator")

    def resolve_options(
        self,
        input_path: str,
        output_path: str | None = None,
        *,
        config_path: str | None = None,
        template_path: str | None = None,
        excludes: Sequence[str] = (),
        base_url: str | None = None,
    ) -> BuildOptions:
        """Merge ``.docsite.yml`` (if any) with explicit overrides."""
        input_root = Path(input_path).expanduser().resolve()
        config = self._load_config(Path(config_path) if config_path else input_root)

        output_root = (
            Path(output_path).expanduser().resolve()
            if output_path
            else config.output_path or (input_root.parent / f"{input_root.name}_site")
        )
        template = Path(template_path).expanduser() if template_path else config.template_path

        merged_excludes = [*config.exclude_paths, *excludes]

        return BuildOptions(
            input_root=input_root,
            output_root=output_root,
            template_path=template,
            excludes=merged_excludes,
            base_url=base_url or config.base_url,
            github_host=config.github.host,
            github_org=config.github.org,
            github_branch=config.github.branch,
            github_url_template=config.github.url_template,
        )

    def run_build(self, options: BuildOptions) -> BuildReport:
        """Build the whole site; one file's failure never stops the others.

        A missing or broken template raises :class:`TemplateError` before any
        file is touched.
        """
        self.logger.info("Building %s into %s", options.input_root, options.output_root)
        template = PageTemplate(options.template_path)

        # A previous build nested inside the input is never republished.
        scanner = self._scanner or SourceScanner(
            options.excludes, skip_dirs=(options.output_root,)
        )
        files = scanner.scan(options.input_root)
        self.logger.debug("Scanner discovered %d files", len(files))

        assembler = PageAssembler(
            options.output_root,
            template=template,
            nav_tree=NavTree(base_url=options.base_url),
            link_resolver=PackageLinkResolver(
                host=options.github_host,
                org=options.github_org,
                branch=options.github_branch,
                url_template=options.github_url_template,
            ),
        )
        report = BuildReport(output_root=options.output_root)

        for file in files:
            try:
                result = assembler.process(file)
            except DocsiteError as exc:
                self._record_failure(report, file.input_path, exc)
                continue
            if result.kind is DocumentKind.SKIP:
                report.skipped.append(file.input_path)
            elif result.kind is DocumentKind.IMAGE:
                report.images.append(file.input_path)

        # Pages are written only once the tree is complete so every page sees the full nav.
        for page in assembler.nav_tree.pages():
            try:
                assembler.write_page(page)
            except DocsiteError as exc:
                self._record_failure(report, page.input_path, exc)
                continue
            report.pages.append(page)

        self.logger.info(
            "Built %d pages, copied %d images, skipped %d files, %d failures",
            len(report.pages),
            len(report.images),
            len(report.skipped),
            len(report.failures),
        )
        return report

    def _record_failure(self, report: BuildReport, input_path: str, exc: DocsiteError) -> None:
        self.logger.warning("Failed to process %s: %s", input_path, exc)
        report.failures.append(BuildFailure(input_path=input_path, error=exc))

    def _load_config(self, path: Path) -> SiteConfig:
        try:
            return load_config(path)
        except ConfigError:
            self.logger.error("Invalid configuration at %s", path)
            raise


__all__ = ["BuildFailure", "BuildOptions", "BuildReport", "Orchestrator"]
