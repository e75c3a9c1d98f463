"""Output path resolution for classified source files."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from typing import Dict, Sequence

from .classify import MARKDOWN_EXTENSIONS, normalize_path
from .errors import MalformedPathError
from .models import DocumentKind

MARKDOWN_FILE_PATH_PATTERN = r"(.*)\.(?:" + "|".join(MARKDOWN_EXTENSIONS) + ")"
_MARKDOWN_FILE_PATH_RE = re.compile(MARKDOWN_FILE_PATH_PATTERN)
_TITLE_WORD_START = re.compile(r"(?<!\w)(\w)")


@dataclass(frozen=True)
class OutputRule:
    """Rewrites a source path into its public output path."""

    name: str
    pattern: re.Pattern[str]
    template: str
    group_count: int

    def apply(self, path: str) -> str:
        match = self.pattern.fullmatch(path)
        if match is None or len(match.groups()) != self.group_count:
            raise MalformedPathError(path, self.name, self.pattern.pattern)
        return match.expand(self.template)


def _output_rule(name: str, pattern: str, template: str) -> OutputRule:
    compiled = re.compile(pattern)
    return OutputRule(name=name, pattern=compiled, template=template, group_count=compiled.groups)


_OUTPUT_RULES: Dict[DocumentKind, OutputRule] = {
    DocumentKind.GLOBAL_DOC: _output_rule(
        "GLOBAL_DOC_OUTPUT", r"global/(.+)", r"\1"
    ),
    DocumentKind.MODULE_DOC: _output_rule(
        "MODULE_DOC_OUTPUT",
        r"packages/([^/]+)/modules/([^/]+)/_docs/([^/]+)",
        r"packages/\1/\2/\3",
    ),
    DocumentKind.MODULE_OVERVIEW: _output_rule(
        "MODULE_OVERVIEW_OUTPUT",
        r"packages/([^/]+)/modules/([^/]+)/README\.md",
        r"packages/\1/\2/overview.md",
    ),
    DocumentKind.MODULE_EXAMPLE_DOC: _output_rule(
        "MODULE_EXAMPLE_DOC_OUTPUT",
        r"packages/([^/]+)/examples/([^/]+)/(?:_docs/|docs/)?([^/]+)",
        r"packages/\1/\2/examples/\3",
    ),
    DocumentKind.MODULE_EXAMPLE_OVERVIEW: _output_rule(
        "MODULE_EXAMPLE_OVERVIEW_OUTPUT",
        r"packages/([^/]+)/examples/([^/]+)/README\.md",
        r"packages/\1/\2/examples/overview.md",
    ),
    DocumentKind.PACKAGE_OVERVIEW: _output_rule(
        "PACKAGE_OVERVIEW_OUTPUT",
        r"packages/([^/]+)/README\.md",
        r"packages/\1/overview.md",
    ),
    DocumentKind.PACKAGE_DOC: _output_rule(
        "PACKAGE_DOC_OUTPUT",
        r"packages/([^/]+)/modules/_docs/((?:[^/]+/)?README\.md)",
        r"packages/\1/\2",
    ),
}

# Images follow the folder flattening of the docs that sit next to them so
# relative references keep working after publishing.
_IMAGE_RULES: Sequence[OutputRule] = (
    _output_rule("GLOBAL_IMAGE_OUTPUT", r"global/(.+)", r"\1"),
    _output_rule(
        "PACKAGE_DOC_IMAGE_OUTPUT",
        r"packages/([^/]+)/modules/_docs/(.+)",
        r"packages/\1/\2",
    ),
    _output_rule(
        "MODULE_DOC_IMAGE_OUTPUT",
        r"packages/([^/]+)/modules/([^/]+)/_docs/(.+)",
        r"packages/\1/\2/\3",
    ),
    _output_rule(
        "MODULE_EXAMPLE_IMAGE_OUTPUT",
        r"packages/([^/]+)/examples/([^/]+)/(?:_docs/|docs/)?(.+)",
        r"packages/\1/\2/examples/\3",
    ),
)


def resolve_output_path(kind: DocumentKind, input_path: str) -> str:
    """Return the output path (relative to the output root) for a classified file."""
    path = normalize_path(input_path)
    if kind is DocumentKind.SKIP:
        raise ValueError(f"Skipped files have no output path: {input_path}")
    if kind is DocumentKind.IMAGE:
        return _resolve_image_output_path(path)
    return _OUTPUT_RULES[kind].apply(path)


def _resolve_image_output_path(path: str) -> str:
    for rule in _IMAGE_RULES:
        if rule.pattern.fullmatch(path):
            return rule.apply(path)
    return path


def replace_md_extension_with_html(path: str) -> str:
    """Given a path like ``foo/bar.md``, return ``foo/bar.html``."""
    match = _MARKDOWN_FILE_PATH_RE.fullmatch(path)
    if match is None or not posixpath.basename(match.group(1)):
        raise MalformedPathError(path, "MARKDOWN_FILE_PATH_PATTERN", MARKDOWN_FILE_PATH_PATTERN)
    return f"{match.group(1)}.html"


def html_path_for(output_path: str) -> str:
    """Return the published path of an output file; non-markdown paths are unchanged."""
    if _MARKDOWN_FILE_PATH_RE.fullmatch(output_path) is None:
        return output_path
    return replace_md_extension_with_html(output_path)


def title_for_output_path(output_path: str) -> str:
    """Derive a page title from the output filename, e.g. ``getting started.md``."""
    stem = posixpath.basename(output_path).split(".", 1)[0]
    return _TITLE_WORD_START.sub(lambda match: match.group(1).upper(), stem)


__all__ = [
    "MARKDOWN_FILE_PATH_PATTERN",
    "OutputRule",
    "html_path_for",
    "replace_md_extension_with_html",
    "resolve_output_path",
    "title_for_output_path",
]
