"""Classify repository-relative paths into document kinds."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from .models import DocumentKind

# A single path segment: package, module, example or file stem.
SEGMENT = r"[\w -]+"
MARKDOWN_EXTENSIONS = ("markdown", "mdown", "mkdn", "mkd", "md")
_MD_EXT = "(?:" + "|".join(MARKDOWN_EXTENSIONS) + ")"
IMAGE_EXTENSIONS = ("jpg", "png", "gif")

GLOBAL_DOC_PATTERN = rf"global/(?:{SEGMENT}/)+{SEGMENT}\.{_MD_EXT}"
IMAGE_PATTERN = r"(?:.+/)?[^/]+\.(?:" + "|".join(IMAGE_EXTENSIONS) + ")"
PACKAGE_DOC_PATTERN = rf"packages/({SEGMENT})/modules/_docs/((?:{SEGMENT}/)?README\.md)"
PACKAGE_OVERVIEW_PATTERN = rf"packages/({SEGMENT})/README\.md"
MODULE_DOC_PATTERN = rf"packages/({SEGMENT})/modules/({SEGMENT})/_docs/({SEGMENT}\.{_MD_EXT})"
MODULE_OVERVIEW_PATTERN = rf"packages/({SEGMENT})/modules/({SEGMENT})/README\.md"
MODULE_EXAMPLE_OVERVIEW_PATTERN = rf"packages/({SEGMENT})/examples/({SEGMENT})/README\.md"
MODULE_EXAMPLE_DOC_PATTERN = (
    rf"packages/({SEGMENT})/examples/({SEGMENT})/(?:_docs/|docs/)?({SEGMENT}\.{_MD_EXT})"
)


@dataclass(frozen=True)
class ClassificationRule:
    """Pairs a document kind with the path pattern that identifies it."""

    kind: DocumentKind
    name: str
    pattern: re.Pattern[str]

    def matches(self, path: str) -> bool:
        return self.pattern.fullmatch(path) is not None


def _rule(kind: DocumentKind, name: str, pattern: str) -> ClassificationRule:
    return ClassificationRule(kind=kind, name=name, pattern=re.compile(pattern))


# First match wins. Package docs live at modules/_docs/README.md, which also has the
# module overview shape, and every example README also has the example doc shape.
CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    _rule(DocumentKind.GLOBAL_DOC, "GLOBAL_DOC_PATTERN", GLOBAL_DOC_PATTERN),
    _rule(DocumentKind.IMAGE, "IMAGE_PATTERN", IMAGE_PATTERN),
    _rule(DocumentKind.PACKAGE_DOC, "PACKAGE_DOC_PATTERN", PACKAGE_DOC_PATTERN),
    _rule(DocumentKind.PACKAGE_OVERVIEW, "PACKAGE_OVERVIEW_PATTERN", PACKAGE_OVERVIEW_PATTERN),
    _rule(DocumentKind.MODULE_DOC, "MODULE_DOC_PATTERN", MODULE_DOC_PATTERN),
    _rule(DocumentKind.MODULE_OVERVIEW, "MODULE_OVERVIEW_PATTERN", MODULE_OVERVIEW_PATTERN),
    _rule(
        DocumentKind.MODULE_EXAMPLE_OVERVIEW,
        "MODULE_EXAMPLE_OVERVIEW_PATTERN",
        MODULE_EXAMPLE_OVERVIEW_PATTERN,
    ),
    _rule(
        DocumentKind.MODULE_EXAMPLE_DOC,
        "MODULE_EXAMPLE_DOC_PATTERN",
        MODULE_EXAMPLE_DOC_PATTERN,
    ),
)


def normalize_path(path: str) -> str:
    """Return ``path`` with forward slashes and no leading ``./``."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def classify(input_path: str) -> DocumentKind:
    """Return the document kind for a path relative to the source root."""
    path = normalize_path(input_path)
    for rule in CLASSIFICATION_RULES:
        if rule.matches(path):
            return rule.kind
    return DocumentKind.SKIP


__all__ = [
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "GLOBAL_DOC_PATTERN",
    "IMAGE_PATTERN",
    "MARKDOWN_EXTENSIONS",
    "MODULE_DOC_PATTERN",
    "MODULE_EXAMPLE_DOC_PATTERN",
    "MODULE_EXAMPLE_OVERVIEW_PATTERN",
    "MODULE_OVERVIEW_PATTERN",
    "PACKAGE_DOC_PATTERN",
    "PACKAGE_OVERVIEW_PATTERN",
    "classify",
    "normalize_path",
]
