"""Core data models shared across docsite components."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DocumentKind(str, Enum):
    """Kind of source file, decided from its path alone."""

    GLOBAL_DOC = "global-doc"
    MODULE_DOC = "module-doc"
    MODULE_OVERVIEW = "module-overview"
    MODULE_EXAMPLE_DOC = "module-example-doc"
    MODULE_EXAMPLE_OVERVIEW = "module-example-overview"
    PACKAGE_DOC = "package-doc"
    PACKAGE_OVERVIEW = "package-overview"
    IMAGE = "image"
    SKIP = "skip"

    @property
    def is_document(self) -> bool:
        return self not in (DocumentKind.IMAGE, DocumentKind.SKIP)


@dataclass(frozen=True)
class File:
    """A discovered source file."""

    input_path: str
    full_input_path: str
    output_path: str = ""


@dataclass
class Page:
    """A page of documentation, usually rendered from a markdown file."""

    input_path: str
    full_input_path: str
    output_path: str
    title: str = ""
    body_markdown: str = ""
    body_html: str = ""
    github_url: str = ""
    # Output path of the nav folder holding this page; resolved through the NavTree.
    folder_path: Optional[str] = None

    @classmethod
    def from_file(cls, file: File) -> "Page":
        return cls(
            input_path=file.input_path,
            full_input_path=file.full_input_path,
            output_path=file.output_path,
        )
