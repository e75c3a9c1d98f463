"""Error types raised while building the documentation site."""

from __future__ import annotations

from pathlib import Path


class DocsiteError(RuntimeError):
    """Base class for all docsite failures."""


class MalformedPathError(DocsiteError):
    """Raised when a path cannot be decomposed by the rule that should handle it."""

    def __init__(self, path: str, rule_name: str, pattern: str) -> None:
        self.path = path
        self.rule_name = rule_name
        self.pattern = pattern
        super().__init__(
            f"Malformed path {path!r}: expected it to match {rule_name} ({pattern})"
        )


class UnresolvableLinkError(DocsiteError):
    """Raised when the package root of a package-scoped page cannot be determined."""

    def __init__(self, path: str, rule_name: str, pattern: str) -> None:
        self.path = path
        self.rule_name = rule_name
        self.pattern = pattern
        super().__init__(
            f"Cannot resolve package root for {path!r} using {rule_name} ({pattern})"
        )


class OutputCollisionError(DocsiteError):
    """Raised when a second source file resolves to an output path already taken."""

    def __init__(self, output_path: str, input_path: str, existing_input_path: str) -> None:
        self.output_path = output_path
        self.input_path = input_path
        self.existing_input_path = existing_input_path
        super().__init__(
            f"{input_path!r} and {existing_input_path!r} both publish to {output_path!r}"
        )


class TemplateError(DocsiteError):
    """Raised when the HTML page template cannot be loaded or rendered."""


class FileOperationError(DocsiteError):
    """Raised when reading, writing or copying a file fails."""

    def __init__(self, path: Path | str, operation: str, reason: str) -> None:
        self.path = str(path)
        self.operation = operation
        super().__init__(f"Failed to {operation} {self.path}: {reason}")


class ConfigError(DocsiteError):
    """Raised when the configuration file cannot be parsed."""


__all__ = [
    "ConfigError",
    "DocsiteError",
    "FileOperationError",
    "MalformedPathError",
    "OutputCollisionError",
    "TemplateError",
    "UnresolvableLinkError",
]
