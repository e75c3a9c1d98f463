"""Source tree scanning with glob-based exclusions."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .models import File

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".idea",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


def glob_to_regex(pattern: str) -> str:
    """Translate a glob where ``*`` stays within a segment and ``**`` spans segments."""
    parts: List[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
            continue
        if pattern.startswith("**", index):
            parts.append(".*")
            index += 2
            continue
        char = pattern[index]
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
        index += 1
    return "".join(parts)


@dataclass(frozen=True)
class ExcludeRule:
    """A single exclusion glob from the command line or .docsite.yml."""

    pattern: str
    regex: re.Pattern[str]
    directory_only: bool
    has_slash: bool

    def matches(self, path: str, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.has_slash:
            return bool(self.regex.fullmatch(rel_path) or self.regex.fullmatch(path))
        return any(self.regex.fullmatch(part) for part in rel_path.split("/") if part)


def build_exclude_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip().replace("\\", "/")
    if not pattern:
        return None

    directory_only = pattern.endswith("/") and pattern != "/"
    if directory_only:
        pattern = pattern[:-1]
    pattern = pattern.lstrip("/")
    if not pattern:
        return None

    return ExcludeRule(
        pattern=pattern,
        regex=re.compile(glob_to_regex(pattern)),
        directory_only=directory_only,
        has_slash="/" in pattern,
    )


def build_exclude_rules(patterns: Iterable[str]) -> List[ExcludeRule]:
    rules: List[ExcludeRule] = []
    for pattern in patterns:
        rule = build_exclude_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def should_skip_path(
    path: str, input_root: str, rules: Sequence[ExcludeRule], *, is_dir: bool = True
) -> bool:
    """Return True when ``path`` (a file or directory) must not be processed.

    The input root itself is always skipped; only its contents are published.
    """
    normalized = path.replace("\\", "/").rstrip("/")
    root = input_root.replace("\\", "/").rstrip("/")
    if normalized in ("", ".") or normalized == root:
        return True

    rel_path = normalized
    if root not in ("", ".") and normalized.startswith(root + "/"):
        rel_path = normalized[len(root) + 1 :]

    return any(rule.matches(normalized, rel_path, is_dir) for rule in rules)


class SourceScanner:
    """Walks the documentation source tree and yields files to publish."""

    def __init__(
        self, excludes: Sequence[str] = (), *, skip_dirs: Iterable[Path | str] = ()
    ) -> None:
        self.rules = build_exclude_rules(excludes)
        # Absolute directories never published, such as a previous build nested in the input.
        self.skip_dirs = {Path(path).expanduser().resolve() for path in skip_dirs}

    def scan(self, root: Path | str) -> List[File]:
        """Return discovered files sorted by their path relative to ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Input path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Input path is not a directory: {root}")

        files = [
            File(input_path=path.relative_to(root_path).as_posix(), full_input_path=str(path))
            for path in self._iter_files(root_path)
        ]
        return sorted(files, key=lambda file: file.input_path)

    def _iter_files(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                if self.skip_dirs and (current_dir / name).resolve() in self.skip_dirs:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if should_skip_path(rel_path, "", self.rules, is_dir=True):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in filenames:
                if filename in _EXCLUDED_FILES:
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if should_skip_path(rel_path, "", self.rules, is_dir=False):
                    continue
                yield current_dir / filename


__all__ = [
    "ExcludeRule",
    "SourceScanner",
    "build_exclude_rule",
    "build_exclude_rules",
    "glob_to_regex",
    "should_skip_path",
]
