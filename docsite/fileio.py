"""Filesystem helpers used while writing the site."""

from __future__ import annotations

import shutil
from pathlib import Path

from .errors import FileOperationError


def read_file(path: Path | str) -> str:
    """Return the UTF-8 contents of ``path``."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(path, "read", str(exc)) from exc


def write_file(content: str, path: Path | str) -> None:
    """Write ``content`` to ``path``, creating parent directories as needed."""
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FileOperationError(path, "write", str(exc)) from exc


def copy_file(src: Path | str, dst: Path | str) -> None:
    """Copy ``src`` byte-for-byte to ``dst``, creating parent directories as needed."""
    target = Path(dst)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, target)
    except OSError as exc:
        raise FileOperationError(src, "copy", str(exc)) from exc


def file_exists(path: Path | str) -> bool:
    return Path(path).is_file()


__all__ = ["copy_file", "file_exists", "read_file", "write_file"]
