"""Configuration loading for docsite (.docsite.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .postproc.links import DEFAULT_URL_TEMPLATE

CONFIG_FILENAME = ".docsite.yml"


@dataclass
class GithubConfig:
    """Where package sources are published."""

    host: str = "github.com"
    org: str = "gruntwork-io"
    branch: str = "master"
    url_template: str = DEFAULT_URL_TEMPLATE


@dataclass
class SiteConfig:
    """Represents the settings defined in .docsite.yml."""

    root: Path
    output_path: Optional[Path] = None
    template_path: Optional[Path] = None
    base_url: str = "/"
    github: GithubConfig = field(default_factory=GithubConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> SiteConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SiteConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_str = _as_str(data.get("output_path"))
    template_str = _as_str(data.get("template"))

    github = GithubConfig()
    github_data = _as_dict(data.get("github"))
    if github_data:
        github = GithubConfig(
            host=_as_str(github_data.get("host")) or github.host,
            org=_as_str(github_data.get("org")) or github.org,
            branch=_as_str(github_data.get("branch")) or github.branch,
            url_template=_as_str(github_data.get("url_template")) or github.url_template,
        )
        _check_url_template(github.url_template)

    return SiteConfig(
        root=root,
        output_path=(root / output_str) if output_str else None,
        template_path=(root / template_str) if template_str else None,
        base_url=_as_str(data.get("base_url")) or "/",
        github=github,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _check_url_template(template: str) -> None:
    try:
        template.format(host="h", org="o", package="p", branch="b")
    except (AttributeError, KeyError, IndexError, ValueError) as exc:
        raise ConfigError(
            f"github.url_template may only use {{host}}, {{org}}, {{package}} and {{branch}}: {template!r}"
        ) from exc


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "GithubConfig", "SiteConfig", "load_config"]
