"""Rewrite package-relative links into canonical source-control URLs."""

from __future__ import annotations

import posixpath
import re
from typing import List, Tuple

from ..classify import normalize_path
from ..errors import UnresolvableLinkError

FILE_PATHS_PATTERN = (
    r"(?:http:/|https:/)?(/[A-Za-z0-9_/.-]+)|([A-Za-z0-9_/.-]+/[A-Za-z0-9_.-]*)"
)
PACKAGE_FILE_PATTERN = r"^packages/([\w -]+)(/.*)$"
DEFAULT_URL_TEMPLATE = "https://{host}/{org}/{package}/tree/{branch}"


class PackageLinkResolver:
    """Turns links found in package docs into URLs of the package's own repository.

    Package docs are authored with repository-relative links so they preview
    correctly in place, but at publish time each package lives in its own
    repository. Pages outside ``packages/`` keep their links untouched.
    """

    _FILE_PATHS = re.compile(FILE_PATHS_PATTERN)
    _PACKAGE_FILE = re.compile(PACKAGE_FILE_PATTERN)

    def __init__(
        self,
        *,
        host: str = "github.com",
        org: str = "gruntwork-io",
        branch: str = "master",
        url_template: str = DEFAULT_URL_TEMPLATE,
    ) -> None:
        self.host = host
        self.org = org
        self.branch = branch
        self.url_template = url_template

    def is_package_path(self, input_path: str) -> bool:
        return self._PACKAGE_FILE.match(normalize_path(input_path)) is not None

    def url_prefix(self, package_name: str) -> str:
        return self.url_template.format(
            host=self.host, org=self.org, package=package_name, branch=self.branch
        )

    def resolve(self, input_path: str, link_path: str) -> str:
        """Return the fully qualified URL for ``link_path`` found in ``input_path``."""
        if not self.is_package_path(input_path):
            return link_path

        package_name, rel_path = self.split_package_path(input_path)
        prefix = self.url_prefix(package_name)

        if link_path.startswith("/"):
            return prefix + link_path
        if link_path == "./":
            return prefix + rel_path
        if link_path.startswith("./") or link_path.startswith("../"):
            base_dir = posixpath.dirname(rel_path)
            joined = posixpath.normpath(posixpath.join(base_dir, link_path))
            if link_path.endswith("/") and not joined.endswith("/"):
                joined += "/"
            return prefix + joined
        return link_path

    def rewrite(self, input_path: str, body: str) -> str:
        """Convert every path-like token in ``body`` into a fully qualified URL.

        Only ``(path)`` and `` path `` occurrences are replaced, so the same text
        inside an existing URL or a word is left alone.
        """
        new_body = body
        for link_path in self.find_link_paths(body):
            url = self.resolve(input_path, link_path)
            if url == link_path:
                continue
            new_body = new_body.replace(f"({link_path})", f"({url})")
            new_body = new_body.replace(f" {link_path} ", f" {url} ")
        return new_body

    def find_link_paths(self, body: str) -> List[str]:
        """Return distinct link-like tokens (``/foo``, ``../bar``) in order of appearance."""
        seen: List[str] = []
        for match in self._FILE_PATHS.finditer(body):
            candidate = match.group(0)
            if "http://" in candidate or "https://" in candidate:
                continue
            if candidate not in seen:
                seen.append(candidate)
        return seen

    def split_package_path(self, input_path: str) -> Tuple[str, str]:
        """Split ``packages/<name>/<rest>`` into ``(name, "/<rest>")``."""
        match = self._PACKAGE_FILE.match(normalize_path(input_path))
        if match is None or len(match.groups()) != 2:
            raise UnresolvableLinkError(input_path, "PACKAGE_FILE_PATTERN", PACKAGE_FILE_PATTERN)
        return match.group(1), match.group(2)


__all__ = ["DEFAULT_URL_TEMPLATE", "FILE_PATHS_PATTERN", "PackageLinkResolver"]
