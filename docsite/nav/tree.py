"""Navigation tree built incrementally from pages in arbitrary order."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from jinja2 import Environment

from ..errors import OutputCollisionError
from ..models import Page
from ..paths import html_path_for

_NAV_TEMPLATE = """\
{%- macro render_folder(folder) -%}
<ul class="nav-tree">
{%- for sub in folder.sorted_subfolders() %}
<li class="nav-folder{% if sub.output_path in open_folders %} open{% endif %}"><span class="nav-folder-name">{{ sub.name }}</span>{{ render_folder(sub) }}</li>
{%- endfor %}
{%- for page in folder.sorted_pages() %}
<li class="nav-page{% if page is sameas active_page %} active{% endif %}"><a href="{{ href(page) }}">{{ page.title }}</a></li>
{%- endfor %}
</ul>
{%- endmacro -%}
{{ render_folder(root) }}"""


@dataclass
class Folder:
    """A folder in the navigation tree.

    ``parent_path`` is the output path of the parent folder and is resolved
    through the owning :class:`NavTree`; folders only own their children.
    """

    name: str
    output_path: str
    parent_path: Optional[str] = None
    subfolders: Dict[str, "Folder"] = field(default_factory=dict)
    pages: List[Page] = field(default_factory=list)

    def add_page(self, page: Page) -> None:
        page.folder_path = self.output_path
        self.pages.append(page)

    def sorted_subfolders(self) -> List["Folder"]:
        return [self.subfolders[name] for name in sorted(self.subfolders)]

    def sorted_pages(self) -> List[Page]:
        return sorted(self.pages, key=lambda page: page.output_path)

    def iter_folders(self) -> Iterator["Folder"]:
        """Yield this folder and all descendants depth-first."""
        yield self
        for sub in self.sorted_subfolders():
            yield from sub.iter_folders()


class NavTree:
    """Owns the root folder and renders the tree as navigation markup."""

    def __init__(self, *, base_url: str = "/") -> None:
        self.root = Folder(name="", output_path="")
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._folders: Dict[str, Folder] = {"": self.root}
        self._template = Environment(autoescape=True).from_string(_NAV_TEMPLATE)

    def create_folder_if_not_exist(self, path: str) -> Folder:
        """Return the folder at ``path``, creating any missing ancestors."""
        folder = self.root
        for segment in _split_segments(path):
            child = folder.subfolders.get(segment)
            if child is None:
                child_path = posixpath.join(folder.output_path, segment)
                child = Folder(name=segment, output_path=child_path, parent_path=folder.output_path)
                folder.subfolders[segment] = child
                self._folders[child_path] = child
            folder = child
        return folder

    def get_folder(self, path: str) -> Optional[Folder]:
        return self._folders.get("/".join(_split_segments(path)))

    def parent_of(self, folder: Folder) -> Optional[Folder]:
        if folder.parent_path is None:
            return None
        return self._folders.get(folder.parent_path)

    def add_page(self, page: Page) -> Folder:
        """Insert ``page`` under the folder containing its output path.

        Raises :class:`OutputCollisionError` when another page already owns
        that output path.
        """
        folder = self.create_folder_if_not_exist(posixpath.dirname(page.output_path))
        for existing in folder.pages:
            if existing.output_path == page.output_path:
                raise OutputCollisionError(page.output_path, page.input_path, existing.input_path)
        folder.add_page(page)
        return folder

    def pages(self) -> List[Page]:
        return [page for folder in self.root.iter_folders() for page in folder.sorted_pages()]

    def ancestry(self, page: Page) -> Set[str]:
        """Return output paths of every folder enclosing ``page``."""
        paths: Set[str] = set()
        if page.folder_path is None:
            return paths
        folder = self.get_folder(page.folder_path)
        while folder is not None:
            paths.add(folder.output_path)
            folder = self.parent_of(folder)
        return paths

    def href(self, page: Page) -> str:
        return self.base_url + html_path_for(page.output_path)

    def get_as_nav_tree_html(self, active_page: Optional[Page] = None) -> str:
        """Render the whole tree with ``active_page`` highlighted."""
        open_folders = self.ancestry(active_page) if active_page is not None else set()
        return self._template.render(
            root=self.root,
            open_folders=open_folders,
            active_page=active_page,
            href=self.href,
        )


def _split_segments(path: str) -> List[str]:
    return [segment for segment in path.replace("\\", "/").split("/") if segment not in ("", ".")]


__all__ = ["Folder", "NavTree"]
