"""Tests for the navigation tree."""

from __future__ import annotations

import re

import pytest

from docsite.errors import DocsiteError, OutputCollisionError
from docsite.models import Page
from docsite.nav import NavTree


def _page(output_path: str, title: str) -> Page:
    return Page(
        input_path=output_path,
        full_input_path=f"/src/{output_path}",
        output_path=output_path,
        title=title,
    )


def _build_tree() -> tuple[NavTree, Page, Page, Page]:
    tree = NavTree()
    x = _page("a/b/x.html", "X")
    y = _page("a/y.html", "Y")
    z = _page("z.html", "Z")
    for page in (x, y, z):
        tree.add_page(page)
    return tree, x, y, z


def test_pages_arriving_out_of_order_create_intermediate_folders() -> None:
    tree, x, y, z = _build_tree()

    assert list(tree.root.subfolders) == ["a"]
    folder_a = tree.root.subfolders["a"]
    assert list(folder_a.subfolders) == ["b"]
    assert folder_a.subfolders["b"].pages == [x]
    assert folder_a.pages == [y]
    assert tree.root.pages == [z]


def test_create_folder_if_not_exist_is_idempotent() -> None:
    tree = NavTree()

    first = tree.create_folder_if_not_exist("a/b/c")
    second = tree.create_folder_if_not_exist("a/b/c/")

    assert first is second
    assert first.output_path == "a/b/c"
    assert tree.create_folder_if_not_exist("") is tree.root
    assert tree.create_folder_if_not_exist(".") is tree.root


def test_parent_references_resolve_through_the_tree() -> None:
    tree, x, _, _ = _build_tree()

    folder_b = tree.get_folder(x.folder_path)
    assert folder_b is not None
    assert folder_b.output_path == "a/b"

    folder_a = tree.parent_of(folder_b)
    assert folder_a is tree.root.subfolders["a"]
    assert tree.parent_of(folder_a) is tree.root
    assert tree.parent_of(tree.root) is None
    assert tree.ancestry(x) == {"a/b", "a", ""}


def test_nav_html_marks_only_the_active_page() -> None:
    tree, x, _, _ = _build_tree()

    html = tree.get_as_nav_tree_html(x)

    assert html.count('class="nav-page active"') == 1
    assert '<li class="nav-page active"><a href="/a/b/x.html">X</a></li>' in html
    assert '<li class="nav-page"><a href="/a/y.html">Y</a></li>' in html
    assert '<li class="nav-page"><a href="/z.html">Z</a></li>' in html


def test_nav_html_opens_folders_on_the_active_path() -> None:
    tree, x, _, z = _build_tree()

    assert html_folder_classes(tree.get_as_nav_tree_html(x)) == {
        "a": "nav-folder open",
        "b": "nav-folder open",
    }
    assert html_folder_classes(tree.get_as_nav_tree_html(z)) == {
        "a": "nav-folder",
        "b": "nav-folder",
    }


def test_nav_html_is_deterministic_and_pure() -> None:
    tree, x, y, _ = _build_tree()

    first = tree.get_as_nav_tree_html(x)
    tree.get_as_nav_tree_html(y)
    second = tree.get_as_nav_tree_html(x)

    assert first == second
    # Folders render before pages at each level.
    assert first.index('nav-folder-name">a<') < first.index(">Z</a>")
    assert first.index('nav-folder-name">b<') < first.index(">Y</a>")


def test_nav_html_sorts_siblings_regardless_of_arrival_order() -> None:
    tree = NavTree()
    for path, title in (("c.html", "C"), ("a.html", "A"), ("b.html", "B")):
        tree.add_page(_page(path, title))

    html = tree.get_as_nav_tree_html()

    assert html.index(">A</a>") < html.index(">B</a>") < html.index(">C</a>")
    assert "active" not in html


def test_nav_html_escapes_titles_and_uses_base_url() -> None:
    tree = NavTree(base_url="/docs")
    page = _page("help/support.md", "Q&A <draft>")
    tree.add_page(page)

    html = tree.get_as_nav_tree_html(page)

    assert 'href="/docs/help/support.html"' in html
    assert "Q&amp;A &lt;draft&gt;" in html


def test_pages_lists_every_page_depth_first() -> None:
    tree, x, y, z = _build_tree()

    assert tree.pages() == [z, y, x]


def html_folder_classes(html: str) -> dict[str, str]:
    pattern = re.compile(r'<li class="([^"]+)"><span class="nav-folder-name">([^<]+)</span>')
    return {name: classes for classes, name in pattern.findall(html)}


def test_add_page_rejects_a_second_page_for_the_same_output_path() -> None:
    tree = NavTree()
    first = Page(
        input_path="packages/p/examples/e/Example.md",
        full_input_path="/src/packages/p/examples/e/Example.md",
        output_path="packages/p/e/examples/Example.md",
        title="Example",
    )
    second = Page(
        input_path="packages/p/examples/e/docs/Example.md",
        full_input_path="/src/packages/p/examples/e/docs/Example.md",
        output_path="packages/p/e/examples/Example.md",
        title="Example",
    )
    tree.add_page(first)

    with pytest.raises(OutputCollisionError) as excinfo:
        tree.add_page(second)

    assert isinstance(excinfo.value, DocsiteError)
    assert excinfo.value.existing_input_path == first.input_path
    assert tree.get_folder("packages/p/e/examples").pages == [first]
    assert second.folder_path is None


def test_nav_html_marks_active_page_by_identity() -> None:
    tree, x, _, _ = _build_tree()
    lookalike = _page("a/b/x.html", "X")

    html = tree.get_as_nav_tree_html(lookalike)

    assert "active" not in html
    assert tree.get_as_nav_tree_html(x).count('class="nav-page active"') == 1
