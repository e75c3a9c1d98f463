"""Tests for docsite.assembler."""

from __future__ import annotations

import pytest

from docsite.assembler import PageAssembler
from docsite.errors import FileOperationError, MalformedPathError, OutputCollisionError
from docsite.models import DocumentKind
from docsite.render import PageTemplate
from tests._fixtures.repo_builder import SourceTreeBuilder


def _assembler(source_tree: SourceTreeBuilder) -> PageAssembler:
    return PageAssembler(source_tree.output, template=PageTemplate())


def test_process_global_doc_populates_page(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"global/help/support.md": "# Support\n\nSee /modules/vpc-app for more.\n"})
    assembler = _assembler(source_tree)

    result = assembler.process(source_tree.file("global/help/support.md"))

    assert result.kind is DocumentKind.GLOBAL_DOC
    page = result.page
    assert page is not None
    assert page.output_path == "help/support.md"
    assert page.title == "Support"
    assert page.body_markdown == "# Support\n\nSee /modules/vpc-app for more.\n"
    assert "<h1>Support</h1>" in page.body_html
    assert page.github_url == ""
    assert page.folder_path == "help"
    assert assembler.nav_tree.get_folder("help").pages == [page]


def test_process_module_doc_rewrites_links_and_sets_github_url(source_tree: SourceTreeBuilder) -> None:
    path = "packages/module-vpc/modules/vpc-app/_docs/module-doc.md"
    source_tree.write({path: "# VPC app\n\nSee the [overview](../README.md).\n"})
    assembler = _assembler(source_tree)

    page = assembler.process(source_tree.file(path)).page

    assert page is not None
    assert page.output_path == "packages/module-vpc/vpc-app/module-doc.md"
    assert page.title == "Module-Doc"
    assert page.github_url == (
        "https://github.com/gruntwork-io/module-vpc/tree/master/modules/vpc-app/_docs/module-doc.md"
    )
    assert (
        "(https://github.com/gruntwork-io/module-vpc/tree/master/modules/vpc-app/README.md)"
        in page.body_markdown
    )
    assert 'href="https://github.com/gruntwork-io/module-vpc/tree/master/modules/vpc-app/README.md"' in page.body_html


def test_process_skip_does_nothing(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"packages/module-vpc/modules/vpc-app/main.tf": "resource {}\n"})
    assembler = _assembler(source_tree)

    result = assembler.process(source_tree.file("packages/module-vpc/modules/vpc-app/main.tf"))

    assert result.kind is DocumentKind.SKIP
    assert result.page is None
    assert assembler.nav_tree.pages() == []
    assert not source_tree.output.exists()


def test_process_rejects_two_images_for_the_same_output_path(source_tree: SourceTreeBuilder) -> None:
    source_tree.write_bytes("packages/p/examples/e/shot.png", b"first")
    source_tree.write_bytes("packages/p/examples/e/docs/shot.png", b"second")
    assembler = _assembler(source_tree)

    assembler.process(source_tree.file("packages/p/examples/e/shot.png"))
    with pytest.raises(OutputCollisionError) as excinfo:
        assembler.process(source_tree.file("packages/p/examples/e/docs/shot.png"))

    assert excinfo.value.output_path == "packages/p/e/examples/shot.png"
    assert (source_tree.output / "packages/p/e/examples/shot.png").read_bytes() == b"first"


def test_process_image_copies_bytes(source_tree: SourceTreeBuilder) -> None:
    payload = b"\x89PNG\r\n\x1a\nfake"
    source_tree.write_bytes("global/help/images/logo.png", payload)
    assembler = _assembler(source_tree)

    result = assembler.process(source_tree.file("global/help/images/logo.png"))

    assert result.kind is DocumentKind.IMAGE
    assert result.copied_to == source_tree.output / "help" / "images" / "logo.png"
    assert result.copied_to.read_bytes() == payload
    assert assembler.nav_tree.pages() == []


def test_process_propagates_malformed_paths(source_tree: SourceTreeBuilder, monkeypatch) -> None:
    path = "packages/module-vpc/modules/vpc-app/_docs/sub/file.md"
    source_tree.write({path: "# Nested\n"})
    assembler = _assembler(source_tree)

    import docsite.assembler as assembler_module

    monkeypatch.setattr(assembler_module, "classify", lambda _: DocumentKind.MODULE_DOC)

    with pytest.raises(MalformedPathError):
        assembler.process(source_tree.file(path))
    assert assembler.nav_tree.pages() == []


def test_process_missing_source_raises_and_leaves_tree_untouched(source_tree: SourceTreeBuilder) -> None:
    assembler = _assembler(source_tree)

    with pytest.raises(FileOperationError):
        assembler.process(source_tree.file("global/help/gone.md"))
    assert assembler.nav_tree.pages() == []


def test_write_page_outputs_full_html(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "global/help/support.md": "# Support\n",
            "global/introduction/tools.md": "# Tools\n",
        }
    )
    assembler = _assembler(source_tree)
    support = assembler.process(source_tree.file("global/help/support.md")).page
    assembler.process(source_tree.file("global/introduction/tools.md"))
    assert support is not None

    destination = assembler.write_page(support)

    assert destination == source_tree.output / "help" / "support.html"
    html = destination.read_text(encoding="utf-8")
    assert "<title>Support</title>" in html
    assert '<li class="nav-page active"><a href="/help/support.html">Support</a></li>' in html
    assert '<a href="/introduction/tools.html">Tools</a>' in html


def test_custom_markdown_renderer_is_used(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"global/help/support.md": "# Support\n"})
    assembler = PageAssembler(
        source_tree.output, template=PageTemplate(), to_html=lambda text: f"<pre>{text}</pre>"
    )

    page = assembler.process(source_tree.file("global/help/support.md")).page

    assert page is not None
    assert page.body_html == "<pre># Support\n</pre>"
