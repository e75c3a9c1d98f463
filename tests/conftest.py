from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.repo_builder import SourceTreeBuilder


@pytest.fixture
def source_tree(tmp_path: Path) -> SourceTreeBuilder:
    """Empty ``docs/`` source root under tmp_path; builds publish to the sibling ``site/``."""
    return SourceTreeBuilder(tmp_path)
