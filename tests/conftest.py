"""Shared fixtures for sharemirror tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tests.fixtures import TreeSpec, build_tree


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, TreeSpec], Path]:
    """Build a named directory tree inside tmp_path."""
    def factory(name: str, layout: TreeSpec) -> Path:
        return build_tree(tmp_path / name, layout)
    return factory
