"""Helpers for building and inspecting directory trees in tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# A tree description: "name" -> str content, "name/" -> nested description
TreeSpec = dict[str, Any]


def build_tree(root: Path, layout: TreeSpec) -> Path:
    """Create files and directories under root from a tree description."""
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        if name.endswith("/"):
            build_tree(root / name.rstrip("/"), value)
        else:
            (root / name).write_bytes(value.encode() if isinstance(value, str) else value)
    return root


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Map every path under root to its content (None for directories)."""
    result: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root).as_posix()
        result[relative] = None if path.is_dir() else path.read_bytes()
    return result
