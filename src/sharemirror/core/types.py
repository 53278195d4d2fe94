"""Shared types for sharemirror.

This module provides:
- ShareMirrorError, NotFoundError, ConfigError: Exception classes
- TreeEntry: One entry of a directory listing
- FileNode, DirectoryNode: Snapshot of an existing tree
- MirrorTask, MirrorResult: Input and outcome of one mirror run
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field


class ShareMirrorError(Exception):
    """Base exception for sharemirror errors."""


class NotFoundError(ShareMirrorError):
    """A path that was explicitly checked does not exist."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class ConfigError(ShareMirrorError):
    """Missing or inconsistent configuration."""


def join_path(parent: str, name: str) -> str:
    """Join a tree-relative path and a child name.

    Tree paths are "/"-separated and relative to the tree root; the root
    itself is the empty string.
    """
    if not parent:
        return name
    return f"{parent.rstrip('/')}/{name}"


def normalize_path(path: str) -> str:
    """Normalize a tree path ("./a//b/" -> "a/b").

    Only "/" separates names; a backslash is an ordinary name character.
    """
    parts = [p for p in path.split("/") if p and p != "."]
    return "/".join(parts)


def user_path(path: str) -> str:
    """Normalize a path typed by a user, accepting "\\" as a separator."""
    return normalize_path(path.replace("\\", "/"))


@dataclass(frozen=True)
class TreeEntry:
    """A single child returned by listing a directory.

    Attributes:
        name: Entry name within its parent directory.
        path: Path relative to the tree root.
        is_directory: True for directories.
        size: Byte length for files, 0 for directories.
    """

    name: str
    path: str
    is_directory: bool
    size: int = 0


@dataclass(frozen=True)
class FileNode:
    """A file in a tree snapshot."""

    name: str
    path: str
    size: int


@dataclass(frozen=True)
class DirectoryNode:
    """A directory in a tree snapshot, with its children."""

    name: str
    path: str
    children: tuple[TreeNode, ...] = ()

    def files(self) -> list[FileNode]:
        """Return every file below this directory, depth first."""
        found: list[FileNode] = []
        for child in self.children:
            if isinstance(child, DirectoryNode):
                found.extend(child.files())
            else:
                found.append(child)
        return found

    def directories(self) -> list[DirectoryNode]:
        """Return every directory below this one (not including itself)."""
        found: list[DirectoryNode] = []
        for child in self.children:
            if isinstance(child, DirectoryNode):
                found.append(child)
                found.extend(child.directories())
        return found


TreeNode = FileNode | DirectoryNode


@dataclass(frozen=True)
class MirrorTask:
    """The two roots being synchronized by one mirror run."""

    source_root: str
    destination_root: str


@dataclass
class MirrorResult:
    """Outcome of a mirror run.

    Attributes:
        task: Roots that were mirrored.
        directories: Destination directories ensured, in creation order.
        copied: Destination paths of transferred files.
        skipped: Source paths of files that vanished before transfer.
        bytes_copied: Total bytes written to the destination.
    """

    task: MirrorTask
    directories: list[str] = field(default_factory=list)
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    bytes_copied: int = 0

    @property
    def file_count(self) -> int:
        return len(self.copied)


# Called with (action, path) where action is "copied" or "skipped"
TransferCallback = Callable[[str, str], None]
