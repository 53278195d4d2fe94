"""Recursive tree mirroring between two file trees.

This module provides:
- TreeMirror: Reproduces a source directory at a destination, depth first
- upload_tree / download_tree: The two mirror directions
- read_tree: Snapshot of an existing tree as DirectoryNode/FileNode

The mirror only ever creates and overwrites. It never deletes destination
entries that are absent from the source, never retries, and never rolls
back: a failure leaves whatever was written before it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sharemirror.core.types import (
    DirectoryNode,
    FileNode,
    MirrorResult,
    MirrorTask,
    NotFoundError,
    TransferCallback,
    TreeEntry,
    TreeNode,
    join_path,
    normalize_path,
)

if TYPE_CHECKING:
    from sharemirror.storage import FileTree

logger = logging.getLogger(__name__)


class TreeMirror:
    """Copies a directory tree from one FileTree to another.

    Within each directory, files are transferred first (in listing order)
    and subdirectories are descended afterwards. Every destination
    directory is ensured before its content, so empty directories are
    reproduced too.
    """

    def __init__(
        self,
        source: FileTree,
        destination: FileTree,
        transfer_callback: TransferCallback | None = None,
    ) -> None:
        """Initialize the mirror.

        Args:
            source: Tree to read from.
            destination: Tree to write to.
            transfer_callback: Optional callback for each copied/skipped file.
        """
        self._source = source
        self._destination = destination
        self._transfer_callback = transfer_callback

    def mirror(self, source_root: str, destination_root: str) -> MirrorResult:
        """Mirror a source directory to a destination directory.

        Args:
            source_root: Directory path in the source tree.
            destination_root: Directory path in the destination tree.

        Returns:
            MirrorResult describing what was written and skipped.

        Raises:
            NotFoundError: If the source directory doesn't exist.
        """
        task = MirrorTask(
            source_root=normalize_path(source_root),
            destination_root=normalize_path(destination_root),
        )
        root = self._source.stat(task.source_root)
        if root is None or not root.is_directory:
            raise NotFoundError(
                f"Directory not found [{task.source_root}].", task.source_root
            )

        logger.info(
            f"Mirroring {self._source.location} [{task.source_root}] -> "
            f"{self._destination.location} [{task.destination_root}]"
        )
        result = MirrorResult(task=task)
        self._mirror_directory(task.source_root, task.destination_root, result)
        logger.info(
            f"Mirrored {result.file_count} files ({result.bytes_copied} bytes), "
            f"{len(result.directories)} directories, {len(result.skipped)} skipped"
        )
        return result

    def _mirror_directory(
        self, source_dir: str, destination_dir: str, result: MirrorResult
    ) -> None:
        self._destination.ensure_directory(destination_dir)
        result.directories.append(destination_dir)

        children = self._source.list_children(source_dir)
        files = [entry for entry in children if not entry.is_directory]
        directories = [entry for entry in children if entry.is_directory]

        for entry in files:
            self._copy_file(entry, join_path(destination_dir, entry.name), result)

        for entry in directories:
            self._mirror_directory(
                entry.path, join_path(destination_dir, entry.name), result
            )

    def _copy_file(self, entry: TreeEntry, destination_path: str, result: MirrorResult) -> None:
        # The file may have been removed or replaced since the listing
        current = self._source.stat(entry.path)
        if current is None or current.is_directory:
            reason = "no longer exists" if current is None else "is no longer a file"
            logger.warning(f"Skipping {entry.path}: {reason}")
            result.skipped.append(entry.path)
            self._notify("skipped", entry.path)
            return

        logger.info(f"Copying {entry.path} -> {destination_path}")
        with self._source.open_read(entry.path) as stream:
            self._destination.write(destination_path, stream, current.size)

        result.copied.append(destination_path)
        result.bytes_copied += current.size
        self._notify("copied", destination_path)

    def _notify(self, action: str, path: str) -> None:
        if self._transfer_callback:
            self._transfer_callback(action, path)


def upload_tree(
    local: FileTree,
    remote: FileTree,
    local_dir: str,
    remote_dir: str,
    transfer_callback: TransferCallback | None = None,
) -> MirrorResult:
    """Mirror a local directory into a remote directory.

    The remote directory corresponds to ``local_dir`` itself, so
    ``local_dir/a.txt`` becomes ``remote_dir/a.txt``.
    """
    return TreeMirror(local, remote, transfer_callback).mirror(local_dir, remote_dir)


def download_tree(
    remote: FileTree,
    local: FileTree,
    remote_dir: str,
    local_root: str = "",
    transfer_callback: TransferCallback | None = None,
) -> MirrorResult:
    """Mirror a remote directory under a local root.

    The local destination keeps the remote directory's full path, so
    ``Logs/2024`` downloaded into ``out`` lands in ``out/Logs/2024``.
    """
    destination = normalize_path(join_path(local_root, normalize_path(remote_dir)))
    return TreeMirror(remote, local, transfer_callback).mirror(remote_dir, destination)


def read_tree(tree: FileTree, path: str = "") -> DirectoryNode:
    """Read a directory and everything below it.

    Args:
        tree: Tree to read.
        path: Directory path relative to the tree root.

    Returns:
        DirectoryNode with children sorted by name.

    Raises:
        NotFoundError: If the directory doesn't exist.
    """
    path = normalize_path(path)
    children: list[TreeNode] = []
    for entry in sorted(tree.list_children(path), key=lambda e: e.name):
        if entry.is_directory:
            children.append(read_tree(tree, entry.path))
        else:
            children.append(FileNode(name=entry.name, path=entry.path, size=entry.size))
    return DirectoryNode(name=path.rsplit("/", 1)[-1], path=path, children=tuple(children))
