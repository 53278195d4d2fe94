"""File tree abstraction over local directories and Azure file shares.

This module provides:
- Abstract interface for a browsable, writable file tree
- LocalFileTree for directories on the local filesystem
- ShareFileTree for Azure file shares (azure-storage-file-share)
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path
from typing import IO, TYPE_CHECKING, TypeVar

from azure.core.exceptions import (
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
)
from azure.storage.fileshare import ShareClient

from sharemirror.core.types import NotFoundError, TreeEntry, join_path, normalize_path

if TYPE_CHECKING:
    from sharemirror.core.config import ShareConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Downloads larger than this are buffered on disk instead of in memory
SPOOL_MAX_SIZE = 8 * 1024 * 1024


class FileTree(ABC):
    """Abstract interface for a tree of directories and files.

    Paths are relative to the tree root, "/"-separated, and the root is "".
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the tree root (directory or share name)."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Return a human-readable description of where the tree lives."""

    @abstractmethod
    def ensure_root(self) -> bool:
        """Create the tree root if it is missing.

        Returns:
            True if the root was created, False if it already existed.
        """

    @abstractmethod
    def stat(self, path: str) -> TreeEntry | None:
        """Look up a path.

        Args:
            path: Path relative to the tree root.

        Returns:
            The entry, or None if nothing exists at that path.
        """

    def exists(self, path: str) -> bool:
        """Check if a file or directory exists at a path."""
        return self.stat(path) is not None

    @abstractmethod
    def ensure_directory(self, path: str) -> None:
        """Create a directory, and any missing parents, if it is missing."""

    @abstractmethod
    def list_children(self, path: str, prefix: str | None = None) -> list[TreeEntry]:
        """List the direct children of a directory.

        No ordering is guaranteed.

        Args:
            path: Directory path relative to the tree root.
            prefix: Only return children whose name starts with this.

        Raises:
            NotFoundError: If the directory doesn't exist.
        """

    @abstractmethod
    def open_read(self, path: str) -> AbstractContextManager[IO[bytes]]:
        """Open a file for reading as a binary stream (context manager)."""

    @abstractmethod
    def write(self, path: str, stream: IO[bytes], length: int) -> None:
        """Create or overwrite a file with the content of a stream.

        Args:
            path: File path relative to the tree root.
            stream: Binary stream positioned at the start of the content.
            length: Number of bytes in the stream.
        """

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete a file.

        Returns:
            True if the file was deleted, False if it didn't exist.
        """

    @abstractmethod
    def copy(self, source: str, destination: str) -> None:
        """Copy a file within the tree.

        Raises:
            NotFoundError: If the source file doesn't exist.
        """


class LocalFileTree(FileTree):
    """A directory on the local filesystem."""

    def __init__(self, base_path: Path | str) -> None:
        """Initialize a local tree.

        Args:
            base_path: Root directory of the tree. It is not created here.
        """
        self._base_path = Path(base_path).expanduser().resolve()

    @property
    def base_path(self) -> Path:
        return self._base_path

    @property
    def name(self) -> str:
        return self._base_path.name

    @property
    def location(self) -> str:
        """Return the local directory."""
        return f"Local filesystem: {self._base_path}"

    def _local_path(self, path: str) -> Path:
        """Map a tree path to a local path, refusing ".." components.

        Symlinks inside the tree are not resolved, so links pointing
        outside the root are followed like regular entries.
        """
        relative = normalize_path(path)
        if ".." in relative.split("/"):
            raise ValueError(f"Path escapes tree root: {path}")
        return self._base_path / relative

    def ensure_root(self) -> bool:
        """Create the root directory."""
        if self._base_path.is_dir():
            return False
        self._base_path.mkdir(parents=True)
        return True

    def stat(self, path: str) -> TreeEntry | None:
        """Look up a local path."""
        local = self._local_path(path)
        if not local.exists():
            return None
        path = normalize_path(path)
        if local.is_dir():
            return TreeEntry(name=local.name if path else "", path=path, is_directory=True)
        return TreeEntry(
            name=local.name, path=path, is_directory=False, size=local.stat().st_size
        )

    def ensure_directory(self, path: str) -> None:
        """Create a local directory and its parents."""
        local = self._local_path(path)
        if not local.is_dir():
            logger.debug(f"Creating directory {local}")
        local.mkdir(parents=True, exist_ok=True)

    def list_children(self, path: str, prefix: str | None = None) -> list[TreeEntry]:
        """List a local directory."""
        local = self._local_path(path)
        if not local.is_dir():
            raise NotFoundError(f"Directory not found [{path}].", path)
        path = normalize_path(path)
        entries = []
        for child in local.iterdir():
            if prefix and not child.name.startswith(prefix):
                continue
            is_directory = child.is_dir()
            # Broken symlinks are listed; the mirror skips them as missing
            is_file = child.is_file()
            entries.append(TreeEntry(
                name=child.name,
                path=join_path(path, child.name),
                is_directory=is_directory,
                size=child.stat().st_size if is_file else 0,
            ))
        return entries

    @contextmanager
    def open_read(self, path: str) -> Iterator[IO[bytes]]:
        """Open a local file for reading."""
        with open(self._local_path(path), "rb") as f:
            yield f

    def write(self, path: str, stream: IO[bytes], length: int) -> None:
        """Write a local file, creating its parent directory if needed."""
        local = self._local_path(path)
        local.parent.mkdir(parents=True, exist_ok=True)
        with open(local, "wb") as f:
            shutil.copyfileobj(stream, f)
            f.flush()

    def delete(self, path: str) -> bool:
        """Delete a local file."""
        local = self._local_path(path)
        if local.is_file():
            local.unlink()
            return True
        return False

    def copy(self, source: str, destination: str) -> None:
        """Copy a local file."""
        source_path = self._local_path(source)
        if not source_path.is_file():
            raise NotFoundError(f"File not found [{source}].", source)
        destination_path = self._local_path(destination)
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source_path, destination_path)


def _missing_as_none(func: Callable[[], T]) -> T | None:
    """Call an SDK getter, mapping "no such resource" to None."""
    try:
        return func()
    except ResourceNotFoundError:
        return None
    except HttpResponseError as e:
        # Asking for directory properties of a file (or vice versa)
        if getattr(e, "error_code", None) == "ResourceTypeMismatch":
            return None
        raise


class ShareFileTree(FileTree):
    """An Azure file share.

    Each operation maps onto one or two calls on the SDK's share, directory
    and file clients. Transport errors (azure.core.exceptions.AzureError)
    are not caught.
    """

    def __init__(self, share: ShareClient) -> None:
        """Initialize a share tree.

        Args:
            share: SDK client for the file share.
        """
        self._share = share

    @classmethod
    def from_config(cls, config: ShareConfig) -> ShareFileTree:
        """Create a share tree from connection configuration."""
        share = ShareClient.from_connection_string(
            config.effective_connection_string,
            share_name=config.share_name,
            connection_timeout=config.timeout,
        )
        return cls(share)

    @property
    def name(self) -> str:
        return str(self._share.share_name)

    @property
    def location(self) -> str:
        """Return the share name."""
        return f"Azure file share: {self.name}"

    def ensure_root(self) -> bool:
        """Create the share."""
        try:
            self._share.create_share()
        except ResourceExistsError:
            logger.debug(f"Share '{self.name}' already exists.")
            return False
        logger.info(f"Created share '{self.name}'.")
        return True

    def stat(self, path: str) -> TreeEntry | None:
        """Look up a path in the share."""
        path = normalize_path(path)
        if not path:
            if _missing_as_none(self._share.get_share_properties) is None:
                return None
            return TreeEntry(name="", path="", is_directory=True)

        name = path.rsplit("/", 1)[-1]
        directory = self._share.get_directory_client(path)
        if _missing_as_none(directory.get_directory_properties) is not None:
            return TreeEntry(name=name, path=path, is_directory=True)

        file_client = self._share.get_file_client(path)
        properties = _missing_as_none(file_client.get_file_properties)
        if properties is None:
            return None
        return TreeEntry(name=name, path=path, is_directory=False, size=properties.size)

    def ensure_directory(self, path: str) -> None:
        """Create a directory in the share, one level at a time."""
        current = ""
        for part in normalize_path(path).split("/"):
            if not part:
                continue
            current = join_path(current, part)
            try:
                self._share.get_directory_client(current).create_directory()
                logger.debug(f"Created directory {current}")
            except ResourceExistsError:
                pass

    def list_children(self, path: str, prefix: str | None = None) -> list[TreeEntry]:
        """List a directory in the share."""
        path = normalize_path(path)
        directory = self._share.get_directory_client(path)
        try:
            items = list(directory.list_directories_and_files(name_starts_with=prefix))
        except ResourceNotFoundError as e:
            raise NotFoundError(f"Directory not found [{path}].", path) from e

        entries = []
        for item in items:
            is_directory = bool(item["is_directory"])
            entries.append(TreeEntry(
                name=item["name"],
                path=join_path(path, item["name"]),
                is_directory=is_directory,
                size=0 if is_directory else int(item.get("size") or 0),
            ))
        return entries

    @contextmanager
    def open_read(self, path: str) -> Iterator[IO[bytes]]:
        """Download a file and expose its content as a stream."""
        path = normalize_path(path)
        file_client = self._share.get_file_client(path)
        try:
            downloader = file_client.download_file()
        except ResourceNotFoundError as e:
            raise NotFoundError(f"File not found [{path}].", path) from e

        with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE) as buffer:
            downloader.readinto(buffer)
            buffer.seek(0)
            yield buffer

    def write(self, path: str, stream: IO[bytes], length: int) -> None:
        """Create (or replace) a file of the given length and upload its content."""
        path = normalize_path(path)
        self._share.get_file_client(path).upload_file(stream, length=length)

    def delete(self, path: str) -> bool:
        """Delete a file from the share."""
        path = normalize_path(path)
        try:
            self._share.get_file_client(path).delete_file()
        except ResourceNotFoundError:
            return False
        logger.info(f"Deleted {path}")
        return True

    def copy(self, source: str, destination: str) -> None:
        """Start a server-side copy from the source file's URL."""
        source = normalize_path(source)
        destination = normalize_path(destination)
        entry = self.stat(source)
        if entry is None or entry.is_directory:
            raise NotFoundError(f"File not found [{source}].", source)

        source_client = self._share.get_file_client(source)
        self._share.get_file_client(destination).start_copy_from_url(source_client.url)
        logger.info(f"Copied {source} -> {destination}")
