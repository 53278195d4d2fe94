"""Core module - Configuration, tree types and errors."""

from sharemirror.core.config import ShareConfig
from sharemirror.core.types import (
    ConfigError,
    DirectoryNode,
    FileNode,
    MirrorResult,
    MirrorTask,
    NotFoundError,
    ShareMirrorError,
    TransferCallback,
    TreeEntry,
    TreeNode,
    join_path,
    normalize_path,
    user_path,
)

__all__ = [
    # Config
    "ShareConfig",
    # Errors
    "ConfigError",
    "NotFoundError",
    "ShareMirrorError",
    # Types
    "DirectoryNode",
    "FileNode",
    "MirrorResult",
    "MirrorTask",
    "TransferCallback",
    "TreeEntry",
    "TreeNode",
    "join_path",
    "normalize_path",
    "user_path",
]
