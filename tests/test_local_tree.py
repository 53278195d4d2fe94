"""Tests for the local filesystem tree."""

from pathlib import Path

import pytest

from sharemirror.core.types import NotFoundError, TreeEntry
from sharemirror.storage import LocalFileTree
from tests.fixtures import build_tree


@pytest.fixture
def tree(tmp_path: Path) -> LocalFileTree:
    """Create a LocalFileTree over a small directory."""
    root = build_tree(tmp_path / "root", {
        "a.txt": "hello",
        "sub/": {"b.txt": "world", "empty/": {}},
    })
    return LocalFileTree(root)


class TestLocalFileTree:
    """Tests for LocalFileTree."""

    def test_name_and_location(self, tree: LocalFileTree) -> None:
        """Should describe the root directory."""
        assert tree.name == "root"
        assert str(tree.base_path) in tree.location

    def test_stat_root(self, tree: LocalFileTree) -> None:
        """stat('') should return the root directory."""
        assert tree.stat("") == TreeEntry(name="", path="", is_directory=True)

    def test_stat_file(self, tree: LocalFileTree) -> None:
        """stat() should report file size."""
        assert tree.stat("sub/b.txt") == TreeEntry(
            name="b.txt", path="sub/b.txt", is_directory=False, size=5
        )

    def test_stat_missing(self, tree: LocalFileTree) -> None:
        """stat() should return None for missing paths."""
        assert tree.stat("nope.txt") is None
        assert not tree.exists("nope.txt")

    def test_stat_normalizes_path(self, tree: LocalFileTree) -> None:
        """stat() should accept redundant separators."""
        entry = tree.stat("./sub//b.txt")
        assert entry is not None
        assert entry.path == "sub/b.txt"

    def test_path_outside_root_rejected(self, tree: LocalFileTree) -> None:
        """Paths escaping the root should be refused."""
        with pytest.raises(ValueError, match="escapes"):
            tree.stat("../outside.txt")

    def test_list_children(self, tree: LocalFileTree) -> None:
        """list_children() should return direct children only."""
        entries = sorted(tree.list_children("sub"), key=lambda e: e.name)
        assert entries == [
            TreeEntry(name="b.txt", path="sub/b.txt", is_directory=False, size=5),
            TreeEntry(name="empty", path="sub/empty", is_directory=True),
        ]

    def test_list_children_prefix(self, tree: LocalFileTree) -> None:
        """list_children() should filter by name prefix."""
        entries = tree.list_children("sub", prefix="b")
        assert [e.name for e in entries] == ["b.txt"]

    def test_list_missing_directory(self, tree: LocalFileTree) -> None:
        """list_children() should raise NotFoundError for missing directories."""
        with pytest.raises(NotFoundError, match="Directory not found"):
            tree.list_children("missing")

    def test_list_file_is_not_a_directory(self, tree: LocalFileTree) -> None:
        """list_children() on a file should raise NotFoundError."""
        with pytest.raises(NotFoundError):
            tree.list_children("a.txt")

    def test_open_read(self, tree: LocalFileTree) -> None:
        """open_read() should stream file content."""
        with tree.open_read("a.txt") as stream:
            assert stream.read() == b"hello"

    def test_write_creates_parents(self, tree: LocalFileTree) -> None:
        """write() should create missing parent directories."""
        from io import BytesIO

        tree.write("new/deep/c.txt", BytesIO(b"data"), 4)
        assert (tree.base_path / "new" / "deep" / "c.txt").read_bytes() == b"data"

    def test_write_overwrites(self, tree: LocalFileTree) -> None:
        """write() should truncate an existing file."""
        from io import BytesIO

        tree.write("a.txt", BytesIO(b"hi"), 2)
        assert (tree.base_path / "a.txt").read_bytes() == b"hi"

    def test_ensure_directory(self, tree: LocalFileTree) -> None:
        """ensure_directory() should create nested directories and be idempotent."""
        tree.ensure_directory("x/y")
        tree.ensure_directory("x/y")
        assert (tree.base_path / "x" / "y").is_dir()

    def test_ensure_root(self, tmp_path: Path) -> None:
        """ensure_root() should create the root once."""
        tree = LocalFileTree(tmp_path / "fresh")
        assert tree.ensure_root() is True
        assert tree.ensure_root() is False

    def test_delete(self, tree: LocalFileTree) -> None:
        """delete() should report whether a file was removed."""
        assert tree.delete("a.txt") is True
        assert tree.delete("a.txt") is False
        assert tree.delete("sub") is False

    def test_copy(self, tree: LocalFileTree) -> None:
        """copy() should duplicate a file."""
        tree.copy("a.txt", "sub/copy.txt")
        assert (tree.base_path / "sub" / "copy.txt").read_bytes() == b"hello"

    def test_copy_missing_source(self, tree: LocalFileTree) -> None:
        """copy() should raise NotFoundError for a missing source."""
        with pytest.raises(NotFoundError, match="File not found"):
            tree.copy("missing.txt", "b.txt")


class TestLocalFileTreeLinks:
    """Tests for symlinks and unusual names inside a local tree."""

    def test_file_symlink_outside_root(self, tmp_path: Path) -> None:
        """A link to a file outside the root is read like a regular file."""
        (tmp_path / "shared.txt").write_text("shared")
        root = build_tree(tmp_path / "root", {})
        (root / "link.txt").symlink_to(tmp_path / "shared.txt")
        tree = LocalFileTree(root)

        assert tree.stat("link.txt") == TreeEntry(
            name="link.txt", path="link.txt", is_directory=False, size=6
        )
        with tree.open_read("link.txt") as stream:
            assert stream.read() == b"shared"

    def test_directory_symlink_outside_root(self, tmp_path: Path) -> None:
        """A link to a directory outside the root is listed like a directory."""
        outside = build_tree(tmp_path / "outside", {"c.txt": "c"})
        root = build_tree(tmp_path / "root", {})
        (root / "linked").symlink_to(outside, target_is_directory=True)
        tree = LocalFileTree(root)

        assert tree.list_children("") == [
            TreeEntry(name="linked", path="linked", is_directory=True),
        ]
        assert tree.list_children("linked") == [
            TreeEntry(name="c.txt", path="linked/c.txt", is_directory=False, size=1),
        ]

    def test_broken_symlink_is_listed_but_missing(self, tmp_path: Path) -> None:
        """A dangling link is listed without a size and doesn't stat."""
        root = build_tree(tmp_path / "root", {})
        (root / "dangling.txt").symlink_to(tmp_path / "nowhere.txt")
        tree = LocalFileTree(root)

        assert tree.list_children("") == [
            TreeEntry(name="dangling.txt", path="dangling.txt", is_directory=False),
        ]
        assert tree.stat("dangling.txt") is None

    def test_dotdot_components_rejected(self, tree: LocalFileTree) -> None:
        """Paths with ".." anywhere are refused without touching the disk."""
        with pytest.raises(ValueError, match="escapes"):
            tree.stat("sub/../../outside.txt")

    def test_backslash_in_name(self, tmp_path: Path) -> None:
        """A file name containing a backslash keeps its name."""
        root = build_tree(tmp_path / "root", {"a\\b.txt": "x"})
        tree = LocalFileTree(root)

        assert tree.list_children("") == [
            TreeEntry(name="a\\b.txt", path="a\\b.txt", is_directory=False, size=1),
        ]
        assert tree.exists("a\\b.txt")
