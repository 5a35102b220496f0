"""
Tests for TreeWalker depth-first traversal.
"""

import os
from pathlib import Path

import pytest

from treefind.core import EntryKind, EntryResolutionError, MetadataFetchError
from treefind.core.walker import TreeWalker, WalkEntry


def _paths(items) -> list[str]:
    return [item.path for item in items if isinstance(item, WalkEntry)]


@pytest.fixture
def sample_tree(tmp_path: Path) -> str:
    """Create root/{a.txt, b.csv, sub/c.txt} and return the root path."""
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "b.csv").write_text("b")
    (root / "sub" / "c.txt").write_text("c")
    return str(root)


@pytest.fixture
def deny_listing(monkeypatch):
    """Make os.scandir fail with PermissionError for chosen directories."""
    denied: set[str] = set()
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.fspath(path) in denied:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    return denied


class TestWalkOrder:
    """The root comes first and each directory precedes its contents."""

    def test_pre_order_sorted(self, sample_tree: str):
        items = list(TreeWalker().walk(sample_tree))

        assert _paths(items) == [
            sample_tree,
            os.path.join(sample_tree, "a.txt"),
            os.path.join(sample_tree, "b.csv"),
            os.path.join(sample_tree, "sub"),
            os.path.join(sample_tree, "sub", "c.txt"),
        ]

    def test_unsorted_walk_visits_same_entries(self, sample_tree: str):
        sorted_paths = _paths(TreeWalker(sort_entries=True).walk(sample_tree))
        listing_paths = _paths(TreeWalker(sort_entries=False).walk(sample_tree))

        assert set(listing_paths) == set(sorted_paths)
        assert listing_paths[0] == sample_tree

    def test_unsorted_walk_is_repeatable(self, sample_tree: str):
        walker = TreeWalker(sort_entries=False)

        assert _paths(walker.walk(sample_tree)) == _paths(walker.walk(sample_tree))

    def test_depths(self, sample_tree: str):
        depths = {
            item.path: item.depth
            for item in TreeWalker().walk(sample_tree)
        }

        assert depths[sample_tree] == 0
        assert depths[os.path.join(sample_tree, "a.txt")] == 1
        assert depths[os.path.join(sample_tree, "sub", "c.txt")] == 2


class TestPaths:
    """Paths are joined onto the root as typed, never canonicalized."""

    def test_relative_root(self, sample_tree: str, monkeypatch):
        monkeypatch.chdir(sample_tree)

        paths = _paths(TreeWalker().walk("."))

        assert paths[0] == "."
        assert "./a.txt" in paths
        assert "./sub/c.txt" in paths

    def test_trailing_separator_root(self, sample_tree: str):
        entries = list(TreeWalker().walk(sample_tree + "/"))

        assert entries[0].path == sample_tree + "/"
        assert entries[0].name == "root"
        assert entries[1].path == sample_tree + "/a.txt"

    def test_dot_root_name(self, sample_tree: str, monkeypatch):
        monkeypatch.chdir(sample_tree)

        first = next(iter(TreeWalker().walk(".")))

        assert first.name == "."

    def test_file_root(self, sample_tree: str):
        file_root = os.path.join(sample_tree, "a.txt")

        items = list(TreeWalker().walk(file_root))

        assert _paths(items) == [file_root]
        assert items[0].name == "a.txt"


class TestResolutionErrors:
    """Unresolvable entries are yielded as values and the walk continues."""

    def test_missing_root(self, tmp_path: Path):
        missing = str(tmp_path / "nope")

        items = list(TreeWalker().walk(missing))

        assert len(items) == 1
        assert isinstance(items[0], EntryResolutionError)
        assert items[0].path == missing
        assert isinstance(items[0].cause, FileNotFoundError)

    def test_unreadable_directory_keeps_siblings(self, sample_tree: str, deny_listing):
        sub = os.path.join(sample_tree, "sub")
        deny_listing.add(sub)

        items = list(TreeWalker().walk(sample_tree))
        errors = [item for item in items if isinstance(item, EntryResolutionError)]

        assert _paths(items) == [
            sample_tree,
            os.path.join(sample_tree, "a.txt"),
            os.path.join(sample_tree, "b.csv"),
            sub,
        ]
        assert len(errors) == 1
        assert errors[0].path == sub
        assert "Permission denied" in str(errors[0])

    def test_unreadable_root_yields_root_then_error(self, sample_tree: str, deny_listing):
        deny_listing.add(sample_tree)

        items = list(TreeWalker().walk(sample_tree))

        assert isinstance(items[0], WalkEntry)
        assert isinstance(items[1], EntryResolutionError)
        assert len(items) == 2


class TestSymlinks:
    """Links below the root are reported but never followed."""

    def test_link_to_directory_not_followed(self, sample_tree: str):
        link = os.path.join(sample_tree, "loop")
        os.symlink(sample_tree, link)

        paths = _paths(TreeWalker().walk(sample_tree))

        assert link in paths
        assert not any(p.startswith(link + os.sep) for p in paths)

    def test_broken_link_is_an_entry(self, sample_tree: str):
        link = os.path.join(sample_tree, "dangling")
        os.symlink(os.path.join(sample_tree, "missing"), link)

        items = list(TreeWalker().walk(sample_tree))

        assert link in _paths(items)
        assert not any(isinstance(item, EntryResolutionError) for item in items)

    def test_root_link_followed_by_default(self, sample_tree: str, tmp_path: Path):
        link = str(tmp_path / "root-link")
        os.symlink(sample_tree, link)

        items = list(TreeWalker().walk(link))

        assert os.path.join(link, "sub", "c.txt") in _paths(items)
        # A root walked as a directory is also classified as one
        assert items[0].path == link
        assert items[0].kind() is EntryKind.DIRECTORY

    def test_root_link_not_followed_when_disabled(self, sample_tree: str, tmp_path: Path):
        link = str(tmp_path / "root-link")
        os.symlink(sample_tree, link)

        items = list(TreeWalker(follow_root_links=False).walk(link))

        assert _paths(items) == [link]
        assert items[0].kind() is EntryKind.SYMLINK

    def test_links_below_followed_root_stay_links(self, sample_tree: str, tmp_path: Path):
        inner = os.path.join(sample_tree, "to-sub")
        os.symlink(os.path.join(sample_tree, "sub"), inner)
        link = str(tmp_path / "root-link")
        os.symlink(sample_tree, link)

        kinds = {item.name: item.kind() for item in TreeWalker().walk(link)}

        assert kinds["to-sub"] is EntryKind.SYMLINK


class TestUndecodableNames:
    """Names that are not valid in the filesystem encoding are still walked."""

    def test_surrogate_escaped_name(self, sample_tree: str):
        raw_name = b"bad\xff.txt"
        try:
            with open(os.path.join(os.fsencode(sample_tree), raw_name), "wb"):
                pass
        except OSError:
            pytest.skip("filesystem rejects non-UTF-8 names")

        items = list(TreeWalker().walk(sample_tree))
        names = [item.name for item in items]

        assert os.fsdecode(raw_name) in names
        assert "b.csv" in names
        assert "c.txt" in names
        assert not any(isinstance(item, EntryResolutionError) for item in items)


class TestWalkEntryKind:
    """WalkEntry.kind() classifies without following links."""

    def test_kinds(self, sample_tree: str):
        link = os.path.join(sample_tree, "to-sub")
        os.symlink(os.path.join(sample_tree, "sub"), link)

        kinds = {
            item.name: item.kind()
            for item in TreeWalker().walk(sample_tree)
        }

        assert kinds["root"] is EntryKind.DIRECTORY
        assert kinds["a.txt"] is EntryKind.FILE
        assert kinds["sub"] is EntryKind.DIRECTORY
        assert kinds["to-sub"] is EntryKind.SYMLINK

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires mkfifo")
    def test_fifo_has_no_kind(self, tmp_path: Path):
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)

        assert WalkEntry(path=str(fifo), name="pipe", depth=1).kind() is None

    def test_vanished_entry_raises(self, tmp_path: Path):
        entry = WalkEntry(path=str(tmp_path / "gone"), name="gone", depth=1)

        with pytest.raises(MetadataFetchError) as exc_info:
            entry.kind()

        assert exc_info.value.path == entry.path
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
