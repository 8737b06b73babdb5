"""Tests for entry classification and traversal."""

from __future__ import annotations

import asyncio
import os
import stat
import tempfile
import unittest
from pathlib import Path

from filesteward.entry_model import (
    EntryKind,
    TraversalContext,
    build_entry,
    classify_mode,
    iter_entries,
    list_entries,
    list_entries_async,
    lstat_kind,
)


def _make_tree(root: Path) -> None:
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "src" / "pkg" / "mod.py").write_text("x = 1\n", encoding="utf-8")
    (root / "README.md").write_text("# readme\n", encoding="utf-8")
    (root / "b.txt").write_text("b", encoding="utf-8")
    (root / "assets").mkdir()
    os.symlink(root / "README.md", root / "link.md")


class ClassifyModeTests(unittest.TestCase):
    def test_each_file_type_maps_to_one_kind(self) -> None:
        cases = {
            stat.S_IFBLK: EntryKind.BLOCK_DEVICE,
            stat.S_IFCHR: EntryKind.CHAR_DEVICE,
            stat.S_IFDIR: EntryKind.DIRECTORY,
            stat.S_IFIFO: EntryKind.FIFO,
            stat.S_IFREG: EntryKind.FILE,
            stat.S_IFSOCK: EntryKind.SOCKET,
            stat.S_IFLNK: EntryKind.SYMLINK,
        }
        for file_type, expected in cases.items():
            with self.subTest(kind=expected):
                self.assertIs(classify_mode(file_type | 0o644), expected)

    def test_unrecognized_mode_is_unknown(self) -> None:
        self.assertIs(classify_mode(0), EntryKind.UNKNOWN)

    def test_lstat_kind_does_not_follow_symlinks(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            self.assertIs(lstat_kind(root / "link.md"), EntryKind.SYMLINK)
            self.assertIs(lstat_kind(root / "README.md"), EntryKind.FILE)
            self.assertIsNone(lstat_kind(root / "missing"))


class TraversalTests(unittest.TestCase):
    def test_list_entries_orders_directories_first_then_by_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            entries = list_entries(TraversalContext(root=root), root)

            self.assertEqual(
                [str(entry.path) for entry in entries],
                ["assets", "src", "b.txt", "link.md", "README.md"],
            )
            self.assertTrue(all(entry.children is None for entry in entries))

    def test_recursive_listing_nests_children_with_relative_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            entries = list_entries(TraversalContext(root=root, recursive=True), root)
            flattened = {str(entry.path): entry.kind for entry in iter_entries(entries)}

            self.assertEqual(flattened[os.path.join("src", "pkg", "mod.py")], EntryKind.FILE)
            self.assertEqual(flattened[os.path.join("src", "pkg")], EntryKind.DIRECTORY)
            self.assertEqual(flattened["link.md"], EntryKind.SYMLINK)
            assets = next(entry for entry in entries if entry.path == Path("assets"))
            self.assertEqual(assets.children, ())

    def test_absolute_paths_when_not_relative(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            entries = list_entries(TraversalContext(root=root, relative=False), root / "src")

            self.assertEqual([entry.path for entry in entries], [root / "src" / "pkg"])

    def test_build_entry_for_root_uses_dot_and_expands_one_level(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            entry = build_entry(TraversalContext(root=root), root, expand_children=True)

            self.assertEqual(entry.path, Path("."))
            self.assertTrue(entry.is_dir)
            self.assertIsNotNone(entry.children)
            src = next(child for child in entry.children if child.path == Path("src"))
            self.assertIsNone(src.children)

    def test_build_entry_file_reports_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            entry = build_entry(TraversalContext(root=root), root / "README.md", expand_children=True)

            self.assertIs(entry.kind, EntryKind.FILE)
            self.assertEqual(entry.size, len("# readme\n"))
            self.assertIsNone(entry.children)

    def test_async_listing_matches_blocking_listing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            context = TraversalContext(root=root, recursive=True)

            blocking_entries = list_entries(context, root)
            async_entries = asyncio.run(list_entries_async(context, root))

            self.assertEqual(
                [(entry.path, entry.kind) for entry in iter_entries(blocking_entries)],
                [(entry.path, entry.kind) for entry in iter_entries(async_entries)],
            )


if __name__ == "__main__":
    unittest.main()
