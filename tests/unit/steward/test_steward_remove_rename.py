"""Tests for remove, rename, and inspection through the steward."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from filesteward import (
    EntryKind,
    FileSteward,
    InvalidArgumentError,
    JurisdictionError,
    NotFoundError,
    OperationFailedError,
)


class StewardTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name).resolve()
        self.root = self.base / "root"
        self.steward = FileSteward(self.root)

    def tearDown(self) -> None:
        self._tmp.cleanup()


class RemoveTests(StewardTestCase):
    def test_remove_directory_recursively(self) -> None:
        self.steward.create_file("tree/a/b.txt", "b")

        self.steward.remove("tree")

        self.assertFalse((self.root / "tree").exists())

    def test_remove_file(self) -> None:
        self.steward.create_file("f.txt", "x")

        self.steward.remove("f.txt", force=False)

        self.assertFalse((self.root / "f.txt").exists())

    def test_missing_path_with_force_is_silent(self) -> None:
        self.steward.remove("never-existed")

    def test_missing_path_without_force_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError) as caught:
            self.steward.remove("never-existed", force=False)
        self.assertEqual(caught.exception.paths, (self.root / "never-existed",))

    def test_remove_outside_root_is_rejected(self) -> None:
        victim = self.base / "victim.txt"
        victim.write_text("keep", encoding="utf-8")

        with self.assertRaises(JurisdictionError):
            self.steward.remove("../victim.txt")
        self.assertTrue(victim.exists())

    def test_remove_root_is_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            self.steward.remove(self.root)
        self.assertTrue(self.root.is_dir())

    def test_remove_symlink_is_unsupported(self) -> None:
        self.steward.create_file("target.txt", "x")
        os.symlink(self.root / "target.txt", self.root / "link")

        with self.assertRaises(OperationFailedError):
            self.steward.remove("link")
        self.assertTrue(os.path.lexists(self.root / "link"))


class RenameTests(StewardTestCase):
    def test_rename_within_same_directory(self) -> None:
        self.steward.create_file("a/x", "content")

        self.steward.rename("a/x", "a/y")

        self.assertFalse((self.root / "a" / "x").exists())
        self.assertEqual((self.root / "a" / "y").read_text(encoding="utf-8"), "content")

    def test_rename_across_directories_is_rejected(self) -> None:
        self.steward.create_file("a/x", "content")
        self.steward.create_directory("b")

        with self.assertRaises(InvalidArgumentError) as caught:
            self.steward.rename("a/x", "b/x")
        self.assertIn("do not match", str(caught.exception))
        self.assertTrue((self.root / "a" / "x").exists())
        self.assertFalse((self.root / "b" / "x").exists())

    def test_rename_missing_source(self) -> None:
        with self.assertRaises(NotFoundError):
            self.steward.rename("ghost", "spirit")

    def test_rename_checks_both_paths_for_jurisdiction(self) -> None:
        self.steward.create_file("x", "content")

        with self.assertRaises(JurisdictionError):
            self.steward.rename("x", "../x")
        with self.assertRaises(JurisdictionError):
            self.steward.rename("../root-old", "y")

    def test_rename_directory(self) -> None:
        self.steward.create_file("old/inner.txt", "i")

        self.steward.rename("old", "new")

        self.assertEqual((self.root / "new" / "inner.txt").read_text(encoding="utf-8"), "i")


class InspectTests(StewardTestCase):
    def test_inspect_root_by_default(self) -> None:
        entry = self.steward.inspect()

        self.assertEqual(entry.path, Path("."))
        self.assertIs(entry.kind, EntryKind.DIRECTORY)
        self.assertIsNone(entry.children)

    def test_inspect_with_recursive_children(self) -> None:
        self.steward.create_file("d/e/f.txt", "f")

        entry = self.steward.inspect("d", children=True, recursive=True)

        self.assertEqual(entry.path, Path("d"))
        (child,) = entry.children
        self.assertEqual(child.path, Path("d/e"))
        self.assertEqual([grandchild.path for grandchild in child.children], [Path("d/e/f.txt")])

    def test_inspect_absolute_paths(self) -> None:
        self.steward.create_file("f.txt", "x")

        entry = self.steward.inspect("f.txt", relative=False)

        self.assertEqual(entry.path, self.root / "f.txt")
        self.assertEqual(entry.size, 1)

    def test_inspect_missing_and_outside(self) -> None:
        with self.assertRaises(NotFoundError):
            self.steward.inspect("missing")
        with self.assertRaises(JurisdictionError):
            self.steward.inspect("..")

    def test_list_directory_requires_a_directory(self) -> None:
        self.steward.create_file("f.txt", "x")
        self.steward.create_directory("dir")

        self.assertEqual([entry.path for entry in self.steward.list_directory()], [Path("dir"), Path("f.txt")])
        with self.assertRaises(InvalidArgumentError):
            self.steward.list_directory("f.txt")


if __name__ == "__main__":
    unittest.main()
