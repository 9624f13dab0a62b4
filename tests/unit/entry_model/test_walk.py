"""Tests for filesystem entry discovery.

Covers recursion modes, hidden-entry filtering, symlink policy, unreadable
paths, root resolution and archive tagging.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from hashall.archives import ArchiveFormat
from hashall.entry_model import FilesystemEntry, resolve_roots, walk
from hashall.errors import AccessError


def _build_tree(root: Path) -> None:
    (root / "file.txt").write_bytes(b"top")
    (root / ".hidden_file.txt").write_bytes(b"hidden")
    (root / "directory").mkdir()
    (root / "directory" / "file.txt").write_bytes(b"nested")
    (root / ".hidden").mkdir()
    (root / ".hidden" / "file.txt").write_bytes(b"hidden nested")


class WalkTests(unittest.TestCase):
    def test_non_recursive_lists_only_direct_child_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "only.txt").write_bytes(b"x")
            (root / "sub").mkdir()
            (root / "sub" / "inner.txt").write_bytes(b"y")

            items = list(walk([root], recursive=False))

            self.assertEqual(len(items), 1)
            self.assertIsInstance(items[0], FilesystemEntry)
            self.assertEqual(items[0].path, root / "only.txt")
            self.assertEqual(items[0].size_bytes, 1)

    def test_recursive_descends_depth_first_in_name_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)

            items = list(walk([root], recursive=True))

            relative = [item.path.relative_to(root).as_posix() for item in items]
            self.assertEqual(
                relative,
                [".hidden/file.txt", ".hidden_file.txt", "directory/file.txt", "file.txt"],
            )

    def test_hidden_entries_can_be_excluded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)

            items = list(walk([root], recursive=True, show_hidden=False))

            relative = sorted(item.path.relative_to(root).as_posix() for item in items)
            self.assertEqual(relative, ["directory/file.txt", "file.txt"])

    def test_file_root_yields_single_entry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "single.bin"
            target.write_bytes(b"12345")

            items = list(walk([target], recursive=False))

            self.assertEqual(items, [FilesystemEntry(path=target, size_bytes=5)])

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unavailable")
    def test_symlink_policy(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "root"
            root.mkdir()
            outside = Path(tmp) / "outside"
            outside.mkdir()
            (outside / "secret.txt").write_bytes(b"outside")
            (root / "real.txt").write_bytes(b"real")
            os.symlink(root / "real.txt", root / "file-link.txt")
            os.symlink(outside, root / "dir-link")
            os.symlink(root / "missing.txt", root / "broken-link.txt")

            items = list(walk([root], recursive=True))

            entries = {item.path.name: item for item in items if isinstance(item, FilesystemEntry)}
            errors = [item for item in items if isinstance(item, AccessError)]
            self.assertEqual(set(entries), {"real.txt", "file-link.txt"})
            self.assertEqual(entries["file-link.txt"].size_bytes, 4)
            self.assertEqual(len(errors), 1)
            self.assertEqual(errors[0].logical_path, str(root / "broken-link.txt"))

    @unittest.skipIf(hasattr(os, "geteuid") and os.geteuid() == 0, "root ignores permissions")
    def test_unreadable_directory_is_reported_and_siblings_continue(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            locked = root / "locked"
            locked.mkdir()
            (locked / "inside.txt").write_bytes(b"x")
            (root / "visible.txt").write_bytes(b"y")
            locked.chmod(0)
            try:
                items = list(walk([root], recursive=True))
            finally:
                locked.chmod(0o755)

            errors = [item for item in items if isinstance(item, AccessError)]
            entries = [item for item in items if isinstance(item, FilesystemEntry)]
            self.assertEqual([error.logical_path for error in errors], [str(locked)])
            self.assertEqual([entry.path.name for entry in entries], ["visible.txt"])

    def test_archive_files_are_tagged_only_in_archive_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "bundle.tar.gz").write_bytes(b"not inspected here")
            (root / "data.zst").write_bytes(b"opaque")

            plain = {item.path.name: item.archive_format for item in walk([root], recursive=False)}
            tagged = {item.path.name: item.archive_format for item in walk([root], recursive=False, archive=True)}

            self.assertEqual(plain, {"bundle.tar.gz": None, "data.zst": None})
            self.assertEqual(tagged, {"bundle.tar.gz": ArchiveFormat.TAR_GZ, "data.zst": None})


class ResolveRootsTests(unittest.TestCase):
    def test_missing_roots_become_access_errors(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            missing = root / "nope"

            roots, errors = resolve_roots([root, missing])

            self.assertEqual(roots, [root])
            self.assertEqual(len(errors), 1)
            self.assertIsInstance(errors[0], AccessError)
            self.assertEqual(errors[0].logical_path, str(missing))

    def test_duplicate_roots_are_walked_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            roots, errors = resolve_roots([root, root / ".", Path(str(root) + "/")])

            self.assertEqual(roots, [root])
            self.assertEqual(errors, [])

    def test_nested_roots_are_covered_by_recursive_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)
            nested = root / "directory"

            for given in ([root, nested], [nested, root]):
                with self.subTest(order=[path.name for path in given]):
                    roots, errors = resolve_roots(given, True)

                    self.assertEqual(roots, [root])
                    self.assertEqual(errors, [])
                    paths = [item.logical_path for item in walk(roots, True)]
                    self.assertEqual(len(paths), len(set(paths)))

    def test_nested_directory_is_kept_when_not_recursive(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)
            nested = root / "directory"

            roots, _ = resolve_roots([root, nested], False)

            self.assertEqual(roots, [root, nested])

    def test_file_root_inside_directory_root_is_covered(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)
            top_file = root / "file.txt"
            deep_file = root / "directory" / "file.txt"

            roots, _ = resolve_roots([root, top_file, deep_file], False)
            self.assertEqual(roots, [root, deep_file])

            roots, _ = resolve_roots([top_file, deep_file, root], True)
            self.assertEqual(roots, [root])

    def test_overlapping_roots_yield_one_entry_per_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)
            given = [root, root / "directory", root / "directory" / "file.txt"]

            roots, _ = resolve_roots(given, True)
            paths = [item.logical_path for item in walk(roots, True)]

            self.assertEqual(paths.count(str(root / "directory" / "file.txt")), 1)
            self.assertEqual(len(paths), len(set(paths)))

    def test_root_under_hidden_directory_is_kept_when_hidden_excluded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_tree(root)
            hidden_dir = root / ".hidden"

            roots, _ = resolve_roots([root, hidden_dir], True, show_hidden=False)
            self.assertEqual(roots, [root, hidden_dir])

            roots, _ = resolve_roots([root, hidden_dir], True, show_hidden=True)
            self.assertEqual(roots, [root])


if __name__ == "__main__":
    unittest.main()
