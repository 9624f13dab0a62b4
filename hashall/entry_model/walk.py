"""Filesystem enumeration of hashable entries under one or more roots."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from ..archives.formats import detect_archive_format
from ..errors import AccessError, describe_os_error
from .types import FilesystemEntry

logger = logging.getLogger(__name__)

WalkItem = FilesystemEntry | AccessError


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory child with the metadata needed for dispatch."""

    name: str
    path: Path
    is_dir: bool
    is_symlink: bool


def is_hidden_name(name: str) -> bool:
    return name.startswith(".")


def _walk_location(path: Path, is_dir: bool) -> Path:
    """Real location at which a directory walk meets ``path``.

    Directories are only entered through real paths, while a file is yielded
    under its own name even when that name is a symlink.
    """
    try:
        if is_dir:
            return path.resolve()
        return path.parent.resolve() / path.name
    except (OSError, RuntimeError):
        return path.absolute()


def _reached_from(location: Path, is_dir: bool, directory: Path, *, recursive: bool, show_hidden: bool) -> bool:
    """Whether walking ``directory`` already yields everything under ``location``."""
    try:
        parts = location.relative_to(directory).parts
    except ValueError:
        return False
    if not parts:
        return False
    if not show_hidden and any(is_hidden_name(part) for part in parts):
        return False
    if recursive:
        return True
    return not is_dir and len(parts) == 1


def resolve_roots(
    paths: Iterable[Path],
    recursive: bool = True,
    *,
    show_hidden: bool = True,
) -> tuple[list[Path], list[AccessError]]:
    """Split ``paths`` into usable roots and start-up access errors.

    Roots that resolve to the same location are kept once, in first-seen order.
    A root that another directory root's walk already reaches is dropped,
    whichever order the two were given in, so every file is visited once.
    """
    candidates: list[tuple[Path, Path, bool]] = []
    errors: list[AccessError] = []
    seen: set[Path] = set()
    for raw_path in paths:
        path = Path(raw_path)
        try:
            mode = path.stat().st_mode
        except OSError as exc:
            errors.append(AccessError(str(path), describe_os_error(exc)))
            continue
        if not (stat.S_ISDIR(mode) or stat.S_ISREG(mode)):
            errors.append(AccessError(str(path), "not a regular file or directory"))
            continue
        try:
            key = path.resolve()
        except (OSError, RuntimeError):
            key = path.absolute()
        if key in seen:
            logger.info("skipping duplicate root %s", path)
            continue
        seen.add(key)
        is_dir = stat.S_ISDIR(mode)
        candidates.append((path, _walk_location(path, is_dir), is_dir))

    directories = [location for _, location, is_dir in candidates if is_dir]
    roots: list[Path] = []
    for path, location, is_dir in candidates:
        if any(
            _reached_from(location, is_dir, directory, recursive=recursive, show_hidden=show_hidden)
            for directory in directories
        ):
            logger.info("skipping root %s already covered by another root", path)
            continue
        roots.append(path)
    return roots, errors


def list_directory_children(
    directory: Path,
    show_hidden: bool,
) -> tuple[list[DirectoryChild], AccessError | None]:
    """List ``directory`` children sorted by name.

    Returns ``(children, scan_error)``; ``scan_error`` is set when the
    directory cannot be listed.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and is_hidden_name(name):
                    continue
                try:
                    is_symlink = child.is_symlink()
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_symlink = False
                    is_dir = False
                children.append(
                    DirectoryChild(
                        name=name,
                        path=Path(child.path),
                        is_dir=is_dir,
                        is_symlink=is_symlink,
                    )
                )
    except OSError as exc:
        return [], AccessError(str(directory), describe_os_error(exc))

    children.sort(key=lambda item: item.name)
    return children, None


def _file_entry(path: Path, size_bytes: int | None, archive: bool) -> FilesystemEntry:
    archive_format = detect_archive_format(path.name) if archive else None
    return FilesystemEntry(path=path, size_bytes=size_bytes, archive_format=archive_format)


def _entry_for_child(child: DirectoryChild, archive: bool) -> WalkItem | None:
    """Classify a non-directory child: entry, access error, or skipped (``None``)."""
    try:
        # Follows symlinks: a link to a file is hashed as its target content.
        child_stat = child.path.stat()
    except OSError as exc:
        reason = "dangling symbolic link" if child.is_symlink else describe_os_error(exc)
        return AccessError(str(child.path), reason)

    if stat.S_ISDIR(child_stat.st_mode):
        logger.debug("not following directory symlink %s", child.path)
        return None
    if not stat.S_ISREG(child_stat.st_mode):
        logger.debug("skipping special file %s", child.path)
        return None
    return _file_entry(child.path, int(child_stat.st_size), archive)


def walk_root(
    root: Path,
    recursive: bool,
    *,
    archive: bool = False,
    show_hidden: bool = True,
) -> Iterator[WalkItem]:
    """Lazily yield entries (and access errors) for a single root.

    Non-recursive mode lists only direct children. Recursive mode descends
    depth-first through real directories; directory symlinks are never
    followed so traversal always terminates.
    """
    try:
        root_stat = root.stat()
    except OSError as exc:
        yield AccessError(str(root), describe_os_error(exc))
        return

    if stat.S_ISREG(root_stat.st_mode):
        yield _file_entry(root, int(root_stat.st_size), archive)
        return
    if not stat.S_ISDIR(root_stat.st_mode):
        yield AccessError(str(root), "not a regular file or directory")
        return

    children, scan_error = list_directory_children(root, show_hidden)
    if scan_error is not None:
        yield scan_error
        return

    stack: list[Iterator[DirectoryChild]] = [iter(children)]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue

        if child.is_dir:
            if not recursive:
                continue
            nested, scan_error = list_directory_children(child.path, show_hidden)
            if scan_error is not None:
                yield scan_error
                continue
            stack.append(iter(nested))
            continue

        item = _entry_for_child(child, archive)
        if item is not None:
            yield item


def walk(
    root_paths: Iterable[Path],
    recursive: bool,
    *,
    archive: bool = False,
    show_hidden: bool = True,
) -> Iterator[WalkItem]:
    """Yield entries for every root in order, one root after another."""
    for root in root_paths:
        logger.debug("walking root %s", root)
        yield from walk_root(root, recursive, archive=archive, show_hidden=show_hidden)


__all__ = [
    "WalkItem",
    "DirectoryChild",
    "is_hidden_name",
    "resolve_roots",
    "list_directory_children",
    "walk_root",
    "walk",
]
