"""Domain model for hashable entries and their discovery.

This package contains the non-archive entry primitives:
- filesystem and archive-member entry datatypes
- immutable result records
- filesystem walking helpers
"""

from __future__ import annotations

from .types import MEMBER_SEPARATOR, ArchiveMemberEntry, Entry, FilesystemEntry
from .records import ResultRecord
from .walk import (
    DirectoryChild,
    WalkItem,
    is_hidden_name,
    list_directory_children,
    resolve_roots,
    walk,
    walk_root,
)

__all__ = [
    "MEMBER_SEPARATOR",
    "ArchiveMemberEntry",
    "Entry",
    "FilesystemEntry",
    "ResultRecord",
    "DirectoryChild",
    "WalkItem",
    "is_hidden_name",
    "list_directory_children",
    "resolve_roots",
    "walk",
    "walk_root",
]
