"""Dispatch from archive format to the matching member decoder."""

from __future__ import annotations

from collections.abc import Iterator

from ..entry_model.types import FilesystemEntry
from .formats import ArchiveFormat
from .members import MemberItem
from .tar_members import iter_tar_members
from .zip_members import iter_zip_members


def decode(entry: FilesystemEntry, archive_format: ArchiveFormat) -> Iterator[MemberItem]:
    """Lazily yield member entries (or decode errors) of ``entry``.

    Members are never expanded further: an archive nested inside an archive is
    hashed as opaque bytes.
    """
    if archive_format is ArchiveFormat.ZIP:
        return iter_zip_members(entry)
    return iter_tar_members(entry, archive_format)


__all__ = ["decode"]
