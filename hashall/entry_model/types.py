"""Domain datatypes for hashable entries discovered during a run."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from ..errors import AccessError, describe_os_error

if TYPE_CHECKING:
    from ..archives.formats import ArchiveFormat

MEMBER_SEPARATOR = "::"


@dataclass(frozen=True)
class FilesystemEntry:
    """Regular file (or symlink to one) found under a root.

    ``archive_format`` is set by the walker only when archive expansion is
    enabled and the file name matches a recognized container suffix.
    """

    path: Path
    size_bytes: int | None = None
    archive_format: ArchiveFormat | None = None

    @property
    def logical_path(self) -> str:
        return str(self.path)

    @property
    def size_hint(self) -> int | None:
        return self.size_bytes

    def open_reader(self) -> BinaryIO:
        """Open the file for sequential binary reads."""
        try:
            return self.path.open("rb")
        except OSError as exc:
            raise AccessError(self.logical_path, describe_os_error(exc)) from exc


@dataclass(frozen=True)
class ArchiveMemberEntry:
    """One member inside a zip/tar container.

    ``opener`` is only valid while the owning decoder is positioned on this
    member; streamed tar members cannot be reopened after the decoder moves on.
    A tar hard link has no bytes of its own: ``link_target`` names the earlier
    member whose content it shares.
    """

    archive_path: str
    member_name: str
    size_bytes: int | None = None
    link_target: str | None = None
    opener: Callable[[], BinaryIO] | None = field(default=None, compare=False, repr=False)

    @property
    def logical_path(self) -> str:
        return f"{self.archive_path}{MEMBER_SEPARATOR}{self.member_name}"

    @property
    def size_hint(self) -> int | None:
        return self.size_bytes

    def open_reader(self) -> BinaryIO:
        if self.opener is None:
            raise AccessError(self.logical_path, "member has no readable content")
        return self.opener()


Entry = FilesystemEntry | ArchiveMemberEntry


__all__ = [
    "MEMBER_SEPARATOR",
    "FilesystemEntry",
    "ArchiveMemberEntry",
    "Entry",
]
