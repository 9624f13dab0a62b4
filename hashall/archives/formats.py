"""Archive container classification by file name suffix.

The suffix table is closed: files are never sniffed by content, so an
unrecognized or corrupt binary is always treated as an opaque file.
"""

from __future__ import annotations

from enum import Enum


class ArchiveFormat(str, Enum):
    ZIP = "zip"
    TAR = "tar"
    TAR_GZ = "tar.gz"
    TAR_BZ2 = "tar.bz2"
    TAR_XZ = "tar.xz"
    TAR_ZST = "tar.zst"

    @property
    def is_tar_family(self) -> bool:
        return self is not ArchiveFormat.ZIP


# Longest suffixes first so ``.tar.gz`` wins over a bare ``.gz`` style match.
ARCHIVE_SUFFIXES: tuple[tuple[str, ArchiveFormat], ...] = (
    (".tar.bz2", ArchiveFormat.TAR_BZ2),
    (".tar.zst", ArchiveFormat.TAR_ZST),
    (".tar.gz", ArchiveFormat.TAR_GZ),
    (".tar.xz", ArchiveFormat.TAR_XZ),
    (".tgz", ArchiveFormat.TAR_GZ),
    (".tar", ArchiveFormat.TAR),
    (".zip", ArchiveFormat.ZIP),
)


def detect_archive_format(name: str) -> ArchiveFormat | None:
    """Return the container format for file ``name`` or ``None`` for plain files."""
    lowered = name.lower()
    for suffix, archive_format in ARCHIVE_SUFFIXES:
        if lowered.endswith(suffix) and len(lowered) > len(suffix):
            return archive_format
    return None


__all__ = [
    "ArchiveFormat",
    "ARCHIVE_SUFFIXES",
    "detect_archive_format",
]
