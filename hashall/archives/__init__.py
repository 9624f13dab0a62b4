"""Archive container support: format detection and member decoding."""

from __future__ import annotations

from .formats import ARCHIVE_SUFFIXES, ArchiveFormat, detect_archive_format
from .members import MEMBER_DECODE_EXCEPTIONS, MemberItem
from .decoder import decode
from .tar_members import iter_tar_members
from .zip_members import iter_zip_members

__all__ = [
    "ARCHIVE_SUFFIXES",
    "ArchiveFormat",
    "detect_archive_format",
    "MEMBER_DECODE_EXCEPTIONS",
    "MemberItem",
    "decode",
    "iter_tar_members",
    "iter_zip_members",
]
