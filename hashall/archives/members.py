"""Shared member-stream types and decode-failure classification."""

from __future__ import annotations

import lzma
import tarfile
import zipfile
import zlib

import zstandard

from ..entry_model.types import ArchiveMemberEntry
from ..errors import HashallError

MemberItem = ArchiveMemberEntry | HashallError

# Exceptions raised while reading member bytes that mean corrupt content
# rather than an I/O failure of the underlying file.
MEMBER_DECODE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    zipfile.BadZipFile,
    tarfile.TarError,
    zlib.error,
    lzma.LZMAError,
    zstandard.ZstdError,
    EOFError,
    NotImplementedError,
)


__all__ = ["MemberItem", "MEMBER_DECODE_EXCEPTIONS"]
