"""Zip member enumeration.

Zip keeps its index in the central directory at the end of the file, so this
decoder seeks instead of streaming. Members have independent offsets, which
lets one corrupt member fail alone.
"""

from __future__ import annotations

import logging
import stat
import zipfile
from collections.abc import Iterator
from functools import partial

from ..entry_model.types import ArchiveMemberEntry, FilesystemEntry
from ..errors import AccessError, DecodeError, describe_os_error
from .members import MemberItem

logger = logging.getLogger(__name__)

ZIP_ENCRYPTED_FLAG = 0x1


def _is_symlink(info: zipfile.ZipInfo) -> bool:
    return stat.S_ISLNK(info.external_attr >> 16)


def iter_zip_members(entry: FilesystemEntry) -> Iterator[MemberItem]:
    """Yield member entries of a zip archive in central-directory order."""
    archive_path = entry.logical_path
    try:
        archive = zipfile.ZipFile(entry.path, "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, ValueError) as exc:
        yield DecodeError(archive_path, f"invalid zip archive: {exc}")
        return
    except OSError as exc:
        yield AccessError(archive_path, describe_os_error(exc))
        return

    with archive:
        emitted: set[str] = set()
        for info in archive.infolist():
            name = info.filename
            if not name or info.is_dir():
                continue
            if _is_symlink(info):
                logger.debug("skipping symlink member %s in %s", name, archive_path)
                continue

            member = ArchiveMemberEntry(
                archive_path=archive_path,
                member_name=name,
                size_bytes=info.file_size,
                opener=partial(archive.open, info, "r"),
            )
            if name in emitted:
                yield DecodeError(member.logical_path, "duplicate member name")
                continue
            emitted.add(name)
            if info.flag_bits & ZIP_ENCRYPTED_FLAG:
                yield DecodeError(member.logical_path, "encrypted members are not supported")
                continue
            yield member


__all__ = ["iter_zip_members"]
