"""Streaming tar-family member enumeration.

Each variant stacks a decompression layer under ``tarfile``'s stream mode, so
members are discovered and read one at a time without seeking or
decompressing the whole archive up front.
"""

from __future__ import annotations

import logging
import tarfile
from collections.abc import Iterator
from contextlib import ExitStack
from typing import BinaryIO

import zstandard

from ..entry_model.types import ArchiveMemberEntry, FilesystemEntry
from ..errors import AccessError, DecodeError, describe_os_error
from .formats import ArchiveFormat
from .members import MEMBER_DECODE_EXCEPTIONS, MemberItem

logger = logging.getLogger(__name__)

TAR_STREAM_MODES: dict[ArchiveFormat, str] = {
    ArchiveFormat.TAR: "r|",
    ArchiveFormat.TAR_GZ: "r|gz",
    ArchiveFormat.TAR_BZ2: "r|bz2",
    ArchiveFormat.TAR_XZ: "r|xz",
    ArchiveFormat.TAR_ZST: "r|",
}


def _open_tar_stream(stack: ExitStack, raw: BinaryIO, archive_format: ArchiveFormat) -> tarfile.TarFile:
    source: BinaryIO = raw
    if archive_format is ArchiveFormat.TAR_ZST:
        decompressor = zstandard.ZstdDecompressor()
        source = stack.enter_context(decompressor.stream_reader(raw, read_across_frames=True))
    return stack.enter_context(tarfile.open(fileobj=source, mode=TAR_STREAM_MODES[archive_format]))


def _member_opener(archive: tarfile.TarFile, member: tarfile.TarInfo):
    def open_member() -> BinaryIO:
        reader = archive.extractfile(member)
        if reader is None:
            raise tarfile.ReadError(f"no data for member {member.name}")
        return reader

    return open_member


def iter_tar_members(entry: FilesystemEntry, archive_format: ArchiveFormat) -> Iterator[MemberItem]:
    """Yield regular-file and hard-link members in stream order.

    A name that repeats an earlier member, as left by appending to a tar, is
    reported as a member-scoped error and the first copy stands.
    A failure before the first member is reported once for the whole archive.
    Once members have been handed out, a broken header ends enumeration with
    one archive-scoped error, since the compressed stream cannot be
    resynchronized after it.
    """
    archive_path = entry.logical_path
    with ExitStack() as stack:
        try:
            raw = stack.enter_context(entry.path.open("rb"))
            archive = _open_tar_stream(stack, raw, archive_format)
        except OSError as exc:
            yield AccessError(archive_path, describe_os_error(exc))
            return
        except MEMBER_DECODE_EXCEPTIONS as exc:
            yield DecodeError(archive_path, f"invalid {archive_format.value} archive: {exc}")
            return

        members = iter(archive)
        emitted: set[str] = set()
        while True:
            try:
                member = next(members)
            except StopIteration:
                return
            except (OSError, *MEMBER_DECODE_EXCEPTIONS) as exc:
                yield DecodeError(archive_path, f"corrupt {archive_format.value} archive: {exc}")
                return

            if not (member.isreg() or member.islnk()):
                if member.issym():
                    logger.debug("skipping symlink member %s in %s", member.name, archive_path)
                continue
            if not member.name:
                continue

            if member.islnk():
                entry_for_member = ArchiveMemberEntry(
                    archive_path=archive_path,
                    member_name=member.name,
                    link_target=member.linkname,
                )
            else:
                entry_for_member = ArchiveMemberEntry(
                    archive_path=archive_path,
                    member_name=member.name,
                    size_bytes=member.size,
                    opener=_member_opener(archive, member),
                )
            if member.name in emitted:
                yield DecodeError(entry_for_member.logical_path, "duplicate member name")
                continue
            emitted.add(member.name)
            yield entry_for_member


__all__ = ["TAR_STREAM_MODES", "iter_tar_members"]
