"""Hash jobs: one discovered entry paired with the algorithm to apply."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ..archives import MEMBER_DECODE_EXCEPTIONS, decode
from ..digest import DEFAULT_BUFFER_SIZE, HashAlgorithm, hash_stream
from ..entry_model.records import ResultRecord
from ..entry_model.types import ArchiveMemberEntry, Entry, FilesystemEntry
from ..errors import DecodeError, HashallError, ReadError, describe_os_error


@dataclass(frozen=True)
class HashJob:
    """Unit of work submitted to the dispatcher."""

    entry: Entry
    algorithm: HashAlgorithm
    buffer_size: int = DEFAULT_BUFFER_SIZE

    @property
    def expands_archive(self) -> bool:
        return isinstance(self.entry, FilesystemEntry) and self.entry.archive_format is not None


def hash_entry(entry: Entry, algorithm: HashAlgorithm, buffer_size: int) -> ResultRecord:
    """Open ``entry``, digest its bytes and return one record.

    Archive members additionally map decompression/CRC failures to a
    member-scoped ``DecodeError``.
    """
    logical_path = entry.logical_path
    try:
        with entry.open_reader() as reader:
            digest_hex, size = hash_stream(
                algorithm,
                reader,
                logical_path=logical_path,
                buffer_size=buffer_size,
            )
    except HashallError as exc:
        return ResultRecord.failure(exc, algorithm, entry.size_hint)
    except OSError as exc:
        return ResultRecord.failure(ReadError(logical_path, describe_os_error(exc)), algorithm, entry.size_hint)
    except MEMBER_DECODE_EXCEPTIONS as exc:
        if not isinstance(entry, ArchiveMemberEntry):
            raise
        error = DecodeError(logical_path, str(exc) or exc.__class__.__name__)
        return ResultRecord.failure(error, algorithm, entry.size_hint)
    return ResultRecord.success(logical_path, size, algorithm, digest_hex)


def _linked_record(entry: ArchiveMemberEntry, hashed: dict[str, ResultRecord], algorithm: HashAlgorithm) -> ResultRecord:
    """Record for a tar hard link, sharing the digest of its earlier target."""
    target = hashed.get(entry.link_target or "")
    if target is None:
        error = DecodeError(entry.logical_path, f"hard link target {entry.link_target!r} not found")
        return ResultRecord.failure(error, algorithm)
    if not target.ok:
        error = DecodeError(entry.logical_path, f"hard link target {entry.link_target!r} could not be hashed")
        return ResultRecord.failure(error, algorithm)
    return ResultRecord.success(entry.logical_path, target.size_bytes, algorithm, target.digest_hex)


def run_job(job: HashJob) -> Iterator[ResultRecord]:
    """Execute ``job``, yielding one record per file or archive member.

    An archive is consumed only as a source of members: it gets no record of
    its own unless it fails to decode as a whole. Members are hashed in
    archive order while the decoder is positioned on them, and hard links
    reuse the digest already computed for their target.
    """
    entry = job.entry
    if job.expands_archive:
        assert isinstance(entry, FilesystemEntry) and entry.archive_format is not None
        hashed: dict[str, ResultRecord] = {}
        for item in decode(entry, entry.archive_format):
            if isinstance(item, HashallError):
                yield ResultRecord.failure(item, job.algorithm)
                continue
            if item.link_target is not None:
                record = _linked_record(item, hashed, job.algorithm)
            else:
                record = hash_entry(item, job.algorithm, job.buffer_size)
            hashed[item.member_name] = record
            yield record
        return
    yield hash_entry(entry, job.algorithm, job.buffer_size)


__all__ = ["HashJob", "hash_entry", "run_job"]
