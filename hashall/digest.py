"""Streaming digest computation over arbitrary binary readers."""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import BinaryIO

from .errors import ReadError, describe_os_error

DEFAULT_BUFFER_SIZE = 1_000_000


class HashAlgorithm(str, Enum):
    """Supported digest algorithms, named as on the command line."""

    MD5 = "md5"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    BLAKE2B = "blake2b"
    BLAKE2S = "blake2s"

    def new(self) -> "hashlib._Hash":
        return hashlib.new(self.value)

    @property
    def hex_width(self) -> int:
        return self.new().digest_size * 2

    @classmethod
    def from_name(cls, name: str) -> "HashAlgorithm":
        normalized = name.strip().lower().replace("-", "")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"unknown hash algorithm: {name!r}") from None


def available_algorithm_names() -> list[str]:
    return [algorithm.value for algorithm in HashAlgorithm]


def hash_stream(
    algorithm: HashAlgorithm,
    stream: BinaryIO,
    *,
    logical_path: str,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> tuple[str, int]:
    """Hash ``stream`` block-by-block and return ``(digest_hex, bytes_read)``.

    Memory use is bounded by ``buffer_size``. An ``OSError`` raised by the
    stream mid-read becomes ``ReadError`` for ``logical_path`` and the partial
    digest is dropped. Other exceptions (archive decoding failures) propagate
    unchanged so callers can classify them.
    """
    if buffer_size <= 0:
        raise ValueError("buffer_size must be >= 1")
    hasher = algorithm.new()
    total = 0
    try:
        for chunk in iter(lambda: stream.read(buffer_size), b""):
            hasher.update(chunk)
            total += len(chunk)
    except OSError as exc:
        raise ReadError(logical_path, describe_os_error(exc)) from exc
    return hasher.hexdigest(), total


def digest(
    algorithm: HashAlgorithm,
    stream: BinaryIO,
    *,
    logical_path: str = "<stream>",
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> str:
    """Return the lowercase hex digest of everything readable from ``stream``."""
    digest_hex, _size = hash_stream(
        algorithm,
        stream,
        logical_path=logical_path,
        buffer_size=buffer_size,
    )
    return digest_hex


def empty_digest(algorithm: HashAlgorithm) -> str:
    """Digest of zero-length input for ``algorithm``."""
    return algorithm.new().hexdigest()


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "HashAlgorithm",
    "available_algorithm_names",
    "hash_stream",
    "digest",
    "empty_digest",
]
