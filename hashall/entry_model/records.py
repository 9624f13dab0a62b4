"""Immutable result records handed from workers to the result sink."""

from __future__ import annotations

from dataclasses import dataclass

from ..digest import HashAlgorithm
from ..errors import HashallError, RecordError


@dataclass(frozen=True)
class ResultRecord:
    """Outcome of hashing one logical path: a digest or an error, never both."""

    logical_path: str
    size_bytes: int | None
    algorithm: HashAlgorithm
    digest_hex: str | None = None
    error: RecordError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls,
        logical_path: str,
        size_bytes: int,
        algorithm: HashAlgorithm,
        digest_hex: str,
    ) -> "ResultRecord":
        return cls(
            logical_path=logical_path,
            size_bytes=size_bytes,
            algorithm=algorithm,
            digest_hex=digest_hex,
        )

    @classmethod
    def failure(
        cls,
        error: HashallError,
        algorithm: HashAlgorithm,
        size_bytes: int | None = None,
    ) -> "ResultRecord":
        return cls(
            logical_path=error.logical_path,
            size_bytes=size_bytes,
            algorithm=algorithm,
            error=error.to_record_error(),
        )

    def describe_error(self) -> str | None:
        if self.error is None:
            return None
        return self.error.describe(self.logical_path)


__all__ = ["ResultRecord"]
