"""Run configuration assembled from command-line options and saved defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..digest import DEFAULT_BUFFER_SIZE, HashAlgorithm
from ..output.sinks import OutputFormat
from ..sizes import parse_size
from . import config
from .dispatcher import default_concurrency

DEFAULT_ALGORITHM = HashAlgorithm.MD5
DEFAULT_BUFFER = "1M"


@dataclass(frozen=True)
class RunConfig:
    """Everything one hashing run needs."""

    roots: tuple[Path, ...] = ()
    recursive: bool = False
    archive: bool = False
    algorithm: HashAlgorithm = DEFAULT_ALGORITHM
    concurrency: int = field(default_factory=default_concurrency)
    output_format: OutputFormat = OutputFormat.TEXT
    buffer_size: int = DEFAULT_BUFFER_SIZE
    show_hidden: bool = True
    sort_output: bool = False

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")


def _saved_algorithm() -> HashAlgorithm:
    name = config.load_default_algorithm()
    if name is None:
        return DEFAULT_ALGORITHM
    try:
        return HashAlgorithm.from_name(name)
    except ValueError:
        return DEFAULT_ALGORITHM


def _saved_format() -> OutputFormat:
    name = config.load_default_format()
    if name is None:
        return OutputFormat.TEXT
    try:
        return OutputFormat(name.lower())
    except ValueError:
        return OutputFormat.TEXT


def _saved_buffer_size() -> int:
    text = config.load_default_buffer() or DEFAULT_BUFFER
    try:
        return parse_size(text)
    except ValueError:
        return parse_size(DEFAULT_BUFFER)


def build_run_config(
    roots: list[Path],
    *,
    recursive: bool = False,
    archive: bool = False,
    algorithm: HashAlgorithm | None = None,
    concurrency: int | None = None,
    output_format: OutputFormat | None = None,
    buffer_size: int | None = None,
    show_hidden: bool | None = None,
    sort_output: bool = False,
) -> RunConfig:
    """Build a ``RunConfig``; explicit values win over saved defaults,
    which win over built-in defaults."""
    if concurrency is None:
        concurrency = config.load_default_jobs() or default_concurrency()
    return RunConfig(
        roots=tuple(roots),
        recursive=recursive,
        archive=archive,
        algorithm=algorithm if algorithm is not None else _saved_algorithm(),
        concurrency=concurrency,
        output_format=output_format if output_format is not None else _saved_format(),
        buffer_size=buffer_size if buffer_size is not None else _saved_buffer_size(),
        show_hidden=show_hidden if show_hidden is not None else config.load_show_hidden(),
        sort_output=sort_output,
    )


__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_BUFFER",
    "RunConfig",
    "build_run_config",
]
