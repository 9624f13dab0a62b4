"""Wire roots, walker, archive decoding and the worker pool for one run."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..entry_model.records import ResultRecord
from ..entry_model.walk import resolve_roots, walk
from .dispatcher import HashDispatcher
from .settings import RunConfig

logger = logging.getLogger(__name__)


def run_hashing(run_config: RunConfig) -> Iterator[ResultRecord]:
    """Yield a record for every discoverable file or archive member.

    Roots that cannot be opened at start-up are reported and skipped. When no
    root is usable the run yields only those errors.
    """
    roots, root_errors = resolve_roots(
        run_config.roots,
        run_config.recursive,
        show_hidden=run_config.show_hidden,
    )
    for error in root_errors:
        yield ResultRecord.failure(error, run_config.algorithm)
    if not roots:
        logger.error("no usable input paths")
        return

    logger.debug(
        "hashing %d root(s) with %s on %d worker(s)",
        len(roots),
        run_config.algorithm.value,
        run_config.concurrency,
    )
    dispatcher = HashDispatcher(
        run_config.algorithm,
        concurrency=run_config.concurrency,
        buffer_size=run_config.buffer_size,
    )
    items = walk(
        roots,
        run_config.recursive,
        archive=run_config.archive,
        show_hidden=run_config.show_hidden,
    )
    yield from dispatcher.run(items)


__all__ = ["run_hashing"]
