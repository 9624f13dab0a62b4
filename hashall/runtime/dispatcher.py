"""Bounded worker pool that hashes discovered entries concurrently.

Discovery runs on its own thread and feeds a bounded job queue, so walking
and archive enumeration interleave with hashing instead of being front-loaded.
Workers push finished records onto a result queue of the same bound, drained
by the caller, so a slow sink holds back hashing instead of buffering records.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterable, Iterator
from queue import Queue

from ..digest import DEFAULT_BUFFER_SIZE, HashAlgorithm
from ..entry_model.records import ResultRecord
from ..entry_model.types import Entry
from ..errors import HashallError, ReadError
from .jobs import HashJob, run_job

logger = logging.getLogger(__name__)

DispatchItem = Entry | HashallError

_END_OF_JOBS = object()
_WORKER_DONE = object()


class DispatchAborted(RuntimeError):
    """Entry discovery failed unexpectedly; completed records were delivered."""


def default_concurrency() -> int:
    return max(1, os.cpu_count() or 1)


class HashDispatcher:
    """Run hash jobs on ``concurrency`` workers.

    ``concurrency == 1`` runs everything in the calling thread in discovery
    order. Larger pools make no promise about completion order.
    """

    def __init__(
        self,
        algorithm: HashAlgorithm,
        *,
        concurrency: int | None = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        queue_size: int | None = None,
    ) -> None:
        if concurrency is None:
            concurrency = default_concurrency()
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.algorithm = algorithm
        self.concurrency = concurrency
        self.buffer_size = buffer_size
        self.queue_size = queue_size if queue_size is not None else concurrency * 2

    def job_for(self, entry: Entry) -> HashJob:
        return HashJob(entry=entry, algorithm=self.algorithm, buffer_size=self.buffer_size)

    def process(self, item: DispatchItem) -> Iterator[ResultRecord]:
        """Turn one discovery item into its result records."""
        if isinstance(item, HashallError):
            yield ResultRecord.failure(item, self.algorithm)
            return
        try:
            yield from run_job(self.job_for(item))
        except Exception as exc:
            logger.exception("unexpected failure hashing %s", item.logical_path)
            yield ResultRecord.failure(ReadError(item.logical_path, str(exc)), self.algorithm)

    def run(self, items: Iterable[DispatchItem]) -> Iterator[ResultRecord]:
        """Yield records for every item; raises ``DispatchAborted`` after
        delivering completed records when discovery itself fails."""
        if self.concurrency == 1:
            return self._run_sequential(items)
        return self._run_parallel(items)

    def _run_sequential(self, items: Iterable[DispatchItem]) -> Iterator[ResultRecord]:
        iterator = iter(items)
        while True:
            try:
                item = next(iterator)
            except StopIteration:
                return
            except Exception as exc:
                raise DispatchAborted(f"entry discovery failed: {exc}") from exc
            yield from self.process(item)

    def _run_parallel(self, items: Iterable[DispatchItem]) -> Iterator[ResultRecord]:
        jobs: Queue[object] = Queue(maxsize=self.queue_size)
        results: Queue[object] = Queue(maxsize=self.queue_size)
        stop = threading.Event()
        abandoned = threading.Event()
        discovery_failures: list[BaseException] = []

        def discover() -> None:
            try:
                for item in items:
                    if stop.is_set():
                        break
                    jobs.put(item)
            except Exception as exc:
                discovery_failures.append(exc)
                stop.set()
            finally:
                for _ in range(self.concurrency):
                    jobs.put(_END_OF_JOBS)

        def work() -> None:
            try:
                while True:
                    item = jobs.get()
                    if item is _END_OF_JOBS:
                        return
                    if stop.is_set():
                        # Drain without starting new jobs.
                        continue
                    for record in self.process(item):
                        if abandoned.is_set():
                            break
                        results.put(record)
            finally:
                results.put(_WORKER_DONE)

        threads = [threading.Thread(target=discover, name="hashall-discovery", daemon=True)]
        threads.extend(
            threading.Thread(target=work, name=f"hashall-worker-{index}", daemon=True)
            for index in range(self.concurrency)
        )
        for thread in threads:
            thread.start()

        finished = 0
        try:
            while finished < self.concurrency:
                result = results.get()
                if result is _WORKER_DONE:
                    finished += 1
                    continue
                yield result
        finally:
            stop.set()
            if finished < self.concurrency:
                abandoned.set()
                # Workers block on a full result queue until it is drained.
                while finished < self.concurrency:
                    if results.get() is _WORKER_DONE:
                        finished += 1
            for thread in threads:
                thread.join()

        if discovery_failures:
            exc = discovery_failures[0]
            raise DispatchAborted(f"entry discovery failed: {exc}") from exc


__all__ = [
    "DispatchItem",
    "DispatchAborted",
    "default_concurrency",
    "HashDispatcher",
]
