"""Run orchestration: job execution, the worker pool and configuration.

``run_hashing`` wires the walker, archive decoder and dispatcher together for
one ``RunConfig``.
"""

from __future__ import annotations

from .dispatcher import DispatchAborted, DispatchItem, HashDispatcher, default_concurrency
from .jobs import HashJob, hash_entry, run_job
from .pipeline import run_hashing
from .settings import RunConfig, build_run_config

__all__ = [
    "DispatchAborted",
    "DispatchItem",
    "HashDispatcher",
    "default_concurrency",
    "HashJob",
    "hash_entry",
    "run_job",
    "run_hashing",
    "RunConfig",
    "build_run_config",
]
