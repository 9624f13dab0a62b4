"""Result rendering for checksum-tool text and CSV layouts.

Only successful records reach the data stream. Failures are logged as
warnings on the diagnostic stream and counted toward the exit status.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from ..entry_model.records import ResultRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("path", "size", "algorithm", "digest")


class OutputFormat(str, Enum):
    TEXT = "text"
    CSV = "csv"


def available_format_names() -> list[str]:
    return [output_format.value for output_format in OutputFormat]


class TextSink:
    """``<digest>  <path>`` per line, like ``md5sum``."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, record: ResultRecord) -> None:
        self._stream.write(f"{record.digest_hex}  {record.logical_path}\n")

    def close(self) -> None:
        self._stream.flush()


class CsvSink:
    """Header row then ``path,size,algorithm,digest`` rows."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._writer = csv.writer(stream, lineterminator="\n")
        self._writer.writerow(CSV_COLUMNS)

    def write(self, record: ResultRecord) -> None:
        size = "" if record.size_bytes is None else record.size_bytes
        self._writer.writerow((record.logical_path, size, record.algorithm.value, record.digest_hex))

    def close(self) -> None:
        self._stream.flush()


ResultSink = TextSink | CsvSink


def make_sink(output_format: OutputFormat, stream: TextIO) -> ResultSink:
    if output_format is OutputFormat.CSV:
        return CsvSink(stream)
    return TextSink(stream)


@dataclass
class RunSummary:
    """Counts accumulated while emitting one run's records."""

    records: int = 0
    errors: int = 0

    @property
    def exit_code(self) -> int:
        return 1 if self.errors else 0


def _emit_one(record: ResultRecord, sink: ResultSink, summary: RunSummary) -> None:
    if record.error is not None:
        summary.errors += 1
        logger.warning("%s", record.describe_error())
        return
    sink.write(record)
    summary.records += 1


def emit_records(
    records: Iterable[ResultRecord],
    sink: ResultSink,
    *,
    sort: bool = False,
) -> RunSummary:
    """Render ``records`` into ``sink`` and return success/error counts.

    With ``sort`` the whole run is buffered and ordered by logical path, which
    stabilizes output across concurrency levels.
    """
    summary = RunSummary()
    try:
        if sort:
            buffered: list[ResultRecord] = []
            try:
                buffered.extend(records)
            finally:
                # Records completed before an aborted run are still delivered.
                buffered.sort(key=lambda record: record.logical_path)
                for record in buffered:
                    _emit_one(record, sink, summary)
        else:
            for record in records:
                _emit_one(record, sink, summary)
    finally:
        sink.close()
    return summary


__all__ = [
    "CSV_COLUMNS",
    "OutputFormat",
    "available_format_names",
    "TextSink",
    "CsvSink",
    "ResultSink",
    "make_sink",
    "RunSummary",
    "emit_records",
]
