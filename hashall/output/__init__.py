"""Rendering of result records into text or CSV output."""

from __future__ import annotations

from .sinks import (
    CSV_COLUMNS,
    CsvSink,
    OutputFormat,
    ResultSink,
    RunSummary,
    TextSink,
    available_format_names,
    emit_records,
    make_sink,
)

__all__ = [
    "CSV_COLUMNS",
    "CsvSink",
    "OutputFormat",
    "ResultSink",
    "RunSummary",
    "TextSink",
    "available_format_names",
    "emit_records",
    "make_sink",
]
