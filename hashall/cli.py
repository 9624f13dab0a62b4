"""Command-line front door for hashall.

Parses CLI options, merges them with saved defaults, and runs the hashing
pipeline. Records go to stdout; warnings and errors go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from .digest import HashAlgorithm, available_algorithm_names
from .logs import configure_logging
from .output import OutputFormat, available_format_names, emit_records, make_sink
from .runtime import DispatchAborted, build_run_config, run_hashing
from .runtime import config
from .sizes import SIZE_EXAMPLES, parse_size

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _buffer_size(value: str) -> str:
    """argparse type validating human-readable buffer sizes; keeps the text."""
    try:
        parse_size(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"failed to parse buffer size: {exc} (example: {SIZE_EXAMPLES})"
        ) from exc
    return value.strip()


def _algorithm(value: str) -> HashAlgorithm:
    try:
        return HashAlgorithm.from_name(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"{exc} (choose from {', '.join(available_algorithm_names())})"
        ) from exc


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashall",
        description="Compute digests for every file under the given paths, optionally inside archives.",
    )
    parser.add_argument("input", nargs="*", type=Path, help="Input files or directories.")
    parser.add_argument(
        "--hash",
        dest="algorithm",
        type=_algorithm,
        default=None,
        metavar="ALGORITHM",
        help=f"Hashing algorithm ({', '.join(available_algorithm_names())}; default: md5).",
    )
    parser.add_argument("-r", "--recursive", action="store_true", help="Descend into subdirectories.")
    parser.add_argument(
        "-a",
        "--archive",
        action="store_true",
        help="Hash the members of zip/tar/tar.gz/tar.bz2/tar.xz/tar.zst archives instead of the archive file.",
    )
    parser.add_argument(
        "-b",
        "--buffer",
        type=_buffer_size,
        default=None,
        metavar="SIZE",
        help=f"Read buffer size (default: 1M; examples: {SIZE_EXAMPLES}).",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=_positive_int,
        default=None,
        help="Number of concurrent hashing workers (default: CPU count; 1 = sequential).",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=available_format_names(),
        default=None,
        help="Output format (default: text).",
    )
    parser.add_argument("--sort", action="store_true", help="Sort output by path before printing.")
    parser.add_argument(
        "--exclude-hidden",
        dest="show_hidden",
        action="store_const",
        const=False,
        default=None,
        help="Skip files and directories whose name starts with a dot.",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist the given --hash/--jobs/--buffer/--format/--exclude-hidden values as defaults.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase diagnostic output (-v info, -vv debug).",
    )
    return parser


def _save_defaults(args: argparse.Namespace) -> None:
    saved = config.save_defaults(
        algorithm=args.algorithm.value if args.algorithm is not None else None,
        jobs=args.jobs,
        buffer=args.buffer,
        output_format=args.output_format,
        show_hidden=args.show_hidden,
    )
    if saved:
        logger.info("saved defaults to %s", config.CONFIG_PATH)
    else:
        logger.warning("could not write defaults to %s", config.CONFIG_PATH)


def main(argv: list[str] | None = None, stdout: TextIO | None = None) -> int:
    """Parse CLI arguments, hash every input and return the exit status.

    ``0`` when every entry hashed cleanly, ``1`` when any entry failed or no
    input was usable, ``2`` for usage errors.
    """
    parser = _parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.save_defaults:
        _save_defaults(args)
        if not args.input:
            return 0
    if not args.input:
        parser.error("at least one input path is required")

    run_config = build_run_config(
        list(args.input),
        recursive=args.recursive,
        archive=args.archive,
        algorithm=args.algorithm,
        concurrency=args.jobs,
        output_format=OutputFormat(args.output_format) if args.output_format is not None else None,
        buffer_size=parse_size(args.buffer) if args.buffer is not None else None,
        show_hidden=args.show_hidden,
        sort_output=args.sort,
    )
    sink = make_sink(run_config.output_format, stdout if stdout is not None else sys.stdout)
    try:
        summary = emit_records(run_hashing(run_config), sink, sort=run_config.sort_output)
    except DispatchAborted as exc:
        logger.error("%s", exc)
        return 1

    if summary.errors:
        logger.warning("%d error(s), %d digest(s) written", summary.errors, summary.records)
    return summary.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
