# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command-line harness for accessor generation."""

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from gusket import (
    DescriptorError,
    DiagnosticError,
    ImplBlock,
    RecordDescriptor,
    load_records,
    process,
    render_impl,
)
from gusket.loader import discover_descriptor_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordFailure:
    """Represent one record rejected by the engine."""

    record: str
    location: str
    message: str


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="gusket")
    subparsers = parser.add_subparsers(dest="command", required=True)
    generate_parser = subparsers.add_parser("generate")
    generate_parser.add_argument(
        "--input", required=True, help="Descriptor JSON file or directory."
    )
    generate_parser.add_argument(
        "--format",
        choices=("text", "json", "table"),
        default="text",
        help="Output format.",
    )
    generate_parser.add_argument(
        "--output", required=False, help="Optional output file path."
    )
    generate_parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging."
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code: 0 on success, 1 when any record was rejected, 2 on usage or
        input errors.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.command != "generate":
        logger.warning(f"Unsupported command (command={args.command})")
        stderr.write(f"Unsupported command: {args.command}\n")
        return 2

    engine_logger = logging.getLogger("gusket")
    previous_level = engine_logger.level
    if args.verbose:
        engine_logger.setLevel(logging.DEBUG)
    try:
        return _run_generate(args=args, stdout=stdout, stderr=stderr)
    finally:
        engine_logger.setLevel(previous_level)


def _run_generate(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run generate command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    input_path = Path(args.input)
    if not input_path.exists():
        logger.warning(f"Input does not exist (path={input_path})")
        stderr.write(f"Input does not exist: {input_path}\n")
        return 2

    try:
        records = _load_input(input_path)
    except (DescriptorError, OSError) as exc:
        logger.warning(f"Descriptor loading failed (error={exc})")
        stderr.write(f"{exc}\n")
        return 2

    blocks, failures = generate(records)
    for failure in failures:
        stderr.write(f"error: {failure.location}: {failure.message}\n")

    try:
        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("w", encoding="utf-8") as handle:
                _write_output(args.format, blocks, failures, handle)
        else:
            _write_output(args.format, blocks, failures, stdout)
    except OSError as exc:
        logger.warning(f"Failed to write output file (output={args.output} error={exc})")
        stderr.write(f"Failed to write output file: {args.output}\n")
        return 2

    logger.info(
        f"Generation completed (records={len(records)} generated={len(blocks)} failed={len(failures)})"
    )
    return 1 if failures else 0


def _write_output(
    output_format: str,
    blocks: list[ImplBlock],
    failures: list[RecordFailure],
    stream: TextIO,
) -> None:
    """Write generated blocks in the requested format.

    Args:
        output_format: One of ``text``, ``json`` or ``table``.
        blocks: Generated implementation blocks.
        failures: Rejected records.
        stream: Target stream.
    """
    if output_format == "table":
        _write_table(blocks=blocks, stream=stream)
        return
    if output_format == "json":
        payload = {
            "impls": [asdict(block) for block in blocks],
            "errors": [asdict(failure) for failure in failures],
        }
        text = json.dumps(payload, indent=2, sort_keys=True)
    else:
        text = "\n".join(render_impl(block) for block in blocks)
    console = Console(file=stream, force_terminal=False, color_system="truecolor")
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def generate(
    records: list[RecordDescriptor],
) -> tuple[list[ImplBlock], list[RecordFailure]]:
    """Process records independently, collecting rejected ones.

    Args:
        records: Record descriptors.

    Returns:
        Generated blocks and per-record failures.
    """
    blocks: list[ImplBlock] = []
    failures: list[RecordFailure] = []
    for record in records:
        try:
            blocks.append(process(record))
        except DiagnosticError as exc:
            logger.warning(f"Record rejected (record={record.ident} error={exc})")
            failures.append(
                RecordFailure(
                    record=record.ident,
                    location=str(exc.location),
                    message=exc.message,
                )
            )
    return blocks, failures


def _load_input(input_path: Path) -> list[RecordDescriptor]:
    if input_path.is_file():
        return load_records(input_path)
    records: list[RecordDescriptor] = []
    for path in discover_descriptor_files(input_path):
        records.extend(load_records(path))
    return records


def _write_table(blocks: list[ImplBlock], stream: TextIO) -> None:
    """Write one accessor table per record.

    Args:
        blocks: Generated implementation blocks.
        stream: Target stream.
    """
    console = Console(file=stream, force_terminal=False, color_system="truecolor")
    for block in blocks:
        console.rule(block.record_ident, style=Style(color="cyan"), characters="-")
        table = Table(show_header=True, expand=True)
        table.add_column("method", ratio=2, overflow="fold")
        table.add_column("visibility", ratio=1, overflow="fold")
        table.add_column("receiver", ratio=1, overflow="fold")
        table.add_column("returns", ratio=2, overflow="fold")
        for method in block.methods:
            table.add_row(
                method.name,
                method.visibility.text or "(private)",
                method.receiver,
                method.return_type or "()",
            )
        console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
