# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Command line entry point.

Usage
-----
$ pbgen --input-dir ../proto --output-dir ./generated

Every schema file in the input directory produces ``<name>.js`` (pbjs,
static-module) and ``<name>.d.ts`` (pbts) in the output directory. A summary
table of the written artifacts is printed when the run succeeds.
"""
from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from .artifacts import RunReport
from .config import GeneratorConfig
from .constants import (
    DEFAULT_INPUT_DIR,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PBJS_COMMAND,
    DEFAULT_PBTS_COMMAND,
    ExitCode,
    Mode,
)
from .driver import Driver
from .errors import ConfigError, PbgenError
from .request import SchemaFile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pbgen", description="Generate protobuf.js modules and TypeScript declarations"
    )
    parser.add_argument("--input-dir", default=DEFAULT_INPUT_DIR, help="Directory of schema files")
    parser.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR, help="Directory for generated files")
    parser.add_argument("--pattern", default=None, help="Only treat entries matching this glob as schemas")
    parser.add_argument("--workers", type=int, default=DEFAULT_MAX_WORKERS, help="Schema files processed at once")
    parser.add_argument("--pbjs", default=DEFAULT_PBJS_COMMAND, help="Command used to run pbjs")
    parser.add_argument("--pbts", default=DEFAULT_PBTS_COMMAND, help="Command used to run pbts")
    parser.add_argument("--timeout", type=float, default=None, help="Per-invocation timeout in seconds")
    parser.add_argument("--es6", action="store_true", help="Emit ES6 syntax in generated modules")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log compiler command lines")
    return parser


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Build a GeneratorConfig from parsed arguments.

    Raises:
        ConfigError: If the arguments do not form a valid configuration
    """
    try:
        return GeneratorConfig(
            input_dir=args.input_dir,
            output_dir=args.output_dir,
            pattern=args.pattern,
            max_workers=args.workers,
            es6=args.es6,
            pbjs_command=args.pbjs,
            pbts_command=args.pbts,
            timeout=args.timeout,
        )
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def setup_logging(quiet: bool = False, verbose: bool = False) -> None:
    level = logging.WARNING if quiet else logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(message)s")


def set_total(progress: tqdm, schemas: list[SchemaFile]) -> None:
    """Size the progress bar: two artifacts per schema file."""
    progress.total = 2 * len(schemas)
    progress.refresh()


def print_report(report: RunReport, console: Console | None = None) -> None:
    """Print the generated artifacts as a table.

    Args:
        report: Report returned by Driver.run
        console: Console to print to, defaults to stdout
    """
    console = console or Console()
    table = Table(title="Generated artifacts", box=box.SIMPLE_HEAVY)
    table.add_column("Module")
    table.add_column("Kind")
    table.add_column("Path")
    table.add_column("Size (bytes)", justify="right")
    table.add_column("CRC32C")

    for artifact in report.artifacts:
        color = "cyan" if artifact.mode is Mode.MODULE else "magenta"
        table.add_row(
            artifact.module_name,
            f"[{color}]{artifact.mode.value}[/{color}]",
            artifact.path,
            str(artifact.size),
            artifact.crc32c,
        )

    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """Run pbgen from the command line and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.quiet, args.verbose)

    try:
        config = config_from_args(args)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return ExitCode.USAGE

    with tqdm(desc="pbgen", unit="file", disable=args.no_progress or args.quiet) as progress:
        driver = Driver(
            config,
            on_artifact=lambda artifact: progress.update(1),
            on_schemas_planned=lambda schemas: set_total(progress, schemas),
        )
        try:
            report = driver.run()
        except (PbgenError, OSError) as exc:
            logging.error("%s", exc)
            return ExitCode.GENERATION_FAILED

    if not args.quiet:
        print_report(report)
    return ExitCode.OK


if __name__ == "__main__":
    sys.exit(main())
