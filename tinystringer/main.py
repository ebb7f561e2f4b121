#!/usr/bin/env python3
"""tinystringer/main.py — CLI entry-point and pipeline driver.

Usage examples
--------------
    # Generate color_string.go next to the inputs
    python -m tinystringer -type Color color.go

    # Use trailing comments as names, strip a prefix, add lookup tables
    python -m tinystringer -type Kind -linecomment -trimprefix Kind \\
        -stringtovaluemapname KindByName -enumvaluesslicename AllKinds kind.go

    # Print to stdout instead of writing a file
    python -m tinystringer -type Color -output - color.go

Exit codes
----------
    0   Success.
    1   Analysis error (bad options, unsupported constants, ...).
    2   Infrastructure failure (unreadable input, unwritable output).
  130   Interrupted.

Nothing is written unless every step succeeded, and the output file is
replaced atomically.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from tinystringer import __version__
from tinystringer import ast
from tinystringer.codegen import StringerGenerator
from tinystringer.config import StringerConfig
from tinystringer.errors import (
    OutputWriteError,
    SourceReadError,
    StringerError,
)
from tinystringer.parser import parse_files
from tinystringer.resolver import ConstantResolver, ResolvedTable
from tinystringer.validator import validate_type

__all__ = ["Stringer", "stringify", "main", "EXIT_OK", "EXIT_ERROR", "EXIT_INFRA"]

_log = logging.getLogger("tinystringer")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2
EXIT_INTERRUPTED: int = 130

_handler: Optional[logging.Handler] = None


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``tinystringer`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    global _handler

    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("tinystringer")
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.setLevel(level)
    root.addHandler(_handler)


def _file_mode() -> int:
    """Mode a plain ``open(path, "w")`` would create: 0o666 minus the umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_atomic(path: str, text: str) -> None:
    """Write *text* to *path* through a temp file in the same directory."""
    directory = os.path.dirname(path) or "."
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".tinystringer-", suffix=".go", dir=directory)
    except OSError as exc:
        raise OutputWriteError(path, cause=exc) from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        os.chmod(tmp_path, _file_mode())
        os.replace(tmp_path, path)
    except OSError as exc:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise OutputWriteError(path, cause=exc) from exc


# ===========================================================================
# Pipeline
# ===========================================================================

class Stringer:
    """Runs parse → validate → resolve → generate for one configuration."""

    def __init__(self, config: StringerConfig) -> None:
        self.config = config

    def analyze(self) -> Tuple[List[ast.File], str, ResolvedTable]:
        """Everything up to, but not including, code generation."""
        self.config.validate()
        files, package_name = parse_files(self.config.files)
        validate_type(files, self.config.type_name)
        table = ConstantResolver(self.config).resolve(files)
        return files, package_name, table

    def stringify(self) -> str:
        """Return the generated Go source without writing it anywhere."""
        _, package_name, table = self.analyze()
        return StringerGenerator(self.config, package_name).generate(table)

    def run(self) -> Optional[Path]:
        """Generate and write the artifact; returns its path (``None`` for stdout)."""
        code = self.stringify()
        if self.config.writes_stdout:
            sys.stdout.write(code)
            return None
        destination = self.config.destination()
        _write_atomic(destination, code)
        _log.info("Wrote %s", destination)
        return Path(destination)


def stringify(config: StringerConfig) -> str:
    """Generate the Go source for *config* and return it."""
    return Stringer(config).stringify()


# ===========================================================================
# Argument parser
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinystringer",
        description="Generate String() methods for Go integer enum types.",
    )
    parser.add_argument(
        "-type", "--type",
        dest="type_name",
        default="",
        help="the type for which to generate output",
    )
    parser.add_argument(
        "-output", "--output",
        dest="output",
        default="",
        help="name of output file; default srcdir/<type>_string.go ('-' for stdout)",
    )
    parser.add_argument(
        "-trimprefix", "--trimprefix",
        dest="trim_prefix",
        default="",
        help="trim the given prefix from generated names",
    )
    parser.add_argument(
        "-linecomment", "--linecomment",
        dest="line_comment",
        action="store_true",
        help="use line comment text as printed text when present",
    )
    parser.add_argument(
        "-stringtovaluemapname", "--stringtovaluemapname",
        dest="map_name",
        default="",
        help="if set, also create a map of enum name -> value of the given name",
    )
    parser.add_argument(
        "-enumvaluesslicename", "--enumvaluesslicename",
        dest="slice_name",
        default="",
        help="if set, also create a slice of all enum values of the given name",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="increase log verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("files", nargs="*", help="Go source files, scanned in order")
    return parser


# ===========================================================================
# Main entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    config = StringerConfig.from_namespace(args)

    try:
        Stringer(config).run()
    except (SourceReadError, OutputWriteError) as exc:
        _log.error("%s", exc)
        return EXIT_INFRA
    except StringerError as exc:
        _log.error("%s", exc)
        return EXIT_ERROR
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return EXIT_INTERRUPTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
