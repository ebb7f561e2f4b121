"""Run configuration.

The command-line flags are collected into one frozen :class:`StringerConfig`
that is handed to the resolver and the generator; nothing is read from
module-level state.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Tuple

from tinystringer.errors import ConfigurationError

__all__ = ["StringerConfig", "STDOUT"]

#: ``output`` value that sends the generated code to standard output.
STDOUT = "-"


@dataclass(frozen=True)
class StringerConfig:
    """Options for one generator run.

    Parameters
    ----------
    type_name:
        The Go type to generate a ``String()`` method for.
    files:
        Input Go files, in the order they are scanned.
    output:
        Destination path; empty means ``<srcdir>/<type>_string.go``.
    trim_prefix:
        Prefix stripped from every display name.
    line_comment:
        Use a constant's trailing comment as its display name.
    map_name:
        If set, also emit ``var <map_name> = map[string]<Type>{...}``.
    slice_name:
        If set, also emit ``var <slice_name> = []<Type>{...}``.
    """

    type_name: str
    files: Tuple[str, ...] = ()
    output: str = ""
    trim_prefix: str = ""
    line_comment: bool = False
    map_name: str = ""
    slice_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(str(f) for f in self.files))

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "StringerConfig":
        return cls(
            type_name=args.type_name or "",
            files=tuple(args.files),
            output=args.output or "",
            trim_prefix=args.trim_prefix or "",
            line_comment=bool(args.line_comment),
            map_name=args.map_name or "",
            slice_name=args.slice_name or "",
        )

    @property
    def source_dir(self) -> str:
        """Directory holding the inputs (they must all share one)."""
        return os.path.dirname(self.files[0]) if self.files else ""

    def validate(self) -> None:
        """Reject option sets the generator cannot run with."""
        if not self.type_name:
            raise ConfigurationError("must provide --type")
        if not self.files:
            raise ConfigurationError("must provide at least one file argument")
        src_dir = ""
        which_file = ""
        for path in self.files:
            directory = os.path.normpath(os.path.dirname(path) or ".")
            if not which_file:
                src_dir, which_file = directory, path
            elif directory != src_dir:
                raise ConfigurationError(
                    "all input files must be in the same source directory; "
                    f"got input file {which_file} in directory {src_dir}, "
                    f"but input file {path} in directory {directory}"
                )

    def destination(self) -> str:
        """Path the artifact is written to."""
        if self.output:
            return self.output
        return os.path.join(self.source_dir, self.type_name.lower() + "_string.go")

    @property
    def writes_stdout(self) -> bool:
        return self.output == STDOUT
