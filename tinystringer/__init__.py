"""tinystringer — String() generator for Go integer enum types.

Reads Go source files, finds the constants of one integer-backed type,
folds their values (``iota`` sequences, offsets, aliases, rune literals)
and writes ``<type>_string.go`` with a ``String()`` method, a compile-time
guard, and optional name→value map and value slice.

Submodules
----------
grammar
    Parsimonious PEG grammar for Go top-level declarations.
parser
    Parse tree → frozen declaration AST (:mod:`tinystringer.ast`).
validator
    Checks that the target type is a built-in integer type.
resolver
    Constant folding over ``const`` blocks.
codegen
    Go source emission.
errors
    Exception hierarchy and ``STR-XXXX`` error codes.
main
    CLI entry-point (``python -m tinystringer``).

Usage
-----
Command-line::

    python -m tinystringer -type Color color.go

Programmatic::

    from tinystringer import StringerConfig, stringify

    code = stringify(StringerConfig(type_name="Color", files=("color.go",)))
"""

from __future__ import annotations

__version__: str = "0.1.0"

from tinystringer.config import StringerConfig  # noqa: E402
from tinystringer.errors import StringerError  # noqa: E402
from tinystringer.main import Stringer, stringify  # noqa: E402

__all__: list[str] = [
    "__version__",
    "StringerConfig",
    "StringerError",
    "Stringer",
    "stringify",
]
