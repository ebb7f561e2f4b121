"""Type validation: the target type must be defined as a built-in integer type."""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable

from tinystringer import ast
from tinystringer.errors import SourceSpan, TypeNotAnIntegerAlias

__all__ = ["ALLOWED_INTEGER_TYPES", "validate_type"]

logger = logging.getLogger(__name__)

ALLOWED_INTEGER_TYPES: FrozenSet[str] = frozenset(
    {
        "byte",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "rune",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
    }
)


def validate_type(files: Iterable[ast.File], type_name: str) -> None:
    """Check every declaration of *type_name* across *files*.

    A type that is declared nowhere passes: it may live in a file that was
    not handed to us, and an empty constant table is reported later anyway.
    """
    for parsed in files:
        for decl in parsed.type_decls:
            for spec in decl.specs:
                if spec.name != type_name:
                    continue
                span = SourceSpan.from_node(spec)
                if not isinstance(spec.type, ast.Ident):
                    raise TypeNotAnIntegerAlias(type_name, span=span)
                if spec.type.name not in ALLOWED_INTEGER_TYPES:
                    raise TypeNotAnIntegerAlias(type_name, actual=spec.type.name, span=span)
                logger.debug("%s: type %s is %s", span, type_name, spec.type.name)
