# tinystringer/errors.py
"""
Error Types and Reporting for tinystringer

Every failure the generator can hit is a subclass of :class:`StringerError`.
Errors carry a structured :class:`ErrorCode`, an optional
:class:`SourceSpan`, and render themselves in GCC style so that editors and
CI logs can jump straight to the offending declaration.

Error Hierarchy:
────────────────
┌─────────────────────────────────────────────────────────────────────────────┐
│  StringerError (base)                                                       │
│  ├── ConfigurationError             - bad options / inconsistent inputs     │
│  ├── SourceError                    - reading or parsing Go sources         │
│  │   ├── SourceReadError                                                    │
│  │   └── SourceParseError                                                   │
│  ├── AnalysisError                  - type validation / constant resolution │
│  │   ├── TypeNotAnIntegerAlias                                              │
│  │   ├── InsufficientConstants                                              │
│  │   ├── MultiNameConstant                                                  │
│  │   ├── UnresolvedConstantReference                                        │
│  │   └── UnsupportedConstantExpression                                      │
│  └── EmitError                      - producing the output artifact         │
│      ├── ReceiverNameCollision                                              │
│      └── OutputWriteError                                                   │
└─────────────────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
Codes follow the pattern STR-XXXX:
  - 0001-0999: Configuration errors
  - 1000-1999: Source (read/parse) errors
  - 2000-2999: Analysis errors
  - 3000-3999: Emission errors
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Optional

__all__ = [
    "ErrorPhase",
    "ErrorCode",
    "ErrorCodes",
    "SourceSpan",
    "StringerError",
    "ConfigurationError",
    "SourceError",
    "SourceReadError",
    "SourceParseError",
    "AnalysisError",
    "TypeNotAnIntegerAlias",
    "InsufficientConstants",
    "MultiNameConstant",
    "UnresolvedConstantReference",
    "UnsupportedConstantExpression",
    "EmitError",
    "ReceiverNameCollision",
    "OutputWriteError",
]


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class ErrorPhase(Enum):
    """Pipeline phase where the error occurred."""

    CONFIG = "config"          # Option validation
    SOURCE = "source"          # Reading / parsing input files
    ANALYSIS = "analysis"      # Type validation, constant resolution
    EMIT = "emit"              # Code generation, writing output


class ErrorCode:
    """
    Structured error code.

    ``STR-NNNN`` where NNNN falls in the range owned by the code's phase.
    """

    __slots__ = ("prefix", "number", "phase")

    def __init__(self, prefix: str, number: int, phase: ErrorPhase) -> None:
        self.prefix = prefix
        self.number = number
        self.phase = phase

    @property
    def code(self) -> str:
        """Get the full error code string."""
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, phase={self.phase.value})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)


class ErrorCodes:
    """Predefined error codes."""

    # CONFIGURATION (0001-0999)
    CONFIGURATION = ErrorCode("STR", 1, ErrorPhase.CONFIG)

    # SOURCE (1000-1999)
    SOURCE_READ = ErrorCode("STR", 1000, ErrorPhase.SOURCE)
    SOURCE_PARSE = ErrorCode("STR", 1001, ErrorPhase.SOURCE)

    # ANALYSIS (2000-2999)
    TYPE_NOT_INTEGER_ALIAS = ErrorCode("STR", 2000, ErrorPhase.ANALYSIS)
    INSUFFICIENT_CONSTANTS = ErrorCode("STR", 2001, ErrorPhase.ANALYSIS)
    MULTI_NAME_CONSTANT = ErrorCode("STR", 2002, ErrorPhase.ANALYSIS)
    UNRESOLVED_REFERENCE = ErrorCode("STR", 2003, ErrorPhase.ANALYSIS)
    UNSUPPORTED_EXPRESSION = ErrorCode("STR", 2004, ErrorPhase.ANALYSIS)

    # EMIT (3000-3999)
    RECEIVER_COLLISION = ErrorCode("STR", 3000, ErrorPhase.EMIT)
    OUTPUT_WRITE = ErrorCode("STR", 3001, ErrorPhase.EMIT)


# ═══════════════════════════════════════════════════════════════════════════════
# SOURCE LOCATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SourceSpan:
    """A position in an input file."""

    file: str = ""
    line: int = 0
    column: int = 0

    @classmethod
    def from_node(cls, node: Any) -> "SourceSpan":
        """Create a SourceSpan from an AST node carrying a ``loc``."""
        loc = getattr(node, "loc", None)
        if loc is None:
            return cls()
        return cls(
            file=getattr(loc, "file", ""),
            line=getattr(loc, "line", 0),
            column=getattr(loc, "col", 0),
        )

    def __str__(self) -> str:
        if not self.file and self.line == 0:
            return "<unknown location>"

        parts = []
        if self.file:
            parts.append(self.file)
        if self.line > 0:
            parts.append(str(self.line))
            if self.column > 0:
                parts.append(str(self.column))

        return ":".join(parts)


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class StringerError(Exception):
    """
    Base exception for all tinystringer errors.

    Carries structured error information; ``str()`` gives a GCC-style line.
    """

    default_code: ErrorCode = ErrorCodes.CONFIGURATION

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        cause: Optional[BaseException] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.span = span
        self.cause = cause
        self.hint = hint

    @property
    def phase(self) -> ErrorPhase:
        return self.code.phase

    def with_hint(self, hint: str) -> "StringerError":
        """Add a hint to this error."""
        self.hint = hint
        return self

    def to_gcc_format(self) -> str:
        """Format as a GCC-style error message."""
        main = f"error: {self.message} [{self.code}]"
        if self.span is not None:
            main = f"{self.span}: {main}"
        if self.hint:
            return f"{main}\nhint: {self.hint}"
        return main

    def __str__(self) -> str:
        return self.to_gcc_format()


# ───────────────────────────────────────────────────────────────────────────────
# CONFIGURATION ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class ConfigurationError(StringerError):
    """Missing option, no inputs, or inputs that disagree on dir/package."""

    default_code = ErrorCodes.CONFIGURATION


# ───────────────────────────────────────────────────────────────────────────────
# SOURCE ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class SourceError(StringerError):
    """Error while reading or parsing a Go source file."""

    default_code = ErrorCodes.SOURCE_READ


class SourceReadError(SourceError):
    """Input file could not be read."""

    default_code = ErrorCodes.SOURCE_READ

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        reason = f": {cause}" if cause is not None else ""
        super().__init__(
            message=f"cannot read {path}{reason}",
            span=SourceSpan(file=path),
            cause=cause,
        )
        self.path = path


class SourceParseError(SourceError):
    """Input text is not a Go file the declaration grammar accepts."""

    default_code = ErrorCodes.SOURCE_PARSE

    def __init__(
        self,
        message: str,
        span: Optional[SourceSpan] = None,
        excerpt: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(message=message, span=span, **kwargs)
        self.excerpt = excerpt


# ───────────────────────────────────────────────────────────────────────────────
# ANALYSIS ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class AnalysisError(StringerError):
    """Error during type validation or constant resolution."""

    default_code = ErrorCodes.UNSUPPORTED_EXPRESSION


class TypeNotAnIntegerAlias(AnalysisError):
    """The target type is not defined as one of the built-in integer types."""

    default_code = ErrorCodes.TYPE_NOT_INTEGER_ALIAS

    def __init__(
        self,
        type_name: str,
        actual: str = "",
        span: Optional[SourceSpan] = None,
    ) -> None:
        if actual:
            message = (
                f"expected an integer type for definition of type {type_name}; "
                f"got {actual}"
            )
        else:
            message = f"expected identifier for definition of type {type_name}"
        super().__init__(message=message, span=span)
        self.type_name = type_name
        self.actual = actual


class InsufficientConstants(AnalysisError):
    """No constants of the target type were found."""

    default_code = ErrorCodes.INSUFFICIENT_CONSTANTS

    def __init__(self, type_name: str) -> None:
        super().__init__(
            message=f"did not find enough constant values for type {type_name}",
        )
        self.type_name = type_name
        self.with_hint(
            f"check the type name and that the constants are declared as {type_name}"
        )


class MultiNameConstant(AnalysisError):
    """A single const spec of the target type declares more than one name."""

    default_code = ErrorCodes.MULTI_NAME_CONSTANT

    def __init__(
        self,
        type_name: str,
        names: Any,
        span: Optional[SourceSpan] = None,
    ) -> None:
        super().__init__(
            message=(
                f"expected one name for constant of type {type_name}; "
                f"found {', '.join(names)}"
            ),
            span=span,
        )
        self.type_name = type_name
        self.names = tuple(names)


class UnresolvedConstantReference(AnalysisError):
    """A value expression names a constant that has not been resolved yet."""

    default_code = ErrorCodes.UNRESOLVED_REFERENCE

    def __init__(
        self,
        const_name: str,
        reference: str,
        span: Optional[SourceSpan] = None,
    ) -> None:
        super().__init__(
            message=f"could not find value of {reference} referenced by constant {const_name}",
            span=span,
        )
        self.const_name = const_name
        self.reference = reference
        self.with_hint(
            f"constants are resolved in declaration order; declare {reference} "
            f"before {const_name}, or list the file that declares it first"
        )


class UnsupportedConstantExpression(AnalysisError):
    """A value expression has a shape the resolver cannot fold."""

    default_code = ErrorCodes.UNSUPPORTED_EXPRESSION

    def __init__(
        self,
        const_name: str,
        detail: str,
        span: Optional[SourceSpan] = None,
    ) -> None:
        super().__init__(
            message=f"don't know how to process value of constant {const_name}: {detail}",
            span=span,
        )
        self.const_name = const_name
        self.detail = detail


# ───────────────────────────────────────────────────────────────────────────────
# EMIT ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class EmitError(StringerError):
    """Error while generating or writing the output artifact."""

    default_code = ErrorCodes.OUTPUT_WRITE


class ReceiverNameCollision(EmitError):
    """Every receiver name candidate is taken by a constant."""

    default_code = ErrorCodes.RECEIVER_COLLISION

    def __init__(self, candidates: Any) -> None:
        names = tuple(candidates)
        super().__init__(
            message=(
                "don't know how to choose a receiver variable because "
                f"{' and '.join(names)} are constant names"
            ),
        )
        self.candidates = names


class OutputWriteError(EmitError):
    """The generated artifact could not be written."""

    default_code = ErrorCodes.OUTPUT_WRITE

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        reason = f": {cause}" if cause is not None else ""
        super().__init__(
            message=f"cannot write {path}{reason}",
            span=SourceSpan(file=path),
            cause=cause,
        )
        self.path = path
