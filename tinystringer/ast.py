"""tinystringer/ast.py – Go declaration AST.

Only the slice of Go that an enum stringer needs is modelled: the package
clause, ``type`` specs, and ``const`` specs with their value expressions.
``import``, ``var`` and ``func`` declarations are kept as opaque nodes so a
file round-trips through the parser without losing its declaration order.

Design invariants
-----------------
* Every AST node is a frozen dataclass (immutable after construction).
* Children are tuples, never lists.
* Every node records its source location (``SourceLoc``) for diagnostics.
* Value expressions form a closed set (``ValueExpr``); consumers dispatch
  over it and must carry an error arm for ``OpaqueExpr``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

__all__ = [
    "SourceLoc",
    "NO_LOC",
    "IntLit",
    "CharLit",
    "Ident",
    "BinaryExpr",
    "OpaqueExpr",
    "ValueExpr",
    "OpaqueType",
    "TypeRef",
    "TypeSpec",
    "ConstSpec",
    "TypeDecl",
    "ConstDecl",
    "OtherDecl",
    "Decl",
    "File",
]


# ════════════════════════════════════════════════════════════════════════
# §1  Source location
# ════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SourceLoc:
    """Points back to a position in a ``.go`` source file."""

    file: str = "<unknown>"
    line: int = 0
    col: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.col}"


#: Sentinel for nodes built by hand (tests, synthesised specs).
NO_LOC = SourceLoc()


# ════════════════════════════════════════════════════════════════════════
# §2  Value expressions
# ════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class IntLit:
    """Integer literal, kept as written (``0x1F``, ``1_000``, ``0755``)."""

    text: str
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class CharLit:
    """Rune literal such as ``'A'`` or ``'\\n'``; ``value`` is the code point."""

    text: str
    value: int
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Ident:
    """A bare identifier, including ``iota`` and ``_``."""

    name: str
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class BinaryExpr:
    """``left op right`` where both operands are simple."""

    op: str
    left: Union[IntLit, CharLit, Ident]
    right: Union[IntLit, CharLit, Ident]
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)

    def __str__(self) -> str:
        return f"{self.left} {self.op} {self.right}"


@dataclass(frozen=True, slots=True)
class OpaqueExpr:
    """Any other expression, preserved as source text."""

    text: str
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)

    def __str__(self) -> str:
        return self.text


ValueExpr = Union[IntLit, CharLit, Ident, BinaryExpr, OpaqueExpr]


# ════════════════════════════════════════════════════════════════════════
# §3  Types and specs
# ════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OpaqueType:
    """A type expression that is not a plain identifier (``[]int``, ``pkg.T``)."""

    text: str
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)

    def __str__(self) -> str:
        return self.text


TypeRef = Union[Ident, OpaqueType]


@dataclass(frozen=True, slots=True)
class TypeSpec:
    """``type Name Underlying`` (or ``type Name = Underlying``)."""

    name: str
    type: TypeRef
    alias: bool = False
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class ConstSpec:
    """One line of a ``const`` declaration.

    ``type`` is ``None`` when the spec carries no explicit type;
    ``values`` is empty when there is no ``=``.  ``comment`` holds the
    same-line trailing comment with its markers stripped.
    """

    names: Tuple[Ident, ...]
    type: Optional[TypeRef] = None
    values: Tuple[ValueExpr, ...] = ()
    comment: Optional[str] = None
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)

    @property
    def name_list(self) -> Tuple[str, ...]:
        return tuple(n.name for n in self.names)


# ════════════════════════════════════════════════════════════════════════
# §4  Declarations and files
# ════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TypeDecl:
    specs: Tuple[TypeSpec, ...]
    grouped: bool = False
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class ConstDecl:
    specs: Tuple[ConstSpec, ...]
    grouped: bool = False
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class OtherDecl:
    """``import``, ``var`` or ``func`` declaration, not analysed further."""

    keyword: str
    text: str
    loc: SourceLoc = field(default=NO_LOC, repr=False, compare=False)


Decl = Union[TypeDecl, ConstDecl, OtherDecl]


@dataclass(frozen=True, slots=True)
class File:
    """A parsed Go source file."""

    package: str
    decls: Tuple[Decl, ...] = ()
    path: str = "<string>"

    @property
    def type_decls(self) -> Tuple[TypeDecl, ...]:
        return tuple(d for d in self.decls if isinstance(d, TypeDecl))

    @property
    def const_decls(self) -> Tuple[ConstDecl, ...]:
        return tuple(d for d in self.decls if isinstance(d, ConstDecl))
