"""tinystringer/parser.py – Go source → declaration AST.

Runs :data:`tinystringer.grammar.GRAMMAR` over a file and turns the
Parsimonious parse tree into the frozen nodes of :mod:`tinystringer.ast`.

Public API
----------
``parse_source(text, filename="<string>") -> ast.File``
    Parse one Go source string.

``parse_file(path) -> ast.File``
    Read and parse one file.

``parse_files(paths) -> (files, package_name)``
    Parse several files in the order given and check that they all belong
    to one package.
"""

from __future__ import annotations

import bisect
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Type, Union

from parsimonious.exceptions import ParseError
from parsimonious.nodes import Node, NodeVisitor

from tinystringer import ast
from tinystringer.errors import (
    ConfigurationError,
    SourceParseError,
    SourceReadError,
    SourceSpan,
)
from tinystringer.grammar import GRAMMAR

__all__ = ["parse_source", "parse_file", "parse_files", "rune_value", "comment_text"]

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Literal & comment helpers
# ═══════════════════════════════════════════════════════════════════

_SIMPLE_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
    "'": 0x27,
}

_COMMENT_RE = re.compile(r"//[^\n]*|/\*[^\n]*?\*/")

# Mirrors go/ast's isDirective: //line, //extern, //export, //tool:directive
_DIRECTIVE_RE = re.compile(r"^//(?:line |extern |export |[a-z0-9]+:[a-z0-9])")


def rune_value(text: str) -> int:
    """Return the code point of a Go rune literal such as ``'A'`` or ``'\\x41'``."""
    body = text[1:-1]
    if not body.startswith("\\"):
        return ord(body)
    kind = body[1]
    if kind in "xuU":
        return int(body[2:], 16)
    if kind in "01234567":
        return int(body[1:], 8)
    return _SIMPLE_ESCAPES[kind]


def comment_text(raw: str) -> Optional[str]:
    """Strip comment markers from the same-line comments in *raw*.

    Several comments are joined with newlines; directives such as
    ``//go:generate`` are dropped.  Returns ``None`` when nothing remains.
    """
    lines: List[str] = []
    for piece in _COMMENT_RE.findall(raw):
        if piece.startswith("//"):
            if _DIRECTIVE_RE.match(piece):
                continue
            body = piece[2:]
            if body.startswith(" "):
                body = body[1:]
        else:
            body = piece[2:-2]
        lines.append(body.rstrip())
    text = "\n".join(lines).strip("\n")
    if not lines:
        return None
    return text


# ═══════════════════════════════════════════════════════════════════
#  Parse tree → AST
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class _LineComment:
    text: Optional[str]


def _items(visited: Any) -> list:
    """Children of a ``*``/``+`` node; an empty match visits to a bare Node."""
    return visited if isinstance(visited, list) else []


def _opt(visited: Any) -> Any:
    """Value of a ``?`` node, or ``None`` when it matched nothing."""
    if isinstance(visited, list) and visited:
        return visited[0]
    return None


def _collect(visited: Any, kinds: Union[Type, Tuple[Type, ...]]) -> List[Any]:
    """Flatten nested visit results, keeping instances of *kinds*."""
    if isinstance(visited, kinds):
        return [visited]
    if isinstance(visited, (list, tuple)) and not isinstance(visited, kinds):
        found: List[Any] = []
        for item in visited:
            found.extend(_collect(item, kinds))
        return found
    return []


_VALUE_KINDS = (ast.IntLit, ast.CharLit, ast.Ident, ast.BinaryExpr, ast.OpaqueExpr)


class GoDeclBuilder(NodeVisitor):
    """Transforms the Parsimonious parse tree into a :class:`ast.File`."""

    grammar = GRAMMAR
    unwrapped_exceptions = (SourceParseError,)

    def __init__(self, text: str, filename: str = "<string>") -> None:
        self._text = text
        self._filename = filename
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    def _loc(self, node: Node) -> ast.SourceLoc:
        index = bisect.bisect_right(self._line_starts, node.start) - 1
        return ast.SourceLoc(
            file=self._filename,
            line=index + 1,
            col=node.start - self._line_starts[index] + 1,
        )

    def generic_visit(self, node, visited_children):
        return visited_children or node

    # ─────────────────────────────────────────────────────────────
    # File
    # ─────────────────────────────────────────────────────────────

    def visit_source_file(self, node, visited_children):
        _, package, top_levels, _ = visited_children
        decls = tuple(_items(top_levels))
        return ast.File(package=package, decls=decls, path=self._filename)

    def visit_top_level(self, node, visited_children):
        _, decl, _ = visited_children
        return decl

    def visit_package_clause(self, node, visited_children):
        _, _, name = visited_children
        return name.name

    def visit_top_decl(self, node, visited_children):
        return visited_children[0]

    def visit_other_decl(self, node, visited_children):
        keyword = node.children[0].text
        return ast.OtherDecl(keyword=keyword, text=node.text.strip(), loc=self._loc(node))

    # ─────────────────────────────────────────────────────────────
    # Types
    # ─────────────────────────────────────────────────────────────

    def visit_type_decl(self, node, visited_children):
        _, _, body = visited_children
        if isinstance(body, tuple):
            return ast.TypeDecl(specs=body, grouped=True, loc=self._loc(node))
        return ast.TypeDecl(specs=(body,), loc=self._loc(node))

    def visit_type_body(self, node, visited_children):
        return visited_children[0]

    def visit_type_group(self, node, visited_children):
        _, _, specs, _ = visited_children
        return tuple(_items(specs))

    def visit_grouped_type(self, node, visited_children):
        return visited_children[0]

    def visit_type_spec(self, node, visited_children):
        name, _, _, alias, type_ref, _, _ = visited_children
        return ast.TypeSpec(
            name=name.name,
            type=type_ref,
            alias=_opt(alias) is not None,
            loc=self._loc(node),
        )

    def visit_type_expr(self, node, visited_children):
        return visited_children[0]

    def visit_named_type(self, node, visited_children):
        return visited_children[0]

    def visit_type_literal(self, node, visited_children):
        return ast.OpaqueType(text=node.text.strip(), loc=self._loc(node))

    # ─────────────────────────────────────────────────────────────
    # Constants
    # ─────────────────────────────────────────────────────────────

    def visit_const_decl(self, node, visited_children):
        _, _, body = visited_children
        if isinstance(body, tuple):
            return ast.ConstDecl(specs=body, grouped=True, loc=self._loc(node))
        return ast.ConstDecl(specs=(body,), loc=self._loc(node))

    def visit_const_body(self, node, visited_children):
        return visited_children[0]

    def visit_const_group(self, node, visited_children):
        _, _, specs, _ = visited_children
        return tuple(_items(specs))

    def visit_grouped_const(self, node, visited_children):
        return visited_children[0]

    def visit_const_spec(self, node, visited_children):
        names, _, const_type, values, _, comment = visited_children
        line_comment = _opt(comment)
        return ast.ConstSpec(
            names=names,
            type=_opt(const_type),
            values=_opt(values) or (),
            comment=line_comment.text if line_comment is not None else None,
            loc=self._loc(node),
        )

    def visit_identifier_list(self, node, visited_children):
        return tuple(_collect(visited_children, ast.Ident))

    def visit_const_type(self, node, visited_children):
        type_ref, _ = visited_children
        return type_ref

    def visit_type_name(self, node, visited_children):
        return visited_children[0]

    def visit_qualified_ident(self, node, visited_children):
        return ast.OpaqueType(text=node.text, loc=self._loc(node))

    def visit_bare_type_name(self, node, visited_children):
        return visited_children[0]

    def visit_const_values(self, node, visited_children):
        _, _, exprs = visited_children
        return exprs

    def visit_expr_list(self, node, visited_children):
        first, rest = visited_children
        return (first,) + tuple(_collect(_items(rest), _VALUE_KINDS))

    # ─────────────────────────────────────────────────────────────
    # Expressions
    # ─────────────────────────────────────────────────────────────

    def visit_expr(self, node, visited_children):
        return visited_children[0]

    def visit_simple_expr(self, node, visited_children):
        return visited_children[0]

    def visit_simple_shape(self, node, visited_children):
        return visited_children[0]

    def visit_binary_expr(self, node, visited_children):
        left, _, op, _, right = visited_children
        return ast.BinaryExpr(op=op, left=left, right=right, loc=self._loc(node))

    def visit_add_op(self, node, visited_children):
        return node.text

    def visit_operand(self, node, visited_children):
        return visited_children[0]

    def visit_opaque_expr(self, node, visited_children):
        return ast.OpaqueExpr(text=node.text.strip(), loc=self._loc(node))

    # ─────────────────────────────────────────────────────────────
    # Leaves
    # ─────────────────────────────────────────────────────────────

    def visit_identifier(self, node, visited_children):
        return ast.Ident(name=node.text, loc=self._loc(node))

    def visit_int_lit(self, node, visited_children):
        return ast.IntLit(text=node.text, loc=self._loc(node))

    def visit_char_lit(self, node, visited_children):
        return ast.CharLit(text=node.text, value=rune_value(node.text), loc=self._loc(node))

    def visit_line_comment(self, node, visited_children):
        return _LineComment(comment_text(node.text))


# ═══════════════════════════════════════════════════════════════════
#  Entry points
# ═══════════════════════════════════════════════════════════════════

def parse_source(text: str, filename: str = "<string>") -> ast.File:
    """Parse Go source *text* into an :class:`ast.File`."""
    try:
        tree = GRAMMAR.parse(text)
    except ParseError as exc:
        excerpt = exc.text[exc.pos:exc.pos + 40].split("\n", 1)[0]
        raise SourceParseError(
            f"cannot parse Go declarations near {excerpt!r}",
            span=SourceSpan(file=filename, line=exc.line(), column=exc.column()),
            excerpt=excerpt,
            cause=exc,
        ) from exc
    return GoDeclBuilder(text, filename).visit(tree)


def parse_file(path: Union[str, Path]) -> ast.File:
    """Read and parse the Go file at *path*."""
    name = str(path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(name, cause=exc) from exc
    parsed = parse_source(text, filename=name)
    logger.debug(
        "Parsed %s: package %s, %d declaration(s)", name, parsed.package, len(parsed.decls)
    )
    return parsed


def parse_files(paths: Sequence[Union[str, Path]]) -> Tuple[List[ast.File], str]:
    """Parse every file in *paths* and return them with their common package name.

    All files must declare the same package; that package is where the
    generated code goes.
    """
    files = [parse_file(p) for p in paths]
    package_name = ""
    which_file = ""
    for parsed in files:
        if not package_name:
            package_name = parsed.package
            which_file = parsed.path
        elif parsed.package != package_name:
            raise ConfigurationError(
                "all input files must have the same package name; "
                f"got input file {which_file} w/ 'package {package_name}', "
                f"but input file {parsed.path} w/ 'package {parsed.package}'"
            )
    logger.info("Parsed %d file(s) in package %s", len(files), package_name)
    return files, package_name
