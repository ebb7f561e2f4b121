"""
tinystringer/resolver.py
========================

Constant folding for enum-style ``const`` blocks.

Walks every ``const`` declaration of every input file, picks out the specs
that belong to the target type, and works out the integer value and the
display text of each one without running the Go compiler.

Block-scoped state
------------------
Each ``const`` block gets a fresh :class:`ResolutionState`: an ``iota``
counter that starts at 0 and is *inactive*.  The counter only moves when
a spec of the target type consumes it, so untyped constants of other types
in the same block do not shift the sequence.

Value rules, in priority order
------------------------------
1. no value            → counter if active (then advance), else 0
2. integer literal     → literal; counter deactivated
3. rune literal        → code point; counter deactivated
4. ``iota``            → counter (then advance); counter activated
5. other identifier    → value of an earlier constant; counter deactivated
6. ``iota ± k``        → counter shifted by ±k for good, then as rule 4
7. anything else       → :class:`UnsupportedConstantExpression`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from tinystringer import ast
from tinystringer.config import StringerConfig
from tinystringer.errors import (
    InsufficientConstants,
    MultiNameConstant,
    SourceSpan,
    UnresolvedConstantReference,
    UnsupportedConstantExpression,
)

__all__ = [
    "IOTA",
    "DISCARD_NAME",
    "EnumeratorRecord",
    "ResolutionState",
    "ResolvedTable",
    "ConstantResolver",
    "parse_int_literal",
    "resolve",
]

logger = logging.getLogger(__name__)

IOTA = "iota"
DISCARD_NAME = "_"


# ═══════════════════════════════════════════════════════════════════════════
# DATA MODEL
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EnumeratorRecord:
    """One resolved constant of the target type."""

    name: str
    value: int
    display_text: str
    declaration_order: int


class ResolutionState:
    """The ``iota`` counter of a single ``const`` block."""

    __slots__ = ("value", "active")

    def __init__(self) -> None:
        self.value = 0
        self.active = False

    def take(self) -> int:
        """Return the current counter value and advance it."""
        current = self.value
        self.value += 1
        return current

    def activate(self) -> int:
        self.active = True
        return self.take()

    def offset(self, delta: int) -> int:
        """Shift the counter baseline by *delta*, then behave like ``iota``."""
        self.value += delta
        return self.activate()

    def deactivate(self) -> None:
        self.active = False

    def __repr__(self) -> str:
        return f"ResolutionState(value={self.value}, active={self.active})"


class ResolvedTable:
    """Constants in first-declaration order plus name → value/display maps.

    Redeclaring a name overwrites its value and display text but keeps its
    original position.  Both maps are always written together.
    """

    def __init__(self) -> None:
        self._order: List[str] = []
        self.name_to_value: Dict[str, int] = {}
        self.name_to_display: Dict[str, str] = {}

    def record(self, name: str, value: int, display_text: str) -> None:
        if name not in self.name_to_value:
            self._order.append(name)
        self.name_to_value[name] = value
        self.name_to_display[name] = display_text

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._order)

    @property
    def records(self) -> Tuple[EnumeratorRecord, ...]:
        return tuple(
            EnumeratorRecord(
                name=name,
                value=self.name_to_value[name],
                display_text=self.name_to_display[name],
                declaration_order=index,
            )
            for index, name in enumerate(self._order)
        )

    def value_of(self, name: str) -> Optional[int]:
        return self.name_to_value.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.name_to_value

    def __iter__(self) -> Iterator[EnumeratorRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{n}={self.name_to_value[n]}" for n in self._order)
        return f"ResolvedTable({pairs})"


# ═══════════════════════════════════════════════════════════════════════════
# LITERALS
# ═══════════════════════════════════════════════════════════════════════════

def parse_int_literal(text: str) -> int:
    """Parse a Go integer literal (``42``, ``0x2A``, ``0o52``, ``052``, ``1_000``).

    Raises ``ValueError`` on malformed input.
    """
    digits = text.replace("_", "")
    if len(digits) > 1 and digits[0] == "0" and digits.isdigit():
        return int(digits, 8)
    return int(digits, 0)


# ═══════════════════════════════════════════════════════════════════════════
# RESOLVER
# ═══════════════════════════════════════════════════════════════════════════

class ConstantResolver:
    """Builds the :class:`ResolvedTable` for ``config.type_name``."""

    def __init__(self, config: StringerConfig) -> None:
        self._config = config
        self._type_name = config.type_name

    def resolve(self, files: Iterable[ast.File]) -> ResolvedTable:
        table = ResolvedTable()
        for parsed in files:
            for decl in parsed.const_decls:
                self._resolve_block(decl, table)
        if not table.name_to_value or not table.name_to_display:
            raise InsufficientConstants(self._type_name)
        logger.info("Resolved %d constant(s) of type %s", len(table), self._type_name)
        return table

    def _resolve_block(self, decl: ast.ConstDecl, table: ResolvedTable) -> None:
        state = ResolutionState()
        inherits = False
        for spec in decl.specs:
            if spec.type is not None:
                inherits = isinstance(spec.type, ast.Ident) and spec.type.name == self._type_name
            if not inherits:
                continue
            span = SourceSpan.from_node(spec)
            if len(spec.names) != 1:
                raise MultiNameConstant(self._type_name, spec.name_list, span=span)

            name = spec.names[0].name
            value = self._evaluate(name, spec, state, table, span)
            logger.debug("%s: %s = %d (%r)", span, name, value, state)
            if name == DISCARD_NAME:
                continue
            table.record(name, value, self._display_text(name, spec, span))

    def _evaluate(
        self,
        name: str,
        spec: ast.ConstSpec,
        state: ResolutionState,
        table: ResolvedTable,
        span: SourceSpan,
    ) -> int:
        if not spec.values:
            return state.take() if state.active else 0
        if len(spec.values) != 1:
            raise UnsupportedConstantExpression(
                name,
                f"expected one value, found {', '.join(str(v) for v in spec.values)}",
                span=span,
            )

        expr = spec.values[0]
        if isinstance(expr, ast.IntLit):
            value = self._int_literal(name, expr, span)
            state.deactivate()
            return value
        if isinstance(expr, ast.CharLit):
            state.deactivate()
            return expr.value
        if isinstance(expr, ast.Ident):
            if expr.name == IOTA:
                return state.activate()
            value = self._reference(name, expr, table, span)
            state.deactivate()
            return value
        if isinstance(expr, ast.BinaryExpr):
            return self._evaluate_offset(name, expr, state, table, span)
        if isinstance(expr, ast.OpaqueExpr):
            raise UnsupportedConstantExpression(name, expr.text, span=span)
        raise UnsupportedConstantExpression(
            name, f"unexpected expression node {type(expr).__name__}", span=span
        )

    def _evaluate_offset(
        self,
        name: str,
        expr: ast.BinaryExpr,
        state: ResolutionState,
        table: ResolvedTable,
        span: SourceSpan,
    ) -> int:
        if not (isinstance(expr.left, ast.Ident) and expr.left.name == IOTA):
            raise UnsupportedConstantExpression(
                name, f"expected 'iota' in binary expression {expr}; found {expr.left}", span=span
            )
        right = expr.right
        if isinstance(right, ast.IntLit):
            delta = self._int_literal(name, right, span)
        elif isinstance(right, ast.Ident):
            delta = self._reference(name, right, table, span)
        else:
            raise UnsupportedConstantExpression(
                name, f"couldn't parse second argument of binary expression {expr}", span=span
            )
        if expr.op == "-":
            delta = -delta
        elif expr.op != "+":
            raise UnsupportedConstantExpression(
                name, f"unsupported operator {expr.op!r} in {expr}", span=span
            )
        return state.offset(delta)

    @staticmethod
    def _int_literal(name: str, lit: ast.IntLit, span: SourceSpan) -> int:
        try:
            return parse_int_literal(lit.text)
        except ValueError:
            raise UnsupportedConstantExpression(
                name, f"malformed integer literal {lit.text}", span=span
            ) from None

    @staticmethod
    def _reference(
        name: str, ref: ast.Ident, table: ResolvedTable, span: SourceSpan
    ) -> int:
        value = table.value_of(ref.name)
        if value is None:
            raise UnresolvedConstantReference(name, ref.name, span=span)
        return value

    def _display_text(self, name: str, spec: ast.ConstSpec, span: SourceSpan) -> str:
        printed = name
        if self._config.line_comment and spec.comment is not None:
            printed = spec.comment.strip()
        if self._config.trim_prefix:
            printed = printed.removeprefix(self._config.trim_prefix)
        if not printed:
            logger.warning("%s: constant %s has an empty display name", span, name)
        return printed


def resolve(files: Iterable[ast.File], config: StringerConfig) -> ResolvedTable:
    """Convenience wrapper around :meth:`ConstantResolver.resolve`."""
    return ConstantResolver(config).resolve(files)
