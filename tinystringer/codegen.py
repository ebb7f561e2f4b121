#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
tinystringer/codegen.py
=======================

Go code generator for resolved enum tables.

The generated file contains, in order:

1. **Prologue** — "Code generated" marker, package clause, ``strconv`` import
2. **Guard** — ``func _()`` with one ``_ = x[Name-Value]`` per constant, so
   the package stops compiling when the constants drift from this file
3. **String method** — a ``switch`` with one case per distinct value
4. **Name map** (optional) — ``map[string]<Type>`` from display text to value
5. **Value slice** (optional) — distinct values, sorted by display text

Output is a pure function of the table and the options: ordering comes from
declaration order or an explicit stable sort, never from set iteration.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any, List, Sequence, Set

from tinystringer.config import StringerConfig
from tinystringer.errors import ReceiverNameCollision
from tinystringer.resolver import EnumeratorRecord, ResolvedTable

__all__ = [
    "generate",
    "StringerGenerator",
    "CodeEmitter",
    "GENERATED_HEADER",
    "RECEIVER_CANDIDATES",
]

logger = logging.getLogger(__name__)

GENERATED_HEADER = '// Code generated by "stringer"; DO NOT EDIT.'

RECEIVER_CANDIDATES = ("i", "_i")


# ═══════════════════════════════════════════════════════════════════════════
# CODE EMITTER
# ═══════════════════════════════════════════════════════════════════════════

class CodeEmitter:
    """Low-level code emission with indentation management.

    Go is indented with tabs, so that is the default indent unit.
    """

    def __init__(self, indent_str: str = "\t") -> None:
        self._buffer = StringIO()
        self._indent_str = indent_str
        self._indent_level = 0

    def emit(self, code: str) -> None:
        """Emit a line of code at the current indentation."""
        if code.strip():
            self._buffer.write(self._indent_str * self._indent_level)
            self._buffer.write(code)
        self._buffer.write("\n")

    def emit_blank(self, count: int = 1) -> None:
        """Emit blank lines."""
        for _ in range(count):
            self._buffer.write("\n")

    def emit_comment(self, text: str) -> None:
        for line in text.split("\n"):
            self.emit(f"// {line}")

    def indent(self) -> None:
        self._indent_level += 1

    def dedent(self) -> None:
        self._indent_level = max(0, self._indent_level - 1)

    def block(self, header: str, footer: str = "}") -> "CodeEmitter._BlockContext":
        """Context manager for brace-delimited blocks."""
        return self._BlockContext(self, header, footer)

    class _BlockContext:

        def __init__(self, emitter: "CodeEmitter", header: str, footer: str) -> None:
            self._emitter = emitter
            self._header = header
            self._footer = footer

        def __enter__(self) -> "CodeEmitter":
            self._emitter.emit(self._header)
            self._emitter.indent()
            return self._emitter

        def __exit__(self, *args: Any) -> None:
            self._emitter.dedent()
            self._emitter.emit(self._footer)

    def get_code(self) -> str:
        return self._buffer.getvalue()

    @staticmethod
    def quote(s: str) -> str:
        """Render *s* as a Go interpreted string literal."""
        escaped = (
            s.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\t", "\\t")
        )
        return f'"{escaped}"'


# ═══════════════════════════════════════════════════════════════════════════
# GENERATOR
# ═══════════════════════════════════════════════════════════════════════════

class StringerGenerator:
    """Turns a :class:`ResolvedTable` into the text of ``<type>_string.go``."""

    def __init__(self, config: StringerConfig, package_name: str) -> None:
        self._config = config
        self._type_name = config.type_name
        self._package_name = package_name

    def generate(self, table: ResolvedTable) -> str:
        records = table.records
        receiver = self.choose_receiver(table)
        emitter = CodeEmitter()

        self._emit_prologue(emitter)
        self._emit_guard(emitter, records)
        emitter.emit_blank()
        self._emit_string_method(emitter, records, receiver)
        if self._config.map_name:
            emitter.emit_blank()
            self._emit_name_map(emitter, records)
        if self._config.slice_name:
            emitter.emit_blank()
            self._emit_value_slice(emitter, records)

        code = emitter.get_code()
        logger.debug("Generated %d line(s) for type %s", code.count("\n"), self._type_name)
        return code

    @staticmethod
    def choose_receiver(table: ResolvedTable) -> str:
        """First receiver name that does not shadow a constant."""
        for candidate in RECEIVER_CANDIDATES:
            if candidate not in table:
                return candidate
        raise ReceiverNameCollision(RECEIVER_CANDIDATES)

    # ─────────────────────────────────────────────────────────────
    # Sections
    # ─────────────────────────────────────────────────────────────

    def _emit_prologue(self, emitter: CodeEmitter) -> None:
        emitter.emit(GENERATED_HEADER)
        emitter.emit_blank()
        emitter.emit(f"package {self._package_name}")
        emitter.emit_blank()
        emitter.emit('import "strconv"')
        emitter.emit_blank()

    def _emit_guard(self, emitter: CodeEmitter, records: Sequence[EnumeratorRecord]) -> None:
        with emitter.block("func _() {"):
            emitter.emit_comment(
                'An "invalid array index" compiler error signifies that the constant values have changed.\n'
                "Re-run the stringer command to generate them again."
            )
            emitter.emit("var x [1]struct{}")
            for record in records:
                # gofmt keeps "a-1" tight but spaces out "a - -1"
                minus = " - " if record.value < 0 else "-"
                emitter.emit(f"_ = x[{record.name}{minus}{record.value}]")

    def _emit_string_method(
        self,
        emitter: CodeEmitter,
        records: Sequence[EnumeratorRecord],
        receiver: str,
    ) -> None:
        with emitter.block(f"func ({receiver} {self._type_name}) String() string {{"):
            emitter.emit(f"switch {receiver} {{")
            for record in _first_per_value(records):
                emitter.emit(f"case {record.name}:")
                emitter.indent()
                emitter.emit(f"return {emitter.quote(record.display_text)}")
                emitter.dedent()
            emitter.emit("default:")
            emitter.indent()
            emitter.emit(
                f'return "{self._type_name}(" + '
                f"strconv.FormatInt(int64({receiver}), 10) + "
                '")"'
            )
            emitter.dedent()
            emitter.emit("}")

    def _emit_name_map(self, emitter: CodeEmitter, records: Sequence[EnumeratorRecord]) -> None:
        keys = [emitter.quote(r.display_text) for r in records]
        width = max((len(k) for k in keys), default=0)
        with emitter.block(f"var {self._config.map_name} = map[string]{self._type_name}{{"):
            for key, record in zip(keys, records):
                padding = " " * (1 + width - len(key))
                emitter.emit(f"{key}:{padding}{record.value},")

    def _emit_value_slice(self, emitter: CodeEmitter, records: Sequence[EnumeratorRecord]) -> None:
        distinct = _first_per_value(records)
        ordered = _first_per_value(sorted(distinct, key=lambda r: r.display_text))
        with emitter.block(f"var {self._config.slice_name} = []{self._type_name}{{"):
            for record in ordered:
                emitter.emit(f"{record.name},")


def _first_per_value(records: Sequence[EnumeratorRecord]) -> List[EnumeratorRecord]:
    """Keep the first record for every value, preserving order."""
    seen: Set[int] = set()
    kept: List[EnumeratorRecord] = []
    for record in records:
        if record.value in seen:
            continue
        seen.add(record.value)
        kept.append(record)
    return kept


def generate(
    table: ResolvedTable,
    config: StringerConfig,
    package_name: str,
) -> str:
    """Generate the Go source for *table*."""
    return StringerGenerator(config, package_name).generate(table)
