"""
tinystringer/grammar.py — Go declaration grammar (Parsimonious PEG)
==================================================================

Covers the top-level structure of a Go source file closely enough to pull
out ``type`` and ``const`` declarations:

* ``package`` clause
* ``type`` declarations, single or grouped, with generic parameter lists
  and ``=`` aliases
* ``const`` declarations, single or grouped, with optional explicit type,
  value lists and a same-line trailing comment
* ``import``, ``var`` and ``func`` declarations, skipped as balanced text

Value expressions are recognised in a small closed set of shapes (integer
literal, rune literal, identifier, ``a + b`` / ``a - b``); anything else
falls through to ``opaque_expr`` and is kept verbatim.

Whitespace inside a spec is horizontal only (``hs``), so a newline ends a
spec the way Go's automatic semicolon insertion does.  The exception is a
line whose last token is a binary operator, ``,`` or ``.``: there Go inserts
no semicolon, and ``piece_gap`` (or ``_`` after ``+`` / ``-`` in
``binary_expr``) carries the expression onto the next line.  ``_`` crosses
lines and swallows comments.
"""

from __future__ import annotations

from parsimonious.grammar import Grammar

__all__ = ["GO_GRAMMAR", "GRAMMAR"]


GO_GRAMMAR = r'''
    # ─────────────────────────────────────────────────────────────
    # Top-Level Structure
    # ─────────────────────────────────────────────────────────────

    source_file         = _ package_clause top_level* _
    top_level           = _ top_decl stmt_end
    package_clause      = "package" hs identifier

    top_decl            = type_decl / const_decl / other_decl

    # ─────────────────────────────────────────────────────────────
    # Type Declarations
    # ─────────────────────────────────────────────────────────────

    type_decl           = type_kw hs type_body
    type_body           = type_group / type_spec
    type_group          = "(" _ grouped_type* ")"
    grouped_type        = type_spec stmt_end _
    type_spec           = identifier hs type_params? alias_mark? type_expr hs line_comment?
    type_params         = "[" _ identifier (_ "," _ identifier)* ~r"[ \t]+" group_body "]" hs
    alias_mark          = "=" hs

    type_expr           = named_type / type_literal
    named_type          = identifier expr_end
    type_literal        = expr_piece (hs expr_piece)*

    # ─────────────────────────────────────────────────────────────
    # Constant Declarations
    # ─────────────────────────────────────────────────────────────

    const_decl          = const_kw hs const_body
    const_body          = const_group / const_spec
    const_group         = "(" _ grouped_const* ")"
    grouped_const       = const_spec stmt_end _
    const_spec          = identifier_list hs const_type? const_values? hs line_comment?
    identifier_list     = identifier (hs "," _ identifier)*
    const_type          = type_name hs
    type_name           = qualified_ident / bare_type_name
    qualified_ident     = identifier "." identifier
    bare_type_name      = identifier
    const_values        = "=" _ expr_list
    expr_list           = expr (hs "," _ expr)*

    # ─────────────────────────────────────────────────────────────
    # Value Expressions
    # ─────────────────────────────────────────────────────────────

    expr                = simple_expr / opaque_expr
    simple_expr         = simple_shape expr_end
    simple_shape        = binary_expr / operand
    binary_expr         = operand hs add_op _ operand
    add_op              = "+" / "-"
    operand             = int_lit / char_lit / identifier
    expr_end            = &~r"[ \t]*(?:[,;)]|//|/\*|\r?\n|$)"

    opaque_expr         = expr_piece (piece_gap expr_piece)*
    expr_piece          = group / string_lit / raw_string / char_lit / bare_text / lone_slash
    bare_text           = ~r"[^\s,;()\[\]{}\"'`/]+"

    # ─────────────────────────────────────────────────────────────
    # Skipped Declarations (import / var / func)
    # ─────────────────────────────────────────────────────────────

    other_decl          = other_kw line_piece_run hs line_comment?
    line_piece_run      = (piece_gap line_piece)*
    line_piece          = expr_piece / inline_comment / ~r"[,;]"

    # ─────────────────────────────────────────────────────────────
    # Balanced Groups
    # ─────────────────────────────────────────────────────────────

    group               = paren_group / bracket_group / brace_group
    paren_group         = "(" group_body ")"
    bracket_group       = "[" group_body "]"
    brace_group         = "{" group_body "}"
    group_body          = group_item*
    group_item          = group / string_lit / raw_string / char_lit / comment / group_text / lone_slash
    group_text          = ~r"[^()\[\]{}\"'`/]+"

    # ─────────────────────────────────────────────────────────────
    # Literals & Comments
    # ─────────────────────────────────────────────────────────────

    int_lit             = ~r"0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|[0-9][0-9_]*"
    char_lit            = ~r"'(?:\\(?:x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|[0-7]{3}|[abfnrtv\\'])|[^'\\\n])'"
    string_lit          = ~r'"(?:[^"\\\n]|\\.)*"'
    raw_string          = ~r"`[^`]*`"
    lone_slash          = ~r"/(?![/*])"

    line_comment        = comment_text (hs comment_text)*
    comment_text        = ~r"//[^\n]*|/\*[^\n]*?\*/"
    comment             = ~r"//[^\n]*|/\*[\s\S]*?\*/"
    inline_comment      = ~r"/\*[^\n]*?\*/"

    # ─────────────────────────────────────────────────────────────
    # Keywords, Identifiers & Whitespace
    # ─────────────────────────────────────────────────────────────

    type_kw             = ~r"type\b"
    const_kw            = ~r"const\b"
    other_kw            = ~r"(?:import|var|func)\b"
    identifier          = ~r"[^\W\d]\w*"
    stmt_end            = hs ~r";?"
    hs                  = ~r"[ \t]*"
    # After a trailing operator, "," or "." the line continues
    piece_gap           = ~r"(?<=[-+*/%&|^<>=,.])(?<!\*/)(?:\s|//[^\n]*|/\*[\s\S]*?\*/)*|[ \t]*"
    _                   = ~r"(?:\s|//[^\n]*|/\*[\s\S]*?\*/)*"
'''

GRAMMAR = Grammar(GO_GRAMMAR)
