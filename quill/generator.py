"""Quill text generator — AST back to canonical source text.

Canonical form: one call per line, arguments separated by ", ", strings in
double quotes unless another quote character is requested.
"""

from __future__ import annotations

from typing import assert_never

from quill.ast_nodes import CallExpression, Node, Program, StringLiteral

_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote_string(value: str, quote: str = '"') -> str:
    escaped = "".join(
        _ESCAPES.get(ch, "\\" + ch if ch == quote else ch) for ch in value
    )
    return f"{quote}{escaped}{quote}"


def generate(node: Node, quote: str = '"') -> str:
    """Emit source text for any AST node."""
    match node:
        case Program(statements=statements):
            return "\n".join(generate(s, quote) for s in statements)
        case CallExpression(callee=callee, arguments=arguments):
            args = ", ".join(generate(a, quote) for a in arguments)
            return f"{callee}({args})"
        case StringLiteral(value=value):
            return quote_string(value, quote)
        case _:
            assert_never(node)
