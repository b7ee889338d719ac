"""Quill compiler driver: lex → parse → generate.

Each call is independent; the first error of any stage propagates
unchanged and no partial output is produced.
"""

from __future__ import annotations

import logging

from quill.generator import generate
from quill.lexer import QUOTES, lex
from quill.llvm_emit import emit
from quill.parser import parse

logger = logging.getLogger(__name__)

TARGETS = ("text", "llvm")


def compile(
    source: str,
    filename: str = "<stdin>",
    target: str = "text",
    quote: str = '"',
) -> str:
    """Compile Quill source to canonical text, or to LLVM IR with target="llvm"."""
    if target not in TARGETS:
        raise ValueError(f"Unknown target {target!r}; expected one of {TARGETS}")
    if quote not in QUOTES:
        raise ValueError(f"Unknown quote {quote!r}; expected one of {QUOTES}")

    logger.debug("compiling %s for target %s", filename, target)
    program = parse(lex(source, filename), filename)

    if target == "llvm":
        return emit(program, module_name=filename)
    return generate(program, quote)
