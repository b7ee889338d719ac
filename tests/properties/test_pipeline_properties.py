"""Property-based tests for the lex → parse → generate pipeline.

For every well-formed program, the generated text is canonical: compiling
it again reproduces it exactly, and it parses back to the same tree.
"""

from __future__ import annotations

import pytest

try:
    from hypothesis import given, settings
    from hypothesis import strategies as st
    HAS_HYPOTHESIS = True
except ImportError:
    HAS_HYPOTHESIS = False
    given = settings = st = None  # type: ignore

from quill import compile
from quill.ast_nodes import CallExpression, Program, StringLiteral
from quill.generator import generate
from quill.lexer import tokenize
from quill.parser import parse, parse_source


if HAS_HYPOTHESIS:
    identifiers = st.from_regex(r"[a-zA-Z][a-zA-Z0-9]{0,11}", fullmatch=True)
    values = st.text(
        alphabet=st.characters(exclude_categories=("Cs",)),
        max_size=20,
    )

    @st.composite
    def programs(draw):
        calls = draw(st.lists(
            st.builds(
                CallExpression,
                callee=identifiers,
                arguments=st.lists(st.builds(StringLiteral, value=values), max_size=4),
            ),
            max_size=5,
        ))
        return Program(calls)

    @st.composite
    def sources(draw):
        """Non-canonical spellings: either quote, odd spacing, comments."""
        program = draw(programs())
        pieces = []
        for call in program.statements:
            quote = draw(st.sampled_from(["'", '"']))
            sep = draw(st.sampled_from([",", " , ", ",\n"]))
            args = sep.join(generate(a, quote) for a in call.arguments)
            gap = draw(st.sampled_from(["", " ", "\t"]))
            pieces.append(f"{call.callee}{gap}({args})")
        joiner = draw(st.sampled_from(["\n", " ", "\n// note\n"]))
        return joiner.join(pieces)


pytestmark = pytest.mark.skipif(not HAS_HYPOTHESIS, reason="hypothesis not installed")


class TestPipelineIdempotence:
    """generate(parse(lex(s))) is a fixed point of compile()."""

    if HAS_HYPOTHESIS:
        @given(sources())
        @settings(max_examples=200)
        def test_compile_is_idempotent(self, source):
            once = compile(source)
            assert compile(once) == once

        @given(programs())
        @settings(max_examples=200)
        def test_generated_text_parses_to_same_tree(self, program):
            assert parse(tokenize(generate(program))) == program

        @given(programs())
        def test_single_quote_style_round_trips(self, program):
            assert parse_source(generate(program, quote="'")) == program
