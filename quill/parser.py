"""Quill Parser — LL(1) recursive-descent parser.

Grammar:

    program   := statement* EOF
    statement := callExpr
    callExpr  := IDENT '(' (STRING_LIT (',' STRING_LIT)*)? ')'

Tokens are pulled lazily from any iterable, one token of lookahead.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from quill.ast_nodes import CallExpression, Node, Program, StringLiteral
from quill.errors import ParseError, unexpected_token
from quill.lexer import Token, TokenType, lex

logger = logging.getLogger(__name__)


class Parser:
    """LL(1) recursive-descent parser for Quill."""

    def __init__(self, tokens: Iterable[Token], filename: str = "<stdin>"):
        self._tokens: Iterator[Token] = iter(tokens)
        self.filename = filename
        self._current: Optional[Token] = None
        self._last: Optional[Token] = None
        self._pull()

    def _pull(self) -> None:
        tok = next(self._tokens, None)
        if tok is not None:
            self._last = tok
        self._current = tok

    def _peek(self) -> Optional[TokenType]:
        return self._current.type if self._current is not None else None

    def _fail(self, *expected: TokenType) -> ParseError:
        tok = self._current
        names = [tt.name for tt in expected]
        if tok is None:
            # stream ended without an EOF token
            loc = self._last.location if self._last is not None else None
            return ParseError(unexpected_token(names, "EOF", "", loc))
        return ParseError(unexpected_token(names, tok.type.name, tok.value, tok.location))

    def _advance(self) -> Token:
        tok = self._current
        if tok is None:
            raise self._fail(TokenType.EOF)
        if tok.type != TokenType.EOF:
            self._pull()
        return tok

    def _expect(self, tt: TokenType) -> Token:
        if self._peek() != tt:
            raise self._fail(tt)
        return self._advance()

    def _match(self, tt: TokenType) -> Optional[Token]:
        if self._peek() == tt:
            return self._advance()
        return None

    # -------------------------------------------------------------------
    # Top-level
    # -------------------------------------------------------------------

    def parse(self) -> Program:
        loc = self._current.location if self._current is not None else None
        statements: list[Node] = []
        while self._peek() != TokenType.EOF:
            statements.append(self._parse_statement())
        logger.debug("parsed %d statement(s) from %s", len(statements), self.filename)
        return Program(statements=statements, filename=self.filename, location=loc)

    def _parse_statement(self) -> Node:
        if self._peek() == TokenType.IDENT:
            return self._parse_call()
        raise self._fail(TokenType.IDENT)

    # -------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------

    def _parse_call(self) -> CallExpression:
        name = self._expect(TokenType.IDENT)
        self._expect(TokenType.LPAREN)
        args: list[Node] = []
        if self._peek() == TokenType.STRING_LIT:
            args.append(self._parse_string())
            while self._match(TokenType.COMMA):
                args.append(self._parse_string())
        elif self._peek() != TokenType.RPAREN:
            raise self._fail(TokenType.STRING_LIT, TokenType.RPAREN)
        self._expect(TokenType.RPAREN)
        return CallExpression(callee=name.value, arguments=args, location=name.location)

    def _parse_string(self) -> StringLiteral:
        tok = self._expect(TokenType.STRING_LIT)
        return StringLiteral(value=tok.value, location=tok.location)


def parse(tokens: Iterable[Token], filename: str = "<stdin>") -> Program:
    """Parse a token stream into a Program."""
    return Parser(tokens, filename).parse()


def parse_source(source: str, filename: str = "<stdin>") -> Program:
    """Lex and parse Quill source code in one step."""
    return parse(lex(source, filename), filename)
