"""Quill Lexer — single-pass tokenizer with offset/line/column tracking.

Produces a lazy stream of tokens from Quill source code, always ending
with an EOF token. Whitespace and // comments are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from quill.errors import (
    LexError, SourceLocation, unexpected_char, unterminated_string,
)

logger = logging.getLogger(__name__)


class TokenType(Enum):
    IDENT = auto()
    STRING_LIT = auto()
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    EOF = auto()


PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}

QUOTES = ("'", '"')

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    location: SourceLocation

    @property
    def position(self) -> int:
        return self.location.offset

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.location})"

    def to_dict(self) -> dict:
        return {
            "type": self.type.name,
            "value": self.value,
            "offset": self.location.offset,
            "line": self.location.line,
            "column": self.location.column,
        }


class Lexer:
    """Tokenizer for Quill source code."""

    def __init__(self, source: str, filename: str = "<stdin>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

    def _loc(self) -> SourceLocation:
        return SourceLocation(self.pos, self.line, self.column, self.filename)

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _peek_ahead(self, offset: int = 1) -> Optional[str]:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return None

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _skip_whitespace_and_comments(self) -> None:
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in (" ", "\t", "\r", "\n"):
                self._advance()
            elif ch == "/" and self._peek_ahead() == "/":
                while self.pos < len(self.source) and self.source[self.pos] != "\n":
                    self._advance()
            else:
                break

    def _read_string(self) -> Token:
        loc = self._loc()
        quote = self._advance()
        chars: list[str] = []
        while self.pos < len(self.source):
            ch = self._advance()
            if ch == quote:
                return Token(TokenType.STRING_LIT, "".join(chars), loc)
            if ch == "\\":
                if self.pos >= len(self.source):
                    break
                next_ch = self._advance()
                chars.append(ESCAPES.get(next_ch, next_ch))
            else:
                chars.append(ch)
        raise LexError(unterminated_string(loc))

    def _read_identifier(self) -> Token:
        loc = self._loc()
        start = self.pos
        while self.pos < len(self.source) and (
            is_letter(self.source[self.pos]) or is_digit(self.source[self.pos])
        ):
            self._advance()
        return Token(TokenType.IDENT, self.source[start:self.pos], loc)

    def tokens(self) -> Iterator[Token]:
        """Yield tokens one at a time; the last one is always EOF."""
        while True:
            self._skip_whitespace_and_comments()
            ch = self._peek()
            if ch is None:
                break

            loc = self._loc()
            if ch in QUOTES:
                yield self._read_string()
            elif is_letter(ch):
                yield self._read_identifier()
            elif ch in PUNCTUATION:
                self._advance()
                yield Token(PUNCTUATION[ch], ch, loc)
            else:
                raise LexError(unexpected_char(ch, loc))

        logger.debug("lexed %d characters from %s", len(self.source), self.filename)
        yield Token(TokenType.EOF, "", self._loc())

    def tokenize(self) -> list[Token]:
        return list(self.tokens())


def lex(source: str, filename: str = "<stdin>") -> Iterator[Token]:
    """Lazily tokenize Quill source code."""
    return Lexer(source, filename).tokens()


def tokenize(source: str, filename: str = "<stdin>") -> list[Token]:
    """Convenience function returning the full token list."""
    return Lexer(source, filename).tokenize()
