"""Structured error objects for the Quill compiler.

Every failure carries a discriminated kind and a source location, and can
be rendered as JSON for the CLI or any other caller.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    # Lexer
    UNEXPECTED_CHAR = "unexpected_char"
    UNTERMINATED_STRING = "unterminated_string"

    # Parser
    UNEXPECTED_TOKEN = "unexpected_token"
    UNEXPECTED_EOF = "unexpected_eof"

    # LLVM backend
    RESERVED_NAME = "reserved_name"


@dataclass(frozen=True)
class SourceLocation:
    offset: int
    line: int = 1
    column: int = 1
    file: str = "<stdin>"

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass
class Diagnostic:
    kind: ErrorKind
    message: str
    location: Optional[SourceLocation] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.location:
            d["location"] = {
                "file": self.location.file,
                "offset": self.location.offset,
                "line": self.location.line,
                "column": self.location.column,
            }
        if self.details:
            d["details"] = self.details
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        return f"[{self.kind.value}]{loc}: {self.message}"


def unexpected_char(char: str, location: SourceLocation) -> Diagnostic:
    return Diagnostic(
        kind=ErrorKind.UNEXPECTED_CHAR,
        message=f"Unexpected character {char!r}",
        location=location,
        details={"char": char},
    )


def unterminated_string(location: SourceLocation) -> Diagnostic:
    return Diagnostic(
        kind=ErrorKind.UNTERMINATED_STRING,
        message="Unterminated string literal",
        location=location,
    )


def unexpected_token(
    expected: list[str],
    actual: str,
    value: str,
    location: Optional[SourceLocation],
) -> Diagnostic:
    wanted = " or ".join(expected)
    if actual == "EOF":
        return Diagnostic(
            kind=ErrorKind.UNEXPECTED_EOF,
            message=f"Expected {wanted}, got end of input",
            location=location,
            details={"expected": expected, "actual": actual},
        )
    return Diagnostic(
        kind=ErrorKind.UNEXPECTED_TOKEN,
        message=f"Expected {wanted}, got {actual} ({value!r})",
        location=location,
        details={"expected": expected, "actual": actual, "value": value},
    )


def reserved_name(name: str, location: Optional[SourceLocation]) -> Diagnostic:
    return Diagnostic(
        kind=ErrorKind.RESERVED_NAME,
        message=f"'{name}' is reserved by the LLVM backend and cannot be called",
        location=location,
        details={"name": name},
    )


class CompileError(Exception):
    """Exception wrapping one or more Diagnostics."""

    def __init__(self, errors: list[Diagnostic] | Diagnostic):
        if isinstance(errors, Diagnostic):
            errors = [errors]
        self.errors = errors
        super().__init__(self._format())

    def _format(self) -> str:
        return "\n".join(str(e) for e in self.errors)

    @property
    def kind(self) -> ErrorKind:
        return self.errors[0].kind

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.errors[0].location

    @property
    def position(self) -> Optional[int]:
        """Character offset of the first error, if it has a location."""
        loc = self.location
        return loc.offset if loc else None

    def to_json(self, indent: int = 2) -> str:
        return json.dumps([e.to_dict() for e in self.errors], indent=indent)


class LexError(CompileError):
    """Raised by the lexer on a character it cannot tokenize."""


class ParseError(CompileError):
    """Raised by the parser when the token stream does not fit the grammar."""


class CodegenError(CompileError):
    """Raised by a backend when a valid program cannot be lowered."""


class ConfigError(Exception):
    """Invalid value in a .quillrc file."""
