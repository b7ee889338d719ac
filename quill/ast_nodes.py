"""Quill AST node definitions.

The tree is a closed union of three variants. Consumers dispatch with a
``match`` statement and ``assert_never`` so a missing variant is caught by
the type checker.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from quill.errors import SourceLocation


@dataclass
class StringLiteral:
    value: str
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {"node": "StringLiteral", "value": self.value}


@dataclass
class CallExpression:
    callee: str
    arguments: list[Node] = field(default_factory=list)
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "node": "CallExpression",
            "callee": self.callee,
            "arguments": [a.to_dict() for a in self.arguments],
        }


@dataclass
class Program:
    statements: list[Node] = field(default_factory=list)
    filename: str = field(default="<stdin>", compare=False)
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "node": "Program",
            "filename": self.filename,
            "statements": [s.to_dict() for s in self.statements],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


Node = Union[Program, CallExpression, StringLiteral]
