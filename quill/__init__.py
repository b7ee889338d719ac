"""Quill — a tiny call-language compiler: lex → parse → generate."""

__version__ = "0.1.0"

from quill.compiler import compile
from quill.errors import CodegenError, CompileError, LexError, ParseError, ErrorKind
from quill.generator import generate
from quill.lexer import Token, TokenType, lex, tokenize
from quill.parser import parse, parse_source
