"""Quill CLI — Command-line interface for the Quill compiler.

Commands:
  quill compile <file>               — Compile to canonical text (or LLVM IR)
  quill tokens <file>                — Dump the token stream (JSON)
  quill ast <file>                   — Dump the syntax tree (JSON)
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional

from quill import __version__
from quill.compiler import TARGETS, compile
from quill.config import QuillConfig, load_config
from quill.errors import CompileError, ConfigError
from quill.lexer import tokenize
from quill.llvm_emit import emit_object
from quill.parser import parse_source

logger = logging.getLogger(__name__)


def _read_source(path: str) -> Optional[str]:
    if not os.path.exists(path):
        print(json.dumps({"error": f"File not found: {path}"}))
        return None
    with open(path, "r") as f:
        return f.read()


def _write_output(text: str, output: str) -> None:
    if not output:
        print(text)
        return
    with open(output, "w") as f:
        f.write(text + "\n")
    print(json.dumps({"status": "compiled", "path": output}))


def cmd_compile(args: argparse.Namespace) -> int:
    """Compile a Quill source file."""
    source_path = args.file
    source = _read_source(source_path)
    if source is None:
        return 1

    config: QuillConfig = args.config_obj
    target = args.target or config.target
    output = args.output or config.output
    logger.debug("target=%s output=%s", target, output or "<stdout>")

    if args.obj:
        obj_path = (output or os.path.splitext(source_path)[0]) + ".o"
        try:
            program = parse_source(source, filename=source_path)
            emit_object(program, obj_path, module_name=source_path)
        except CompileError as e:
            print(e.to_json())
            return 1
        print(json.dumps({"status": "object_emitted", "path": obj_path}))
        return 0

    try:
        result = compile(source, filename=source_path, target=target, quote=config.quote)
    except CompileError as e:
        print(e.to_json())
        return 1

    _write_output(result, output)
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Dump the token stream as JSON."""
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        tokens = tokenize(source, filename=args.file)
    except CompileError as e:
        print(e.to_json())
        return 1

    print(json.dumps([t.to_dict() for t in tokens], indent=2))
    return 0


def cmd_ast(args: argparse.Namespace) -> int:
    """Dump the syntax tree as JSON."""
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        program = parse_source(source, filename=args.file)
    except CompileError as e:
        print(e.to_json())
        return 1

    print(program.to_json())
    return 0


def _configure_logging(verbose: bool, config: QuillConfig) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper())
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="quill",
        description="Quill — a tiny call-language compiler",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Path to a .quillrc file (default: search upward)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline stages to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # compile
    p_compile = subparsers.add_parser("compile", help="Compile Quill source")
    p_compile.add_argument("file", help="Quill source file")
    p_compile.add_argument("-o", "--output", default="", help="Output file path (default: stdout)")
    p_compile.add_argument("--target", choices=list(TARGETS), default=None, help="Output language (default: text)")
    p_compile.add_argument("--obj", action="store_true", help="Write a native object file via LLVM instead of text")
    p_compile.set_defaults(func=cmd_compile)

    # tokens
    p_tokens = subparsers.add_parser("tokens", help="Dump the token stream as JSON")
    p_tokens.add_argument("file", help="Quill source file")
    p_tokens.set_defaults(func=cmd_tokens)

    # ast
    p_ast = subparsers.add_parser("ast", help="Dump the syntax tree as JSON")
    p_ast.add_argument("file", help="Quill source file")
    p_ast.set_defaults(func=cmd_ast)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.config_obj = load_config(args.config)
    except (ConfigError, OSError) as e:
        print(json.dumps({"error": f"Invalid config: {e}"}))
        sys.exit(1)

    _configure_logging(args.verbose, args.config_obj)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
