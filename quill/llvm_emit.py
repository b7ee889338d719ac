"""Quill LLVM backend.

Program → LLVM IR via llvmlite. The whole program becomes the body of a
single ``i32 main()``; every call statement is evaluated in order.

``println``/``print`` lower to ``printf`` with a ``%s`` per argument. Any
other callee is declared as an external variadic function taking the
``i8*`` string arguments.

Calls to ``main`` or ``printf`` are rejected with a CodegenError, since the
backend defines or declares those symbols itself.
"""

from __future__ import annotations

import logging
from typing import Optional, assert_never

from llvmlite import binding as llvm_binding
from llvmlite import ir as llvm_ir

from quill.ast_nodes import CallExpression, Node, Program, StringLiteral
from quill.errors import CodegenError, reserved_name

logger = logging.getLogger(__name__)

_I8 = llvm_ir.IntType(8)
_I32 = llvm_ir.IntType(32)
_I8_PTR = _I8.as_pointer()

# builtin name -> line terminator appended to the printf format
BUILTINS: dict[str, str] = {
    "println": "\n",
    "print": "",
}

# symbols the backend defines or declares itself
RESERVED = frozenset({"main", "printf"})


class LLVMEmitter:
    """Emits LLVM IR for a Quill Program."""

    def __init__(self, module_name: str = "quill"):
        self.module = llvm_ir.Module(name=module_name)
        self.module.triple = llvm_binding.get_default_triple()
        self._builder: Optional[llvm_ir.IRBuilder] = None
        self._strings: dict[str, llvm_ir.GlobalVariable] = {}

    def emit_module(self, program: Program) -> str:
        """Emit LLVM IR for an entire program. Returns LLVM IR string."""
        fn_type = llvm_ir.FunctionType(_I32, [])
        main = llvm_ir.Function(self.module, fn_type, name="main")
        block = main.append_basic_block(name="entry")
        self._builder = llvm_ir.IRBuilder(block)

        self._emit_node(program)

        self._builder.ret(llvm_ir.Constant(_I32, 0))
        logger.debug("emitted LLVM IR for %d statement(s)", len(program.statements))
        return str(self.module)

    def _emit_node(self, node: Node) -> Optional[llvm_ir.Value]:
        match node:
            case Program(statements=statements):
                for stmt in statements:
                    self._emit_node(stmt)
                return None
            case CallExpression():
                return self._emit_call(node)
            case StringLiteral(value=value):
                return self._string_ptr(value)
            case _:
                assert_never(node)

    def _string_ptr(self, value: str) -> llvm_ir.Constant:
        """Pointer to a private NUL-terminated global, one per distinct value."""
        gv = self._strings.get(value)
        if gv is None:
            data = bytearray((value + "\0").encode("utf-8"))
            str_type = llvm_ir.ArrayType(_I8, len(data))
            gv = llvm_ir.GlobalVariable(self.module, str_type, name=f".str.{len(self._strings)}")
            gv.linkage = "private"
            gv.global_constant = True
            gv.unnamed_addr = True
            gv.initializer = llvm_ir.Constant(str_type, data)
            self._strings[value] = gv
        zero = llvm_ir.Constant(_I32, 0)
        return gv.gep([zero, zero])

    def _declare(self, name: str, fn_type: llvm_ir.FunctionType) -> llvm_ir.Function:
        existing = self.module.globals.get(name)
        if isinstance(existing, llvm_ir.Function):
            return existing
        return llvm_ir.Function(self.module, fn_type, name=name)

    def _emit_call(self, node: CallExpression) -> llvm_ir.Value:
        if node.callee in RESERVED:
            raise CodegenError(reserved_name(node.callee, node.location))
        args = [self._emit_node(a) for a in node.arguments]

        if node.callee in BUILTINS:
            printf = self._declare(
                "printf", llvm_ir.FunctionType(_I32, [_I8_PTR], var_arg=True)
            )
            fmt = " ".join("%s" for _ in args) + BUILTINS[node.callee]
            return self._builder.call(printf, [self._string_ptr(fmt)] + args)

        callee = self._declare(
            node.callee, llvm_ir.FunctionType(_I32, [], var_arg=True)
        )
        return self._builder.call(callee, args)


# ---------------------------------------------------------------------------
# Native code
# ---------------------------------------------------------------------------

def _initialize_llvm() -> None:
    llvm_binding.initialize_native_target()
    llvm_binding.initialize_native_asmprinter()


def _target_machine(opt: int):
    target = llvm_binding.Target.from_default_triple()
    return target.create_target_machine(opt=opt)


def compile_to_object(llvm_ir_str: str, opt: int = 2) -> bytes:
    """Compile LLVM IR string to native object code."""
    _initialize_llvm()
    mod = llvm_binding.parse_assembly(llvm_ir_str)
    mod.verify()
    return _target_machine(opt).emit_object(mod)


def compile_to_assembly(llvm_ir_str: str, opt: int = 2) -> str:
    """Compile LLVM IR string to native assembly."""
    _initialize_llvm()
    mod = llvm_binding.parse_assembly(llvm_ir_str)
    mod.verify()
    return _target_machine(opt).emit_assembly(mod)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def emit(program: Program, module_name: str = "quill") -> str:
    """Emit LLVM IR for a parsed program. Returns LLVM IR string."""
    return LLVMEmitter(module_name).emit_module(program)


def emit_object(program: Program, output_path: str, module_name: str = "quill") -> str:
    """Emit LLVM IR and write a native object file. Returns LLVM IR string."""
    llvm_ir_str = emit(program, module_name)
    with open(output_path, "wb") as f:
        f.write(compile_to_object(llvm_ir_str))
    return llvm_ir_str
