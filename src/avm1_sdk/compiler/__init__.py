"""
AVM1 SDK Compiler Module
========================

This module translates AVM1 basic blocks into flat intermediate op
sequences:
- values: the compile-time value model (literals and op result references)
- ops: the op set and the Code artifact
- stack: the symbolic operand stack, constant pool and register file
- translator: the per-action translation rules

Usage:
    from avm1_sdk.compiler import Code, compile_cfg

    code = compile_cfg(cfg)
    print(code.to_text())

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from .values import (
    Value,
    Undefined,
    Null,
    Bool,
    Int32,
    Float32,
    Float64,
    String,
    OpResult,
    UNDEFINED,
    NULL,
)
from .ops import (
    Op,
    Play,
    Stop,
    GotoFrame,
    GotoLabel,
    GetUrl,
    GetVar,
    SetVar,
    Call,
    CallMethod,
    BailOut,
    Code,
)
from .stack import OperandStack, OpEmitter, MachineState
from .translator import Translator, compile_block, compile_cfg

__all__ = [
    # Values
    "Value",
    "Undefined",
    "Null",
    "Bool",
    "Int32",
    "Float32",
    "Float64",
    "String",
    "OpResult",
    "UNDEFINED",
    "NULL",
    # Ops
    "Op",
    "Play",
    "Stop",
    "GotoFrame",
    "GotoLabel",
    "GetUrl",
    "GetVar",
    "SetVar",
    "Call",
    "CallMethod",
    "BailOut",
    "Code",
    # Simulator and translator
    "OperandStack",
    "OpEmitter",
    "MachineState",
    "Translator",
    "compile_block",
    "compile_cfg",
]
