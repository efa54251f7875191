"""
AVM1 SDK - Bytecode-to-IR Translator for AVM1 Scripts
=====================================================

This package translates AVM1 bytecode (the stack-machine bytecode of the
ActionScript 1/2 virtual machine found in SWF files) into a flat,
register-free op sequence suitable for an interpreter or a later
compilation stage.

The translator works at compile time: it symbolically executes a basic
block, tracking what each operand stack slot would hold, and emits one op
per observable side effect (variable access, call, timeline control).
Later ops refer to the results of earlier ones by position.

Main Components
---------------
- **cfg**: Structured input model
    Actions, push operands, basic blocks and control-flow graphs, plus a
    JSON loader for graphs produced by an external parser

- **compiler**: Translator
    Value model, op set, symbolic stack and per-action translation rules

- **cli**: Command-line tools (avm1c)

Quick Start
-----------
Translate a block document:
    >>> from avm1_sdk import Code, load_cfg_file
    >>> code = Code.compile(load_cfg_file("frame1.json"))
    >>> print(code.to_text())
    %0 = getvar "trace"
    %1 = call %0("hello")

Or use the command-line tool:
    $ avm1c frame1.json
    $ avm1c frame1.json --json -o frame1.ops.json

Reference Documentation
-----------------------
- SWF File Format Specification, Version 10 (Chapter 3: Actions)

Version History
---------------
1.0.0 - Initial release with single-block translator and avm1c
"""

__version__ = "1.0.0"
__author__ = "AVM1 SDK Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from avm1_sdk.errors import (
    Avm1Error,
    CfgFormatError,
    CompileError,
    MalformedInputError,
    StackUnderflowError,
    ConstantIndexError,
    RegisterIndexError,
    InvalidPushValueError,
    BackReferenceError,
    TooDynamicError,
)
from avm1_sdk.config import TranslatorConfig

# Compiler module exports
from avm1_sdk.compiler import (
    Value,
    Undefined,
    Null,
    Bool,
    Int32,
    Float32,
    Float64,
    String,
    OpResult,
    Op,
    BailOut,
    Code,
    Translator,
    compile_block,
    compile_cfg,
)

# Input model exports
from avm1_sdk.cfg import (
    ActionCode,
    Action,
    Push,
    PushConstant,
    PushRegister,
    FlowKind,
    CfgFlow,
    CfgBlock,
    Cfg,
    cfg_from_dict,
    cfg_from_json,
    load_cfg_file,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Exception hierarchy
    "Avm1Error",
    "CfgFormatError",
    "CompileError",
    "MalformedInputError",
    "StackUnderflowError",
    "ConstantIndexError",
    "RegisterIndexError",
    "InvalidPushValueError",
    "BackReferenceError",
    "TooDynamicError",
    # Configuration
    "TranslatorConfig",
    # Values and ops
    "Value",
    "Undefined",
    "Null",
    "Bool",
    "Int32",
    "Float32",
    "Float64",
    "String",
    "OpResult",
    "Op",
    "BailOut",
    "Code",
    # Translator
    "Translator",
    "compile_block",
    "compile_cfg",
    # Input model
    "ActionCode",
    "Action",
    "Push",
    "PushConstant",
    "PushRegister",
    "FlowKind",
    "CfgFlow",
    "CfgBlock",
    "Cfg",
    "cfg_from_dict",
    "cfg_from_json",
    "load_cfg_file",
]
