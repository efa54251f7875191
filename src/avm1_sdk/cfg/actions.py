"""
AVM1 Action Definitions
=======================

Structured form of AVM1 actions, as produced by an external bytecode
parser. The translator consumes these; it never sees raw bytes.

Action Encoding Overview:
    Each AVM1 action starts with a one-byte action code. Codes below $80
    have no payload; codes $80 and above are followed by a 16-bit length
    and a payload (a frame number, a label, a list of push values...).

Only the payload-carrying actions the translator understands get their
own class here. Everything else is a bare Action carrying its code, which
is enough for the translator to name it in diagnostics and stop.

Reference:
    SWF File Format Specification, Version 10, Chapter 3 (SWF 3-7 actions)

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Tuple, Union

from avm1_sdk.compiler.values import Value


# =============================================================================
# Action Codes
# =============================================================================

class ActionCode(IntEnum):
    """AVM1 action codes (SWF 3 through SWF 7)."""
    # SWF 3
    NEXT_FRAME = 0x04
    PREV_FRAME = 0x05
    PLAY = 0x06
    STOP = 0x07
    TOGGLE_QUALITY = 0x08
    STOP_SOUNDS = 0x09
    GOTO_FRAME = 0x81
    GET_URL = 0x83
    WAIT_FOR_FRAME = 0x8A
    SET_TARGET = 0x8B
    GOTO_LABEL = 0x8C

    # SWF 4
    ADD = 0x0A
    SUBTRACT = 0x0B
    MULTIPLY = 0x0C
    DIVIDE = 0x0D
    EQUALS = 0x0E
    LESS = 0x0F
    AND = 0x10
    OR = 0x11
    NOT = 0x12
    STRING_EQUALS = 0x13
    STRING_LENGTH = 0x14
    STRING_EXTRACT = 0x15
    POP = 0x17
    TO_INTEGER = 0x18
    GET_VARIABLE = 0x1C
    SET_VARIABLE = 0x1D
    SET_TARGET2 = 0x20
    STRING_ADD = 0x21
    GET_PROPERTY = 0x22
    SET_PROPERTY = 0x23
    CLONE_SPRITE = 0x24
    REMOVE_SPRITE = 0x25
    TRACE = 0x26
    START_DRAG = 0x27
    END_DRAG = 0x28
    STRING_LESS = 0x29
    RANDOM_NUMBER = 0x30
    MB_STRING_LENGTH = 0x31
    CHAR_TO_ASCII = 0x32
    ASCII_TO_CHAR = 0x33
    GET_TIME = 0x34
    MB_STRING_EXTRACT = 0x35
    MB_CHAR_TO_ASCII = 0x36
    MB_ASCII_TO_CHAR = 0x37
    WAIT_FOR_FRAME2 = 0x8D
    PUSH = 0x96
    JUMP = 0x99
    GET_URL2 = 0x9A
    IF = 0x9D
    CALL = 0x9E
    GOTO_FRAME2 = 0x9F

    # SWF 5
    DELETE = 0x3A
    DELETE2 = 0x3B
    DEFINE_LOCAL = 0x3C
    CALL_FUNCTION = 0x3D
    RETURN = 0x3E
    MODULO = 0x3F
    NEW_OBJECT = 0x40
    DEFINE_LOCAL2 = 0x41
    INIT_ARRAY = 0x42
    INIT_OBJECT = 0x43
    TYPE_OF = 0x44
    TARGET_PATH = 0x45
    ENUMERATE = 0x46
    ADD2 = 0x47
    LESS2 = 0x48
    EQUALS2 = 0x49
    TO_NUMBER = 0x4A
    TO_STRING = 0x4B
    PUSH_DUPLICATE = 0x4C
    STACK_SWAP = 0x4D
    GET_MEMBER = 0x4E
    SET_MEMBER = 0x4F
    INCREMENT = 0x50
    DECREMENT = 0x51
    CALL_METHOD = 0x52
    NEW_METHOD = 0x53
    BIT_AND = 0x60
    BIT_OR = 0x61
    BIT_XOR = 0x62
    BIT_L_SHIFT = 0x63
    BIT_R_SHIFT = 0x64
    BIT_UR_SHIFT = 0x65
    STORE_REGISTER = 0x87
    CONSTANT_POOL = 0x88
    WITH = 0x94
    DEFINE_FUNCTION = 0x9B

    # SWF 6
    INSTANCE_OF = 0x54
    ENUMERATE2 = 0x55
    STRICT_EQUALS = 0x66
    GREATER = 0x67
    STRING_GREATER = 0x68

    # SWF 7
    THROW = 0x2A
    CAST_OP = 0x2B
    IMPLEMENTS_OP = 0x2C
    EXTENDS = 0x69
    DEFINE_FUNCTION2 = 0x8E
    TRY = 0x8F

    @property
    def display_name(self) -> str:
        """CamelCase name as used in listings, e.g. "GetVariable"."""
        return self.name.title().replace("_", "")

    @property
    def has_payload(self) -> bool:
        """Codes $80 and above carry a length-prefixed payload."""
        return self.value >= 0x80

    @classmethod
    def from_name(cls, name: str) -> "ActionCode":
        """
        Look up a code by name, ignoring case and underscores.

        Accepts "GetVariable", "get_variable" and "GET_VARIABLE" alike.

        Raises:
            KeyError: If no action has that name
        """
        wanted = name.replace("_", "").lower()
        for code in cls:
            if code.name.replace("_", "").lower() == wanted:
                return code
        raise KeyError(name)


# =============================================================================
# Push Operands
# =============================================================================

@dataclass(frozen=True)
class PushConstant:
    """Push operand referring to a constant pool slot."""
    index: int

    def __str__(self) -> str:
        return f"c{self.index}"


@dataclass(frozen=True)
class PushRegister:
    """Push operand referring to a register."""
    index: int

    def __str__(self) -> str:
        return f"r{self.index}"


# Literal Values map 1:1; constants and registers resolve at translation time
PushValue = Union[Value, PushConstant, PushRegister]


# =============================================================================
# Actions
# =============================================================================

@dataclass(frozen=True)
class Action:
    """
    A single AVM1 action.

    Actions without a payload (Play, Pop, GetVariable, ...) are plain
    Action instances; the subclasses below add their payload fields.
    """
    code: ActionCode

    @property
    def name(self) -> str:
        return self.code.display_name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class GotoFrame(Action):
    code: ActionCode = field(default=ActionCode.GOTO_FRAME, init=False)
    frame: int

    def __str__(self) -> str:
        return f"{self.name} {self.frame}"


@dataclass(frozen=True)
class GotoLabel(Action):
    code: ActionCode = field(default=ActionCode.GOTO_LABEL, init=False)
    label: str

    def __str__(self) -> str:
        return f'{self.name} "{self.label}"'


@dataclass(frozen=True)
class GetUrl(Action):
    code: ActionCode = field(default=ActionCode.GET_URL, init=False)
    url: str
    target: str

    def __str__(self) -> str:
        return f'{self.name} "{self.url}", "{self.target}"'


@dataclass(frozen=True)
class ConstantPool(Action):
    code: ActionCode = field(default=ActionCode.CONSTANT_POOL, init=False)
    pool: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.name} [{len(self.pool)} entries]"


@dataclass(frozen=True)
class Push(Action):
    code: ActionCode = field(default=ActionCode.PUSH, init=False)
    values: Tuple[PushValue, ...] = ()

    def __str__(self) -> str:
        return f"{self.name} " + ", ".join(str(v) for v in self.values)
