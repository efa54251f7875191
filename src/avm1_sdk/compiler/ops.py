"""
Intermediate Operations
=======================

The translator's output is a flat list of ops, one per observable side
effect. There are no registers and no temporaries: an op's position in the
list is its identity, and later ops refer to its result with an OpResult
value carrying that position.

Op Set
------
    Play, Stop                      timeline control
    GotoFrame(frame)                jump the timeline to a frame number
    GotoLabel(label)                jump the timeline to a frame label
    GetUrl(url, target)             load a URL into a window/level
    GetVar(name)                    read a variable
    SetVar(name, value)             write a variable
    Call(callee, args)              call a function value
    CallMethod(receiver, name, args) call a named method on an object

Listing Format
--------------
Code.to_text() prints one op per line, prefixed with its index so the
OpResult references can be followed by eye:

    %0 = getvar "f"
    %1 = call %0(2, 1)

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from dataclasses import dataclass
from typing import Callable, ClassVar, Iterator, Optional, Tuple

from avm1_sdk.compiler.values import OpResult, Value


# =============================================================================
# Op Definitions
# =============================================================================

@dataclass(frozen=True)
class Op:
    """Base class for intermediate operations."""
    mnemonic: ClassVar[str] = "op"

    def operands(self) -> Tuple[Value, ...]:
        """Values this op consumes (used to validate back-references)."""
        return ()

    def __str__(self) -> str:
        return self.mnemonic

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"op": type(self).__name__}


@dataclass(frozen=True)
class Play(Op):
    mnemonic: ClassVar[str] = "play"


@dataclass(frozen=True)
class Stop(Op):
    mnemonic: ClassVar[str] = "stop"


@dataclass(frozen=True)
class GotoFrame(Op):
    mnemonic: ClassVar[str] = "gotoframe"
    frame: int

    def __str__(self) -> str:
        return f"{self.mnemonic} {self.frame}"

    def to_dict(self) -> dict:
        return {"op": "GotoFrame", "frame": self.frame}


@dataclass(frozen=True)
class GotoLabel(Op):
    mnemonic: ClassVar[str] = "gotolabel"
    label: str

    def __str__(self) -> str:
        return f'{self.mnemonic} "{self.label}"'

    def to_dict(self) -> dict:
        return {"op": "GotoLabel", "label": self.label}


@dataclass(frozen=True)
class GetUrl(Op):
    mnemonic: ClassVar[str] = "geturl"
    url: str
    target: str

    def __str__(self) -> str:
        return f'{self.mnemonic} "{self.url}", "{self.target}"'

    def to_dict(self) -> dict:
        return {"op": "GetUrl", "url": self.url, "target": self.target}


@dataclass(frozen=True)
class GetVar(Op):
    mnemonic: ClassVar[str] = "getvar"
    name: str

    def __str__(self) -> str:
        return f'{self.mnemonic} "{self.name}"'

    def to_dict(self) -> dict:
        return {"op": "GetVar", "name": self.name}


@dataclass(frozen=True)
class SetVar(Op):
    mnemonic: ClassVar[str] = "setvar"
    name: str
    value: Value

    def operands(self) -> Tuple[Value, ...]:
        return (self.value,)

    def __str__(self) -> str:
        return f'{self.mnemonic} "{self.name}", {self.value}'

    def to_dict(self) -> dict:
        return {"op": "SetVar", "name": self.name, "value": self.value.to_dict()}


@dataclass(frozen=True)
class Call(Op):
    mnemonic: ClassVar[str] = "call"
    callee: Value
    args: Tuple[Value, ...] = ()

    def operands(self) -> Tuple[Value, ...]:
        return (self.callee,) + self.args

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.args)
        return f"{self.mnemonic} {self.callee}({args})"

    def to_dict(self) -> dict:
        return {
            "op": "Call",
            "callee": self.callee.to_dict(),
            "args": [a.to_dict() for a in self.args],
        }


@dataclass(frozen=True)
class CallMethod(Op):
    mnemonic: ClassVar[str] = "callmethod"
    receiver: Value
    method: str
    args: Tuple[Value, ...] = ()

    def operands(self) -> Tuple[Value, ...]:
        return (self.receiver,) + self.args

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.args)
        return f'{self.mnemonic} {self.receiver}."{self.method}"({args})'

    def to_dict(self) -> dict:
        return {
            "op": "CallMethod",
            "receiver": self.receiver.to_dict(),
            "method": self.method,
            "args": [a.to_dict() for a in self.args],
        }


# =============================================================================
# Compiled Code
# =============================================================================

@dataclass(frozen=True)
class BailOut:
    """
    Why translation stopped before the end of the block.

    Attributes:
        action_index: Position of the action that could not be translated
        action_name: Its name (e.g. "GetVariable")
        reason: Human-readable description
    """
    action_index: int
    action_name: str
    reason: str

    def __str__(self) -> str:
        return f"action #{self.action_index} ({self.action_name}): {self.reason}"

    def to_dict(self) -> dict:
        return {
            "action_index": self.action_index,
            "action": self.action_name,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Code:
    """
    A translated block: the ordered op sequence plus translation notes.

    Attributes:
        ops: The emitted ops, in execution order
        bailout: Set when translation stopped early, None if the whole
            block was translated
    """
    ops: Tuple[Op, ...] = ()
    bailout: Optional[BailOut] = None

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[Op]:
        return iter(self.ops)

    def __getitem__(self, index: int) -> Op:
        return self.ops[index]

    @property
    def complete(self) -> bool:
        """True if every action of the block was translated."""
        return self.bailout is None

    @classmethod
    def compile(cls, cfg, config=None) -> "Code":
        """Translate the head block of a control-flow graph."""
        from avm1_sdk.compiler.translator import compile_cfg
        return compile_cfg(cfg, config)

    @classmethod
    def parse_and_compile(cls, data: bytes, parse_cfg: Callable, config=None) -> "Code":
        """
        Parse raw action bytes with an external parser, then translate.

        Args:
            data: Raw AVM1 action bytes
            parse_cfg: Callable turning bytes into a Cfg
            config: Optional TranslatorConfig

        Returns:
            The translated Code
        """
        return cls.compile(parse_cfg(data), config)

    def to_text(self) -> str:
        """Render the op listing, one op per line."""
        lines = [f"%{i} = {op}" for i, op in enumerate(self.ops)]
        if self.bailout is not None:
            lines.append(f"; stopped at {self.bailout}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "ops": [op.to_dict() for op in self.ops],
            "bailout": self.bailout.to_dict() if self.bailout else None,
        }


def references(op: Op) -> Iterator[int]:
    """Yield the op indices an op refers to through OpResult operands."""
    for value in op.operands():
        if isinstance(value, OpResult):
            yield value.index
