"""
Symbolic Machine State
======================

Compile-time model of the parts of the AVM1 machine the translator needs:

- OperandStack: the value stack, holding Values instead of runtime data
- MachineState: the stack plus the constant pool and the register file
- OpEmitter: the append-only op list, which hands out OpResult references

None of this exists at runtime. A fresh MachineState is created for each
block and thrown away when translation ends.

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

from avm1_sdk.errors import (
    BackReferenceError,
    ConstantIndexError,
    RegisterIndexError,
    StackUnderflowError,
)
from avm1_sdk.compiler.ops import Op, references
from avm1_sdk.compiler.values import OpResult, String, Value

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Operand Stack
# =============================================================================

class OperandStack:
    """
    The symbolic operand stack.

    The last value pushed is the first popped. Underflow raises
    StackUnderflowError; the translator attaches the offending action.
    """

    def __init__(self) -> None:
        self._values: List[Value] = []

    def __len__(self) -> int:
        return len(self._values)

    def push(self, value: Value) -> None:
        self._values.append(value)

    def extend(self, values) -> None:
        """Push several values; the first one ends up deepest."""
        self._values.extend(values)

    def pop(self) -> Value:
        """Pop the top value."""
        if not self._values:
            raise StackUnderflowError()
        return self._values.pop()

    def pop_many(self, count: int) -> Tuple[Value, ...]:
        """
        Pop `count` values, in pop order (top of stack first).

        A negative count pops nothing.
        """
        return tuple(self.pop() for _ in range(count))

    def discard(self) -> Optional[Value]:
        """Drop the top value if there is one; an empty stack is left alone."""
        if not self._values:
            logger.debug("discard on empty stack ignored")
            return None
        return self._values.pop()

    def snapshot(self) -> Tuple[Value, ...]:
        """Current contents, deepest first."""
        return tuple(self._values)


# =============================================================================
# Op Emitter
# =============================================================================

class OpEmitter:
    """
    Append-only op list.

    Every emitted op may only reference ops that precede it, so the op
    list stays free of forward references by construction.
    """

    def __init__(self) -> None:
        self._ops: List[Op] = []

    def __len__(self) -> int:
        return len(self._ops)

    def emit(self, op: Op) -> OpResult:
        """Append an op and return a reference to its result."""
        emitted = len(self._ops)
        for index in references(op):
            if not 0 <= index < emitted:
                raise BackReferenceError(index, emitted)
        self._ops.append(op)
        logger.debug(f"%{emitted} = {op}")
        return OpResult(emitted)

    def ops(self) -> Tuple[Op, ...]:
        return tuple(self._ops)


# =============================================================================
# Machine State
# =============================================================================

@dataclass
class MachineState:
    """
    Everything the translator tracks while walking one block.

    Attributes:
        stack: The symbolic operand stack
        constants: The constant pool (replaced wholesale by ConstantPool)
        registers: The register file (never written, so always empty)
        emitter: Ops emitted so far
        action_index: Position of the action being translated, if any
        action_name: Its name, if any
    """
    stack: OperandStack = field(default_factory=OperandStack)
    constants: Tuple[str, ...] = ()
    registers: List[Value] = field(default_factory=list)
    emitter: OpEmitter = field(default_factory=OpEmitter)
    action_index: Optional[int] = None
    action_name: Optional[str] = None

    def constant(self, index: int) -> String:
        """Resolve a constant pool reference to a String value."""
        if not 0 <= index < len(self.constants):
            raise ConstantIndexError(
                index, len(self.constants),
                self.action_index, self.action_name,
            )
        return String(self.constants[index])

    def register(self, index: int) -> Value:
        """Read the current value of a register."""
        if not 0 <= index < len(self.registers):
            raise RegisterIndexError(
                index, len(self.registers),
                self.action_index, self.action_name,
            )
        return self.registers[index]
