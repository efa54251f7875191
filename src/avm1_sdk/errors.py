"""
AVM1 SDK Error Hierarchy
========================

This module defines the exception hierarchy for the entire AVM1 SDK.
All exceptions inherit from Avm1Error, allowing callers to catch all
SDK-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
Avm1Error (base)
├── CfgFormatError - a structured block document cannot be read
└── CompileError (translator-related)
    ├── MalformedInputError - input shape the translator cannot accept
    │   ├── StackUnderflowError - pop from an empty symbolic stack
    │   ├── ConstantIndexError - constant pool index out of range
    │   ├── RegisterIndexError - register index out of range
    │   └── InvalidPushValueError - push operand is not a literal or reference
    ├── BackReferenceError - op result referenced before it was emitted
    └── TooDynamicError - operand not statically resolvable (strict mode only)

Design Philosophy
-----------------
"Too dynamic" operands are expected in real bytecode and normally end
translation quietly, returning the ops produced so far. Only when the
translator is configured as strict do they surface as TooDynamicError.

Malformed input, on the other hand, is always raised. Each of these
errors records the index of the offending action within the block so
that messages point at the exact instruction:

    action #4 (GetVariable): error: pop from empty stack
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Avm1Error(Exception):
    """
    Base exception for all AVM1 SDK errors.

        try:
            code = Code.compile(cfg)
        except Avm1Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Input Document Exceptions
# =============================================================================

class CfgFormatError(Avm1Error):
    """
    A structured control-flow document is invalid.

    Raised by the loader when a JSON block document is missing required
    keys, names an unknown action or flow kind, or carries operands of
    the wrong type.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        if path:
            super().__init__(f"{path}: {message}")
        else:
            super().__init__(message)


# =============================================================================
# Translator Exceptions
# =============================================================================

class CompileError(Avm1Error):
    """
    Base exception for all translator errors.

    Attributes:
        message: The error description
        action_index: Position of the offending action in the block (optional)
        action_name: Name of the offending action (optional)
    """

    def __init__(
        self,
        message: str,
        action_index: Optional[int] = None,
        action_name: Optional[str] = None,
    ):
        self.message = message
        self.action_index = action_index
        self.action_name = action_name
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.action_index is None:
            return f"error: {self.message}"
        if self.action_name:
            return f"action #{self.action_index} ({self.action_name}): error: {self.message}"
        return f"action #{self.action_index}: error: {self.message}"


class MalformedInputError(CompileError):
    """
    The block cannot be translated because its shape is invalid.

    These are defects in the input (or in the parser that produced it),
    not operands that are merely too dynamic to resolve.
    """
    pass


class StackUnderflowError(MalformedInputError):
    """An action popped more values than the symbolic stack holds."""

    def __init__(
        self,
        action_index: Optional[int] = None,
        action_name: Optional[str] = None,
    ):
        super().__init__("pop from empty stack", action_index, action_name)


class ConstantIndexError(MalformedInputError):
    """A push referenced a constant pool slot that does not exist."""

    def __init__(
        self,
        index: int,
        pool_size: int,
        action_index: Optional[int] = None,
        action_name: Optional[str] = None,
    ):
        self.index = index
        self.pool_size = pool_size
        super().__init__(
            f"constant pool index {index} out of range (pool has {pool_size} entries)",
            action_index,
            action_name,
        )


class RegisterIndexError(MalformedInputError):
    """
    A push read a register that holds no value.

    Register writes are never translated, so the register file of a block
    is always empty and every register read ends up here.
    """

    def __init__(
        self,
        index: int,
        register_count: int,
        action_index: Optional[int] = None,
        action_name: Optional[str] = None,
    ):
        self.index = index
        self.register_count = register_count
        super().__init__(
            f"register {index} read but only {register_count} registers are defined",
            action_index,
            action_name,
        )


class InvalidPushValueError(MalformedInputError):
    """A push carried something other than a literal, constant or register."""
    pass


class BackReferenceError(CompileError):
    """An op result was referenced before the op producing it existed."""

    def __init__(self, index: int, emitted: int):
        self.index = index
        self.emitted = emitted
        super().__init__(
            f"reference to op %{index} but only {emitted} ops have been emitted"
        )


class TooDynamicError(CompileError):
    """
    An operand could not be resolved statically.

    Only raised when the translator runs in strict mode; otherwise the
    same condition truncates translation and is reported through
    Code.bailout.
    """
    pass
