"""
Compile-Time Value Model
========================

The translator never runs AVM1 code, so it only needs to know what kind of
value sits in each operand stack slot. This module defines that closed set
of kinds:

    Undefined, Null, Bool, Int32, Float32, Float64, String, OpResult

The first seven are literals that came straight from a Push action (or a
constant pool lookup). OpResult is the back-reference: "whatever the op at
position N produces when the downstream runtime executes it".

Numeric Coercion
----------------
as_i32() mirrors the AVM1 argument-count check: integers pass through, and
floats qualify only if a saturating cast to a 32-bit integer and back
yields the same number. Float32 values make the return trip through single
precision, so 2147483648.0 (2**31) coerces to 2147483647 there while the
same Float64 does not.

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from dataclasses import dataclass
from typing import Optional
import math
import struct


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def to_f32(x: float) -> float:
    """Round a Python float to the nearest single-precision value."""
    return struct.unpack("<f", struct.pack("<f", x))[0]


def _saturating_i32(x: float) -> int:
    """Truncate toward zero and clamp to the int32 range (NaN becomes 0)."""
    if math.isnan(x):
        return 0
    if x >= INT32_MAX:
        return INT32_MAX
    if x <= INT32_MIN:
        return INT32_MIN
    return int(x)


# =============================================================================
# Value Kinds
# =============================================================================

@dataclass(frozen=True)
class Value:
    """Base class for all compile-time values."""

    def as_i32(self) -> Optional[int]:
        """Return the value as a 32-bit integer, or None if it does not coerce."""
        return None

    def as_str(self) -> Optional[str]:
        """Return the inner string for String values, None otherwise."""
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"type": type(self).__name__}


@dataclass(frozen=True)
class Undefined(Value):
    """The AVM1 undefined value; also marks "no method name" in CallMethod."""

    def __str__(self) -> str:
        return "undefined"


@dataclass(frozen=True)
class Null(Value):
    def __str__(self) -> str:
        return "null"


@dataclass(frozen=True)
class Bool(Value):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def to_dict(self) -> dict:
        return {"type": "Bool", "value": self.value}


@dataclass(frozen=True)
class Int32(Value):
    value: int

    def as_i32(self) -> Optional[int]:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def to_dict(self) -> dict:
        return {"type": "Int32", "value": self.value}


@dataclass(frozen=True)
class Float32(Value):
    value: float

    def as_i32(self) -> Optional[int]:
        truncated = _saturating_i32(self.value)
        if self.value == to_f32(float(truncated)):
            return truncated
        return None

    def __str__(self) -> str:
        return f"{self.value!r}f"

    def to_dict(self) -> dict:
        return {"type": "Float32", "value": self.value}


@dataclass(frozen=True)
class Float64(Value):
    value: float

    def as_i32(self) -> Optional[int]:
        truncated = _saturating_i32(self.value)
        if self.value == float(truncated):
            return truncated
        return None

    def __str__(self) -> str:
        return repr(self.value)

    def to_dict(self) -> dict:
        return {"type": "Float64", "value": self.value}


@dataclass(frozen=True)
class String(Value):
    value: str

    def as_str(self) -> Optional[str]:
        return self.value

    def __str__(self) -> str:
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    def to_dict(self) -> dict:
        return {"type": "String", "value": self.value}


@dataclass(frozen=True)
class OpResult(Value):
    """
    The runtime result of the op at position `index` in the emitted Code.

    OpResult values are only created by the op emitter, which guarantees
    the index refers to an op that already exists.
    """
    index: int

    def __str__(self) -> str:
        return f"%{self.index}"

    def to_dict(self) -> dict:
        return {"type": "OpResult", "index": self.index}


# Shared instances for the payload-free kinds
UNDEFINED = Undefined()
NULL = Null()
