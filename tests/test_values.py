"""
Unit Tests for the Value Model
==============================

Tests for the compile-time value kinds, the numeric coercion used for
argument counts and the listing format of values.

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

import math

import pytest

from avm1_sdk.compiler.values import (
    NULL,
    UNDEFINED,
    Bool,
    Float32,
    Float64,
    Int32,
    OpResult,
    String,
    to_f32,
)


# =============================================================================
# Integer Coercion Tests
# =============================================================================

class TestAsI32:
    """Tests for Value.as_i32()."""

    def test_int32_passes_through(self):
        assert Int32(5).as_i32() == 5
        assert Int32(-7).as_i32() == -7

    @pytest.mark.parametrize("x, expected", [
        (3.0, 3),
        (-2.0, -2),
        (0.0, 0),
        (-0.0, 0),
        (-2147483648.0, -2147483648),
        (2147483647.0, 2147483647),
    ])
    def test_float64_integral(self, x, expected):
        assert Float64(x).as_i32() == expected

    @pytest.mark.parametrize("x", [
        3.5,
        -0.25,
        2147483648.0,
        -2147483649.0,
        1e20,
        math.inf,
        -math.inf,
        math.nan,
    ])
    def test_float64_not_coercible(self, x):
        assert Float64(x).as_i32() is None

    def test_float32_integral(self):
        assert Float32(2.0).as_i32() == 2
        assert Float32(to_f32(0.5)).as_i32() is None

    def test_float32_saturates_at_two_to_the_31(self):
        """2**31 saturates to INT32_MAX, which rounds back to 2**31 in f32."""
        assert Float32(2147483648.0).as_i32() == 2147483647
        assert Float64(2147483648.0).as_i32() is None

    def test_float32_above_range(self):
        assert Float32(4294967296.0).as_i32() is None

    def test_non_numeric_kinds(self):
        assert UNDEFINED.as_i32() is None
        assert NULL.as_i32() is None
        assert Bool(True).as_i32() is None
        assert String("2").as_i32() is None
        assert OpResult(0).as_i32() is None


# =============================================================================
# String Extraction Tests
# =============================================================================

class TestAsStr:
    """Tests for Value.as_str()."""

    def test_string(self):
        assert String("name").as_str() == "name"
        assert String("").as_str() == ""

    def test_other_kinds(self):
        assert UNDEFINED.as_str() is None
        assert Int32(1).as_str() is None
        assert OpResult(0).as_str() is None


# =============================================================================
# Identity and Formatting Tests
# =============================================================================

class TestValueIdentity:
    """Tests for equality and immutability."""

    def test_equal_by_kind_and_payload(self):
        assert Int32(1) == Int32(1)
        assert OpResult(2) == OpResult(2)
        assert UNDEFINED == type(UNDEFINED)()

    def test_kinds_are_distinct(self):
        assert Float32(1.0) != Float64(1.0)
        assert Bool(True) != Int32(1)
        assert UNDEFINED != NULL

    def test_frozen(self):
        value = Int32(1)
        with pytest.raises(AttributeError):
            value.value = 2


class TestValueFormatting:
    """Tests for the listing form and JSON form of values."""

    def test_str(self):
        assert str(UNDEFINED) == "undefined"
        assert str(NULL) == "null"
        assert str(Bool(False)) == "false"
        assert str(Int32(-3)) == "-3"
        assert str(Float64(1.5)) == "1.5"
        assert str(OpResult(4)) == "%4"

    def test_string_is_quoted_and_escaped(self):
        assert str(String("hi")) == '"hi"'
        assert str(String('a"b')) == '"a\\"b"'

    def test_to_dict(self):
        assert String("x").to_dict() == {"type": "String", "value": "x"}
        assert OpResult(1).to_dict() == {"type": "OpResult", "index": 1}
        assert UNDEFINED.to_dict() == {"type": "Undefined"}
