"""Tests for SafeInt checked arithmetic."""

import pytest

from spacelp.constants import UINT256_MAX
from spacelp.safe_int import S, DivisionByZero, SafeInt, Uint256Overflow, Underflow


class TestArithmetic:
    def test_add_mul_floordiv(self):
        assert (S(7) + 3).value == 10
        assert (S(7) * S(3)).value == 21
        assert (S(7) // 2).value == 3

    def test_reflected_ops(self):
        assert (3 + S(7)).value == 10
        assert (3 * S(7)).value == 21

    def test_sub_underflow_raises(self):
        """Subtracting below zero raises instead of wrapping."""
        assert (S(5) - 5).value == 0
        with pytest.raises(Underflow):
            S(5) - 6

    def test_division_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(1) // 0

    def test_division_by_zero_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            S(1) // S(0)


class TestNamedOperations:
    def test_saturating_sub_clamps_at_zero(self):
        assert S(3).saturating_sub(5).value == 0
        assert S(5).saturating_sub(3).value == 2

    def test_min(self):
        assert S(3).min(5).value == 3
        assert S(5).min(S(3)).value == 3

    def test_isqrt_rounds_down(self):
        assert S(50_000).isqrt().value == 223
        assert S(0).isqrt().value == 0

    def test_to_uint256_bounds(self):
        assert S(UINT256_MAX).to_uint256() == UINT256_MAX
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX + 1).to_uint256()
        with pytest.raises(Uint256Overflow):
            S(-1).to_uint256()


class TestConstruction:
    def test_rejects_bool_and_float(self):
        with pytest.raises(TypeError):
            SafeInt(True)
        with pytest.raises(TypeError):
            SafeInt(1.5)

    def test_wraps_safe_int(self):
        assert SafeInt(S(4)) == 4

    def test_comparisons(self):
        assert S(1) < 2
        assert S(2) >= S(2)
        assert not S(0)
