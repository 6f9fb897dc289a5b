# tests/test_vec.py
"""
VECTOR VALUE TYPE TESTS
=======================

Vec2 / Vec3 / Vec4 share one operator surface. These tests check it at
every dimension and across widths:

1. CONSTRUCTION: dtype inference, named constructors, conversions
2. OPERATORS: elementwise + - * / against vectors and broadcast scalars
3. CONTAINER: fail-fast indexing, exact equality, display
4. PRODUCTS: dot, cross, perp, approx
"""

import dataclasses

import pytest
import numpy as np

from vecmath import (
    CapabilityError,
    Vec2,
    Vec3,
    Vec4,
    cross,
    perp,
    vec2f,
    vec2i,
    vec2u,
    vec3d,
    vec3f,
    vec3i,
    vec4f,
)


class TestConstruction:
    """Dtype inference and the named constructors."""

    def test_explicit_width(self):
        v = Vec3(4, 5, 6, dtype=np.float32)
        assert v.dtype == np.float32
        assert v == vec3f(4.0, 5.0, 6.0)

    def test_inferred_width(self):
        assert Vec3(1, 2, 3).dtype == np.int64
        assert Vec3(1, 2, 3.5).dtype == np.float64
        assert Vec2(np.int8(1), np.int8(2)).dtype == np.int8

    def test_components_are_width_scalars(self):
        v = vec3f(1, 2, 3)
        assert isinstance(v.x, np.float32)
        assert isinstance(v[2], np.float32)

    def test_free_constructor_widths(self):
        assert vec2f(1, 2).dtype == np.float32
        assert vec3d(1, 2, 3).dtype == np.float64
        assert vec3i(1, 2, 3).dtype == np.int32
        assert vec2u(1, 2).dtype == np.uint32

    def test_nested_vector_rejected(self):
        with pytest.raises(TypeError):
            Vec3(vec2f(1, 2), 3, 4)

    def test_fraction_into_integer_rejected(self):
        with pytest.raises(CapabilityError):
            vec3i(1.5, 2, 3)

    def test_named_constructors(self):
        assert Vec3.zero() == vec3f(0, 0, 0)
        assert Vec3.zero().dtype == np.float32
        assert Vec3.one(np.float64) == vec3d(1, 1, 1)
        assert Vec2.minus_one(np.int32) == vec2i(-1, -1)
        assert Vec4.unit_w(np.int8) == Vec4(0, 0, 0, 1, dtype=np.int8)
        assert Vec3.unit_z() == vec3f(0, 0, 1)
        assert Vec2.splat(7, np.uint16) == Vec2(7, 7, dtype=np.uint16)

    def test_minus_one_needs_signed(self):
        with pytest.raises(CapabilityError):
            Vec3.minus_one(np.uint8)

    def test_from_iter(self):
        assert Vec3.from_iter([1, 2, 3], np.float32) == vec3f(1, 2, 3)
        with pytest.raises(ValueError, match="exactly 3"):
            Vec3.from_iter([1, 2])

    def test_dimension_conversions(self):
        v2 = vec2f(1, 2)
        v3 = Vec3.from_vec2(v2)
        assert v3 == vec3f(1, 2, 0)
        v4 = Vec4.from_vec3(v3, 1)
        assert v4 == vec4f(1, 2, 0, 1)
        assert v4.xyz == v3
        assert v4.xy == v2
        assert v3.xy == v2

    def test_astype_truncates_into_integer(self):
        assert vec3f(1.7, -1.7, 2).astype(np.int32) == vec3i(1, -1, 2)

    def test_numpy_interop(self):
        arr = np.asarray(vec3f(1, 2, 3))
        assert arr.dtype == np.float32
        np.testing.assert_array_equal(arr, [1, 2, 3])

    def test_immutable(self):
        v = vec3f(1, 2, 3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            v.x = 5


class TestOperators:
    """Elementwise arithmetic, broadcasting and the mixing rules."""

    def test_vector_arithmetic(self):
        a = vec3f(1, 2, 3)
        b = vec3f(4, 5, 6)
        assert a + b == vec3f(5, 7, 9)
        assert b - a == vec3f(3, 3, 3)
        assert a * b == vec3f(4, 10, 18)
        assert b / a == vec3f(4, 2.5, 2)

    def test_scalar_broadcast_both_sides(self):
        a = vec3f(1, 2, 3)
        assert a * 2.0 == vec3f(2, 4, 6)
        assert 2.0 * a == vec3f(2, 4, 6)
        assert 10 - a == vec3f(9, 8, 7)
        assert 6 / a == vec3f(6, 3, 2)
        assert np.float32(2) * a == vec3f(2, 4, 6)

    def test_numpy_scalar_of_other_width_rejected(self):
        # int64(2**32 + 2) would wrap to 2 if narrowed into int32
        with pytest.raises(TypeError, match="int64"):
            vec3i(1, 1, 1) * np.int64(2**32 + 2)
        with pytest.raises(TypeError, match="float64"):
            np.float64(2) * vec3f(1, 2, 3)
        assert vec3i(1, 1, 1) * 2 == vec3i(2, 2, 2)
        assert vec3i(1, 1, 1) * np.int32(2) == vec3i(2, 2, 2)

    def test_negation(self):
        assert -vec3f(1, -2, 3) == vec3f(-1, 2, -3)
        assert -vec2i(1, -2) == vec2i(-1, 2)

    def test_negation_needs_signed(self):
        with pytest.raises(CapabilityError):
            -vec2u(1, 2)

    def test_compound_assignment_rebinds(self):
        v = vec3f(1, 1, 1)
        original = v
        v += vec3f(1, 2, 3)
        assert v == vec3f(2, 3, 4)
        assert original == vec3f(1, 1, 1)

    def test_mixed_dimension_rejected(self):
        with pytest.raises(TypeError):
            vec2f(1, 2) + vec3f(1, 2, 3)

    def test_mixed_width_rejected(self):
        with pytest.raises(TypeError, match="float64"):
            vec3f(1, 2, 3) + vec3d(1, 2, 3)

    def test_non_numeric_operand_rejected(self):
        with pytest.raises(TypeError):
            vec3f(1, 2, 3) + "a"

    def test_integer_division_truncates(self):
        assert vec3i(-7, 7, 1) / 2 == vec3i(-3, 3, 0)

    def test_integer_division_by_zero_raises(self):
        with pytest.raises(ZeroDivisionError):
            vec3i(1, 2, 3) / vec3i(1, 0, 1)

    def test_float_division_by_zero_is_ieee(self):
        v = vec3f(1, 0, -1) / 0
        assert v.x == np.inf
        assert np.isnan(v.y)
        assert v.z == -np.inf

    def test_integer_overflow_wraps(self):
        assert Vec2(np.int8(127), np.int8(0)) + 1 == Vec2(-128, 1, dtype=np.int8)
        assert vec2u(0, 1) - 1 == Vec2(4294967295, 0, dtype=np.uint32)


class TestContainer:
    """Indexing, equality, hashing and display."""

    def test_indexing(self):
        v = vec4f(1, 2, 3, 4)
        assert [v[i] for i in range(4)] == [1, 2, 3, 4]
        assert len(v) == 4
        assert list(v) == [1, 2, 3, 4]

    @pytest.mark.parametrize("index", [3, 4, -1, 100])
    def test_out_of_range_index_fails_fast(self, index):
        with pytest.raises(IndexError):
            vec3f(1, 2, 3)[index]

    def test_non_integer_index_rejected(self):
        with pytest.raises(TypeError):
            vec3f(1, 2, 3)[1.0]

    def test_equality_is_exact(self):
        assert vec3f(1, 2, 3) == vec3f(1, 2, 3)
        assert vec3f(1, 2, 3) != vec3f(1, 2, 3.0001)
        assert vec2f(1, 2) != vec3f(1, 2, 0)
        assert vec3f(1, 2, 3) != (1, 2, 3)

    def test_hashable(self):
        assert len({vec3f(1, 2, 3), vec3f(1, 2, 3), vec3f(3, 2, 1)}) == 2

    def test_str(self):
        assert str(vec3f(10, 12, 13)) == "[10.0, 12.0, 13.0]"
        assert str(vec3i(1, 2, 3)) == "[1, 2, 3]"

    def test_repr(self):
        assert repr(vec3f(1, 2, 3)) == "Vec3(1.0, 2.0, 3.0, dtype=float32)"


class TestProducts:
    """dot / cross / perp / approx."""

    def test_dot(self):
        d = vec3f(1, 2, 3).dot(vec3f(4, 5, 6))
        assert d == 32
        assert d.dtype == np.float32
        assert vec3f(1, 2, 3).mag2() == 14

    def test_dot_needs_same_width(self):
        with pytest.raises(TypeError):
            vec3f(1, 2, 3).dot(vec3d(4, 5, 6))

    def test_cross(self):
        assert cross(Vec3.unit_x(), Vec3.unit_y()) == Vec3.unit_z()
        assert vec3f(1, 2, 3).cross(vec3f(4, 5, 6)) == vec3f(-3, 6, -3)
        assert cross(vec3i(0, 0, 1), vec3i(1, 0, 0)) == vec3i(0, 1, 0)

    def test_cross_is_3d_only(self):
        with pytest.raises(TypeError):
            cross(vec2f(1, 0), vec2f(0, 1))

    def test_perp(self):
        assert perp(vec2f(1, 2)) == vec2f(-2, 1)
        assert vec2i(3, 4).perp() == vec2i(-4, 3)
        assert vec2f(1, 2).dot(perp(vec2f(1, 2))) == 0

    def test_perp_needs_signed(self):
        with pytest.raises(CapabilityError):
            perp(vec2u(1, 2))

    def test_perp_is_2d_only(self):
        with pytest.raises(TypeError):
            perp(vec3f(1, 2, 3))

    def test_approx_uses_absolute_difference(self):
        """A component far below its counterpart must not count as a match."""
        assert not vec3f(0, 0, 0).approx(vec3f(1, 0, 0), 0.5)
        assert not vec3f(1, 0, 0).approx(vec3f(0, 0, 0), 0.5)
        assert vec3f(1, 2, 3).approx(vec3f(1.0001, 2, 2.9999), 1e-3)

    def test_approx_needs_float(self):
        with pytest.raises(CapabilityError):
            vec3i(1, 2, 3).approx(vec3i(1, 2, 3), 1)
