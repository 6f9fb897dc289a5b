# tests/test_mat.py
"""
MATRIX TESTS
============

Checks the minimal matrix contract used by the OBB query:

1. CONSTRUCTION: shape and dtype rules, translation / scale / rotation
2. ACCESS: element, row, column, translation
3. ALGEBRA: determinant, transpose, inverse, composition order
4. TRANSFORM RULES: linear vs affine point transforms per shape
"""

import dataclasses

import pytest
import numpy as np

from vecmath import (
    CapabilityError,
    Mat2,
    Mat3,
    Mat34,
    Mat4,
    vec2d,
    vec2f,
    vec3d,
    vec3f,
    vec4d,
    vec4f,
)


def assert_vec_close(actual, expected, atol=1e-9):
    np.testing.assert_allclose(np.asarray(actual), np.asarray(expected), atol=atol)


class TestConstruction:

    def test_identity(self):
        assert Mat3.identity() * vec3f(1, 2, 3) == vec3f(1, 2, 3)
        assert Mat4.identity().dtype == np.float32
        np.testing.assert_array_equal(np.asarray(Mat34.identity()), np.eye(3, 4))

    def test_zero(self):
        assert not np.any(np.asarray(Mat2.zero()))

    def test_integer_rows_become_float64(self):
        m = Mat2([[1, 2], [3, 4]])
        assert m.dtype == np.float64

    def test_integer_dtype_rejected(self):
        with pytest.raises(CapabilityError):
            Mat2([[1, 2], [3, 4]], dtype=np.int32)

    def test_wrong_shape_rejected(self):
        with pytest.raises(ValueError, match="shape"):
            Mat3([[1, 2], [3, 4]])

    def test_from_rows(self):
        m = Mat2.from_rows(vec2d(1, 2), vec2d(3, 4))
        assert m == Mat2([[1, 2], [3, 4]])

    def test_translation_needs_matching_vector(self):
        with pytest.raises(TypeError):
            Mat4.from_translation(vec2f(1, 2))
        with pytest.raises(TypeError):
            Mat2.from_translation(vec2f(1, 2))

    def test_3d_rotations_need_3d_matrix(self):
        with pytest.raises(TypeError):
            Mat2.from_x_rotation(1.0)

    def test_immutable(self):
        m = Mat2.identity()
        with pytest.raises(ValueError):
            m.m[0, 0] = 5.0
        with pytest.raises(dataclasses.FrozenInstanceError):
            m.m = None
        # to_array hands out a private, writable copy
        arr = m.to_array()
        arr[0, 0] = 5.0
        assert m[0, 0] == 1.0


class TestAccess:

    def test_element_row_col(self):
        m = Mat2([[1, 2], [3, 4]])
        assert m[0, 1] == 2
        assert m.row(1) == vec2d(3, 4)
        assert m.col(0) == vec2d(1, 3)

    def test_out_of_range(self):
        m = Mat2([[1, 2], [3, 4]])
        with pytest.raises(IndexError):
            m[2, 0]
        with pytest.raises(IndexError):
            m.row(-1)

    def test_affine_3x4_rows_and_columns(self):
        m = Mat34.from_translation(vec3f(1, 2, 3))
        assert m.row(0) == vec4f(1, 0, 0, 1)
        assert m.col(3) == vec3f(1, 2, 3)

    def test_get_translation(self):
        assert Mat4.from_translation(vec3f(1, 2, 3)).get_translation() == vec3f(1, 2, 3)
        assert Mat3.from_translation(vec2f(4, 5)).get_translation() == vec2f(4, 5)
        with pytest.raises(TypeError):
            Mat2.identity().get_translation()

    def test_str_and_repr(self):
        m = Mat2([[1, 2], [3, 4]])
        assert str(m) == "[[1.0, 2.0], [3.0, 4.0]]"
        assert repr(m) == "Mat2([[1.0, 2.0], [3.0, 4.0]], dtype=float64)"

    def test_equality_and_hash(self):
        a = Mat2([[1, 2], [3, 4]])
        b = Mat2([[1, 2], [3, 4]])
        assert a == b
        assert a != a.transpose()
        assert len({a, b}) == 1


class TestAlgebra:

    def test_determinant(self):
        assert Mat2([[1, 2], [3, 4]]).determinant() == -2
        assert Mat3([[2, 0, 0], [0, 3, 0], [0, 0, 4]]).determinant() == 24
        assert Mat34.from_scale(vec3d(2, 3, 4)).determinant() == 24

    def test_transpose(self):
        assert Mat2([[1, 2], [3, 4]]).transpose() == Mat2([[1, 3], [2, 4]])
        with pytest.raises(TypeError):
            Mat34.identity().transpose()

    def test_inverse_2x2(self):
        m = Mat2([[4, 7], [2, 6]])
        inv = m.inverse()
        np.testing.assert_allclose(np.asarray(inv), [[0.6, -0.7], [-0.2, 0.4]])
        assert (m * inv).approx(Mat2.identity(np.float64), 1e-12)

    @pytest.mark.parametrize("cls", [Mat3, Mat34, Mat4])
    def test_inverse_round_trip(self, cls):
        m = (
            cls.from_translation(vec3d(1, -2, 3) if cls.affine_dim == 3 else vec2d(1, -2))
            * cls.from_z_rotation(0.3, np.float64)
            * cls.from_scale(vec3d(2, 3, 4) if cls.affine_dim == 3 else vec2d(2, 3))
        )
        assert (m * m.inverse()).approx(cls.identity(np.float64), 1e-12)
        assert (m.inverse() * m).approx(cls.identity(np.float64), 1e-12)

    def test_singular_inverse_is_not_finite(self):
        inv = Mat2.zero(np.float64).inverse()
        assert not np.all(np.isfinite(np.asarray(inv)))

    def test_composition_applies_right_operand_first(self):
        t = Mat3.from_translation(vec2d(1, 0))
        r = Mat3.from_z_rotation(np.pi / 2, np.float64)
        # rotate (1, 0) to (0, 1), then move by (1, 0)
        assert_vec_close((t * r) * vec2d(1, 0), [1, 1])
        # move to (2, 0), then rotate to (0, 2)
        assert_vec_close((r * t) * vec2d(1, 0), [0, 2])

    def test_matmul_operator(self):
        t = Mat4.from_translation(vec3f(1, 2, 3))
        s = Mat4.from_scale(vec3f(2, 2, 2))
        assert t @ s == t * s
        assert t @ vec3f(0, 0, 0) == vec3f(1, 2, 3)

    def test_mixed_shapes_rejected(self):
        with pytest.raises(TypeError):
            Mat3.identity() * Mat4.identity()
        with pytest.raises(TypeError):
            Mat3.identity() * Mat3.identity(np.float64)


class TestTransformRules:

    def test_mat2_linear(self):
        assert_vec_close(Mat2.from_z_rotation(np.pi / 2, np.float64) * vec2d(1, 0), [0, 1])

    def test_mat3_affine_2d_point(self):
        t = Mat3.from_translation(vec2f(1, 2))
        assert t * vec2f(3, 4) == vec2f(4, 6)

    def test_mat3_linear_3d(self):
        t = Mat3.from_translation(vec2f(1, 2))
        assert t * vec3f(3, 4, 1) == vec3f(4, 6, 1)
        assert t * vec3f(3, 4, 0) == vec3f(3, 4, 0)

    def test_mat3_rotations(self):
        assert_vec_close(Mat3.from_x_rotation(np.pi / 2, np.float64) * vec3d(0, 1, 0), [0, 0, 1])
        assert_vec_close(Mat3.from_y_rotation(np.pi / 2, np.float64) * vec3d(0, 0, 1), [1, 0, 0])
        assert_vec_close(Mat3.from_z_rotation(np.pi / 2, np.float64) * vec3d(1, 0, 0), [0, 1, 0])

    def test_mat34_point_and_direction(self):
        m = Mat34.from_translation(vec3f(1, 2, 3))
        assert m * vec3f(1, 1, 1) == vec3f(2, 3, 4)
        assert m * vec4f(1, 1, 1, 1) == vec3f(2, 3, 4)
        assert m * vec4f(1, 1, 1, 0) == vec3f(1, 1, 1)

    def test_mat4_point_and_direction(self):
        m = Mat4.from_translation(vec3f(1, 2, 3))
        assert m * vec3f(0, 0, 0) == vec3f(1, 2, 3)
        assert m * vec4f(1, 0, 0, 0) == vec4f(1, 0, 0, 0)

    def test_mat4_point_divides_by_w(self):
        m = Mat4([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 2]])
        assert m * vec3d(2, 4, 6) == vec3d(1, 2, 3)
        assert m * vec4d(2, 4, 6, 1) == vec4d(2, 4, 6, 2)

    def test_unsupported_dimension_rejected(self):
        with pytest.raises(TypeError):
            Mat2.identity() * vec3f(1, 2, 3)

    def test_width_mismatch_rejected(self):
        with pytest.raises(TypeError, match="float64"):
            Mat3.identity(np.float64) * vec3f(1, 2, 3)
