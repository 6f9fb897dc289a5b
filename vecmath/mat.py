# vecmath/mat.py
"""
MAT: Matrices for Linear and Affine Transforms
==============================================

PURPOSE:
--------
Just enough matrix to place, rotate and scale shapes and to go back again:

    Mat2   2x2   linear 2D
    Mat3   3x3   linear 3D, or affine 2D (translation in the last column)
    Mat34  3x4   affine 3D (implicit bottom row [0, 0, 0, 1])
    Mat4   4x4   affine / projective 3D

All matrices are row-major, column-vector convention (M * v), float32 or
float64, and immutable.

POINT TRANSFORM RULES:
----------------------
    Mat2  * Vec2  -> Vec2   linear
    Mat3  * Vec3  -> Vec3   linear
    Mat3  * Vec2  -> Vec2   affine point (w = 1, divided by the resulting w)
    Mat34 * Vec3  -> Vec3   affine point
    Mat34 * Vec4  -> Vec3   linear on the 3x4 block
    Mat4  * Vec4  -> Vec4   linear
    Mat4  * Vec3  -> Vec3   affine point (w = 1, divided by the resulting w)

SINGULAR MATRICES:
------------------
inverse() divides the adjugate by the determinant. A singular matrix has a
zero determinant, so the result is full of inf/nan and no exception is
raised.
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Tuple

import numpy as np

from .kernel.num import Tier, ieee, traits
from .vec import Vec, vec_type

LOGGER = logging.getLogger(__name__)


def _minor(m: np.ndarray, row: int, col: int) -> np.ndarray:
    return np.delete(np.delete(m, row, axis=0), col, axis=1)


def _det(m: np.ndarray) -> float:
    """Determinant by cofactor expansion along the first row (n <= 4)."""
    n = m.shape[0]
    if n == 1:
        return m[0, 0]
    if n == 2:
        return m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]
    return sum((-1) ** c * m[0, c] * _det(_minor(m, 0, c)) for c in range(n))


def _inverse(m: np.ndarray) -> Tuple[np.ndarray, float]:
    """
    Inverse as adjugate / determinant.

    Returns:
    --------
    inv : np.ndarray
        The inverse; inf/nan entries when m is singular
    det : float
        The determinant of m
    """
    n = m.shape[0]
    cof = np.empty_like(m)
    for r in range(n):
        for c in range(n):
            cof[r, c] = (-1) ** (r + c) * _det(_minor(m, r, c))
    det = np.dot(m[0], cof[0])
    with ieee():
        return cof.T / det, det


def _rotation(axis: str, theta: float) -> np.ndarray:
    c = np.cos(theta)
    s = np.sin(theta)
    if axis == "x":
        return np.array([[1, 0, 0], [0, c, -s], [0, s, c]], dtype=float)
    if axis == "y":
        return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]], dtype=float)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]], dtype=float)


def _check_index(i: int, n: int, what: str) -> None:
    if not 0 <= i < n:
        raise IndexError(f"{what} index {i} out of range [0, {n})")


@dataclass(frozen=True, eq=False, repr=False)
class Mat:
    """
    Generic fixed-shape matrix; see Mat2, Mat3, Mat34, Mat4.

    Parameters:
    -----------
    m : array-like
        Rows of the matrix, shape must equal the class `shape`
    dtype : float32 or float64, optional
        Inferred from `m` when omitted (integer input becomes float64)
    """
    m: Any
    dtype: Any = None

    shape: ClassVar[Tuple[int, int]] = (0, 0)
    # dimension of the translation column, 0 for purely linear matrices
    affine_dim: ClassVar[int] = 0

    __array_ufunc__ = None

    def __post_init__(self):
        source = self.m.m if isinstance(self.m, Mat) else self.m
        arr = np.array(source, dtype=self.dtype)
        if self.dtype is None and arr.dtype.kind in "iu":
            arr = arr.astype(np.float64)
        t = traits(arr.dtype).require(Tier.FLOAT, type(self).__name__)
        if arr.shape != self.shape:
            raise ValueError(f"{type(self).__name__} requires shape {self.shape}, got {arr.shape}")
        arr.flags.writeable = False
        object.__setattr__(self, "m", arr)
        object.__setattr__(self, "dtype", t.dtype)

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls, dtype=np.float32):
        return cls(np.eye(*cls.shape), dtype=dtype)

    @classmethod
    def zero(cls, dtype=np.float32):
        return cls(np.zeros(cls.shape), dtype=dtype)

    @classmethod
    def from_rows(cls, *rows: Vec):
        return cls([r.to_array() for r in rows], dtype=rows[0].dtype)

    @classmethod
    def _embed(cls, block: np.ndarray, dtype):
        m = np.eye(*cls.shape)
        n = block.shape[0]
        m[:n, :n] = block
        return cls(m, dtype=dtype)

    @classmethod
    def from_translation(cls, v: Vec):
        """Affine translation by v (Mat3 takes a Vec2, Mat34/Mat4 a Vec3)."""
        if cls.affine_dim == 0 or v.dim != cls.affine_dim:
            raise TypeError(f"{cls.__name__} cannot hold a translation by {type(v).__name__}")
        m = np.eye(*cls.shape)
        m[:v.dim, -1] = v.to_array()
        return cls(m, dtype=v.dtype)

    @classmethod
    def from_scale(cls, v: Vec):
        """Scale along the leading axes by the components of v."""
        if v.dim > min(cls.shape):
            raise TypeError(f"{cls.__name__} cannot scale by {type(v).__name__}")
        return cls._embed(np.diag(v.to_array().astype(float)), v.dtype)

    @classmethod
    def from_z_rotation(cls, theta: float, dtype=np.float32):
        """Anti-clockwise rotation about z (the 2D rotation for Mat2/Mat3)."""
        block = _rotation("z", theta)
        if cls.shape == (2, 2):
            block = block[:2, :2]
        return cls._embed(block, dtype)

    @classmethod
    def from_x_rotation(cls, theta: float, dtype=np.float32):
        cls._require_3d("from_x_rotation")
        return cls._embed(_rotation("x", theta), dtype)

    @classmethod
    def from_y_rotation(cls, theta: float, dtype=np.float32):
        cls._require_3d("from_y_rotation")
        return cls._embed(_rotation("y", theta), dtype)

    @classmethod
    def from_quat(cls, q):
        """Rotation matrix of the unit quaternion q."""
        cls._require_3d("from_quat")
        return cls._embed(q.to_mat3().m.astype(float), q.dtype)

    @classmethod
    def _require_3d(cls, op: str) -> None:
        if min(cls.shape) < 3:
            raise TypeError(f"{cls.__name__}.{op} needs a 3D matrix")

    # ------------------------------------------------------------------
    # access
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    @property
    def is_square(self) -> bool:
        return self.shape[0] == self.shape[1]

    def __getitem__(self, key):
        r, c = key
        _check_index(r, self.rows, "row")
        _check_index(c, self.cols, "column")
        return self.m[r, c]

    def row(self, i: int) -> Vec:
        _check_index(i, self.rows, "row")
        return vec_type(self.cols)._from_array(self.m[i].copy())

    def col(self, j: int) -> Vec:
        _check_index(j, self.cols, "column")
        return vec_type(self.rows)._from_array(self.m[:, j].copy())

    def get_translation(self) -> Vec:
        if self.affine_dim == 0:
            raise TypeError(f"{type(self).__name__} has no translation")
        return vec_type(self.affine_dim)._from_array(self.m[:self.affine_dim, -1].copy())

    def to_array(self) -> np.ndarray:
        return self.m.copy()

    def __array__(self, dtype=None, copy=None):
        arr = self.to_array()
        return arr if dtype is None else arr.astype(dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mat):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.m, other.m))

    def __hash__(self) -> int:
        return hash((self.shape, tuple(self.m.ravel().tolist())))

    def __str__(self) -> str:
        return "[" + ", ".join("[" + ", ".join(str(v) for v in row) + "]" for row in self.m) + "]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.m.tolist()}, dtype={self.dtype.name})"

    def approx(self, other: "Mat", eps) -> bool:
        """True when every entry differs from `other` by less than eps."""
        self._check_same(other)
        with ieee():
            return bool(np.all(np.abs(self.m - other.m) < eps))

    # ------------------------------------------------------------------
    # algebra
    # ------------------------------------------------------------------

    def _check_same(self, other: "Mat") -> None:
        if type(other) is not type(self) or other.dtype != self.dtype:
            raise TypeError(
                f"Cannot combine {type(self).__name__} of {self.dtype.name} "
                f"with {type(other).__name__} of {other.dtype.name}"
            )

    def _square(self) -> np.ndarray:
        """float64 square form; Mat34 gains its implicit [0, 0, 0, 1] row."""
        if self.is_square:
            return self.m.astype(np.float64)
        sq = np.eye(self.cols)
        sq[:self.rows, :] = self.m
        return sq

    def _from_square(self, sq: np.ndarray):
        with ieee():
            return type(self)(sq[:self.rows, :].astype(self.dtype), dtype=self.dtype)

    def determinant(self):
        return self.dtype.type(_det(self._square()))

    def transpose(self):
        if not self.is_square:
            raise TypeError(f"{type(self).__name__} is not square")
        return type(self)(self.m.T, dtype=self.dtype)

    def inverse(self):
        """
        Inverse transform.

        Never raises: a singular matrix yields inf/nan entries.
        """
        inv, det = _inverse(self._square())
        if det == 0:
            LOGGER.debug("inverse: %s is singular, result is not finite", type(self).__name__)
        return self._from_square(inv)

    def compose(self, other: "Mat"):
        """self * other: apply `other` first, then `self`."""
        self._check_same(other)
        with ieee():
            return self._from_square(self._square() @ other._square())

    def transform(self, v: Vec) -> Vec:
        """Transform v following the point transform rules above."""
        if v.dtype != self.dtype:
            raise TypeError(f"Cannot transform a {v.dtype.name} vector by a {self.dtype.name} matrix")
        x = v.to_array().astype(np.float64)
        with ieee():
            if v.dim == self.cols:
                out = self.m.astype(np.float64) @ x
            elif v.dim == self.affine_dim:
                h = self._square() @ np.append(x, 1.0)
                out = h[:-1] / h[-1]
            else:
                raise TypeError(f"Cannot transform {type(v).__name__} by {type(self).__name__}")
            return vec_type(out.shape[0])._from_array(out.astype(self.dtype))

    def __mul__(self, other):
        if isinstance(other, Mat):
            return self.compose(other)
        if isinstance(other, Vec):
            return self.transform(other)
        return NotImplemented

    __matmul__ = __mul__


class Mat2(Mat):
    shape = (2, 2)
    affine_dim = 0


class Mat3(Mat):
    shape = (3, 3)
    affine_dim = 2


class Mat34(Mat):
    shape = (3, 4)
    affine_dim = 3


class Mat4(Mat):
    shape = (4, 4)
    affine_dim = 3
