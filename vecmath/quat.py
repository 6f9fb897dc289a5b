# vecmath/quat.py
"""
Rotation quaternion (x, y, z, w) with w the scalar part.

Only what is needed to build rotations and feed them to matrices and
vectors: axis-angle / euler construction, composition, vector rotation,
conversion to Mat3 / Mat4 and slerp.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Tuple

import numpy as np

from .kernel.num import Tier, coerce, ieee, scalar_dtype, traits
from .mat import Mat3, Mat4
from .vec import Vec3


@dataclass(frozen=True, eq=False, repr=False)
class Quat:
    x: Any = 0.0
    y: Any = 0.0
    z: Any = 0.0
    w: Any = 1.0
    dtype: Any = None

    fields: ClassVar[Tuple[str, ...]] = ("x", "y", "z", "w")

    __array_ufunc__ = None

    def __post_init__(self):
        values = [getattr(self, f) for f in self.fields]
        dtype = self.dtype
        if dtype is None:
            dtype = np.result_type(*[scalar_dtype(v) for v in values])
            if dtype.kind in "iu":
                dtype = np.dtype(np.float64)
        t = traits(dtype).require(Tier.FLOAT, "Quat")
        for name, component in zip(self.fields, coerce(values, t.dtype)):
            object.__setattr__(self, name, component)
        object.__setattr__(self, "dtype", t.dtype)

    @classmethod
    def identity(cls, dtype=np.float32) -> "Quat":
        return cls(0, 0, 0, 1, dtype=dtype)

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float) -> "Quat":
        """
        Rotation of `angle` radians about `axis` (right-hand rule).

        The axis need not be unit length; a zero axis gives the identity.
        """
        a = axis.to_array().astype(np.float64)
        n = np.sqrt(np.dot(a, a))
        if n == 0:
            return cls.identity(axis.dtype)
        half = 0.5 * angle
        x, y, z = a / n * np.sin(half)
        return cls(x, y, z, np.cos(half), dtype=axis.dtype)

    @classmethod
    def from_euler_angles(cls, x: float, y: float, z: float, dtype=np.float32) -> "Quat":
        """Rotation about x, then y, then z (fixed axes), angles in radians."""
        qx = cls.from_axis_angle(Vec3.unit_x(dtype), x)
        qy = cls.from_axis_angle(Vec3.unit_y(dtype), y)
        qz = cls.from_axis_angle(Vec3.unit_z(dtype), z)
        return qz * qy * qx

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z, self.w], dtype=self.dtype)

    def __array__(self, dtype=None, copy=None):
        arr = self.to_array()
        return arr if dtype is None else arr.astype(dtype)

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quat):
            return NotImplemented
        return bool(np.all(self.to_array() == other.to_array()))

    def __hash__(self) -> int:
        return hash(tuple(c.item() for c in self))

    def __str__(self) -> str:
        return "[" + ", ".join(str(c) for c in self) + "]"

    def __repr__(self) -> str:
        components = ", ".join(repr(c.item()) for c in self)
        return f"Quat({components}, dtype={self.dtype.name})"

    def _from_array(self, arr: np.ndarray) -> "Quat":
        with ieee():
            return Quat(*arr.astype(self.dtype), dtype=self.dtype)

    def _check_same(self, other) -> None:
        if other.dtype != self.dtype:
            raise TypeError(f"Cannot combine {self.dtype.name} with {other.dtype.name}")

    def dot(self, other: "Quat"):
        self._check_same(other)
        return self.dtype.type(np.dot(self.to_array(), other.to_array()))

    def length(self):
        with ieee():
            return self.dtype.type(np.sqrt(self.dot(self)))

    def normalize(self) -> "Quat":
        """Unit quaternion; a zero quaternion yields nan."""
        with ieee():
            return self._from_array(self.to_array() / self.length())

    def conjugate(self) -> "Quat":
        return Quat(-self.x, -self.y, -self.z, self.w, dtype=self.dtype)

    def inverse(self) -> "Quat":
        with ieee():
            return self._from_array(self.conjugate().to_array() / self.dot(self))

    def __neg__(self) -> "Quat":
        return self._from_array(-self.to_array())

    def _hamilton(self, other: "Quat") -> "Quat":
        self._check_same(other)
        x1, y1, z1, w1 = self.to_array().astype(np.float64)
        x2, y2, z2, w2 = other.to_array().astype(np.float64)
        return self._from_array(np.array([
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        ]))

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate v by this (unit) quaternion."""
        if not isinstance(v, Vec3):
            raise TypeError(f"Quat rotates Vec3 only, got {type(v).__name__}")
        self._check_same(v)
        q = np.array([self.x, self.y, self.z], dtype=np.float64)
        p = v.to_array().astype(np.float64)
        t = 2.0 * np.cross(q, p)
        out = p + float(self.w) * t + np.cross(q, t)
        return Vec3._from_array(out.astype(self.dtype))

    def __mul__(self, other):
        if isinstance(other, Quat):
            return self._hamilton(other)
        if isinstance(other, Vec3):
            return self.rotate(other)
        return NotImplemented

    def to_mat3(self) -> Mat3:
        x, y, z, w = self.to_array().astype(np.float64)
        return Mat3([
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ], dtype=self.dtype)

    def to_mat4(self) -> Mat4:
        return Mat4.from_quat(self)

    @staticmethod
    def slerp(a: "Quat", b: "Quat", t: float) -> "Quat":
        """Spherical interpolation from a (t=0) to b (t=1) along the shorter arc."""
        a._check_same(b)
        qa = a.to_array().astype(np.float64)
        qb = b.to_array().astype(np.float64)
        cos_theta = np.dot(qa, qb)
        if cos_theta < 0.0:
            qb = -qb
            cos_theta = -cos_theta
        if cos_theta > 0.9995:
            # nearly parallel: lerp and renormalize
            out = qa + t * (qb - qa)
            return a._from_array(out / np.sqrt(np.dot(out, out)))
        theta = np.arccos(cos_theta)
        sin_theta = np.sin(theta)
        out = (np.sin((1.0 - t) * theta) * qa + np.sin(t * theta) * qb) / sin_theta
        return a._from_array(out)
