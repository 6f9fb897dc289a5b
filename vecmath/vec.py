# vecmath/vec.py
"""
VEC: Fixed-Dimension Vectors (Vec2, Vec3, Vec4)
===============================================

PURPOSE:
--------
Small immutable value types for 2D/3D/4D geometry, generic over any of the
ten supported scalar widths (see kernel/num.py).

The operator surface is identical at every dimension. It is written ONCE on
the `Vec` base and driven by two class attributes:

    dim     number of components (2, 3, 4)
    fields  component names in declaration order ("x", "y", "z", "w")

USAGE:
------
    >>> a = vec3f(1.0, 2.0, 3.0)                 # float32
    >>> b = Vec3(4, 5, 6, dtype=np.float32)      # same thing, explicit width
    >>> a + b, a * 2.0, 2.0 * a, -a
    >>> a.dot(b)                                 # np.float32(32.0)
    >>> str(a)
    '[1.0, 2.0, 3.0]'

RULES:
------
- Operands must be the same vector class AND the same dtype, or a scalar
  that is broadcast to every component. Mixing raises TypeError.
- v[i] only accepts 0 <= i < dim; anything else raises IndexError.
- Equality is exact, component by component.
- `v += w` rebinds v to a new value; vectors are never mutated.
"""

import numbers
import operator
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Tuple

import numpy as np

from .kernel.num import (
    Tier,
    binary,
    coerce,
    ieee,
    negate,
    scalar_dtype,
    traits,
)


DEFAULT_DTYPE = np.float32


@dataclass(frozen=True, eq=False, repr=False)
class Vec:
    """
    Generic fixed-dimension vector.

    Concrete dimensions are the dataclasses Vec2, Vec3 and Vec4; this base
    carries every operation so that each is written only once.
    """
    dim: ClassVar[int] = 0
    fields: ClassVar[Tuple[str, ...]] = ()

    # numpy scalars on the left defer to our reflected operators
    __array_ufunc__ = None

    def __post_init__(self):
        values = [getattr(self, f) for f in self.fields]
        for value in values:
            if isinstance(value, Vec):
                raise TypeError(f"{type(self).__name__} components must be scalars, got {value!r}")

        dtype = self.dtype
        if dtype is None:
            dtype = np.result_type(*[scalar_dtype(v) for v in values])
        t = traits(dtype)

        components = coerce(values, t.dtype)
        for name, component in zip(self.fields, components):
            object.__setattr__(self, name, component)
        object.__setattr__(self, "dtype", t.dtype)

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @classmethod
    def _from_array(cls, arr: np.ndarray):
        return cls(*arr, dtype=arr.dtype)

    @classmethod
    def splat(cls, value, dtype=None):
        """Vector with every component set to `value`."""
        return cls(*([value] * cls.dim), dtype=dtype)

    @classmethod
    def zero(cls, dtype=DEFAULT_DTYPE):
        return cls.splat(traits(dtype).zero(), dtype)

    @classmethod
    def one(cls, dtype=DEFAULT_DTYPE):
        return cls.splat(traits(dtype).one(), dtype)

    @classmethod
    def minus_one(cls, dtype=DEFAULT_DTYPE):
        return cls.splat(traits(dtype).minus_one(), dtype)

    @classmethod
    def _unit(cls, axis: int, dtype):
        t = traits(dtype)
        return cls(*[t.one() if i == axis else t.zero() for i in range(cls.dim)], dtype=dtype)

    @classmethod
    def unit_x(cls, dtype=DEFAULT_DTYPE):
        return cls._unit(0, dtype)

    @classmethod
    def unit_y(cls, dtype=DEFAULT_DTYPE):
        return cls._unit(1, dtype)

    @classmethod
    def from_iter(cls, values: Iterable, dtype=None):
        values = tuple(values)
        if len(values) != cls.dim:
            raise ValueError(f"{cls.__name__} requires exactly {cls.dim} components, got {len(values)}")
        return cls(*values, dtype=dtype)

    def astype(self, dtype):
        """Convert to another width with numpy casting rules (floats truncate into ints)."""
        t = traits(dtype)
        with ieee():
            return self._from_array(self.to_array().astype(t.dtype))

    def to_array(self) -> np.ndarray:
        return np.array([getattr(self, f) for f in self.fields], dtype=self.dtype)

    def __array__(self, dtype=None, copy=None):
        arr = self.to_array()
        return arr if dtype is None else arr.astype(dtype)

    # ------------------------------------------------------------------
    # container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.dim

    def __iter__(self):
        return (getattr(self, f) for f in self.fields)

    def __getitem__(self, index):
        i = operator.index(index)
        if not 0 <= i < self.dim:
            raise IndexError(f"{type(self).__name__} index {i} out of range [0, {self.dim})")
        return getattr(self, self.fields[i])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vec):
            return NotImplemented
        if other.dim != self.dim:
            return False
        return bool(np.all(self.to_array() == other.to_array()))

    def __hash__(self) -> int:
        return hash((self.dim,) + tuple(c.item() for c in self))

    def __str__(self) -> str:
        # displays like [10.0, 12.0, 13.0]
        return "[" + ", ".join(str(c) for c in self) + "]"

    def __repr__(self) -> str:
        components = ", ".join(repr(c.item()) for c in self)
        return f"{type(self).__name__}({components}, dtype={self.dtype.name})"

    # ------------------------------------------------------------------
    # operators
    # ------------------------------------------------------------------

    def _check_same(self, other: "Vec") -> None:
        if type(other) is not type(self):
            raise TypeError(f"Cannot combine {type(self).__name__} with {type(other).__name__}")
        if other.dtype != self.dtype:
            raise TypeError(
                f"Cannot combine {type(self).__name__} of {self.dtype.name} "
                f"with {other.dtype.name}"
            )

    def _operand(self, other):
        """Array for `other`, or None if it is neither a vector nor a scalar."""
        if isinstance(other, Vec):
            self._check_same(other)
            return other.to_array()
        if isinstance(other, (numbers.Real, np.generic)) and not isinstance(other, (bool, np.bool_)):
            if isinstance(other, np.generic) and other.dtype != self.dtype:
                raise TypeError(
                    f"Cannot combine {type(self).__name__} of {self.dtype.name} "
                    f"with a scalar of {other.dtype.name}"
                )
            return coerce(other, self.dtype)
        return None

    def _binary(self, other, op: str, reflected: bool = False):
        y = self._operand(other)
        if y is None:
            return NotImplemented
        x = self.to_array()
        if reflected:
            x, y = y, x
        return self._from_array(binary(op, x, y, traits(self.dtype)))

    def __add__(self, other):
        return self._binary(other, "add")

    def __radd__(self, other):
        return self._binary(other, "add", reflected=True)

    def __sub__(self, other):
        return self._binary(other, "sub")

    def __rsub__(self, other):
        return self._binary(other, "sub", reflected=True)

    def __mul__(self, other):
        return self._binary(other, "mul")

    def __rmul__(self, other):
        return self._binary(other, "mul", reflected=True)

    def __truediv__(self, other):
        return self._binary(other, "div")

    def __rtruediv__(self, other):
        return self._binary(other, "div", reflected=True)

    def __neg__(self):
        return self._from_array(negate(self.to_array(), traits(self.dtype)))

    # ------------------------------------------------------------------
    # products
    # ------------------------------------------------------------------

    def dot(self, other: "Vec"):
        """Sum of a[i] * b[i]; same class and dtype required."""
        self._check_same(other)
        with ieee():
            return self.dtype.type(np.dot(self.to_array(), other.to_array()))

    def mag2(self):
        return self.dot(self)

    def approx(self, other: "Vec", eps) -> bool:
        """
        True when |a[i] - b[i]| < eps on every component.

        The difference is taken in absolute value, so a component of `self`
        far BELOW the matching component of `other` is not mistaken for a
        match.
        """
        self._check_same(other)
        traits(self.dtype).require(Tier.FLOAT, "approx")
        with ieee():
            diff = np.abs(self.to_array() - other.to_array())
        return bool(np.all(diff < eps))


@dataclass(frozen=True, eq=False, repr=False)
class Vec2(Vec):
    x: Any
    y: Any
    dtype: Any = None

    dim: ClassVar[int] = 2
    fields: ClassVar[Tuple[str, ...]] = ("x", "y")

    def perp(self) -> "Vec2":
        """Counter-clockwise rotation by 90 degrees: (-y, x)."""
        t = traits(self.dtype).require(Tier.SIGNED_NUMBER, "perp")
        a = self.to_array()
        return self._from_array(np.array([negate(a[1], t), a[0]], dtype=self.dtype))


@dataclass(frozen=True, eq=False, repr=False)
class Vec3(Vec):
    x: Any
    y: Any
    z: Any
    dtype: Any = None

    dim: ClassVar[int] = 3
    fields: ClassVar[Tuple[str, ...]] = ("x", "y", "z")

    @classmethod
    def unit_z(cls, dtype=DEFAULT_DTYPE):
        return cls._unit(2, dtype)

    @classmethod
    def from_vec2(cls, v: Vec2, z=0) -> "Vec3":
        return cls(v.x, v.y, z, dtype=v.dtype)

    @property
    def xy(self) -> Vec2:
        return Vec2(self.x, self.y, dtype=self.dtype)

    def cross(self, other: "Vec3") -> "Vec3":
        """Right-handed cross product self x other."""
        self._check_same(other)
        a = self.to_array()
        b = other.to_array()
        with ieee():
            c = np.array([
                a[1] * b[2] - a[2] * b[1],
                a[2] * b[0] - a[0] * b[2],
                a[0] * b[1] - a[1] * b[0],
            ], dtype=self.dtype)
        return self._from_array(c)


@dataclass(frozen=True, eq=False, repr=False)
class Vec4(Vec):
    x: Any
    y: Any
    z: Any
    w: Any
    dtype: Any = None

    dim: ClassVar[int] = 4
    fields: ClassVar[Tuple[str, ...]] = ("x", "y", "z", "w")

    @classmethod
    def unit_z(cls, dtype=DEFAULT_DTYPE):
        return cls._unit(2, dtype)

    @classmethod
    def unit_w(cls, dtype=DEFAULT_DTYPE):
        return cls._unit(3, dtype)

    @classmethod
    def from_vec3(cls, v: Vec3, w=0) -> "Vec4":
        return cls(v.x, v.y, v.z, w, dtype=v.dtype)

    @property
    def xy(self) -> Vec2:
        return Vec2(self.x, self.y, dtype=self.dtype)

    @property
    def xyz(self) -> Vec3:
        return Vec3(self.x, self.y, self.z, dtype=self.dtype)


VEC_BY_DIM = {2: Vec2, 3: Vec3, 4: Vec4}


def vec_type(dim: int):
    """Vector class for a dimension (2, 3 or 4)."""
    try:
        return VEC_BY_DIM[dim]
    except KeyError:
        raise ValueError(f"No vector type of dimension {dim}") from None


def cross(a: Vec3, b: Vec3) -> Vec3:
    """3 dimensional cross product a x b."""
    if not isinstance(a, Vec3):
        raise TypeError(f"cross is defined for Vec3 only, got {type(a).__name__}")
    return a.cross(b)


def perp(a: Vec2) -> Vec2:
    """Perpendicular vector: anti-clockwise rotation by 90 degrees."""
    if not isinstance(a, Vec2):
        raise TypeError(f"perp is defined for Vec2 only, got {type(a).__name__}")
    return a.perp()


# Free constructors per common width, ie v = vec3f(x, y, z)

def vec2f(x, y) -> Vec2:
    return Vec2(x, y, dtype=np.float32)


def vec3f(x, y, z) -> Vec3:
    return Vec3(x, y, z, dtype=np.float32)


def vec4f(x, y, z, w) -> Vec4:
    return Vec4(x, y, z, w, dtype=np.float32)


def vec2d(x, y) -> Vec2:
    return Vec2(x, y, dtype=np.float64)


def vec3d(x, y, z) -> Vec3:
    return Vec3(x, y, z, dtype=np.float64)


def vec4d(x, y, z, w) -> Vec4:
    return Vec4(x, y, z, w, dtype=np.float64)


def vec2i(x, y) -> Vec2:
    return Vec2(x, y, dtype=np.int32)


def vec3i(x, y, z) -> Vec3:
    return Vec3(x, y, z, dtype=np.int32)


def vec4i(x, y, z, w) -> Vec4:
    return Vec4(x, y, z, w, dtype=np.int32)


def vec2u(x, y) -> Vec2:
    return Vec2(x, y, dtype=np.uint32)


def vec3u(x, y, z) -> Vec3:
    return Vec3(x, y, z, dtype=np.uint32)


def vec4u(x, y, z, w) -> Vec4:
    return Vec4(x, y, z, w, dtype=np.uint32)
