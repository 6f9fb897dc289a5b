# vecmath/ops.py
"""
OPS: Capability-Dispatch Operation Traits
=========================================

PURPOSE:
--------
One function body has to serve every scalar width AND every vector
dimension. clamp(x, lo, hi) must work for an int8, a float64, a Vec2 of
uint16 and a Vec4 of float32.

The trick is the CONTAINER: a value is taken apart into a numpy array
(0-d for a scalar, 1-d for a vector), the componentwise kernel runs on that
array, and the result is put back together as the same kind of value.

    container = container_of(x)     # scalar of width T, or VecN of width T
    arr = container.unpack(x)       # -> np.ndarray
    ...componentwise numpy...
    return container.pack(result)   # -> same kind of value as x

The operation traits are descriptor classes. Inheritance expresses tier
inclusion, and each method checks the tier it needs:

    NumberOps                      min, max, clamp, step
      SignedNumberOps              sign, abs
        FloatOps                   rounding, sqrt/pow, trig, lerp, smoothstep, ...
          VecFloatOps (+ VecN)     length, normalize, distance, reflect, ...
    VecN                           dim, dot

OPERAND RULES:
--------------
- A vector or numpy scalar operand fixes the container. When every value
  operand is a Python literal, the width is the one numpy would give the
  literals together (np.result_type), so clamp(2, 0, 1.5) is float64.
- Further value operands must be the same vector class and dtype (vectors),
  or a scalar castable into the width (scalars). A numpy scalar of another
  width is a TypeError; only Python literals are cast.
- Scalar parameters (eps, exponents, eta) are cast into the container width.
- The interpolation parameter t of lerp/smoothstep may be a scalar or a
  value of the same container (per-component t).
"""

import logging
import operator
from dataclasses import dataclass
from typing import Optional

import numpy as np

from . import config
from .config import ZERO_LENGTH_POLICIES
from .vec import Vec
from .kernel.num import ScalarTraits, Tier, coerce, divide, ieee, scalar_dtype, traits

LOGGER = logging.getLogger(__name__)


class ZeroLengthError(ArithmeticError):
    """Raised when a zero-length vector is normalized under the "raise" policy."""
    pass


@dataclass(frozen=True)
class Container:
    """
    How to take a value apart into a numpy array and put it back together.

    Attributes:
    -----------
    kind : type or None
        The Vec subclass for vectors, None for scalars
    traits : ScalarTraits
        Capabilities of the component width
    """
    kind: Optional[type]
    traits: ScalarTraits

    @property
    def is_vector(self) -> bool:
        return self.kind is not None

    @property
    def dtype(self) -> np.dtype:
        return self.traits.dtype

    def unpack(self, value) -> np.ndarray:
        if self.kind is None:
            if isinstance(value, Vec):
                raise TypeError(f"Expected a {self.traits.name} scalar, got {type(value).__name__}")
            self._check_width(value)
            return coerce(value, self.dtype)
        if not isinstance(value, Vec):
            raise TypeError(f"Expected {self.kind.__name__}, got {type(value).__name__}")
        if type(value) is not self.kind or value.dtype != self.dtype:
            raise TypeError(
                f"Expected {self.kind.__name__} of {self.traits.name}, "
                f"got {type(value).__name__} of {value.dtype.name}"
            )
        return value.to_array()

    def _check_width(self, value) -> None:
        # numpy scalars carry a width of their own and are never narrowed
        if isinstance(value, np.generic) and value.dtype != self.dtype:
            raise TypeError(f"Expected a {self.traits.name} scalar, got {value.dtype.name}")

    def unpack_scalar(self, value) -> np.ndarray:
        """Scalar parameter (t, eps, exponent) cast into the container width."""
        if isinstance(value, Vec):
            raise TypeError(f"Expected a scalar parameter, got {type(value).__name__}")
        return coerce(value, self.dtype)

    def unpack_param(self, value) -> np.ndarray:
        """Interpolation parameter: a scalar, or a value of this container."""
        if isinstance(value, Vec):
            return self.unpack(value)
        return coerce(value, self.dtype)

    def pack(self, arr: np.ndarray):
        arr = np.asarray(arr).astype(self.dtype, copy=False)
        if self.kind is None:
            return self.dtype.type(arr)
        return self.kind._from_array(arr)

    def scalar(self, arr: np.ndarray):
        """A single component-width scalar, whatever the container."""
        return self.dtype.type(np.asarray(arr).astype(self.dtype, copy=False))


def container_of(value) -> Container:
    if isinstance(value, Vec):
        return Container(type(value), traits(value.dtype))
    return Container(None, traits(scalar_dtype(value)))


def _literal_container(values) -> Container:
    """Container for scalar operands, widened over Python literals."""
    typed = [v for v in values if isinstance(v, np.generic)]
    if typed:
        return container_of(typed[0])
    return Container(None, traits(np.result_type(*[scalar_dtype(v) for v in values])))


def _unpack_all(op: str, tier: Tier, first, *others, hints=()):
    """
    Unpack the value operands of `op` into one container.

    `hints` are extra scalars (the t of lerp) that take part in the width
    inference of an all-literal call but are not unpacked.
    """
    if isinstance(first, (Vec, np.generic)):
        container = container_of(first)
    else:
        scalars = [v for v in (first,) + others + tuple(hints) if not isinstance(v, Vec)]
        container = _literal_container(scalars)
    container.traits.require(tier, op)
    arrays = [container.unpack(first)] + [container.unpack(o) for o in others]
    return container, arrays


def _require_vector(container: Container, op: str) -> None:
    if not container.is_vector:
        raise TypeError(f"{op} requires a vector, got a {container.traits.name} scalar")


class NumberOps:
    """Ordering and clamping, available to every Number container."""

    @staticmethod
    def min(a, b):
        c, (x, y) = _unpack_all("min", Tier.NUMBER, a, b)
        return c.pack(np.minimum(x, y))

    @staticmethod
    def max(a, b):
        c, (x, y) = _unpack_all("max", Tier.NUMBER, a, b)
        return c.pack(np.maximum(x, y))

    @staticmethod
    def clamp(x, lo, hi):
        c, (v, a, b) = _unpack_all("clamp", Tier.NUMBER, x, lo, hi)
        return c.pack(np.minimum(np.maximum(v, a), b))

    @staticmethod
    def step(a, b):
        """1 where a > b, else 0."""
        c, (x, y) = _unpack_all("step", Tier.NUMBER, a, b)
        return c.pack(np.where(x > y, c.traits.one(), c.traits.zero()))


class SignedNumberOps(NumberOps):
    """Sign-aware operations; unsigned widths are rejected."""

    @staticmethod
    def sign(a):
        c, (x,) = _unpack_all("sign", Tier.SIGNED_NUMBER, a)
        return c.pack(np.sign(x))

    @staticmethod
    def abs(a):
        c, (x,) = _unpack_all("abs", Tier.SIGNED_NUMBER, a)
        with ieee():
            return c.pack(np.abs(x))


def _float_unary(op: str, ufunc):
    def apply(a):
        c, (x,) = _unpack_all(op, Tier.FLOAT, a)
        with ieee():
            return c.pack(ufunc(x))
    apply.__name__ = op
    apply.__doc__ = f"Componentwise {op}."
    return staticmethod(apply)


def _round_half_away(x: np.ndarray) -> np.ndarray:
    # np.round is round-half-to-even; this rounds 0.5 -> 1, -0.5 -> -1
    whole = np.trunc(x)
    return whole + np.where(np.abs(x - whole) >= 0.5, np.sign(x), 0)


class FloatOps(SignedNumberOps):
    """Rounding, transcendental and interpolation operations for float widths."""

    deg_to_rad = _float_unary("deg_to_rad", np.radians)
    rad_to_deg = _float_unary("rad_to_deg", np.degrees)
    floor = _float_unary("floor", np.floor)
    ceil = _float_unary("ceil", np.ceil)
    round = _float_unary("round", _round_half_away)
    trunc = _float_unary("trunc", np.trunc)
    frac = _float_unary("frac", lambda x: x - np.floor(x))
    sqrt = _float_unary("sqrt", np.sqrt)
    rsqrt = _float_unary("rsqrt", lambda x: 1 / np.sqrt(x))
    recip = _float_unary("recip", np.reciprocal)
    exp = _float_unary("exp", np.exp)
    exp2 = _float_unary("exp2", np.exp2)
    log = _float_unary("log", np.log)
    log2 = _float_unary("log2", np.log2)
    log10 = _float_unary("log10", np.log10)
    sin = _float_unary("sin", np.sin)
    cos = _float_unary("cos", np.cos)
    tan = _float_unary("tan", np.tan)
    asin = _float_unary("asin", np.arcsin)
    acos = _float_unary("acos", np.arccos)
    atan = _float_unary("atan", np.arctan)
    sinh = _float_unary("sinh", np.sinh)
    cosh = _float_unary("cosh", np.cosh)
    tanh = _float_unary("tanh", np.tanh)

    @staticmethod
    def atan2(y, x):
        c, (a, b) = _unpack_all("atan2", Tier.FLOAT, y, x)
        with ieee():
            return c.pack(np.arctan2(a, b))

    @staticmethod
    def approx(a, b, eps=None) -> bool:
        """
        True when |a - b| < eps on every component.

        eps defaults to the configured approx_epsilon.
        """
        c, (x, y) = _unpack_all("approx", Tier.FLOAT, a, b)
        if eps is None:
            eps = config.get_config().approx_epsilon
        e = c.unpack_scalar(eps)
        with ieee():
            return bool(np.all(np.abs(x - y) < e))

    @staticmethod
    def powi(a, b: int):
        """a raised to the integer power b."""
        c, (x,) = _unpack_all("powi", Tier.FLOAT, a)
        n = operator.index(b)
        with ieee():
            return c.pack(np.power(x, c.dtype.type(n)))

    @staticmethod
    def powf(a, b):
        """a raised to the floating point power b."""
        c, (x,) = _unpack_all("powf", Tier.FLOAT, a)
        e = c.unpack_scalar(b)
        with ieee():
            return c.pack(np.power(x, e))

    @staticmethod
    def lerp(e0, e1, t):
        """e0 + t * (e1 - e0)."""
        c, (a, b) = _unpack_all("lerp", Tier.FLOAT, e0, e1, hints=(t,))
        s = c.unpack_param(t)
        with ieee():
            return c.pack(a + s * (b - a))

    @staticmethod
    def smoothstep(e0, e1, t):
        """
        Hermite interpolation of t between edges e0 and e1.

        t is first mapped to [0, 1] across the edges and clamped, then
        eased with x*x*(3 - 2x). Equal edges yield nan (0/0).
        """
        c, (a, b) = _unpack_all("smoothstep", Tier.FLOAT, e0, e1, hints=(t,))
        s = c.unpack_param(t)
        with ieee():
            x = np.clip(divide(s - a, b - a, c.traits), 0, 1)
            return c.pack(x * x * (3 - 2 * x))

    @staticmethod
    def saturate(x):
        """Same as clamp(x, 0.0, 1.0)."""
        c, (v,) = _unpack_all("saturate", Tier.FLOAT, x)
        return c.pack(np.clip(v, 0, 1))

    @staticmethod
    def is_nan(a) -> bool:
        """True if any component is nan."""
        _, (x,) = _unpack_all("is_nan", Tier.FLOAT, a)
        return bool(np.any(np.isnan(x)))

    @staticmethod
    def is_inf(a) -> bool:
        """True if any component is +/-inf."""
        _, (x,) = _unpack_all("is_inf", Tier.FLOAT, a)
        return bool(np.any(np.isinf(x)))

    @staticmethod
    def is_finite(a) -> bool:
        """True if every component is finite."""
        _, (x,) = _unpack_all("is_finite", Tier.FLOAT, a)
        return bool(np.all(np.isfinite(x)))


class VecN:
    """Operations that only make sense on vectors of a fixed dimension."""

    @staticmethod
    def dim(a) -> int:
        c = container_of(a)
        _require_vector(c, "dim")
        return c.kind.dim

    @staticmethod
    def dot(a, b):
        c, (x, y) = _unpack_all("dot", Tier.NUMBER, a, b)
        _require_vector(c, "dot")
        with ieee():
            return c.scalar(np.dot(x, y))


def _magnitude(x: np.ndarray):
    """
    Euclidean length of x in its own width.

    The components are divided by the largest one before squaring, so
    lengths near the ends of the float range neither overflow to inf nor
    underflow to 0. inf and nan components pass through.
    """
    with ieee():
        scale = np.max(np.abs(x))
        if scale == 0 or not np.isfinite(scale):
            return scale
        y = x / scale
        return scale * np.sqrt(np.dot(y, y))


def _normalized(c: Container, x: np.ndarray, policy: Optional[str]) -> np.ndarray:
    policy = policy or config.get_config().zero_length_policy
    if policy not in ZERO_LENGTH_POLICIES:
        raise ValueError(f"Unknown zero-length policy {policy!r}")
    with ieee():
        scale = np.max(np.abs(x))
    if scale == 0:
        LOGGER.debug("normalize: zero-length %s handled by policy %r", c.kind.__name__, policy)
        if policy == "zero":
            return np.zeros_like(x)
        if policy == "raise":
            raise ZeroLengthError(f"Cannot normalize a zero-length {c.kind.__name__}")
    with ieee():
        if not np.isfinite(scale):
            return x / _magnitude(x)
        y = x / scale
        return y / np.sqrt(np.dot(y, y))


class VecFloatOps(FloatOps, VecN):
    """Magnitude-based operations on float vectors."""

    @staticmethod
    def mag2(a):
        """Squared length, avoids the sqrt."""
        c, (x,) = _unpack_all("mag2", Tier.FLOAT, a)
        _require_vector(c, "mag2")
        with ieee():
            return c.scalar(np.dot(x, x))

    @staticmethod
    def mag(a):
        c, (x,) = _unpack_all("mag", Tier.FLOAT, a)
        _require_vector(c, "mag")
        return c.scalar(_magnitude(x))

    length = mag

    @staticmethod
    def normalize(a, policy: Optional[str] = None):
        """
        Unit vector in the direction of a.

        A zero-length vector is handled by `policy` (default: the configured
        zero_length_policy): "zero" returns the zero vector, "propagate"
        returns the nan produced by 0/0, "raise" raises ZeroLengthError.
        """
        c, (x,) = _unpack_all("normalize", Tier.FLOAT, a)
        _require_vector(c, "normalize")
        return c.pack(_normalized(c, x, policy))

    @staticmethod
    def dist(a, b):
        c, (x, y) = _unpack_all("dist", Tier.FLOAT, a, b)
        _require_vector(c, "dist")
        with ieee():
            return c.scalar(_magnitude(x - y))

    distance = dist

    @staticmethod
    def dist2(a, b):
        c, (x, y) = _unpack_all("dist2", Tier.FLOAT, a, b)
        _require_vector(c, "dist2")
        with ieee():
            d = x - y
            return c.scalar(np.dot(d, d))

    @staticmethod
    def reflect(i, n):
        """Reflect incident vector i about the (unit) normal n."""
        c, (x, nn) = _unpack_all("reflect", Tier.FLOAT, i, n)
        _require_vector(c, "reflect")
        with ieee():
            return c.pack(x - 2 * np.dot(nn, x) * nn)

    @staticmethod
    def refract(i, n, eta):
        """
        Refract unit incident vector i through the surface with unit normal n.

        eta is the ratio of indices of refraction. Total internal reflection
        returns the zero vector.
        """
        c, (x, nn) = _unpack_all("refract", Tier.FLOAT, i, n)
        _require_vector(c, "refract")
        r = c.unpack_scalar(eta)
        with ieee():
            cos_i = np.dot(nn, x)
            k = 1 - r * r * (1 - cos_i * cos_i)
            if k < 0:
                return c.pack(np.zeros_like(x))
            return c.pack(r * x - (r * cos_i + np.sqrt(k)) * nn)
