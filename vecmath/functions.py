# vecmath/functions.py
"""
Free functions working identically on scalars and vectors.

Each function is a thin wrapper that picks the right operation trait
(see ops.py), so one body serves every scalar width and every dimension:

    >>> clamp(5, 0, 3)
    np.int64(3)
    >>> clamp(vec3f(5, -2, 0.5), Vec3.zero(), Vec3.one())
    Vec3(1.0, 0.0, 0.5, dtype=float32)
    >>> clamp(2, 0, 1.5)                # literals share one width
    np.float64(1.5)

A vector or numpy scalar operand fixes the width and Python literals are
cast into it. A numpy scalar of a different width raises TypeError rather
than being narrowed.

Note: min, max, abs and round shadow the builtins when star-imported.
"""

from .ops import FloatOps, NumberOps, SignedNumberOps, VecFloatOps, VecN
from .vec import cross, perp  # noqa: F401  (re-exported)


def min(a, b):
    """returns minimum of a and b"""
    return NumberOps.min(a, b)


def max(a, b):
    """returns maximum of a and b"""
    return NumberOps.max(a, b)


def clamp(x, lo, hi):
    """returns value x clamped to the range of lo and hi"""
    return NumberOps.clamp(x, lo, hi)


def step(a, b):
    """returns 1 if a > b or 0 otherwise"""
    return NumberOps.step(a, b)


def sign(a):
    """returns -1 if a is negative, 1 if positive and 0 if zero"""
    return SignedNumberOps.sign(a)


def abs(a):
    """returns the absolute (positive) value of a"""
    return SignedNumberOps.abs(a)


def deg_to_rad(a):
    """convert degrees to radians"""
    return FloatOps.deg_to_rad(a)


def rad_to_deg(a):
    """convert radians to degrees"""
    return FloatOps.rad_to_deg(a)


def floor(a):
    """round down to the nearest integer"""
    return FloatOps.floor(a)


def ceil(a):
    """round up to the nearest integer"""
    return FloatOps.ceil(a)


def round(a):
    """round to the closest integer, halves away from zero"""
    return FloatOps.round(a)


def trunc(a):
    """round toward zero"""
    return FloatOps.trunc(a)


def frac(a):
    """fractional part, a - floor(a)"""
    return FloatOps.frac(a)


def approx(a, b, eps=None):
    """return true if a is approximately equal to b within eps on every component"""
    return FloatOps.approx(a, b, eps)


def sqrt(a):
    return FloatOps.sqrt(a)


def rsqrt(a):
    """reciprocal square root, 1 / sqrt(a)"""
    return FloatOps.rsqrt(a)


def recip(a):
    """reciprocal, 1 / a"""
    return FloatOps.recip(a)


def powi(a, b: int):
    """return a raised to the integer power b"""
    return FloatOps.powi(a, b)


def powf(a, b):
    """return a raised to the floating point power b"""
    return FloatOps.powf(a, b)


def exp(a):
    return FloatOps.exp(a)


def exp2(a):
    return FloatOps.exp2(a)


def log(a):
    return FloatOps.log(a)


def log2(a):
    return FloatOps.log2(a)


def log10(a):
    return FloatOps.log10(a)


def sin(a):
    return FloatOps.sin(a)


def cos(a):
    return FloatOps.cos(a)


def tan(a):
    return FloatOps.tan(a)


def asin(a):
    return FloatOps.asin(a)


def acos(a):
    return FloatOps.acos(a)


def atan(a):
    return FloatOps.atan(a)


def atan2(y, x):
    """angle of (x, y) in radians, componentwise"""
    return FloatOps.atan2(y, x)


def sinh(a):
    return FloatOps.sinh(a)


def cosh(a):
    return FloatOps.cosh(a)


def tanh(a):
    return FloatOps.tanh(a)


def lerp(e0, e1, t):
    """return value t linearly interpolated between edge e0 and e1"""
    return FloatOps.lerp(e0, e1, t)


def smoothstep(e0, e1, t):
    """return hermite interpolated value t between edge e0 and e1"""
    return FloatOps.smoothstep(e0, e1, t)


def saturate(x):
    """saturates value to 0-1 range, this is the same as clamp(x, 0.0, 1.0)"""
    return FloatOps.saturate(x)


def is_nan(a) -> bool:
    return FloatOps.is_nan(a)


def is_inf(a) -> bool:
    return FloatOps.is_inf(a)


def is_finite(a) -> bool:
    return FloatOps.is_finite(a)


def dot(a, b):
    """vector dot product a . b returning a scalar value"""
    return VecN.dot(a, b)


def length(a):
    """returns scalar magnitude or length of vector"""
    return VecFloatOps.length(a)


def mag(a):
    """returns scalar magnitude or length of vector"""
    return VecFloatOps.mag(a)


def mag2(a):
    """returns scalar magnitude or length of vector squared to avoid using sqrt"""
    return VecFloatOps.mag2(a)


def normalize(a, policy=None):
    """returns a normalized unit vector of a; see VecFloatOps.normalize for zero length"""
    return VecFloatOps.normalize(a, policy)


def distance(a, b):
    """returns scalar distance between 2 points"""
    return VecFloatOps.distance(a, b)


def dist(a, b):
    """returns scalar distance between 2 points"""
    return VecFloatOps.dist(a, b)


def dist2(a, b):
    """returns scalar squared distance between 2 points to avoid using sqrt"""
    return VecFloatOps.dist2(a, b)


def reflect(i, n):
    """reflect incident vector i about normal n"""
    return VecFloatOps.reflect(i, n)


def refract(i, n, eta):
    """refract incident vector i through normal n with index ratio eta"""
    return VecFloatOps.refract(i, n, eta)
