# vecmath/kernel/num.py
"""
NUM: Scalar Capability Tiers
============================

PURPOSE:
--------
Every vector, matrix and free function in vecmath is written once and has
to work for ten scalar widths. This module is the ONE place that knows what
each width can do.

Scalars are classified into tiers by the operations they are closed under:

    NUMBER          + - * / , zero(), one(), exact ==     (all ten widths)
    SIGNED_NUMBER   NUMBER + unary minus, minus_one()     (int8..int64, floats)
    INTEGER         whole numbers only                    (int8..uint64)
    FLOAT           sqrt, pow, trig, rounding, approx     (float32, float64)

A width opts into a tier by its numpy kind, not by inheriting from anything:

    >>> traits(np.uint32).satisfies(Tier.SIGNED_NUMBER)
    False
    >>> traits("float32").minus_one()
    np.float32(-1.0)

ARITHMETIC POLICY:
------------------
- Float edge cases follow IEEE-754 silently (x/0 -> inf, 0/0 -> nan).
- Integer division truncates toward zero; dividing by zero raises.
- Integer overflow wraps modulo 2**width.
"""

import numbers
from dataclasses import dataclass
from enum import Enum

import numpy as np


class CapabilityError(TypeError):
    """Raised when a scalar type lacks the capability an operation needs."""
    pass


class Tier(Enum):
    NUMBER = "number"
    SIGNED_NUMBER = "signed number"
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True)
class ScalarTraits:
    """
    Capabilities of one scalar width.

    Attributes:
    -----------
    dtype : np.dtype
        The numpy dtype describing the width
    signed : bool
        True for signed integers and floats
    floating : bool
        True for float32 / float64
    """
    dtype: np.dtype
    signed: bool
    floating: bool

    @property
    def name(self) -> str:
        return self.dtype.name

    def satisfies(self, tier: Tier) -> bool:
        if tier is Tier.NUMBER:
            return True
        if tier is Tier.SIGNED_NUMBER:
            return self.signed
        if tier is Tier.INTEGER:
            return not self.floating
        if tier is Tier.FLOAT:
            return self.floating
        raise ValueError(f"Unknown tier {tier!r}")

    def require(self, tier: Tier, op: str) -> "ScalarTraits":
        """Return self if this width satisfies `tier`, else raise CapabilityError."""
        if not self.satisfies(tier):
            raise CapabilityError(f"{op} requires a {tier.value} scalar, got {self.name}")
        return self

    def zero(self):
        return self.dtype.type(0)

    def one(self):
        return self.dtype.type(1)

    def minus_one(self):
        self.require(Tier.SIGNED_NUMBER, "minus_one")
        return self.dtype.type(-1)


SUPPORTED_SCALARS = (
    np.float32, np.float64,
    np.int8, np.int16, np.int32, np.int64,
    np.uint8, np.uint16, np.uint32, np.uint64,
)

SCALAR_TRAITS = {
    np.dtype(t): ScalarTraits(
        dtype=np.dtype(t),
        signed=np.dtype(t).kind in "fi",
        floating=np.dtype(t).kind == "f",
    )
    for t in SUPPORTED_SCALARS
}


def traits(dtype_like) -> ScalarTraits:
    """
    Look up the traits of a dtype-like (np.float32, "int16", np.dtype(...)).

    Raises:
    -------
    CapabilityError
        If the dtype is not one of the ten supported widths
    """
    if dtype_like is None:
        raise CapabilityError("A scalar type is required, got None")
    try:
        dtype = np.dtype(dtype_like)
    except TypeError as exc:
        raise CapabilityError(f"Not a scalar type: {dtype_like!r}") from exc
    try:
        return SCALAR_TRAITS[dtype]
    except KeyError:
        raise CapabilityError(f"Unsupported scalar type {dtype.name}") from None


def scalar_dtype(value) -> np.dtype:
    """
    Infer the dtype of a single scalar value.

    numpy scalars keep their width; Python ints map to int64 and Python
    floats to float64. Booleans are not numbers.
    """
    if isinstance(value, (bool, np.bool_)):
        raise CapabilityError("bool is not a number")
    if isinstance(value, np.generic):
        return traits(value.dtype).dtype
    if isinstance(value, numbers.Integral):
        return np.dtype(np.int64)
    if isinstance(value, numbers.Real):
        return np.dtype(np.float64)
    raise CapabilityError(f"Not a scalar number: {value!r}")


def _traits_of(value) -> ScalarTraits:
    # dtype-likes, numpy scalars/arrays and vectors all expose a dtype
    if isinstance(value, (np.dtype, type, str)):
        return traits(value)
    if hasattr(value, "dtype"):
        return traits(value.dtype)
    return traits(scalar_dtype(value))


def _is(value, tier: Tier) -> bool:
    try:
        return _traits_of(value).satisfies(tier)
    except CapabilityError:
        return False


def is_number(value) -> bool:
    return _is(value, Tier.NUMBER)


def is_signed_number(value) -> bool:
    return _is(value, Tier.SIGNED_NUMBER)


def is_integer(value) -> bool:
    return _is(value, Tier.INTEGER)


def is_float(value) -> bool:
    return _is(value, Tier.FLOAT)


def zero(dtype=np.float32):
    return traits(dtype).zero()


def one(dtype=np.float32):
    return traits(dtype).one()


def minus_one(dtype=np.float32):
    return traits(dtype).minus_one()


# =============================================================================
# ARITHMETIC CLOSURE
# =============================================================================

def ieee():
    """errstate under which float edge cases produce inf/nan without warnings."""
    return np.errstate(divide="ignore", invalid="ignore", over="ignore", under="ignore")


def coerce(value, dtype) -> np.ndarray:
    """
    Cast an operand (scalar or sequence of scalars) into `dtype`.

    Parameters:
    -----------
    value : scalar or sequence
        The operand to cast
    dtype : dtype-like
        Target width; must be supported

    Returns:
    --------
    np.ndarray
        0-d for a scalar, 1-d for a sequence

    Raises:
    -------
    CapabilityError
        If the operand is not numeric, or is fractional while `dtype` is an
        integer width

    Notes:
    ------
    Negative integers cast into unsigned widths wrap (two's complement),
    exactly like fixed-width arithmetic does.
    """
    target = traits(dtype)
    src = np.asarray(value)
    if src.dtype.kind not in "iuf":
        raise CapabilityError(f"Cannot use {src.dtype.name} values as {target.name}")
    if not target.floating and src.dtype.kind == "f":
        with ieee():
            whole = np.all(np.mod(src, 1) == 0)
        if not whole:
            raise CapabilityError(f"Cannot use fractional value {value!r} as {target.name}")
    with ieee():
        return src.astype(target.dtype, casting="unsafe")


def divide(a: np.ndarray, b: np.ndarray, t: ScalarTraits) -> np.ndarray:
    """
    Division closed over the width `t`.

    Floats divide per IEEE-754; integers truncate toward zero and raise
    ZeroDivisionError on a zero divisor.
    """
    a = np.asarray(a, dtype=t.dtype)
    b = np.asarray(b, dtype=t.dtype)
    if t.floating:
        with ieee():
            return np.true_divide(a, b).astype(t.dtype, copy=False)

    if np.any(b == 0):
        raise ZeroDivisionError(f"{t.name} division by zero")
    with ieee():
        q = np.floor_divide(a, b)
        if t.signed:
            # floor -> truncation when the signs differ and there is a remainder
            q = q + ((np.remainder(a, b) != 0) & ((a < 0) != (b < 0)))
    return q.astype(t.dtype, copy=False)


_BINARY = {
    "add": np.add,
    "sub": np.subtract,
    "mul": np.multiply,
}


def binary(op: str, a: np.ndarray, b: np.ndarray, t: ScalarTraits) -> np.ndarray:
    """Apply one of add/sub/mul/div componentwise, keeping the width `t`."""
    if op == "div":
        return divide(a, b, t)
    with ieee():
        return _BINARY[op](a, b).astype(t.dtype, copy=False)


def negate(a: np.ndarray, t: ScalarTraits) -> np.ndarray:
    t.require(Tier.SIGNED_NUMBER, "negation")
    with ieee():
        return np.negative(a).astype(t.dtype, copy=False)
