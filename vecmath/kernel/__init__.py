# vecmath/kernel - Width-agnostic scalar core
"""
KERNEL: THE SCALAR FOUNDATION
=============================

Everything above this package (vectors, matrices, quaternions, free
functions, geometric queries) is written once and instantiated for ten
scalar widths. This package is where a width is classified:

- which tier it belongs to (Number, SignedNumber, Integer, Float)
- its identities zero(), one(), minus_one()
- how + - * / close over it (wrap, truncate, IEEE-754)

The containers (Vec2/3/4, Mat*, Quat) never look at a concrete dtype;
they ask the kernel.
"""

from .num import (
    CapabilityError,
    ScalarTraits,
    Tier,
    is_float,
    is_integer,
    is_number,
    is_signed_number,
    minus_one,
    one,
    traits,
    zero,
)

__all__ = [
    'CapabilityError', 'ScalarTraits', 'Tier', 'traits',
    'is_number', 'is_signed_number', 'is_integer', 'is_float',
    'zero', 'one', 'minus_one',
]
