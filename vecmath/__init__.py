# vecmath - Dimension-generic vector math for 2D/3D/4D geometry
"""
VECMATH: Vectors, Matrices and Closest-Point Queries
====================================================

This package provides:
- Vec2 / Vec3 / Vec4 value types over ten scalar widths
  (float32/64, int8..int64, uint8..uint64)
- Free functions (min, clamp, lerp, normalize, dot, ...) that work the same
  on scalars and on vectors of any dimension
- Closest-point queries on segments, boxes, spheres, rays and oriented boxes
- Mat2 / Mat3 / Mat34 / Mat4 and Quat, as needed by the queries

ARCHITECTURE:
-------------
    kernel/         Scalar capability tiers (Number, SignedNumber, Integer, Float)
    vec.py          Vec2, Vec3, Vec4 and per-width constructors (vec3f, vec2i, ...)
    ops.py          Capability-dispatch traits shared by scalars and vectors
    functions.py    Free-function API over ops.py
    geometry.py     Closest-point queries
    mat.py          Matrices: inverse, point transform, composition
    quat.py         Rotation quaternions
    config.py       Numeric edge-case policy
"""

# Numeric policy
from .config import MathConfig, configure, get_config, restore
from .kernel import (
    CapabilityError,
    ScalarTraits,
    Tier,
    is_float,
    is_integer,
    is_number,
    is_signed_number,
    traits,
)
from .vec import (
    Vec, Vec2, Vec3, Vec4,
    vec2f, vec3f, vec4f,
    vec2d, vec3d, vec4d,
    vec2i, vec3i, vec4i,
    vec2u, vec3u, vec4u,
)
from .ops import (
    FloatOps,
    NumberOps,
    SignedNumberOps,
    VecFloatOps,
    VecN,
    ZeroLengthError,
)
from .functions import (
    abs, acos, approx, asin, atan, atan2, ceil, clamp, cos, cosh, cross,
    deg_to_rad, dist, dist2, distance, dot, exp, exp2, floor, frac, is_finite,
    is_inf, is_nan, length, lerp, log, log2, log10, mag, mag2, max, min,
    normalize, perp, powf, powi, rad_to_deg, recip, reflect, refract, round,
    rsqrt, saturate, sign, sin, sinh, smoothstep, sqrt, step, tan, tanh, trunc,
)
from .geometry import (
    closest_point_on_aabb,
    closest_point_on_line,
    closest_point_on_obb,
    closest_point_on_ray,
    closest_point_on_sphere,
    point_inside_aabb,
    point_inside_obb,
    point_inside_sphere,
)
from .mat import Mat, Mat2, Mat3, Mat34, Mat4
from .quat import Quat

# Version
__version__ = "0.1.0"
