# vecmath/geometry.py
"""
CLOSEST-POINT QUERIES
=====================

PURPOSE:
--------
Given a query point p and a shape, return the point of the shape nearest
to p (straight-line distance). Every query works for Vec2, Vec3 and Vec4
alike; the dimension comes from the arguments.

    closest_point_on_line     segment l1-l2
    closest_point_on_aabb     axis-aligned box [aabb_min, aabb_max]
    closest_point_on_sphere   sphere / circle with center s and radius r
    closest_point_on_ray      ray from r0 along rv
    closest_point_on_obb      box [-1, 1]^n carried into place by a matrix

DEGENERATE SHAPES:
------------------
A zero-length segment, a zero ray direction, and p sitting exactly on a
sphere's center all need a direction that does not exist. They go through
normalize() and therefore follow the configured zero_length_policy:

    "zero"       (default)  segment -> l1, ray -> r0, sphere -> s
    "propagate"             nan components
    "raise"                 ZeroLengthError

A singular OBB matrix produces inf/nan, never an exception.
"""

import numpy as np

from .kernel.num import ieee
from .ops import NumberOps, VecFloatOps, VecN


def closest_point_on_line(l1, l2, p):
    """
    Closest point to p on the segment l1-l2.

    p is projected onto the unit direction of the segment and the scalar
    projection t is clamped to [0, |l2 - l1|].
    """
    v1 = p - l1
    v2 = VecFloatOps.normalize(l2 - l1)
    t = VecN.dot(v2, v1)
    if t < 0:
        return l1
    if t > VecFloatOps.dist(l1, l2):
        return l2
    return l1 + v2 * t


def closest_point_on_aabb(aabb_min, aabb_max, p):
    """Closest point to p on/in the box; a point inside is returned unchanged."""
    return NumberOps.min(NumberOps.max(p, aabb_min), aabb_max)


def closest_point_on_sphere(s, r, p):
    """Closest point to p on the surface of the sphere (circle) s with radius r."""
    return s + VecFloatOps.normalize(p - s) * s.dtype.type(r)


def closest_point_on_ray(r0, rv, p):
    """
    Closest point to p on the ray starting at r0 with direction rv.

    rv does not need to be unit length: the projection is taken along the
    normalized direction, so the answer is the same for rv and 5 * rv.
    Points behind the origin clamp to r0; there is no far end.
    """
    direction = VecFloatOps.normalize(rv)
    t = VecN.dot(p - r0, direction)
    if t < 0:
        return r0
    return r0 + direction * t


def closest_point_on_obb(mat, p):
    """
    Closest point to p on the oriented box described by `mat`.

    `mat` carries the axis-aligned box [-1, 1]^n centred on the origin into
    the OBB (translation * rotation * half-extents scale). p is pulled into
    box space with the inverse, clamped there, and pushed back out.
    """
    box_space = mat.inverse() * p
    local = closest_point_on_aabb(type(p).minus_one(p.dtype), type(p).one(p.dtype), box_space)
    return mat * local


def point_inside_aabb(aabb_min, aabb_max, p) -> bool:
    """
    True if p lies in the box on every component (boundary included).

    p is inside exactly when clamping it to the box leaves it unchanged;
    a nan component is never inside.
    """
    return bool(closest_point_on_aabb(aabb_min, aabb_max, p) == p)


def point_inside_sphere(s, r, p) -> bool:
    """True if p lies in the sphere (circle) s with radius r (boundary included)."""
    with ieee():
        return bool(VecFloatOps.dist2(p, s) <= r * r)


def point_inside_obb(mat, p) -> bool:
    """True if p lies in the oriented box described by `mat` (boundary included)."""
    box_space = np.asarray(mat.inverse() * p)
    with ieee():
        return bool(np.all(np.abs(box_space) <= 1))
