"""Small 3D vector and quaternion helpers used for spatial audio."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Quaternion:
    """A quaternion with scalar part ``s`` and vector part ``v``.

    The default value is the identity rotation.
    """

    s: float = 1.0
    v: Vec3 = (0.0, 0.0, 0.0)


def _vec(v: Sequence[float]) -> Vec3:
    x, y, z = v
    return (float(x), float(y), float(z))


def norm(v: Sequence[float]) -> float:
    """Euclidean length of ``v``."""
    return math.sqrt(sum(c * c for c in v))


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product of ``a`` and ``b``."""
    return sum(x * y for x, y in zip(a, b, strict=True))


def scale(v: Sequence[float], f: float) -> Vec3:
    """Multiply every component of ``v`` by ``f``."""
    x, y, z = v
    return (x * f, y * f, z * f)


def sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Component-wise ``a - b``."""
    ax, ay, az = a
    bx, by, bz = b
    return (ax - bx, ay - by, az - bz)


def add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Component-wise ``a + b``."""
    ax, ay, az = a
    bx, by, bz = b
    return (ax + bx, ay + by, az + bz)


def mix(a: Sequence[float], b: Sequence[float], r: float) -> Vec3:
    """Linear blend of ``a`` and ``b``: ``a`` at ``r == 0``, ``b`` at ``r == 1``."""
    ir = 1.0 - r
    ax, ay, az = a
    bx, by, bz = b
    return (ir * ax + r * bx, ir * ay + r * by, ir * az + r * bz)


def invert_quat(q: Quaternion) -> Quaternion:
    """Conjugate of ``q``; the inverse rotation for a unit quaternion."""
    x, y, z = q.v
    return Quaternion(q.s, (-x, -y, -z))


def quat_mul(q: Quaternion, r: Quaternion) -> Quaternion:
    """Hamilton product ``q * r``."""
    qx, qy, qz = q.v
    rx, ry, rz = r.v
    return Quaternion(
        q.s * r.s - qx * rx - qy * ry - qz * rz,
        (
            q.s * rx + qx * r.s + qy * rz - qz * ry,
            q.s * ry - qx * rz + qy * r.s + qz * rx,
            q.s * rz + qx * ry - qy * rx + qz * r.s,
        ),
    )


def rotate(rot: Quaternion, p: Sequence[float]) -> Vec3:
    """Rotate point ``p`` by unit quaternion ``rot``."""
    return quat_mul(rot, quat_mul(Quaternion(0.0, _vec(p)), invert_quat(rot))).v


def rem_euclid(x: float, rhs: float) -> float:
    """Euclidean remainder: the result is never negative."""
    r = math.fmod(x, rhs)
    return r + abs(rhs) if r < 0.0 else r