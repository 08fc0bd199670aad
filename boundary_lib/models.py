# -*- coding: utf-8 -*-
"""Core geometric primitives shared by the plan, evidence and solver modules.

Azimuths are in radians, measured counter-clockwise from the +X (east)
axis and normalized into ``[0, 2pi)``.
"""

from __future__ import annotations

import math
from typing import NamedTuple

TWO_PI = 2.0 * math.pi


def normalize_azimuth(angle: float) -> float:
    """Normalise an angle to ``[0, 2pi)``."""
    a = math.fmod(angle, TWO_PI)
    if a < 0:
        a += TWO_PI
    # fmod of a tiny negative value can round up to exactly 2pi
    if a >= TWO_PI:
        a = 0.0
    return a


class Vector2D(NamedTuple):
    """An immutable planar vector (x = east, y = north)."""

    x: float
    y: float

    def __add__(self, other: Vector2D) -> Vector2D:  # type: ignore[override]
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2D:  # type: ignore[override]
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2D:
        return self.__mul__(scalar)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    @property
    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    @property
    def azimuth(self) -> float:
        """Direction of the vector, normalised to ``[0, 2pi)``."""
        return normalize_azimuth(math.atan2(self.y, self.x))

    def dot(self, other: Vector2D) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2D) -> float:
        return self.x * other.y - self.y * other.x

    def rotated(self, angle: float) -> Vector2D:
        """Rotate counter-clockwise by *angle* radians."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Vector2D(c * self.x - s * self.y, s * self.x + c * self.y)

    def distance_to(self, other: Vector2D) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    @classmethod
    def from_polar(cls, distance: float, azimuth: float) -> Vector2D:
        """``(distance, azimuth)`` -> cartesian delta."""
        return cls(distance * math.cos(azimuth), distance * math.sin(azimuth))


ZERO = Vector2D(0.0, 0.0)
