# -*- coding: utf-8 -*-
"""Data structures for the adjustment solvers.

This module is decoupled from text parsing and evidence handling.  It
operates purely on planar vectors, control pairs and per-span results
so that every solver can be tested in isolation.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field

import numpy as np

from boundary_lib.enums import Provenance
from boundary_lib.models import Vector2D

# ---------------------------------------------------------------------------
# Similarity fit
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ControlPair:
    """A nominal point and the field point it should map onto."""

    source: Vector2D
    target: Vector2D
    weight: float = 1.0


def pair_arrays(
    pairs: Sequence[ControlPair],
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """``(source (N, 2), target (N, 2), weight (N,))`` float arrays."""
    src = np.array([p.source for p in pairs], dtype=np.float64).reshape(-1, 2)
    dst = np.array([p.target for p in pairs], dtype=np.float64).reshape(-1, 2)
    w = np.array([p.weight for p in pairs], dtype=np.float64)
    return src, dst, w


@dataclass(frozen=True)
class SimilarityTransform:
    """``p' = scale * R * p + t`` with ``R`` given by ``(cos, sin)``."""

    scale: float
    cos: float
    sin: float
    tx: float
    ty: float

    @classmethod
    def identity(cls) -> SimilarityTransform:
        return cls(scale=1.0, cos=1.0, sin=0.0, tx=0.0, ty=0.0)

    @property
    def rotation(self) -> float:
        """Rotation angle in radians, counter-clockwise, in ``(-pi, pi]``."""
        return math.atan2(self.sin, self.cos)

    @property
    def translation(self) -> Vector2D:
        return Vector2D(self.tx, self.ty)

    @property
    def matrix(self) -> np.ndarray:
        """The 2x2 scaled rotation matrix ``scale * R``."""
        return self.scale * np.array(
            [[self.cos, -self.sin], [self.sin, self.cos]], dtype=np.float64
        )

    def apply(self, point: Vector2D) -> Vector2D:
        k = self.scale
        return Vector2D(
            k * (self.cos * point.x - self.sin * point.y) + self.tx,
            k * (self.sin * point.x + self.cos * point.y) + self.ty,
        )

    def apply_many(self, points: Iterable[Vector2D]) -> list[Vector2D]:
        pts = np.array(list(points), dtype=np.float64).reshape(-1, 2)
        out = pts @ self.matrix.T + np.array([self.tx, self.ty])
        return [Vector2D(float(x), float(y)) for x, y in out]

    def rms(self, pairs: Sequence[ControlPair]) -> float:
        """Weighted RMS of ``|T(source) - target|`` over *pairs*."""
        if not pairs:
            return 0.0
        src, dst, w = pair_arrays(pairs)
        mapped = src @ self.matrix.T + np.array([self.tx, self.ty])
        ss = float(np.sum(w * np.sum((mapped - dst) ** 2, axis=1)))
        return math.sqrt(ss / max(1e-12, float(np.sum(w))))


# ---------------------------------------------------------------------------
# Span adjustment
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SpanSolution:
    """The adjusted geometry of one anchor-to-anchor span.

    Attributes:
        start_id: Vertex id of the starting anchor
        end_id: Vertex id of the ending anchor
        positions: Positions from the start anchor to the end anchor,
            both included
        scale: Factor applied to free legs (1.0 when none)
        rotation: Rotation applied to every leg, radians
        misclosure: Nominal gap ``|start + sum(legs) - end|``
        locked_count: Number of locked legs in the span
        free_count: Number of free legs in the span
        provenance: Tag given to the interior vertices
        end_gap: Distance between the walked chain end and the end anchor,
            absorbed by the last leg when the end is snapped onto the anchor
    """

    start_id: str
    end_id: str
    positions: list[Vector2D]
    scale: float
    rotation: float
    misclosure: float
    locked_count: int
    free_count: int
    provenance: Provenance
    end_gap: float = 0.0

    @property
    def interior(self) -> list[Vector2D]:
        """Positions strictly between the two anchors."""
        return self.positions[1:-1]


@dataclass
class AssembledGeometry:
    """Adjusted positions of every vertex of a plan.

    ``positions`` and ``provenance`` are indexed like ``plan.vertices``.
    """

    positions: list[Vector2D]
    provenance: list[Provenance]
    spans: list[SpanSolution] = field(default_factory=list)
