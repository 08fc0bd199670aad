# -*- coding: utf-8 -*-
"""Lock-aware span adjustment by one scale and one rotation.

For a chain of legs between two fixed anchors the adjuster finds a
single scale ``s`` (applied to free legs only) and a single rotation
``phi`` (applied to every leg) such that the rotated chain ends exactly
on the end anchor.

Algorithm
---------
Let ``L`` be the sum of the locked leg vectors, ``F`` the sum of the
free leg vectors and ``v = end - start``.  Rotation preserves length, so
``s`` must satisfy ``|L + s F| = |v|``::

    a = F.F    b = 2 L.F    c = L.L - v.v    a s^2 + b s + c = 0

Only positive roots are kept and the one closest to 1.0 wins.  When
``a`` vanishes (no free legs, or free legs cancelling out) the chain can
only be rotated, which requires ``|L| == |v|`` within the locked
tolerance; the remaining gap is absorbed by the last leg when the end
vertex is snapped onto the anchor and is reported as ``end_gap``.

The rotation is ``phi = angle(v) - angle(L + s F)`` and the vertices
are obtained by walking the chain from ``start`` with locked lengths
kept, free lengths scaled by ``s`` and every azimuth turned by ``phi``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from boundary_lib.constants import DISCRIMINANT_EPSILON
from boundary_lib.constants import FREE_VECTOR_EPSILON
from boundary_lib.constants import LOCKED_SPAN_TOLERANCE
from boundary_lib.enums import Provenance
from boundary_lib.errors import NoFreeLegSpanError
from boundary_lib.errors import UnreachableSpanError
from boundary_lib.models import ZERO
from boundary_lib.models import Vector2D
from boundary_lib.plan.models import Leg
from boundary_lib.solver.base import SpanAdjuster
from boundary_lib.solver.models import SpanSolution

logger = logging.getLogger(__name__)


def split_chain(chain: Sequence[Leg]) -> tuple[Vector2D, Vector2D]:
    """Summed ``(locked, free)`` leg vectors of a chain."""
    locked = ZERO
    free = ZERO
    for leg in chain:
        if leg.locked:
            locked = locked + leg.vector
        else:
            free = free + leg.vector
    return locked, free


def positive_roots(a: float, b: float, c: float) -> list[float]:
    """Positive real roots of ``a s^2 + b s + c = 0`` (``a > 0``).

    A negative discriminant that is tiny relative to the coefficients is
    clamped to zero.  The roots are computed with the cancellation-free
    form ``q = -(b + sign(b) sqrt(D)) / 2``, ``s = q / a`` and ``c / q``.
    """
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        if -disc > DISCRIMINANT_EPSILON * max(b * b, abs(4.0 * a * c), 1.0):
            return []
        disc = 0.0

    sqrt_d = math.sqrt(disc)
    q = -0.5 * (b + math.copysign(sqrt_d, b))
    roots = [q / a]
    if q != 0.0:
        roots.append(c / q)
    return [r for r in roots if r > 0.0]


def walk(
    start: Vector2D,
    chain: Sequence[Leg],
    scale: float,
    rotation: float,
) -> list[Vector2D]:
    """Positions from *start* with free legs scaled and every leg rotated."""
    positions = [start]
    for leg in chain:
        length = leg.distance if leg.locked else leg.distance * scale
        positions.append(
            positions[-1] + Vector2D.from_polar(length, leg.azimuth + rotation)
        )
    return positions


class SegmentAdjuster(SpanAdjuster):
    """Closes a span with one free-leg scale and one rotation.

    Args:
        locked_tolerance: Allowed ``||L| - |v||`` for spans that can only
            be rotated; an accepted gap lands on the last leg
    """

    def __init__(self, locked_tolerance: float = LOCKED_SPAN_TOLERANCE) -> None:
        self.locked_tolerance = locked_tolerance

    def solve_scale(
        self,
        locked: Vector2D,
        free: Vector2D,
        target: Vector2D,
        start_id: str = "",
        end_id: str = "",
    ) -> float:
        """Scale of the free legs that gives the chain the target length.

        Raises:
            NoFreeLegSpanError: No free length and a length mismatch
            UnreachableSpanError: No positive scale closes the span
        """
        a = free.dot(free)
        if a < FREE_VECTOR_EPSILON:
            if abs(locked.length - target.length) > self.locked_tolerance:
                raise NoFreeLegSpanError(
                    start_id, end_id, locked.length, target.length
                )
            return 1.0

        b = 2.0 * locked.dot(free)
        c = locked.dot(locked) - target.dot(target)
        roots = positive_roots(a, b, c)
        if not roots:
            raise UnreachableSpanError(
                f"No positive scale of the free legs reaches {target.length:.6f}",
                start_id,
                end_id,
            )
        return min(roots, key=lambda r: abs(r - 1.0))

    def adjust(
        self,
        start: Vector2D,
        end: Vector2D,
        chain: Sequence[Leg],
        start_id: str = "",
        end_id: str = "",
    ) -> SpanSolution:
        if not chain:
            raise ValueError("Cannot adjust an empty chain")

        target = end - start
        locked, free = split_chain(chain)
        scale = self.solve_scale(locked, free, target, start_id, end_id)

        composed = locked + free * scale
        if composed.length < FREE_VECTOR_EPSILON or target.length < FREE_VECTOR_EPSILON:
            rotation = 0.0
        else:
            rotation = math.atan2(target.y, target.x) - math.atan2(
                composed.y, composed.x
            )
            rotation = math.atan2(math.sin(rotation), math.cos(rotation))

        positions = walk(start, chain, scale, rotation)
        end_gap = positions[-1].distance_to(end)
        positions[-1] = end

        locked_count = sum(1 for leg in chain if leg.locked)
        misclosure = (start + locked + free).distance_to(end)

        logger.debug(
            "Span %s -> %s: %d legs (%d locked) s=%.9f phi=%.6f deg misclosure=%.4f",
            start_id,
            end_id,
            len(chain),
            locked_count,
            scale,
            math.degrees(rotation),
            misclosure,
        )

        return SpanSolution(
            start_id=start_id,
            end_id=end_id,
            positions=positions,
            scale=scale,
            rotation=rotation,
            misclosure=misclosure,
            locked_count=locked_count,
            free_count=len(chain) - locked_count,
            end_gap=end_gap,
            provenance=(
                Provenance.SIMILARITY_BETWEEN_LOCKED
                if locked_count
                else Provenance.SIMILARITY_BETWEEN
            ),
        )
