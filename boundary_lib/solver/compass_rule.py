# -*- coding: utf-8 -*-
"""Compass-rule span adjustment.

The chain is walked from the start anchor with its nominal vectors; the
misclosure at the end anchor is then distributed over the legs in
proportion to their length (Bowditch / compass rule).

Locked legs take no share of the correction.  A span that misses its end
anchor by more than the locked tolerance and has no free length left
cannot be closed; a smaller gap is left on the last leg as ``end_gap``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from boundary_lib.constants import FREE_VECTOR_EPSILON
from boundary_lib.constants import LOCKED_SPAN_TOLERANCE
from boundary_lib.enums import Provenance
from boundary_lib.errors import NoFreeLegSpanError
from boundary_lib.models import Vector2D
from boundary_lib.plan.models import Leg
from boundary_lib.solver.base import SpanAdjuster
from boundary_lib.solver.models import SpanSolution
from boundary_lib.solver.segment import split_chain

logger = logging.getLogger(__name__)


class CompassRuleAdjuster(SpanAdjuster):
    """Distributes span misclosure along free legs by length."""

    def __init__(self, locked_tolerance: float = LOCKED_SPAN_TOLERANCE) -> None:
        self.locked_tolerance = locked_tolerance

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

        locked, free = split_chain(chain)
        nominal = locked + free
        correction = end - (start + nominal)
        misclosure = correction.length

        free_length = math.fsum(leg.distance for leg in chain if not leg.locked)
        if free_length < FREE_VECTOR_EPSILON:
            if misclosure > self.locked_tolerance:
                raise NoFreeLegSpanError(
                    start_id, end_id, nominal.length, (end - start).length
                )
            free_length = 1.0

        positions = [start]
        for leg in chain:
            delta = leg.vector
            if not leg.locked:
                delta = delta + correction * (leg.distance / free_length)
            positions.append(positions[-1] + delta)
        end_gap = positions[-1].distance_to(end)
        positions[-1] = end

        target = end - start
        if nominal.length < FREE_VECTOR_EPSILON:
            scale = 1.0
            rotation = 0.0
        else:
            scale = target.length / nominal.length
            rotation = math.atan2(nominal.cross(target), nominal.dot(target))

        locked_count = sum(1 for leg in chain if leg.locked)
        logger.debug(
            "Span %s -> %s (compass rule): %d legs (%d locked) misclosure=%.4f",
            start_id,
            end_id,
            len(chain),
            locked_count,
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
            provenance=Provenance.COMPASS_RULE,
            end_gap=end_gap,
        )
