# -*- coding: utf-8 -*-
"""Assemble a fully adjusted boundary from per-span adjustments.

Closed plans are cut at every held anchor into consecutive spans,
including the wrap span from the last anchor back to the first.  Open
plans use the interior anchor-to-anchor spans only; the open ends beyond
the first and last anchor ("tails") are propagated rigidly from the
nominal legs, without scale or rotation.

Each span is solved independently: two spans of the same plan are not
required to agree on scale or rotation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from boundary_lib.enums import Provenance
from boundary_lib.errors import InsufficientAnchorsError
from boundary_lib.models import Vector2D
from boundary_lib.plan.models import Plan
from boundary_lib.solver.base import SpanAdjuster
from boundary_lib.solver.models import AssembledGeometry
from boundary_lib.solver.models import SpanSolution
from boundary_lib.solver.segment import SegmentAdjuster

logger = logging.getLogger(__name__)


class LoopAssembler:
    """Drives a :class:`SpanAdjuster` over every span of a plan.

    Args:
        adjuster: Span adjuster, :class:`SegmentAdjuster` by default
    """

    def __init__(self, adjuster: SpanAdjuster | None = None) -> None:
        self.adjuster = adjuster if adjuster is not None else SegmentAdjuster()

    def span_pairs(self, plan: Plan, anchor_indices: list[int]) -> list[tuple[int, int]]:
        """``(start, end)`` vertex indices of every anchor-to-anchor span."""
        pairs = list(zip(anchor_indices, anchor_indices[1:], strict=False))
        if plan.closed:
            pairs.append((anchor_indices[-1], anchor_indices[0]))
        return pairs

    def _solve_span(
        self,
        plan: Plan,
        start: int,
        end: int,
        anchors: Mapping[int, Vector2D],
    ) -> SpanSolution:
        return self.adjuster.adjust(
            anchors[start],
            anchors[end],
            plan.chain(start, end),
            plan.vertices[start].id,
            plan.vertices[end].id,
        )

    def assemble(
        self,
        plan: Plan,
        anchors: Mapping[int, Vector2D],
    ) -> AssembledGeometry:
        """Adjust every vertex of *plan*.

        Args:
            plan: The nominal plan
            anchors: Held positions keyed by vertex index

        Returns:
            Adjusted positions and provenance, indexed like the vertices

        Raises:
            InsufficientAnchorsError: Fewer than two anchors
            SpanError: A span could not be closed; nothing is returned
        """
        n = plan.count
        indices = sorted(i for i in anchors if 0 <= i < n)
        if len(indices) < 2:
            raise InsufficientAnchorsError(len(indices))

        positions: list[Vector2D | None] = [None] * n
        provenance: list[Provenance | None] = [None] * n
        for i in indices:
            positions[i] = Vector2D(*anchors[i])
            provenance[i] = Provenance.HELD

        spans: list[SpanSolution] = []
        for start, end in self.span_pairs(plan, indices):
            solution = self._solve_span(plan, start, end, anchors)
            spans.append(solution)
            for offset, position in enumerate(solution.interior, start=1):
                j = (start + offset) % n
                positions[j] = position
                provenance[j] = solution.provenance

        if not plan.closed:
            first = indices[0]
            last = indices[-1]
            for j in range(first - 1, -1, -1):
                positions[j] = positions[j + 1] - plan.legs[j].vector
                provenance[j] = Provenance.BEARING_DISTANCE
            for j in range(last + 1, n):
                positions[j] = positions[j - 1] + plan.legs[j - 1].vector
                provenance[j] = Provenance.BEARING_DISTANCE

        logger.info(
            "Assembled %d vertices from %d anchors in %d span(s) with %s",
            n,
            len(indices),
            len(spans),
            self.adjuster.name,
        )

        return AssembledGeometry(
            positions=[p for p in positions if p is not None],
            provenance=[p for p in provenance if p is not None],
            spans=spans,
        )
