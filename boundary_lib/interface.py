# -*- coding: utf-8 -*-
"""Unified interface for boundary adjustment.

This module provides the primary entry point of the library:

1. Call text is parsed to a dictionary, validated into a ``CallList``
   and integrated into a nominal ``Plan``
2. Held evidence is resolved against the plan's vertex ids
3. A global similarity transform is fitted and checked by the scale guard
4. Every anchor-to-anchor span is adjusted and assembled
5. Residuals are classified against the evidence

Inputs are never mutated; every run returns a new ``AdjustmentResult``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from dataclasses import field

from boundary_lib.angle.format import format_bearing
from boundary_lib.config import DEFAULT_CONFIG
from boundary_lib.config import AdjustmentConfig
from boundary_lib.enums import Provenance
from boundary_lib.enums import WarningCode
from boundary_lib.errors import AdjustmentWarning
from boundary_lib.errors import DegenerateFitError
from boundary_lib.errors import InsufficientAnchorsError
from boundary_lib.evidence.models import EvidenceLinks
from boundary_lib.models import Vector2D
from boundary_lib.plan.builder import build_plan
from boundary_lib.plan.models import Plan
from boundary_lib.plan.models import outline_is_simple
from boundary_lib.plan.parser import CallListParser
from boundary_lib.solver.assembler import LoopAssembler
from boundary_lib.solver.base import SpanAdjuster
from boundary_lib.solver.guard import ConfirmScale
from boundary_lib.solver.guard import ScaleDecision
from boundary_lib.solver.guard import decide_scale
from boundary_lib.solver.models import ControlPair
from boundary_lib.solver.models import SpanSolution
from boundary_lib.solver.residuals import Residual
from boundary_lib.solver.residuals import classify_residuals
from boundary_lib.solver.segment import SegmentAdjuster
from boundary_lib.solver.similarity import solve_similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportRow:
    """One vertex of the adjustment report.

    Field values are ``None`` for vertices without linked evidence; the
    segment values are ``None`` for the last vertex of an open plan.
    """

    plan_id: str
    held: bool
    field_x: float | None
    field_y: float | None
    adj_x: float
    adj_y: float
    residual: float | None
    evidence_type: str
    seg_distance: float | None
    seg_bearing: str | None
    scale: float
    rotation_deg: float


@dataclass
class AdjustmentResult:
    """Outcome of one adjustment run.

    Attributes:
        plan: The nominal plan that was adjusted
        positions: Adjusted position per vertex
        provenance: How each position was obtained
        spans: Per-span solutions
        residuals: Residuals of every evidence-linked vertex
        decision: Scale guard decision for the global transform
        nominal_in_field: Nominal vertices mapped by the chosen transform
        warnings: Non-fatal issues found during the run
    """

    plan: Plan
    positions: list[Vector2D]
    provenance: list[Provenance]
    spans: list[SpanSolution]
    residuals: list[Residual]
    decision: ScaleDecision
    nominal_in_field: list[Vector2D]
    warnings: list[AdjustmentWarning] = field(default_factory=list)

    def position_of(self, vertex_id: str) -> Vector2D:
        index = self.plan.index_of(vertex_id)
        if index < 0:
            raise KeyError(vertex_id)
        return self.positions[index]

    @property
    def discrepancies(self) -> list[Residual]:
        """Residuals that are not exact matches."""
        return [r for r in self.residuals if r.is_discrepancy]

    def report_rows(self) -> list[ReportRow]:
        """One report row per vertex, in vertex order."""
        by_index = {r.index: r for r in self.residuals}
        transform = self.decision.transform
        rotation_deg = math.degrees(transform.rotation)

        rows: list[ReportRow] = []
        for i, vertex in enumerate(self.plan.vertices):
            residual = by_index.get(i)
            leg = self.plan.leg_from(i)
            evidence = residual.evidence if residual else None
            rows.append(
                ReportRow(
                    plan_id=vertex.id,
                    held=bool(evidence and evidence.held),
                    field_x=evidence.x if evidence else None,
                    field_y=evidence.y if evidence else None,
                    adj_x=self.positions[i].x,
                    adj_y=self.positions[i].y,
                    residual=residual.length if residual else None,
                    evidence_type=evidence.evidence_type if evidence else "",
                    seg_distance=leg.distance if leg else None,
                    seg_bearing=format_bearing(leg.azimuth) if leg else None,
                    scale=transform.scale,
                    rotation_deg=rotation_deg,
                )
            )
        return rows


def _warn(
    warnings: list[AdjustmentWarning],
    code: WarningCode,
    message: str,
    plan_id: str | None = None,
) -> None:
    warning = AdjustmentWarning(code=code, message=message, plan_id=plan_id)
    logger.warning("%s", warning)
    warnings.append(warning)


class BoundaryInterface:
    """Unified interface for boundary adjustment.

    Example:
        plan = BoundaryInterface.build_plan_from_text(calls_text)
        evidence = EvidenceLinks(points=[...])
        result = BoundaryInterface.adjust(plan, evidence)

        for row in result.report_rows():
            print(row.plan_id, row.adj_x, row.adj_y, row.residual)
    """

    # -------------------------------------------------------------------------
    # Plan construction
    # -------------------------------------------------------------------------

    @classmethod
    def build_plan_from_text(
        cls,
        text: str,
        *,
        source: str = "<string>",
        combined_scale_factor: float | None = None,
        config: AdjustmentConfig | None = None,
    ) -> Plan:
        """Parse a block of calls and integrate it into a plan.

        Args:
            text: Call lines (see :mod:`boundary_lib.plan.parser`)
            source: Source identifier for error messages
            combined_scale_factor: Overrides a ``# CSF=`` header
            config: Thresholds (closure tolerance)

        Returns:
            The nominal plan

        Raises:
            ParseError: On the first malformed line
        """
        config = config or DEFAULT_CONFIG
        calls = CallListParser().parse_string(text, source)
        csf = (
            combined_scale_factor
            if combined_scale_factor is not None
            else calls.combined_scale_factor
        )
        return build_plan(
            calls.calls,
            combined_scale_factor=csf,
            closure_tolerance=config.closure_tolerance,
        )

    # -------------------------------------------------------------------------
    # Adjustment
    # -------------------------------------------------------------------------

    @classmethod
    def resolve_anchors(
        cls,
        plan: Plan,
        evidence: EvidenceLinks,
        warnings: list[AdjustmentWarning],
    ) -> dict[int, Vector2D]:
        """Held evidence positions keyed by vertex index.

        Unresolved plan ids are reported and skipped; for a vertex held
        more than once the first point wins.
        """
        anchors: dict[int, Vector2D] = {}
        for point in evidence.linked_points:
            index = plan.index_of(point.plan_id)
            if index < 0:
                _warn(
                    warnings,
                    WarningCode.UNRESOLVED_REFERENCE,
                    f"Evidence plan id {point.plan_id!r} is not in the plan; skipping",
                    point.plan_id,
                )
                continue
            if not point.held:
                continue
            if index in anchors:
                _warn(
                    warnings,
                    WarningCode.DUPLICATE_EVIDENCE,
                    "Vertex is held by more than one evidence point; using the first",
                    plan.vertices[index].id,
                )
                continue
            anchors[index] = point.position
        return anchors

    @classmethod
    def adjust(
        cls,
        plan: Plan,
        evidence: EvidenceLinks,
        *,
        config: AdjustmentConfig | None = None,
        confirm: ConfirmScale | None = None,
        adjuster: SpanAdjuster | None = None,
    ) -> AdjustmentResult:
        """Adjust *plan* to the held *evidence*.

        Args:
            plan: The nominal plan
            evidence: Field evidence linked to plan vertex ids
            config: Thresholds, :data:`DEFAULT_CONFIG` when omitted
            confirm: Optional scale confirmation callback
            adjuster: Span adjuster, :class:`SegmentAdjuster` by default

        Returns:
            The adjustment result

        Raises:
            InsufficientAnchorsError: Fewer than two held, resolved anchors
            DegenerateFitError: The global transform cannot be determined
            SpanError: A span cannot be closed
        """
        config = config or DEFAULT_CONFIG
        if adjuster is None:
            adjuster = SegmentAdjuster(locked_tolerance=config.locked_span_tolerance)

        warnings: list[AdjustmentWarning] = []
        anchors = cls.resolve_anchors(plan, evidence, warnings)
        if len(anchors) < 2:
            raise InsufficientAnchorsError(len(anchors))

        pairs = [
            ControlPair(source=plan.vertices[i].position, target=anchors[i])
            for i in sorted(anchors)
        ]
        free_fit = solve_similarity(pairs, lock_scale=False)
        locked_fit = solve_similarity(pairs, lock_scale=True)
        if free_fit is None or locked_fit is None:
            raise DegenerateFitError(
                f"Cannot solve similarity transform from {len(pairs)} held pair(s)"
            )
        decision = decide_scale(
            pairs, free_fit, locked_fit, confirm=confirm, config=config
        )
        nominal_in_field = decision.transform.apply_many(plan.positions)

        geometry = LoopAssembler(adjuster).assemble(plan, anchors)

        for span in geometry.spans:
            if span.misclosure > config.closure_warning:
                _warn(
                    warnings,
                    WarningCode.CLOSURE_EXCEEDED,
                    f"Closure {span.misclosure:.3f} between {span.start_id} and "
                    f"{span.end_id} exceeds {config.closure_warning:.3f}",
                    span.start_id,
                )

        if plan.closed and not outline_is_simple(geometry.positions, closed=True):
            _warn(
                warnings,
                WarningCode.SELF_INTERSECTION,
                "Adjusted boundary crosses itself",
            )

        residuals = classify_residuals(plan, geometry.positions, evidence, config)

        logger.info(
            "Adjustment done: %d vertices, %d anchors, %s, %d residual(s), "
            "%d warning(s)",
            plan.count,
            len(anchors),
            "scale applied" if decision.used_scale else "scale locked",
            len(residuals),
            len(warnings),
        )

        return AdjustmentResult(
            plan=plan,
            positions=geometry.positions,
            provenance=geometry.provenance,
            spans=geometry.spans,
            residuals=residuals,
            decision=decision,
            nominal_in_field=nominal_in_field,
            warnings=warnings,
        )
