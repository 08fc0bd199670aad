# -*- coding: utf-8 -*-
"""Residuals of adjusted vertices against field evidence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from boundary_lib.config import DEFAULT_CONFIG
from boundary_lib.config import AdjustmentConfig
from boundary_lib.enums import ResidualTier
from boundary_lib.evidence.models import EvidenceLinks
from boundary_lib.evidence.models import EvidencePoint
from boundary_lib.models import Vector2D
from boundary_lib.plan.models import Plan


@dataclass(frozen=True)
class Residual:
    """Discrepancy between an adjusted vertex and its evidence.

    Attributes:
        plan_id: Vertex id
        index: Vertex index in the plan
        evidence: The evidence point used
        adjusted: Adjusted vertex position
        vector: ``evidence - adjusted``
        length: Length of ``vector``
        tier: Severity tier
    """

    plan_id: str
    index: int
    evidence: EvidencePoint
    adjusted: Vector2D
    vector: Vector2D
    length: float
    tier: ResidualTier

    @property
    def is_discrepancy(self) -> bool:
        return self.tier != ResidualTier.EXACT


def classify_residual(
    length: float, config: AdjustmentConfig = DEFAULT_CONFIG
) -> ResidualTier:
    if length < config.residual_min_arrow:
        return ResidualTier.EXACT
    if length < config.residual_green:
        return ResidualTier.GREEN
    if length < config.residual_yellow:
        return ResidualTier.YELLOW
    return ResidualTier.RED


def classify_residuals(
    plan: Plan,
    positions: Sequence[Vector2D],
    evidence: EvidenceLinks,
    config: AdjustmentConfig = DEFAULT_CONFIG,
) -> list[Residual]:
    """Residual for every vertex with linked evidence, in vertex order.

    When several points name the same vertex the first held one is used,
    falling back to the first point.
    """
    by_id = evidence.by_plan_id()
    residuals: list[Residual] = []
    for i, vertex in enumerate(plan.vertices):
        point = by_id.get(vertex.id.strip().casefold())
        if point is None:
            continue
        adjusted = positions[i]
        vector = point.position - adjusted
        residuals.append(
            Residual(
                plan_id=vertex.id,
                index=i,
                evidence=point,
                adjusted=adjusted,
                vector=vector,
                length=vector.length,
                tier=classify_residual(vector.length, config),
            )
        )
    return residuals
