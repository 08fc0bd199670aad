# -*- coding: utf-8 -*-
"""Attach unlinked evidence points to their nearest plan vertex."""

from __future__ import annotations

import logging
import math

from boundary_lib.config import DEFAULT_CONFIG
from boundary_lib.config import AdjustmentConfig
from boundary_lib.evidence.models import EvidenceLinks
from boundary_lib.evidence.models import EvidencePoint
from boundary_lib.models import Vector2D
from boundary_lib.plan.models import Plan

logger = logging.getLogger(__name__)


def nearest_plan_id(
    point: Vector2D,
    plan: Plan,
    max_distance: float = DEFAULT_CONFIG.nearest_vertex_max_distance,
) -> str:
    """Id of the plan vertex closest to *point*.

    Returns:
        The vertex id, or ``""`` when no vertex lies within *max_distance*
    """
    best_id = ""
    best = math.inf
    for vertex in plan.vertices:
        d = vertex.position.distance_to(point)
        if d < best:
            best = d
            best_id = vertex.id
    return best_id if best <= max_distance else ""


def link_evidence(
    evidence: EvidenceLinks,
    plan: Plan,
    config: AdjustmentConfig = DEFAULT_CONFIG,
) -> EvidenceLinks:
    """Return a copy of *evidence* where unlinked points carry a plan id.

    Points that already name a vertex keep it.  Points with no vertex
    within ``config.nearest_vertex_max_distance`` stay unlinked.
    """
    points: list[EvidencePoint] = []
    for point in evidence.points:
        if point.is_linked:
            points.append(point)
            continue
        plan_id = nearest_plan_id(
            point.position, plan, config.nearest_vertex_max_distance
        )
        if plan_id:
            logger.debug(
                "Linked evidence at (%.3f, %.3f) to %s", point.x, point.y, plan_id
            )
            point = point.model_copy(update={"plan_id": plan_id})
        points.append(point)
    return EvidenceLinks(points=points)
