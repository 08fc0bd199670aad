# -*- coding: utf-8 -*-
"""Traverse construction from bearing/distance calls.

Vertices are obtained by forward integration of the calls from the
origin::

    v[0] = origin
    v[i + 1] = v[i] + d[i] * (cos az[i], sin az[i])

If the traverse returns to its start (within ``closure_tolerance``) the
plan is closed: the duplicate end vertex is dropped and the last leg
wraps back to the first vertex.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Sequence

from boundary_lib.constants import CLOSURE_TOLERANCE
from boundary_lib.constants import VERTEX_ID_PREFIX
from boundary_lib.models import ZERO
from boundary_lib.models import Vector2D
from boundary_lib.plan.models import Leg
from boundary_lib.plan.models import LegCall
from boundary_lib.plan.models import Plan
from boundary_lib.plan.models import Vertex

logger = logging.getLogger(__name__)


def traverse(
    deltas: Iterable[Vector2D],
    origin: Vector2D = ZERO,
) -> list[Vector2D]:
    """Integrate leg vectors from *origin*.

    Returns:
        ``N + 1`` positions ``[origin, ..., end]`` for ``N`` deltas.
    """
    positions = [origin]
    for delta in deltas:
        positions.append(positions[-1] + delta)
    return positions


def default_vertex_ids(count: int) -> list[str]:
    """``["P1", "P2", ...]``."""
    return [f"{VERTEX_ID_PREFIX}{i + 1}" for i in range(count)]


def _resolve_ids(calls: Sequence[LegCall], count: int) -> list[str]:
    """Vertex ids taken from explicit call labels where given."""
    ids = default_vertex_ids(count)
    for i, call in enumerate(calls):
        if call.from_id:
            ids[i] = call.from_id
        if call.to_id and i + 1 < count:
            ids[i + 1] = call.to_id
    return ids


def build_plan(
    calls: Sequence[LegCall],
    *,
    combined_scale_factor: float = 1.0,
    closure_tolerance: float = CLOSURE_TOLERANCE,
    ids: Sequence[str] | None = None,
) -> Plan:
    """Build a plan from an ordered list of bearing/distance calls.

    Args:
        calls: Ordered leg calls
        combined_scale_factor: Multiplies every distance (ground -> grid)
        closure_tolerance: End/start gap below which the plan is closed
        ids: Explicit vertex ids, one per traverse point (``len(calls) + 1``).
            Defaults to the calls' own labels, else ``P1..Pn``.

    Returns:
        The nominal plan. An empty call list yields a single-vertex open
        plan, which callers are expected to reject.
    """
    if combined_scale_factor <= 0:
        raise ValueError(
            f"Combined scale factor must be positive, got {combined_scale_factor}"
        )

    scaled = [call.distance * combined_scale_factor for call in calls]
    points = traverse(
        Vector2D.from_polar(d, call.azimuth)
        for d, call in zip(scaled, calls, strict=True)
    )

    if ids is None:
        vertex_ids = _resolve_ids(calls, len(points))
    else:
        vertex_ids = list(ids)
        if len(vertex_ids) != len(points):
            raise ValueError(
                f"Expected {len(points)} vertex ids, got {len(vertex_ids)}"
            )

    closure = points[-1].distance_to(points[0])
    closed = bool(calls) and closure < closure_tolerance

    if closed:
        points = points[:-1]
        vertex_ids = vertex_ids[:-1]

    n = len(points)
    vertices = [Vertex(id=vid, position=p) for vid, p in zip(vertex_ids, points, strict=True)]
    legs = [
        Leg(
            from_id=vertex_ids[i],
            to_id=vertex_ids[(i + 1) % n],
            distance=scaled[i],
            azimuth=call.azimuth,
            locked=call.locked,
            text=call.text,
        )
        for i, call in enumerate(calls)
    ]

    logger.debug(
        "Built %s plan: %d vertices, %d legs, closure=%.9f",
        "closed" if closed else "open",
        n,
        len(legs),
        closure,
    )

    return Plan(
        vertices=vertices,
        legs=legs,
        closed=closed,
        closure=closure,
        combined_scale_factor=combined_scale_factor,
    )


def plan_from_coordinates(
    points: Sequence[Vector2D | tuple[float, float]],
    *,
    closed: bool = True,
    ids: Sequence[str] | None = None,
) -> Plan:
    """Derive a plan from digitized vertex coordinates.

    Distances and azimuths are computed from consecutive points.  For a
    closed outline the wrap leg back to the first point is included.

    Raises:
        ValueError: If fewer than 2 points are given, or two consecutive
            points coincide
    """
    pts = [Vector2D(float(p[0]), float(p[1])) for p in points]
    if len(pts) < 2:
        raise ValueError(f"Need at least 2 points, got {len(pts)}")

    vertex_ids = list(ids) if ids is not None else default_vertex_ids(len(pts))
    if len(vertex_ids) != len(pts):
        raise ValueError(f"Expected {len(pts)} vertex ids, got {len(vertex_ids)}")

    n = len(pts)
    n_legs = n if closed else n - 1
    legs: list[Leg] = []
    for i in range(n_legs):
        j = (i + 1) % n
        delta = pts[j] - pts[i]
        if delta.length == 0:
            raise ValueError(
                f"Vertices {vertex_ids[i]} and {vertex_ids[j]} coincide"
            )
        legs.append(
            Leg(
                from_id=vertex_ids[i],
                to_id=vertex_ids[j],
                distance=delta.length,
                azimuth=delta.azimuth,
            )
        )

    return Plan(
        vertices=[Vertex(id=vid, position=p) for vid, p in zip(vertex_ids, pts, strict=True)],
        legs=legs,
        closed=closed,
        closure=0.0 if closed else pts[-1].distance_to(pts[0]),
    )
