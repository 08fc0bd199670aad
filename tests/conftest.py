# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides shared plan and evidence fixtures.  The reference
rectangle is 100 wide (east) and 50 high (north)::

    P4 (0, 50) <---- P3 (100, 50)
      |                 ^
      v                 |
    P1 (0, 0) ----> P2 (100, 0)
"""

from __future__ import annotations

import logging

import pytest

from boundary_lib.angle.parser import north_degrees_to_azimuth
from boundary_lib.evidence.models import EvidenceLinks
from boundary_lib.evidence.models import EvidencePoint
from boundary_lib.plan.builder import build_plan
from boundary_lib.plan.models import LegCall
from boundary_lib.plan.models import Plan

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Builders
# =============================================================================


def make_calls(
    legs: list[tuple[float, float]],
    locked: set[int] | None = None,
) -> list[LegCall]:
    """Calls from ``(azimuth from north in degrees, distance)`` tuples."""
    locked = locked or set()
    return [
        LegCall(
            distance=distance,
            azimuth=north_degrees_to_azimuth(north),
            locked=i in locked,
        )
        for i, (north, distance) in enumerate(legs)
    ]


RECTANGLE_LEGS: list[tuple[float, float]] = [
    (90.0, 100.0),
    (0.0, 50.0),
    (270.0, 100.0),
    (180.0, 50.0),
]


def make_rectangle(locked: set[int] | None = None) -> Plan:
    """The reference rectangle, closed, vertices P1..P4."""
    return build_plan(make_calls(RECTANGLE_LEGS, locked))


def make_evidence(
    points: dict[str, tuple[float, float]],
    held: bool = True,
) -> EvidenceLinks:
    """Evidence points keyed by plan id."""
    return EvidenceLinks(
        points=[
            EvidencePoint(x=x, y=y, plan_id=plan_id, held=held)
            for plan_id, (x, y) in points.items()
        ]
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def rectangle() -> Plan:
    """Return the closed reference rectangle."""
    return make_rectangle()


@pytest.fixture
def corner_evidence() -> EvidenceLinks:
    """Return held evidence on opposite rectangle corners."""
    return make_evidence({"P1": (0.0, 0.0), "P3": (100.0, 50.0)})
