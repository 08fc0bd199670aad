# -*- coding: utf-8 -*-
"""Boundary Adjustment Library.

A Python library for re-establishing survey boundaries: it reconciles a
plan description of a parcel (bearing/distance calls) with physical
evidence found in the field and produces adjusted vertex positions with
residuals.

Usage:
    from boundary_lib import BoundaryInterface
    from boundary_lib import EvidenceLinks
    from boundary_lib import EvidencePoint

    plan = BoundaryInterface.build_plan_from_text(
        "N 0°00'00\\" E 100\\nN 90°00'00\\" E 50\\n"
        "S 0°00'00\\" E 100\\nS 90°00'00\\" W 50\\n"
    )
    evidence = EvidenceLinks(points=[
        EvidencePoint(x=0.0, y=0.0, plan_id="P1", held=True),
        EvidencePoint(x=50.0, y=100.0, plan_id="P3", held=True),
    ])
    result = BoundaryInterface.adjust(plan, evidence)
"""

__version__ = "0.1.0"

from boundary_lib.angle import format_angle
from boundary_lib.angle import format_bearing
from boundary_lib.angle import parse_angle
from boundary_lib.config import DEFAULT_CONFIG
from boundary_lib.config import AdjustmentConfig
from boundary_lib.enums import AngleStyle
from boundary_lib.enums import EvidenceStrength
from boundary_lib.enums import Provenance
from boundary_lib.enums import ResidualTier
from boundary_lib.enums import ScaleReason
from boundary_lib.enums import WarningCode
from boundary_lib.errors import AdjustmentWarning
from boundary_lib.errors import BoundaryError
from boundary_lib.errors import DegenerateFitError
from boundary_lib.errors import InsufficientAnchorsError
from boundary_lib.errors import NoFreeLegSpanError
from boundary_lib.errors import ParseError
from boundary_lib.errors import SourceLocation
from boundary_lib.errors import SpanError
from boundary_lib.errors import UnreachableSpanError
from boundary_lib.evidence import EvidenceLinks
from boundary_lib.evidence import EvidencePoint
from boundary_lib.evidence import link_evidence
from boundary_lib.interface import AdjustmentResult
from boundary_lib.interface import BoundaryInterface
from boundary_lib.interface import ReportRow
from boundary_lib.models import Vector2D
from boundary_lib.plan import Leg
from boundary_lib.plan import Plan
from boundary_lib.plan import Vertex
from boundary_lib.plan import build_plan
from boundary_lib.plan import parse_call
from boundary_lib.solver import CompassRuleAdjuster
from boundary_lib.solver import SegmentAdjuster

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "AdjustmentConfig",
    # Results
    "AdjustmentResult",
    "AdjustmentWarning",
    # Enums
    "AngleStyle",
    # Errors
    "BoundaryError",
    # Interface
    "BoundaryInterface",
    # Solvers
    "CompassRuleAdjuster",
    "DegenerateFitError",
    # Evidence
    "EvidenceLinks",
    "EvidencePoint",
    "EvidenceStrength",
    "InsufficientAnchorsError",
    # Plan
    "Leg",
    "NoFreeLegSpanError",
    "ParseError",
    "Plan",
    "Provenance",
    "ReportRow",
    "ResidualTier",
    "ScaleReason",
    "SegmentAdjuster",
    "SourceLocation",
    "SpanError",
    "UnreachableSpanError",
    "Vector2D",
    "Vertex",
    "WarningCode",
    "build_plan",
    # Angles
    "format_angle",
    "format_bearing",
    "link_evidence",
    "parse_angle",
    "parse_call",
]
