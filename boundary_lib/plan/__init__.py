# -*- coding: utf-8 -*-
"""Plan description of a parcel: calls, legs, vertices and traverses."""

from boundary_lib.plan.builder import build_plan
from boundary_lib.plan.builder import plan_from_coordinates
from boundary_lib.plan.builder import traverse
from boundary_lib.plan.models import CallList
from boundary_lib.plan.models import Leg
from boundary_lib.plan.models import LegCall
from boundary_lib.plan.models import Plan
from boundary_lib.plan.models import Vertex
from boundary_lib.plan.parser import CallListParser
from boundary_lib.plan.parser import parse_call

__all__ = [
    "CallList",
    "CallListParser",
    "Leg",
    "LegCall",
    "Plan",
    "Vertex",
    "build_plan",
    "parse_call",
    "plan_from_coordinates",
    "traverse",
]
