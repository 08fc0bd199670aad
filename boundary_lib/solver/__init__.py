# -*- coding: utf-8 -*-
"""Boundary adjustment solvers.

Usage::

    from boundary_lib.solver import LoopAssembler
    from boundary_lib.solver import CompassRuleAdjuster

    geometry = LoopAssembler(CompassRuleAdjuster()).assemble(plan, anchors)

Available span adjusters:

- :class:`SegmentAdjuster` -- one free-leg scale and one rotation per
  span, locked legs keep their length (the default)
- :class:`CompassRuleAdjuster` -- misclosure distributed over free legs
  in proportion to their length

To create a custom adjuster, subclass :class:`SpanAdjuster` and
implement the :meth:`~SpanAdjuster.adjust` method.
"""

from boundary_lib.solver.assembler import LoopAssembler
from boundary_lib.solver.base import SpanAdjuster
from boundary_lib.solver.compass_rule import CompassRuleAdjuster
from boundary_lib.solver.guard import ConfirmScale
from boundary_lib.solver.guard import ScaleDecision
from boundary_lib.solver.guard import decide_scale
from boundary_lib.solver.models import AssembledGeometry
from boundary_lib.solver.models import ControlPair
from boundary_lib.solver.models import SimilarityTransform
from boundary_lib.solver.models import SpanSolution
from boundary_lib.solver.residuals import Residual
from boundary_lib.solver.residuals import classify_residuals
from boundary_lib.solver.segment import SegmentAdjuster
from boundary_lib.solver.similarity import solve_similarity

__all__ = [
    "AssembledGeometry",
    "CompassRuleAdjuster",
    "ConfirmScale",
    "ControlPair",
    "LoopAssembler",
    "Residual",
    "ScaleDecision",
    "SegmentAdjuster",
    "SimilarityTransform",
    "SpanAdjuster",
    "SpanSolution",
    "classify_residuals",
    "decide_scale",
    "solve_similarity",
]
