# -*- coding: utf-8 -*-
"""Field evidence and its link to plan vertices."""

from boundary_lib.evidence.linking import link_evidence
from boundary_lib.evidence.linking import nearest_plan_id
from boundary_lib.evidence.models import EvidenceLinks
from boundary_lib.evidence.models import EvidencePoint

__all__ = [
    "EvidenceLinks",
    "EvidencePoint",
    "link_evidence",
    "nearest_plan_id",
]
