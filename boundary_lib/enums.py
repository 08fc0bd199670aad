# -*- coding: utf-8 -*-
"""Enumerations for boundary adjustment.

This module contains all enumerations used by the library, including
angle text styles, per-vertex provenance tags, residual tiers and the
reasons reported by the scale guard.
"""

from enum import Enum

from boundary_lib.constants import STRONG_EVIDENCE_TYPES
from boundary_lib.constants import WEAK_EVIDENCE_TYPES


class AngleStyle(str, Enum):
    """Text styles produced by the angle formatter.

    Attributes:
        QUADRANT: Quadrant bearing, e.g. ``N 45°04'30.00" E``
        QUADRANT_COMPACT: Packed quadrant bearing, e.g. ``N45.0430E``
        AZIMUTH_DMS: Azimuth from north, e.g. ``045°04'30.00"``
        AZIMUTH_DECIMAL: Azimuth from north in decimal degrees
    """

    QUADRANT = "quadrant"
    QUADRANT_COMPACT = "quadrant_compact"
    AZIMUTH_DMS = "azimuth_dms"
    AZIMUTH_DECIMAL = "azimuth_decimal"


class Provenance(str, Enum):
    """How the adjusted position of a vertex was obtained.

    Attributes:
        HELD: Taken directly from held evidence
        SIMILARITY_BETWEEN: Interior of an anchor-to-anchor span with
            free legs only
        SIMILARITY_BETWEEN_LOCKED: Interior of an anchor-to-anchor span
            containing at least one locked leg
        BEARING_DISTANCE: Rigid propagation along an open tail
        COMPASS_RULE: Interior of a span distributed by the compass rule
    """

    HELD = "held"
    SIMILARITY_BETWEEN = "similarity_between"
    SIMILARITY_BETWEEN_LOCKED = "similarity_between_locked"
    BEARING_DISTANCE = "bearing_distance"
    COMPASS_RULE = "compass_rule"


class ResidualTier(str, Enum):
    """Severity tier of a residual.

    Attributes:
        EXACT: Below the minimum arrow length, not a discrepancy
        GREEN: Within the green tolerance
        YELLOW: Within the yellow tolerance
        RED: Beyond the yellow tolerance
    """

    EXACT = "exact"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class ScaleReason(str, Enum):
    """Why the scale guard reached its decision.

    Attributes:
        UNIT_MISMATCH: Free scale looks like a feet/metres conversion
        MARGINAL_IMPROVEMENT: Near-unity scale that clearly improves RMS
        SCALE_LOCKED: Default, scale is held at 1.0
    """

    UNIT_MISMATCH = "unit_mismatch"
    MARGINAL_IMPROVEMENT = "marginal_improvement"
    SCALE_LOCKED = "scale_locked"


class EvidenceStrength(str, Enum):
    """Strength of a piece of physical evidence.

    Only used to choose the default ``held`` flag of an evidence point.

    Attributes:
        STRONG: Found monument, held by default
        NORMAL: Ordinary evidence
        WEAK: Weak evidence such as a spike
    """

    STRONG = "strong"
    NORMAL = "normal"
    WEAK = "weak"

    @classmethod
    def from_evidence_type(cls, evidence_type: str | None) -> "EvidenceStrength":
        """Classify an evidence type (block name), case-insensitive.

        Args:
            evidence_type: Evidence type name, e.g. ``"FDI"``

        Returns:
            The matching strength, NORMAL when not recognized
        """
        name = (evidence_type or "").strip().upper()
        if name in STRONG_EVIDENCE_TYPES:
            return cls.STRONG
        if name in WEAK_EVIDENCE_TYPES:
            return cls.WEAK
        return cls.NORMAL


class WarningCode(str, Enum):
    """Codes of non-fatal adjustment warnings.

    Attributes:
        UNRESOLVED_REFERENCE: Evidence plan id matches no vertex
        DUPLICATE_EVIDENCE: More than one held point for a vertex
        CLOSURE_EXCEEDED: Nominal span misclosure above the warning limit
        SELF_INTERSECTION: Adjusted closed boundary crosses itself
    """

    UNRESOLVED_REFERENCE = "unresolved_reference"
    DUPLICATE_EVIDENCE = "duplicate_evidence"
    CLOSURE_EXCEEDED = "closure_exceeded"
    SELF_INTERSECTION = "self_intersection"


class AngleGrammar(str, Enum):
    """Grammar that recognized a piece of angle text.

    Attributes:
        QUADRANT: Tokenized quadrant bearing, e.g. ``N 45°04'30" E``
        QUADRANT_COMPACT: Packed quadrant bearing, e.g. ``N45.0430E``
        AZIMUTH_DMS: Azimuth in degrees/minutes/seconds, e.g. ``45D04'30"``
        AZIMUTH_NUMERIC: Numeric azimuth, e.g. ``123.5`` or ``AZ 123.5°``
    """

    QUADRANT = "quadrant"
    QUADRANT_COMPACT = "quadrant_compact"
    AZIMUTH_DMS = "azimuth_dms"
    AZIMUTH_NUMERIC = "azimuth_numeric"
