# -*- coding: utf-8 -*-
"""Constants used throughout the boundary_lib library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers scattered across the codebase.  The values
double as the defaults of :class:`boundary_lib.config.AdjustmentConfig`.

All lengths are in the plan's length unit (conventionally metres).
"""

# -----------------------------------------------------------------------------
# Unit Conversions
# -----------------------------------------------------------------------------

#: Conversion factor from feet to meters
FEET_TO_METERS: float = 0.3048

#: Conversion factor from meters to feet (as commonly quoted on plans)
METERS_TO_FEET: float = 3.28084

# -----------------------------------------------------------------------------
# Plan Construction
# -----------------------------------------------------------------------------

#: A traverse whose end lands within this distance of its start is closed
CLOSURE_TOLERANCE: float = 1e-6

#: Accepted range (exclusive) for a combined scale factor read from a call list
CSF_MIN: float = 0.5
CSF_MAX: float = 1.5

#: Prefix used for generated vertex ids ("P1", "P2", ...)
VERTEX_ID_PREFIX: str = "P"

# -----------------------------------------------------------------------------
# Adjustment Policy
# -----------------------------------------------------------------------------

#: Nominal span misclosure above which a warning is reported
CLOSURE_WARNING: float = 0.03

#: A span without free legs must match the anchor distance within this
LOCKED_SPAN_TOLERANCE: float = 1e-6

#: Unlinked evidence is attached to the nearest vertex within this distance
NEAREST_VERTEX_MAX_DISTANCE: float = 5.0

# -----------------------------------------------------------------------------
# Residual Tiers
# -----------------------------------------------------------------------------

#: Residuals below this are GREEN
RESIDUAL_GREEN: float = 0.015

#: Residuals below this (and not GREEN) are YELLOW, anything above is RED
RESIDUAL_YELLOW: float = 0.02

#: Residuals below this are an exact match and not reported as discrepancies
RESIDUAL_MIN_ARROW: float = 0.01

# -----------------------------------------------------------------------------
# Scale Guard
# -----------------------------------------------------------------------------

#: Free-fit scale this close to FEET_TO_METERS flags a unit mismatch
FEET_TO_METERS_TOLERANCE: float = 0.02

#: Free-fit scale this close to METERS_TO_FEET flags a unit mismatch
METERS_TO_FEET_TOLERANCE: float = 0.05

#: Free-fit scale this close to 1.0 counts as "near unity"
NEAR_UNITY_SCALE_TOLERANCE: float = 0.001

#: Minimum number of control pairs before a near-unity scale is offered
MARGINAL_SCALE_MIN_PAIRS: int = 3

#: Free RMS must be below this fraction of the locked RMS to be offered
MARGINAL_SCALE_RMS_RATIO: float = 0.5

# -----------------------------------------------------------------------------
# Numerical Thresholds
# -----------------------------------------------------------------------------

#: Below this the rotation of a similarity fit is undefined
SIMILARITY_DEGENERATE_NORM: float = 1e-12

#: Lower bound for a free similarity scale
SIMILARITY_MIN_SCALE: float = 1e-12

#: Below this squared length the free legs of a span carry no scale
FREE_VECTOR_EPSILON: float = 1e-12

#: Relative size of a negative discriminant that is still clamped to zero
DISCRIMINANT_EPSILON: float = 1e-12

# -----------------------------------------------------------------------------
# Evidence Types
# -----------------------------------------------------------------------------

#: Evidence types (block names) treated as strong physical evidence
STRONG_EVIDENCE_TYPES: frozenset[str] = frozenset({"FDI"})

#: Evidence types (block names) treated as weak physical evidence
WEAK_EVIDENCE_TYPES: frozenset[str] = frozenset({"FDSPIKE"})
