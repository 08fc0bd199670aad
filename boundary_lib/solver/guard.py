# -*- coding: utf-8 -*-
"""Scale guard: decide whether the free-scale fit may be used.

A plan and its field evidence normally agree in scale.  A free fit whose
scale is close to a feet/metres factor almost always means the plan was
entered in the wrong unit; a near-unity scale is only worth applying
when it clearly improves the fit.  Both cases yield to an external
confirmation step supplied by the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from boundary_lib.config import DEFAULT_CONFIG
from boundary_lib.config import AdjustmentConfig
from boundary_lib.enums import ScaleReason
from boundary_lib.solver.models import ControlPair
from boundary_lib.solver.models import SimilarityTransform

logger = logging.getLogger(__name__)


class ConfirmScale(Protocol):
    """Protocol for scale confirmation callbacks.

    Returning ``None`` means the question was cancelled; the default of
    the branch is then used.
    """

    def __call__(
        self,
        proposed_scale: float,
        free_rms: float,
        locked_rms: float,
        reason: ScaleReason,
    ) -> bool | None:
        """Return True to apply the proposed scale."""
        ...


@dataclass(frozen=True)
class ScaleDecision:
    """Outcome of the scale guard.

    Attributes:
        transform: The transform to use (free fit if scale is applied)
        used_scale: True when the free-scale fit was chosen
        needs_confirmation: True when the policy asked for confirmation
        reason: Policy branch that produced the decision
        free_rms: RMS of the free-scale fit
        locked_rms: RMS of the locked-scale fit
        proposed_scale: Scale of the free-scale fit
    """

    transform: SimilarityTransform
    used_scale: bool
    needs_confirmation: bool
    reason: ScaleReason
    free_rms: float
    locked_rms: float
    proposed_scale: float


def is_unit_mismatch(scale: float, config: AdjustmentConfig = DEFAULT_CONFIG) -> bool:
    """True when *scale* looks like a feet <-> metres conversion."""
    return (
        abs(scale - config.feet_to_meters) <= config.feet_to_meters_tolerance
        or abs(scale - config.meters_to_feet) <= config.meters_to_feet_tolerance
    )


def _ask(
    confirm: ConfirmScale | None,
    default: bool,
    scale: float,
    free_rms: float,
    locked_rms: float,
    reason: ScaleReason,
) -> bool:
    if confirm is None:
        return default
    answer = confirm(scale, free_rms, locked_rms, reason)
    if answer is None:
        logger.info("Scale confirmation cancelled, using default (%s)", default)
        return default
    return bool(answer)


def decide_scale(
    pairs: Sequence[ControlPair],
    free_fit: SimilarityTransform,
    locked_fit: SimilarityTransform,
    *,
    confirm: ConfirmScale | None = None,
    config: AdjustmentConfig = DEFAULT_CONFIG,
) -> ScaleDecision:
    """Choose between the free-scale and the locked-scale fit.

    Policy, in order:

    1. Free scale near 0.3048 or 3.28084: unit mismatch, confirmation
       required, default is to apply the scale.
    2. At least ``marginal_min_pairs`` pairs, free scale within
       ``near_unity_tolerance`` of 1, free RMS below
       ``marginal_rms_ratio`` of the locked RMS and locked RMS above
       ``residual_yellow``: marginal improvement, confirmation required,
       default is not to apply the scale.
    3. Otherwise the locked fit is used without confirmation.

    Args:
        pairs: Control pairs both fits were computed from
        free_fit: Fit with a free scale
        locked_fit: Fit with the scale held at 1.0
        confirm: Optional confirmation callback
        config: Thresholds

    Returns:
        The decision
    """
    k = free_fit.scale
    free_rms = free_fit.rms(pairs)
    locked_rms = locked_fit.rms(pairs)

    if is_unit_mismatch(k, config):
        reason = ScaleReason.UNIT_MISMATCH
        apply = _ask(confirm, True, k, free_rms, locked_rms, reason)
        needs_confirmation = True
    elif (
        len(pairs) >= config.marginal_min_pairs
        and abs(k - 1.0) <= config.near_unity_tolerance
        and free_rms < config.marginal_rms_ratio * locked_rms
        and locked_rms > config.residual_yellow
    ):
        reason = ScaleReason.MARGINAL_IMPROVEMENT
        apply = _ask(confirm, False, k, free_rms, locked_rms, reason)
        needs_confirmation = True
    else:
        reason = ScaleReason.SCALE_LOCKED
        apply = False
        needs_confirmation = False

    logger.info(
        "Scale guard: %s k=%.6f free_rms=%.4f locked_rms=%.4f -> %s",
        reason.value,
        k,
        free_rms,
        locked_rms,
        "apply scale" if apply else "scale locked",
    )

    return ScaleDecision(
        transform=free_fit if apply else locked_fit,
        used_scale=apply,
        needs_confirmation=needs_confirmation,
        reason=reason,
        free_rms=free_rms,
        locked_rms=locked_rms,
        proposed_scale=k,
    )
