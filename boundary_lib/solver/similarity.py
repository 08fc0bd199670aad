# -*- coding: utf-8 -*-
"""Weighted 2-D similarity fit (closed-form Procrustes).

Given control pairs ``(a_i, b_i, w_i)`` the fit finds the scale ``k``,
rotation ``R`` and translation ``t`` minimising
``sum(w_i * |k * R * a_i + t - b_i|^2)``.

Algorithm
---------
1. Weighted centroids ``ca``, ``cb`` of both point sets.
2. Second moments of the centred points::

       Sxx = sum(w * ax * bx)    Sxy = sum(w * ax * by)
       Syx = sum(w * ay * bx)    Syy = sum(w * ay * by)
       S1  = sum(w * (ax^2 + ay^2))

3. ``N = hypot(Sxx + Syy, Sxy - Syx)``; ``cos = (Sxx + Syy) / N`` and
   ``sin = (Sxy - Syx) / N``.
4. ``k = ((Sxx + Syy) cos + (Sxy - Syx) sin) / S1`` unless the scale is
   locked to 1.
5. ``t = cb - k * R * ca``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from boundary_lib.constants import SIMILARITY_DEGENERATE_NORM
from boundary_lib.constants import SIMILARITY_MIN_SCALE
from boundary_lib.solver.models import ControlPair
from boundary_lib.solver.models import SimilarityTransform
from boundary_lib.solver.models import pair_arrays

logger = logging.getLogger(__name__)


def solve_similarity(
    pairs: Sequence[ControlPair],
    lock_scale: bool = False,
) -> SimilarityTransform | None:
    """Fit a similarity transform mapping sources onto targets.

    Args:
        pairs: Control pairs, at least two
        lock_scale: Hold the scale at exactly 1.0 (rigid fit)

    Returns:
        The fitted transform, or ``None`` when it is undetermined (fewer
        than 2 pairs, non-positive total weight, or coincident points)
    """
    if len(pairs) < 2:
        return None

    src, dst, w = pair_arrays(pairs)
    total = float(np.sum(w))
    if total <= 0.0:
        return None

    c_src = (w @ src) / total
    c_dst = (w @ dst) / total
    a = src - c_src
    b = dst - c_dst

    sxx = float(np.sum(w * a[:, 0] * b[:, 0]))
    sxy = float(np.sum(w * a[:, 0] * b[:, 1]))
    syx = float(np.sum(w * a[:, 1] * b[:, 0]))
    syy = float(np.sum(w * a[:, 1] * b[:, 1]))
    s1 = float(np.sum(w * np.sum(a * a, axis=1)))

    p = sxx + syy
    q = sxy - syx
    norm = math.hypot(p, q)
    if norm < SIMILARITY_DEGENERATE_NORM:
        logger.debug("Similarity fit degenerate: N=%.3e", norm)
        return None

    cos = p / norm
    sin = q / norm
    if lock_scale:
        k = 1.0
    else:
        k = max(SIMILARITY_MIN_SCALE, (p * cos + q * sin) / s1)

    tx = float(c_dst[0]) - k * (cos * float(c_src[0]) - sin * float(c_src[1]))
    ty = float(c_dst[1]) - k * (sin * float(c_src[0]) + cos * float(c_src[1]))

    transform = SimilarityTransform(scale=k, cos=cos, sin=sin, tx=tx, ty=ty)
    logger.debug(
        "Similarity fit (%s): k=%.9f rot=%.6f deg t=(%.4f, %.4f)",
        "locked" if lock_scale else "free",
        k,
        math.degrees(transform.rotation),
        tx,
        ty,
    )
    return transform
