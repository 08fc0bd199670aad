# -*- coding: utf-8 -*-
"""Policy thresholds for an adjustment run.

The configuration is an immutable Pydantic model passed explicitly into
every call.  Defaults come from :mod:`boundary_lib.constants`.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator

from boundary_lib.constants import CLOSURE_TOLERANCE
from boundary_lib.constants import CLOSURE_WARNING
from boundary_lib.constants import FEET_TO_METERS
from boundary_lib.constants import FEET_TO_METERS_TOLERANCE
from boundary_lib.constants import LOCKED_SPAN_TOLERANCE
from boundary_lib.constants import MARGINAL_SCALE_MIN_PAIRS
from boundary_lib.constants import MARGINAL_SCALE_RMS_RATIO
from boundary_lib.constants import METERS_TO_FEET
from boundary_lib.constants import METERS_TO_FEET_TOLERANCE
from boundary_lib.constants import NEAR_UNITY_SCALE_TOLERANCE
from boundary_lib.constants import NEAREST_VERTEX_MAX_DISTANCE
from boundary_lib.constants import RESIDUAL_GREEN
from boundary_lib.constants import RESIDUAL_MIN_ARROW
from boundary_lib.constants import RESIDUAL_YELLOW


class AdjustmentConfig(BaseModel):
    """Thresholds used by the adjustment engine.

    Attributes:
        closure_tolerance: Traverse end/start gap below which a plan is closed
        closure_warning: Span misclosure above which a warning is reported
        locked_span_tolerance: Allowed mismatch for spans without free legs
        nearest_vertex_max_distance: Search radius when linking evidence
        residual_green: Upper bound of the GREEN tier
        residual_yellow: Upper bound of the YELLOW tier
        residual_min_arrow: Residuals below this are exact matches
        feet_to_meters: Scale that signals a feet -> metres mismatch
        feet_to_meters_tolerance: Tolerance around ``feet_to_meters``
        meters_to_feet: Scale that signals a metres -> feet mismatch
        meters_to_feet_tolerance: Tolerance around ``meters_to_feet``
        near_unity_tolerance: ``|k - 1|`` below this is a near-unity scale
        marginal_min_pairs: Pairs needed before a near-unity scale is offered
        marginal_rms_ratio: Required free/locked RMS ratio for that offer
    """

    model_config = ConfigDict(frozen=True)

    closure_tolerance: Annotated[float, Field(default=CLOSURE_TOLERANCE, gt=0)]
    closure_warning: Annotated[float, Field(default=CLOSURE_WARNING, gt=0)]
    locked_span_tolerance: Annotated[
        float, Field(default=LOCKED_SPAN_TOLERANCE, gt=0)
    ]
    nearest_vertex_max_distance: Annotated[
        float, Field(default=NEAREST_VERTEX_MAX_DISTANCE, ge=0)
    ]

    residual_green: Annotated[float, Field(default=RESIDUAL_GREEN, gt=0)]
    residual_yellow: Annotated[float, Field(default=RESIDUAL_YELLOW, gt=0)]
    residual_min_arrow: Annotated[float, Field(default=RESIDUAL_MIN_ARROW, ge=0)]

    feet_to_meters: Annotated[float, Field(default=FEET_TO_METERS, gt=0)]
    feet_to_meters_tolerance: Annotated[
        float, Field(default=FEET_TO_METERS_TOLERANCE, ge=0)
    ]
    meters_to_feet: Annotated[float, Field(default=METERS_TO_FEET, gt=0)]
    meters_to_feet_tolerance: Annotated[
        float, Field(default=METERS_TO_FEET_TOLERANCE, ge=0)
    ]
    near_unity_tolerance: Annotated[
        float, Field(default=NEAR_UNITY_SCALE_TOLERANCE, ge=0)
    ]
    marginal_min_pairs: Annotated[int, Field(default=MARGINAL_SCALE_MIN_PAIRS, ge=2)]
    marginal_rms_ratio: Annotated[
        float, Field(default=MARGINAL_SCALE_RMS_RATIO, gt=0, le=1)
    ]

    @model_validator(mode="after")
    def check_residual_tiers(self) -> AdjustmentConfig:
        """Residual tiers must be ordered."""
        if not self.residual_green < self.residual_yellow:
            raise ValueError(
                f"residual_green ({self.residual_green}) must be below "
                f"residual_yellow ({self.residual_yellow})"
            )
        if self.residual_min_arrow > self.residual_green:
            raise ValueError(
                f"residual_min_arrow ({self.residual_min_arrow}) must not exceed "
                f"residual_green ({self.residual_green})"
            )
        return self


DEFAULT_CONFIG = AdjustmentConfig()
