# -*- coding: utf-8 -*-
"""Evidence data models.

Evidence points are physical findings located in the field (iron pins,
spikes, monuments).  They are tied to plan vertices only through their
``plan_id`` key.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator

from boundary_lib.enums import EvidenceStrength
from boundary_lib.models import Vector2D


class EvidencePoint(BaseModel):
    """A field-located evidence point.

    ``strength`` is derived from ``evidence_type`` when not given and
    only chooses the default of ``held``: strong evidence is held unless
    ``held`` is passed explicitly.

    Attributes:
        x: Easting in the field frame
        y: Northing in the field frame
        plan_id: Vertex id this point belongs to (empty = unlinked)
        held: Whether the point is a fixed anchor
        evidence_type: Kind of evidence, e.g. ``"FDI"``
        strength: Evidence strength
        handle: Opaque reference to the source entity
    """

    model_config = ConfigDict(frozen=True)

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    plan_id: str = ""
    held: bool = False
    evidence_type: str = ""
    strength: EvidenceStrength = EvidenceStrength.NORMAL
    handle: str | None = None

    @model_validator(mode="before")
    @classmethod
    def derive_defaults(cls, data: Any) -> Any:
        """Fill ``strength`` and ``held`` from the evidence type."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("strength") is None:
            data["strength"] = EvidenceStrength.from_evidence_type(
                data.get("evidence_type")
            )
        if data.get("held") is None:
            data["held"] = EvidenceStrength(data["strength"]) == EvidenceStrength.STRONG
        if data.get("plan_id") is None:
            data["plan_id"] = ""
        return data

    @property
    def position(self) -> Vector2D:
        return Vector2D(self.x, self.y)

    @property
    def is_linked(self) -> bool:
        return bool(self.plan_id.strip())


class EvidenceLinks(BaseModel):
    """The evidence points of one adjustment, in input order."""

    model_config = ConfigDict(frozen=True)

    points: list[EvidencePoint] = Field(default_factory=list)

    @property
    def held_points(self) -> list[EvidencePoint]:
        return [p for p in self.points if p.held]

    @property
    def linked_points(self) -> list[EvidencePoint]:
        return [p for p in self.points if p.is_linked]

    def by_plan_id(self) -> dict[str, EvidencePoint]:
        """Linked points keyed by case-folded plan id.

        The first held point wins, otherwise the first point.
        """
        result: dict[str, EvidencePoint] = {}
        for point in self.linked_points:
            key = point.plan_id.strip().casefold()
            current = result.get(key)
            if current is None or (point.held and not current.held):
                result[key] = point
        return result
