# -*- coding: utf-8 -*-
"""Plan data models.

This module contains Pydantic models for the paper description of a
parcel:

- Vertex: a labelled corner of the boundary ("P1".."Pn")
- Leg: a directed bearing/distance call between two vertices
- Plan: ordered vertices and legs, open or closed

A Plan is an immutable snapshot.  Adjustment never mutates it; edits
such as locking a leg return a new Plan.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator
from shapely.geometry import LinearRing
from shapely.geometry import LineString
from shapely.geometry import Polygon

from boundary_lib.models import Vector2D
from boundary_lib.models import normalize_azimuth


def _finite_azimuth(v: float) -> float:
    if not math.isfinite(v):
        raise ValueError(f"Azimuth must be finite, got {v}")
    return normalize_azimuth(v)


def polygon_area(points: Sequence[Vector2D]) -> float:
    """Unsigned area enclosed by *points* (implicitly closed)."""
    if len(points) < 3:
        return 0.0
    return float(Polygon(points).area)


def outline_is_simple(points: Sequence[Vector2D], closed: bool) -> bool:
    """Check that an outline does not cross or touch itself."""
    if closed:
        if len(points) < 3:
            return True
        return bool(LinearRing(points).is_simple)
    if len(points) < 2:
        return True
    return bool(LineString(points).is_simple)


class Vertex(BaseModel):
    """A labelled boundary corner."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    position: Vector2D

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y


class Leg(BaseModel):
    """A directed bearing/distance call from one vertex to the next.

    ``azimuth`` is in radians, counter-clockwise from east, and is
    normalized into ``[0, 2pi)`` on construction.  A ``locked`` leg
    keeps its length exactly during adjustment.
    """

    model_config = ConfigDict(frozen=True)

    from_id: str
    to_id: str
    distance: float = Field(gt=0)
    azimuth: float
    locked: bool = False
    text: str | None = None

    @field_validator("azimuth")
    @classmethod
    def normalize(cls, v: float) -> float:
        return _finite_azimuth(v)

    @property
    def vector(self) -> Vector2D:
        """Displacement from ``from_id`` to ``to_id``."""
        return Vector2D.from_polar(self.distance, self.azimuth)


class LegCall(BaseModel):
    """A single bearing/distance call, before it is placed in a plan.

    ``from_id`` / ``to_id`` are optional explicit vertex labels.
    """

    model_config = ConfigDict(frozen=True)

    distance: float = Field(gt=0)
    azimuth: float
    locked: bool = False
    text: str | None = None
    from_id: str | None = None
    to_id: str | None = None

    @field_validator("azimuth")
    @classmethod
    def normalize(cls, v: float) -> float:
        return _finite_azimuth(v)


class Plan(BaseModel):
    """The nominal (unadjusted) description of a boundary.

    ``legs[i]`` connects ``vertices[i]`` to ``vertices[i + 1]``; on a
    closed plan the last leg wraps back to ``vertices[0]``.

    Attributes:
        vertices: Ordered vertices
        legs: Ordered legs
        closed: True when the traverse returns to its start
        closure: Nominal misclosure length of the traverse
        combined_scale_factor: Factor applied to distances at construction
    """

    model_config = ConfigDict(frozen=True)

    vertices: list[Vertex] = Field(default_factory=list)
    legs: list[Leg] = Field(default_factory=list)
    closed: bool = False
    closure: float = Field(default=0.0, ge=0)
    combined_scale_factor: float = Field(default=1.0, gt=0)

    @model_validator(mode="after")
    def check_topology(self) -> Plan:
        """Legs must connect consecutive vertices."""
        n = len(self.vertices)
        expected = n if self.closed else max(n - 1, 0)
        if len(self.legs) != expected:
            raise ValueError(
                f"{'Closed' if self.closed else 'Open'} plan with {n} vertices "
                f"needs {expected} legs, got {len(self.legs)}"
            )
        for i, leg in enumerate(self.legs):
            start = self.vertices[i].id
            end = self.vertices[(i + 1) % n].id
            if leg.from_id != start or leg.to_id != end:
                raise ValueError(
                    f"Leg {i} runs {leg.from_id} -> {leg.to_id}, "
                    f"expected {start} -> {end}"
                )
        return self

    # -- lookups -----------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self.vertices)

    @property
    def vertex_ids(self) -> list[str]:
        return [v.id for v in self.vertices]

    @property
    def positions(self) -> list[Vector2D]:
        return [v.position for v in self.vertices]

    def index_of(self, vertex_id: str) -> int:
        """Index of a vertex by id (case-insensitive), -1 if absent."""
        key = vertex_id.strip().casefold()
        for i, v in enumerate(self.vertices):
            if v.id.casefold() == key:
                return i
        return -1

    def leg_at(self, index: int) -> Leg:
        return self.legs[index]

    def leg_from(self, index: int) -> Leg | None:
        """The leg leaving vertex *index*, ``None`` at the end of an open plan."""
        if index < len(self.legs):
            return self.legs[index]
        return None

    def chain(self, start: int, end: int) -> list[Leg]:
        """Legs walked forward from vertex *start* to vertex *end*.

        On a closed plan the walk wraps around; on an open plan *start*
        must precede *end*.
        """
        n = self.count
        if not (0 <= start < n and 0 <= end < n):
            raise IndexError(f"Vertex index out of range: {start}, {end}")
        if not self.closed and start >= end:
            raise ValueError(
                f"Open plan chain must run forward, got {start} -> {end}"
            )
        legs: list[Leg] = []
        i = start
        while True:
            legs.append(self.legs[i])
            i = (i + 1) % n
            if i == end:
                return legs

    # -- measures ----------------------------------------------------------

    @property
    def perimeter(self) -> float:
        """Sum of all leg distances."""
        return math.fsum(leg.distance for leg in self.legs)

    @property
    def area(self) -> float:
        """Enclosed area of a closed plan (0.0 for an open plan)."""
        if not self.closed:
            return 0.0
        return polygon_area(self.positions)

    @property
    def is_simple(self) -> bool:
        """True when the nominal outline does not cross itself."""
        return outline_is_simple(self.positions, self.closed)

    # -- edits -------------------------------------------------------------

    def with_locked(self, leg_index: int, locked: bool = True) -> Plan:
        """Return a copy with one leg's ``locked`` flag changed."""
        legs = list(self.legs)
        legs[leg_index] = legs[leg_index].model_copy(update={"locked": locked})
        return self.model_copy(update={"legs": legs})


class CallList(BaseModel):
    """An ordered list of calls as read from text, with its scale factor."""

    model_config = ConfigDict(frozen=True)

    calls: list[LegCall] = Field(default_factory=list)
    combined_scale_factor: float = Field(default=1.0, gt=0)
