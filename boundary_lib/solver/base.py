# -*- coding: utf-8 -*-
"""Abstract base class for span adjusters.

To implement a new span adjustment algorithm:

1. Subclass ``SpanAdjuster``.
2. Implement the ``adjust`` method.
3. Optionally override ``name`` for logging.

An adjuster receives two fixed anchor positions and the legs walked
from one to the other, and returns the positions of every vertex of the
span.  The anchors must **not** be moved.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from boundary_lib.models import Vector2D
    from boundary_lib.plan.models import Leg
    from boundary_lib.solver.models import SpanSolution


class SpanAdjuster(ABC):
    """Abstract base class for anchor-to-anchor span adjustment.

    The contract is:

    * Input: start and end anchor positions and the ordered legs between
      them.
    * Output: a :class:`SpanSolution` whose first position is ``start``
      and whose last position is ``end``.
    * Legs flagged ``locked`` keep their length, except that the last leg
      absorbs ``end_gap`` when the end vertex is snapped onto ``end``.
    """

    @property
    def name(self) -> str:
        """Human-readable name of the adjuster (for logging)."""
        return self.__class__.__name__

    @abstractmethod
    def adjust(
        self,
        start: Vector2D,
        end: Vector2D,
        chain: Sequence[Leg],
        start_id: str = "",
        end_id: str = "",
    ) -> SpanSolution:
        """Adjust one span.

        Args:
            start: Position of the starting anchor
            end: Position of the ending anchor
            chain: Legs from the start anchor to the end anchor
            start_id: Vertex id of the start anchor, for error reporting
            end_id: Vertex id of the end anchor, for error reporting

        Returns:
            The adjusted span.

        Raises:
            SpanError: If the span cannot be closed
        """
        ...
