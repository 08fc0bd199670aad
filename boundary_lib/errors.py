# -*- coding: utf-8 -*-
"""Error handling for boundary adjustment.

Fatal conditions are raised as exceptions rooted at :class:`BoundaryError`.
Non-fatal conditions are collected as :class:`AdjustmentWarning` records
and returned alongside the adjustment result.
"""

from dataclasses import dataclass

from boundary_lib.enums import WarningCode


@dataclass(frozen=True)
class SourceLocation:
    """Tracks the source location of text for error reporting.

    Attributes:
        source: The source name or identifier
        line: Line number (0-based)
        text: The text at this location
    """

    source: str
    line: int
    text: str

    def __str__(self) -> str:
        """Format as human-readable location string."""
        return f"(in {self.source}, line {self.line + 1})"


@dataclass(frozen=True)
class AdjustmentWarning:
    """A non-fatal issue found during an adjustment run.

    This is a data record, not an exception.

    Attributes:
        code: Machine-readable warning code
        message: Human-readable message
        plan_id: Vertex the warning refers to (optional)
    """

    code: WarningCode
    message: str
    plan_id: str | None = None

    def __str__(self) -> str:
        """Format as human-readable warning string."""
        base = f"{self.code.value}: {self.message}"
        if self.plan_id:
            base += f" [{self.plan_id}]"
        return base


class BoundaryError(Exception):
    """Base class for all boundary_lib errors."""


class ParseError(BoundaryError, ValueError):
    """Raised for malformed bearing/azimuth text or call lines.

    Also raised when one call carries both a leading bearing sign and a
    negative distance.

    Attributes:
        message: Error message
        text: The offending text
        location: Source location where the error occurred (optional)
    """

    def __init__(
        self,
        message: str,
        text: str = "",
        location: SourceLocation | None = None,
    ):
        self.message = message
        self.text = text
        self.location = location
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as human-readable exception string."""
        base = self.message
        if self.text:
            base += f": {self.text!r}"
        if self.location:
            base += f" {self.location}"
        return base


class DegenerateFitError(BoundaryError):
    """Raised when a similarity transform cannot be determined."""


class SpanError(BoundaryError):
    """Base class for errors tied to one anchor-to-anchor span.

    Attributes:
        start_id: Vertex id of the starting anchor
        end_id: Vertex id of the ending anchor
    """

    def __init__(self, message: str, start_id: str, end_id: str):
        self.start_id = start_id
        self.end_id = end_id
        super().__init__(f"{message} (span {start_id} -> {end_id})")


class NoFreeLegSpanError(SpanError):
    """Raised when a span without free legs cannot reach its end anchor.

    The caller must either unlock a leg or hold an anchor inside the span.

    Attributes:
        locked_length: Length of the summed locked leg vector
        target_length: Anchor-to-anchor distance
    """

    def __init__(
        self,
        start_id: str,
        end_id: str,
        locked_length: float,
        target_length: float,
    ):
        self.locked_length = locked_length
        self.target_length = target_length
        super().__init__(
            f"No free leg to absorb {abs(target_length - locked_length):.6f} "
            f"(locked {locked_length:.6f} vs anchors {target_length:.6f})",
            start_id,
            end_id,
        )


class UnreachableSpanError(SpanError):
    """Raised when no positive scale of the free legs closes a span."""


class InsufficientAnchorsError(BoundaryError):
    """Raised when fewer than two held, linked evidence points exist.

    Attributes:
        found: Number of usable anchors found
    """

    def __init__(self, found: int):
        self.found = found
        super().__init__(
            f"Need at least two held evidence points linked to the plan, found {found}"
        )
