# -*- coding: utf-8 -*-
"""Parser for bearing/distance call lines.

A call line holds one bearing and one distance, separated by a comma or
whitespace, optionally followed by a lock marker::

    N45°04'30"E 550.50
    45D04'30", 550.50
    S12.30W 80.00 L

A block of calls may also contain ``#`` comments, a ``# CSF=<value>``
header token and ``From,To,Bearing,Distance[,L]`` rows.

Architecture: the block parser produces a dictionary which is fed to
:class:`CallList` via a single ``model_validate()`` call.
"""

import logging
import math
import re
from typing import Any

from boundary_lib.angle.parser import parse_angle
from boundary_lib.constants import CSF_MAX
from boundary_lib.constants import CSF_MIN
from boundary_lib.errors import ParseError
from boundary_lib.errors import SourceLocation
from boundary_lib.models import normalize_azimuth
from boundary_lib.plan.models import CallList
from boundary_lib.plan.models import LegCall

logger = logging.getLogger(__name__)

BEARING_DISTANCE = re.compile(
    r"""^\s*(?P<bearing>.+?)\s*(?:,|\s)\s*
    (?P<distance>[+-]?\d+(?:\.\d+)?)
    (?:\s*(?:,|\s)\s*(?P<lock>L|LOCKED|\*))?\s*$""",
    re.IGNORECASE | re.VERBOSE,
)

CSF_HEADER = re.compile(r"^CSF\s*=\s*(?P<value>\S+)$", re.IGNORECASE)

LOCK_TOKENS = frozenset({"L", "LOCKED", "*", "Y", "YES", "TRUE"})


def make_call(
    bearing: str,
    distance: float,
    *,
    locked: bool = False,
    from_id: str | None = None,
    to_id: str | None = None,
) -> LegCall:
    """Build a call from bearing text and a signed distance.

    A negative distance reverses the direction of the call, as does a
    leading ``-`` on the bearing.  Both on the same call is an error.

    Raises:
        ParseError: On malformed bearing text, a zero distance, or both
            reversal signs at once
    """
    parsed = parse_angle(bearing)
    if not math.isfinite(distance) or distance == 0:
        raise ParseError("Distance must be a non-zero number", str(distance))
    if parsed.reversed and distance < 0:
        raise ParseError(
            "Bearing sign and negative distance cannot both reverse a call",
            f"{bearing} {distance}",
        )

    azimuth = parsed.azimuth
    if distance < 0:
        azimuth = normalize_azimuth(azimuth + math.pi)

    return LegCall(
        distance=abs(distance),
        azimuth=azimuth,
        locked=locked,
        text=bearing.strip(),
        from_id=from_id or None,
        to_id=to_id or None,
    )


def parse_call(line: str) -> LegCall:
    """Parse one ``bearing distance [L]`` line.

    Raises:
        ParseError: If the line is not a bearing followed by a distance
    """
    m = BEARING_DISTANCE.match(line or "")
    if m is None:
        raise ParseError("Expected `bearing distance`", line or "")
    return make_call(
        m["bearing"],
        float(m["distance"]),
        locked=m["lock"] is not None,
    )


class CallListParser:
    """Parser for blocks of bearing/distance calls.

    Unlike a file-format parser this one does not collect errors: the
    first malformed row aborts the plan, with its source location.
    """

    def __init__(self) -> None:
        self._source: str = "<string>"

    def _fail(self, err: ParseError, line: int, text: str) -> ParseError:
        return ParseError(
            err.message,
            err.text,
            SourceLocation(source=self._source, line=line, text=text),
        )

    def _parse_header(self, comment: str) -> float | None:
        """Return the CSF from a ``# CSF=<value>`` comment, if any."""
        m = CSF_HEADER.match(comment.lstrip("#").strip())
        if m is None:
            return None
        try:
            value = float(m["value"])
        except ValueError:
            logger.warning("Ignoring unreadable CSF header: %r", comment)
            return None
        if not CSF_MIN < value < CSF_MAX:
            logger.warning(
                "Ignoring CSF %s outside (%s, %s)", value, CSF_MIN, CSF_MAX
            )
            return None
        return value

    def _parse_row(self, row: str) -> LegCall:
        parts = [p.strip() for p in row.split(",")]
        if len(parts) in (4, 5):
            from_id, to_id, bearing, distance = parts[:4]
            locked = len(parts) == 5 and parts[4].upper() in LOCK_TOKENS
            try:
                value = float(distance)
            except ValueError:
                raise ParseError("Invalid distance", distance) from None
            return make_call(
                bearing, value, locked=locked, from_id=from_id, to_id=to_id
            )
        return parse_call(row)

    def parse_string_to_dict(
        self,
        data: str,
        source: str = "<string>",
    ) -> dict[str, Any]:
        """Parse a block of calls to a dictionary.

        Args:
            data: Call lines
            source: Source identifier for error messages

        Returns:
            Dictionary with ``calls`` and ``combined_scale_factor`` keys
        """
        self._source = source
        calls: list[dict[str, Any]] = []
        csf = 1.0

        for line_no, raw in enumerate(data.splitlines()):
            line = raw.strip()
            if not line:
                continue
            if line.startswith("#"):
                value = self._parse_header(line)
                if value is not None:
                    csf = value
                continue
            try:
                call = self._parse_row(line)
            except ParseError as err:
                raise self._fail(err, line_no, raw) from err
            calls.append(call.model_dump())

        logger.debug("Parsed %d call(s) from %s (CSF=%s)", len(calls), source, csf)
        return {"calls": calls, "combined_scale_factor": csf}

    def parse_string(self, data: str, source: str = "<string>") -> CallList:
        """Parse a block of calls."""
        return CallList.model_validate(self.parse_string_to_dict(data, source))
