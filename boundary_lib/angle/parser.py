# -*- coding: utf-8 -*-
"""Parser for bearing and azimuth text.

Angle text is matched against an ordered tuple of independent grammars;
the first grammar that recognizes the text wins.  Every grammar yields
an azimuth measured clockwise from north in degrees, which is then
converted to the engine convention (radians, counter-clockwise from
east, normalized to ``[0, 2pi)``).

Supported inputs, in matching order::

    N 45°04'30" E     N45D04'30"E     N 45 04 30 E      (quadrant)
    N45.0430E         S12.30W         N45E              (quadrant, packed)
    45D04'30"         AZ 123°30'                        (azimuth DMS)
    123.5             AZ 123.5°       AZ 123.3030       (azimuth numeric)

A leading ``-`` reverses the direction of the angle.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from typing import NamedTuple

from boundary_lib.enums import AngleGrammar
from boundary_lib.errors import ParseError
from boundary_lib.models import normalize_azimuth

logger = logging.getLogger(__name__)

# Typographic marks accepted in place of their ASCII counterparts.
_TRANSLATE = str.maketrans({
    "’": "'",  # right single quotation mark
    "′": "'",  # prime
    "”": '"',  # right double quotation mark
    "“": '"',  # left double quotation mark
    "″": '"',  # double prime
    "º": "°",  # masculine ordinal, often typed for a degree sign
})

# A minutes group never runs into a seconds mark: `45°30"` is 30 seconds.
QUADRANT = re.compile(
    r"""^(?P<ns>[NS])\s*
    (?P<deg>\d{1,3})(?:\s*[D°]\s*|\s+)
    (?:(?P<min>\d{1,2})(?![\d.]|\s*")\s*'?\s*)?
    (?:(?P<sec>\d{1,2}(?:\.\d+)?)\s*"?\s*)?
    (?P<ew>[EW])$""",
    re.IGNORECASE | re.VERBOSE,
)

QUADRANT_COMPACT = re.compile(
    r"^(?P<ns>[NS])\s*(?P<deg>\d{1,3})(?:\.(?P<frac>\d{2}|\d{4}))?\s*(?P<ew>[EW])$",
    re.IGNORECASE,
)

AZIMUTH_DMS = re.compile(
    r"""^(?:AZ\s*)?
    (?P<deg>\d{1,3})\s*[D°]\s*
    (?:(?P<min>\d{1,2})(?![\d.]|\s*")\s*'?\s*)?
    (?:(?P<sec>\d{1,2}(?:\.\d+)?)\s*"?)?$""",
    re.IGNORECASE | re.VERBOSE,
)

AZIMUTH_NUMERIC = re.compile(
    r"^(?P<prefix>AZ\s*)?(?P<deg>\d+)(?:\.(?P<frac>\d+))?\s*(?P<mark>[D°])?$",
    re.IGNORECASE,
)


class AngleMatch(NamedTuple):
    """Result of a single grammar: azimuth from north, clockwise, in degrees."""

    grammar: AngleGrammar
    north_degrees: float


class ParsedAngle(NamedTuple):
    """A parsed angle.

    Attributes:
        azimuth: Radians, counter-clockwise from east, in ``[0, 2pi)``
        reversed: True when the text carried a leading ``-``
        grammar: The grammar that recognized the text
    """

    azimuth: float
    reversed: bool
    grammar: AngleGrammar


def north_degrees_to_azimuth(north_degrees: float) -> float:
    """Azimuth from north (clockwise, degrees) -> engine azimuth (radians)."""
    return normalize_azimuth(math.pi / 2.0 - math.radians(north_degrees))


def azimuth_to_north_degrees(azimuth: float) -> float:
    """Engine azimuth (radians) -> azimuth from north (clockwise, degrees)."""
    return math.degrees(normalize_azimuth(math.pi / 2.0 - azimuth))


def _dms_to_degrees(
    text: str,
    degrees: str,
    minutes: str | None,
    seconds: str | None,
) -> float:
    """Combine degree, minute and second groups, validating ranges."""
    m = int(minutes) if minutes else 0
    s = float(seconds) if seconds else 0.0
    if m >= 60:
        raise ParseError(f"Minutes out of range ({m})", text)
    if s >= 60.0:
        raise ParseError(f"Seconds out of range ({s})", text)
    return int(degrees) + m / 60.0 + s / 3600.0


def _quadrant_to_north(text: str, ns: str, ew: str, theta: float) -> float:
    """Quadrant angle (away from N/S toward E/W) -> azimuth from north."""
    if theta > 90.0:
        raise ParseError(f"Quadrant angle above 90 degrees ({theta:g})", text)
    north = ns.upper() == "N"
    east = ew.upper() == "E"
    if north and east:
        return theta
    if not north and east:
        return 180.0 - theta
    if not north and not east:
        return 180.0 + theta
    return 360.0 - theta


def _check_azimuth(text: str, degrees: float) -> float:
    if degrees > 360.0:
        raise ParseError(f"Azimuth above 360 degrees ({degrees:g})", text)
    return degrees


def _unpack_fraction(text: str, degrees: str, frac: str | None) -> float:
    """Packed ``D.MM`` / ``D.MMSS`` -> decimal degrees."""
    if not frac:
        return _dms_to_degrees(text, degrees, None, None)
    return _dms_to_degrees(text, degrees, frac[:2], frac[2:4] or None)


# -----------------------------------------------------------------------------
# Grammars
# -----------------------------------------------------------------------------


def match_quadrant(text: str, *, packed_azimuth: bool = False) -> AngleMatch | None:
    m = QUADRANT.match(text)
    if m is None:
        return None
    theta = _dms_to_degrees(text, m["deg"], m["min"], m["sec"])
    return AngleMatch(
        AngleGrammar.QUADRANT,
        _quadrant_to_north(text, m["ns"], m["ew"], theta),
    )


def match_quadrant_compact(
    text: str, *, packed_azimuth: bool = False
) -> AngleMatch | None:
    m = QUADRANT_COMPACT.match(text)
    if m is None:
        return None
    theta = _unpack_fraction(text, m["deg"], m["frac"])
    return AngleMatch(
        AngleGrammar.QUADRANT_COMPACT,
        _quadrant_to_north(text, m["ns"], m["ew"], theta),
    )


def match_azimuth_dms(text: str, *, packed_azimuth: bool = False) -> AngleMatch | None:
    m = AZIMUTH_DMS.match(text)
    if m is None:
        return None
    degrees = _dms_to_degrees(text, m["deg"], m["min"], m["sec"])
    return AngleMatch(AngleGrammar.AZIMUTH_DMS, _check_azimuth(text, degrees))


def match_azimuth_numeric(
    text: str, *, packed_azimuth: bool = False
) -> AngleMatch | None:
    """Numeric azimuth.

    Plain numbers are decimal degrees.  With ``packed_azimuth`` a
    fractional group of exactly 2 or 4 digits (and no degree mark) is
    read as packed minutes/seconds instead.
    """
    m = AZIMUTH_NUMERIC.match(text)
    if m is None:
        return None
    frac = m["frac"]
    if packed_azimuth and not m["mark"] and frac and len(frac) in (2, 4):
        degrees = _unpack_fraction(text, m["deg"], frac)
    else:
        degrees = float(f"{m['deg']}.{frac or '0'}")
    return AngleMatch(AngleGrammar.AZIMUTH_NUMERIC, _check_azimuth(text, degrees))


GrammarMatcher = Callable[..., AngleMatch | None]

#: Grammars in matching order, first match wins
GRAMMARS: tuple[GrammarMatcher, ...] = (
    match_quadrant,
    match_quadrant_compact,
    match_azimuth_dms,
    match_azimuth_numeric,
)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------


def split_sign(text: str) -> tuple[str, bool]:
    """Strip a leading sign from *text*.

    Returns:
        ``(remaining_text, reversed)`` where ``reversed`` is True for ``-``
    """
    stripped = text.strip()
    if stripped[:1] == "-":
        return stripped[1:].lstrip(), True
    if stripped[:1] == "+":
        return stripped[1:].lstrip(), False
    return stripped, False


def parse_angle(text: str, *, packed_azimuth: bool = False) -> ParsedAngle:
    """Parse bearing or azimuth text into an engine azimuth.

    Args:
        text: Angle text, see the module docstring for accepted forms
        packed_azimuth: Read ``AZ 123.3030`` style numbers as packed
            degrees/minutes/seconds instead of decimal degrees

    Returns:
        The parsed angle. A leading ``-`` adds pi to the azimuth.

    Raises:
        ParseError: If no grammar recognizes the text, or a
            component is out of range
    """
    if text is None or not text.strip():
        raise ParseError("Empty angle text", text or "")

    body, reverse = split_sign(text.translate(_TRANSLATE))
    for grammar in GRAMMARS:
        match = grammar(body, packed_azimuth=packed_azimuth)
        if match is None:
            continue
        azimuth = north_degrees_to_azimuth(match.north_degrees)
        if reverse:
            azimuth = normalize_azimuth(azimuth + math.pi)
        logger.debug(
            "Parsed %r as %s -> %.12f rad", text, match.grammar.value, azimuth
        )
        return ParsedAngle(azimuth, reverse, match.grammar)

    raise ParseError("Unrecognized bearing or azimuth", text)


def try_parse_angle(text: str, *, packed_azimuth: bool = False) -> ParsedAngle | None:
    """Like :func:`parse_angle` but returns ``None`` on failure."""
    try:
        return parse_angle(text, packed_azimuth=packed_azimuth)
    except ParseError:
        return None
