# -*- coding: utf-8 -*-
"""Formatting of engine azimuths as bearing or azimuth text.

Every style produced here is accepted back by
:func:`boundary_lib.angle.parser.parse_angle`.
"""

from boundary_lib.angle.parser import azimuth_to_north_degrees
from boundary_lib.enums import AngleStyle

#: Decimal places of the seconds field in DMS styles
SECONDS_DECIMALS: int = 2

#: Decimal places of the AZIMUTH_DECIMAL style
DECIMAL_DEGREE_PLACES: int = 6


def split_dms(degrees: float, seconds_decimals: int = SECONDS_DECIMALS) -> tuple[int, int, float]:
    """Split decimal degrees into ``(degrees, minutes, seconds)``.

    The seconds are rounded first so that a rounding carry propagates
    into minutes and degrees (``59.999"`` never prints as ``60.00"``).
    """
    total = round(degrees * 3600.0, seconds_decimals)
    d = int(total // 3600)
    rem = total - d * 3600
    m = int(rem // 60)
    s = round(rem - m * 60, seconds_decimals)
    return d, m, s


def _quadrant(north_degrees: float) -> tuple[str, float, str]:
    """Azimuth from north -> ``(N|S, angle, E|W)``."""
    if north_degrees <= 90.0:
        return "N", north_degrees, "E"
    if north_degrees < 180.0:
        return "S", 180.0 - north_degrees, "E"
    if north_degrees <= 270.0:
        return "S", north_degrees - 180.0, "W"
    return "N", 360.0 - north_degrees, "W"


def _seconds(s: float, decimals: int) -> str:
    width = 3 + decimals if decimals else 2
    return f"{s:0{width}.{decimals}f}"


def format_angle(azimuth: float, style: AngleStyle = AngleStyle.QUADRANT) -> str:
    """Format an engine azimuth (radians, CCW from east) as text.

    Args:
        azimuth: Finite angle in radians, any range
        style: Output style

    Returns:
        The formatted angle, e.g. ``N 45°04'30.00" E``
    """
    north = azimuth_to_north_degrees(azimuth)

    match style:
        case AngleStyle.QUADRANT:
            ns, theta, ew = _quadrant(north)
            d, m, s = split_dms(theta)
            return f"{ns} {d:02d}°{m:02d}'{_seconds(s, SECONDS_DECIMALS)}\" {ew}"

        case AngleStyle.QUADRANT_COMPACT:
            ns, theta, ew = _quadrant(north)
            d, m, s = split_dms(theta, seconds_decimals=0)
            return f"{ns}{d:02d}.{m:02d}{int(s):02d}{ew}"

        case AngleStyle.AZIMUTH_DMS:
            d, m, s = split_dms(north)
            if d >= 360:
                d -= 360
            return f"{d:03d}°{m:02d}'{_seconds(s, SECONDS_DECIMALS)}\""

        case AngleStyle.AZIMUTH_DECIMAL:
            value = round(north, DECIMAL_DEGREE_PLACES)
            if value >= 360.0:
                value -= 360.0
            return f"{value:.{DECIMAL_DEGREE_PLACES}f}°"

        case _:
            raise ValueError(f"Unknown angle style: `{style}`")


def format_bearing(azimuth: float) -> str:
    """Format as a human quadrant bearing (``N dd°mm'ss.ss" E``)."""
    return format_angle(azimuth, AngleStyle.QUADRANT)
