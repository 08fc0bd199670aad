# -*- coding: utf-8 -*-
"""Bearing and azimuth text parsing and formatting."""

from boundary_lib.angle.format import format_angle
from boundary_lib.angle.format import format_bearing
from boundary_lib.angle.parser import ParsedAngle
from boundary_lib.angle.parser import azimuth_to_north_degrees
from boundary_lib.angle.parser import north_degrees_to_azimuth
from boundary_lib.angle.parser import parse_angle
from boundary_lib.angle.parser import try_parse_angle

__all__ = [
    "ParsedAngle",
    "azimuth_to_north_degrees",
    "format_angle",
    "format_bearing",
    "north_degrees_to_azimuth",
    "parse_angle",
    "try_parse_angle",
]
