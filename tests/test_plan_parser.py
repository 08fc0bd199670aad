# -*- coding: utf-8 -*-
"""Tests for call-line and call-list parsing."""

import logging

import pytest

from boundary_lib.angle.parser import azimuth_to_north_degrees
from boundary_lib.errors import ParseError
from boundary_lib.plan.models import CallList
from boundary_lib.plan.parser import CallListParser
from boundary_lib.plan.parser import make_call
from boundary_lib.plan.parser import parse_call

RECTANGLE_TEXT = """\
# Lot 12, plan 4471
# CSF=0.9996
N 90°00'00" E 100
P2,P3,N 0 E,50,L
S 90 W, 100

S 0 E 50
"""


class TestParseCall:
    """Tests for single ``bearing distance`` lines."""

    def test_whitespace_separated(self):
        call = parse_call("N45°04'30\"E 550.50")
        assert call.distance == pytest.approx(550.5)
        assert azimuth_to_north_degrees(call.azimuth) == pytest.approx(
            45.075, abs=1e-9
        )
        assert call.locked is False

    def test_comma_separated(self):
        call = parse_call("45D04'30\", 550.50")
        assert call.distance == pytest.approx(550.5)
        assert azimuth_to_north_degrees(call.azimuth) == pytest.approx(
            45.075, abs=1e-9
        )

    def test_bearing_with_spaces(self):
        call = parse_call("N 45 04 30 E 100")
        assert call.distance == pytest.approx(100.0)
        assert azimuth_to_north_degrees(call.azimuth) == pytest.approx(
            45.075, abs=1e-9
        )

    @pytest.mark.parametrize("marker", ["L", "l", "LOCKED", "*"])
    def test_lock_marker(self, marker):
        call = parse_call(f"S12.30W 80.00 {marker}")
        assert call.locked is True
        assert call.distance == pytest.approx(80.0)

    def test_keeps_text(self):
        call = parse_call("S12.30W 80.00")
        assert call.text == "S12.30W"

    def test_leading_sign_reverses(self):
        call = parse_call("-N45E 100")
        assert azimuth_to_north_degrees(call.azimuth) == pytest.approx(
            225.0, abs=1e-9
        )
        assert call.distance == pytest.approx(100.0)

    def test_negative_distance_reverses(self):
        call = parse_call("N45E -100")
        assert azimuth_to_north_degrees(call.azimuth) == pytest.approx(
            225.0, abs=1e-9
        )
        assert call.distance == pytest.approx(100.0)

    def test_sign_and_negative_distance_rejected(self):
        with pytest.raises(ParseError, match="both"):
            parse_call("-N45E -100")

    def test_zero_distance_rejected(self):
        with pytest.raises(ParseError):
            parse_call("N45E 0")

    @pytest.mark.parametrize("line", ["", "N45E", "N 45 E", "100", "N45E abc"])
    def test_malformed(self, line):
        with pytest.raises(ParseError):
            parse_call(line)


class TestMakeCall:
    """Tests for building calls from separate fields."""

    def test_labels(self):
        call = make_call("N 0 E", 50.0, from_id="A", to_id="B")
        assert call.from_id == "A"
        assert call.to_id == "B"

    def test_empty_labels_are_none(self):
        call = make_call("N 0 E", 50.0, from_id="", to_id="")
        assert call.from_id is None
        assert call.to_id is None


class TestCallListParser:
    """Tests for blocks of calls."""

    def test_parse_string(self):
        calls = CallListParser().parse_string(RECTANGLE_TEXT, "lot12.txt")
        assert isinstance(calls, CallList)
        assert len(calls.calls) == 4
        assert calls.combined_scale_factor == pytest.approx(0.9996)

    def test_row_with_ids_and_lock(self):
        calls = CallListParser().parse_string(RECTANGLE_TEXT)
        row = calls.calls[1]
        assert row.from_id == "P2"
        assert row.to_id == "P3"
        assert row.locked is True
        assert row.distance == pytest.approx(50.0)
        assert calls.calls[0].locked is False

    def test_parse_string_to_dict(self):
        data = CallListParser().parse_string_to_dict("N 0 E 10\n")
        assert data["combined_scale_factor"] == 1.0
        assert len(data["calls"]) == 1
        assert data["calls"][0]["distance"] == pytest.approx(10.0)

    def test_empty_text(self):
        calls = CallListParser().parse_string("# nothing here\n\n")
        assert calls.calls == []
        assert calls.combined_scale_factor == 1.0

    @pytest.mark.parametrize("value", ["2.0", "0.5", "1.5", "abc"])
    def test_csf_out_of_range_ignored(self, value, caplog):
        with caplog.at_level(logging.WARNING, logger="boundary_lib.plan.parser"):
            calls = CallListParser().parse_string(f"# CSF={value}\nN 0 E 10\n")
        assert calls.combined_scale_factor == 1.0
        assert "CSF" in caplog.text

    def test_error_location(self):
        text = "N 0 E 100\nbogus 12\n"
        with pytest.raises(ParseError) as exc_info:
            CallListParser().parse_string(text, "calls.txt")
        err = exc_info.value
        assert err.location is not None
        assert err.location.source == "calls.txt"
        assert err.location.line == 1
        assert err.location.text == "bogus 12"
        assert "line 2" in str(err)

    def test_invalid_distance_in_row(self):
        with pytest.raises(ParseError, match="Invalid distance"):
            CallListParser().parse_string("P1,P2,N 0 E,abc\n")
