# -*- coding: utf-8 -*-
"""Tests for span adjustment, loop assembly and residual tiers."""

import math

import pytest

from boundary_lib.angle.parser import north_degrees_to_azimuth
from boundary_lib.enums import Provenance
from boundary_lib.enums import ResidualTier
from boundary_lib.errors import InsufficientAnchorsError
from boundary_lib.errors import NoFreeLegSpanError
from boundary_lib.errors import UnreachableSpanError
from boundary_lib.evidence.models import EvidenceLinks
from boundary_lib.evidence.models import EvidencePoint
from boundary_lib.models import Vector2D
from boundary_lib.plan.builder import build_plan
from boundary_lib.plan.models import Leg
from boundary_lib.solver.assembler import LoopAssembler
from boundary_lib.solver.compass_rule import CompassRuleAdjuster
from boundary_lib.solver.models import SimilarityTransform
from boundary_lib.solver.residuals import classify_residual
from boundary_lib.solver.residuals import classify_residuals
from boundary_lib.solver.segment import SegmentAdjuster
from boundary_lib.solver.segment import positive_roots
from boundary_lib.solver.segment import split_chain
from boundary_lib.solver.segment import walk
from conftest import make_calls
from conftest import make_rectangle

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _leg(north: float, distance: float, locked: bool = False, i: int = 0) -> Leg:
    """A leg from ``(azimuth from north in degrees, distance)``."""
    return Leg(
        from_id=f"P{i + 1}",
        to_id=f"P{i + 2}",
        distance=distance,
        azimuth=north_degrees_to_azimuth(north),
        locked=locked,
    )


def _chain(*legs: tuple) -> list[Leg]:
    return [_leg(*leg, i=i) for i, leg in enumerate(legs)]


def _assert_point(p: Vector2D, x: float, y: float, tol: float = 1e-9) -> None:
    assert p.x == pytest.approx(x, abs=tol)
    assert p.y == pytest.approx(y, abs=tol)


def _open_line():
    """Open traverse P1 (0, 0) -> P2 (10, 0) -> P3 (20, 0) -> P4 (30, 0)."""
    return build_plan(make_calls([(90.0, 10.0), (90.0, 10.0), (90.0, 10.0)]))


# ---------------------------------------------------------------------------
# Quadratic roots
# ---------------------------------------------------------------------------


class TestPositiveRoots:
    """Tests for the scale quadratic."""

    def test_two_roots(self):
        assert sorted(positive_roots(1.0, -3.0, 2.0)) == pytest.approx([1.0, 2.0])

    def test_one_positive_root(self):
        assert positive_roots(1.0, 0.0, -4.0) == pytest.approx([2.0])

    def test_no_real_roots(self):
        assert positive_roots(1.0, 0.0, 1.0) == []

    def test_negative_roots_dropped(self):
        assert positive_roots(1.0, 2.0, 1.0) == []

    def test_tiny_negative_discriminant_clamped(self):
        roots = positive_roots(1.0, -2.0, 1.0 + 1e-14)
        assert roots
        assert roots == pytest.approx([1.0] * len(roots))


# ---------------------------------------------------------------------------
# SegmentAdjuster
# ---------------------------------------------------------------------------


class TestSegmentAdjuster:
    """Tests for one-scale one-rotation span closing."""

    def test_name(self):
        assert SegmentAdjuster().name == "SegmentAdjuster"

    def test_split_chain(self):
        locked, free = split_chain(_chain((90.0, 10.0, True), (0.0, 5.0)))
        _assert_point(locked, 10.0, 0.0)
        _assert_point(free, 0.0, 5.0)

    def test_exact_match(self):
        chain = _chain((90.0, 100.0), (0.0, 50.0))
        sol = SegmentAdjuster().adjust(
            Vector2D(0.0, 0.0), Vector2D(100.0, 50.0), chain, "P1", "P3"
        )
        assert sol.scale == pytest.approx(1.0)
        assert sol.rotation == pytest.approx(0.0, abs=1e-12)
        assert sol.misclosure == pytest.approx(0.0, abs=1e-9)
        assert len(sol.positions) == 3
        _assert_point(sol.interior[0], 100.0, 0.0)
        assert sol.positions[-1] == Vector2D(100.0, 50.0)
        assert sol.provenance == Provenance.SIMILARITY_BETWEEN
        assert (sol.start_id, sol.end_id) == ("P1", "P3")
        assert sol.end_gap == pytest.approx(0.0, abs=1e-9)

    def test_scale_and_rotation(self):
        chain = _chain((90.0, 100.0), (0.0, 50.0))
        t = SimilarityTransform(
            scale=1.01,
            cos=math.cos(math.radians(2.0)),
            sin=math.sin(math.radians(2.0)),
            tx=0.0,
            ty=0.0,
        )
        end = t.apply(Vector2D(100.0, 50.0))
        sol = SegmentAdjuster().adjust(Vector2D(0.0, 0.0), end, chain)
        assert sol.scale == pytest.approx(1.01)
        assert math.degrees(sol.rotation) == pytest.approx(2.0)
        expected = t.apply(Vector2D(100.0, 0.0))
        _assert_point(sol.interior[0], expected.x, expected.y)

    def test_locked_legs_keep_length(self):
        chain = _chain((90.0, 100.0), (0.0, 30.0, True), (90.0, 100.0))
        start = Vector2D(0.0, 0.0)
        end = Vector2D(205.0, 32.0)
        sol = SegmentAdjuster().adjust(start, end, chain)

        walked = walk(start, chain, sol.scale, sol.rotation)
        _assert_point(walked[-1], end.x, end.y, 1e-6)

        locked_length = sol.positions[2].distance_to(sol.positions[1])
        assert locked_length == pytest.approx(30.0, abs=1e-9)
        free_length = sol.positions[1].distance_to(sol.positions[0])
        assert free_length == pytest.approx(100.0 * sol.scale)
        assert sol.scale == pytest.approx(math.sqrt(42149.0 / 40000.0))
        assert sol.locked_count == 1
        assert sol.free_count == 2
        assert sol.provenance == Provenance.SIMILARITY_BETWEEN_LOCKED

    def test_rectangle_with_locked_leg(self):
        chain = _chain((90.0, 100.0, True), (0.0, 50.0))
        sol = SegmentAdjuster().adjust(
            Vector2D(0.0, 0.0), Vector2D(100.0, 60.0), chain
        )
        assert sol.scale == pytest.approx(1.2)
        assert sol.rotation == pytest.approx(0.0, abs=1e-9)
        _assert_point(sol.interior[0], 100.0, 0.0)

    def test_locked_chain_rotates_only(self):
        chain = _chain((90.0, 100.0, True))
        sol = SegmentAdjuster().adjust(
            Vector2D(0.0, 0.0), Vector2D(0.0, 100.0), chain
        )
        assert sol.scale == 1.0
        assert sol.rotation == pytest.approx(math.pi / 2)
        assert sol.free_count == 0
        assert sol.positions[-1] == Vector2D(0.0, 100.0)
        assert sol.end_gap == pytest.approx(0.0, abs=1e-9)

    def test_locked_chain_length_mismatch(self):
        chain = _chain((90.0, 100.0, True))
        with pytest.raises(NoFreeLegSpanError) as exc_info:
            SegmentAdjuster().adjust(
                Vector2D(0.0, 0.0), Vector2D(0.0, 90.0), chain, "A", "B"
            )
        err = exc_info.value
        assert err.start_id == "A"
        assert err.end_id == "B"
        assert err.locked_length == pytest.approx(100.0)
        assert err.target_length == pytest.approx(90.0)
        assert "A -> B" in str(err)

    def test_locked_tolerance(self):
        chain = _chain((90.0, 100.0, True))
        adjuster = SegmentAdjuster(locked_tolerance=0.5)
        sol = adjuster.adjust(Vector2D(0.0, 0.0), Vector2D(0.0, 100.3), chain)
        assert sol.positions[-1] == Vector2D(0.0, 100.3)
        assert sol.end_gap == pytest.approx(0.3)
        assert sol.positions[-1].distance_to(sol.positions[-2]) == pytest.approx(100.3)

    def test_unreachable(self):
        chain = _chain((90.0, 100.0, True), (0.0, 10.0))
        with pytest.raises(UnreachableSpanError):
            SegmentAdjuster().adjust(Vector2D(0.0, 0.0), Vector2D(50.0, 0.0), chain)

    def test_empty_chain(self):
        with pytest.raises(ValueError):
            SegmentAdjuster().adjust(Vector2D(0.0, 0.0), Vector2D(1.0, 0.0), [])


# ---------------------------------------------------------------------------
# CompassRuleAdjuster
# ---------------------------------------------------------------------------


class TestCompassRuleAdjuster:
    """Tests for length-proportional misclosure distribution."""

    def test_distributes_by_length(self):
        chain = _chain((90.0, 100.0), (0.0, 50.0))
        sol = CompassRuleAdjuster().adjust(
            Vector2D(0.0, 0.0), Vector2D(100.06, 50.03), chain
        )
        _assert_point(sol.interior[0], 100.04, 0.02)
        assert sol.misclosure == pytest.approx(math.hypot(0.06, 0.03))
        assert sol.provenance == Provenance.COMPASS_RULE

    def test_locked_leg_takes_no_correction(self):
        chain = _chain((90.0, 100.0, True), (0.0, 50.0))
        sol = CompassRuleAdjuster().adjust(
            Vector2D(0.0, 0.0), Vector2D(100.06, 50.03), chain
        )
        _assert_point(sol.interior[0], 100.0, 0.0)
        assert sol.positions[-1] == Vector2D(100.06, 50.03)

    def test_all_locked_exact(self):
        chain = _chain((90.0, 100.0, True), (0.0, 50.0, True))
        sol = CompassRuleAdjuster().adjust(
            Vector2D(0.0, 0.0), Vector2D(100.0, 50.0), chain
        )
        _assert_point(sol.interior[0], 100.0, 0.0)
        assert sol.end_gap == pytest.approx(0.0, abs=1e-9)

    def test_all_locked_within_tolerance(self):
        chain = _chain((90.0, 100.0, True), (0.0, 50.0, True))
        sol = CompassRuleAdjuster(locked_tolerance=0.1).adjust(
            Vector2D(0.0, 0.0), Vector2D(100.06, 50.03), chain
        )
        _assert_point(sol.interior[0], 100.0, 0.0)
        assert sol.positions[-1] == Vector2D(100.06, 50.03)
        assert sol.end_gap == pytest.approx(math.hypot(0.06, 0.03))

    def test_all_locked_mismatch(self):
        chain = _chain((90.0, 100.0, True), (0.0, 50.0, True))
        with pytest.raises(NoFreeLegSpanError):
            CompassRuleAdjuster().adjust(
                Vector2D(0.0, 0.0), Vector2D(100.06, 50.03), chain, "P1", "P3"
            )


# ---------------------------------------------------------------------------
# LoopAssembler
# ---------------------------------------------------------------------------


class TestLoopAssembler:
    """Tests for assembling spans into a full boundary."""

    def test_exact_anchors(self, rectangle):
        geometry = LoopAssembler().assemble(
            rectangle, {0: Vector2D(0.0, 0.0), 2: Vector2D(100.0, 50.0)}
        )
        for position, vertex in zip(geometry.positions, rectangle.vertices, strict=True):
            _assert_point(position, vertex.x, vertex.y)
        assert geometry.provenance == [
            Provenance.HELD,
            Provenance.SIMILARITY_BETWEEN,
            Provenance.HELD,
            Provenance.SIMILARITY_BETWEEN,
        ]
        assert len(geometry.spans) == 2
        assert (geometry.spans[1].start_id, geometry.spans[1].end_id) == ("P3", "P1")

    def test_three_anchors(self, rectangle):
        geometry = LoopAssembler().assemble(
            rectangle,
            {0: Vector2D(0.0, 0.0), 1: Vector2D(100.0, 0.0), 2: Vector2D(100.0, 50.0)},
        )
        assert [(s.start_id, s.end_id) for s in geometry.spans] == [
            ("P1", "P2"),
            ("P2", "P3"),
            ("P3", "P1"),
        ]
        assert geometry.provenance[3] == Provenance.SIMILARITY_BETWEEN

    def test_similarity_anchors(self, rectangle):
        t = SimilarityTransform(
            scale=1.01,
            cos=math.cos(math.radians(2.0)),
            sin=math.sin(math.radians(2.0)),
            tx=10.0,
            ty=20.0,
        )
        anchors = {0: t.apply(rectangle.vertices[0].position), 2: t.apply(rectangle.vertices[2].position)}
        geometry = LoopAssembler().assemble(rectangle, anchors)
        expected = t.apply_many(rectangle.positions)
        for got, want in zip(geometry.positions, expected, strict=True):
            _assert_point(got, want.x, want.y, 1e-8)

    def test_insufficient_anchors(self, rectangle):
        with pytest.raises(InsufficientAnchorsError) as exc_info:
            LoopAssembler().assemble(rectangle, {0: Vector2D(0.0, 0.0)})
        assert exc_info.value.found == 1

    def test_out_of_range_anchor_ignored(self, rectangle):
        with pytest.raises(InsufficientAnchorsError):
            LoopAssembler().assemble(
                rectangle, {0: Vector2D(0.0, 0.0), 9: Vector2D(1.0, 1.0)}
            )

    def test_open_tails_translated(self):
        plan = _open_line()
        assert plan.closed is False
        geometry = LoopAssembler().assemble(
            plan, {1: Vector2D(10.0, 1.0), 2: Vector2D(20.0, 1.0)}
        )
        assert len(geometry.spans) == 1
        _assert_point(geometry.positions[0], 0.0, 1.0)
        _assert_point(geometry.positions[3], 30.0, 1.0)
        assert geometry.provenance == [
            Provenance.BEARING_DISTANCE,
            Provenance.HELD,
            Provenance.HELD,
            Provenance.BEARING_DISTANCE,
        ]

    def test_open_tails_not_rotated(self):
        plan = _open_line()
        geometry = LoopAssembler().assemble(
            plan, {1: Vector2D(10.0, 0.0), 2: Vector2D(10.0, 10.0)}
        )
        assert geometry.spans[0].rotation == pytest.approx(math.pi / 2)
        _assert_point(geometry.positions[0], 0.0, 0.0)
        _assert_point(geometry.positions[3], 20.0, 10.0)

    def test_span_error_aborts(self):
        plan = make_rectangle(locked={0, 1})
        with pytest.raises(NoFreeLegSpanError):
            LoopAssembler().assemble(
                plan, {0: Vector2D(0.0, 0.0), 2: Vector2D(100.0, 60.0)}
            )

    def test_compass_rule(self, rectangle):
        assembler = LoopAssembler(CompassRuleAdjuster())
        geometry = assembler.assemble(
            rectangle, {0: Vector2D(0.0, 0.0), 2: Vector2D(100.06, 50.03)}
        )
        _assert_point(geometry.positions[1], 100.04, 0.02)
        _assert_point(geometry.positions[3], 0.02, 50.01)
        assert geometry.provenance[1] == Provenance.COMPASS_RULE


# ---------------------------------------------------------------------------
# Residuals
# ---------------------------------------------------------------------------


class TestResiduals:
    """Tests for residual tiers."""

    @pytest.mark.parametrize(
        ("length", "tier"),
        [
            (0.0, ResidualTier.EXACT),
            (0.005, ResidualTier.EXACT),
            (0.01, ResidualTier.GREEN),
            (0.0149, ResidualTier.GREEN),
            (0.015, ResidualTier.YELLOW),
            (0.0199, ResidualTier.YELLOW),
            (0.02, ResidualTier.RED),
            (1.0, ResidualTier.RED),
        ],
    )
    def test_classify(self, length, tier):
        assert classify_residual(length) == tier

    def test_classify_residuals(self, rectangle):
        evidence = EvidenceLinks(
            points=[
                EvidencePoint(x=100.0, y=50.018, plan_id="P3"),
                EvidencePoint(x=0.0, y=0.0, plan_id="P1", held=True),
                EvidencePoint(x=0.0, y=0.0, plan_id="p3"),
                EvidencePoint(x=7.0, y=7.0),
            ]
        )
        residuals = classify_residuals(rectangle, rectangle.positions, evidence)
        assert [r.plan_id for r in residuals] == ["P1", "P3"]

        p1, p3 = residuals
        assert p1.tier == ResidualTier.EXACT
        assert p1.is_discrepancy is False
        assert p3.index == 2
        assert p3.length == pytest.approx(0.018, abs=1e-9)
        assert p3.tier == ResidualTier.YELLOW
        _assert_point(p3.vector, 0.0, 0.018)
        assert p3.is_discrepancy is True
