"""Tests for cutter shapes and the tool-table factory."""
import dataclasses

import pytest

from dropcutter.cutters import (
    BallNose,
    Cone,
    CutterType,
    Cylinder,
    TaperedBallNose,
    UnsupportedCutterError,
    make_cutter,
)


class TestMakeCutter:

    def test_ball_nose_uses_half_diameter(self):
        cutter = make_cutter(CutterType.BALL_NOSE, diameter=6.0)
        assert cutter == BallNose(radius=3.0)

    def test_cylinder(self):
        cutter = make_cutter("cylinder", diameter=4.0, length=20.0)
        assert cutter == Cylinder(radius=2.0, length=20.0)

    def test_cone(self):
        cutter = make_cutter(CutterType.CONE, diameter=6.0, length=8.0)
        assert cutter == Cone(base_radius=3.0, height=8.0)

    def test_tapered_ball_nose_uses_tip_radius_only(self):
        cutter = make_cutter(CutterType.TAPERED_BALL_NOSE, diameter=10.0, tip_radius=0.5)
        assert cutter == TaperedBallNose(tip_radius=0.5)

    def test_unknown_kind_raises(self):
        with pytest.raises(UnsupportedCutterError):
            make_cutter("bull_nose", diameter=6.0)

    def test_unsupported_error_is_value_error(self):
        with pytest.raises(ValueError):
            make_cutter(42, diameter=6.0)


class TestCutterValidation:

    def test_radius_must_be_positive(self):
        with pytest.raises(ValueError):
            BallNose(radius=0.0)
        with pytest.raises(ValueError):
            Cylinder(radius=-1.0, length=5.0)

    def test_length_may_be_zero(self):
        assert Cylinder(radius=1.0, length=0.0).length == 0.0

    def test_negative_height_rejected(self):
        with pytest.raises(ValueError):
            Cone(base_radius=1.0, height=-2.0)

    def test_tapered_requires_tip_radius(self):
        with pytest.raises(ValueError):
            make_cutter(CutterType.TAPERED_BALL_NOSE, diameter=6.0)

    def test_cutters_are_immutable(self):
        cutter = BallNose(radius=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cutter.radius = 2.0

    def test_kind_and_describe(self):
        cutter = Cone(base_radius=3.0, height=8.0)
        assert cutter.kind is CutterType.CONE
        assert "cone" in cutter.describe()
