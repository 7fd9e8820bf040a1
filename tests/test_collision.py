"""Tests for the cutter/mesh contact predicate."""
import numpy as np
import pytest

from dropcutter.collision import touches, touches_surface
from dropcutter.cutters import BallNose, Cone, Cylinder, TaperedBallNose, UnsupportedCutterError
from dropcutter.mesh import Mesh
from dropcutter.primitives import Triangle


class TestBallNose:
    """Sphere of radius r resting on its tip at the pose."""

    def test_tip_on_plane_touches(self, flat_square):
        assert touches_surface(BallNose(1.0), (0, 0, 0), flat_square)

    def test_above_plane_does_not_touch(self, flat_square):
        assert not touches(BallNose(1.0), (0, 0, 0.5), flat_square)

    def test_sphere_straddling_plane_touches(self, flat_square):
        assert touches_surface(BallNose(1.0), (0, 0, -1.0), flat_square)

    def test_sunk_below_plane(self, flat_square):
        # sphere fully below the sheet: no surface contact, but engaged
        assert not touches_surface(BallNose(1.0), (0, 0, -5.0), flat_square)
        assert touches(BallNose(1.0), (0, 0, -5.0), flat_square)

    def test_off_mesh(self, flat_square):
        assert not touches(BallNose(1.0), (20, 20, 0), flat_square)
        assert not touches(BallNose(1.0), (20, 20, -5), flat_square)

    def test_touches_edge_from_outside(self, flat_square):
        # sphere center 0.5 beyond the x=5 edge, level with the sheet
        assert touches_surface(BallNose(1.0), (5.5, 0, -1.0), flat_square)
        assert not touches_surface(BallNose(1.0), (6.5, 0, -1.0), flat_square)


class TestTaperedBallNose:

    def test_only_tip_radius_counts(self, flat_square):
        cutter = TaperedBallNose(tip_radius=0.5)
        assert touches(cutter, (0, 0, 0), flat_square)
        assert not touches(cutter, (0, 0, 0.01), flat_square)

    def test_matches_ball_nose_of_same_radius(self, box_mesh):
        tapered = TaperedBallNose(tip_radius=2.0)
        ball = BallNose(radius=2.0)
        for pose in [(0, 0, 10), (6, 0, 8), (7.5, 0, 8), (0, 0, 12.1)]:
            assert touches_surface(tapered, pose, box_mesh) == touches_surface(ball, pose, box_mesh)


class TestCylinder:

    def test_bottom_disc_on_vertex(self, flat_square):
        assert touches_surface(Cylinder(1.0, 10.0), (5, 5, 0), flat_square)

    def test_side_wall_contains_vertex(self, flat_square):
        assert touches_surface(Cylinder(1.0, 10.0), (5, 5, -3), flat_square)
        assert touches_surface(Cylinder(1.0, 10.0), (4.5, 5, -3), flat_square)

    def test_vertex_above_short_cylinder(self, flat_square):
        assert not touches_surface(Cylinder(1.0, 2.0), (5, 5, -3), flat_square)

    def test_zero_length_has_no_side_wall(self, flat_square):
        assert not touches_surface(Cylinder(1.0, 0.0), (5, 5, -3), flat_square)

    def test_face_without_vertices_is_missed(self, flat_square):
        # vertex-only approximation: disc in the middle of the sheet
        assert not touches_surface(Cylinder(1.0, 10.0), (0, 0, -0.5), flat_square)
        assert touches(Cylinder(1.0, 10.0), (0, 0, -0.5), flat_square)

    def test_above_sheet(self, flat_square):
        assert not touches(Cylinder(1.0, 10.0), (0, 0, 0.1), flat_square)


class TestCone:

    def test_vertex_inside_envelope(self, flat_square):
        cone = Cone(base_radius=2.0, height=4.0)
        assert touches_surface(cone, (5, 5, -2), flat_square)
        assert touches_surface(cone, (4, 5, -3), flat_square)

    def test_vertex_outside_taper(self, flat_square):
        cone = Cone(base_radius=2.0, height=4.0)
        # radius at axial offset 1 is 0.5, vertex is 1 away from the axis
        assert not touches_surface(cone, (4, 5, -1), flat_square)

    def test_vertex_above_cone(self, flat_square):
        assert not touches_surface(Cone(base_radius=2.0, height=4.0), (5, 5, -5), flat_square)

    def test_flat_cone_never_touches_surface(self, flat_square):
        assert not touches_surface(Cone(base_radius=2.0, height=0.0), (5, 5, 0), flat_square)


class TestPredicateGeneral:

    @pytest.mark.parametrize(
        "cutter",
        [BallNose(1.0), Cylinder(1.0, 5.0), Cone(1.0, 5.0), TaperedBallNose(1.0)],
    )
    def test_empty_mesh_never_touches(self, cutter):
        assert not touches(cutter, (0, 0, 0), Mesh())
        assert not touches_surface(cutter, (0, 0, 0), Mesh())

    def test_unknown_cutter_raises(self, flat_square):
        with pytest.raises(UnsupportedCutterError):
            touches_surface(object(), (0, 0, 0), flat_square)

    def test_inside_closed_box_is_engaged(self, box_mesh):
        ball = BallNose(1.0)
        assert touches(ball, (0, 0, 10), box_mesh)
        assert not touches(ball, (0, 0, 10.5), box_mesh)
        assert not touches_surface(ball, (0, 0, 5), box_mesh)
        assert touches(ball, (0, 0, 5), box_mesh)

    def test_vertical_triangles_do_not_engage_axis(self):
        wall = Mesh([Triangle((0, -1, 0), (0, 1, 0), (0, 0, 5))])
        assert not touches(Cylinder(0.1, 1.0), (0, 0, -3), wall)

    def test_pose_accepts_arrays_and_tuples(self, flat_square):
        cutter = BallNose(1.0)
        assert touches(cutter, np.array([0.0, 0.0, 0.0]), flat_square)
        assert touches(cutter, [0, 0, 0], flat_square)

    def test_predicate_does_not_mutate_inputs(self, flat_square):
        before = flat_square.vertex_array.copy()
        cutter = Cylinder(1.0, 5.0)
        touches(cutter, (5, 5, 0), flat_square)
        np.testing.assert_array_equal(flat_square.vertex_array, before)
        assert cutter == Cylinder(1.0, 5.0)
