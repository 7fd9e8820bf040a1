"""Tests for tool-path writers."""
import json

import numpy as np
import pytest

from dropcutter.export import gcode_lines, write_gcode, write_points_csv, write_points_json


@pytest.fixture
def points():
    return np.array([[0.0, 0.0, -1.0], [1.0, 0.0, -0.5], [2.0, 0.0, 0.0]])


def test_csv(points, tmp_path):
    out = write_points_csv(points, tmp_path / "sub" / "path.csv")
    lines = out.read_text().strip().splitlines()
    assert lines[0] == "x,y,z"
    assert len(lines) == 4
    loaded = np.loadtxt(out, delimiter=",", skiprows=1)
    np.testing.assert_allclose(loaded, points)


def test_json(points, tmp_path):
    out = write_points_json(points, tmp_path / "path.json", metadata={"cutter": "ball-nose r=1"})
    payload = json.loads(out.read_text())
    assert payload["metadata"]["cutter"] == "ball-nose r=1"
    np.testing.assert_allclose(payload["points"], points)


def test_rejects_bad_shape(tmp_path):
    with pytest.raises(ValueError):
        write_points_csv(np.zeros((3, 2)), tmp_path / "bad.csv")


def test_gcode_lines(points):
    lines = gcode_lines(points, safe_z=5.0, feed=900.0)
    assert lines[:3] == ["G21", "G90", "G0 Z5.000"]
    assert lines[3] == "G0 X0.000 Y0.000"
    assert lines[4] == "G1 Z-1.000 F300"
    assert lines[5] == "G1 X1.000 Y0.000 Z-0.500 F900"
    assert lines[-2] == "G0 Z5.000"
    assert lines[-1] == "M2"


def test_gcode_empty_path(tmp_path):
    out = write_gcode(np.zeros((0, 3)), tmp_path / "empty.nc", safe_z=5.0)
    assert out.read_text().splitlines() == ["G21", "G90", "G0 Z5.000", "M2"]
