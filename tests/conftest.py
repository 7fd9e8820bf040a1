"""
Shared test fixtures for the drop-cutter engine tests.
"""
import sys
from pathlib import Path

import numpy as np
import pytest
import trimesh

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dropcutter.mesh import Mesh
from dropcutter.primitives import Triangle


def make_square(side: float = 10.0, z: float = 0.0) -> Mesh:
    """Two upward-facing triangles forming a horizontal square centred at the origin."""
    h = side / 2.0
    a = (-h, -h, z)
    b = (h, -h, z)
    c = (h, h, z)
    d = (-h, h, z)
    return Mesh([Triangle(a, b, c), Triangle(a, c, d)])


@pytest.fixture
def flat_square():
    """A 10x10 horizontal square at z=0."""
    return make_square()


@pytest.fixture
def box_trimesh():
    """A 10x10x10 box with its bottom at z=0."""
    mesh = trimesh.creation.box(extents=[10, 10, 10])
    mesh.apply_translation([0, 0, 5])
    return mesh


@pytest.fixture
def box_mesh(box_trimesh):
    return Mesh.from_trimesh(box_trimesh)


@pytest.fixture
def box_mesh_file(box_trimesh, tmp_path):
    """The box mesh written to a binary STL file."""
    path = tmp_path / "box.stl"
    box_trimesh.export(str(path))
    return str(path)


@pytest.fixture
def single_triangle():
    """A right triangle in the z=0 plane."""
    return Triangle(np.array([0.0, 0.0, 0.0]), np.array([4.0, 0.0, 0.0]), np.array([0.0, 4.0, 0.0]))
