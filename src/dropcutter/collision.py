"""
Cutter-vs-mesh contact predicate.

``touches`` answers one question: does the cutter, with its reference
point at ``pose``, touch the mesh? Every shape test first prunes with the
mesh box, then with the per-triangle boxes (vectorised), and only runs the
exact per-shape test on the surviving triangles.

Shape tests:
- Ball-nose / tapered ball-nose: point-to-triangle distance from the tip
  sphere center <= radius. The tapered flank is never tested.
- Cylinder: any triangle vertex within ``radius`` of the bottom-disc
  center, or any vertex inside the side wall (axial 0..length, radial
  <= radius). Vertex-only approximation.
- Cone: any vertex inside the linearly tapering envelope. Vertex-only
  approximation.

On top of the surface test the cutter also counts as engaged when its
reference point sits on or below the surface directly under the tool
axis, so a cutter that has passed through a sheet keeps reporting contact.
"""

from __future__ import annotations

import numpy as np

from dropcutter.cutters import (
    BallNose,
    Cone,
    Cutter,
    Cylinder,
    TaperedBallNose,
    UnsupportedCutterError,
)
from dropcutter.mesh import Mesh
from dropcutter.primitives import AxisAlignedBox, Vec3, as_vec3, point_triangle_distance

# Axis lengths below this are treated as zero (no side wall / no cone).
_AXIS_EPS = np.finfo(float).tiny


def touches(cutter: Cutter, pose, mesh: Mesh) -> bool:
    """True if *cutter* at *pose* touches (or has sunk below) the mesh surface."""
    pose = as_vec3(pose)
    if mesh.triangle_count == 0:
        return False
    if touches_surface(cutter, pose, mesh):
        return True
    return _axis_below_surface(pose, mesh)


def touches_surface(cutter: Cutter, pose, mesh: Mesh) -> bool:
    """Shape-specific surface contact test without the below-surface check."""
    pose = as_vec3(pose)
    if mesh.triangle_count == 0:
        return False

    if isinstance(cutter, BallNose):
        center = pose + np.array([0.0, 0.0, cutter.radius])
        return _sphere_touches(center, cutter.radius, mesh)
    if isinstance(cutter, TaperedBallNose):
        center = pose + np.array([0.0, 0.0, cutter.tip_radius])
        return _sphere_touches(center, cutter.tip_radius, mesh)
    if isinstance(cutter, Cylinder):
        return _cylinder_touches(pose, cutter.radius, cutter.length, mesh)
    if isinstance(cutter, Cone):
        return _cone_touches(pose, cutter.base_radius, cutter.height, mesh)
    raise UnsupportedCutterError(f"Unsupported cutter: {cutter!r}")


# ─── Pruning ─────────────────────────────────────────────────────────────────


def _candidates(mesh: Mesh, query: AxisAlignedBox) -> np.ndarray:
    """Indices of triangles whose boxes overlap *query* (inclusive bounds)."""
    if not mesh.bounding_box.intersects(query):
        return np.zeros(0, dtype=int)
    overlap = np.all(mesh.triangle_max_corners >= query.min_corner, axis=1) & np.all(
        mesh.triangle_min_corners <= query.max_corner, axis=1
    )
    return np.flatnonzero(overlap)


def _candidate_vertices(mesh: Mesh, query: AxisAlignedBox) -> np.ndarray:
    idx = _candidates(mesh, query)
    return mesh.vertex_array[idx].reshape(-1, 3)


# ─── Shape tests ─────────────────────────────────────────────────────────────


def _sphere_touches(center: Vec3, radius: float, mesh: Mesh) -> bool:
    query = AxisAlignedBox(center - radius, center + radius)
    triangles = mesh.triangles
    for i in _candidates(mesh, query):
        if point_triangle_distance(center, triangles[i]) <= radius:
            return True
    return False


def _cylinder_touches(tip: Vec3, radius: float, length: float, mesh: Mesh) -> bool:
    query = AxisAlignedBox(
        tip - np.array([radius, radius, 0.0]),
        tip + np.array([radius, radius, length]),
    )
    verts = _candidate_vertices(mesh, query)
    if len(verts) == 0:
        return False

    offsets = verts - tip
    r2 = radius * radius

    # Bottom disc, approximated by vertex distance to its center.
    if np.any(np.einsum("ij,ij->i", offsets, offsets) <= r2):
        return True

    # Side wall along +Z, approximated by vertex membership.
    if length < _AXIS_EPS:
        return False
    axial = offsets[:, 2]
    radial2 = offsets[:, 0] ** 2 + offsets[:, 1] ** 2
    inside = (axial >= 0.0) & (axial <= length) & (radial2 <= r2)
    return bool(np.any(inside))


def _cone_touches(tip: Vec3, base_radius: float, height: float, mesh: Mesh) -> bool:
    if height < _AXIS_EPS:
        return False
    query = AxisAlignedBox(
        tip - np.array([base_radius, base_radius, 0.0]),
        tip + np.array([base_radius, base_radius, height]),
    )
    verts = _candidate_vertices(mesh, query)
    if len(verts) == 0:
        return False

    offsets = verts - tip
    axial = offsets[:, 2]
    radial2 = offsets[:, 0] ** 2 + offsets[:, 1] ** 2
    allowed = base_radius * (axial / height)
    inside = (axial >= 0.0) & (axial <= height) & (radial2 <= allowed * allowed)
    return bool(np.any(inside))


def _axis_below_surface(tip: Vec3, mesh: Mesh) -> bool:
    """True if some triangle covers (x, y) at a height >= the tip height."""
    x, y, z = tip
    tri_min = mesh.triangle_min_corners
    tri_max = mesh.triangle_max_corners
    covers = (
        (tri_min[:, 0] <= x)
        & (tri_max[:, 0] >= x)
        & (tri_min[:, 1] <= y)
        & (tri_max[:, 1] >= y)
        & (tri_max[:, 2] >= z)
    )
    idx = np.flatnonzero(covers)
    if len(idx) == 0:
        return False

    tris = mesh.vertex_array[idx]
    a = tris[:, 0]
    v0 = tris[:, 2] - a
    v1 = tris[:, 1] - a
    v2 = np.array([x, y]) - a[:, :2]

    dot00 = np.einsum("ij,ij->i", v0[:, :2], v0[:, :2])
    dot01 = np.einsum("ij,ij->i", v0[:, :2], v1[:, :2])
    dot02 = np.einsum("ij,ij->i", v0[:, :2], v2)
    dot11 = np.einsum("ij,ij->i", v1[:, :2], v1[:, :2])
    dot12 = np.einsum("ij,ij->i", v1[:, :2], v2)
    denom = dot00 * dot11 - dot01 * dot01

    # Vertical triangles have no XY footprint (zero denominator).
    with np.errstate(divide="ignore", invalid="ignore"):
        u = (dot11 * dot02 - dot01 * dot12) / denom
        v = (dot00 * dot12 - dot01 * dot02) / denom
        inside = (denom != 0.0) & (u >= 0.0) & (v >= 0.0) & (u + v <= 1.0)
        height = a[:, 2] + u * v0[:, 2] + v * v1[:, 2]
        return bool(np.any(inside & (height >= z)))
