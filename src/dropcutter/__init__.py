"""Public API for drop-cutter plunge-depth queries over triangle meshes."""

from dropcutter.collision import touches, touches_surface
from dropcutter.cutters import (
    BallNose,
    Cone,
    Cutter,
    CutterType,
    Cylinder,
    TaperedBallNose,
    UnsupportedCutterError,
    make_cutter,
)
from dropcutter.mesh import Mesh, load_mesh
from dropcutter.primitives import (
    AxisAlignedBox,
    Triangle,
    point_segment_distance,
    point_triangle_distance,
)
from dropcutter.solver import ContactResult, ContactStatus, find_contact_z, solve_contact
from dropcutter.toolpath import (
    ToolPathConfig,
    ToolPathType,
    UnsupportedPathTypeError,
    create_tool_path,
)

__all__ = [
    "AxisAlignedBox",
    "BallNose",
    "Cone",
    "ContactResult",
    "ContactStatus",
    "Cutter",
    "CutterType",
    "Cylinder",
    "Mesh",
    "TaperedBallNose",
    "ToolPathConfig",
    "ToolPathType",
    "Triangle",
    "UnsupportedCutterError",
    "UnsupportedPathTypeError",
    "create_tool_path",
    "find_contact_z",
    "load_mesh",
    "make_cutter",
    "point_segment_distance",
    "point_triangle_distance",
    "solve_contact",
    "touches",
    "touches_surface",
]
