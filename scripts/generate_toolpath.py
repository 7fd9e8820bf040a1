#!/usr/bin/env python3
"""
Generate a 3-axis drop-cutter tool path for an STL mesh.

Drops the chosen cutter onto the mesh at every sample of the path pattern
and writes the resulting (x, y, z) points.

Usage:
    python scripts/generate_toolpath.py --input part.stl --cutter ball_nose --diameter 6
    python scripts/generate_toolpath.py --input part.stl --cutter cylinder --diameter 4 --length 20 --step 0.5
    python scripts/generate_toolpath.py --input part.stl --cutter cone --diameter 6 --length 8 --output out/ --gcode
"""
import sys
import os
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dropcutter.cutters import CutterType, make_cutter
from dropcutter.export import write_gcode, write_points_csv, write_points_json
from dropcutter.mesh import load_mesh
from dropcutter.toolpath import ToolPathConfig, ToolPathType, create_tool_path


def main():
    parser = argparse.ArgumentParser(
        description="Generate a drop-cutter tool path for a triangle mesh.",
    )
    parser.add_argument(
        "--input", required=True,
        help="Path to input mesh file (STL, OBJ, PLY)",
    )
    parser.add_argument(
        "--output", default=None,
        help="Output directory (default: <input_dir>/<input_stem>_toolpath/)",
    )
    parser.add_argument(
        "--cutter", default=CutterType.BALL_NOSE.value,
        choices=[t.value for t in CutterType],
        help="Cutter shape (default: ball_nose)",
    )
    parser.add_argument(
        "--diameter", type=float, default=6.0,
        help="Cutter diameter in mm (default: 6)",
    )
    parser.add_argument(
        "--tip-radius", type=float, default=0.0,
        help="Tip radius in mm, tapered ball-nose only",
    )
    parser.add_argument(
        "--length", type=float, default=20.0,
        help="Cutting length (cylinder) or cone height in mm (default: 20)",
    )
    parser.add_argument(
        "--pattern", default=ToolPathType.CROSS.value,
        choices=[t.value for t in ToolPathType],
        help="Path pattern (default: cross)",
    )
    parser.add_argument(
        "--step", type=float, default=1.0,
        help="Sample and pass spacing in mm (default: 1)",
    )
    parser.add_argument(
        "--start-z", type=float, default=None,
        help="Top of the plunge search (default: mesh top + 10 mm)",
    )
    parser.add_argument(
        "--end-z", type=float, default=None,
        help="Plunge floor (default: mesh bottom)",
    )
    parser.add_argument(
        "--precision", type=float, default=0.01,
        help="Z precision in mm (default: 0.01)",
    )
    parser.add_argument(
        "--workers", type=int, default=None,
        help="Worker threads (default: executor default)",
    )
    parser.add_argument(
        "--gcode", action="store_true",
        help="Also write a G-code file",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Resolve paths
    input_path = os.path.abspath(args.input)
    if not os.path.isfile(input_path):
        parser.error(f"Input file not found: {input_path}")

    if args.output:
        output_dir = os.path.abspath(args.output)
    else:
        stem = Path(input_path).stem
        output_dir = os.path.join(os.path.dirname(input_path), f"{stem}_toolpath")
    os.makedirs(output_dir, exist_ok=True)

    try:
        mesh = load_mesh(input_path)
        cutter = make_cutter(
            args.cutter,
            diameter=args.diameter,
            tip_radius=args.tip_radius,
            length=args.length,
        )
    except ValueError as exc:
        parser.error(str(exc))

    bbox = mesh.bounding_box
    start_z = args.start_z if args.start_z is not None else float(bbox.max_corner[2]) + 10.0
    end_z = args.end_z if args.end_z is not None else float(bbox.min_corner[2])

    config = ToolPathConfig(
        step=args.step,
        start_z=start_z,
        end_z=end_z,
        precision=args.precision,
        max_workers=args.workers,
        path_type=args.pattern,
    )
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))

    print(f"Generating tool path for {input_path} ...")
    path = create_tool_path(cutter, mesh, config)

    stem = Path(input_path).stem
    csv_path = write_points_csv(path, os.path.join(output_dir, f"{stem}_toolpath.csv"))
    json_path = write_points_json(
        path,
        os.path.join(output_dir, f"{stem}_toolpath.json"),
        metadata={
            "mesh": input_path,
            "cutter": cutter.describe(),
            "pattern": args.pattern,
            "step": args.step,
            "start_z": start_z,
            "end_z": end_z,
            "precision": args.precision,
        },
    )

    print(f"\nResult: {len(path)} points")
    print(f"  {csv_path}")
    print(f"  {json_path}")
    if args.gcode:
        gcode_path = write_gcode(path, os.path.join(output_dir, f"{stem}.nc"), safe_z=start_z)
        print(f"  {gcode_path}")


if __name__ == "__main__":
    main()
