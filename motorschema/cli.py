"""CLI for rendering saved wiring schemas.

Usage:
    msr render scene.json [-o schema.svg | -o schema.png] [--hires]
    msr bounds scene.json
    msr poles 4 [--tri] [--generator] [--sweep 30]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from motorschema.diagram.geometry import content_bounds
from motorschema.diagram.poles import generate_pole_arcs
from motorschema.diagram.renderer import SchemaRenderer
from motorschema.diagram.schema import DiagramScene, parse_scene
from motorschema.observability.logging import setup_logging
from motorschema.types import MachineType, PhaseType

log = logging.getLogger(__name__)


def _load_scene(path: str) -> DiagramScene | None:
    """Read scene JSON from a file ("-" for stdin) or exit with error."""
    try:
        text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    except OSError as e:
        print(f"Cannot read {path}: {e}")
        sys.exit(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in {path}: {e}")
        sys.exit(1)

    # Saved records sometimes wrap the scene in the motor document
    if isinstance(data, dict) and "esquemaDados" in data:
        data = data["esquemaDados"]

    try:
        return parse_scene(data)
    except ValidationError as e:
        print(f"Not a diagram scene: {e.error_count()} problem(s)")
        sys.exit(1)


def cmd_render(args: argparse.Namespace) -> None:
    """Render a scene to SVG (default) or PNG, chosen by the output suffix."""
    renderer = SchemaRenderer(_load_scene(args.scene))

    output = args.output
    if output and output.lower().endswith(".png"):
        try:
            written = renderer.render_png_to_file(output, hires=args.hires)
        except RuntimeError as e:
            print(str(e))
            sys.exit(1)
        if not written:
            print("Scene is empty, nothing rendered.")
            sys.exit(1)
        print(f"Schema saved: {output}")
        return

    svg = renderer.render_svg()
    if svg is None:
        print("Scene is empty, nothing rendered.")
        sys.exit(1)
    if output:
        Path(output).write_text(svg, encoding="utf-8")
        log.info("SVG written to %s (%d chars)", output, len(svg))
        print(f"Schema saved: {output}")
    else:
        print(svg)


def cmd_bounds(args: argparse.Namespace) -> None:
    """Print the padded content bounds of a scene as JSON."""
    scene = _load_scene(args.scene)
    if scene is None:
        print("null")
        return
    bounds = content_bounds(scene.paths, scene.texts, scene.symbols, scene.arc_coil_config)
    print(json.dumps(bounds.as_dict(), indent=2))


def cmd_poles(args: argparse.Namespace) -> None:
    """Print the path data of every pole arc, one per line."""
    arcs = generate_pole_arcs(
        args.count,
        center_x=args.center,
        center_y=args.center,
        arc_sweep_deg=args.sweep,
        phase_type=PhaseType.TRI if args.tri else PhaseType.MONO,
        machine_type=MachineType.GENERATOR if args.generator else MachineType.MOTOR,
    )
    if not arcs:
        print("No arcs (a machine needs at least 2 poles).")
        return
    for arc in arcs:
        print(arc)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="msr",
        description="Motor wiring schema renderer",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    sub = parser.add_subparsers(dest="command", help="Available commands")

    # render
    p_render = sub.add_parser("render", help="Render a saved scene to SVG or PNG")
    p_render.add_argument("scene", help="Scene JSON file, or - for stdin")
    p_render.add_argument("--output", "-o", default=None, help="Output file (.svg or .png); stdout if omitted")
    p_render.add_argument("--hires", action="store_true", help="High-resolution PNG")

    # bounds
    p_bounds = sub.add_parser("bounds", help="Print the content bounds of a scene")
    p_bounds.add_argument("scene", help="Scene JSON file, or - for stdin")

    # poles
    p_poles = sub.add_parser("poles", help="Print pole-arc path data")
    p_poles.add_argument("count", type=int, help="Number of poles")
    p_poles.add_argument("--tri", action="store_true", help="Three-phase winding")
    p_poles.add_argument("--generator", action="store_true", help="Generator topology")
    p_poles.add_argument("--sweep", type=float, default=None, help="Arc sweep override in degrees")
    p_poles.add_argument("--center", type=float, default=500, help="Center coordinate (x and y)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the `msr` CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    commands = {
        "render": cmd_render,
        "bounds": cmd_bounds,
        "poles": cmd_poles,
    }

    fn = commands.get(args.command)
    if fn:
        fn(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
