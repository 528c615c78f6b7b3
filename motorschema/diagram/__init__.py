"""Wiring-schema renderer: saved editor scene → framed SVG for motor PDFs."""

from motorschema.diagram.renderer import SchemaRenderer, render_scene_to_svg
from motorschema.diagram.schema import DiagramScene, parse_scene

__all__ = ["SchemaRenderer", "DiagramScene", "parse_scene", "render_scene_to_svg"]
