"""HTML building blocks for motor PDFs that embed a rendered schema.

The PDF service receives one standalone HTML document; the schema SVG is
inlined (no external references) inside a framed section that starts on a
new page.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from motorschema.diagram.markup import escape_xml
from motorschema.diagram.renderer import render_scene_to_svg
from motorschema.diagram.schema import SceneInput

PDF_COLORS = {
    "primary": "#003366",
    "text": "#1f2937",
    "text_light": "#6b7280",
    "border": "#e5e7eb",
    "bg_light": "#f9fafb",
}

SHEET_CSS = f"""
body {{ font-family: Arial, Helvetica, sans-serif; color: {PDF_COLORS["text"]}; font-size: 11px; margin: 0; }}
.section {{ margin: 6px; page-break-inside: avoid; }}
.section-title {{ background-color: {PDF_COLORS["primary"]}; color: white; padding: 3px 6px;
  margin-bottom: 5px; border-radius: 4px; font-weight: 700; }}
.page-break {{ page-break-before: always; }}
.data-table {{ width: 100%; border-collapse: collapse; }}
.data-table td {{ border: 1px solid {PDF_COLORS["border"]}; padding: 3px 6px; }}
.data-table td.label {{ background: {PDF_COLORS["bg_light"]}; color: {PDF_COLORS["text_light"]}; width: 35%; }}
.schema-container {{ margin: 5px 0; text-align: center; page-break-inside: avoid; }}
.schema-frame {{ width: 100%; border: 2px solid #e2e8f0; border-radius: 6px; background: white;
  padding: 6px; box-sizing: border-box; }}
.schema-frame svg {{ width: 100%; height: auto; max-height: 250px; display: block; }}
"""

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _humanize(key: str) -> str:
    words = _CAMEL_BOUNDARY.sub(" ", key).replace("_", " ").strip()
    return words[:1].upper() + words[1:].lower()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def schema_section_html(svg: Optional[str], title: str = "Wiring diagram") -> str:
    """Framed section holding the inline SVG; empty when there is no drawing."""
    if not svg:
        return ""
    return (
        '<div class="section page-break">'
        f'<div class="section-title">{escape_xml(title)}</div>'
        '<div class="schema-container">'
        f'<div class="schema-frame">{svg}</div>'
        "</div>"
        "</div>"
    )


def motor_data_html(motor: Mapping[str, Any], title: str = "Motor data") -> str:
    """Two-column table of the motor record's non-blank scalar fields."""
    rows = []
    for key, value in motor.items():
        if _is_blank(value) or isinstance(value, (dict, list, tuple)):
            continue
        rows.append(
            f'<tr><td class="label">{escape_xml(_humanize(str(key)))}</td>'
            f"<td>{escape_xml(str(value))}</td></tr>"
        )
    if not rows:
        return ""
    return (
        '<div class="section">'
        f'<div class="section-title">{escape_xml(title)}</div>'
        f'<table class="data-table">{"".join(rows)}</table>'
        "</div>"
    )


def motor_sheet_html(
    motor: Optional[Mapping[str, Any]],
    scene: SceneInput,
    title: str = "Motor sheet",
) -> str:
    """Standalone HTML document: motor data followed by the wiring diagram."""
    svg = render_scene_to_svg(scene)
    body = motor_data_html(motor or {}) + schema_section_html(svg)
    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8">'
        f"<title>{escape_xml(title)}</title>"
        f"<style>{SHEET_CSS}</style>"
        f"</head><body>{body}</body></html>"
    )
