"""SchemaRenderer: saved scene to SVG, and SVG to PNG.

Takes a DiagramScene (JSON saved by the mobile editor) and produces a
self-contained SVG sized for the motor PDF, framing the drawing the same way
whatever canvas size it was originally drawn on. PNG output goes through
CairoSVG.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from motorschema.diagram.geometry import (
    Bounds,
    finite,
    raw_content_bounds,
    to_radians,
)
from motorschema.diagram.markup import clean_path_data, escape_xml, fmt
from motorschema.diagram.poles import effective_radii, generate_pole_arcs
from motorschema.diagram.schema import (
    ArcCoilConfig,
    DiagramScene,
    FreehandPath,
    LegendConfig,
    PoleConfig,
    SceneInput,
    StatorConfig,
    TextLabel,
    parse_scene,
)
from motorschema.diagram.style import (
    COIL_LABEL_OFFSET,
    COLOR_BG,
    COLOR_INK,
    COLOR_LEGEND_BG,
    COLOR_STATOR,
    COLOR_TEXT,
    CONTENT_PADDING,
    DEFAULT_BOUNDS,
    FONT_COIL_LABEL,
    FONT_FAMILY,
    FONT_LEGEND,
    FONT_TEXT,
    HIRES_SCALE,
    LEGEND_BOTTOM_OFFSET,
    LEGEND_CORNER_RADIUS,
    LEGEND_FIELDS,
    LEGEND_LINE_HEIGHT,
    LEGEND_MIN_HEIGHT,
    LOGICAL_SIZE_MARGIN,
    MAX_RING_ELEMENTS,
    MIN_LOGICAL_HEIGHT,
    MIN_LOGICAL_WIDTH,
    OUTPUT_HEIGHT,
    OUTPUT_WIDTH,
    POLES_DEFAULT_INNER_RADIUS,
    POLES_DEFAULT_MIDDLE_RADIUS,
    POLES_DEFAULT_OUTER_RADIUS,
    POLES_FRAME_FACTOR,
    RING_FRAME_MARGIN,
    SLOT_MARKER_RADIUS,
    STATOR_DEFAULT_RADIUS,
    STATOR_DEFAULT_SLOTS,
    STATOR_FRAME_FACTOR,
    STROKE_DEFAULT,
    STROKE_LEGEND,
    VIEWPORT_PADDING,
)
from motorschema.diagram.symbols import draw_symbol

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Origin policy
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Origin:
    """Center and logical size of the drawing in its own coordinates."""

    cx: float
    cy: float
    width: float
    height: float
    rule: str


@dataclass(frozen=True)
class OriginRule:
    name: str
    applies: Callable[[DiagramScene], bool]
    resolve: Callable[[DiagramScene, Bounds], tuple[float, float]]


def _has_canvas(scene: DiagramScene) -> bool:
    return scene.canvas_size is not None and scene.canvas_size.is_usable


def _stator_visible(scene: DiagramScene) -> bool:
    return scene.stator_config is not None and scene.stator_config.visible


def _poles_visible(scene: DiagramScene) -> bool:
    return scene.pole_config is not None and scene.pole_config.visible


def _symbol_centroid(scene: DiagramScene, bounds: Bounds) -> tuple[float, float]:
    count = len(scene.symbols)
    sum_x = sum(finite(s.x) for s in scene.symbols)
    sum_y = sum(finite(s.y) for s in scene.symbols)
    return sum_x / count, sum_y / count


# Ordered, first match wins. Newer saves carry the canvas size; older ones
# are centered on their symbols (stator drawings) or on their content.
ORIGIN_RULES: tuple[OriginRule, ...] = (
    OriginRule(
        name="canvas",
        applies=_has_canvas,
        resolve=lambda scene, bounds: (scene.canvas_size.width / 2, scene.canvas_size.height / 2),
    ),
    OriginRule(
        name="symbol-centroid",
        applies=lambda scene: _stator_visible(scene) and bool(scene.symbols),
        resolve=_symbol_centroid,
    ),
    OriginRule(
        name="content-center",
        applies=lambda scene: True,
        resolve=lambda scene, bounds: bounds.center,
    ),
)


def resolve_origin(scene: DiagramScene, bounds: Bounds) -> Origin:
    """Pick the drawing's origin and logical size from the first matching rule."""
    rule = next(r for r in ORIGIN_RULES if r.applies(scene))
    cx, cy = rule.resolve(scene, bounds)

    if rule.name == "canvas":
        width, height = scene.canvas_size.width, scene.canvas_size.height
    else:
        width = max(MIN_LOGICAL_WIDTH, bounds.width + LOGICAL_SIZE_MARGIN)
        height = max(MIN_LOGICAL_HEIGHT, bounds.height + LOGICAL_SIZE_MARGIN)
    return Origin(cx=cx, cy=cy, width=width, height=height, rule=rule.name)


# ---------------------------------------------------------------------------
# Section helpers
# ---------------------------------------------------------------------------

def _stator_geometry(stator: StatorConfig) -> tuple[int, float]:
    slots = stator.slot_count if stator.slot_count is not None else STATOR_DEFAULT_SLOTS
    radius = stator.radius if stator.radius is not None else STATOR_DEFAULT_RADIUS
    return max(0, min(slots, MAX_RING_ELEMENTS)), radius


def _pole_count(poles: PoleConfig) -> int:
    return max(0, min(poles.pole_count or 0, MAX_RING_ELEMENTS))


def _pole_radii(poles: PoleConfig) -> tuple[float, float, float]:
    outer = poles.outer_radius if poles.outer_radius is not None else POLES_DEFAULT_OUTER_RADIUS
    inner = poles.inner_radius if poles.inner_radius is not None else POLES_DEFAULT_INNER_RADIUS
    middle = poles.middle_radius if poles.middle_radius is not None else POLES_DEFAULT_MIDDLE_RADIUS
    return outer, inner, middle


def _grow(viewport: Bounds, cx: float, cy: float, reach: float) -> Bounds:
    """Union with the square of half-side `reach` around (cx, cy), when it is finite."""
    ring = Bounds(cx - reach, cx + reach, cy - reach, cy + reach)
    if not (math.isfinite(ring.width) and math.isfinite(ring.height)):
        log.warning("Ignoring ring of reach %r when framing the schema", reach)
        return viewport
    return viewport.union(ring)


def compute_viewport(scene: DiagramScene) -> tuple[Origin, Bounds]:
    """Return the origin and the padded viewport that holds every section.

    The viewport starts at the logical size and only ever grows.
    """
    raw = raw_content_bounds(scene.paths, scene.texts, scene.symbols, scene.arc_coil_config)
    bounds = raw.inflate(CONTENT_PADDING) if raw is not None else Bounds(*DEFAULT_BOUNDS)
    origin = resolve_origin(scene, bounds)

    viewport = Bounds(0, origin.width, 0, origin.height)

    if _stator_visible(scene):
        _, radius = _stator_geometry(scene.stator_config)
        reach = radius * STATOR_FRAME_FACTOR + RING_FRAME_MARGIN
        viewport = _grow(viewport, origin.cx, origin.cy, reach)

    if _poles_visible(scene):
        poles = scene.pole_config
        outer, inner, _ = _pole_radii(poles)
        _, effective_outer = effective_radii(_pole_count(poles), inner, outer, poles.machine_type)
        reach = effective_outer * POLES_FRAME_FACTOR + RING_FRAME_MARGIN
        viewport = _grow(viewport, origin.cx, origin.cy, reach)

    if raw is not None:
        viewport = viewport.union(bounds)

    viewport = viewport.inflate(VIEWPORT_PADDING)
    log.debug(
        "Schema origin rule=%s center=(%.1f, %.1f) viewport=(%.1f, %.1f, %.1f, %.1f)",
        origin.rule, origin.cx, origin.cy,
        viewport.min_x, viewport.min_y, viewport.width, viewport.height,
    )
    return origin, viewport


class SchemaRenderer:
    """Renders a DiagramScene into SVG and PNG."""

    def __init__(self, scene: SceneInput):
        self.scene = parse_scene(scene)

    def render_svg(self) -> Optional[str]:
        """Generate the complete SVG string, or None when there is no scene."""
        if self.scene is None:
            return None

        scene = self.scene
        origin, viewport = compute_viewport(scene)

        svg_parts = [self._svg_header(viewport)]

        # Background
        svg_parts.append(
            f'<rect x="{fmt(viewport.min_x)}" y="{fmt(viewport.min_y)}" '
            f'width="{fmt(viewport.width)}" height="{fmt(viewport.height)}" fill="{COLOR_BG}"/>'
        )

        if _stator_visible(scene):
            svg_parts.append(self._draw_stator(scene.stator_config, origin))

        if _poles_visible(scene):
            svg_parts.append(self._draw_poles(scene.pole_config, origin))

        svg_parts.append(self._draw_arc_coils(scene.arc_coil_config))

        # Paths (connection lines)
        for path in scene.paths:
            svg_parts.append(self._draw_path(path))

        # Symbols (on top of lines)
        for symbol in scene.symbols:
            svg_parts.append(draw_symbol(symbol))

        for text in scene.texts:
            svg_parts.append(self._draw_text(text))

        svg_parts.append(self._draw_legend(scene.legend_config, viewport))

        svg_parts.append("</svg>")
        return "".join(svg_parts)

    def render_png(self, hires: bool = False, hires_scale: int = HIRES_SCALE) -> Optional[bytes]:
        """Generate PNG bytes from the scene via CairoSVG."""
        try:
            import cairosvg
        except ImportError:
            raise RuntimeError(
                "cairosvg required for PNG output: pip install cairosvg"
            )

        svg_str = self.render_svg()
        if svg_str is None:
            return None
        scale = hires_scale if hires else 1
        return cairosvg.svg2png(
            bytestring=svg_str.encode("utf-8"),
            output_width=OUTPUT_WIDTH * scale,
            output_height=OUTPUT_HEIGHT * scale,
            background_color=COLOR_BG,
        )

    def render_png_to_file(self, path: str, hires: bool = False) -> bool:
        """Render PNG to a file path. Returns False when there is nothing to draw."""
        png_bytes = self.render_png(hires=hires)
        if png_bytes is None:
            return False
        with open(path, "wb") as f:
            f.write(png_bytes)
        log.info("PNG written to %s (%d bytes)", path, len(png_bytes))
        return True

    # ------------------------------------------------------------------
    # SVG construction helpers
    # ------------------------------------------------------------------

    def _svg_header(self, viewport: Bounds) -> str:
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{OUTPUT_WIDTH}" height="{OUTPUT_HEIGHT}" '
            f'viewBox="{fmt(viewport.min_x)} {fmt(viewport.min_y)} '
            f'{fmt(viewport.width)} {fmt(viewport.height)}" '
            f'preserveAspectRatio="xMidYMid meet" font-family="{FONT_FAMILY}">'
        )

    def _draw_stator(self, stator: StatorConfig, origin: Origin) -> str:
        """Stator ring with one marker per slot."""
        slots, radius = _stator_geometry(stator)
        parts = [
            f'<circle cx="{fmt(origin.cx)}" cy="{fmt(origin.cy)}" r="{fmt(radius)}" '
            f'stroke="{COLOR_STATOR}" stroke-width="{STROKE_DEFAULT}" fill="none"/>'
        ]
        for i in range(slots):
            rad = to_radians(i * 360 / slots)
            x = origin.cx + radius * math.cos(rad)
            y = origin.cy + radius * math.sin(rad)
            parts.append(
                f'<circle cx="{fmt(x)}" cy="{fmt(y)}" r="{SLOT_MARKER_RADIUS}" fill="{COLOR_STATOR}"/>'
            )
        return "".join(parts)

    def _draw_poles(self, poles: PoleConfig, origin: Origin) -> str:
        outer, inner, middle = _pole_radii(poles)
        arcs = generate_pole_arcs(
            _pole_count(poles),
            center_x=origin.cx,
            center_y=origin.cy,
            outer_radius=outer,
            inner_radius=inner,
            middle_radius=middle,
            arc_sweep_deg=poles.arc_sweep_deg,
            phase_type=poles.phase_type,
            machine_type=poles.machine_type,
        )

        stroke_width = poles.stroke_width or STROKE_DEFAULT
        colors = poles.pole_colors or []
        parts = []
        for index, arc in enumerate(arcs):
            color = (colors[index] if index < len(colors) else None) or poles.color or COLOR_INK
            parts.append(
                f'<path d="{arc}" stroke="{escape_xml(color)}" stroke-width="{fmt(stroke_width)}" '
                f'fill="none" stroke-linecap="round" stroke-linejoin="round"/>'
            )
        return "".join(parts)

    def _draw_arc_coils(self, arc_coils: Optional[ArcCoilConfig]) -> str:
        """Coils drawn as arcs, each with an optional label outside its midpoint."""
        if arc_coils is None or not arc_coils.visible:
            return ""

        parts = []
        for coil in arc_coils.coils:
            cx, cy = finite(coil.center_x), finite(coil.center_y)
            radius = finite(coil.radius)
            start, end = finite(coil.start_angle_deg), finite(coil.end_angle_deg)
            stroke_width = coil.stroke_width if coil.stroke_width is not None else STROKE_DEFAULT
            color = escape_xml(coil.color or COLOR_INK)

            x1 = cx + radius * math.cos(to_radians(start))
            y1 = cy + radius * math.sin(to_radians(start))
            x2 = cx + radius * math.cos(to_radians(end))
            y2 = cy + radius * math.sin(to_radians(end))
            large_arc = 1 if abs(end - start) > 180 else 0

            parts.append(
                f'<path d="M {fmt(x1)} {fmt(y1)} A {fmt(radius)} {fmt(radius)} 0 {large_arc} 1 '
                f'{fmt(x2)} {fmt(y2)}" stroke="{color}" stroke-width="{fmt(stroke_width)}" fill="none"/>'
            )

            if coil.label:
                mid = to_radians((start + end) / 2)
                label_x = cx + (radius + COIL_LABEL_OFFSET) * math.cos(mid)
                label_y = cy + (radius + COIL_LABEL_OFFSET) * math.sin(mid)
                parts.append(
                    f'<text x="{fmt(label_x)}" y="{fmt(label_y)}" text-anchor="middle" '
                    f'font-size="{FONT_COIL_LABEL}" fill="{color}">{escape_xml(coil.label)}</text>'
                )
        return "".join(parts)

    def _draw_path(self, path: FreehandPath) -> str:
        if not path.commands or not path.commands.strip():
            return ""
        color = escape_xml(path.color or COLOR_INK)
        stroke_width = path.stroke_width if path.stroke_width is not None else STROKE_DEFAULT
        dash = ""
        if path.dash_pattern:
            dash = f' stroke-dasharray="{",".join(fmt(v) for v in path.dash_pattern)}"'
        return (
            f'<path d="{escape_xml(clean_path_data(path.commands))}" stroke="{color}" stroke-width="{fmt(stroke_width)}" '
            f'fill="none" stroke-linecap="round" stroke-linejoin="round"{dash}/>'
        )

    def _draw_text(self, text: TextLabel) -> str:
        if not text.text or not text.text.strip():
            return ""
        font_size = text.font_size if text.font_size is not None else FONT_TEXT
        return (
            f'<text x="{fmt(text.x)}" y="{fmt(text.y)}" font-size="{fmt(font_size)}" '
            f'fill="{escape_xml(text.color or COLOR_TEXT)}">{escape_xml(text.text)}</text>'
        )

    def _draw_legend(self, legend: Optional[LegendConfig], viewport: Bounds) -> str:
        """Nameplate box along the bottom of the viewport, non-blank fields only."""
        if legend is None or not legend.visible:
            return ""

        items = []
        for field_name, caption in LEGEND_FIELDS:
            value = getattr(legend, field_name)
            if value and value.strip():
                items.append(f"{caption}: {value.strip()}")
        if not items:
            return ""

        legend_y = viewport.max_y - LEGEND_BOTTOM_OFFSET
        height = max(LEGEND_MIN_HEIGHT, 20 + len(items) * LEGEND_LINE_HEIGHT)
        parts = [
            f'<rect x="{fmt(viewport.min_x + 10)}" y="{fmt(legend_y - 35)}" '
            f'width="{fmt(viewport.width - 20)}" height="{fmt(height)}" fill="{COLOR_LEGEND_BG}" '
            f'stroke="{COLOR_STATOR}" stroke-width="{STROKE_LEGEND}" rx="{LEGEND_CORNER_RADIUS}"/>'
        ]
        for index, item in enumerate(items):
            parts.append(
                f'<text x="{fmt(viewport.min_x + 20)}" y="{fmt(legend_y - 20 + index * LEGEND_LINE_HEIGHT)}" '
                f'font-size="{FONT_LEGEND}" fill="{COLOR_INK}">{escape_xml(item)}</text>'
            )
        return "".join(parts)


def render_scene_to_svg(scene: SceneInput) -> Optional[str]:
    """Convenience: render saved scene JSON (or a DiagramScene) to SVG."""
    return SchemaRenderer(scene).render_svg()
