"""Visual style and layout constants for rendered wiring schemas."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Output canvas
# ---------------------------------------------------------------------------
OUTPUT_WIDTH = 800    # px, fixed size of the embedded image
OUTPUT_HEIGHT = 600   # px
HIRES_SCALE = 2       # multiply for high-res PNG output (1600x1200)

# ---------------------------------------------------------------------------
# Framing
# ---------------------------------------------------------------------------
DEFAULT_BOUNDS = (0.0, 400.0, 0.0, 400.0)  # min_x, max_x, min_y, max_y
CONTENT_PADDING = 40     # added around the union of all content
VIEWPORT_PADDING = 20    # added around the final viewport
MIN_LOGICAL_WIDTH = 400
MIN_LOGICAL_HEIGHT = 500
LOGICAL_SIZE_MARGIN = 100

STATOR_FRAME_FACTOR = 1.25
POLES_FRAME_FACTOR = 1.1
RING_FRAME_MARGIN = 30

# Approximate glyph extent around a text anchor (no font metrics available)
TEXT_EXTENT_LEFT = 20
TEXT_EXTENT_RIGHT = 100
TEXT_EXTENT_UP = 20
TEXT_EXTENT_DOWN = 10

SYMBOL_BOUNDS_SIZE = 40  # half-side used for bounds when size is missing

# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------
COLOR_BG = "white"
COLOR_INK = "#01293f"        # default stroke for poles, coils, paths, symbols
COLOR_STATOR = "#003d66"
COLOR_TEXT = "#000000"
COLOR_LEGEND_BG = "#f8f9fa"

# ---------------------------------------------------------------------------
# Strokes and sizes
# ---------------------------------------------------------------------------
STROKE_DEFAULT = 2
STROKE_LEGEND = 1
SLOT_MARKER_RADIUS = 3
CONTACT_DOT_RADIUS = 3
SYMBOL_DEFAULT_SIZE = 20

# ---------------------------------------------------------------------------
# Stator / pole / coil defaults
# ---------------------------------------------------------------------------
STATOR_DEFAULT_SLOTS = 24
STATOR_DEFAULT_RADIUS = 200

POLES_DEFAULT_CENTER = 500
POLES_DEFAULT_OUTER_RADIUS = 320
POLES_DEFAULT_INNER_RADIUS = 240
POLES_DEFAULT_MIDDLE_RADIUS = 280
POLE_GAP_DEG = 15          # visual gap between adjacent motor arcs
POLE_MIN_SWEEP_DEG = 5
GENERATOR_SWEEP_DEG = 45
GENERATOR_BASE_POLES = 6   # above this, generator radii grow
GENERATOR_RADIUS_GROWTH = 1.5

COIL_LABEL_OFFSET = 20

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
FONT_FAMILY = "Arial, Helvetica, Liberation Sans, sans-serif"
FONT_TEXT = 12
FONT_COIL_LABEL = 12
FONT_SYMBOL_LABEL = 10
FONT_LEGEND = 10

# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
LEGEND_BOTTOM_OFFSET = 60
LEGEND_MIN_HEIGHT = 50
LEGEND_LINE_HEIGHT = 15
LEGEND_CORNER_RADIUS = 4

# Field name -> caption, in display order
LEGEND_FIELDS = (
    ("model", "Model"),
    ("brand", "Brand"),
    ("power", "Power"),
    ("voltage", "Voltage"),
    ("rpm", "RPM"),
)

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------
MAX_RING_ELEMENTS = 720  # slots or poles; larger counts are clamped
