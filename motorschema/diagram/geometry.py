"""Angle helpers and content bounding boxes for schema framing.

Bounds are approximate by construction: path bounds come from every numeric
token in the path data, paired as (x, y), so arc radii and curve control
points are treated as if they were points on the path. The box only has to
be good enough to frame a drawing inside a PDF page.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from motorschema.diagram.style import (
    CONTENT_PADDING,
    DEFAULT_BOUNDS,
    SYMBOL_BOUNDS_SIZE,
    TEXT_EXTENT_DOWN,
    TEXT_EXTENT_LEFT,
    TEXT_EXTENT_RIGHT,
    TEXT_EXTENT_UP,
)

if TYPE_CHECKING:
    from motorschema.diagram.schema import ArcCoilConfig, FreehandPath, Symbol, TextLabel

_NUMBER_RE = re.compile(r"[-+]?[0-9]*\.?[0-9]+")


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box in drawing coordinates."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2

    def union(self, other: Bounds) -> Bounds:
        return Bounds(
            min(self.min_x, other.min_x),
            max(self.max_x, other.max_x),
            min(self.min_y, other.min_y),
            max(self.max_y, other.max_y),
        )

    def inflate(self, amount: float) -> Bounds:
        return Bounds(
            self.min_x - amount,
            self.max_x + amount,
            self.min_y - amount,
            self.max_y + amount,
        )

    def as_dict(self) -> dict[str, float]:
        return {"minX": self.min_x, "maxX": self.max_x, "minY": self.min_y, "maxY": self.max_y}


def to_radians(deg: float) -> float:
    return deg * math.pi / 180


def normalize_degrees(deg: float) -> float:
    """Wrap an angle into [0, 360) using floored modulo (-10 -> 350)."""
    wrapped = deg % 360
    # tiny negative inputs round up to exactly 360.0
    return 0.0 if wrapped >= 360 else wrapped


def finite(value: Optional[float], default: float = 0.0) -> float:
    """Return value when it is a finite number, else default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def path_bounds(commands: str) -> Optional[Bounds]:
    """Box around every (x, y) pair of numbers found in path data.

    Returns None when fewer than two numbers are present. A trailing
    unpaired number is ignored.
    """
    coords = [float(m) for m in _NUMBER_RE.findall(str(commands))]
    coords = [c for c in coords if math.isfinite(c)]
    if len(coords) < 2:
        return None

    xs = coords[0::2]
    ys = coords[1::2]
    xs = xs[: len(ys)]
    return Bounds(min(xs), max(xs), min(ys), max(ys))


def _point_box(x: float, y: float, half: float = 0.0) -> Bounds:
    return Bounds(x - half, x + half, y - half, y + half)


def _union_all(boxes: Iterable[Bounds]) -> Optional[Bounds]:
    result: Optional[Bounds] = None
    for box in boxes:
        result = box if result is None else result.union(box)
    return result


def _iter_path_boxes(paths: Iterable[FreehandPath]) -> Iterable[Bounds]:
    for path in paths:
        box = path_bounds(path.commands or "")
        if box is not None:
            yield box


def _iter_text_boxes(texts: Iterable[TextLabel]) -> Iterable[Bounds]:
    for text in texts:
        if text.x is None or text.y is None:
            continue
        yield Bounds(
            text.x - TEXT_EXTENT_LEFT,
            text.x + TEXT_EXTENT_RIGHT,
            text.y - TEXT_EXTENT_UP,
            text.y + TEXT_EXTENT_DOWN,
        )


def _iter_symbol_boxes(symbols: Iterable[Symbol]) -> Iterable[Bounds]:
    for symbol in symbols:
        if symbol.x is None or symbol.y is None:
            continue
        size = abs(finite(symbol.size)) or SYMBOL_BOUNDS_SIZE
        yield _point_box(symbol.x, symbol.y, size)


def _iter_coil_boxes(arc_coils: Optional[ArcCoilConfig]) -> Iterable[Bounds]:
    if arc_coils is None or not arc_coils.visible:
        return
    for coil in arc_coils.coils:
        cx = finite(coil.center_x)
        cy = finite(coil.center_y)
        radius = finite(coil.radius)
        start = to_radians(finite(coil.start_angle_deg))
        end = to_radians(finite(coil.end_angle_deg))
        # The arc lies inside the triangle center/start/end grown by the radius
        points = [
            (cx, cy),
            (cx + radius * math.cos(start), cy + radius * math.sin(start)),
            (cx + radius * math.cos(end), cy + radius * math.sin(end)),
        ]
        for px, py in points:
            yield _point_box(px, py, radius)


def raw_content_bounds(
    paths: Iterable[FreehandPath] = (),
    texts: Iterable[TextLabel] = (),
    symbols: Iterable[Symbol] = (),
    arc_coils: Optional[ArcCoilConfig] = None,
) -> Optional[Bounds]:
    """Unpadded union of all content boxes, or None when nothing has extent."""
    return _union_all([
        *_iter_path_boxes(paths),
        *_iter_text_boxes(texts),
        *_iter_symbol_boxes(symbols),
        *_iter_coil_boxes(arc_coils),
    ])


def content_bounds(
    paths: Iterable[FreehandPath] = (),
    texts: Iterable[TextLabel] = (),
    symbols: Iterable[Symbol] = (),
    arc_coils: Optional[ArcCoilConfig] = None,
) -> Bounds:
    """Padded box covering all content, or the default 400x400 box when empty."""
    raw = raw_content_bounds(paths, texts, symbols, arc_coils)
    if raw is None:
        return Bounds(*DEFAULT_BOUNDS)
    return raw.inflate(CONTENT_PADDING)
