"""Symbol library for wiring schemas.

Each symbol is a function that returns SVG element strings anchored at the
symbol's (x, y). Rotation, when present, turns the shape about that anchor.
"""

from __future__ import annotations

from typing import Callable

from motorschema.diagram.geometry import finite
from motorschema.diagram.markup import escape_xml, fmt, rotate_attr
from motorschema.diagram.schema import Symbol
from motorschema.diagram.style import (
    COLOR_BG,
    COLOR_INK,
    CONTACT_DOT_RADIUS,
    FONT_SYMBOL_LABEL,
    STROKE_DEFAULT,
    SYMBOL_DEFAULT_SIZE,
)
from motorschema.types import SymbolKind


def _line(x1: float, y1: float, x2: float, y2: float, color: str) -> str:
    return (
        f'<line x1="{fmt(x1)}" y1="{fmt(y1)}" x2="{fmt(x2)}" y2="{fmt(y2)}" '
        f'stroke="{color}" stroke-width="{STROKE_DEFAULT}"/>'
    )


def _dot(cx: float, cy: float, color: str) -> str:
    return f'<circle cx="{fmt(cx)}" cy="{fmt(cy)}" r="{CONTACT_DOT_RADIUS}" fill="{color}"/>'


def _label(x: float, y: float, text: str, color: str, bold: bool = False) -> str:
    weight = ' font-weight="bold"' if bold else ""
    return (
        f'<text x="{fmt(x)}" y="{fmt(y)}" text-anchor="middle" '
        f'font-size="{FONT_SYMBOL_LABEL}" fill="{color}"{weight}>{escape_xml(text)}</text>'
    )


def _unpack(symbol: Symbol) -> tuple[float, float, float, str, str]:
    size = symbol.size if symbol.size is not None else SYMBOL_DEFAULT_SIZE
    color = escape_xml(symbol.color or COLOR_INK)
    transform = rotate_attr(symbol.rotation_degrees, finite(symbol.x), finite(symbol.y))
    return finite(symbol.x), finite(symbol.y), size, color, transform


# ---------------------------------------------------------------------------
# Symbols
# ---------------------------------------------------------------------------

def coil(symbol: Symbol) -> str:
    """Coil: square outline, label underneath."""
    x, y, size, color, transform = _unpack(symbol)
    parts = [
        f'<rect x="{fmt(x - size / 2)}" y="{fmt(y - size / 2)}" '
        f'width="{fmt(size)}" height="{fmt(size)}" '
        f'stroke="{color}" stroke-width="{STROKE_DEFAULT}" fill="none"{transform}/>'
    ]
    if symbol.label:
        parts.append(_label(x, y + size + 12, symbol.label, color))
    return "".join(parts)


def capacitor(symbol: Symbol) -> str:
    """Capacitor: two parallel plates."""
    x, y, size, color, transform = _unpack(symbol)
    parts = [
        f"<g{transform}>",
        _line(x - size / 2, y - size / 3, x - size / 2, y + size / 3, color),
        _line(x + size / 2, y - size / 3, x + size / 2, y + size / 3, color),
        "</g>",
    ]
    if symbol.label:
        parts.append(_label(x, y + size, symbol.label, color))
    return "".join(parts)


def terminal(symbol: Symbol) -> str:
    """Terminal: white-filled circle with the label in bold at its center."""
    x, y, size, color, transform = _unpack(symbol)
    parts = [
        f'<circle cx="{fmt(x)}" cy="{fmt(y)}" r="{fmt(size / 2)}" '
        f'stroke="{color}" stroke-width="{STROKE_DEFAULT}" fill="{COLOR_BG}"{transform}/>'
    ]
    if symbol.label:
        parts.append(_label(x, y + 4, symbol.label, color, bold=True))
    return "".join(parts)


def switch(symbol: Symbol) -> str:
    """Switch: open blade between two contact dots."""
    x, y, size, color, transform = _unpack(symbol)
    return "".join([
        f"<g{transform}>",
        _line(x - size / 2, y, x + size / 2, y - size / 2, color),
        _dot(x - size / 2, y, color),
        _dot(x + size / 2, y, color),
        "</g>",
    ])


def ground(symbol: Symbol) -> str:
    """Ground: vertical stem with a bar at its foot."""
    x, y, size, color, transform = _unpack(symbol)
    return "".join([
        f"<g{transform}>",
        _line(x, y - size / 2, x, y + size / 2, color),
        _line(x - size / 2, y + size / 2, x + size / 2, y + size / 2, color),
        "</g>",
    ])


def generic(symbol: Symbol) -> str:
    """Anything unrecognised: plain circle."""
    x, y, size, color, transform = _unpack(symbol)
    return (
        f'<circle cx="{fmt(x)}" cy="{fmt(y)}" r="{fmt(size / 2)}" '
        f'stroke="{color}" stroke-width="{STROKE_DEFAULT}" fill="none"{transform}/>'
    )


# ---------------------------------------------------------------------------
# Registry: one drawing function per symbol kind
# ---------------------------------------------------------------------------

SYMBOL_REGISTRY: dict[SymbolKind, Callable[[Symbol], str]] = {
    SymbolKind.COIL: coil,
    SymbolKind.CAPACITOR: capacitor,
    SymbolKind.TERMINAL: terminal,
    SymbolKind.SWITCH: switch,
    SymbolKind.GROUND: ground,
    SymbolKind.GENERIC: generic,
}


def draw_symbol(symbol: Symbol) -> str:
    return SYMBOL_REGISTRY[symbol.kind](symbol)
