"""Pole-arc geometry for motor and generator stators.

Motors draw each pole as a circular arc on two rings (single phase) or three
rings (three phase), each ring rotated by a fraction of the pole pitch.
Generators draw one quadratic stroke per pole running from the outer radius
inward, and spread the rings apart once the pole count goes above six.
"""

from __future__ import annotations

import math
from typing import Optional

from motorschema.diagram.geometry import finite, normalize_degrees, to_radians
from motorschema.diagram.style import (
    GENERATOR_BASE_POLES,
    GENERATOR_RADIUS_GROWTH,
    GENERATOR_SWEEP_DEG,
    POLE_GAP_DEG,
    POLE_MIN_SWEEP_DEG,
    POLES_DEFAULT_CENTER,
    POLES_DEFAULT_INNER_RADIUS,
    POLES_DEFAULT_MIDDLE_RADIUS,
    POLES_DEFAULT_OUTER_RADIUS,
)
from motorschema.types import MachineType, PhaseType


def effective_radii(
    pole_count: int,
    inner_radius: float,
    outer_radius: float,
    machine_type: MachineType = MachineType.MOTOR,
) -> tuple[float, float]:
    """Return (inner, outer) radii actually used for drawing.

    Generators above six poles grow the inner radius by 1.5 per extra pole
    pair and keep the ring thickness. The factor is an empirical spacing rule
    for the pole counts the app offers, not a physical relation.
    """
    if machine_type == MachineType.GENERATOR and pole_count > GENERATOR_BASE_POLES:
        try:
            factor = GENERATOR_RADIUS_GROWTH ** ((pole_count - GENERATOR_BASE_POLES) / 2)
        except OverflowError:
            factor = math.inf
        inner = inner_radius * factor
        return inner, inner + (outer_radius - inner_radius)
    return inner_radius, outer_radius


def _num(value: float) -> str:
    return f"{value:.2f}" if math.isfinite(value) else "0.00"


def _polar(cx: float, cy: float, radius: float, deg: float) -> tuple[float, float]:
    rad = to_radians(deg)
    return cx + radius * math.cos(rad), cy + radius * math.sin(rad)


def _generator_arcs(
    pole_count: int,
    cx: float,
    cy: float,
    inner_radius: float,
    outer_radius: float,
    arc_sweep_deg: Optional[float],
) -> list[str]:
    step = 360 / pole_count
    inner, outer = effective_radii(pole_count, inner_radius, outer_radius, MachineType.GENERATOR)
    if not (math.isfinite(inner) and math.isfinite(outer)):
        return []
    sweep = arc_sweep_deg if arc_sweep_deg and arc_sweep_deg > 0 else GENERATOR_SWEEP_DEG

    arcs = []
    for i in range(pole_count):
        start_deg = normalize_degrees(i * step)
        end_deg = normalize_degrees(start_deg + sweep)
        x1, y1 = _polar(cx, cy, outer, start_deg)
        x2, y2 = _polar(cx, cy, inner, end_deg)
        cpx, cpy = _polar(cx, cy, outer, start_deg + sweep * 0.5)
        arcs.append(f"M {_num(x1)} {_num(y1)} Q {_num(cpx)} {_num(cpy)}, {_num(x2)} {_num(y2)}")
    return arcs


def _ring(
    pole_count: int,
    cx: float,
    cy: float,
    radius: float,
    offset_deg: float,
    sweep: float,
) -> list[str]:
    step = 360 / pole_count
    arcs = []
    for i in range(pole_count):
        center_deg = normalize_degrees(i * step + offset_deg)
        start_deg = normalize_degrees(center_deg - sweep / 2)
        end_deg = normalize_degrees(center_deg + sweep / 2)
        x1, y1 = _polar(cx, cy, radius, start_deg)
        x2, y2 = _polar(cx, cy, radius, end_deg)

        span = end_deg + 360 - start_deg if end_deg < start_deg else end_deg - start_deg
        large_arc = 1 if span > 180 else 0
        arcs.append(
            f"M {_num(x1)} {_num(y1)} A {_num(radius)} {_num(radius)} 0 {large_arc} 1 {_num(x2)} {_num(y2)}"
        )
    return arcs


def generate_pole_arcs(
    pole_count: int,
    center_x: float = POLES_DEFAULT_CENTER,
    center_y: float = POLES_DEFAULT_CENTER,
    outer_radius: float = POLES_DEFAULT_OUTER_RADIUS,
    inner_radius: float = POLES_DEFAULT_INNER_RADIUS,
    middle_radius: float = POLES_DEFAULT_MIDDLE_RADIUS,
    arc_sweep_deg: Optional[float] = None,
    phase_type: PhaseType = PhaseType.MONO,
    machine_type: MachineType = MachineType.MOTOR,
) -> list[str]:
    """Build the SVG path data for every pole arc, in drawing order.

    Fewer than two poles draws nothing.
    """
    pole_count = int(finite(pole_count))
    if pole_count < 2:
        return []

    cx, cy = finite(center_x), finite(center_y)
    sweep_override = finite(arc_sweep_deg) if arc_sweep_deg is not None else None

    if machine_type == MachineType.GENERATOR:
        return _generator_arcs(
            pole_count, cx, cy, finite(inner_radius), finite(outer_radius), sweep_override,
        )

    step = 360 / pole_count
    if sweep_override is not None and sweep_override > 0:
        sweep = sweep_override
    else:
        sweep = max(POLE_MIN_SWEEP_DEG, step - POLE_GAP_DEG)

    if phase_type == PhaseType.TRI:
        return [
            *_ring(pole_count, cx, cy, finite(outer_radius), 0, sweep),
            *_ring(pole_count, cx, cy, finite(middle_radius), step / 3, sweep),
            *_ring(pole_count, cx, cy, finite(inner_radius), step * 2 / 3, sweep),
        ]
    return [
        *_ring(pole_count, cx, cy, finite(outer_radius), 0, sweep),
        *_ring(pole_count, cx, cy, finite(inner_radius), step / 2, sweep),
    ]
