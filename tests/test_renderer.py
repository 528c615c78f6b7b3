"""Test the schema renderer end to end."""

import math
import xml.etree.ElementTree as ET

import pytest

from motorschema.diagram.renderer import (
    SchemaRenderer,
    compute_viewport,
    render_scene_to_svg,
    resolve_origin,
)
from motorschema.diagram.geometry import Bounds
from motorschema.diagram.schema import parse_scene

NS = "{http://www.w3.org/2000/svg}"


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg)


def _view_box(root: ET.Element) -> list[float]:
    return [float(v) for v in root.get("viewBox").split()]


def test_absent_scene_renders_nothing():
    assert render_scene_to_svg(None) is None
    assert SchemaRenderer(None).render_svg() is None


def test_output_canvas_is_fixed():
    root = _parse(render_scene_to_svg({}))
    assert root.tag == f"{NS}svg"
    assert root.get("width") == "800"
    assert root.get("height") == "600"
    assert root.get("preserveAspectRatio") == "xMidYMid meet"


def test_invalid_path_falls_back_to_default_bounds():
    svg = render_scene_to_svg({"paths": [{"path": "not a path"}]})
    root = _parse(svg)
    # default 400x400 box -> logical 500x500 around (200, 200), plus 20 padding
    assert _view_box(root) == [-20, -20, 540, 540]


def test_empty_path_is_not_drawn():
    root = _parse(render_scene_to_svg({"paths": [{"path": ""}, "   "]}))
    assert root.findall(f"{NS}path") == []


def test_rendering_is_deterministic():
    scene = {
        "paths": [{"path": "M 10 10 L 200 200", "dashPattern": [4, 2]}],
        "texts": [{"text": "L1", "x": 30, "y": 40}],
        "symbols": [{"kind": "terminal", "x": 100, "y": 100, "label": "1"}],
        "poleConfig": {"visible": True, "poleCount": 4},
        "statorConfig": {"visible": True, "slotCount": 36, "radius": 180},
        "legendConfig": {"visible": True, "model": "W22"},
        "canvasSize": {"width": 400, "height": 500},
    }
    assert render_scene_to_svg(scene) == render_scene_to_svg(scene)


def test_stator_slots_evenly_spaced():
    svg = render_scene_to_svg({
        "statorConfig": {"visible": True, "slotCount": 24, "radius": 150},
        "canvasSize": {"width": 400, "height": 500},
    })
    root = _parse(svg)
    circles = root.findall(f"{NS}circle")

    ring = [c for c in circles if c.get("r") == "150"]
    assert len(ring) == 1
    assert (ring[0].get("cx"), ring[0].get("cy")) == ("200", "250")

    slots = [c for c in circles if c.get("r") == "3"]
    assert len(slots) == 24
    angles = []
    for slot in slots:
        dx = float(slot.get("cx")) - 200
        dy = float(slot.get("cy")) - 250
        assert math.hypot(dx, dy) == pytest.approx(150, abs=0.01)
        angles.append(math.degrees(math.atan2(dy, dx)) % 360)
    for i, angle in enumerate(angles):
        assert angle == pytest.approx(i * 15, abs=0.01) or (i == 0 and angle == pytest.approx(360, abs=0.01))


def test_stator_grows_viewport():
    root = _parse(render_scene_to_svg({
        "statorConfig": {"visible": True, "slotCount": 24, "radius": 150},
        "canvasSize": {"width": 400, "height": 500},
    }))
    # ring reach 150 * 1.25 + 30 = 217.5 around (200, 250), then 20 padding
    assert _view_box(root) == [-37.5, -20, 475, 540]


def test_viewport_never_shrinks_below_canvas():
    scene = parse_scene({
        "symbols": [{"x": 50, "y": 50, "size": 5}],
        "canvasSize": {"width": 1000, "height": 800},
    })
    origin, viewport = compute_viewport(scene)
    assert origin.rule == "canvas"
    assert viewport == Bounds(-20, 1020, -20, 820)


def test_origin_from_symbol_centroid_when_stator_visible():
    scene = parse_scene({
        "statorConfig": {"visible": True, "radius": 100},
        "symbols": [{"x": 100, "y": 100}, {"x": 300, "y": 500}],
    })
    origin = resolve_origin(scene, Bounds(0, 400, 0, 400))
    assert origin.rule == "symbol-centroid"
    assert (origin.cx, origin.cy) == (200, 300)

    root = _parse(render_scene_to_svg(scene))
    ring = [c for c in root.findall(f"{NS}circle") if c.get("r") == "100"]
    assert (ring[0].get("cx"), ring[0].get("cy")) == ("200", "300")


def test_origin_from_content_when_no_canvas():
    scene = parse_scene({"paths": ["M 0 0 L 1000 200"]})
    origin = resolve_origin(scene, Bounds(-40, 1040, -40, 240))
    assert origin.rule == "content-center"
    assert (origin.cx, origin.cy) == (500, 100)
    assert (origin.width, origin.height) == (1180, 500)


def test_unusable_canvas_size_is_ignored():
    scene = parse_scene({"canvasSize": {"width": 0, "height": 0}})
    origin, _ = compute_viewport(scene)
    assert origin.rule == "content-center"


def test_pole_arcs_drawn_with_per_pole_colors():
    root = _parse(render_scene_to_svg({
        "poleConfig": {
            "visible": True, "poleCount": 2, "color": "#00ff00", "poleColors": ["#ff0000"],
            "strokeWidth": 3,
        },
        "canvasSize": {"width": 400, "height": 500},
    }))
    arcs = root.findall(f"{NS}path")
    assert len(arcs) == 4
    assert arcs[0].get("stroke") == "#ff0000"
    assert {a.get("stroke") for a in arcs[1:]} == {"#00ff00"}
    assert {a.get("stroke-width") for a in arcs} == {"3"}


def test_generator_poles_grow_viewport():
    small = compute_viewport(parse_scene({
        "poleConfig": {"visible": True, "poleCount": 6, "machineType": "generator"},
        "canvasSize": {"width": 400, "height": 500},
    }))[1]
    large = compute_viewport(parse_scene({
        "poleConfig": {"visible": True, "poleCount": 10, "machineType": "generator"},
        "canvasSize": {"width": 400, "height": 500},
    }))[1]
    assert large.width > small.width


def test_arc_coil_with_label():
    root = _parse(render_scene_to_svg({
        "arcCoilConfig": {"visible": True, "coils": [{
            "centerX": 100, "centerY": 100, "radius": 50,
            "startAngleDeg": 0, "endAngleDeg": 90, "color": "#123456", "label": "A1",
        }]},
    }))
    path = root.find(f"{NS}path")
    assert path.get("d") == "M 150 100 A 50 50 0 0 1 100 150"
    label = root.find(f"{NS}text")
    assert label.text == "A1"
    # 20 units past the radius along the 45° bisector
    assert float(label.get("x")) == pytest.approx(100 + 70 * math.cos(math.radians(45)), abs=0.01)


def test_hidden_sections_are_skipped():
    root = _parse(render_scene_to_svg({
        "statorConfig": {"visible": False, "radius": 150},
        "poleConfig": {"visible": False, "poleCount": 4},
        "arcCoilConfig": {"visible": False, "coils": [{"radius": 10}]},
        "legendConfig": {"visible": False, "model": "W22"},
    }))
    assert root.findall(f"{NS}circle") == []
    assert root.findall(f"{NS}path") == []
    assert root.findall(f"{NS}text") == []


def test_path_dash_pattern():
    root = _parse(render_scene_to_svg({"paths": [
        {"path": "M 0 0 L 10 10", "dashPattern": [5, "x", 3], "color": "red", "strokeWidth": 1.5},
        {"path": "M 0 0 L 10 20", "dashPattern": [float("nan")]},
    ]}))
    dashed, plain = root.findall(f"{NS}path")
    assert dashed.get("stroke-dasharray") == "5,3"
    assert dashed.get("stroke") == "red"
    assert dashed.get("stroke-width") == "1.5"
    assert plain.get("stroke-dasharray") is None


def test_symbol_shapes():
    root = _parse(render_scene_to_svg({"symbols": [
        {"kind": "coil", "x": 0, "y": 0, "size": 20, "label": "K1"},
        {"kind": "capacitor", "x": 100, "y": 0},
        {"kind": "terminal", "x": 200, "y": 0, "label": "U1"},
        {"kind": "switch", "x": 300, "y": 0},
        {"kind": "ground", "x": 400, "y": 0},
        {"kind": "resistor", "x": 500, "y": 0},
    ]}))
    rects = root.findall(f"{NS}rect")
    # background + coil
    assert len(rects) == 2
    assert rects[1].get("width") == "20"

    groups = root.findall(f"{NS}g")
    assert len(groups) == 3
    capacitor, switch, ground = groups
    assert len(capacitor.findall(f"{NS}line")) == 2
    assert len(switch.findall(f"{NS}line")) == 1
    assert len(switch.findall(f"{NS}circle")) == 2
    assert len(ground.findall(f"{NS}line")) == 2

    circles = root.findall(f"{NS}circle")
    terminal = [c for c in circles if c.get("cx") == "200"][0]
    assert terminal.get("fill") == "white"
    generic = [c for c in circles if c.get("cx") == "500"][0]
    assert generic.get("fill") == "none"

    labels = {t.text: t for t in root.findall(f"{NS}text")}
    assert labels["U1"].get("font-weight") == "bold"
    assert labels["K1"].get("font-weight") is None


def test_symbol_rotation_about_anchor():
    root = _parse(render_scene_to_svg({"symbols": [
        {"kind": "coil", "x": 10, "y": 20, "rotationDegrees": 90},
        {"kind": "switch", "x": 10, "y": 20, "rotation": 0},
    ]}))
    assert root.findall(f"{NS}rect")[1].get("transform") == "rotate(90 10 20)"
    assert root.find(f"{NS}g").get("transform") is None


def test_text_is_escaped_and_blank_text_skipped():
    svg = render_scene_to_svg({"texts": [
        {"text": "<L1> & \"N\"", "x": 5, "y": 5},
        {"text": "   ", "x": 5, "y": 5},
        {"x": 5, "y": 5},
    ]})
    texts = _parse(svg).findall(f"{NS}text")
    assert [t.text for t in texts] == ['<L1> & "N"']
    assert texts[0].get("font-size") == "12"


def test_legend_lists_only_filled_fields():
    root = _parse(render_scene_to_svg({
        "legendConfig": {"visible": True, "model": "W22", "brand": " ", "rpm": 1750},
        "canvasSize": {"width": 400, "height": 500},
    }))
    texts = [t.text for t in root.findall(f"{NS}text")]
    assert texts == ["Model: W22", "RPM: 1750"]
    box = root.findall(f"{NS}rect")[1]
    assert box.get("fill") == "#f8f9fa"


def test_legend_with_no_values_draws_nothing():
    root = _parse(render_scene_to_svg({"legendConfig": {"visible": True}}))
    assert len(root.findall(f"{NS}rect")) == 1


def test_non_finite_input_never_reaches_markup():
    svg = render_scene_to_svg({
        "symbols": [{"kind": "terminal", "x": float("nan"), "y": float("inf"), "size": float("-inf")}],
        "texts": [{"text": "x", "x": float("nan"), "y": 1, "fontSize": float("inf")}],
        "poleConfig": {"visible": True, "poleCount": float("nan"), "outerRadius": float("inf")},
        "statorConfig": {"visible": True, "slotCount": "many", "radius": float("nan")},
        "arcCoilConfig": {"visible": True, "coils": [{"radius": float("nan"), "startAngle": float("inf")}]},
        "paths": ["M 0 0 L NaN Infinity", {"path": "M -Infinity 1e999 L 5 5"}],
        "canvasSize": {"width": float("nan"), "height": 300},
    })
    lowered = svg.lower()
    assert "nan" not in lowered
    assert "inf" not in lowered
    _parse(svg)



def test_non_finite_path_numbers_written_as_zero():
    root = _parse(render_scene_to_svg({"paths": ["M 0 0 L NaN Infinity", "m 1.5 -2e3 l 1e999 -inf"]}))
    assert [p.get("d") for p in root.findall(f"{NS}path")] == ["M 0 0 L 0 0", "m 1.5 -2e3 l 0 0"]


def test_overflowing_generator_radii_draw_no_poles():
    svg = render_scene_to_svg({
        "poleConfig": {
            "visible": True, "poleCount": 100, "machineType": "generator",
            "innerRadius": 1e301, "outerRadius": 1e301,
        },
        "canvasSize": {"width": 400, "height": 500},
    })
    assert "inf" not in svg.lower()
    assert "nan" not in svg.lower()
    root = _parse(svg)
    assert root.findall(f"{NS}path") == []
    assert _view_box(root) == [-20, -20, 440, 540]


def test_characters_xml_cannot_carry_are_dropped():
    svg = render_scene_to_svg({
        "texts": [{"text": "L1\x01\x0b", "x": 5, "y": 5}],
        "symbols": [{"kind": "terminal", "x": 5, "y": 5, "label": "U\x1f1"}],
        "legendConfig": {"visible": True, "model": "W\x0022"},
    })
    texts = [t.text for t in _parse(svg).findall(f"{NS}text")]
    assert texts == ["U1", "L1", "Model: W22"]


def test_zero_rpm_left_out_of_legend():
    root = _parse(render_scene_to_svg({"legendConfig": {"visible": True, "model": "W22", "rpm": 0}}))
    assert [t.text for t in root.findall(f"{NS}text")] == ["Model: W22"]

def test_huge_slot_counts_are_clamped():
    root = _parse(render_scene_to_svg({"statorConfig": {"visible": True, "slotCount": 10**9}}))
    slots = [c for c in root.findall(f"{NS}circle") if c.get("r") == "3"]
    assert len(slots) == 720


def test_paint_order():
    svg = render_scene_to_svg({
        "statorConfig": {"visible": True, "radius": 100, "slotCount": 4},
        "poleConfig": {"visible": True, "poleCount": 2, "color": "#aa0000"},
        "arcCoilConfig": {"visible": True, "coils": [{"radius": 30, "endAngle": 90, "color": "#bb0000"}]},
        "paths": [{"path": "M 0 0 L 5 5", "color": "#cc0000"}],
        "symbols": [{"kind": "ground", "x": 1, "y": 1, "color": "#dd0000"}],
        "texts": [{"text": "T", "x": 1, "y": 1, "color": "#ee0000"}],
        "legendConfig": {"visible": True, "model": "M"},
    })
    markers = ['fill="white"', 'stroke="#003d66"', "#aa0000", "#bb0000", "#cc0000", "#dd0000", "#ee0000", "#f8f9fa"]
    positions = [svg.index(m) for m in markers]
    assert positions == sorted(positions)


def test_accepts_parsed_scene_objects():
    scene = parse_scene({"texts": [{"text": "A", "x": 1, "y": 1}]})
    assert render_scene_to_svg(scene) == render_scene_to_svg({"texts": [{"text": "A", "x": 1, "y": 1}]})
