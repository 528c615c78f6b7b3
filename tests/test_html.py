"""Test the HTML sheet that embeds a schema for PDF conversion."""

from motorschema.pdf.html import motor_data_html, motor_sheet_html, schema_section_html


def test_schema_section_empty_without_svg():
    assert schema_section_html(None) == ""
    assert schema_section_html("") == ""


def test_schema_section_inlines_svg():
    html = schema_section_html("<svg></svg>", title="Diagram <1>")
    assert 'class="section page-break"' in html
    assert '<div class="schema-frame"><svg></svg></div>' in html
    assert "Diagram &lt;1&gt;" in html


def test_motor_data_skips_blank_and_nested():
    html = motor_data_html({
        "ratedPower": "5 HP",
        "brand": "  ",
        "notes": None,
        "coils": [1, 2],
        "extra": {"a": 1},
        "rpm": 1750,
    })
    assert "Rated power" in html
    assert "5 HP" in html
    assert "1750" in html
    assert "Brand" not in html
    assert "Coils" not in html
    assert "Extra" not in html


def test_motor_data_empty():
    assert motor_data_html({}) == ""


def test_motor_sheet_embeds_rendered_schema():
    html = motor_sheet_html(
        {"model": "W22 & co"},
        {"statorConfig": {"visible": True, "radius": 100}},
        title="Sheet",
    )
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Sheet</title>" in html
    assert "W22 &amp; co" in html
    assert '<svg xmlns="http://www.w3.org/2000/svg"' in html
    assert "page-break" in html


def test_motor_sheet_without_scene():
    html = motor_sheet_html(None, None)
    assert "<svg" not in html
    assert "schema-frame" not in html.split("</style>")[1]
