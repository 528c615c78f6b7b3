"""Test the markup helpers."""

from motorschema.diagram.markup import clean_path_data, escape_xml, fmt, rotate_attr


def test_fmt():
    assert fmt(1.0) == "1"
    assert fmt(1.256) == "1.26"
    assert fmt(-0.001) == "0"
    assert fmt(float("nan")) == "0"
    assert fmt(float("-inf")) == "0"
    assert fmt(None) == "0"


def test_escape_xml():
    assert escape_xml('<a & "b">') == "&lt;a &amp; &quot;b&quot;&gt;"
    assert escape_xml(None) == ""


def test_escape_xml_drops_characters_outside_xml():
    assert escape_xml("L1\x01\x0b\x1f") == "L1"
    assert escape_xml("a\ud800b") == "ab"
    assert escape_xml("tab\tnew\nline\r") == "tab\tnew\nline\r"
    assert escape_xml("Ω \U0001f50c") == "Ω \U0001f50c"


def test_clean_path_data_keeps_finite_numbers():
    assert clean_path_data("M 10 -2.5 Q .5 1e3, 4 4") == "M 10 -2.5 Q .5 1e3, 4 4"


def test_clean_path_data_zeroes_non_finite_numbers():
    assert clean_path_data("M 0 0 L NaN Infinity") == "M 0 0 L 0 0"
    assert clean_path_data("M -inf +nan L 1e999 2") == "M 0 0 L 0 2"


def test_rotate_attr():
    assert rotate_attr(90, 10, 20) == ' transform="rotate(90 10 20)"'
    assert rotate_attr(0, 10, 20) == ""
    assert rotate_attr(None, 10, 20) == ""
