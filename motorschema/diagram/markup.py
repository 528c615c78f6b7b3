"""Small SVG markup helpers shared by the renderer and the symbol library."""

from __future__ import annotations

import math
import re
from typing import Any, Optional

# Everything outside the XML 1.0 Char production, lone surrogates included
_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

# Numbers (with exponent) and the spellings of non-finite values in path data
_PATH_NUMBER_RE = re.compile(
    r"[-+]?(?:nan|infinity|inf|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?)",
    re.IGNORECASE,
)


def fmt(value: Any) -> str:
    """Format a coordinate for markup: finite, at most two decimals.

    Anything that is not a finite number is written as 0 so NaN and
    Infinity never reach the document.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "0"
    if not math.isfinite(number):
        return "0"
    text = f"{number:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def escape_xml(text: Optional[str]) -> str:
    """Escape special XML characters and drop the ones XML cannot carry."""
    if text is None:
        return ""
    return (
        _INVALID_XML_CHARS.sub("", str(text))
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def clean_path_data(commands: str) -> str:
    """Rewrite non-finite numbers in path data (NaN, Infinity, 1e999) as 0."""

    def _finite_token(match: re.Match) -> str:
        token = match.group(0)
        return token if math.isfinite(float(token)) else "0"

    return _PATH_NUMBER_RE.sub(_finite_token, commands)


def rotate_attr(degrees: Optional[float], x: float, y: float) -> str:
    """Leading-space transform attribute, or nothing when there is no rotation."""
    if not degrees or not math.isfinite(degrees):
        return ""
    return f' transform="rotate({fmt(degrees)} {fmt(x)} {fmt(y)})"'
