"""Inline style normalization.

Parses the ``style`` attribute into an ordered property map, drops
properties made redundant by their siblings, and optionally promotes
properties to presentation attributes.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Callable, Iterable, Optional

from svgcleaner import svg_utils
from svgcleaner.core.constants import (
    FILL_PROPERTIES,
    NON_TEXT_ELEMENTS,
    STROKE_PROPERTIES,
    SVG_ATTRIBUTES,
    TEXT_CONTAINER_ELEMENTS,
    TEXT_PROPERTIES,
    VENDOR_PREFIXES,
)

logger = logging.getLogger(__name__)

NUMBER_RE = re.compile(r"^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")
NON_NUMERIC_RE = re.compile(r"[^-\d.]")

# `url(#id) rgb(0, 0, 0)` as written by some editors for fill and stroke.
PAINT_WITH_FALLBACK_RE = re.compile(r"^(url\(\s*['\"]?#[^)]*\))\s+\S.*$", re.DOTALL)


def parse_style(value: Optional[str]) -> dict[str, str]:
    """Parse an inline style into an ordered property map.

    Entries without exactly one colon are dropped.

    Example:
        >>> parse_style("fill: red; stroke:none;bogus")
        {'fill': 'red', 'stroke': 'none'}
    """
    styles: dict[str, str] = {}
    if not value:
        return styles
    for declaration in value.split(";"):
        parts = declaration.split(":")
        if len(parts) != 2:
            continue
        key = re.sub(r"\s", "", parts[0])
        if not key:
            continue
        styles[key] = parts[1].strip()
    return styles


def render_style(styles: dict[str, str]) -> str:
    """Serialize a property map back into inline style syntax."""
    return "".join(f"{key}:{value};" for key, value in styles.items())


def parse_number(value: str) -> Optional[float]:
    """Parse the leading number of a value, or None if there is none."""
    match = NUMBER_RE.match(value)
    return float(match.group(0)) if match else None


def parse_length(value: str) -> Optional[float]:
    """Parse a length, ignoring any unit suffix."""
    return parse_number(NON_NUMERIC_RE.sub("", value))


def _is_zero(
    value: str, parser: Callable[[str], Optional[float]] = parse_number
) -> bool:
    number = parser(value)
    return number is not None and number == 0.0


def _remove_properties(styles: dict[str, str], properties: Iterable[str]) -> None:
    for key in properties:
        styles.pop(key, None)


def may_contain_text(node: ET.Element) -> bool:
    """Check if the node may render text, directly or through descendants."""
    if not svg_utils.is_element(node):
        return False
    tag = svg_utils.local_name(node.tag)
    if tag in NON_TEXT_ELEMENTS:
        return False
    if tag in TEXT_CONTAINER_ELEMENTS:
        return any(may_contain_text(child) for child in node)
    return True


def _repair_paint(styles: dict[str, str]) -> bool:
    repaired = False
    for key in ("fill", "stroke"):
        value = styles.get(key)
        if value is None:
            continue
        match = PAINT_WITH_FALLBACK_RE.match(value)
        if match:
            styles[key] = match.group(1)
            repaired = True
    return repaired


def _write_style(node: ET.Element, styles: dict[str, str]) -> None:
    rendered = render_style(styles)
    if rendered:
        node.set("style", rendered)
    else:
        node.attrib.pop("style", None)


def repair_style(node: ET.Element, style_to_attributes: bool = True) -> None:
    """Normalize the inline style of a single element in place.

    Args:
        node: Element whose ``style`` attribute is rewritten.
        style_to_attributes: Promote known presentation properties to XML
            attributes.
    """
    styles = parse_style(node.get("style"))
    if not styles:
        return

    repaired = _repair_paint(styles)

    stroke_and_fill = STROKE_PROPERTIES + FILL_PROPERTIES
    if "opacity" in styles:
        if not _is_zero(styles["opacity"]):
            if repaired:
                _write_style(node, styles)
            return
        # Nothing of the paint is visible.
        _remove_properties(styles, stroke_and_fill)

    if styles.get("stroke") == "none":
        _remove_properties(styles, [p for p in STROKE_PROPERTIES if p != "stroke"])

    if styles.get("fill") == "none":
        _remove_properties(styles, [p for p in FILL_PROPERTIES if p != "fill"])

    if "fill-opacity" in styles and _is_zero(styles["fill-opacity"]):
        _remove_properties(
            styles, [p for p in FILL_PROPERTIES if p != "fill-opacity"]
        )

    if "stroke-opacity" in styles and _is_zero(styles["stroke-opacity"]):
        _remove_properties(
            styles, [p for p in STROKE_PROPERTIES if p != "stroke-opacity"]
        )

    if "stroke-width" in styles and _is_zero(styles["stroke-width"], parse_length):
        _remove_properties(
            styles, [p for p in STROKE_PROPERTIES if p != "stroke-width"]
        )

    if not may_contain_text(node):
        _remove_properties(styles, TEXT_PROPERTIES)

    _remove_properties(
        styles,
        [key for key in styles if any(key.startswith(p) for p in VENDOR_PREFIXES)],
    )

    if style_to_attributes:
        for key in [key for key in styles if key in SVG_ATTRIBUTES]:
            node.set(key, styles.pop(key))

    _write_style(node, styles)


def repair_styles(root: ET.Element, style_to_attributes: bool = True) -> None:
    """Normalize inline styles of every element in the tree."""
    count = 0
    for node in svg_utils.iter_elements(root):
        if "style" in node.attrib:
            repair_style(node, style_to_attributes=style_to_attributes)
            count += 1
    logger.debug(f"Repaired inline style of {count} elements")
