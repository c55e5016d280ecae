"""Reference graph discovery.

An identifier can be referenced in four ways:

- from a declaration of a rule inside a <style> element,
- from an ``xlink:href`` attribute,
- from a ``url(#id)`` value inside an inline ``style`` attribute,
- from a ``url(#id)`` value of a presentation attribute such as ``fill``.

The graph maps each referenced identifier to every place that points at it.
It is rebuilt from the live tree whenever a pass needs it and is never kept
across mutations.
"""

import dataclasses
import enum
import logging
import re
import xml.etree.ElementTree as ET
from typing import Optional

from svgcleaner import svg_utils
from svgcleaner.core import css
from svgcleaner.core.constants import REFERENCING_PROPERTIES
from svgcleaner.core.style import parse_style

logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r"\s")
URL_RE = re.compile(r"^url\(([^)]*)\)")


class ReferenceKind(enum.Enum):
    """How a reference is encoded in the document."""

    STYLE_RULE = "style-rule"
    XLINK = "xlink"
    STYLE_ATTRIBUTE = "style-attribute"
    PLAIN_ATTRIBUTE = "plain-attribute"


@dataclasses.dataclass(frozen=True)
class Reference:
    """A pointer from a node to an identifier.

    Attributes:
        kind: Encoding of the reference.
        node: The referencing element. For STYLE_RULE this is the <style>
            element holding the rule.
        attribute: Name of the presentation attribute for PLAIN_ATTRIBUTE
            references, None otherwise.
    """

    kind: ReferenceKind
    node: ET.Element
    attribute: Optional[str] = None


# Identifier -> references in document order. Keys only exist for
# identifiers with at least one reference.
ReferenceGraph = dict[str, list[Reference]]


def extract_referenced_id(value: Optional[str]) -> Optional[str]:
    """Extract the identifier from a ``url(#id)`` value.

    Whitespace is ignored, quotes around the target are stripped and the
    leading ``#`` is removed. Values that are not ``url(...)`` are not
    references.

    Example:
        >>> extract_referenced_id("url('#grad1')")
        'grad1'
        >>> extract_referenced_id("#ff0000") is None
        True
    """
    if not value:
        return None
    match = URL_RE.match(WHITESPACE_RE.sub("", value))
    if match is None:
        return None
    target = match.group(1).replace('"', "").replace("'", "")
    if target.startswith("#"):
        target = target[1:]
    return target or None


def _add_reference(
    graph: ReferenceGraph,
    id_: str,
    kind: ReferenceKind,
    node: ET.Element,
    attribute: Optional[str] = None,
) -> None:
    graph.setdefault(id_, []).append(Reference(kind, node, attribute))


def _scan_style_element(graph: ReferenceGraph, node: ET.Element) -> None:
    for rule in css.parse_stylesheet(node.text):
        for prop in REFERENCING_PROPERTIES:
            if prop not in rule.declarations:
                continue
            id_ = extract_referenced_id(rule.declarations[prop])
            if id_:
                _add_reference(graph, id_, ReferenceKind.STYLE_RULE, node)


def _scan_element(graph: ReferenceGraph, node: ET.Element) -> None:
    href = node.get(svg_utils.XLINK_HREF)
    if href and not href.startswith("data:"):
        id_ = href.replace("#", "")
        if id_:
            _add_reference(graph, id_, ReferenceKind.XLINK, node)

    styles = parse_style(node.get("style"))
    for prop in REFERENCING_PROPERTIES:
        id_ = extract_referenced_id(node.get(prop))
        if id_:
            _add_reference(graph, id_, ReferenceKind.PLAIN_ATTRIBUTE, node, prop)
        id_ = extract_referenced_id(styles.get(prop))
        if id_:
            _add_reference(graph, id_, ReferenceKind.STYLE_ATTRIBUTE, node)


def find_referenced_elements(root: ET.Element) -> ReferenceGraph:
    """Build the reference graph of the tree rooted at root.

    Every element is visited exactly once in document order. The content of
    <style> elements is read as a stylesheet. References are not
    deduplicated: two attributes of one node pointing at the same target
    produce two entries, since each one is rewritten separately on rename.

    Returns:
        Mapping of referenced identifier to its references.
    """
    graph: ReferenceGraph = {}
    for node in svg_utils.iter_elements(root):
        if svg_utils.local_name(node.tag) == "style":
            _scan_style_element(graph, node)
        else:
            _scan_element(graph, node)
    logger.debug(
        f"Found {sum(len(refs) for refs in graph.values())} references "
        f"to {len(graph)} identifiers"
    )
    return graph


def find_identified_elements(root: ET.Element) -> dict[str, ET.Element]:
    """Map each ``id`` in the document to its first defining element."""
    identified: dict[str, ET.Element] = {}
    for node in svg_utils.iter_elements(root):
        id_ = node.get("id")
        if not id_:
            continue
        if id_ in identified:
            logger.warning(f"Duplicate id in document: {id_}")
            continue
        identified[id_] = node
    return identified
