import logging
import xml.etree.ElementTree as ET

from svgcleaner import svg_utils
from svgcleaner.core.constants import ALWAYS_KEEP_TAGS, PAINT_SERVER_TAGS
from svgcleaner.core.references import ReferenceGraph, find_referenced_elements

logger = logging.getLogger(__name__)


def _collect_unreferenced_in_defs(
    container: ET.Element, graph: ReferenceGraph, doomed: list[ET.Element]
) -> None:
    """Collect unreferenced renderable children of a <defs> or an unreferenced <g>.

    An unreferenced <g> is only a wrapper, so its children are inspected
    instead of removing it together with anything referenced inside.
    """
    for child in svg_utils.child_elements(container):
        tag = svg_utils.local_name(child.tag)
        if tag in ALWAYS_KEEP_TAGS:
            continue
        if child.get("id") in graph:
            continue
        if tag == "g":
            _collect_unreferenced_in_defs(child, graph, doomed)
        else:
            doomed.append(child)


def _collect_unreferenced(root: ET.Element, graph: ReferenceGraph) -> list[ET.Element]:
    doomed: list[ET.Element] = []
    for defs in svg_utils.iter_elements(root, "defs"):
        _collect_unreferenced_in_defs(defs, graph, doomed)

    for node in svg_utils.iter_elements(root):
        if node is root or svg_utils.local_name(node.tag) not in PAINT_SERVER_TAGS:
            continue
        if "id" in node.attrib and node.get("id") not in graph:
            doomed.append(node)
    return doomed


def remove_unreferenced_elements(root: ET.Element) -> None:
    """Remove elements that nothing in the document can reach.

    Inside <defs>, every child that is neither referenced nor in the
    always-keep set is removed with its subtree; unreferenced <g> wrappers
    are descended into and left for the empty container sweep. Outside
    <defs>, unreferenced gradients and patterns are removed. The graph is
    rebuilt and the sweep repeated until nothing more is removed.

    Example:
        Before:
            <svg>
                <defs>
                    <pattern id="p"/>
                    <g id="x"><linearGradient id="y"/></g>
                </defs>
                <rect fill="url(#y)"/>
            </svg>

        After:
            <svg>
                <defs>
                    <g id="x"><linearGradient id="y"/></g>
                </defs>
                <rect fill="url(#y)"/>
            </svg>
    """
    total = 0
    while True:
        # Removed elements may have held the last reference to another one.
        graph = find_referenced_elements(root)
        removed = svg_utils.remove_elements(root, _collect_unreferenced(root, graph))
        if not removed:
            break
        total += removed
    if total:
        logger.debug(f"Removed {total} unreferenced elements")


def remove_unreferenced_ids(root: ET.Element) -> None:
    """Remove ``id`` attributes that nothing references.

    Running it again on the result changes nothing.
    """
    graph = find_referenced_elements(root)
    count = 0
    for node in svg_utils.iter_elements(root):
        id_ = node.get("id")
        if id_ is not None and id_ not in graph:
            del node.attrib["id"]
            count += 1
    if count:
        logger.debug(f"Removed {count} unreferenced ids")
