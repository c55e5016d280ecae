import collections
import logging
import re
import xml.etree.ElementTree as ET

from svgcleaner import svg_utils
from svgcleaner.core.counter import IDCounter
from svgcleaner.core.references import (
    Reference,
    ReferenceKind,
    find_identified_elements,
    find_referenced_elements,
)

logger = logging.getLogger(__name__)


def replace_referenced_id(value: str, id_from: str, id_to: str) -> str:
    """Replace every ``url(#id_from)`` in value with ``url(#id_to)``.

    Quoted and unquoted forms are matched. The match is anchored on the
    closing quote or parenthesis, so longer identifiers starting with
    id_from are left alone.

    Example:
        >>> replace_referenced_id("url('#a') url(#ab)", "a", "z")
        'url(#z) url(#ab)'
    """
    pattern = re.compile(r"url\(\s*['\"]?#" + re.escape(id_from) + r"['\"]?\s*\)")
    return pattern.sub(lambda match: f"url(#{id_to})", value)


def rename_id(
    id_from: str,
    id_to: str,
    element: ET.Element,
    references: list[Reference],
) -> None:
    """Rename the defining element and rewrite every reference to it."""
    element.set("id", id_to)
    for reference in references:
        node = reference.node
        if reference.kind is ReferenceKind.STYLE_RULE:
            node.text = replace_referenced_id(node.text or "", id_from, id_to)
        elif reference.kind is ReferenceKind.XLINK:
            node.set(svg_utils.XLINK_HREF, f"#{id_to}")
        elif reference.kind is ReferenceKind.STYLE_ATTRIBUTE:
            style = node.get("style")
            if style is not None:
                node.set("style", replace_referenced_id(style, id_from, id_to))
        elif reference.kind is ReferenceKind.PLAIN_ATTRIBUTE:
            assert reference.attribute is not None
            value = node.get(reference.attribute)
            if value is not None:
                node.set(
                    reference.attribute, replace_referenced_id(value, id_from, id_to)
                )


def shorten_ids(root: ET.Element, start: int = 1) -> None:
    """Shorten the ids used in the document.

    Ids referenced most often receive the shortest names (a, b, ..., z, aa,
    ...). Only ids that are both referenced and defined are renamed. A name
    already carried by another element, or targeted by a reference without a
    defining element, is skipped. The result depends only on the document
    and the start value.

    Args:
        root: Root of the tree, modified in place.
        start: Counter value of the first name, 1 meaning "a".

    Example:
        Before:
            <svg>
                <defs><linearGradient id="linearGradient4918"/></defs>
                <rect fill="url(#linearGradient4918)"/>
            </svg>

        After:
            <svg>
                <defs><linearGradient id="a"/></defs>
                <rect fill="url(#a)"/>
            </svg>
    """
    graph = find_referenced_elements(root)
    identified = find_identified_elements(root)

    in_use = collections.Counter(
        node.get("id") for node in svg_utils.iter_elements(root) if node.get("id")
    )
    for id_ in graph:
        if id_ not in identified:
            in_use[id_] += 1

    candidates = [id_ for id_ in graph if id_ in identified]
    candidates.sort(key=lambda id_: -len(graph[id_]))

    counter = IDCounter(start)
    renamed = 0
    for id_ in candidates:
        new_id = counter.next_id()
        while new_id != id_ and new_id in in_use:
            new_id = counter.next_id()
        if new_id == id_:
            continue

        rename_id(id_, new_id, identified[id_], graph[id_])
        in_use[id_] -= 1
        if in_use[id_] <= 0:
            del in_use[id_]
        in_use[new_id] += 1
        renamed += 1

    if renamed:
        logger.debug(f"Shortened {renamed} ids")
