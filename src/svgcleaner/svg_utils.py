import logging
import xml.etree.ElementTree as ET
from typing import Any, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
XLINK_HREF = f"{{{XLINK_NAMESPACE}}}href"

# Namespaces written by drawing editors, keyed by their customary prefix.
EDITOR_NAMESPACES: dict[str, tuple[str, ...]] = {
    "dc": ("http://purl.org/dc/elements/1.1/",),
    "rdf": ("http://www.w3.org/1999/02/22-rdf-syntax-ns#",),
    "sodipodi": (
        "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
        "http://inkscape.sourceforge.net/DTD/sodipodi-0.dtd",
    ),
    "cc": ("http://creativecommons.org/ns#", "http://web.resource.org/cc/"),
    "inkscape": ("http://www.inkscape.org/namespaces/inkscape",),
}

DEFAULT_NAMESPACE_PREFIXES = ("dc", "rdf", "sodipodi", "cc", "inkscape")

ET.register_namespace("", NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)
for _prefix, _uris in EDITOR_NAMESPACES.items():
    ET.register_namespace(_prefix, _uris[0])


def local_name(tag: Any) -> str:
    """Get the tag or attribute name without its namespace.

    Comments and processing instructions have a callable tag and no name.
    """
    if not isinstance(tag, str):
        return ""
    return tag.split("}")[-1] if "}" in tag else tag


def namespace_of(tag: Any) -> str:
    """Get the namespace URI of a Clark-notation name, or an empty string."""
    if isinstance(tag, str) and tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return ""


def is_element(node: ET.Element) -> bool:
    """Check if the node is a real element, not a comment or PI."""
    return isinstance(node.tag, str)


def iter_elements(root: ET.Element, tag: Optional[str] = None) -> Iterator[ET.Element]:
    """Iterate elements in document order, optionally filtered by local name."""
    for node in root.iter():
        if not is_element(node):
            continue
        if tag is None or local_name(node.tag) == tag:
            yield node


def child_elements(node: ET.Element) -> list[ET.Element]:
    """Return a snapshot of the element children of a node."""
    return [child for child in node if is_element(child)]


def build_parent_map(root: ET.Element) -> dict[ET.Element, ET.Element]:
    """Map every node to its parent.

    ElementTree nodes have no parent pointer, so passes that detach nodes
    build this once per walk.
    """
    return {child: parent for parent in root.iter() for child in parent}


def remove_element(parent: ET.Element, node: ET.Element) -> None:
    """Remove a node from its parent, keeping the text that follows it."""
    if node.tail and node.tail.strip():
        index = list(parent).index(node)
        if index > 0:
            prev = parent[index - 1]
            prev.tail = (prev.tail or "") + node.tail
        else:
            parent.text = (parent.text or "") + node.tail
    parent.remove(node)


def remove_elements(
    root: ET.Element, nodes: Iterable[ET.Element]
) -> int:
    """Remove the given nodes from the tree rooted at root.

    Nodes already detached (e.g. inside a removed ancestor) are skipped.
    Returns the number of nodes removed.
    """
    parent_map = build_parent_map(root)
    removed: set[ET.Element] = set()

    def is_attached(node: ET.Element) -> bool:
        while node is not root:
            parent = parent_map.get(node)
            if parent is None or parent in removed:
                return False
            node = parent
        return True

    for node in nodes:
        if node is root or node in removed or not is_attached(node):
            continue
        remove_element(parent_map[node], node)
        removed.add(node)
    return len(removed)


TEXT_CONTENT_TAGS = ("text", "tspan", "textPath")


def _save_text_whitespace(root: ET.Element) -> list[tuple[ET.Element, str, Optional[str]]]:
    """Record the text and tails inside SVG text content elements.

    Whitespace in text elements is rendered and must survive pretty-printing.
    """
    saved: list[tuple[ET.Element, str, Optional[str]]] = []
    for node in root.iter():
        if local_name(node.tag) in TEXT_CONTENT_TAGS:
            saved.append((node, "text", node.text))
            saved.extend((child, "tail", child.tail) for child in node)
    return saved


def _restore_text_whitespace(saved: list[tuple[ET.Element, str, Optional[str]]]) -> None:
    for node, field, value in saved:
        setattr(node, field, value)


def _indent(node: ET.Element, indent: str) -> None:
    saved = _save_text_whitespace(node)
    ET.indent(node, space=indent)
    _restore_text_whitespace(saved)


def _make_parser() -> ET.XMLParser:
    # Comments are kept so that removing them is an explicit cleaning step.
    return ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))


def fromstring(data: str) -> ET.Element:
    """Parse an XML string to an Element."""
    try:
        return ET.fromstring(data, parser=_make_parser())
    except ET.ParseError as e:
        raise ValueError(f"Failed to parse SVG markup: {e}") from e


def parse(file: Any) -> ET.Element:
    """Parse an XML file to an Element."""
    try:
        tree = ET.parse(file, parser=_make_parser())
    except ET.ParseError as e:
        raise ValueError(f"Failed to parse SVG file: {e}") from e
    if tree is None or tree.getroot() is None:
        raise ValueError("Failed to parse XML file.")
    return tree.getroot()


def tostring(node: ET.Element, indent: Optional[str] = "  ") -> str:
    """Convert an XML node to a string.

    Args:
        node: Root of the tree to serialize.
        indent: Indentation for pretty-printing. None keeps the existing
            whitespace untouched.
    """
    if indent is not None:
        _indent(node, indent)
    return ET.tostring(node, encoding="unicode", xml_declaration=False)


def write(node: ET.Element, file: Any, indent: Optional[str] = "  ") -> None:
    """Write an XML node to a file."""
    tree = ET.ElementTree(node)
    if indent is not None:
        _indent(node, indent)
    tree.write(file, encoding="unicode", xml_declaration=False)


def _editor_namespace_uris(prefixes: Iterable[str]) -> set[str]:
    uris: set[str] = set()
    for prefix in prefixes:
        uris.update(EDITOR_NAMESPACES.get(prefix, ()))
    return uris


def remove_namespaced_elements(
    root: ET.Element, prefixes: Iterable[str] = DEFAULT_NAMESPACE_PREFIXES
) -> None:
    """Remove elements that belong to editor namespaces.

    Example:
        Before: <svg><sodipodi:namedview id="base"/><rect/></svg>
        After:  <svg><rect/></svg>
    """
    uris = _editor_namespace_uris(prefixes)
    targets = [
        node
        for node in iter_elements(root)
        if node is not root and namespace_of(node.tag) in uris
    ]
    count = remove_elements(root, targets)
    if count:
        logger.debug(f"Removed {count} namespaced elements")


def remove_namespaced_attributes(
    root: ET.Element, prefixes: Iterable[str] = DEFAULT_NAMESPACE_PREFIXES
) -> None:
    """Remove attributes that belong to editor namespaces.

    Example:
        Before: <g inkscape:label="Layer 1" inkscape:groupmode="layer"/>
        After:  <g/>
    """
    uris = _editor_namespace_uris(prefixes)
    count = 0
    for node in iter_elements(root):
        for key in [k for k in node.attrib if namespace_of(k) in uris]:
            del node.attrib[key]
            count += 1
    if count:
        logger.debug(f"Removed {count} namespaced attributes")


def remove_comments(root: ET.Element) -> None:
    """Remove all comment nodes from the tree."""
    comments = [node for node in root.iter() if node.tag is ET.Comment]
    count = remove_elements(root, comments)
    if count:
        logger.debug(f"Removed {count} comments")


def remove_empty_containers(
    root: ET.Element, tags: Iterable[str] = ("defs", "metadata", "g")
) -> None:
    """Remove container elements without child elements.

    Removal is repeated until nothing changes, so nested empty containers
    such as <defs><g></g></defs> disappear entirely. The root element is
    never removed.
    """
    tags = set(tags)
    total = 0
    while True:
        empty = [
            node
            for node in iter_elements(root)
            if node is not root and local_name(node.tag) in tags and len(node) == 0
        ]
        removed = remove_elements(root, empty) if empty else 0
        if not removed:
            break
        total += removed
    if total:
        logger.debug(f"Removed {total} empty containers")
