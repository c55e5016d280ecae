import dataclasses
import logging
import os
import xml.etree.ElementTree as ET
from typing import Any, Mapping, Optional

from svgcleaner import svg_utils
from svgcleaner.core import identifiers, pruning, references, style
from svgcleaner.core.constants import EMPTY_CONTAINER_TAGS
from svgcleaner.core.references import ReferenceGraph

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclasses.dataclass
class CleanOptions:
    """Options of the cleaning pipeline.

    Options can be given as a mapping, where both the camelCase and the
    snake_case spellings are accepted and unknown keys are ignored, or taken
    from environment variables.

    Environment variables:
        SVGCLEANER_STYLE_TO_ATTRIBUTES: Promote style properties to
            presentation attributes (default: true)

    Example:
        >>> options = CleanOptions.from_dict({"styleToAttributes": False})
        >>> options.style_to_attributes
        False
    """

    style_to_attributes: bool = True

    @classmethod
    def default(cls) -> "CleanOptions":
        """Create options with values from environment variables.

        Raises:
            ValueError: If an environment variable is not a boolean.
        """

        def parse_env_bool(key: str, default: bool) -> bool:
            value = os.environ.get(key)
            if value is None:
                return default
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError(f"Invalid boolean value for {key}: {value!r}")

        return cls(
            style_to_attributes=parse_env_bool("SVGCLEANER_STYLE_TO_ATTRIBUTES", True)
        )

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]] = None) -> "CleanOptions":
        """Create options from a mapping, on top of the environment defaults."""
        result = cls.default()
        if not options:
            return result
        for key, value in options.items():
            if key in ("styleToAttributes", "style_to_attributes"):
                result.style_to_attributes = bool(value)
            else:
                logger.debug(f"Ignoring unknown option: {key}")
        return result


@dataclasses.dataclass
class SVGDocument:
    """SVG document with chainable cleaning steps.

    Every step rebuilds the reference graph from the current tree, so steps
    can be combined in any order.

    Example usage::

        from svgcleaner import SVGDocument

        # Run the whole pipeline.
        document = SVGDocument.load("input.svg")
        document.clean().save("output.svg")

        # Or only some of the steps.
        svg_string = (
            SVGDocument.fromstring(markup)
            .remove_unreferenced_elements()
            .shorten_ids()
            .tostring()
        )
    """

    svg: ET.Element
    options: CleanOptions = dataclasses.field(default_factory=CleanOptions.default)

    @classmethod
    def fromstring(
        cls, markup: str, options: Optional[CleanOptions] = None
    ) -> "SVGDocument":
        """Create a document from SVG markup."""
        return cls(svg=svg_utils.fromstring(markup), options=_resolve(options))

    @classmethod
    def load(cls, filepath: str, options: Optional[CleanOptions] = None) -> "SVGDocument":
        """Create a document from an SVG file."""
        with open(filepath, "r", encoding="utf-8") as f:
            svg = svg_utils.parse(f)
        return cls(svg=svg, options=_resolve(options))

    def remove_namespaced_elements(self) -> "SVGDocument":
        """Remove elements of editor namespaces (sodipodi, inkscape, ...)."""
        svg_utils.remove_namespaced_elements(self.svg)
        return self

    def remove_namespaced_attributes(self) -> "SVGDocument":
        """Remove attributes of editor namespaces."""
        svg_utils.remove_namespaced_attributes(self.svg)
        return self

    def remove_comments(self) -> "SVGDocument":
        svg_utils.remove_comments(self.svg)
        return self

    def repair_styles(self) -> "SVGDocument":
        """Normalize inline styles."""
        style.repair_styles(
            self.svg, style_to_attributes=self.options.style_to_attributes
        )
        return self

    def scan_references(self) -> ReferenceGraph:
        """Build the reference graph of the current tree."""
        return references.find_referenced_elements(self.svg)

    def remove_unreferenced_elements(self) -> "SVGDocument":
        pruning.remove_unreferenced_elements(self.svg)
        return self

    def remove_empty_containers(self) -> "SVGDocument":
        svg_utils.remove_empty_containers(self.svg, EMPTY_CONTAINER_TAGS)
        return self

    def remove_unreferenced_ids(self) -> "SVGDocument":
        pruning.remove_unreferenced_ids(self.svg)
        return self

    def shorten_ids(self, start: int = 1) -> "SVGDocument":
        """Rename referenced ids to the shortest free names."""
        identifiers.shorten_ids(self.svg, start=start)
        return self

    def clean(self, start: int = 1) -> "SVGDocument":
        """Run every cleaning step in order."""
        return (
            self.remove_namespaced_elements()
            .remove_namespaced_attributes()
            .remove_comments()
            .repair_styles()
            .remove_unreferenced_elements()
            .remove_empty_containers()
            .remove_unreferenced_ids()
            .shorten_ids(start=start)
        )

    def tostring(self, indent: Optional[str] = "  ") -> str:
        """Convert the document to a string."""
        return svg_utils.tostring(self.svg, indent=indent)

    def save(self, filepath: str, indent: Optional[str] = "  ") -> None:
        """Save the document to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            svg_utils.write(self.svg, f, indent=indent)


def _resolve(options: Optional[CleanOptions]) -> CleanOptions:
    return options if options is not None else CleanOptions.default()


def clean(
    markup: str,
    options: Optional[Mapping[str, Any] | CleanOptions] = None,
    start: int = 1,
    indent: Optional[str] = "  ",
) -> str:
    """Clean SVG markup and return the result.

    Args:
        markup: SVG document as a string.
        options: CleanOptions or a mapping such as ``{"styleToAttributes": False}``.
            Unknown keys are ignored.
        start: Counter value of the first shortened id.
        indent: Indentation for pretty-printing, None to keep whitespace.
    """
    if not isinstance(options, CleanOptions):
        options = CleanOptions.from_dict(options)
    document = SVGDocument.fromstring(markup, options=options)
    return document.clean(start=start).tostring(indent=indent)


def clean_file(
    input_path: str,
    output_path: str,
    options: Optional[Mapping[str, Any] | CleanOptions] = None,
    start: int = 1,
    indent: Optional[str] = "  ",
) -> None:
    """Convenience method to clean an SVG file into another file.

    Raises:
        OSError: If the input cannot be read or the output cannot be written.
        ValueError: If the input is not well-formed XML.
    """
    if not isinstance(options, CleanOptions):
        options = CleanOptions.from_dict(options)
    document = SVGDocument.load(input_path, options=options)
    document.clean(start=start).save(output_path, indent=indent)
    logger.info(f"Cleaned {input_path} into {output_path}")
