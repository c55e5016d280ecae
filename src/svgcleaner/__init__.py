from logging import getLogger

from svgcleaner.core.references import Reference, ReferenceGraph, ReferenceKind
from svgcleaner.svg_document import CleanOptions, SVGDocument, clean, clean_file
from svgcleaner.version import __version__ as __version__

logger = getLogger(__name__)

__all__ = [
    "CleanOptions",
    "Reference",
    "ReferenceGraph",
    "ReferenceKind",
    "SVGDocument",
    "clean",
    "clean_file",
]
