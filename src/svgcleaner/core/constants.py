# Style properties and presentation attributes that may hold a url(#id).
REFERENCING_PROPERTIES: tuple[str, ...] = (
    "fill",
    "stroke",
    "filter",
    "clip-path",
    "mask",
    "marker-start",
    "marker-end",
    "marker-mid",
)

STROKE_PROPERTIES: tuple[str, ...] = (
    "stroke",
    "stroke-width",
    "stroke-linejoin",
    "stroke-opacity",
    "stroke-miterlimit",
    "stroke-linecap",
    "stroke-dasharray",
    "stroke-dashoffset",
)

FILL_PROPERTIES: tuple[str, ...] = ("fill", "fill-opacity", "fill-rule")

TEXT_PROPERTIES: tuple[str, ...] = (
    "font-family",
    "font-size",
    "font-stretch",
    "font-size-adjust",
    "font-style",
    "font-variant",
    "font-weight",
    "letter-spacing",
    "line-height",
    "kerning",
    "text-align",
    "text-anchor",
    "text-decoration",
    "text-rendering",
    "unicode-bidi",
    "word-spacing",
    "writing-mode",
)

VENDOR_PREFIXES: tuple[str, ...] = ("-inkscape",)

# Style properties that are promoted to XML attributes.
SVG_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "clip-rule",
        "display",
        "fill",
        "fill-opacity",
        "fill-rule",
        "filter",
        "font-family",
        "font-size",
        "font-stretch",
        "font-style",
        "font-variant",
        "font-weight",
        "line-height",
        "marker",
        "marker-end",
        "marker-mid",
        "marker-start",
        "opacity",
        "overflow",
        "stop-color",
        "stop-opacity",
        "stroke",
        "stroke-dasharray",
        "stroke-dashoffset",
        "stroke-linecap",
        "stroke-linejoin",
        "stroke-miterlimit",
        "stroke-opacity",
        "stroke-width",
        "visibility",
    }
)

# Leaf shapes never hold text.
NON_TEXT_ELEMENTS: frozenset[str] = frozenset(
    {
        "rect",
        "circle",
        "ellipse",
        "line",
        "polygon",
        "polyline",
        "path",
        "image",
        "stop",
    }
)

# Containers hold text only through their descendants.
TEXT_CONTAINER_ELEMENTS: frozenset[str] = frozenset(
    {
        "g",
        "clipPath",
        "marker",
        "mask",
        "pattern",
        "linearGradient",
        "radialGradient",
        "symbol",
    }
)

# Children of <defs> that are kept even when nothing references them.
ALWAYS_KEEP_TAGS: frozenset[str] = frozenset(
    {"font", "style", "metadata", "script", "title", "desc"}
)

# Paint servers that are dropped outside <defs> when unreferenced.
PAINT_SERVER_TAGS: frozenset[str] = frozenset(
    {"linearGradient", "radialGradient", "pattern"}
)

EMPTY_CONTAINER_TAGS: tuple[str, ...] = ("defs", "metadata", "g")
