import argparse
import logging
import sys

from svgcleaner import CleanOptions, SVGDocument


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Remove editor cruft, unreferenced content and long ids from SVG"
    )
    parser.add_argument("input", metavar="INPUT", type=str, help="Input SVG file path")
    parser.add_argument(
        "output",
        metavar="PATH",
        type=str,
        nargs="?",
        default=None,
        help="Output file. Print to stdout if omitted.",
    )
    parser.add_argument(
        "--no-style-to-attributes",
        dest="style_to_attributes",
        action="store_false",
        default=None,
        help="Keep style properties in the style attribute instead of "
        "promoting them to presentation attributes.",
    )
    parser.add_argument(
        "--start-id",
        metavar="N",
        type=int,
        default=1,
        help="Counter value of the first shortened id (1 is 'a'). Default: 1",
    )
    parser.add_argument(
        "--indent",
        metavar="STR",
        type=str,
        default="  ",
        help="Indentation string for pretty-printing. Default: two spaces",
    )
    parser.add_argument(
        "--loglevel",
        metavar="LEVEL",
        default="WARNING",
        help="Logging level, default WARNING",
    )
    args = parser.parse_args()
    if args.start_id < 1:
        parser.error(f"--start-id must be a positive number: {args.start_id}")
    return args


def main() -> None:
    """Main function to clean an SVG file."""
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.loglevel.upper(), "WARNING"))

    options = CleanOptions.default()
    if args.style_to_attributes is not None:
        options.style_to_attributes = args.style_to_attributes

    document = SVGDocument.load(args.input, options=options)
    document.clean(start=args.start_id)
    if args.output is None:
        sys.stdout.write(document.tostring(indent=args.indent))
        sys.stdout.write("\n")
    else:
        document.save(args.output, indent=args.indent)


if __name__ == "__main__":
    main()
