from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from idiff import __version__
from idiff.conf import DEFAULT_BLOCK_SIZE, DiffOptions
from idiff.image_diff.compare import compare_images, save_image
from idiff.image_diff.errors import ImageDiffError
from idiff.output import generate_output_file_name, write_report
from idiff.terminal import echo, paint

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="idiff",
        description="diff - for images (compares images pixel by pixel)",
    )
    p.add_argument("--src", required=True, metavar="SOURCE_FILE_NAME", help="source file name")
    p.add_argument("--tgt", required=True, metavar="TARGET_FILE_NAME", help="target file name")
    p.add_argument(
        "--strict",
        action="store_true",
        help="strict comparison (exits if dimensions are different)",
    )
    p.add_argument(
        "--highlight", action="store_true", help="highlight differences in a new file"
    )
    p.add_argument(
        "--block",
        type=int,
        default=None,
        help=f"pixel block size for highlighting difference [default: {DEFAULT_BLOCK_SIZE}]",
    )
    p.add_argument(
        "-o",
        "--output",
        metavar="OUTPUT_FILE_NAME",
        help="optional output file name (without extension)",
    )
    p.add_argument("--json-out", help="write the comparison report as JSON to this path")
    p.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return p


def parse_options(parser: argparse.ArgumentParser, argv: list[str] | None) -> DiffOptions:
    args = parser.parse_args(argv)

    if not args.highlight:
        if args.block is not None:
            parser.error("the following arguments require --highlight: --block")
        if args.output is not None:
            parser.error("the following arguments require --highlight: -o/--output")

    try:
        return DiffOptions(
            src=args.src,
            tgt=args.tgt,
            strict=args.strict,
            highlight=args.highlight,
            block_size=DEFAULT_BLOCK_SIZE if args.block is None else args.block,
            output=args.output,
            json_out=args.json_out,
            verbose=args.verbose,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        parser.error(f"invalid value for: {fields}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    options = parse_options(parser, argv)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not options.src.is_file() or not options.tgt.is_file():
        echo("Invalid values for src/tgt path. Please check and try again.", "red", err=True)
        return 1

    try:
        result = compare_images(
            options.src,
            options.tgt,
            block_size=options.block_size,
            strict=options.strict,
            highlight=options.highlight,
        )
    except ImageDiffError as e:
        logger.debug("idiff: comparison aborted", exc_info=True)
        echo(str(e), "red", err=True)
        return 1

    if options.json_out is not None:
        try:
            write_report(result, options.json_out)
        except ImageDiffError as e:
            logger.debug("idiff: failed to write report", exc_info=True)
            echo(str(e), "red", err=True)
            return 1

    report = result.report
    if not report.has_difference:
        echo("Comparison Completed. No difference observed between the images!", "green")
        return 0

    amount = paint(f"{report.percentage:.5f}%", "red", sys.stdout)
    echo(f"A difference of '{amount}' is observed between images.")
    if not options.highlight:
        echo(
            "(Difference highlighting is currently disabled. "
            "Try with 'highlight' flag to highlight the differences)",
            "yellow",
        )
        return 0

    highlighted = result.highlighted
    if highlighted is None:
        echo(
            "Encountered error while creating a copy of target image for highlighting.",
            "red",
            err=True,
        )
        return 1

    output = generate_output_file_name(options.output, options.tgt)
    try:
        save_image(highlighted, output)
    except ImageDiffError as e:
        logger.debug("idiff: failed to save highlighted image", exc_info=True)
        echo(str(e), "red", err=True)
        return 1

    echo(f"Output written into {output}", "green")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
