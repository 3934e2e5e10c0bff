from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import __version__
from .config import CliConfig, load_config, merge_overrides
from .converter import convert
from .errors import MarkdownLiteError
from .utils import configure_logging, read_source, write_sink

CREDITS = f"""MarkdownLite {__version__}
A small grammar-driven Markdown to HTML converter.
Supports headers, thematic breaks, ordered and unordered lists,
fenced code blocks, paragraphs, bold, italic and links.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markdownlite",
        description="Convert constrained Markdown into HTML.",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("help", help="Show this help message")
    subparsers.add_parser("credits", help="Show project credits")

    parse = subparsers.add_parser("parse", help="Convert Markdown to HTML")
    parse.add_argument("-i", "--input", type=str, default=None, help="Markdown path, or - for stdin (default)")
    parse.add_argument("-o", "--output", type=str, default=None, help="HTML path, or - for stdout (default)")
    parse.add_argument("--config", type=str, default=None, help="YAML file with default options")
    parse.add_argument("--verbose", action="store_true", default=None, help="Enable debug logging")
    return parser


def run_parse(config: CliConfig) -> None:
    logging.info("Reading %s", config.input)
    markdown_text = read_source(config.input)

    logging.info("Converting markdown...")
    html = convert(markdown_text)

    logging.info("Writing %s", config.output)
    write_sink(config.output, html)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "help"):
        parser.print_help()
        return 0
    if args.command == "credits":
        print(CREDITS, end="")
        return 0

    configure_logging(verbose=bool(args.verbose))
    try:
        config = load_config(Path(args.config).expanduser()) if args.config else CliConfig()
        config = merge_overrides(config, input=args.input, output=args.output, verbose=args.verbose)
        if config.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        run_parse(config)
    except MarkdownLiteError as exc:
        logging.error("%s", exc)
        return 1
    logging.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
