#!/usr/bin/env python3
"""
Parse a single menu page and print what the extractor sees.

Usage examples:
  python3 -m menuweek.scripts.parse_page --file sample_menu.html
  python3 -m menuweek.scripts.parse_page --url https://www.akafoe.de/gastronomie/speiseplaene-der-mensen/q-west/ -o q-west.json

"""

import argparse
import logging
import sys
from pathlib import Path

from menuweek.fetch import fetch_document
from menuweek.parser import load_html_from_file, parse_menu_page
from menuweek.store import serialize_document, write_if_changed


def main() -> None:
    arg_parser = argparse.ArgumentParser()
    arg_parser.add_argument("--file", help="Read HTML from file")
    arg_parser.add_argument("--url", help="Fetch HTML from URL")
    arg_parser.add_argument(
        "--output", "-o", default=None, help="Output JSON file (default: stdout)"
    )
    args = arg_parser.parse_args()
    if not args.file and not args.url:
        arg_parser.error("provide --file or --url")

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.file:
        html = load_html_from_file(args.file)
    else:
        html = fetch_document(args.url)

    parsed = parse_menu_page(html).to_dict()

    if args.output:
        write_if_changed(Path(args.output), parsed)
        print(f"Wrote {len(parsed['days'])} days to {args.output}")
    else:
        sys.stdout.write(serialize_document(parsed))


if __name__ == "__main__":
    main()
