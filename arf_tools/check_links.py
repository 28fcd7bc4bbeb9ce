"""
Command line entry point for checking the URLs in arf.json for dead links.
"""

import argparse
import sys
from typing import List, Optional

from arf_tools.config import ARF_PATH, CONCURRENCY, TIMEOUT_MS, CheckerSettings
from arf_tools.exceptions import ArfParseError
from arf_tools.link_checker import LinkChecker
from arf_tools.loader import load_tree
from arf_tools.renderer import Renderer
from arf_tools.tree import collect_work_items
from arf_tools.utils.logging import setup_logger


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Check the URLs in arf.json for dead links")

    parser.add_argument("--arf_path", default=str(ARF_PATH), help=f"Catalog file (default: {ARF_PATH})")
    parser.add_argument("--concurrency", type=int, default=CONCURRENCY,
                        help=f"Probes in flight at once (default: {CONCURRENCY})")
    parser.add_argument("--timeout_ms", type=int, default=TIMEOUT_MS,
                        help=f"Per-probe timeout in milliseconds (default: {TIMEOUT_MS})")
    parser.add_argument("--follow_redirects", action="store_true",
                        help="Follow redirects instead of treating 3xx as alive")
    parser.add_argument("--output_json", help="Also save dead links to this JSON file")
    parser.add_argument("--log_file", help="Write JSON-lines logs to this file")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code, always 0; dead links are reported, not treated as failure
    """
    args = parse_arguments(argv)
    logger = setup_logger("arf_tools", args.log_file)

    print("Loading arf.json...")

    try:
        settings = CheckerSettings(
            concurrency=args.concurrency,
            timeout_ms=args.timeout_ms,
            follow_redirects=args.follow_redirects,
        )
        tree = load_tree(args.arf_path)
    except (ArfParseError, ValueError) as e:
        logger.error(f"Error: {str(e)}", exc_info=True)
        return 0

    items = collect_work_items(tree)
    print(f"Found {len(items)} URLs to check.")
    print(f"Starting checks with concurrency {settings.concurrency}...")

    report = LinkChecker(settings).check(items)

    renderer = Renderer()
    print(renderer.render_link_report(report))

    if args.output_json:
        renderer.save_dead_links(report, args.output_json)

    return 0


if __name__ == "__main__":
    sys.exit(main())
