"""
Command line entry point for validating the structure of arf.json.
"""

import argparse
import logging
import sys
from typing import List, Optional

from arf_tools.config import ARF_PATH, VALIDATOR_VERSION
from arf_tools.exceptions import ArfParseError
from arf_tools.loader import load_tree
from arf_tools.renderer import Renderer
from arf_tools.utils.logging import setup_logger
from arf_tools.validator import JsonValidator


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Validate the structure of arf.json")

    parser.add_argument("--arf_path", default=str(ARF_PATH), help=f"Catalog file (default: {ARF_PATH})")
    parser.add_argument("--log_file", help="Write JSON-lines logs to this file")
    parser.add_argument("--verbose", action="store_true", help="List duplicate names in the report")
    parser.add_argument("--strict", action="store_true", help="Exit non-zero when structural validation fails")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 1 when the file cannot be parsed, 0 otherwise unless --strict
    """
    args = parse_arguments(argv)
    logger = setup_logger("arf_tools", args.log_file)

    print(f"Validating arf.json (Version: {VALIDATOR_VERSION})...")

    try:
        tree = load_tree(args.arf_path)
    except ArfParseError as e:
        logger.critical("Invalid JSON Syntax")
        logger.critical(str(e.original))
        return 1

    result = JsonValidator(logging.getLogger("arf_tools.validator")).validate(tree)

    if not result.valid:
        logger.error(f"Structure validation failed with {len(result.errors)} errors")

    print(Renderer().render_validation_report(result, verbose=args.verbose))

    if args.strict and not result.valid:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
