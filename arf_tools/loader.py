"""
Loading of the catalog file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from arf_tools.exceptions import ArfParseError

logger = logging.getLogger(__name__)


def load_tree(path: Union[str, Path]) -> Any:
    """
    Read and parse the catalog JSON file.

    Args:
        path: Path to arf.json

    Returns:
        The parsed document

    Raises:
        ArfParseError: If the file cannot be read or is not valid JSON
    """
    path = Path(path)
    logger.debug(f"Loading {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        # ValueError covers JSONDecodeError and undecodable bytes
        raise ArfParseError(str(path), e) from e
