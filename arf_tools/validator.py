"""
Structural validator for the arf.json catalog tree.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from arf_tools.tree import NODE_FOLDER, NODE_URL, ROOT_PATH, root_children, walk_tree


@dataclass(frozen=True)
class StructuralError:
    """A required field missing from a node."""
    message: str
    path: str
    name: Optional[str] = None


@dataclass(frozen=True)
class DuplicateUrl:
    """A url node whose URL was already seen earlier in the tree."""
    name: Optional[str]
    url: str


@dataclass
class ValidationResult:
    """
    Outcome of validating one catalog.

    Duplicates are advisory only; ``valid`` reflects structural errors.
    """
    valid: bool = True
    errors: List[StructuralError] = field(default_factory=list)
    duplicate_urls: List[DuplicateUrl] = field(default_factory=list)
    duplicate_names: List[str] = field(default_factory=list)
    root_missing_type: bool = False


def _is_folder(node: Dict) -> bool:
    return node.get("type") == NODE_FOLDER


def _is_list_or_absent(children: Any) -> bool:
    return children is None or isinstance(children, list)


class JsonValidator:
    """
    Validator for the structure of a parsed catalog.

    Every node needs a ``name`` and a ``type``, and ``url`` nodes need a
    ``url``. Duplicate names and URLs across the whole tree are collected as
    warnings. Only the children of folder nodes are visited.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the validator.

        Args:
            logger: Logger used to report errors as they are found
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, tree: Any) -> ValidationResult:
        """
        Validate a parsed catalog without raising on structural problems.

        Args:
            tree: Parsed arf.json document

        Returns:
            Validation result with errors and duplicate lists
        """
        result = ValidationResult()
        name_count: Counter = Counter()
        seen_urls: Set[str] = set()

        # The root only gets a type check, and only as a warning
        if not isinstance(tree, dict) or not tree.get("type"):
            self.logger.warning("Root missing type.")
            result.root_missing_type = True

        if isinstance(tree, dict) and not _is_list_or_absent(tree.get("children")):
            self._error(result, "Root children is not a list", ROOT_PATH)

        for node, path in walk_tree(root_children(tree), descend=_is_folder):
            if not isinstance(node, dict):
                self._error(result, f"Node is not an object at {path}", path)
                continue

            self._validate_node(node, path, result, name_count, seen_urls)

        self.logger.info(
            f"Validated catalog: {len(result.errors)} errors, "
            f"{len(result.duplicate_urls)} duplicate URLs, "
            f"{len(result.duplicate_names)} duplicate names"
        )

        return result

    def _validate_node(
        self,
        node: Dict,
        path: str,
        result: ValidationResult,
        name_count: Counter,
        seen_urls: Set[str],
    ) -> None:
        name = node.get("name")

        if not name:
            self._error(result, f"Node missing name at {path}", path)
        else:
            key = str(name)
            name_count[key] += 1
            # Recorded once, on the first repeat
            if name_count[key] == 2:
                result.duplicate_names.append(key)

        node_type = node.get("type")
        if not node_type:
            self._error(result, f"Node '{name}' missing type at {path}", path, name)

        if node_type == NODE_FOLDER and not _is_list_or_absent(node.get("children")):
            self._error(result, f"Node '{name}' children is not a list at {path}", path, name)

        if node_type == NODE_URL:
            url = node.get("url")
            if not url:
                self._error(result, f"Node '{name}' is type 'url' but missing url field at {path}", path, name)
                return

            key = str(url)
            if key in seen_urls:
                result.duplicate_urls.append(DuplicateUrl(name=name, url=key))
            seen_urls.add(key)

    def _error(self, result: ValidationResult, message: str, path: str, name: Optional[str] = None) -> None:
        self.logger.error(message)
        result.errors.append(StructuralError(message=message, path=path, name=name))
        result.valid = False
