"""
Data model and traversal for the arf.json catalog tree.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

ROOT_PATH = "Root"
PATH_SEPARATOR = " > "

NODE_FOLDER = "folder"
NODE_URL = "url"


class ProbeStatus(str, Enum):
    """Outcome of probing a single URL."""
    ALIVE = "alive"
    DEAD = "dead"
    TIMEOUT = "timeout"
    ERROR = "error"
    INVALID_URL = "invalid_url"


@dataclass(frozen=True)
class WorkItem:
    """
    A url node flattened out of the tree, queued for probing.
    """
    name: str
    url: str
    path: str


@dataclass(frozen=True)
class CheckResult:
    """
    Classification of one probe.
    """
    status: ProbeStatus
    code: Optional[int] = None
    error: Optional[str] = None

    @property
    def is_alive(self) -> bool:
        return self.status is ProbeStatus.ALIVE


@dataclass(frozen=True)
class DeadLink:
    """
    A WorkItem whose probe came back anything other than alive.
    """
    name: str
    url: str
    path: str
    reason: ProbeStatus
    code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def from_result(cls, item: WorkItem, result: CheckResult) -> 'DeadLink':
        """Create from a work item and its probe result."""
        return cls(
            name=item.name,
            url=item.url,
            path=item.path,
            reason=result.status,
            code=result.code,
            error=result.error,
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "url": self.url,
            "path": self.path,
            "reason": self.reason.value,
            "code": self.code,
            "error": self.error,
        }


@dataclass
class LinkCheckReport:
    """
    Totals of a finished link-check run.
    """
    total: int
    checked: int = 0
    peak_in_flight: int = 0
    dead_links: List[DeadLink] = field(default_factory=list)


def child_path(path: str, parent_name: Any) -> str:
    """Extend a breadcrumb path with the name of the node being descended into."""
    return f"{path}{PATH_SEPARATOR}{parent_name}"


def _always(node: Dict) -> bool:
    return True


def walk_tree(
    nodes: Iterable[Any],
    path: str = ROOT_PATH,
    descend: Callable[[Dict], bool] = _always,
) -> Iterator[Tuple[Any, str]]:
    """
    Walk a list of sibling nodes depth first, in array order.

    Every entry is yielded exactly once together with its breadcrumb path.
    Children are only visited when they form a list and ``descend(node)`` is
    true; entries that are not JSON objects are yielded but never descended
    into.

    Args:
        nodes: Sibling nodes, usually the root's ``children``
        path: Breadcrumb path of the siblings
        descend: Predicate deciding whether a node's children are visited

    Yields:
        ``(node, path)`` pairs in pre-order
    """
    for node in nodes:
        yield node, path

        if not isinstance(node, dict):
            continue

        children = node.get("children")
        if isinstance(children, list) and children and descend(node):
            yield from walk_tree(children, child_path(path, node.get("name")), descend)


def root_children(tree: Any) -> List[Any]:
    """Return the top-level nodes of a parsed catalog, or an empty list."""
    if not isinstance(tree, dict):
        return []
    children = tree.get("children")
    return children if isinstance(children, list) else []


def collect_work_items(tree: Dict) -> List[WorkItem]:
    """
    Flatten every url node with a non-empty ``url`` into a worklist.

    The order is traversal order. Repeated URLs are kept, each one is
    checked on its own.

    Args:
        tree: Parsed catalog

    Returns:
        List of work items
    """
    items = []
    for node, path in walk_tree(root_children(tree)):
        if not isinstance(node, dict):
            continue
        if node.get("type") == NODE_URL and node.get("url"):
            items.append(WorkItem(name=node.get("name"), url=node["url"], path=path))
    return items
