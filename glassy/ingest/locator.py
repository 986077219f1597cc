"""Locate the forecast table and the issue banner in a forecast page."""

from typing import Any

from glassy.ingest.errors import StructureNotFound, UnexpectedFormat
from glassy.ingest.tree import Predicate, Tree, find_all, has_class

TABLE_CLASS = "forecast-table__basic"
ISSUE_CLASS = "break-header-dynamic__issued"


def _find_single(tree: Tree, document: Any, what: str, predicate: Predicate) -> Any:
    nodes = find_all(tree, document, predicate)
    if not nodes:
        raise StructureNotFound(f"could not find {what} node")
    if len(nodes) > 1:
        raise UnexpectedFormat(f"found {len(nodes)} {what} nodes, want 1")
    return nodes[0]


def find_table(tree: Tree, document: Any) -> Any:
    return _find_single(tree, document, "table", has_class(TABLE_CLASS))


def find_issue_text(tree: Tree, document: Any) -> str:
    """Trailing text of the issue banner, e.g. "Surf forecast was issued at ..."."""
    node = _find_single(tree, document, "issue", has_class(ISSUE_CLASS))
    children = tree.children(node)
    text = tree.text(children[-1]) if children else None
    if text is None:
        raise StructureNotFound("could not find issue text node")
    return text
