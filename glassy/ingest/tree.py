"""Depth-first search over parsed HTML documents.

Scrapers describe the nodes they want with predicates and never touch the HTML
library directly; a Tree adapter supplies children, attributes and text.
"""

from collections.abc import Callable, Iterator, Sequence
from typing import Any, Protocol

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString


class Tree(Protocol):
    def children(self, node: Any) -> Sequence[Any]: ...

    def attribute(self, node: Any, name: str) -> str | None: ...

    def text(self, node: Any) -> str | None:
        """Return the node's data if it is a text node, otherwise None."""
        ...


Predicate = Callable[[Tree, Any], bool]


class SoupTree:
    """Tree adapter for BeautifulSoup documents."""

    def children(self, node: Any) -> Sequence[Any]:
        if isinstance(node, Tag):
            return node.contents
        return ()

    def attribute(self, node: Any, name: str) -> str | None:
        if not isinstance(node, Tag):
            return None
        value = node.get(name)
        # Multi-valued attributes such as class come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text(self, node: Any) -> str | None:
        # Comments, doctypes and CDATA are strings too, but not text
        if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            return str(node)
        return None


SOUP = SoupTree()


def parse_html(markup: str | bytes) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def iter_descendants(tree: Tree, node: Any) -> Iterator[Any]:
    """Yield every descendant of node in depth-first pre-order."""
    stack = list(reversed(tree.children(node)))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(tree.children(current)))


def find_all(tree: Tree, node: Any, *predicates: Predicate) -> list[Any]:
    return [
        n for n in iter_descendants(tree, node)
        if all(p(tree, n) for p in predicates)
    ]


def find_first(tree: Tree, node: Any, *predicates: Predicate) -> Any | None:
    for n in iter_descendants(tree, node):
        if all(p(tree, n) for p in predicates):
            return n
    return None


def has_attribute(name: str, value: str | None = None) -> Predicate:
    def match(tree: Tree, node: Any) -> bool:
        actual = tree.attribute(node, name)
        if actual is None:
            return False
        return value is None or actual == value

    return match


def has_class(value: str) -> Predicate:
    """Match nodes whose whole class attribute equals value."""
    return has_attribute("class", value)


def has_class_containing(*names: str) -> Predicate:
    """Match nodes whose class list includes every one of names."""

    def match(tree: Tree, node: Any) -> bool:
        actual = tree.attribute(node, "class")
        if actual is None:
            return False
        tokens = actual.split()
        return all(name in tokens for name in names)

    return match


def is_text() -> Predicate:
    return lambda tree, node: tree.text(node) is not None


def first_child(tree: Tree, node: Any) -> Any | None:
    """First child of node, skipping whitespace-only text between tags."""
    for child in tree.children(node):
        data = tree.text(child)
        if data is not None and not data.strip():
            continue
        return child
    return None


def text_of(tree: Tree, node: Any) -> str | None:
    """Data of node's first child when that child is a text node."""
    child = first_child(tree, node)
    if child is None:
        return None
    return tree.text(child)


def collect_text(tree: Tree, node: Any) -> str:
    """Concatenate every descendant text node of node."""
    return "".join(
        tree.text(n) for n in iter_descendants(tree, node)
        if tree.text(n) is not None
    )
