"""Traversal helpers for syntax trees, modelled on the stdlib ast module."""

import dataclasses
from collections import deque
from collections.abc import Iterator

from shadowcheck.syntax.nodes import Node


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of node in source order.

    Children are the dataclass fields holding a Node or a tuple of Nodes;
    fields are declared in source order, so the result is too.
    """
    for node_field in dataclasses.fields(node):  # pyright: ignore[reportArgumentType]
        value = getattr(node, node_field.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, tuple):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all of its descendants in pre-order."""
    stack: deque[Node] = deque([node])
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))


class NodeVisitor:
    """Walks a syntax tree calling visit_<ClassName> for every node.

    Subclasses override visit_* methods for the node classes they care about
    and call generic_visit to continue into the children.
    """

    def visit(self, node: Node) -> None:
        """Dispatch to the visit method for this node's class."""
        visitor = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        visitor(node)

    def generic_visit(self, node: Node) -> None:
        """Visit every child of node."""
        for child in iter_child_nodes(node):
            self.visit(child)
