"""Read-only queries over tree-sitter nodes shared by the classifier, analyzer and extractor."""

from collections.abc import Iterator
from typing import TYPE_CHECKING

from prefer_arrow.domain.constants import COMMENT_TYPES

if TYPE_CHECKING:
    from tree_sitter import Node


class SyntaxQueries:
    """
    Stateless helpers. Never raise on odd shapes: missing fields come back as None or "".

    No top-level functions: callers go through the class.
    """

    @staticmethod
    def text(node: "Node | None") -> str:
        """Verbatim source text of a node (empty for None)."""
        if node is None or node.text is None:
            return ""
        return node.text.decode("utf-8")

    @staticmethod
    def field(node: "Node | None", name: str) -> "Node | None":
        if node is None:
            return None
        return node.child_by_field_name(name)

    @staticmethod
    def statements(block: "Node") -> list["Node"]:
        """Named children of a block, comments excluded."""
        return [c for c in block.named_children if c.type not in COMMENT_TYPES]

    @staticmethod
    def tokens_before(node: "Node", stop: "Node | None") -> list["Node"]:
        """Direct children of node that precede ``stop`` (all children when stop is None)."""
        out: list["Node"] = []
        for child in node.children:
            if stop is not None and child.start_byte >= stop.start_byte:
                break
            out.append(child)
        return out

    @staticmethod
    def walk(node: "Node") -> Iterator["Node"]:
        """Pre-order traversal of node and its descendants. Iterative, no recursion limit."""
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    @staticmethod
    def ancestors(node: "Node") -> Iterator["Node"]:
        """Parent, grandparent, ... up to the root."""
        current = node.parent
        while current is not None:
            yield current
            current = current.parent
