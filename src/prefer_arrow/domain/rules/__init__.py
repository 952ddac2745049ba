"""Domain models for rules and violations."""

from dataclasses import dataclass

__all__ = [
    "Checkable",
    "Violation",
]

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tree_sitter import Node

    from prefer_arrow.domain.entities import RewriteResult


@dataclass(frozen=True)
class Violation:
    """A rule violation with code, message, location and its single fix."""

    code: str
    message: str
    location: str
    node: "Node"
    fix: "RewriteResult"
    fixable: bool = True

    @staticmethod
    def _location_from_node(node: "Node", file_path: str) -> str:
        """Compute path:line:column from a tree-sitter node. Used by from_node."""
        row, column = node.start_point
        return f"{file_path}:{row + 1}:{column}"

    @classmethod
    def from_node(
        cls,
        *,
        code: str,
        message: str,
        node: "Node",
        fix: "RewriteResult",
        file_path: str = "",
    ) -> "Violation":
        """Build a Violation with location derived from node. Prefer over manual location=."""
        return cls(
            code=code,
            message=message,
            location=cls._location_from_node(node, file_path),
            node=node,
            fix=fix,
        )

    @property
    def line(self) -> int:
        return self.node.start_point[0] + 1


class Checkable(Protocol):
    """One-and-done check: given a node, return violations."""

    code: str
    description: str

    def check(self, node: "Node", file_path: str = "") -> list[Violation]:
        """Interrogate a node. Nodes the rule does not care about yield []."""
        ...
