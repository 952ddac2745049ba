"""Reads the verbatim source slices a rewrite needs. Nothing here interprets code."""

from typing import TYPE_CHECKING

from prefer_arrow.domain.constants import (
    ARROW_FUNCTION_TYPE,
    CLASS_BODY_TYPE,
    COMMENT_TYPES,
    DROPPED_MEMBER_TOKENS,
)
from prefer_arrow.domain.entities import FunctionCandidate, FunctionDescriptor, FunctionKind
from prefer_arrow.domain.services.syntax import SyntaxQueries

if TYPE_CHECKING:
    from tree_sitter import Node


class DescriptorExtractor:
    """Builds a FunctionDescriptor for an eligible candidate."""

    def extract(self, candidate: FunctionCandidate) -> FunctionDescriptor:
        node = candidate.node
        body = SyntaxQueries.field(node, "body")
        if body is None:
            raise ValueError(f"{node.type} at byte {node.start_byte} has no body")
        return FunctionDescriptor(
            name=candidate.name,
            is_async=candidate.is_async,
            parameter_texts=self.parameter_texts(node),
            body=body,
            return_type_text=self.return_type_text(candidate),
            type_parameters_text=SyntaxQueries.text(SyntaxQueries.field(node, "type_parameters")),
            modifiers=self.member_modifiers(candidate),
        )

    @staticmethod
    def parameter_texts(node: "Node") -> tuple[str, ...]:
        """Per-parameter source slices. A bare arrow parameter (``x => ...``) is one slice."""
        bare = SyntaxQueries.field(node, "parameter")
        if bare is not None:
            return (SyntaxQueries.text(bare),)
        params = SyntaxQueries.field(node, "parameters")
        if params is None:
            return ()
        return tuple(
            SyntaxQueries.text(p) for p in params.named_children if p.type not in COMMENT_TYPES
        )

    @staticmethod
    def return_type_text(candidate: FunctionCandidate) -> str:
        """
        Return type annotation (``: T``) for declarations, default exports and arrows.

        Expressions and methods drop theirs; the surrounding binding carries the type.
        """
        keeps_type = (
            candidate.kind in (FunctionKind.DECLARATION, FunctionKind.ARROW)
            or candidate.is_default_export
        )
        if not keeps_type:
            return ""
        return SyntaxQueries.text(SyntaxQueries.field(candidate.node, "return_type"))

    @staticmethod
    def member_modifiers(candidate: FunctionCandidate) -> tuple[str, ...]:
        """Decorators, static, accessibility, override and readonly ahead of a class member name."""
        entry = candidate.entry
        if entry is None or entry.type == ARROW_FUNCTION_TYPE:
            return ()
        parent = entry.parent
        if parent is None or parent.type != CLASS_BODY_TYPE:
            return ()
        name = (
            SyntaxQueries.field(entry, "name")
            or SyntaxQueries.field(entry, "key")
            or SyntaxQueries.field(entry, "property")
        )
        return tuple(
            SyntaxQueries.text(token)
            for token in SyntaxQueries.tokens_before(entry, name)
            if token.type not in DROPPED_MEMBER_TOKENS and token.type not in COMMENT_TYPES
        )
