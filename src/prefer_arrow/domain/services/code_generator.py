"""Renders the replacement source text for an eligible candidate."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from prefer_arrow.domain.config import ReturnStyle
from prefer_arrow.domain.constants import (
    CLASS_BODY_TYPE,
    OBJECT_TYPE,
    SEQUENCE_EXPRESSION_TYPE,
)
from prefer_arrow.domain.entities import (
    BodyShape,
    FunctionCandidate,
    FunctionDescriptor,
    FunctionKind,
    RewriteResult,
    SelectorTag,
    TextRange,
)
from prefer_arrow.domain.services.syntax import SyntaxQueries

if TYPE_CHECKING:
    from tree_sitter import Node


@dataclass
class ArrowFunctionBuilder:
    """
    Concatenates arrow fragments in a fixed order:
    prefix, ``async ``, type parameters, ``(params)``, return type, `` => ``, body, suffix.

    Fragments are plain strings; substituted source text is never re-scanned.
    """

    prefix: str = ""
    is_async: bool = False
    type_parameters: str = ""
    parameters: tuple[str, ...] = field(default_factory=tuple)
    return_type: str = ""
    body: str = ""
    suffix: str = ""

    def build(self) -> str:
        parts = [
            self.prefix,
            "async " if self.is_async else "",
            self.type_parameters,
            "(" + ", ".join(self.parameters) + ")",
            self.return_type,
            " => ",
            self.body,
            self.suffix,
        ]
        return "".join(parts)


class CodeGenerator:
    """Chooses the body text and the output shape, and returns one RewriteResult."""

    def render(
        self,
        candidate: FunctionCandidate,
        descriptor: FunctionDescriptor,
        return_style: ReturnStyle,
    ) -> RewriteResult:
        node = candidate.node
        builder = ArrowFunctionBuilder(
            is_async=descriptor.is_async,
            type_parameters=descriptor.type_parameters_text,
            parameters=descriptor.parameter_texts,
            return_type=descriptor.return_type_text,
            body=self.body_text(candidate, descriptor, return_style),
        )

        if candidate.selector == SelectorTag.PROPERTY_VALUE and candidate.entry is not None:
            return self._render_member(candidate.entry, descriptor, builder)

        if candidate.is_default_export:
            # `export default` stays in place; only the function node is replaced.
            if not self._followed_by_semicolon(node):
                builder.suffix = ";"
            return RewriteResult(builder.build(), TextRange(node.start_byte, node.end_byte))

        if candidate.kind == FunctionKind.DECLARATION:
            builder.prefix = f"const {descriptor.name} = "
            builder.suffix = ";"
        return RewriteResult(builder.build(), TextRange(node.start_byte, node.end_byte))

    def _render_member(
        self,
        entry: "Node",
        descriptor: FunctionDescriptor,
        builder: ArrowFunctionBuilder,
    ) -> RewriteResult:
        """Class members become fields (`name = arrow;`), object members keep `name: arrow`."""
        start, end = entry.start_byte, entry.end_byte
        parent = entry.parent
        if parent is not None and parent.type == CLASS_BODY_TYPE:
            prefix = " ".join((*descriptor.modifiers, descriptor.name))
            builder.prefix = f"{prefix} = "
            builder.suffix = ";"
            sibling = entry.next_sibling
            if sibling is not None and self._is_real_semicolon(sibling):
                end = sibling.end_byte
        else:
            builder.prefix = f"{descriptor.name}: "
        return RewriteResult(builder.build(), TextRange(start, end))

    def body_text(
        self,
        candidate: FunctionCandidate,
        descriptor: FunctionDescriptor,
        return_style: ReturnStyle,
    ) -> str:
        """Body text by priority: lifted return expression, wrapped expression, verbatim body."""
        body = descriptor.body
        shape = candidate.body_shape
        if shape == BodyShape.BLOCK_SINGLE_RETURN and return_style != ReturnStyle.EXPLICIT:
            expression = self._returned_expression(body)
            if expression is not None:
                return self._implicit_expression(expression)
        if shape == BodyShape.EXPRESSION_BODY and return_style != ReturnStyle.IMPLICIT:
            return "{ return " + SyntaxQueries.text(body) + " }"
        return SyntaxQueries.text(body)

    @staticmethod
    def _returned_expression(block: "Node") -> "Node | None":
        statements = SyntaxQueries.statements(block)
        if len(statements) != 1:
            return None
        arguments = SyntaxQueries.statements(statements[0])
        return arguments[0] if arguments else None

    @staticmethod
    def _implicit_expression(expression: "Node") -> str:
        text = SyntaxQueries.text(expression)
        if (
            expression.type in (OBJECT_TYPE, SEQUENCE_EXPRESSION_TYPE)
            or text.startswith("{")
        ):
            return f"({text})"
        return text

    @staticmethod
    def _is_real_semicolon(node: "Node") -> bool:
        return node.type == ";" and node.end_byte > node.start_byte

    def _followed_by_semicolon(self, node: "Node") -> bool:
        sibling = node.next_sibling
        return sibling is not None and self._is_real_semicolon(sibling)
