"""Node classifier: resolve a visited tree-sitter node to a FunctionCandidate, or None."""

from typing import TYPE_CHECKING

from prefer_arrow.domain.constants import (
    ACCESSOR_TOKENS,
    ARROW_FUNCTION_TYPE,
    ASSIGNMENT_TYPES,
    CLASS_BODY_TYPE,
    EXPORT_STATEMENT_TYPE,
    FIELD_DEFINITION_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    GENERATOR_TYPES,
    MEMBER_EXPRESSION_TYPE,
    METHOD_DEFINITION_TYPE,
    NAMED_KEY_TYPES,
    PAIR_TYPE,
    PROTOTYPE_PROPERTY,
    RETURN_STATEMENT_TYPE,
    STATEMENT_BLOCK_TYPE,
)
from prefer_arrow.domain.entities import (
    BodyShape,
    ContextTag,
    FunctionCandidate,
    FunctionKind,
    SelectorTag,
)
from prefer_arrow.domain.services.syntax import SyntaxQueries

if TYPE_CHECKING:
    from tree_sitter import Node


class NodeClassifier:
    """
    Maps the five visited node shapes onto candidates.

    1. function declaration/expression under ``export default``
    2. named, non-accessor method / object pair / class field whose value is a function
    3. arrow function with an expression body
    4. arrow function whose block body is a single return
    5. any other function expression or declaration
    Anything else (generators as values of pairs, getters, string keys, ...) is None.
    """

    def classify(self, node: "Node") -> FunctionCandidate | None:
        """Return the candidate for node, or None when the node is not one of the five shapes."""
        if not node.is_named:
            return None
        node_type = node.type
        if node_type == METHOD_DEFINITION_TYPE:
            return self._classify_method(node)
        if node_type == ARROW_FUNCTION_TYPE:
            return self._classify_arrow(node)
        if node_type in FUNCTION_DECLARATION_TYPES or node_type in FUNCTION_EXPRESSION_TYPES:
            return self._classify_function(node)
        return None

    # --- shapes -------------------------------------------------------------

    def _classify_function(self, node: "Node") -> FunctionCandidate | None:
        body = SyntaxQueries.field(node, "body")
        if body is None:
            return None
        parent = node.parent
        is_expression = node.type in FUNCTION_EXPRESSION_TYPES

        if parent is not None and self._is_default_export(parent):
            return self._build(
                node,
                kind=FunctionKind.DECLARATION,
                selector=SelectorTag.DEFAULT_EXPORT,
                is_default_export=True,
            )

        if is_expression and parent is not None and (
            parent.type == PAIR_TYPE or parent.type in FIELD_DEFINITION_TYPES
        ):
            return self._classify_property_value(node, parent)

        return self._build(
            node,
            kind=FunctionKind.EXPRESSION if is_expression else FunctionKind.DECLARATION,
            selector=SelectorTag.PLAIN_FUNCTION,
        )

    def _classify_property_value(self, node: "Node", entry: "Node") -> FunctionCandidate | None:
        """pair / class field holding a function expression. Only the value slot counts."""
        value_field = "value"
        value = SyntaxQueries.field(entry, value_field)
        if value is None or value != node:
            return None
        key = SyntaxQueries.field(entry, "key") or SyntaxQueries.field(entry, "name") or SyntaxQueries.field(entry, "property")
        if key is None or key.type not in NAMED_KEY_TYPES:
            return None
        return self._build(
            node,
            kind=self._member_kind(entry),
            selector=SelectorTag.PROPERTY_VALUE,
            name=SyntaxQueries.text(key),
            entry=entry,
        )

    def _classify_method(self, node: "Node") -> FunctionCandidate | None:
        name = SyntaxQueries.field(node, "name")
        if name is None or name.type not in NAMED_KEY_TYPES:
            return None
        if SyntaxQueries.field(node, "body") is None:
            return None
        leading = {t.type for t in SyntaxQueries.tokens_before(node, name)}
        if leading & ACCESSOR_TOKENS:
            return None
        return self._build(
            node,
            kind=self._member_kind(node),
            selector=SelectorTag.PROPERTY_VALUE,
            name=SyntaxQueries.text(name),
            entry=node,
            is_generator="*" in leading,
        )

    def _classify_arrow(self, node: "Node") -> FunctionCandidate | None:
        body = SyntaxQueries.field(node, "body")
        if body is None:
            return None
        if body.type != STATEMENT_BLOCK_TYPE:
            selector = SelectorTag.ARROW_EXPRESSION_BODY
        elif self._single_return(body) is not None:
            selector = SelectorTag.ARROW_SINGLE_RETURN
        else:
            return None
        return self._build(node, kind=FunctionKind.ARROW, selector=selector)

    # --- shared facts ---------------------------------------------------------

    def _build(
        self,
        node: "Node",
        *,
        kind: FunctionKind,
        selector: SelectorTag,
        name: str | None = None,
        entry: "Node | None" = None,
        is_default_export: bool = False,
        is_generator: bool = False,
    ) -> FunctionCandidate:
        if name is None:
            name = SyntaxQueries.text(SyntaxQueries.field(node, "name"))
        return FunctionCandidate(
            node=node,
            kind=kind,
            selector=selector,
            body_shape=self.body_shape(node),
            context=self.ancestor_context(node),
            is_async=self.is_async(node),
            is_generator=is_generator or self.is_generator(node),
            name=name,
            is_default_export=is_default_export,
            entry=entry,
        )

    @staticmethod
    def _member_kind(entry: "Node") -> FunctionKind:
        parent = entry.parent
        if parent is not None and parent.type == CLASS_BODY_TYPE:
            return FunctionKind.CLASS_METHOD
        return FunctionKind.OBJECT_METHOD

    @staticmethod
    def _is_default_export(parent: "Node") -> bool:
        if parent.type != EXPORT_STATEMENT_TYPE:
            return False
        return any(child.type == "default" for child in parent.children)

    @staticmethod
    def _single_return(block: "Node") -> "Node | None":
        statements = SyntaxQueries.statements(block)
        if len(statements) == 1 and statements[0].type == RETURN_STATEMENT_TYPE:
            return statements[0]
        return None

    @staticmethod
    def return_argument(return_statement: "Node") -> "Node | None":
        """Expression returned by a return statement (None for a bare ``return;``)."""
        args = SyntaxQueries.statements(return_statement)
        return args[0] if args else None

    def body_shape(self, node: "Node") -> BodyShape:
        body = SyntaxQueries.field(node, "body")
        if body is None or body.type != STATEMENT_BLOCK_TYPE:
            return BodyShape.EXPRESSION_BODY
        ret = self._single_return(body)
        if ret is not None and self.return_argument(ret) is not None:
            return BodyShape.BLOCK_SINGLE_RETURN
        return BodyShape.BLOCK_MULTI_STATEMENT

    @staticmethod
    def _header_tokens(node: "Node") -> list["Node"]:
        """Children ahead of the parameter list (async, function, *, modifiers, name)."""
        stop = SyntaxQueries.field(node, "parameters") or SyntaxQueries.field(node, "parameter")
        return SyntaxQueries.tokens_before(node, stop)

    def is_async(self, node: "Node") -> bool:
        return any(t.type == "async" for t in self._header_tokens(node))

    def is_generator(self, node: "Node") -> bool:
        if node.type in GENERATOR_TYPES:
            return True
        return any(t.type == "*" for t in self._header_tokens(node))

    def ancestor_context(self, node: "Node") -> ContextTag:
        """
        Single upward walk. Prototype assignment anywhere up the chain wins over class body.
        """
        within_class_body = False
        for ancestor in SyntaxQueries.ancestors(node):
            if ancestor.type in ASSIGNMENT_TYPES:
                tag = self._prototype_tag(SyntaxQueries.field(ancestor, "left"))
                if tag is not None:
                    return tag
            elif ancestor.type == CLASS_BODY_TYPE:
                within_class_body = True
        return ContextTag.WITHIN_CLASS_BODY if within_class_body else ContextTag.NONE

    @staticmethod
    def _prototype_tag(left: "Node | None") -> ContextTag | None:
        if left is None or left.type != MEMBER_EXPRESSION_TYPE:
            return None
        prop = SyntaxQueries.field(left, "property")
        if SyntaxQueries.text(prop) == PROTOTYPE_PROPERTY:
            return ContextTag.PROTOTYPE_ASSIGN_TARGET
        obj = SyntaxQueries.field(left, "object")
        if obj is not None and obj.type == MEMBER_EXPRESSION_TYPE:
            if SyntaxQueries.text(SyntaxQueries.field(obj, "property")) == PROTOTYPE_PROPERTY:
                return ContextTag.PROTOTYPE_MUTATION_TARGET
        return None
