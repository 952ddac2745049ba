"""Safety analysis: may a candidate be rewritten as an arrow without changing its meaning?"""

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from prefer_arrow.domain.config import Options, ReturnStyle
from prefer_arrow.domain.constants import (
    ARGUMENTS_IDENTIFIER,
    CONSTRUCTOR_NAME,
    IDENTIFIER_TYPES,
    MEMBER_EXPRESSION_TYPE,
    META_PROPERTY_TYPE,
    METHOD_DEFINITION_TYPE,
    OPTIONAL_MARKER,
    SUPER_TYPE,
    THIS_TYPES,
    USE_ARROW_WHEN_FUNCTION,
    USE_ARROW_WHEN_SINGLE_RETURN,
    USE_EXPLICIT,
    USE_IMPLICIT,
)
from prefer_arrow.domain.entities import (
    ContextTag,
    FunctionCandidate,
    FunctionKind,
    SelectorTag,
    TransformationDecision,
)
from prefer_arrow.domain.services.syntax import SyntaxQueries

if TYPE_CHECKING:
    from tree_sitter import Node

Handler = Callable[[FunctionCandidate, Options], TransformationDecision]

# Method parts that belong to the function itself; the key is not scanned.
_METHOD_SCAN_FIELDS: tuple[str, ...] = ("type_parameters", "parameters", "return_type", "body")


class SafetyAnalyzer:
    """
    Decides eligibility per SelectorTag through a dispatch table.

    Every blocking condition produces TransformationDecision.skip(reason); an eligible
    candidate carries exactly one message identifier.
    """

    def __init__(self) -> None:
        self._handlers: dict[SelectorTag, Handler] = {
            SelectorTag.DEFAULT_EXPORT: self._decide_function,
            SelectorTag.PLAIN_FUNCTION: self._decide_function,
            SelectorTag.PROPERTY_VALUE: self._decide_property,
            SelectorTag.ARROW_EXPRESSION_BODY: self._decide_arrow_expression_body,
            SelectorTag.ARROW_SINGLE_RETURN: self._decide_arrow_single_return,
        }
        missing = [tag.value for tag in SelectorTag if tag not in self._handlers]
        if missing:
            raise RuntimeError(f"SafetyAnalyzer has no handler for: {', '.join(missing)}")

    def decide(self, candidate: FunctionCandidate, options: Options) -> TransformationDecision:
        """Run the handler registered for the candidate's selector."""
        return self._handlers[candidate.selector](candidate, options)

    # --- handlers -------------------------------------------------------------

    def _decide_function(self, candidate: FunctionCandidate, options: Options) -> TransformationDecision:
        blocked = self.blocking_reason(candidate, options)
        if blocked:
            return TransformationDecision.skip(blocked)
        gated = self._single_return_gate(candidate, options)
        if gated:
            return TransformationDecision.skip(gated)
        return TransformationDecision.report(self.message_for(candidate, options))

    def _decide_property(self, candidate: FunctionCandidate, options: Options) -> TransformationDecision:
        in_class = (
            candidate.kind == FunctionKind.CLASS_METHOD
            or candidate.context == ContextTag.WITHIN_CLASS_BODY
        )
        if in_class and not options.class_properties_allowed:
            return TransformationDecision.skip("class-body")
        if candidate.kind == FunctionKind.CLASS_METHOD and candidate.name == CONSTRUCTOR_NAME:
            return TransformationDecision.skip("constructor")
        if candidate.entry is not None and self._is_optional_member(candidate.entry):
            # `foo?()` has no arrow counterpart that keeps the member optional.
            return TransformationDecision.skip("optional-member")
        return self._decide_function(candidate, options)

    def _decide_arrow_expression_body(
        self, candidate: FunctionCandidate, options: Options
    ) -> TransformationDecision:
        if options.return_style != ReturnStyle.EXPLICIT:
            return TransformationDecision.skip("return-style")
        blocked = self.blocking_reason(candidate, options)
        if blocked:
            return TransformationDecision.skip(blocked)
        return TransformationDecision.report(USE_EXPLICIT)

    def _decide_arrow_single_return(
        self, candidate: FunctionCandidate, options: Options
    ) -> TransformationDecision:
        if options.return_style != ReturnStyle.IMPLICIT:
            return TransformationDecision.skip("return-style")
        if not candidate.returns_immediately:
            # `return;` has nothing to lift into an expression body.
            return TransformationDecision.skip("empty-return")
        blocked = self.blocking_reason(candidate, options)
        if blocked:
            return TransformationDecision.skip(blocked)
        return TransformationDecision.report(USE_IMPLICIT)

    # --- shared checks ----------------------------------------------------------

    def blocking_reason(self, candidate: FunctionCandidate, options: Options) -> str | None:
        """Name of the first condition that makes conversion unsafe, or None."""
        if candidate.is_generator:
            return "generator"
        for node in self._scan(candidate.node):
            reason = self._unsafe_node(node)
            if reason:
                return reason
        if candidate.context.is_prototype and not options.disallow_prototype:
            return "prototype-assignment"
        return None

    @staticmethod
    def _single_return_gate(candidate: FunctionCandidate, options: Options) -> str | None:
        if not options.single_return_only:
            return None
        if not candidate.returns_immediately:
            return "not-single-return"
        if candidate.is_named_default_export:
            return "named-default-export"
        return None

    @staticmethod
    def message_for(candidate: FunctionCandidate, options: Options) -> str:
        if options.single_return_only and candidate.returns_immediately:
            return USE_ARROW_WHEN_SINGLE_RETURN
        return USE_ARROW_WHEN_FUNCTION

    @staticmethod
    def _is_optional_member(entry: "Node") -> bool:
        return any(child.type == OPTIONAL_MARKER for child in entry.children)

    @staticmethod
    def _scan(node: "Node") -> Iterator["Node"]:
        if node.type != METHOD_DEFINITION_TYPE:
            yield from SyntaxQueries.walk(node)
            return
        for field_name in _METHOD_SCAN_FIELDS:
            part = SyntaxQueries.field(node, field_name)
            if part is not None:
                yield from SyntaxQueries.walk(part)

    @staticmethod
    def _unsafe_node(node: "Node") -> str | None:
        node_type = node.type
        if node_type in THIS_TYPES:
            return "this"
        if node_type == SUPER_TYPE:
            return "super"
        if node_type in IDENTIFIER_TYPES and SyntaxQueries.text(node) == ARGUMENTS_IDENTIFIER:
            return "arguments"
        # Grammars without meta_property parse new.target as a member expression.
        if node_type in (META_PROPERTY_TYPE, MEMBER_EXPRESSION_TYPE) and (
            "".join(SyntaxQueries.text(node).split()) == "new.target"
        ):
            return "new.target"
        return None
