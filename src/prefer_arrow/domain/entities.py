from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node

    from prefer_arrow.domain.rules import Violation


class FunctionKind(Enum):
    """Structural role of a candidate function."""
    DECLARATION = "declaration"
    EXPRESSION = "expression"
    OBJECT_METHOD = "object-method"
    CLASS_METHOD = "class-method"
    ARROW = "arrow"


class SelectorTag(Enum):
    """Closed set of node shapes the rule is dispatched on."""
    DEFAULT_EXPORT = "default-export"
    PROPERTY_VALUE = "property-value"
    ARROW_EXPRESSION_BODY = "arrow-expression-body"
    ARROW_SINGLE_RETURN = "arrow-single-return"
    PLAIN_FUNCTION = "plain-function"


class BodyShape(Enum):
    """Shape of a function body as seen by the code generator."""
    BLOCK_MULTI_STATEMENT = "block-multi-statement"
    BLOCK_SINGLE_RETURN = "block-single-return"
    EXPRESSION_BODY = "expression-body"


class ContextTag(Enum):
    """Result of the single upward walk over a candidate's ancestors."""
    NONE = "none"
    PROTOTYPE_ASSIGN_TARGET = "prototype-assign-target"      # X.prototype = ...
    PROTOTYPE_MUTATION_TARGET = "prototype-mutation-target"  # X.prototype.m = ...
    WITHIN_CLASS_BODY = "within-class-body"

    @property
    def is_prototype(self) -> bool:
        return self in (ContextTag.PROTOTYPE_ASSIGN_TARGET, ContextTag.PROTOTYPE_MUTATION_TARGET)


@dataclass(frozen=True)
class TextRange:
    """Half-open byte span [start, end) into the UTF-8 encoded source."""
    start: int
    end: int

    def overlaps(self, other: "TextRange") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class FunctionCandidate:
    """
    Immutable view over a function-shaped node considered for rewriting.

    ``entry`` is the owning class/object member (method_definition, pair or
    field definition) for property values; it is referenced, never owned.
    """
    node: "Node"
    kind: FunctionKind
    selector: SelectorTag
    body_shape: BodyShape
    context: ContextTag
    is_async: bool = False
    is_generator: bool = False
    name: str = ""
    is_default_export: bool = False
    entry: "Node | None" = None

    @property
    def returns_immediately(self) -> bool:
        """Body is one return statement, or already an implicit-return expression."""
        return self.body_shape in (BodyShape.BLOCK_SINGLE_RETURN, BodyShape.EXPRESSION_BODY)

    @property
    def is_named_default_export(self) -> bool:
        return self.is_default_export and bool(self.name)


@dataclass(frozen=True)
class FunctionDescriptor:
    """Verbatim source slices needed to render a candidate. Never interpreted."""
    name: str
    is_async: bool
    parameter_texts: tuple[str, ...]
    body: "Node"
    return_type_text: str = ""
    type_parameters_text: str = ""
    modifiers: tuple[str, ...] = ()


@dataclass(frozen=True)
class TransformationDecision:
    """Safety analyzer verdict. ``reason`` names the blocking condition when ineligible."""
    eligible: bool
    message_kind: str | None = None
    reason: str | None = None

    @classmethod
    def skip(cls, reason: str) -> "TransformationDecision":
        return cls(eligible=False, reason=reason)

    @classmethod
    def report(cls, message_kind: str) -> "TransformationDecision":
        return cls(eligible=True, message_kind=message_kind)


@dataclass(frozen=True)
class RewriteResult:
    """Replacement text for one span. The host owns application and conflict resolution."""
    replacement_text: str
    target_range: TextRange


@dataclass(frozen=True)
class LintResult:
    """Violations found in one source text."""
    file_path: str
    violations: list["Violation"] = field(default_factory=list)
    has_syntax_errors: bool = False

    def has_violations(self) -> bool:
        return bool(self.violations)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for the JSON reporter."""
        return {
            "file": self.file_path,
            "violations": [
                {
                    "code": v.code,
                    "message": v.message,
                    "location": v.location,
                    "fix": {
                        "range": [v.fix.target_range.start, v.fix.target_range.end],
                        "text": v.fix.replacement_text,
                    },
                }
                for v in self.violations
            ],
        }


@dataclass(frozen=True)
class FixOutcome:
    """Result of driving one source text to a fixed point."""
    file_path: str
    original_text: str
    fixed_text: str
    applied: int = 0
    passes: int = 0
    remaining: list["Violation"] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.fixed_text != self.original_text


@dataclass(frozen=True)
class FixSummary:
    """Aggregate of a fix run across files."""
    outcomes: list[FixOutcome] = field(default_factory=list)
    failed_files: list[str] = field(default_factory=list)

    @property
    def files_changed(self) -> int:
        return sum(1 for o in self.outcomes if o.changed)

    @property
    def fixes_applied(self) -> int:
        return sum(o.applied for o in self.outcomes)

    @property
    def remaining(self) -> int:
        return sum(len(o.remaining) for o in self.outcomes)


@dataclass(frozen=True)
class CheckSummary:
    """Aggregate of a check run across files."""
    results: list[LintResult] = field(default_factory=list)
    failed_files: list[str] = field(default_factory=list)

    @property
    def violation_count(self) -> int:
        return sum(len(r.violations) for r in self.results)

    @property
    def has_violations(self) -> bool:
        return self.violation_count > 0
