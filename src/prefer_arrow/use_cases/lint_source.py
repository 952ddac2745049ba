"""Use Case: Lint one source text with the prefer-arrow rule."""

import logging
from typing import TYPE_CHECKING

from prefer_arrow.domain.entities import LintResult
from prefer_arrow.domain.protocols import SyntaxParserProtocol
from prefer_arrow.domain.services.syntax import SyntaxQueries

if TYPE_CHECKING:
    from prefer_arrow.domain.rules import Checkable, Violation

logger = logging.getLogger(__name__)


class LintSourceUseCase:
    """Parse a source text and visit every node in pre-order, collecting the rule's reports."""

    def __init__(self, parser: SyntaxParserProtocol, rule: "Checkable") -> None:
        self.parser = parser
        self.rule = rule

    def execute(self, source: str, file_path: str = "") -> LintResult:
        tree = self.parser.parse(source.encode("utf-8"), file_path)
        root = tree.root_node
        if root.has_error:
            logger.warning("Syntax errors in %s; linting the recoverable parts.", file_path or "<source>")
        violations: list["Violation"] = []
        for node in SyntaxQueries.walk(root):
            violations.extend(self.rule.check(node, file_path))
        return LintResult(
            file_path=file_path,
            violations=violations,
            has_syntax_errors=root.has_error,
        )
