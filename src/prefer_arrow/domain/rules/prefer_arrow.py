"""Prefer arrow functions rule: flag function shapes that convert losslessly to arrows."""

import logging
from typing import TYPE_CHECKING

from prefer_arrow.domain.config import Options
from prefer_arrow.domain.constants import RULE_ID
from prefer_arrow.domain.rule_msgs import MessageSelector
from prefer_arrow.domain.rules import Checkable, Violation
from prefer_arrow.domain.services.classifier import NodeClassifier
from prefer_arrow.domain.services.code_generator import CodeGenerator
from prefer_arrow.domain.services.descriptor_extractor import DescriptorExtractor
from prefer_arrow.domain.services.safety_analyzer import SafetyAnalyzer

if TYPE_CHECKING:
    from tree_sitter import Node

logger = logging.getLogger(__name__)


class PreferArrowFunctionsRule(Checkable):
    """
    Classifier -> SafetyAnalyzer -> DescriptorExtractor -> CodeGenerator -> MessageSelector.

    A pure function of the visited node and the Options snapshot taken at construction.
    Ineligible nodes produce no violations; every reported violation carries one fix.
    """

    code: str = RULE_ID
    description: str = "Prefer arrow functions over plain functions where conversion is lossless."

    def __init__(
        self,
        options: Options | None = None,
        messages: MessageSelector | None = None,
        classifier: NodeClassifier | None = None,
        analyzer: SafetyAnalyzer | None = None,
        extractor: DescriptorExtractor | None = None,
        generator: CodeGenerator | None = None,
    ) -> None:
        self.options = options or Options()
        self._messages = messages or MessageSelector()
        self._classifier = classifier or NodeClassifier()
        self._analyzer = analyzer or SafetyAnalyzer()
        self._extractor = extractor or DescriptorExtractor()
        self._generator = generator or CodeGenerator()

    def check(self, node: "Node", file_path: str = "") -> list[Violation]:
        """Check one visited node. Call once per node in host visit order."""
        candidate = self._classifier.classify(node)
        if candidate is None:
            return []
        decision = self._analyzer.decide(candidate, self.options)
        if not decision.eligible or decision.message_kind is None:
            logger.debug(
                "Skipping %s at %s:%d (%s)",
                candidate.kind.value,
                file_path,
                node.start_point[0] + 1,
                decision.reason,
            )
            return []
        descriptor = self._extractor.extract(candidate)
        fix = self._generator.render(candidate, descriptor, self.options.return_style)
        return [
            Violation.from_node(
                code=decision.message_kind,
                message=self._messages.text_for(decision.message_kind),
                node=node,
                fix=fix,
                file_path=file_path,
            )
        ]
