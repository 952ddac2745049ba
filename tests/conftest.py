"""Pytest configuration and shared fixtures.

Run pytest from the project root; pythonpath in pyproject.toml puts src/ on the path.
Behavioral tests parse real sources with the tree-sitter gateway.
"""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from prefer_arrow.domain.config import Options
from prefer_arrow.domain.constants import MAX_FIX_PASSES
from prefer_arrow.domain.entities import FixOutcome, LintResult
from prefer_arrow.domain.rules.prefer_arrow import PreferArrowFunctionsRule
from prefer_arrow.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from prefer_arrow.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from prefer_arrow.use_cases.apply_fixes import ApplyFixesUseCase
from prefer_arrow.use_cases.lint_source import LintSourceUseCase


@pytest.fixture(scope="session")
def parser() -> TreeSitterGateway:
    return TreeSitterGateway()


@pytest.fixture
def lint(parser: TreeSitterGateway) -> Callable[..., LintResult]:
    """lint(source, path="sample.ts", **options) -> LintResult."""

    def _lint(source: str, path: str = "sample.ts", **options: object) -> LintResult:
        rule = PreferArrowFunctionsRule(options=Options().with_overrides(**options))
        return LintSourceUseCase(parser, rule).execute(source, path)

    return _lint


@pytest.fixture
def fix(parser: TreeSitterGateway) -> Callable[..., FixOutcome]:
    """fix(source, path="sample.ts", max_passes=MAX_FIX_PASSES, **options) -> FixOutcome."""

    def _fix(
        source: str,
        path: str = "sample.ts",
        max_passes: int = MAX_FIX_PASSES,
        **options: object,
    ) -> FixOutcome:
        rule = PreferArrowFunctionsRule(options=Options().with_overrides(**options))
        use_case = ApplyFixesUseCase(
            fixer_gateway=TextFixerGateway(),
            filesystem=MagicMock(),
            lint_source=LintSourceUseCase(parser, rule),
            check_files=MagicMock(),
            telemetry=MagicMock(),
        )
        return use_case.fix_source(source, path, max_passes=max_passes)

    return _fix

