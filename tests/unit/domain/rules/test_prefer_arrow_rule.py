"""Unit tests for PreferArrowFunctionsRule: invariants, TypeScript shapes and collaborator wiring."""

import itertools
import unittest
from unittest.mock import MagicMock

import pytest

from prefer_arrow.domain.constants import (
    RULE_ID,
    USE_ARROW_WHEN_FUNCTION,
    USE_ARROW_WHEN_SINGLE_RETURN,
    USE_EXPLICIT,
)
from prefer_arrow.domain.entities import TransformationDecision
from prefer_arrow.domain.rule_msgs import MessageSelector
from prefer_arrow.domain.rules.prefer_arrow import PreferArrowFunctionsRule

ALL_OPTION_COMBOS = [
    {
        "single_return_only": single,
        "disallow_prototype": proto,
        "return_style": style,
        "class_properties_allowed": class_props,
    }
    for single, proto, style, class_props in itertools.product(
        (False, True), (False, True), ("unchanged", "explicit", "implicit"), (False, True)
    )
]

NEVER_CONVERTIBLE = [
    "var f = function() { return this.x; };",
    "function f() { return super.x; }",
    "function f() { return arguments.length; }",
    "function f() { const { arguments: a } = {}; return a; }",
    "function F() { if (!new.target) { throw new Error(); } }",
    "function * gen() { yield 1; }",
    "var o = { m() { return this; } };",
    "class C { m() { return this.x; } }",
    "var f = () => this.x;",
    "var f = () => { return this.x; };",
]


class TestExclusionInvariants:
    """this/super/arguments/new.target/generators block conversion under every option set."""

    @pytest.mark.parametrize("options", ALL_OPTION_COMBOS)
    @pytest.mark.parametrize("code", NEVER_CONVERTIBLE)
    def test_never_reported(self, lint, code: str, options: dict) -> None:
        assert lint(code, **options).violations == []

    def test_this_in_nested_function_blocks_outer(self, lint) -> None:
        code = "function outer() { return function inner() { return this; }; }"
        assert lint(code).violations == []

    def test_computed_method_key_is_ignored(self, lint) -> None:
        # Computed keys are not named keys; the method is never a candidate.
        assert lint("var o = { [this.k]() { return 1; } };").violations == []


class TestSingleReturnGating:
    @pytest.mark.parametrize(
        "code",
        [
            "function f() { a(); return 1; }",
            "var f = function() { return; };",
            "function f() {}",
        ],
    )
    def test_non_returning_bodies_are_skipped(self, lint, code: str) -> None:
        assert lint(code, single_return_only=True).violations == []
        assert [v.code for v in lint(code).violations] == [USE_ARROW_WHEN_FUNCTION]

    def test_named_default_export_skipped(self, lint) -> None:
        assert lint("export default function named() { return 1; }", single_return_only=True).violations == []

    def test_named_default_export_reported_without_gate(self, lint, fix) -> None:
        code = "export default function named() { return 1; }"
        assert [v.code for v in lint(code).violations] == [USE_ARROW_WHEN_FUNCTION]
        assert fix(code).fixed_text == "export default () => 1;"

    def test_immediate_return_reports_single_return_message(self, lint) -> None:
        result = lint("var f = function(a) { return a; };", single_return_only=True)
        assert [v.code for v in result.violations] == [USE_ARROW_WHEN_SINGLE_RETURN]


class TestRoundTripIdempotence:
    """Fixed output never re-reports the same function under the same options."""

    @pytest.mark.parametrize(
        ("code", "options"),
        [
            ("function foo(a) { return 3; }", {}),
            ("export default function() { return 3; }", {}),
            ("var o = { m(a) { return a; } };", {}),
            ("class C { m(a) { return a; } }", {"class_properties_allowed": True}),
            ("function f() { return function(a) { a(); }; }", {}),
            ("var f = (bar) => bar()", {"return_style": "explicit"}),
            ("var f = (bar) => { return bar(); }", {"return_style": "implicit"}),
            ("obj.prototype.m = function() { return 1; };", {"disallow_prototype": True}),
        ],
    )
    def test_fixed_text_is_clean(self, lint, fix, code: str, options: dict) -> None:
        outcome = fix(code, **options)
        assert outcome.changed
        assert outcome.remaining == []
        assert lint(outcome.fixed_text, **options).violations == []

    def test_multiple_matches_reach_fixed_point(self, fix) -> None:
        outcome = fix("var foo = function () { return function(a) { a() } }")
        assert outcome.fixed_text == "var foo = () => (a) => { a() }"
        assert outcome.applied == 2
        assert outcome.passes == 2


class TestTypeScriptShapes:
    def test_type_parameters_and_return_type_carried(self, fix) -> None:
        out = fix("function id<T>(x: T): T { return x; }").fixed_text
        assert out == "const id = <T>(x: T): T => x;"

    def test_async_declaration_with_return_type(self, fix) -> None:
        out = fix("async function load(url: string): Promise<string> { return get(url); }").fixed_text
        assert out == "const load = async (url: string): Promise<string> => get(url);"

    def test_expression_return_type_dropped(self, fix) -> None:
        out = fix("const f = function (a: number): number { return a; };").fixed_text
        assert out == "const f = (a: number) => a;"

    def test_optional_and_default_parameters_verbatim(self, fix) -> None:
        out = fix("function f(a?: number, b = 2, ...rest: string[]) { return b; }").fixed_text
        assert out == "const f = (a?: number, b = 2, ...rest: string[]) => b;"

    def test_class_modifiers_kept(self, fix) -> None:
        code = "class C { private static m(a: number): number { return a; } }"
        out = fix(code, class_properties_allowed=True).fixed_text
        assert out == "class C { private static m = (a: number) => a; }"

    def test_async_method_becomes_async_field(self, fix) -> None:
        code = "class C { async m() { await x(); } }"
        out = fix(code, class_properties_allowed=True).fixed_text
        assert out == "class C { m = async () => { await x(); }; }"

    def test_private_name_method(self, fix) -> None:
        out = fix("class C { #m() { return 1; } }", class_properties_allowed=True).fixed_text
        assert out == "class C { #m = () => 1; }"

    def test_class_field_function_value_absorbs_semicolon(self, lint, fix) -> None:
        code = "class C { handler = function (e) { return e; }; }"
        assert lint(code).violations == []
        out = fix(code, class_properties_allowed=True).fixed_text
        assert out == "class C { handler = (e) => e; }"

    def test_constructor_never_converted(self, lint) -> None:
        code = "class C { constructor(a) { console.log(a); } }"
        assert lint(code, class_properties_allowed=True).violations == []

    def test_optional_members_keep_their_marker(self, fix) -> None:
        code = "class A { foo?(a: number): number { return a; } bar? = function () { return 1; }; }"
        outcome = fix(code, class_properties_allowed=True)
        assert outcome.fixed_text == code
        assert outcome.applied == 0

    def test_string_keys_and_accessors_ignored(self, lint) -> None:
        code = 'var o = { "k": function() { return 1; }, get g() { return 1; } };'
        assert lint(code).violations == []

    def test_bare_arrow_parameter_parenthesized(self, fix) -> None:
        out = fix("const f = x => x;", return_style="explicit").fixed_text
        assert out == "const f = (x) => { return x };"

    def test_arrow_type_annotations_carried(self, fix) -> None:
        out = fix("const f = async <T>(x: T): Promise<T> => x;", return_style="explicit").fixed_text
        assert out == "const f = async <T>(x: T): Promise<T> => { return x };"


class TestJavaScriptFiles:
    def test_jsx_file_parses_with_tsx_grammar(self, lint, fix) -> None:
        code = "function App() { return <div />; }"
        result = lint(code, path="App.jsx")
        assert [v.code for v in result.violations] == [USE_ARROW_WHEN_FUNCTION]
        assert not result.has_syntax_errors
        assert fix(code, path="App.jsx").fixed_text == "const App = () => <div />;"

    def test_violation_location_is_one_based_line(self, lint) -> None:
        result = lint("\n\nfunction f() { return 1; }", path="src/a.js")
        (violation,) = result.violations
        assert violation.location == "src/a.js:3:0"
        assert violation.line == 3

    def test_syntax_errors_still_linted(self, lint) -> None:
        result = lint("function ok() { return 1; }\n)")
        assert result.has_syntax_errors
        assert any(v.line == 1 for v in result.violations)


class TestPreferArrowFunctionsRule(unittest.TestCase):
    """Collaborator wiring."""

    def test_rule_identity(self) -> None:
        rule = PreferArrowFunctionsRule()
        self.assertEqual(rule.code, RULE_ID)

    def test_unclassified_node_returns_empty(self) -> None:
        classifier = MagicMock()
        classifier.classify.return_value = None
        analyzer = MagicMock()
        rule = PreferArrowFunctionsRule(classifier=classifier, analyzer=analyzer)
        self.assertEqual(rule.check(MagicMock()), [])
        analyzer.decide.assert_not_called()

    def test_ineligible_decision_skips_generation(self) -> None:
        classifier = MagicMock()
        analyzer = MagicMock()
        analyzer.decide.return_value = TransformationDecision.skip("this")
        generator = MagicMock()
        node = MagicMock()
        node.start_point = (0, 0)
        rule = PreferArrowFunctionsRule(classifier=classifier, analyzer=analyzer, generator=generator)
        self.assertEqual(rule.check(node, "a.ts"), [])
        generator.render.assert_not_called()

    def test_eligible_decision_builds_violation_with_custom_message(self) -> None:
        analyzer = MagicMock()
        analyzer.decide.return_value = TransformationDecision.report(USE_EXPLICIT)
        fix = MagicMock()
        generator = MagicMock()
        generator.render.return_value = fix
        node = MagicMock()
        node.start_point = (4, 2)
        rule = PreferArrowFunctionsRule(
            messages=MessageSelector({USE_EXPLICIT: "custom explicit"}),
            classifier=MagicMock(),
            analyzer=analyzer,
            extractor=MagicMock(),
            generator=generator,
        )
        (violation,) = rule.check(node, "a.ts")
        self.assertEqual(violation.code, USE_EXPLICIT)
        self.assertEqual(violation.message, "custom explicit")
        self.assertEqual(violation.location, "a.ts:5:2")
        self.assertIs(violation.fix, fix)
