"""Tests for snippet synthesis, deduplication and rendering."""

from missing_steps.config import ReporterConfig
from missing_steps.keywords import StepKeyword
from missing_steps.models import ResolvedStep
from missing_steps.snippets.renderer import render_import_hint, render_report, render_snippet
from missing_steps.snippets.synthesizer import (
    SnippetRegistry,
    build_matcher,
    extract_arguments,
    to_camel_case,
)


def _step(text, keyword=StepKeyword.GIVEN, line=1):
    return ResolvedStep(keyword=keyword.value, text=text, line=line, effective_keyword=keyword)


class TestArguments:
    """Test placeholder extraction."""

    def test_order_of_appearance(self):
        assert extract_arguments("I have <count> <item>s") == ["count", "item"]
        assert build_matcher("I have <count> <item>s") == "I have (.*) (.*)s"

    def test_repeated_placeholders_are_kept(self):
        assert extract_arguments("<a> and <a>") == ["a", "a"]
        assert build_matcher("<a> and <a>") == "(.*) and (.*)"

    def test_no_placeholders(self):
        assert extract_arguments("the cart is empty") == []
        assert build_matcher("the cart is empty") == "the cart is empty"

    def test_camel_case(self):
        assert to_camel_case("some arg") == "someArg"
        assert to_camel_case("item_name") == "itemName"
        assert to_camel_case("Order-ID") == "orderID"
        assert to_camel_case("count") == "count"
        assert to_camel_case("1st value") == "arg1stValue"
        assert to_camel_case("--") == "arg"

    def test_camel_case_keeps_existing_humps(self):
        assert to_camel_case("userName") == "userName"
        assert to_camel_case("orderID") == "orderID"
        assert to_camel_case("UserName") == "userName"
        assert to_camel_case("billing userName") == "billingUserName"
        assert extract_arguments("I log in as <userName>") == ["userName"]


class TestSnippetRegistry:
    """Test deduplication by canonical pattern."""

    def test_ingest_builds_snippet(self):
        registry = SnippetRegistry()
        snippet = registry.ingest(_step("I have <count> <item>s"))
        assert snippet.canonical_key == "I have (.*) (.*)s"
        assert snippet.matcher_pattern == snippet.canonical_key
        assert snippet.argument_names == ("count", "item")
        assert snippet.invocation_keyword is StepKeyword.GIVEN

    def test_first_argument_names_win(self):
        registry = SnippetRegistry()
        registry.ingest(_step("I buy <n> apples"))
        assert registry.ingest(_step("I buy <num> apples", StepKeyword.WHEN)) is None

        snippets, keywords = registry.drain()
        assert len(snippets) == 1
        assert snippets[0].argument_names == ("n",)
        assert keywords == {StepKeyword.GIVEN}

    def test_insertion_order(self):
        registry = SnippetRegistry()
        for text in ["b", "a", "b", "c", "a", "b"]:
            registry.ingest(_step(text))
        snippets, _ = registry.drain()
        assert [s.matcher_pattern for s in snippets] == ["b", "a", "c"]
        assert len(registry) == 3
        assert "c" in registry

    def test_method_names_accumulate(self):
        registry = SnippetRegistry()
        registry.ingest(_step("x", StepKeyword.THEN))
        registry.ingest(_step("y", StepKeyword.GIVEN))
        registry.ingest(_step("z", StepKeyword.THEN))
        _, keywords = registry.drain()
        assert keywords == {StepKeyword.GIVEN, StepKeyword.THEN}


class TestRendering:
    """Test snippet and report text."""

    def test_render_snippet(self):
        registry = SnippetRegistry()
        snippet = registry.ingest(_step("a <x> and <some y>"))
        assert render_snippet(snippet) == [
            "Given(/^a (.*) and (.*)$/, (x, someY) => {",
            "\t// Implement me!",
            "});",
        ]

    def test_render_snippet_without_arguments(self):
        registry = SnippetRegistry()
        snippet = registry.ingest(_step("d", StepKeyword.THEN))
        assert render_snippet(snippet, body="pending();", indent="  ") == [
            "Then(/^d$/, () => {",
            "  pending();",
            "});",
        ]

    def test_import_hint_is_sorted(self):
        hint = render_import_hint({StepKeyword.WHEN, StepKeyword.GIVEN, StepKeyword.THEN})
        assert hint == "import { Given, Then, When } from '@cucumber/cucumber';"

    def test_report_layout(self):
        registry = SnippetRegistry()
        registry.ingest(_step("b", StepKeyword.WHEN))
        registry.ingest(_step("a"))
        snippets, keywords = registry.drain()

        lines = render_report(snippets, keywords, ReporterConfig(import_module="cucumber"))
        assert lines == [
            "Please implement the following pending steps:",
            "import { Given, When } from 'cucumber';",
            "When(/^b$/, () => {",
            "\t// Implement me!",
            "});",
            "",
            "Given(/^a$/, () => {",
            "\t// Implement me!",
            "});",
            "",
        ]

    def test_empty_report(self):
        assert render_report([], set(), ReporterConfig()) == []
