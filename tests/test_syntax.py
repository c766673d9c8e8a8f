"""Tests for the chat-syntax preprocessor."""

from core.syntax import REWRITE_RULES, normalize


class TestRewriteRules:
    def test_rule_order(self):
        assert [rule.name for rule in REWRITE_RULES] == ["strikethrough", "bold", "italic"]


class TestNormalize:
    def test_bold(self):
        assert normalize("Hello *world*!") == "Hello **world**!"

    def test_italic(self):
        assert normalize("Hello _world_!") == "Hello *world*!"

    def test_strikethrough(self):
        assert normalize("Hello ~world~!") == "Hello ~~world~~!"

    def test_mixed(self):
        result = normalize("*bold* and _italic_ and ~strike~")
        assert result == "**bold** and *italic* and ~~strike~~"

    def test_escaped_delimiters(self):
        assert normalize("Not \\*bold\\* text") == "Not \\*bold\\* text"
        assert normalize("Not \\_it\\_ or \\~gone\\~") == "Not \\_it\\_ or \\~gone\\~"

    def test_fenced_code_untouched(self):
        text = "```\n*not bold*\n_not italic_\n~not strike~\n```"
        assert normalize(text) == text

    def test_tilde_fence_untouched(self):
        text = "~~~\n*not bold*\n~~~"
        assert normalize(text) == text

    def test_inline_code_untouched(self):
        assert normalize("Code: `*bold* _italic_`") == "Code: `*bold* _italic_`"

    def test_outside_code_rewritten(self):
        result = normalize("*bold* text `*not bold*` more *bold*")
        assert result == "**bold** text `*not bold*` more **bold**"

    def test_span_straddling_code_left_alone(self):
        assert normalize("*see `x` here*") == "*see `x` here*"

    def test_already_canonical(self):
        assert normalize("**already bold**") == "**already bold**"
        assert normalize("~~already strike~~") == "~~already strike~~"

    def test_snake_case(self):
        assert normalize("my_variable_name") == "my_variable_name"
        assert normalize("call __init__ here") == "call __init__ here"

    def test_no_rewrite_across_newlines(self):
        assert normalize("*text\nmore text*") == "*text\nmore text*"

    def test_spaced_asterisks(self):
        assert normalize("2 * 3 * 4") == "2 * 3 * 4"

    def test_disabled(self):
        text = "*bold* _italic_ ~strike~"
        assert normalize(text, enabled=False) == text

    def test_empty(self):
        assert normalize("") == ""

    def test_plain_text(self):
        text = "Plain text without any formatting"
        assert normalize(text) == text
