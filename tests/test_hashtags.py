"""Tests for hashtag extraction."""

import pytest

from core.hashtags import append_tags, extract_trailing_tags, is_hex_color


class TestIsHexColor:
    @pytest.mark.parametrize("token", ["#fff", "#FFFF", "#671de7", "#671de7ff", "#facade"])
    def test_hex_colors(self, token):
        assert is_hex_color(token) is True

    @pytest.mark.parametrize("token", ["#ff", "#fffff", "#671de7f", "#tech", "#12345g"])
    def test_not_hex_colors(self, token):
        assert is_hex_color(token) is False


class TestExtractTrailingTags:
    def test_tags_removed_in_order(self):
        body, tags = extract_trailing_tags("Check out #tech innovations\nThis is #amazing")
        assert body == "Check out innovations\nThis is"
        assert tags == ["#tech", "#amazing"]

    def test_hex_color_stays(self):
        body, tags = extract_trailing_tags("Primary: #671de7 and #design")
        assert body == "Primary: #671de7 and"
        assert tags == ["#design"]

    def test_tag_at_line_start(self):
        assert extract_trailing_tags("#launch day is here") == ("day is here", ["#launch"])

    def test_tag_before_punctuation(self):
        assert extract_trailing_tags("Great work #team, thanks") == ("Great work, thanks", ["#team"])

    def test_consecutive_tags(self):
        assert extract_trailing_tags("x #a #b y") == ("x y", ["#a", "#b"])

    def test_escaped_hash_is_not_a_tag(self):
        assert extract_trailing_tags("see \\#notatag here") == ("see \\#notatag here", [])

    @pytest.mark.parametrize(
        "text", ["Docs at https://example.com/#install", "Read https://example.com/page#setup"]
    )
    def test_url_fragment_is_not_a_tag(self, text):
        assert extract_trailing_tags(text) == (text, [])

    def test_heading_is_not_a_tag(self):
        assert extract_trailing_tags("# Title") == ("# Title", [])

    def test_no_tags(self):
        assert extract_trailing_tags("  Just text \n") == ("Just text", [])

    def test_empty(self):
        assert extract_trailing_tags("") == ("", [])


class TestAppendTags:
    def test_appends_after_blank_line(self):
        assert append_tags("body", ["#a", "#b"]) == "body\n\n#a #b"

    def test_empty_body(self):
        assert append_tags("", ["#a"]) == "#a"

    def test_no_tags(self):
        assert append_tags("body", []) == "body"
