"""Tests for preset targets and platform configs."""

import pytest

from core.targets import (
    EMAIL,
    LINKEDIN,
    PLATFORM_CONFIGS,
    WHATSAPP,
    ConfigurationError,
    Target,
    measure,
)


class TestPlatformConfigs:
    def test_linkedin_config(self):
        assert LINKEDIN.name == "LinkedIn"
        assert LINKEDIN.char_limit == 3000
        assert LINKEDIN.use_graphemes is False

    def test_whatsapp_config(self):
        assert WHATSAPP.name == "WhatsApp"
        assert WHATSAPP.char_limit == 65536
        assert WHATSAPP.use_graphemes is True

    def test_email_has_no_limit(self):
        assert EMAIL.char_limit is None

    def test_every_target_has_config(self):
        assert set(PLATFORM_CONFIGS) == set(Target)


class TestParse:
    def test_canonical_values(self):
        assert Target.parse("styled-text") is Target.STYLED_TEXT
        assert Target.parse("reverse-chat-syntax") is Target.REVERSE_CHAT_SYNTAX
        assert Target.parse("document-wrapper") is Target.DOCUMENT_WRAPPER

    def test_aliases_case_insensitive(self):
        assert Target.parse("LinkedIn") is Target.STYLED_TEXT
        assert Target.parse(" whatsapp ") is Target.REVERSE_CHAT_SYNTAX
        assert Target.parse("EMAIL") is Target.DOCUMENT_WRAPPER

    def test_member_passes_through(self):
        assert Target.parse(Target.STYLED_TEXT) is Target.STYLED_TEXT

    def test_unknown_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown preset: unknown"):
            Target.parse("unknown")

    def test_none_raises(self):
        with pytest.raises(ConfigurationError):
            Target.parse(None)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


class TestMeasure:
    def test_graphemes_vs_code_points(self):
        thumbs = chr(0x1F44D) + chr(0x1F3FD)
        assert measure(thumbs, WHATSAPP) == 1
        assert measure(thumbs, LINKEDIN) == 2
