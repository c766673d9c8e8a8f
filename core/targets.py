"""Preset targets and their platform limits.

Each target is one output flavour of the same source text. Platform names
are accepted as aliases so callers can say ``linkedin`` instead of
``styled-text``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import grapheme


class ConfigurationError(ValueError):
    """Raised when a preset target cannot be resolved."""


class Target(str, Enum):
    STYLED_TEXT = "styled-text"
    REVERSE_CHAT_SYNTAX = "reverse-chat-syntax"
    DOCUMENT_WRAPPER = "document-wrapper"

    @classmethod
    def parse(cls, value: Union["Target", str]) -> "Target":
        """Resolve a target from its value, an alias, or the member itself."""
        if isinstance(value, cls):
            return value

        key = str(value or "").strip().lower()
        if key in TARGET_ALIASES:
            return TARGET_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise ConfigurationError(f"Unknown preset: {value}") from None


TARGET_ALIASES = {
    "linkedin": Target.STYLED_TEXT,
    "whatsapp": Target.REVERSE_CHAT_SYNTAX,
    "email": Target.DOCUMENT_WRAPPER,
}


@dataclass
class PlatformConfig:
    name: str
    char_limit: Optional[int]
    use_graphemes: bool


LINKEDIN = PlatformConfig("LinkedIn", 3000, False)
WHATSAPP = PlatformConfig("WhatsApp", 65536, True)
EMAIL = PlatformConfig("Email", None, False)

PLATFORM_CONFIGS = {
    Target.STYLED_TEXT: LINKEDIN,
    Target.REVERSE_CHAT_SYNTAX: WHATSAPP,
    Target.DOCUMENT_WRAPPER: EMAIL,
}


def measure(text: str, config: PlatformConfig) -> int:
    """Measure text length using graphemes or characters."""
    if config.use_graphemes:
        return grapheme.length(text)
    return len(text)
