"""Chat-syntax preprocessor.

Rewrites informal chat emphasis into canonical markdown:

- ``~text~`` -> ``~~text~~`` (strikethrough)
- ``*text*`` -> ``**text**`` (bold)
- ``_text_`` -> ``*text*`` (italic)

The rules run in the order of ``REWRITE_RULES``. Bold must run before
italic, otherwise the asterisks produced by the italic rule would be picked
up again as bold.
"""

import logging
import re
from dataclasses import dataclass

from core.masking import contains_placeholder, mask, unmask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewriteRule:
    name: str
    pattern: re.Pattern
    replacement: str

    def apply(self, text: str) -> tuple[str, int]:
        """Rewrite every match that does not cross a code placeholder."""
        count = 0

        def _rewrite(match: re.Match) -> str:
            nonlocal count
            if contains_placeholder(match.group(0)):
                return match.group(0)
            count += 1
            return match.expand(self.replacement)

        return self.pattern.sub(_rewrite, text), count


# Single-line only; the opening delimiter must not be escaped or doubled,
# the content must not start or end with whitespace.
REWRITE_RULES = (
    RewriteRule(
        "strikethrough",
        re.compile(r"(?<![\\~])~(?![\s~])([^~\n]*?[^\s~\\])~(?!~)"),
        r"~~\1~~",
    ),
    RewriteRule(
        "bold",
        re.compile(r"(?<![\\*])\*(?![\s*])([^*\n]*?[^\s*\\])\*(?!\*)"),
        r"**\1**",
    ),
    RewriteRule(
        "italic",
        re.compile(r"(?<![\\A-Za-z0-9_])_(?![\s_])([^_\n]*?[^\s_\\])_(?![A-Za-z0-9_])"),
        r"*\1*",
    ),
)


def normalize_masked(masked: str) -> str:
    """Apply the rewrite rules to text whose code is already masked."""
    for rule in REWRITE_RULES:
        masked, count = rule.apply(masked)
        if count:
            logger.debug("Rewrote %d %s span(s)", count, rule.name)
    return masked


def normalize(raw: str, enabled: bool = True) -> str:
    """Convert chat-style emphasis to standard markdown.

    Fenced blocks and inline code are never touched. Returns ``raw``
    unchanged when ``enabled`` is false.

    Example:
        normalize("Hello *world*!")  # 'Hello **world**!'
    """
    if not enabled or not raw:
        return raw

    masked, spans = mask(raw)
    return unmask(normalize_masked(masked), spans)
