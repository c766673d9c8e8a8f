"""Hashtag extraction for platforms that expect tags at the end of a post."""

import logging
import re
import string

logger = logging.getLogger(__name__)

# A tag starts a word: not escaped (\#), not a URL fragment (/#, page#top).
_TAG_START = r"(?<![\\/\w])#"
HASHTAG_TOKEN_RE = re.compile(_TAG_START + r"\w+")
HASHTAG_RE = re.compile(r"(?P<lead>[ \t]*)" + _TAG_START + r"(?P<word>\w+)(?P<trail>[ \t]*)")
HEX_COLOR_LENGTHS = frozenset({3, 4, 6, 8})
_HEX_DIGITS = frozenset(string.hexdigits)


def is_hex_color(token: str) -> bool:
    """Return True for ``#rgb``, ``#rgba``, ``#rrggbb`` and ``#rrggbbaa``.

    Words that only happen to be valid hex (``#facade``) count as colors too.
    """
    body = token[1:] if token.startswith("#") else token
    return len(body) in HEX_COLOR_LENGTHS and all(ch in _HEX_DIGITS for ch in body)


def extract_trailing_tags(text: str) -> tuple[str, list[str]]:
    """Pull hashtags out of ``text``.

    Tags are removed where they stand, together with the spacing they leave
    behind; hex colors stay in place.

    Returns:
        The whitespace-trimmed body and the tags in left-to-right order.
    """
    tags: list[str] = []

    def _take(match: re.Match) -> str:
        tag = f"#{match.group('word')}"
        if is_hex_color(tag):
            return match.group(0)

        tags.append(tag)
        start = match.start()
        after_space = start == 0 or text[start - 1].isspace()
        if match.group("trail") and (match.group("lead") or not after_space):
            return " "
        return ""

    body = HASHTAG_RE.sub(_take, text)
    if tags:
        logger.debug("Extracted %d hashtag(s)", len(tags))
    return body.strip(), tags


def append_tags(body: str, tags: list[str], separator: str = "\n\n") -> str:
    """Append ``tags`` space-separated after ``body``."""
    if not tags:
        return body
    if not body:
        return " ".join(tags)
    return f"{body}{separator}{' '.join(tags)}"
