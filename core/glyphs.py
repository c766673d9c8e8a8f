"""Unicode styled-text formatter.

Turns canonical markdown emphasis into Mathematical Alphanumeric Symbols
(sans-serif block) for platforms that do not render markup:

    **Hello** -> 𝗛𝗲𝗹𝗹𝗼    *Hello* -> 𝘏𝘦𝘭𝘭𝘰    ***Hello*** -> 𝙃𝙚𝙡𝙡𝙤

Only ASCII letters change (plus digits for bold). The mapping is one way.
"""

import logging
import re
from typing import Optional

from core.masking import mask, unmask

logger = logging.getLogger(__name__)

BOLD_UPPER = 0x1D5D4
BOLD_LOWER = 0x1D5EE
BOLD_DIGITS = 0x1D7EC
ITALIC_UPPER = 0x1D608
ITALIC_LOWER = 0x1D622
BOLD_ITALIC_UPPER = 0x1D63C
BOLD_ITALIC_LOWER = 0x1D656

BULLET = "•"


def _offset_table(upper: int, lower: int, digits: Optional[int] = None) -> dict[int, str]:
    table = {}
    for i in range(26):
        table[ord("A") + i] = chr(upper + i)
        table[ord("a") + i] = chr(lower + i)
    if digits is not None:
        for i in range(10):
            table[ord("0") + i] = chr(digits + i)
    return table


_BOLD_TABLE = _offset_table(BOLD_UPPER, BOLD_LOWER, BOLD_DIGITS)
_ITALIC_TABLE = _offset_table(ITALIC_UPPER, ITALIC_LOWER)
_BOLD_ITALIC_TABLE = _offset_table(BOLD_ITALIC_UPPER, BOLD_ITALIC_LOWER)


def to_bold(text: str) -> str:
    return text.translate(_BOLD_TABLE)


def to_italic(text: str) -> str:
    return text.translate(_ITALIC_TABLE)


def to_bold_italic(text: str) -> str:
    return text.translate(_BOLD_ITALIC_TABLE)


# Longest delimiter run first, so *** is never half-eaten by the ** rule.
EMPHASIS_RULES = (
    ("bold_italic", re.compile(r"(?<!\\)\*\*\*(?!\s)(.+?)(?<![\s\\])\*\*\*"), to_bold_italic),
    ("bold", re.compile(r"(?<!\\)\*\*(?!\s)(.+?)(?<![\s\\])\*\*"), to_bold),
    ("italic", re.compile(r"(?<![\\*])\*(?![\s*])([^*\n]*?[^\s*\\])\*(?!\*)"), to_italic),
    (
        "italic",
        re.compile(r"(?<![\\A-Za-z0-9_])_(?![\s_])([^_\n]*?[^\s_\\])_(?![A-Za-z0-9_])"),
        to_italic,
    ),
)

LIST_MARKER_RE = re.compile(r"^([ \t]*)[-*][ \t]+", flags=re.M)


def transform_emphasis(text: str) -> tuple[str, dict[str, int]]:
    """Replace emphasis runs with styled glyphs.

    Expects code to be masked already. Returns the new text together with
    the number of runs converted per style.
    """
    counts = {"bold_italic": 0, "bold": 0, "italic": 0}

    for style, pattern, convert in EMPHASIS_RULES:

        def _style(match: re.Match) -> str:
            counts[style] += 1
            return convert(match.group(1))

        text = pattern.sub(_style, text)

    return text, counts


def apply_unicode(markdown: str) -> str:
    """Convert **bold**, *italic*, _italic_ and ***bold italic*** to glyphs.

    Inline code is masked first and restored verbatim, so its content is
    never restyled.
    """
    if not markdown:
        return markdown

    masked, spans = mask(markdown, fenced=False)
    styled, counts = transform_emphasis(masked)
    logger.debug("Styled emphasis runs: %s", counts)
    return unmask(styled, spans)


def list_to_bullets(text: str) -> tuple[str, int]:
    """Swap ``-``/``*`` list markers for bullets, keeping indentation.

    Numbered lists are left alone.
    """
    return LIST_MARKER_RE.subn(rf"\1{BULLET} ", text)
