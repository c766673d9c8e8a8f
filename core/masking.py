"""Code-span masking so literal code survives text rewriting.

Fenced blocks and inline code are swapped for placeholder tokens before any
rewrite runs, then restored in a single pass afterwards. Placeholders are
built from Private Use Area characters: they are not word characters, not
ASCII letters or digits, and contain no markdown punctuation, so none of the
emphasis, glyph or hashtag patterns can match inside them.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from core.hashtags import HASHTAG_TOKEN_RE, is_hex_color

logger = logging.getLogger(__name__)

PLACEHOLDER_OPEN = "\ue000"
PLACEHOLDER_CLOSE = "\ue001"
_DIGIT_BASE = 0xE010

_DIGIT_RANGE = f"{chr(_DIGIT_BASE)}-{chr(_DIGIT_BASE + 9)}"

FENCE_RE = re.compile(r"```.*?```|~~~.*?~~~", flags=re.S)
INLINE_CODE_RE = re.compile(r"`[^`\n]+`")
PLACEHOLDER_RE = re.compile(f"{PLACEHOLDER_OPEN}([{_DIGIT_RANGE}]+){PLACEHOLDER_CLOSE}")
# Placeholder characters already present in the input.
RESERVED_RE = re.compile(f"[{PLACEHOLDER_OPEN}{PLACEHOLDER_CLOSE}{_DIGIT_RANGE}]+")


class SpanKind(Enum):
    FENCED_BLOCK = "fence"
    INLINE_CODE = "inline"
    HEX_COLOR = "hex"
    RESERVED = "reserved"


def _encode_id(span_id: int) -> str:
    return "".join(chr(_DIGIT_BASE + int(digit)) for digit in str(span_id))


def _decode_id(encoded: str) -> int:
    return int("".join(str(ord(ch) - _DIGIT_BASE) for ch in encoded))


@dataclass(frozen=True)
class ProtectedSpan:
    """A code region lifted out of the document while it is rewritten.

    ``start``/``end`` are offsets into the original text, ``literal`` is the
    exact source including delimiters.
    """

    id: int
    start: int
    end: int
    kind: SpanKind
    literal: str

    @property
    def placeholder(self) -> str:
        return f"{PLACEHOLDER_OPEN}{_encode_id(self.id)}{PLACEHOLDER_CLOSE}"

    @property
    def content(self) -> str:
        """The code without its delimiters (and without a fence's info line).

        Hex colors and reserved characters have no delimiters and come back
        as their literal.
        """
        if self.kind in (SpanKind.HEX_COLOR, SpanKind.RESERVED):
            return self.literal
        if self.kind is SpanKind.INLINE_CODE:
            return self.literal[1:-1]

        inner = self.literal[3:-3]
        if "\n" in inner:
            # Drop the opening line, which holds the optional info string.
            inner = inner.split("\n", 1)[1]
            if inner.endswith("\n"):
                inner = inner[:-1]
        return inner


def contains_placeholder(text: str) -> bool:
    return PLACEHOLDER_OPEN in text or PLACEHOLDER_CLOSE in text


def _blank(match: re.Match) -> str:
    return "\n" * len(match.group(0))


def mask(
    text: str, fenced: bool = True, inline: bool = True, hex_colors: bool = False
) -> tuple[str, tuple[ProtectedSpan, ...]]:
    """Replace code regions with placeholders.

    Fences are found first. Inline code is searched in a copy of the text
    where every fence is blanked out with newlines, so an inline match can
    neither start nor end inside a fence while offsets stay aligned. Hex
    colors (when asked for) and any placeholder characters the author typed
    are then lifted from what is left outside code, so a restore can never
    mistake authored text for one of its own placeholders.

    Returns:
        The masked text and the protected spans ordered by position.
    """
    if not text:
        return text, ()

    found: list[tuple[int, int, SpanKind]] = []
    shadow = text

    if fenced:
        for match in FENCE_RE.finditer(shadow):
            found.append((match.start(), match.end(), SpanKind.FENCED_BLOCK))
        shadow = FENCE_RE.sub(_blank, shadow)

    if inline:
        for match in INLINE_CODE_RE.finditer(shadow):
            found.append((match.start(), match.end(), SpanKind.INLINE_CODE))
        shadow = INLINE_CODE_RE.sub(_blank, shadow)

    if hex_colors:
        for match in HASHTAG_TOKEN_RE.finditer(shadow):
            if is_hex_color(match.group(0)):
                found.append((match.start(), match.end(), SpanKind.HEX_COLOR))

    for match in RESERVED_RE.finditer(shadow):
        found.append((match.start(), match.end(), SpanKind.RESERVED))

    if not found:
        return text, ()

    found.sort(key=lambda item: item[0])

    spans = []
    pieces = []
    cursor = 0
    for span_id, (start, end, kind) in enumerate(found):
        span = ProtectedSpan(span_id, start, end, kind, text[start:end])
        spans.append(span)
        pieces.append(text[cursor:start])
        pieces.append(span.placeholder)
        cursor = end
    pieces.append(text[cursor:])

    logger.debug("Masked %d protected span(s)", len(spans))
    return "".join(pieces), tuple(spans)


def missing_spans(masked: str, spans: tuple[ProtectedSpan, ...]) -> list[ProtectedSpan]:
    """Return the spans whose placeholder no longer appears in ``masked``."""
    return [span for span in spans if span.placeholder not in masked]


def unmask(
    masked: str,
    spans: tuple[ProtectedSpan, ...],
    restore: Optional[Callable[[ProtectedSpan], str]] = None,
) -> str:
    """Put protected spans back in one pass over the masked text.

    ``restore`` picks what each span turns back into; by default that is
    the literal source. A placeholder that was lost is skipped, and any
    unknown or repeated placeholder is left as it is.
    """
    if not spans:
        return masked

    restore = restore or (lambda span: span.literal)
    by_id = {span.id: span for span in spans}
    restored: set[int] = set()

    def _replace(match: re.Match) -> str:
        span_id = _decode_id(match.group(1))
        span = by_id.get(span_id)
        if span is None or span_id in restored:
            return match.group(0)
        restored.add(span_id)
        return restore(span)

    result = PLACEHOLDER_RE.sub(_replace, masked)

    lost = len(by_id) - len(restored)
    if lost:
        logger.warning("Could not restore %d protected code span(s)", lost)
    return result
