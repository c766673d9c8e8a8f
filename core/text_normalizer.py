"""Text normalization utilities shared by the platform presets."""

import re

_SINGLE_QUOTES_RE = re.compile("[\u2018\u2019]")
_DOUBLE_QUOTES_RE = re.compile("[\u201C\u201D]")
_UNICODE_SPACES_RE = re.compile("[\u00A0\u2000-\u200B\u202F\u205F\u3000]")
_DASHES_RE = re.compile("[\u2013\u2014]")
_EXTRA_NEWLINES_RE = re.compile(r"\n{3,}")
_LINE_BREAKS_RE = re.compile(r"[ \t]*\n(?:[ \t]*\n)*")


def normalize_quotes(text: str) -> str:
    """Normalize curly quotes, Unicode spaces and dashes to plain ASCII forms."""
    if not text:
        return text

    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    text = _UNICODE_SPACES_RE.sub(" ", text)
    text = _DASHES_RE.sub("-", text)  # en dash, em dash
    return text


def collapse_newlines(text: str) -> str:
    """Collapse runs of blank lines to a single blank line."""
    return _EXTRA_NEWLINES_RE.sub("\n\n", text)


def normalize_text(text: str) -> str:
    """Quotes, line endings and blank lines normalized, edges trimmed."""
    if not text:
        return text

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = normalize_quotes(text)
    text = collapse_newlines(text)
    return text.strip()


def force_paragraph_spacing(text: str) -> str:
    """Turn every line break into exactly one blank line.

    Trailing spaces before a break are dropped; indentation of the next line
    is kept.
    """
    return _LINE_BREAKS_RE.sub("\n\n", text)
