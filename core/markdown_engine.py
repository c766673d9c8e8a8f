"""Markdown to sanitized HTML.

This is the renderer the presets call when no other one is supplied. Any
callable taking ``(markdown, MarkdownOptions)`` and returning HTML can be
used in its place.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

import bleach
from markdown_it import MarkdownIt

from core.text_normalizer import normalize_quotes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkdownOptions:
    gfm: bool = True  # tables and ~~strikethrough~~
    sanitize: bool = True
    smart_quotes: bool = True


ALLOWED_TAGS = frozenset(bleach.sanitizer.ALLOWED_TAGS).union(
    {
        "p",
        "br",
        "hr",
        "span",
        "div",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "pre",
        "code",
        "s",
        "del",
        "img",
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
    }
)

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "img": ["src", "alt", "title"],
    "code": ["class"],
    "th": ["style"],
    "td": ["style"],
    "ol": ["start"],
}


@lru_cache(maxsize=4)
def _get_parser(gfm: bool, allow_html: bool) -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": allow_html})
    if gfm:
        md.enable("table").enable("strikethrough")
    return md


def sanitize_html(html: str) -> str:
    """Strip everything outside the allow-list."""
    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=["http", "https", "mailto"],
        strip=True,
    )


def render(markdown: str, options: MarkdownOptions = MarkdownOptions()) -> str:
    """Convert markdown to HTML.

    With ``sanitize`` on, raw HTML in the source is escaped by the parser and
    the output is cleaned against an allow-list as well.

    Example:
        render("# Hello *World*!")  # '<h1>Hello <em>World</em>!</h1>\\n'
    """
    parser = _get_parser(options.gfm, not options.sanitize)
    html = parser.render(markdown or "")

    if options.sanitize:
        html = sanitize_html(html)
    if options.smart_quotes:
        html = normalize_quotes(html)

    logger.debug("Rendered %d chars of markdown to %d chars of HTML", len(markdown or ""), len(html))
    return html
