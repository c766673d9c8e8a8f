"""Platform presets.

One handler per target:

- styled-text: Unicode glyphs instead of markup, bullets, double-spaced
  paragraphs, hashtags moved to the end (LinkedIn-style posts).
- reverse-chat-syntax: canonical markdown back to chat emphasis with single
  newlines (WhatsApp-style messages).
- document-wrapper: rendered HTML inside a full page layout (email).
"""

import html
import logging
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core import markdown_engine
from core.glyphs import list_to_bullets, to_bold, to_italic, to_bold_italic, transform_emphasis
from core.hashtags import append_tags, extract_trailing_tags
from core.markdown_engine import MarkdownOptions
from core.masking import mask, missing_spans, unmask
from core.targets import Target
from core.text_normalizer import collapse_newlines, force_paragraph_spacing, normalize_text

logger = logging.getLogger(__name__)

Renderer = Callable[[str, MarkdownOptions], str]

STYLED_TEXT_HTML = (
    '<div style="white-space: pre-wrap; font-family: -apple-system, '
    "BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.5;\">"
    "{body}</div>"
)

_BLANK_LINES_RE = re.compile(r"\n(?:[ \t]*\n)+")
_BOLD_ITALIC_RE = re.compile(r"(?<!\\)\*\*\*(?!\s)([^\n]+?)(?<![\s\\])\*\*\*")
_ITALIC_RE = re.compile(r"(?<![\\*])\*(?![\s*])([^*\n]*?[^\s*\\])\*(?!\*)")
_BOLD_RE = re.compile(r"(?<!\\)\*\*(?!\s)([^\n]+?)(?<![\s\\])\*\*")
_EM_TAG_RE = re.compile(r"<em>(.*?)</em>")
_STRONG_TAG_RE = re.compile(r"<strong>(.*?)</strong>")

_templates = Environment(
    loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
    autoescape=select_autoescape(["html"]),
)


@dataclass
class PresetResult:
    markdown: str
    html: str
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def apply_preset(
    markdown: str,
    target: Union[Target, str],
    renderer: Optional[Renderer] = None,
) -> PresetResult:
    """Apply a platform preset to ``markdown``.

    Args:
        markdown: Canonical markdown source.
        target: A ``Target``, its value, or a platform alias.
        renderer: Markdown-to-HTML callable; defaults to
            ``markdown_engine.render``.

    Raises:
        ConfigurationError: ``target`` is not a known preset.
    """
    resolved = Target.parse(target)
    handler = _HANDLERS[resolved]
    logger.debug("Applying %s preset to %d chars", resolved.value, len(markdown or ""))
    return handler(markdown or "", renderer or markdown_engine.render)


def _apply_styled_text(markdown: str, render: Renderer) -> PresetResult:
    notes = []

    # Hex colors are masked too, so the glyph pass cannot turn them into tags.
    masked, spans = mask(markdown, hex_colors=True)
    text = normalize_text(masked)
    text, counts = transform_emphasis(text)
    text, list_count = list_to_bullets(text)
    text = force_paragraph_spacing(text)
    body, tags = extract_trailing_tags(text)
    text = append_tags(collapse_newlines(body), tags)

    lost = missing_spans(text, spans)
    # Code keeps its content but loses the backticks and fences.
    text = unmask(text, spans, restore=lambda span: span.content)

    if counts["bold_italic"]:
        notes.append(
            f"Converted {counts['bold_italic']} bold-italic text(s) to Unicode {to_bold_italic('bold italic')}"
        )
    if counts["bold"]:
        notes.append(f"Converted {counts['bold']} bold text(s) to Unicode {to_bold('bold')}")
    if counts["italic"]:
        notes.append(f"Converted {counts['italic']} italic text(s) to Unicode {to_italic('italic')}")
    if list_count:
        notes.append(f"Converted {list_count} list item(s) to • bullets")
    if tags:
        notes.append(f"Moved {len(tags)} hashtag(s) to end")
    notes.append("Normalized paragraph spacing to double newlines")
    if lost:
        notes.append(f"Could not restore {len(lost)} protected code span(s)")

    return PresetResult(
        markdown=text,
        html=STYLED_TEXT_HTML.format(body=html.escape(text)),
        notes=notes,
    )


def _apply_reverse_chat_syntax(markdown: str, render: Renderer) -> PresetResult:
    notes = []

    masked, spans = mask(markdown)
    text = _BLANK_LINES_RE.sub("\n", masked)
    notes.append("Normalized to single newlines for chat")

    rendered = render(unmask(text, spans), MarkdownOptions(gfm=True, sanitize=True))

    # Italic before bold: the bold rewrite produces single asterisks.
    text = _ITALIC_RE.sub(r"_\1_", text)
    text = _BOLD_ITALIC_RE.sub(r"*_\1_*", text)
    text = _BOLD_RE.sub(r"*\1*", text)
    rendered = _EM_TAG_RE.sub(r"_\1_", rendered)
    rendered = _STRONG_TAG_RE.sub(r"*\1*", rendered)
    notes.append("Converted formatting to chat syntax")

    lost = missing_spans(text, spans)
    if lost:
        notes.append(f"Could not restore {len(lost)} protected code span(s)")

    return PresetResult(markdown=unmask(text, spans), html=rendered, notes=notes)


def _apply_document_wrapper(markdown: str, render: Renderer) -> PresetResult:
    body = render(markdown, MarkdownOptions(gfm=True, sanitize=True, smart_quotes=True))
    page = _templates.get_template("document.html").render(title="Document", body=body)
    return PresetResult(
        markdown=markdown,
        html=page,
        notes=["Generated full HTML document"],
    )


_HANDLERS = {
    Target.STYLED_TEXT: _apply_styled_text,
    Target.REVERSE_CHAT_SYNTAX: _apply_reverse_chat_syntax,
    Target.DOCUMENT_WRAPPER: _apply_document_wrapper,
}
