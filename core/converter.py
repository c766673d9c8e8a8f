"""Full conversion pipeline.

1. Chat-syntax preprocessing (optional)
2. Markdown to HTML
3. Platform preset (optional); its markdown and HTML replace the plain ones
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Optional

from core import markdown_engine
from core.markdown_engine import MarkdownOptions
from core.presets import PresetResult, Renderer, apply_preset
from core.syntax import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreprocessOptions:
    enabled: bool = False


@dataclass(frozen=True)
class ConverterOptions:
    preprocess: PreprocessOptions = field(default_factory=PreprocessOptions)
    markdown: MarkdownOptions = field(default_factory=MarkdownOptions)
    target: Optional[str] = None


@dataclass
class ConverterResult:
    markdown: str
    html: str
    preset: Optional[PresetResult] = None

    def to_dict(self) -> dict:
        return asdict(self)


def convert(
    text: str,
    options: Optional[ConverterOptions] = None,
    renderer: Optional[Renderer] = None,
) -> ConverterResult:
    """Convert ``text`` to markdown and HTML for one destination.

    Example:
        convert("Hello *world*!", ConverterOptions(preprocess=PreprocessOptions(enabled=True)))
        # html: '<p>Hello <strong>world</strong>!</p>\\n'

    Raises:
        ConfigurationError: ``options.target`` is not a known preset.
    """
    options = options or ConverterOptions()
    render = renderer or markdown_engine.render

    markdown = normalize(text or "", enabled=options.preprocess.enabled)

    if options.target is None:
        return ConverterResult(markdown=markdown, html=render(markdown, options.markdown))

    preset = apply_preset(markdown, options.target, renderer=render)
    logger.debug("Converted with %s preset: %d note(s)", options.target, len(preset.notes))
    return ConverterResult(markdown=preset.markdown, html=preset.html, preset=preset)
