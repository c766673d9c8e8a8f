"""Route handlers for the converter API."""

import logging
import os

from flask import Blueprint, jsonify, request

from core.converter import ConverterOptions, PreprocessOptions, convert
from core.presets import apply_preset
from core.syntax import normalize
from core.targets import PLATFORM_CONFIGS, TARGET_ALIASES, Target, measure

logger = logging.getLogger(__name__)

bp = Blueprint("main", __name__)

TRUTHY = ("1", "true", "yes", "on")


def _chat_syntax_default() -> bool:
    return os.environ.get("CHAT_SYNTAX_DEFAULT", "").strip().lower() in TRUTHY


def _request_text(data: dict):
    """Return the ``text`` field, or None when it is present but not a string."""
    text = data.get("text")
    if text is None:
        return ""
    if not isinstance(text, str):
        return None
    return text


def _preprocess_flag(data: dict) -> bool:
    value = data.get("preprocess")
    if value is None:
        return _chat_syntax_default()
    return bool(value)


@bp.route("/api/targets")
def targets():
    """List preset targets with their aliases and character limits."""
    result = {}
    for target in Target:
        config = PLATFORM_CONFIGS[target]
        result[target.value] = {
            "platform": config.name,
            "aliases": [alias for alias, t in TARGET_ALIASES.items() if t is target],
            "limit": config.char_limit,
        }
    return jsonify(result)


@bp.route("/api/convert", methods=["POST"])
def convert_text():
    """Run the full pipeline for a single destination."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400
    text = _request_text(data)
    if text is None:
        return jsonify({"error": "Field 'text' must be a string"}), 400

    options = ConverterOptions(
        preprocess=PreprocessOptions(enabled=_preprocess_flag(data)),
        target=data.get("target"),
    )
    try:
        result = convert(text, options)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(result.to_dict())


@bp.route("/api/preview", methods=["POST"])
def preview():
    """Return preset output for all requested targets."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400
    text = _request_text(data)
    if text is None:
        return jsonify({"error": "Field 'text' must be a string"}), 400

    requested = data.get("targets") or [target.value for target in Target]
    if not isinstance(requested, list):
        return jsonify({"error": "Field 'targets' must be a list"}), 400
    markdown = normalize(text, enabled=_preprocess_flag(data))

    result = {}
    for key in requested:
        try:
            target = Target.parse(key)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        preset = apply_preset(markdown, target)
        config = PLATFORM_CONFIGS[target]
        count = measure(preset.markdown, config)
        limit = config.char_limit

        logger.info("Preview %s: %d chars, %d note(s)", target.value, count, len(preset.notes))
        result[key] = {
            **preset.to_dict(),
            "count": count,
            "limit": limit,
            "over": limit is not None and count > limit,
        }

    return jsonify(result)
