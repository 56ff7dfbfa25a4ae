"""
Parsing of JSON payloads returned by the language model.
"""

import json
import re
from typing import Any

from notes_app.utils.errors import ModelResponseError

_FENCE_PATTERN = re.compile(r"```(?:json)?")


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers and surrounding whitespace."""
    return _FENCE_PATTERN.sub("", text).strip()


def parse_model_json(text: str) -> Any:
    """
    Parse a model reply that may be wrapped in a markdown code block.

    Args:
        text: Raw reply text

    Returns:
        The decoded JSON value

    Raises:
        ModelResponseError: If the text is not valid JSON once fences are removed
    """
    cleaned = strip_code_fences(text or "")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ModelResponseError(f"Model returned invalid JSON: {e.msg}") from e
