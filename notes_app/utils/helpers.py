"""
Helper utility functions for the YouTube notes generator application.
"""

import json
import re
from typing import Dict, Any, Optional
from urllib.parse import urlparse, parse_qs

_IMAGE_EXTENSION_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif|webp)", re.IGNORECASE)


def sanitize_title(title: str, max_length: int = 50) -> str:
    """
    Make a video title safe to use inside a filename.

    Args:
        title: The title to sanitize
        max_length: Maximum length of the result

    Returns:
        Title with path-unsafe characters and leading dots replaced by '-'
    """
    sanitized = re.sub(r'[\\/?%*:"|<>]', "-", title)
    sanitized = re.sub(r"\.{2,}", "-", sanitized)
    sanitized = re.sub(r"^\.", "-", sanitized)
    return sanitized[:max_length]


def image_extension(url: str, default: str = "jpg") -> str:
    """
    Guess an image file extension from its URL.

    Args:
        url: Image URL
        default: Extension to use when none is recognised

    Returns:
        File extension (without the dot)
    """
    match = _IMAGE_EXTENSION_PATTERN.search(url)
    return match.group(1) if match else default


def image_filename(url: str, title: str, index: int) -> str:
    """Build the relative filename for the ``index``-th (1-based) image of a video."""
    return f"notes/{sanitize_title(title)}_image_{index}.{image_extension(url)}"


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract a YouTube video ID from a URL.

    Args:
        url: YouTube URL

    Returns:
        Video ID or None if extraction fails
    """
    parsed = urlparse(url)
    if parsed.hostname in ("youtu.be", "www.youtu.be"):
        candidate = parsed.path.lstrip("/").split("/")[0]
        return candidate or None
    query_id = parse_qs(parsed.query).get("v")
    if query_id:
        return query_id[0]

    patterns = [
        r'(?:embed\/)([0-9A-Za-z_-]{11})',
        r'(?:shorts\/)([0-9A-Za-z_-]{11})',
    ]
    for pattern in patterns:
        match = re.search(pattern, url)
        if match:
            return match.group(1)

    return None


def save_json(data: Dict[str, Any], filepath: str, pretty: bool = True) -> None:
    """
    Save data to a JSON file.

    Args:
        data: Data to save
        filepath: Path to save the file
        pretty: Whether to format the JSON for readability
    """
    with open(filepath, 'w', encoding='utf-8') as f:
        if pretty:
            json.dump(data, f, indent=2, ensure_ascii=False)
        else:
            json.dump(data, f, ensure_ascii=False)


def load_json(filepath: str) -> Dict[str, Any]:
    """
    Load data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Loaded JSON data
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


def mask_secret(value: Optional[str], visible: int = 4) -> Optional[str]:
    """Hide all but the last few characters of a secret."""
    if not value:
        return value
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
