"""
Exception types raised by the notes pipeline.

Every error carries a single human-readable message; the orchestrator forwards
that message to the progress sink unchanged.
"""

from typing import Any, Optional

import requests


class NotesError(Exception):
    """Base class for all notes pipeline errors."""


class ConfigurationError(NotesError):
    """A required setting or credential is missing."""


class AuthError(NotesError):
    """The document API credential could not be acquired."""


class TranscriptUnavailableError(NotesError):
    """No transcript could be read from the video page."""


class ModelRequestError(NotesError):
    """The summarization service returned a non-success status."""


class ModelResponseError(NotesError):
    """The summarization service replied with an unusable payload."""


class SearchError(NotesError):
    """An image search request failed."""


class DocumentUpdateError(NotesError):
    """Creating, reading, or appending to the remote document failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def upstream_error_message(response: requests.Response) -> Optional[str]:
    """
    Pull the ``error.message`` field out of a Google API error body.

    Args:
        response: The failed HTTP response

    Returns:
        The upstream message, or None if the body carries none
    """
    try:
        body: Any = response.json()
    except ValueError:
        return None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return None
