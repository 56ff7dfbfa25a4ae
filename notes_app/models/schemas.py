"""
Data models for the YouTube notes generator application.
"""
import os
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, field_validator, model_validator

from notes_app.config import config
from notes_app.utils.errors import ConfigurationError


class SummaryMode(str, Enum):
    """Summarization strategies."""
    DETAILED = "detailed"
    CHUNKED = "chunked"


class Severity(str, Enum):
    """Severity of a progress notification."""
    NEUTRAL = "neutral"
    SUCCESS = "success"
    ERROR = "error"


class RunState(str, Enum):
    """States of a single note generation run."""
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    RESOLVING_DOCUMENT = "resolving_document"
    SUMMARIZING = "summarizing"
    WRITING_SUMMARY = "writing_summary"
    DISCOVERING_IMAGES = "discovering_images"
    WRITING_IMAGES = "writing_images"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Transcript(BaseModel):
    """Spoken text captured from a video page."""
    text: str
    title: str = "Untitled Video"
    video_id: Optional[str] = None
    language: Optional[str] = None

    model_config = {"frozen": True}


class ProgressEvent(BaseModel):
    """Transient status notification emitted during a run."""
    message: str
    severity: Severity = Severity.NEUTRAL


class NotesConfig(BaseModel):
    """Configuration for one note generation run, validated once at start."""
    api_key: str
    search_engine_id: Optional[str] = None
    document_id: Optional[str] = None
    summary_mode: SummaryMode = SummaryMode.CHUNKED
    download_images: bool = False
    insert_images: bool = True
    save_images_locally: bool = True
    chunk_size: int = Field(default=config.CHUNK_SIZE, gt=0)
    request_timeout: float = Field(default=config.REQUEST_TIMEOUT, gt=0)

    @field_validator("document_id", "search_engine_id", mode="before")
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_image_settings(self):
        if self.download_images and not self.search_engine_id:
            raise ValueError("Search Engine ID is required for downloading images.")
        return self

    @classmethod
    def from_sources(
        cls,
        settings: Optional[Dict[str, Any]] = None,
        **overrides: Any
    ) -> "NotesConfig":
        """
        Build a run configuration from stored settings, environment and overrides.

        Stored settings use the extension's camelCase keys. Environment values
        win over stored settings, and explicit overrides (None means unset)
        win over both.

        Args:
            settings: Values loaded from the settings store
            **overrides: Explicit values, e.g. from CLI flags or an API request

        Returns:
            Validated NotesConfig

        Raises:
            ConfigurationError: If a required value is missing or invalid
        """
        settings = settings or {}
        values: Dict[str, Any] = {
            "api_key": settings.get("apiKey"),
            "search_engine_id": settings.get("searchEngineId"),
            "document_id": settings.get("documentId"),
            "summary_mode": settings.get("summaryMode"),
            "download_images": settings.get("downloadImages"),
        }

        env_values = {
            "api_key": os.getenv("GEMINI_API_KEY"),
            "search_engine_id": os.getenv("SEARCH_ENGINE_ID"),
            "document_id": os.getenv("GOOGLE_DOC_ID"),
            "summary_mode": os.getenv("SUMMARY_MODE"),
        }
        for key, value in env_values.items():
            if value:
                values[key] = value
        if os.getenv("DOWNLOAD_IMAGES") is not None:
            values["download_images"] = os.getenv("DOWNLOAD_IMAGES").strip().lower() in ("1", "true", "yes", "on")

        for key, value in overrides.items():
            if value is not None:
                values[key] = value

        values = {key: value for key, value in values.items() if value is not None}

        if not values.get("api_key"):
            raise ConfigurationError("API Key is not set.")

        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigurationError(_first_validation_message(e)) from e


class NotesResult(BaseModel):
    """Outcome of a completed note generation run."""
    document_id: str
    document_url: str
    state: RunState
    summary: str
    image_urls: List[str] = []
    saved_files: List[str] = []


def _first_validation_message(error: ValueError) -> str:
    """Return the first readable message from a pydantic validation error."""
    errors = getattr(error, "errors", None)
    if callable(errors):
        details = errors()
        if details:
            message = str(details[0].get("msg", error))
            return message.removeprefix("Value error, ")
    return str(error)
