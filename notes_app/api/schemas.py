from pydantic import BaseModel, model_validator
from typing import Optional, List

from notes_app.models.schemas import ProgressEvent, RunState, SummaryMode


class NotesRequest(BaseModel):
    """Model for requesting note generation."""
    url: Optional[str] = None
    transcript: Optional[str] = None
    title: Optional[str] = None
    document_id: Optional[str] = None
    summary_mode: Optional[SummaryMode] = None
    download_images: Optional[bool] = None

    @model_validator(mode="after")
    def require_source(self):
        if not self.url and not (self.transcript and self.transcript.strip()):
            raise ValueError("Either url or transcript is required")
        return self


class NotesResponse(BaseModel):
    """Model for note generation responses."""
    state: RunState
    document_id: Optional[str] = None
    document_url: Optional[str] = None
    image_urls: List[str] = []
    events: List[ProgressEvent] = []


class SettingsPayload(BaseModel):
    """Model for stored settings, using the extension's key names."""
    apiKey: Optional[str] = None
    searchEngineId: Optional[str] = None
    documentId: Optional[str] = None
    summaryMode: Optional[SummaryMode] = None
    downloadImages: Optional[bool] = None
