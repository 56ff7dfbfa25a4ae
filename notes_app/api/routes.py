"""
API routes for the YouTube Notes Generator application.
"""

from fastapi import APIRouter, HTTPException, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from notes_app.api.schemas import NotesRequest, NotesResponse, SettingsPayload
from notes_app.core.progress import CollectingProgressSink
from notes_app.core.settings_store import SettingsStore
from notes_app.core.transcript_extractor import YouTubeTranscriptExtractor
from notes_app.main import generate_notes, read_transcript
from notes_app.models.schemas import NotesConfig, RunState, Transcript
from notes_app.utils.errors import (
    ConfigurationError,
    NotesError,
    TranscriptUnavailableError,
)
from notes_app.utils.helpers import mask_secret
from notes_app.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["notes"])


def get_settings_store() -> SettingsStore:
    return SettingsStore()


@router.post("/notes", response_model=NotesResponse)
async def create_notes(
    request: NotesRequest,
    store: SettingsStore = Depends(get_settings_store),
):
    """
    Summarize a video's transcript into a Google Doc.

    - Provide either a YouTube `url` or the `transcript` text itself
    - Stored settings fill in anything the request leaves out
    """
    try:
        notes_config = NotesConfig.from_sources(
            store.load(),
            document_id=request.document_id,
            summary_mode=request.summary_mode,
            download_images=request.download_images,
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        if request.transcript and request.transcript.strip():
            transcript = Transcript(text=request.transcript, title=request.title or "Untitled Video")
        else:
            extractor = YouTubeTranscriptExtractor(request.url)
            transcript = await run_in_threadpool(read_transcript, extractor, request.title)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TranscriptUnavailableError as e:
        raise HTTPException(status_code=404, detail=str(e))

    sink = CollectingProgressSink()
    try:
        result = await run_in_threadpool(generate_notes, transcript, notes_config, None, sink)
    except NotesError as e:
        logging.error(f"Note generation failed: {e}")
        failed = NotesResponse(state=RunState.FAILED, events=sink.events)
        return JSONResponse(status_code=502, content=failed.model_dump(mode="json"))

    return NotesResponse(
        state=result.state,
        document_id=result.document_id,
        document_url=result.document_url,
        image_urls=result.image_urls,
        events=sink.events,
    )


@router.get("/settings", response_model=SettingsPayload)
async def get_settings(store: SettingsStore = Depends(get_settings_store)):
    """Return stored settings with the API key masked."""
    settings = store.load()
    settings["apiKey"] = mask_secret(settings.get("apiKey"))
    return SettingsPayload(**settings)


@router.put("/settings", response_model=SettingsPayload)
async def update_settings(
    payload: SettingsPayload,
    store: SettingsStore = Depends(get_settings_store),
):
    """Store settings; an API key must be present after the update."""
    try:
        settings = store.save(payload.model_dump(mode="json", exclude_none=True))
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    settings["apiKey"] = mask_secret(settings.get("apiKey"))
    return SettingsPayload(**settings)
