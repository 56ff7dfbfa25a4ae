"""
Module that runs the full note generation process for one video.

A run moves through a fixed sequence of states, announcing each one to the
progress sink before doing its work:

    idle -> authenticating -> resolving_document -> summarizing
         -> writing_summary [-> discovering_images -> writing_images]
         -> succeeded | failed

Failures before the image stage end the run. Image problems only cost the
images; the notes themselves are already in the document by then.
"""

from typing import List, Optional

import requests

from notes_app.core.auth import CredentialProvider
from notes_app.core.docs_writer import DocsClient, DocumentCursor, document_lock
from notes_app.core.gemini_client import GeminiClient
from notes_app.core.image_downloader import ImageDownloader
from notes_app.core.image_finder import ImageFinder
from notes_app.core.progress import LoggingProgressSink, ProgressNotifier, ProgressSink
from notes_app.core.summarizer import TranscriptSummarizer
from notes_app.models.schemas import (
    NotesConfig,
    NotesResult,
    RunState,
    Severity,
    SummaryMode,
    Transcript,
)
from notes_app.utils.errors import AuthError, NotesError
from notes_app.utils.logger import logging


class NotesOrchestrator:
    """Sequence summarization, document writing and image discovery."""

    def __init__(
        self,
        notes_config: NotesConfig,
        credential_provider: CredentialProvider,
        progress_sink: Optional[ProgressSink] = None,
        session: Optional[requests.Session] = None,
        image_downloader: Optional[ImageDownloader] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            notes_config: Validated configuration for this run
            credential_provider: Source of the Docs API bearer token
            progress_sink: Receiver of progress events (defaults to the log)
            session: Optional requests session shared by all HTTP clients
            image_downloader: Local file writer for found images
        """
        self.config = notes_config
        self.credential_provider = credential_provider
        self.progress = ProgressNotifier(progress_sink or LoggingProgressSink())
        self.session = session or requests.Session()
        self.image_downloader = image_downloader or ImageDownloader(
            timeout=notes_config.request_timeout, session=self.session
        )
        self.gemini = GeminiClient(
            notes_config.api_key, timeout=notes_config.request_timeout, session=self.session
        )
        self.state = RunState.IDLE

    def _transition(self, state: RunState, message: str) -> None:
        self.state = state
        self.progress.emit(message)

    def run(self, transcript: Transcript) -> NotesResult:
        """
        Generate notes for a transcript and write them to the document.

        Args:
            transcript: Captured transcript and video title

        Returns:
            NotesResult describing the written document

        Raises:
            NotesError: If authentication, document resolution, summarization
                or writing the summary fails
        """
        try:
            result = self._run(transcript)
        except Exception as e:
            self.state = RunState.FAILED
            logging.error(f"Note generation failed: {e}")
            self.progress.emit(f"Error: {e}", Severity.ERROR)
            raise

        self.state = RunState.SUCCEEDED
        self.progress.emit("Success! Opening Google Doc...", Severity.SUCCESS)
        return result

    def _run(self, transcript: Transcript) -> NotesResult:
        self._transition(RunState.AUTHENTICATING, "Authenticating user...")
        token = self.credential_provider.get_auth_token()
        if not token:
            raise AuthError("Could not obtain a Google Docs access token.")
        docs = DocsClient(token, timeout=self.config.request_timeout, session=self.session)

        cursor = self._resolve_document(docs, transcript.title)

        summary = self._summarize(transcript)

        with document_lock(cursor.document_id):
            self._transition(RunState.WRITING_SUMMARY, "Adding notes to Google Doc...")
            cursor.append_notes(transcript.title, summary)
            logging.info("Finished adding text to the document.")

            image_urls: List[str] = []
            saved_files: List[str] = []
            if self.config.download_images and summary:
                image_urls, saved_files = self._add_images(cursor, summary, transcript.title)

        return NotesResult(
            document_id=cursor.document_id,
            document_url=cursor.url,
            state=RunState.SUCCEEDED,
            summary=summary,
            image_urls=image_urls,
            saved_files=saved_files,
        )

    def _resolve_document(self, docs: DocsClient, title: str) -> DocumentCursor:
        if self.config.document_id:
            self._transition(RunState.RESOLVING_DOCUMENT, "Using existing Google Doc...")
            return DocumentCursor(docs, self.config.document_id)

        self._transition(RunState.RESOLVING_DOCUMENT, "Creating new Google Doc...")
        document = docs.create_document(f"Notes for: {title}")
        return DocumentCursor(docs, document["documentId"])

    def _summarize(self, transcript: Transcript) -> str:
        summarizer = TranscriptSummarizer(self.gemini, chunk_size=self.config.chunk_size)

        if self.config.summary_mode == SummaryMode.DETAILED:
            self._transition(RunState.SUMMARIZING, "Generating detailed summary...")
            summary = summarizer.summarize_detailed(transcript.text)
        else:
            self._transition(RunState.SUMMARIZING, "Generating summary...")
            summary = summarizer.summarize_chunked(
                transcript.text,
                on_chunk=lambda index, total: self.progress.emit(
                    f"Summarizing part {index + 1} of {total}..."
                ),
            )
        logging.info("AI summary generated successfully.")
        return summary

    def _add_images(self, cursor: DocumentCursor, summary: str, title: str):
        finder = ImageFinder(
            self.gemini,
            api_key=self.config.api_key,
            search_engine_id=self.config.search_engine_id,
            timeout=self.config.request_timeout,
            session=self.session,
        )

        self._transition(RunState.DISCOVERING_IMAGES, "Generating image queries...")
        try:
            queries = finder.generate_queries(summary)
            if not queries:
                self.progress.emit("No image queries generated, skipping images.")
                return [], []
            self.progress.emit(f"Searching for {len(queries)} images...")
            image_urls = finder.find_images(queries)
        except NotesError as e:
            logging.error(f"Image discovery failed: {e}")
            self.progress.emit(f"Image discovery failed: {e}")
            return [], []

        if not image_urls:
            self.progress.emit("No images found.")
            return [], []

        self._transition(RunState.WRITING_IMAGES, f"Adding {len(image_urls)} images...")
        if self.config.insert_images:
            for uri in image_urls:
                try:
                    cursor.append_image(uri)
                except NotesError as e:
                    logging.error(f"Could not insert image {uri}: {e}")
                    self.progress.emit(f"Could not insert image: {e}")

        saved_files: List[str] = []
        if self.config.save_images_locally:
            saved_files = self.image_downloader.save_all(image_urls, title)

        return image_urls, saved_files
