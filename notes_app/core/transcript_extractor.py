"""
Module for reading a video's transcript.
"""

import time
from pathlib import Path
from typing import List, Optional, Protocol

import requests
from pytubefix import YouTube
from youtube_transcript_api import (
    YouTubeTranscriptApi,
    CouldNotRetrieveTranscript,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
)

from notes_app.config import config
from notes_app.models.schemas import Transcript
from notes_app.utils.helpers import extract_video_id
from notes_app.utils.logger import logging

DEFAULT_TITLE = "Untitled Video"


class TranscriptExtractor(Protocol):
    """Anything that can produce the transcript of the current video."""

    def get_transcript(self) -> Optional[Transcript]:
        ...


class YouTubeTranscriptExtractor:
    """Fetch a YouTube video's captions, waiting a bounded time for them."""

    def __init__(
        self,
        url: str,
        languages: Optional[List[str]] = None,
        timeout: float = config.TRANSCRIPT_TIMEOUT,
        interval: float = config.TRANSCRIPT_POLL_INTERVAL
    ):
        """
        Initialize the extractor.

        Args:
            url: YouTube video URL
            languages: Preferred caption languages, in order
            timeout: Maximum seconds to keep polling for captions
            interval: Seconds between attempts
        """
        self.url = url
        self.video_id = extract_video_id(url)
        if not self.video_id:
            raise ValueError(f"Could not find a video ID in URL: {url}")
        self.languages = languages or ["en"]
        self.timeout = timeout
        self.interval = interval
        self.api = YouTubeTranscriptApi()

    def get_title(self) -> str:
        """Read the video title, falling back to a placeholder."""
        try:
            return YouTube(self.url).title or DEFAULT_TITLE
        except Exception as e:
            logging.warning(f"Could not read title for {self.video_id}: {e}")
            return DEFAULT_TITLE

    def _fetch_segments(self) -> List[str]:
        fetched = self.api.fetch(self.video_id, languages=self.languages)
        return [snippet.text for snippet in fetched if snippet.text]

    def get_transcript(self) -> Optional[Transcript]:
        """
        Poll for the transcript until it is available or the timeout elapses.

        Returns:
            Transcript, or None if captions are missing or never arrived
        """
        title = self.get_title()
        deadline = time.monotonic() + self.timeout

        while True:
            try:
                segments = self._fetch_segments()
                if segments:
                    text = "".join(f"{segment} " for segment in segments)
                    logging.info(f"Transcript for {self.video_id} has {len(segments)} segments")
                    return Transcript(
                        text=text,
                        title=title,
                        video_id=self.video_id,
                        language=self.languages[0],
                    )
                logging.info(f"Transcript for {self.video_id} is empty so far")
            except (TranscriptsDisabled, NoTranscriptFound, VideoUnavailable) as e:
                logging.error(f"No transcript available for {self.video_id}: {e}")
                return None
            except (CouldNotRetrieveTranscript, requests.RequestException) as e:
                logging.debug(f"Transcript not ready for {self.video_id}: {e}")

            if time.monotonic() + self.interval > deadline:
                logging.error(f"Timed out waiting for transcript of {self.video_id}")
                return None
            time.sleep(self.interval)


class FileTranscriptExtractor:
    """Read a transcript saved as a plain text file."""

    def __init__(self, path: str, title: Optional[str] = None):
        self.path = Path(path)
        self.title = title or self.path.stem or DEFAULT_TITLE

    def get_transcript(self) -> Optional[Transcript]:
        if not self.path.is_file():
            raise FileNotFoundError(f"Transcript file not found at {self.path}")
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            logging.error(f"Transcript file {self.path} is empty")
            return None
        return Transcript(text=text, title=self.title)
