"""
Module for summarizing transcripts using the Gemini model.
"""

from typing import Callable, List, Optional

from notes_app.config import config
from notes_app.core.chunker import chunk_transcript
from notes_app.core.gemini_client import GeminiClient
from notes_app.core.prompts import (
    detailed_summary_template,
    chunk_summary_template,
    chunk_context,
)
from notes_app.models.schemas import SummaryMode
from notes_app.utils.errors import ModelResponseError
from notes_app.utils.json_parsing import parse_model_json
from notes_app.utils.logger import logging

ChunkCallback = Callable[[int, int], None]


class TranscriptSummarizer:
    """Class to handle transcript summarization operations."""

    def __init__(self, client: GeminiClient, chunk_size: int = config.CHUNK_SIZE):
        """
        Initialize the summarizer.

        Args:
            client: Gemini client used for every request
            chunk_size: Maximum characters per chunk in chunked mode
        """
        self.client = client
        self.chunk_size = chunk_size

    def summarize(
        self,
        transcript_text: str,
        mode: SummaryMode,
        on_chunk: Optional[ChunkCallback] = None
    ) -> str:
        """
        Summarize a transcript with the requested strategy.

        Args:
            transcript_text: Full transcript text
            mode: Detailed (single request) or chunked (one request per chunk)
            on_chunk: Called with (index, total) before each chunk request

        Returns:
            Markdown summary text
        """
        if mode == SummaryMode.DETAILED:
            return self.summarize_detailed(transcript_text)
        return self.summarize_chunked(transcript_text, on_chunk=on_chunk)

    def summarize_detailed(self, transcript_text: str) -> str:
        """
        Summarize the whole transcript in one request.

        The model is asked for a JSON object with a single ``summary`` key.
        """
        prompt = detailed_summary_template.format(
            content=transcript_text[:config.DETAILED_CHAR_BUDGET]
        )
        reply = self.client.generate(prompt, max_output_tokens=config.MAX_OUTPUT_TOKENS)
        data = parse_model_json(reply)

        summary = data.get("summary") if isinstance(data, dict) else None
        if not isinstance(summary, str):
            raise ModelResponseError("Model reply is missing the 'summary' field")

        logging.info(f"Detailed summary generated ({len(summary)} characters)")
        return summary

    def summarize_chunked(
        self,
        transcript_text: str,
        on_chunk: Optional[ChunkCallback] = None
    ) -> str:
        """
        Summarize the transcript chunk by chunk, in order.

        Chunks are sent one at a time. Each prompt tells the model whether it
        is looking at the beginning, a middle part, the end, or the entirety.
        """
        chunks = chunk_transcript(transcript_text, self.chunk_size)
        if not chunks:
            raise ModelResponseError("Transcript produced no content to summarize")

        interim_summaries: List[str] = []
        total = len(chunks)
        for index, chunk in enumerate(chunks):
            if on_chunk:
                on_chunk(index, total)
            prompt = chunk_summary_template.format(
                context=chunk_context(index == 0, index == total - 1),
                chunk=chunk,
            )
            interim_summaries.append(self.client.generate(prompt))
            logging.info(f"Summarized chunk {index + 1} of {total}")

        return "\n\n".join(interim_summaries)
