"""
Sentence-aligned splitting of long transcripts.
"""

import re
from typing import List

from notes_app.config import config

# A sentence is a run of non-terminators followed by any terminators.
_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]*")


def split_sentences(text: str) -> List[str]:
    """Split text into sentences, keeping whitespace attached."""
    sentences = _SENTENCE_PATTERN.findall(text)
    return sentences or [text]


def chunk_transcript(text: str, max_size: int = config.CHUNK_SIZE) -> List[str]:
    """
    Split a transcript into chunks of at most ``max_size`` characters.

    Chunks only break between sentences. A single sentence longer than
    ``max_size`` is kept whole as its own chunk.

    Args:
        text: Transcript text
        max_size: Maximum chunk length in characters

    Returns:
        Trimmed, non-empty chunks in transcript order
    """
    if max_size <= 0:
        raise ValueError("max_size must be a positive integer")
    if not text:
        return []

    chunks = []
    current = ""
    for sentence in split_sentences(text):
        if len(current) + len(sentence) > max_size and current:
            chunks.append(current.strip())
            current = ""
        current += sentence
    if current:
        chunks.append(current.strip())

    return [chunk for chunk in chunks if chunk]
