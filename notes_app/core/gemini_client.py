"""
Minimal client for the Gemini generateContent REST endpoint.
"""

from typing import Any, Dict, Optional

import requests

from notes_app.config import config
from notes_app.utils.errors import ModelRequestError, ModelResponseError, upstream_error_message
from notes_app.utils.logger import logging


class GeminiClient:
    """Send prompts to the summarization model and return its text reply."""

    def __init__(
        self,
        api_key: str,
        api_url: str = config.GEMINI_API_URL,
        timeout: float = config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            api_key: Gemini API key, sent as the ``key`` query parameter
            api_url: generateContent endpoint
            timeout: Seconds to wait for each request
            session: Optional requests session to reuse
        """
        if not api_key:
            raise ValueError("Gemini API key is required.")
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def build_payload(prompt: str, max_output_tokens: Optional[int] = None) -> Dict[str, Any]:
        """Build the generateContent request body."""
        payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if max_output_tokens:
            payload["generationConfig"] = {"maxOutputTokens": max_output_tokens}
        return payload

    def generate(self, prompt: str, max_output_tokens: Optional[int] = None) -> str:
        """
        Run one generation request.

        Args:
            prompt: Prompt text
            max_output_tokens: Optional output token limit

        Returns:
            Text of the first candidate's first part

        Raises:
            ModelRequestError: If the request fails or returns a non-success status
            ModelResponseError: If the reply has no candidate text
        """
        try:
            response = self.session.post(
                self.api_url,
                params={"key": self.api_key},
                json=self.build_payload(prompt, max_output_tokens),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ModelRequestError(f"Gemini API request failed: {e}") from e

        if not response.ok:
            message = upstream_error_message(response) or f"status {response.status_code}"
            raise ModelRequestError(f"Gemini API error: {message}")

        try:
            data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logging.error(f"Unexpected Gemini response shape: {e}")
            raise ModelResponseError("Gemini API returned no text in its reply") from e

        if not isinstance(text, str):
            raise ModelResponseError("Gemini API returned no text in its reply")
        return text
