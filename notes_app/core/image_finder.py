"""
Module for finding illustrative images for a summary.

Search queries are derived from the summary by the language model, then each
query is looked up with the Custom Search image API. Image discovery is an
optional enhancement, so problems here are logged rather than raised.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import requests

from notes_app.config import config
from notes_app.core.gemini_client import GeminiClient
from notes_app.core.prompts import image_queries_template
from notes_app.utils.errors import NotesError, SearchError, upstream_error_message
from notes_app.utils.json_parsing import parse_model_json
from notes_app.utils.logger import logging


class ImageFinder:
    """Class to derive image search queries and look up one image per query."""

    def __init__(
        self,
        client: GeminiClient,
        api_key: str,
        search_engine_id: str,
        search_url: str = config.CUSTOM_SEARCH_URL,
        timeout: float = config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.client = client
        self.api_key = api_key
        self.search_engine_id = search_engine_id
        self.search_url = search_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate_queries(self, summary: str) -> List[str]:
        """
        Ask the model for up to three image search queries.

        Args:
            summary: Summary text

        Returns:
            Search queries; empty when the summary is empty, too generic, or
            the model reply cannot be used
        """
        if not summary:
            logging.info("Summary is empty, skipping image query generation.")
            return []

        prompt = image_queries_template.format(
            max_queries=config.MAX_IMAGE_QUERIES,
            summary=summary[:config.QUERY_CHAR_BUDGET],
        )
        try:
            data = parse_model_json(self.client.generate(prompt))
        except NotesError as e:
            logging.error(f"Failed to generate or parse image queries: {e}")
            return []

        queries = data.get("queries") if isinstance(data, dict) else None
        if not isinstance(queries, list):
            logging.warning(f"Model reply has no 'queries' list: {data!r}")
            return []

        queries = [q.strip() for q in queries if isinstance(q, str) and q.strip()]
        logging.debug(f"Image queries: {queries}")
        return queries[:config.MAX_IMAGE_QUERIES]

    def search_image(self, query: str) -> Optional[str]:
        """
        Look up the top image for a query.

        Returns:
            The first result's link, or None if the search found nothing

        Raises:
            SearchError: If the request fails
        """
        params = {
            "key": self.api_key,
            "cx": self.search_engine_id,
            "q": query,
            "searchType": "image",
            "num": 1,
        }
        try:
            response = self.session.get(self.search_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise SearchError(f"Image search failed for '{query}': {e}") from e

        if not response.ok:
            message = upstream_error_message(response) or f"status {response.status_code}"
            raise SearchError(f"Image search failed for '{query}': {message}")

        try:
            data = response.json()
        except ValueError as e:
            raise SearchError(f"Image search returned invalid JSON for '{query}'") from e

        items = data.get("items") if isinstance(data, dict) else None
        if isinstance(items, list) and items and isinstance(items[0], dict) and items[0].get("link"):
            return items[0]["link"]

        logging.info(f"No image items found for query '{query}'")
        return None

    def _search_or_none(self, query: str) -> Optional[str]:
        try:
            return self.search_image(query)
        except SearchError as e:
            logging.warning(str(e))
            return None

    def find_images(self, queries: List[str]) -> List[str]:
        """
        Search for all queries concurrently.

        A failed query contributes nothing and does not affect the others.

        Args:
            queries: Search queries

        Returns:
            Image URLs in query order, for the queries that found one
        """
        if not queries:
            logging.info("No search queries provided, skipping image search.")
            return []

        with ThreadPoolExecutor(max_workers=len(queries)) as executor:
            results = list(executor.map(self._search_or_none, queries))

        image_urls = [url for url in results if url]
        logging.info(f"Found {len(image_urls)} images for {len(queries)} queries")
        return image_urls

    def discover(self, summary: str) -> List[str]:
        """Derive queries from a summary and return the images found."""
        return self.find_images(self.generate_queries(summary))
