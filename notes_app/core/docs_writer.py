"""
Module for appending content to a Google Doc.

Insert positions in the Docs API are absolute indices into the document body,
so every append reads the current end of the document first. Appends to one
document must therefore run one after another; ``DocumentCursor`` enforces
that within a process.
"""

import threading
import weakref
from typing import Any, Dict, List, Optional

import requests

from notes_app.config import config
from notes_app.utils.errors import DocumentUpdateError, upstream_error_message
from notes_app.utils.logger import logging

# Entries disappear once no run or cursor holds the lock.
_DOCUMENT_LOCKS: "weakref.WeakValueDictionary[str, threading.RLock]" = weakref.WeakValueDictionary()
_DOCUMENT_LOCKS_GUARD = threading.Lock()


def document_lock(document_id: str) -> threading.RLock:
    """Return the process-wide lock that serializes writes to one document."""
    with _DOCUMENT_LOCKS_GUARD:
        lock = _DOCUMENT_LOCKS.get(document_id)
        if lock is None:
            lock = _DOCUMENT_LOCKS[document_id] = threading.RLock()
        return lock


def compute_end_index(document: Dict[str, Any]) -> int:
    """
    Compute the insertion index for an append.

    Args:
        document: Document resource containing ``body.content``

    Returns:
        The last element's end index minus one, which places new content
        before the document's implicit trailing newline
    """
    content = (document.get("body") or {}).get("content") or []
    if not content:
        return 0
    last_element = content[-1]
    return (last_element.get("endIndex") or 1) - 1


class DocsClient:
    """Client for the Google Docs REST API."""

    def __init__(
        self,
        token: str,
        api_url: str = config.DOCS_API_URL,
        timeout: float = config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            token: OAuth bearer token with the documents scope
            api_url: Base documents endpoint
            timeout: Seconds to wait for each request
            session: Optional requests session to reuse
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Authorization": f"Bearer {token}"}

    def _request(self, method: str, url: str, action: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.session.request(
                method, url, headers=self.headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise DocumentUpdateError(f"Failed to {action}: {e}") from e

        if not response.ok:
            message = upstream_error_message(response) or f"Status: {response.status_code}"
            logging.error(f"Google Docs API error while trying to {action}: {message}")
            raise DocumentUpdateError(f"Failed to {action}. {message}", response.status_code)

        try:
            return response.json()
        except ValueError:
            return {}

    def create_document(self, title: str) -> Dict[str, Any]:
        """Create an empty document and return its resource."""
        document = self._request("POST", self.api_url, "create document", json={"title": title})
        if not document.get("documentId"):
            raise DocumentUpdateError("Failed to create document. No document ID returned.")
        logging.info(f"Created Google Doc {document['documentId']}")
        return document

    def get_document(self, document_id: str) -> Dict[str, Any]:
        """Fetch a document's body content."""
        return self._request(
            "GET",
            f"{self.api_url}/{document_id}",
            "get document",
            params={"fields": "body(content)"},
        )

    def batch_update(self, document_id: str, requests_: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Apply a list of edit requests to a document."""
        if not requests_:
            return {}
        return self._request(
            "POST",
            f"{self.api_url}/{document_id}:batchUpdate",
            "update doc",
            json={"requests": requests_},
        )


class DocumentCursor:
    """Single writer that appends content at the end of one document."""

    def __init__(self, client: DocsClient, document_id: str):
        self.client = client
        self.document_id = document_id
        self._lock = document_lock(document_id)

    @property
    def url(self) -> str:
        return config.DOCS_EDIT_URL.format(document_id=self.document_id)

    def end_index(self) -> int:
        """Read the document and return the current append position."""
        return compute_end_index(self.client.get_document(self.document_id))

    def _append(self, request_type: str, body: Dict[str, Any]) -> int:
        with self._lock:
            index = self.end_index()
            self.client.batch_update(self.document_id, [{
                request_type: {"location": {"index": index}, **body}
            }])
            return index

    def append_text(self, text: str) -> int:
        """
        Insert text at the end of the document.

        Not idempotent: appending the same text twice inserts it twice.

        Returns:
            The index the text was inserted at
        """
        return self._append("insertText", {"text": text})

    def append_image(self, uri: str) -> int:
        """Insert an inline image at the end of the document at its default size."""
        return self._append("insertInlineImage", {"uri": uri})

    def append_notes(self, title: str, summary: str) -> int:
        """Append a titled summary section."""
        return self.append_text(f"\n{title}\n\n**Summary**\n{summary}\n\n")
