"""
Configuration for pytest tests.
"""

import os
import tempfile

# Point the application at throwaway directories before it is imported.
_TEST_DATA_DIR = tempfile.mkdtemp(prefix="notes_test_data_")
os.environ["DATA_DIR"] = _TEST_DATA_DIR
os.environ["ENVIRONMENT"] = "development"

import pytest
import requests


ENV_KEYS = (
    "GEMINI_API_KEY",
    "SEARCH_ENGINE_ID",
    "GOOGLE_DOC_ID",
    "SUMMARY_MODE",
    "DOWNLOAD_IMAGES",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep real credentials in the environment out of the tests."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(scope="session", autouse=True)
def cleanup_test_data():
    yield
    import shutil
    shutil.rmtree(_TEST_DATA_DIR, ignore_errors=True)


class FakeResponse:
    """Just enough of requests.Response for the clients under test."""

    def __init__(self, status_code=200, json_data=None, content=b""):
        self.status_code = status_code
        self._json = json_data
        self.content = content

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


def gemini_reply(text):
    """Build a generateContent response carrying ``text``."""
    return FakeResponse(json_data={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def gemini_error(message, status_code=400):
    return FakeResponse(status_code=status_code, json_data={"error": {"message": message}})


class FakeDocsBackend:
    """
    In-memory stand-in for the Google Docs API.

    The document body is kept as plain text that always ends with the
    implicit trailing newline. Indices start at 1, as in the real API.
    """

    def __init__(self, document_id="doc-123", text="\n"):
        self.document_id = document_id
        self.text = text
        self.images = []
        self.created_titles = []
        self.batch_requests = []
        self.fail_updates = False

    def body(self):
        return {
            "body": {
                "content": [
                    {"endIndex": 1, "sectionBreak": {}},
                    {"startIndex": 1, "endIndex": len(self.text) + 1},
                ]
            }
        }

    def handle(self, method, url, json=None, params=None):
        base = "https://docs.googleapis.com/v1/documents"
        if method == "POST" and url == base:
            self.created_titles.append(json["title"])
            return FakeResponse(json_data={"documentId": self.document_id, "title": json["title"]})
        if method == "GET" and url == f"{base}/{self.document_id}":
            return FakeResponse(json_data=self.body())
        if method == "POST" and url == f"{base}/{self.document_id}:batchUpdate":
            if self.fail_updates:
                return FakeResponse(status_code=400, json_data={"error": {"message": "Invalid requests"}})
            for request in json["requests"]:
                self.batch_requests.append(request)
                if "insertText" in request:
                    index = request["insertText"]["location"]["index"]
                    insert = request["insertText"]["text"]
                    self.text = self.text[:index - 1] + insert + self.text[index - 1:]
                elif "insertInlineImage" in request:
                    index = request["insertInlineImage"]["location"]["index"]
                    self.images.append((index, request["insertInlineImage"]["uri"]))
                    # An inline image occupies one index position.
                    self.text = self.text[:index - 1] + "#" + self.text[index - 1:]
            return FakeResponse(json_data={"replies": [{} for _ in json["requests"]]})
        return FakeResponse(status_code=404, json_data={"error": {"message": "Requested entity was not found."}})


class FakeSession:
    """
    Route requests to the fake Docs backend, a queue of Gemini replies,
    and a table of image search results.
    """

    def __init__(self, docs=None, gemini_replies=None, search_results=None, downloads=None):
        self.docs = docs or FakeDocsBackend()
        self.gemini_replies = list(gemini_replies or [])
        self.search_results = search_results or {}
        self.downloads = downloads or {}
        self.gemini_prompts = []
        self.search_queries = []
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, json=None, params=None):
        self.calls.append((method, url))
        return self.docs.handle(method, url, json=json, params=params)

    def post(self, url, params=None, json=None, timeout=None):
        self.calls.append(("POST", url))
        self.gemini_prompts.append(json["contents"][0]["parts"][0]["text"])
        reply = self.gemini_replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def get(self, url, params=None, timeout=None):
        self.calls.append(("GET", url))
        if params and params.get("searchType") == "image":
            query = params["q"]
            self.search_queries.append(query)
            result = self.search_results.get(query, FakeResponse(json_data={}))
            if isinstance(result, Exception):
                raise result
            return result
        result = self.downloads.get(url, FakeResponse(status_code=404))
        if isinstance(result, Exception):
            raise result
        return result

    def count(self, method, url_part):
        return sum(1 for m, u in self.calls if m == method and url_part in u)


@pytest.fixture
def docs_backend():
    return FakeDocsBackend()


@pytest.fixture
def tmp_settings_path(tmp_path):
    return tmp_path / "settings.json"
