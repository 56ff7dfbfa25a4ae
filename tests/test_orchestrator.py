"""
Tests for the note generation orchestrator.
"""

import math
import pytest
from unittest.mock import MagicMock, patch

from notes_app.core.auth import StaticTokenProvider
from notes_app.core.chunker import chunk_transcript
from notes_app.core.docs_writer import DocumentCursor
from notes_app.core.image_downloader import ImageDownloader
from notes_app.core.orchestrator import NotesOrchestrator
from notes_app.core.progress import CollectingProgressSink
from notes_app.models.schemas import (
    NotesConfig,
    RunState,
    Severity,
    SummaryMode,
    Transcript,
)
from notes_app.utils.errors import (
    AuthError,
    DocumentUpdateError,
    ModelRequestError,
    ModelResponseError,
)

from conftest import FakeResponse, FakeSession, gemini_error, gemini_reply


def long_transcript(length=12_000):
    sentence = "This sentence is part of a long lecture about testing. "
    text = sentence * (length // len(sentence) + 1)
    return text[:length]


@pytest.fixture
def sink():
    return CollectingProgressSink()


@pytest.fixture
def transcript():
    return Transcript(text="Testing matters. Mocks help. Fixtures too.", title="Test Video")


def make_orchestrator(session, sink, tmp_path=None, **config_values):
    values = {"api_key": "test_api_key"}
    values.update(config_values)
    downloader = ImageDownloader(output_directory=tmp_path, session=session) if tmp_path else None
    return NotesOrchestrator(
        NotesConfig(**values),
        StaticTokenProvider("test-token"),
        progress_sink=sink,
        session=session,
        image_downloader=downloader,
    )


def test_chunked_run_end_to_end(sink):
    """A 12,000 character transcript in chunked mode without images."""
    text = long_transcript()
    expected_chunks = chunk_transcript(text, 5000)
    assert len(expected_chunks) == math.ceil(len(text) / 5000)

    session = FakeSession(gemini_replies=[
        gemini_reply(f"- part {i}") for i in range(len(expected_chunks))
    ])
    orchestrator = make_orchestrator(session, sink, summary_mode=SummaryMode.CHUNKED)

    result = orchestrator.run(Transcript(text=text, title="Long Lecture"))

    assert orchestrator.state == RunState.SUCCEEDED
    assert result.state == RunState.SUCCEEDED
    assert len(session.gemini_prompts) == len(expected_chunks)
    assert session.docs.created_titles == ["Notes for: Long Lecture"]
    assert session.count("POST", ":batchUpdate") == 1
    assert result.document_id == "doc-123"
    assert result.document_url == "https://docs.google.com/document/d/doc-123/edit"
    assert result.summary == "\n\n".join(f"- part {i}" for i in range(len(expected_chunks)))
    assert "**Summary**" in session.docs.text
    assert sink.events[-1].severity == Severity.SUCCESS
    assert [e.severity for e in sink.events[:-1]] == [Severity.NEUTRAL] * (len(sink.events) - 1)


def test_progress_messages_in_order(sink, transcript):
    session = FakeSession(gemini_replies=[gemini_reply("- summary")])
    make_orchestrator(session, sink).run(transcript)

    assert [e.message for e in sink.events] == [
        "Authenticating user...",
        "Creating new Google Doc...",
        "Generating summary...",
        "Summarizing part 1 of 1...",
        "Adding notes to Google Doc...",
        "Success! Opening Google Doc...",
    ]


def test_existing_document_is_reused(sink, transcript):
    session = FakeSession(gemini_replies=[gemini_reply("- summary")])
    session.docs.text = "Earlier notes\n"

    result = make_orchestrator(session, sink, document_id="doc-123").run(transcript)

    assert result.document_id == "doc-123"
    assert session.docs.created_titles == []
    assert session.docs.text.startswith("Earlier notes")
    assert sink.events[1].message == "Using existing Google Doc..."


def test_detailed_mode(sink, transcript):
    session = FakeSession(gemini_replies=[gemini_reply('```json\n{"summary": "# Notes"}\n```')])

    result = make_orchestrator(session, sink, summary_mode=SummaryMode.DETAILED).run(transcript)

    assert result.summary == "# Notes"
    assert "Generating detailed summary..." in [e.message for e in sink.events]


def test_malformed_detailed_reply_fails_without_append(sink, transcript):
    session = FakeSession(gemini_replies=[gemini_reply("I cannot produce JSON today.")])
    orchestrator = make_orchestrator(session, sink, summary_mode=SummaryMode.DETAILED)

    with pytest.raises(ModelResponseError):
        orchestrator.run(transcript)

    assert orchestrator.state == RunState.FAILED
    assert session.count("POST", ":batchUpdate") == 0
    assert sink.events[-1].severity == Severity.ERROR
    assert sink.events[-1].message.startswith("Error: ")
    assert sum(1 for e in sink.events if e.severity == Severity.ERROR) == 1


def test_chunk_failure_aborts_run(sink):
    session = FakeSession(gemini_replies=[
        gemini_reply("- first"),
        gemini_error("quota exceeded", status_code=429),
    ])
    orchestrator = make_orchestrator(session, sink, chunk_size=20)

    with pytest.raises(ModelRequestError):
        orchestrator.run(Transcript(text="First sentence here. Second sentence here. Third one.", title="T"))

    assert orchestrator.state == RunState.FAILED
    assert session.docs.text == "\n"
    assert "quota exceeded" in sink.events[-1].message


def test_auth_failure(sink, transcript):
    session = FakeSession()
    orchestrator = NotesOrchestrator(
        NotesConfig(api_key="test_api_key"),
        StaticTokenProvider(None),
        progress_sink=sink,
        session=session,
    )

    with pytest.raises(AuthError):
        orchestrator.run(transcript)

    assert orchestrator.state == RunState.FAILED
    assert session.calls == []
    assert [e.message for e in sink.events][0] == "Authenticating user..."


def test_images_are_inserted_and_saved(sink, transcript, tmp_path):
    session = FakeSession(
        gemini_replies=[
            gemini_reply("- summary about volcanoes"),
            gemini_reply('{"queries": ["volcano", "lava", "ash cloud"]}'),
        ],
        search_results={
            "volcano": FakeResponse(json_data={"items": [{"link": "https://img.test/volcano.png"}]}),
            "lava": FakeResponse(status_code=500, json_data={"error": {"message": "backend"}}),
            "ash cloud": FakeResponse(json_data={"items": [{"link": "https://img.test/ash"}]}),
        },
        downloads={
            "https://img.test/volcano.png": FakeResponse(content=b"png-bytes"),
            "https://img.test/ash": FakeResponse(content=b"jpg-bytes"),
        },
    )
    orchestrator = make_orchestrator(
        session, sink, tmp_path, download_images=True, search_engine_id="engine-1"
    )

    result = orchestrator.run(transcript)

    assert result.image_urls == ["https://img.test/volcano.png", "https://img.test/ash"]
    assert [uri for _, uri in session.docs.images] == result.image_urls
    assert session.count("POST", ":batchUpdate") == 3
    assert [p.rsplit("/", 1)[-1] for p in result.saved_files] == [
        "Test Video_image_1.png",
        "Test Video_image_2.jpg",
    ]
    assert (tmp_path / "notes" / "Test Video_image_1.png").read_bytes() == b"png-bytes"
    assert orchestrator.state == RunState.SUCCEEDED


def test_image_query_failure_still_succeeds(sink, transcript):
    session = FakeSession(gemini_replies=[
        gemini_reply("- summary"),
        gemini_error("overloaded", status_code=503),
    ])
    orchestrator = make_orchestrator(session, sink, download_images=True, search_engine_id="engine-1")

    result = orchestrator.run(transcript)

    assert result.state == RunState.SUCCEEDED
    assert result.image_urls == []
    assert session.docs.images == []
    assert sink.events[-1].severity == Severity.SUCCESS


def test_image_insert_failure_is_not_fatal(sink, transcript, tmp_path):
    session = FakeSession(
        gemini_replies=[gemini_reply("- summary"), gemini_reply('{"queries": ["cat"]}')],
        search_results={"cat": FakeResponse(json_data={"items": [{"link": "https://img.test/cat.gif"}]})},
    )
    orchestrator = make_orchestrator(
        session, sink, tmp_path, download_images=True, search_engine_id="engine-1"
    )
    failing_append = MagicMock(side_effect=DocumentUpdateError("bad image"))

    with patch.object(DocumentCursor, "append_image", failing_append):
        result = orchestrator.run(transcript)

    failing_append.assert_called_once_with("https://img.test/cat.gif")

    assert result.state == RunState.SUCCEEDED
    assert result.image_urls == ["https://img.test/cat.gif"]
    assert result.saved_files == []
    assert any("Could not insert image" in e.message for e in sink.events)


def test_images_skipped_when_disabled(sink, transcript):
    session = FakeSession(gemini_replies=[gemini_reply("- summary")])
    make_orchestrator(session, sink).run(transcript)
    assert session.search_queries == []
    assert len(session.gemini_prompts) == 1


def test_malformed_search_reply_still_succeeds(sink, transcript):
    session = FakeSession(
        gemini_replies=[gemini_reply("- summary"), gemini_reply('{"queries": ["cat"]}')],
        search_results={"cat": FakeResponse(json_data={"items": {"link": "https://img.test/cat.gif"}})},
    )
    orchestrator = make_orchestrator(session, sink, download_images=True, search_engine_id="engine-1")

    result = orchestrator.run(transcript)

    assert result.state == RunState.SUCCEEDED
    assert result.image_urls == []
    assert session.docs.images == []
