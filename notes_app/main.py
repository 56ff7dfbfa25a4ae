"""
Main entry point for the YouTube Notes Generator application.
"""

import sys
import argparse
from typing import Optional

from dotenv import load_dotenv

from notes_app.core.auth import CredentialProvider, default_credential_provider
from notes_app.core.orchestrator import NotesOrchestrator
from notes_app.core.progress import ProgressSink
from notes_app.core.settings_store import SettingsStore
from notes_app.core.transcript_extractor import (
    FileTranscriptExtractor,
    TranscriptExtractor,
    YouTubeTranscriptExtractor,
)
from notes_app.models.schemas import NotesConfig, NotesResult, SummaryMode, Transcript
from notes_app.utils.errors import NotesError, TranscriptUnavailableError
from notes_app.utils.logger import logging


def read_transcript(extractor: TranscriptExtractor, title: Optional[str] = None) -> Transcript:
    """
    Read the transcript, failing if none can be found.

    Args:
        extractor: Transcript source
        title: Optional title overriding the one the extractor found

    Returns:
        Transcript
    """
    transcript = extractor.get_transcript()
    if transcript is None or not transcript.text.strip():
        raise TranscriptUnavailableError("Could not find a transcript to process.")
    if title:
        transcript = transcript.model_copy(update={"title": title})
    return transcript


def generate_notes(
    transcript: Transcript,
    notes_config: NotesConfig,
    credential_provider: Optional[CredentialProvider] = None,
    progress_sink: Optional[ProgressSink] = None
) -> NotesResult:
    """
    Summarize a transcript into a Google Doc.

    Args:
        transcript: Transcript to summarize
        notes_config: Validated run configuration
        credential_provider: Docs API credentials (defaults from environment)
        progress_sink: Receiver of progress events (defaults to the log)

    Returns:
        NotesResult
    """
    orchestrator = NotesOrchestrator(
        notes_config,
        credential_provider or default_credential_provider(),
        progress_sink=progress_sink,
    )
    return orchestrator.run(transcript)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="YouTube Notes Generator")
    parser.add_argument("url", nargs="?", help="YouTube video URL")
    parser.add_argument("--transcript-file", help="Read the transcript from a text file instead")
    parser.add_argument("--title", help="Title to use for the notes")
    parser.add_argument("--mode", choices=[m.value for m in SummaryMode],
                        help="Summary mode (default: stored setting or chunked)")
    parser.add_argument("--document-id", help="Append to an existing Google Doc")
    parser.add_argument("--api-key", help="Gemini / Custom Search API key")
    parser.add_argument("--search-engine-id", help="Custom Search engine ID")
    parser.add_argument("--download-images", action="store_true", default=None,
                        help="Find illustrative images for the notes")
    parser.add_argument("--no-insert-images", action="store_true",
                        help="Do not insert found images into the document")
    parser.add_argument("--save-settings", action="store_true",
                        help="Store the given API key, engine ID, document ID and mode")
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main function to run the application from command line."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load environment variables
    load_dotenv()

    if not args.url and not args.transcript_file:
        parser.error("a video URL or --transcript-file is required")

    store = SettingsStore()
    try:
        if args.save_settings:
            store.save({
                key: value for key, value in {
                    "apiKey": args.api_key,
                    "searchEngineId": args.search_engine_id,
                    "documentId": args.document_id,
                    "summaryMode": args.mode,
                    "downloadImages": args.download_images,
                }.items() if value is not None
            })

        notes_config = NotesConfig.from_sources(
            store.load(),
            api_key=args.api_key,
            search_engine_id=args.search_engine_id,
            document_id=args.document_id,
            summary_mode=args.mode,
            download_images=args.download_images,
            insert_images=False if args.no_insert_images else None,
        )

        if args.transcript_file:
            extractor = FileTranscriptExtractor(args.transcript_file, args.title)
        else:
            extractor = YouTubeTranscriptExtractor(args.url)

        logging.info("Extracting transcript...")
        transcript = read_transcript(extractor, args.title)
        result = generate_notes(transcript, notes_config)
    except (NotesError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n" + "=" * 80)
    print(f"Notes for '{transcript.title}'")
    print("=" * 80)
    print(f"Document: {result.document_url}")
    if result.image_urls:
        print(f"Images: {len(result.image_urls)}")
        for path in result.saved_files:
            print(f"  {path}")
    print("=" * 80)
    return 0


if __name__ == "__main__":
    sys.exit(main())
