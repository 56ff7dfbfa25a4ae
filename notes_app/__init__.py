"""
YouTube Notes Generator Application.

This application reads the transcript of a YouTube video, summarizes it with
a language model, and appends the notes (optionally with illustrative images)
to a Google Doc.
"""

from notes_app.config import config

__version__ = config.APP_VERSION
