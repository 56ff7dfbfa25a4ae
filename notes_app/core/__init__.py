"""
Core functionality for the YouTube notes generator application.

This package contains modules for reading transcripts, summarizing them,
finding images, and writing notes to Google Docs.
"""
