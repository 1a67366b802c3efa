"""Dialect-aware text-to-speech relay for a hosted Gemini model."""

__version__ = "0.1.0"
