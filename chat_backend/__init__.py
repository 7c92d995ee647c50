"""Chat backend: persists chat conversations for an AI chat application."""

__version__ = "1.0.0"
