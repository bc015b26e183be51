"""Concatenate images side-by-side or stacked into a single image."""

__version__ = "1.0.0"
