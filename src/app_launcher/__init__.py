"""Application launcher: desktop entry discovery, search and launch planning."""

__version__ = "0.1.0"
