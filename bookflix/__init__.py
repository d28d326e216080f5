"""BookFlix: reading lists, reviews and curated catalog shelves."""

__version__ = "0.1.0"
