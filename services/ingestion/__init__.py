"""Input ingestion for lighthouse-batch."""

from .input_reader import InputReader

__all__ = ["InputReader"]
