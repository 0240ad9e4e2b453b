"""Rift Report: match history ingestion and aggregate player statistics."""

__version__ = "1.0.0"
