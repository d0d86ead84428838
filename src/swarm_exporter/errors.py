"""Exceptions raised while scraping the swarm."""

from __future__ import annotations


class SwarmExporterError(Exception):
    """Base class for exporter errors."""


class FetchError(SwarmExporterError):
    """Listing services or tasks from the Docker API failed."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


class ScrapeError(SwarmExporterError):
    """A scrape could not produce a complete set of metrics."""
