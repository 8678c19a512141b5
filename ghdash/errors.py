"""Error types surfaced to the CLI."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for failures that end the dashboard with a message."""


class ConfigurationError(DashboardError, ValueError):
    """Missing or invalid identity, credential or config file."""


class RetrievalError(DashboardError):
    """A data source failed to produce its dataset."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source
