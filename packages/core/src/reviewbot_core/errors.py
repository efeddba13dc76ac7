"""Exception hierarchy for the review pipeline.

Every stage raises one of these and lets it propagate. The CLI catches them
once at the top level, logs the message, and exits non-zero.
"""

from __future__ import annotations


class ReviewBotError(Exception):
    """Base class for every failure the pipeline reports to the user."""


class ConfigurationError(ReviewBotError):
    """A required credential or runtime input is missing."""


class UpstreamAPIError(ReviewBotError):
    """GitHub or Gemini returned a non-success status or an error payload."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class GeminiAPIError(UpstreamAPIError):
    pass


class EmptyResponseError(ReviewBotError):
    """The model answered but no review text could be extracted."""
