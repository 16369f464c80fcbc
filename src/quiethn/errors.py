"""
Exception hierarchy for quiethn.
"""

from __future__ import annotations

from typing import Optional


class QuietHNError(Exception):
    """Base class for all quiethn errors."""


class HNClientError(QuietHNError):
    """A call to the Hacker News API failed."""

    def __init__(self, message: str, *, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class StoryFetchError(QuietHNError):
    """A whole story fetch cycle failed and produced no stories."""


class SourceUnavailable(StoryFetchError):
    """The ranked list of top item IDs could not be obtained."""


class FetchDeadlineExceeded(StoryFetchError):
    """The fetch cycle did not finish before its deadline."""

    def __init__(self, message: str, *, deadline: float) -> None:
        super().__init__(message)
        self.deadline = deadline
