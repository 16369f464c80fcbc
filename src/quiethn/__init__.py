"""
quiethn - A quiet, link-only view of the Hacker News front page.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .errors import FetchDeadlineExceeded, HNClientError, QuietHNError, SourceUnavailable, StoryFetchError
from .stories import fetch_top_stories

__all__ = [
    "__version__",
    "Config",
    "FetchDeadlineExceeded",
    "HNClientError",
    "QuietHNError",
    "SourceUnavailable",
    "StoryFetchError",
    "fetch_top_stories",
]
