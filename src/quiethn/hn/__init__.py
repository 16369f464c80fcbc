"""Hacker News API access."""

from .client import HNClient

__all__ = ["HNClient"]
