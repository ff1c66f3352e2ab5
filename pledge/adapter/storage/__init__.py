"""Local storage adapters."""

from .recent_searches import RecentSearchStore

__all__ = ["RecentSearchStore"]
