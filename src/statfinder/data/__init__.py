"""Data models for StatFinder."""

from statfinder.data.models import AIResult, FilterOptions, FilterState, StatRecord

__all__ = [
    "AIResult",
    "FilterOptions",
    "FilterState",
    "StatRecord",
]
