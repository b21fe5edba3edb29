from statfinder.search.base import RelevanceSearcher
from statfinder.search.claude import ClaudeRelevanceSearcher

__all__ = [
    "ClaudeRelevanceSearcher",
    "RelevanceSearcher",
]
