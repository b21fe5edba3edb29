from statfinder.summary.base import NO_DATA_MESSAGE, Summarizer
from statfinder.summary.claude import ClaudeSummarizer

__all__ = [
    "ClaudeSummarizer",
    "NO_DATA_MESSAGE",
    "Summarizer",
]
