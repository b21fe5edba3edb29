"""Exceptions raised by StatFinder components.

Each error carries the message shown to the user. The underlying cause is
chained with ``raise ... from``.
"""

DATA_LOAD_FAILED_MESSAGE = (
    "Failed to load the cybersecurity data trends. The AI assistant needs this data to function."
)
SEARCH_FAILED_MESSAGE = "Failed to get a response from the AI. Please try again."
SUMMARY_FAILED_MESSAGE = (
    "Failed to generate AI summary. The model may be temporarily unavailable."
)


class StatFinderError(Exception):
    """Base class for StatFinder errors."""


class DataLoadError(StatFinderError):
    """The dataset could not be fetched or parsed. Fatal for the session."""

    def __init__(self, message: str = DATA_LOAD_FAILED_MESSAGE) -> None:
        super().__init__(message)


class SearchError(StatFinderError):
    """The relevance search call failed. The user may resubmit."""

    def __init__(self, message: str = SEARCH_FAILED_MESSAGE) -> None:
        super().__init__(message)


class SummaryError(StatFinderError):
    """The summary call failed. The user may dismiss and regenerate."""

    def __init__(self, message: str = SUMMARY_FAILED_MESSAGE) -> None:
        super().__init__(message)
