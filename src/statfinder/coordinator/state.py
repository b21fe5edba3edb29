"""Tagged operation states and the views derived from them.

Each asynchronous operation (data load, AI search, AI summary) is in exactly
one of ``Idle``, ``Loading``, ``Succeeded`` or ``Failed`` at any instant.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    """The operation has not been started, or its outcome was cleared."""


@dataclass(frozen=True)
class Loading:
    """A request is in flight. ``token`` identifies it."""

    token: int


@dataclass(frozen=True)
class Succeeded(Generic[T]):
    """The latest request completed with ``value``."""

    value: T


@dataclass(frozen=True)
class Failed:
    """The latest request failed. ``error`` is the user-facing message."""

    error: str


OperationState = Idle | Loading | Succeeded | Failed


class ActiveView(StrEnum):
    """Which main view the interface shows."""

    LOADING = "loading"
    DATA_ERROR = "data_error"
    BROWSE = "browse"
    AI_SEARCHING = "ai_searching"
    AI_ERROR = "ai_error"
    AI_RESULTS = "ai_results"


class SummaryStatus(StrEnum):
    """Summary panel state, meaningful while AI results are shown."""

    NO_SUMMARY = "no_summary"
    SUMMARIZING = "summarizing"
    READY = "ready"
    ERROR = "error"


def summary_status(state: OperationState) -> SummaryStatus:
    """Map the summary operation state onto the panel state."""
    if isinstance(state, Loading):
        return SummaryStatus.SUMMARIZING
    if isinstance(state, Succeeded):
        return SummaryStatus.READY
    if isinstance(state, Failed):
        return SummaryStatus.ERROR
    return SummaryStatus.NO_SUMMARY


def active_view(data: OperationState, search: OperationState) -> ActiveView:
    """Derive the main view from the data-load and search states."""
    if isinstance(data, Failed):
        return ActiveView.DATA_ERROR
    if not isinstance(data, Succeeded):
        return ActiveView.LOADING
    if isinstance(search, Loading):
        return ActiveView.AI_SEARCHING
    if isinstance(search, Failed):
        return ActiveView.AI_ERROR
    if isinstance(search, Succeeded):
        return ActiveView.AI_RESULTS
    return ActiveView.BROWSE
