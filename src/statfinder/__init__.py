"""StatFinder: browse cybersecurity statistics and curate them with an LLM."""

from statfinder.config import StatFinderConfig, create_from_config, load_config
from statfinder.coordinator import (
    ActiveView,
    Failed,
    Idle,
    Loading,
    OperationState,
    Succeeded,
    SummaryStatus,
    ViewCoordinator,
)
from statfinder.data import AIResult, FilterOptions, FilterState, StatRecord
from statfinder.errors import DataLoadError, SearchError, StatFinderError, SummaryError
from statfinder.filters import apply_filter_state, apply_filters, derive_facets, parse_date
from statfinder.loader import DatasetLoader, JsonFileLoader, SupabaseLoader
from statfinder.search import ClaudeRelevanceSearcher, RelevanceSearcher
from statfinder.summary import NO_DATA_MESSAGE, ClaudeSummarizer, Summarizer

__all__ = [
    # Models
    "AIResult",
    "FilterOptions",
    "FilterState",
    "StatRecord",
    # Errors
    "DataLoadError",
    "SearchError",
    "StatFinderError",
    "SummaryError",
    # Filtering
    "apply_filter_state",
    "apply_filters",
    "derive_facets",
    "parse_date",
    # Protocols
    "DatasetLoader",
    "RelevanceSearcher",
    "Summarizer",
    # Loaders
    "JsonFileLoader",
    "SupabaseLoader",
    # LLM clients
    "ClaudeRelevanceSearcher",
    "ClaudeSummarizer",
    "NO_DATA_MESSAGE",
    # Coordinator
    "ActiveView",
    "Failed",
    "Idle",
    "Loading",
    "OperationState",
    "Succeeded",
    "SummaryStatus",
    "ViewCoordinator",
    # Config
    "StatFinderConfig",
    "create_from_config",
    "load_config",
]
