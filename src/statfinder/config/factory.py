"""Factory functions to create components from configuration."""

from statfinder.config.models import (
    ClaudeSearchConfig,
    ClaudeSummaryConfig,
    JsonFileLoaderConfig,
    LoaderConfig,
    SearchConfig,
    StatFinderConfig,
    SummaryConfig,
    SupabaseLoaderConfig,
)
from statfinder.coordinator.view import ViewCoordinator
from statfinder.loader.base import DatasetLoader
from statfinder.loader.json_file import JsonFileLoader
from statfinder.loader.supabase import SupabaseLoader
from statfinder.search.base import RelevanceSearcher
from statfinder.search.claude import ClaudeRelevanceSearcher
from statfinder.summary.base import Summarizer
from statfinder.summary.claude import ClaudeSummarizer


def create_loader(config: LoaderConfig) -> DatasetLoader:
    """Create a dataset loader from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, SupabaseLoaderConfig):
        return SupabaseLoader(url=config.url, table=config.table, timeout=config.timeout)
    if isinstance(config, JsonFileLoaderConfig):
        return JsonFileLoader(config.path)
    msg = f"Unknown loader config type: {type(config)}"
    raise ValueError(msg)


def create_searcher(config: SearchConfig) -> RelevanceSearcher:
    """Create a relevance searcher from config."""
    if isinstance(config, ClaudeSearchConfig):
        return ClaudeRelevanceSearcher(
            model=config.model,
            max_corpus_records=config.max_corpus_records,
            max_tokens=config.max_tokens,
        )
    msg = f"Unknown search config type: {type(config)}"
    raise ValueError(msg)


def create_summarizer(config: SummaryConfig) -> Summarizer:
    """Create a summarizer from config."""
    if isinstance(config, ClaudeSummaryConfig):
        return ClaudeSummarizer(
            model=config.model,
            max_records=config.max_records,
            max_tokens=config.max_tokens,
        )
    msg = f"Unknown summary config type: {type(config)}"
    raise ValueError(msg)


def create_from_config(config: StatFinderConfig) -> ViewCoordinator:
    """Create a view coordinator wired to the configured components."""
    return ViewCoordinator(
        loader=create_loader(config.loader),
        searcher=create_searcher(config.search),
        summarizer=create_summarizer(config.summary),
    )
