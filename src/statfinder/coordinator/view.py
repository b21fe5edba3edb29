"""View coordinator: owns interface state and sequences the async operations."""

import itertools
import logging

from statfinder.coordinator.state import (
    ActiveView,
    Failed,
    Idle,
    Loading,
    OperationState,
    Succeeded,
    SummaryStatus,
    active_view,
    summary_status,
)
from statfinder.data import AIResult, FilterOptions, FilterState, StatRecord
from statfinder.errors import (
    DATA_LOAD_FAILED_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    SUMMARY_FAILED_MESSAGE,
    StatFinderError,
)
from statfinder.filters import apply_filter_state, derive_facets
from statfinder.loader.base import DatasetLoader
from statfinder.search.base import RelevanceSearcher
from statfinder.summary.base import Summarizer

logger = logging.getLogger(__name__)

ESCAPE_KEY = "Escape"

_SEARCH_ENTRY_VIEWS = (ActiveView.BROWSE, ActiveView.AI_ERROR, ActiveView.AI_RESULTS)
_DETAIL_VIEWS = (ActiveView.BROWSE, ActiveView.AI_RESULTS)


class ViewCoordinator:
    """Coordinates the browse view, the AI search results and the summary panel.

    The coordinator is the single owner of interface state. A presentation
    layer reads its properties and forwards user actions to its methods.

    State is held as one tagged value per operation (data load, search,
    summary), so an operation is never loading and failed at once. Every
    search or summary request is tagged with a token from a monotonic
    counter; a response is applied only while its token is still the one
    in flight, so results that arrive after the user cleared or restarted
    the operation are dropped.

    Component failures never propagate out of the action methods. They are
    logged and stored as ``Failed`` states carrying the user-facing message.

    Args:
        loader: Fetches the statistics table at startup.
        searcher: Selects relevant records for a research query.
        summarizer: Writes the executive summary of AI results.
    """

    def __init__(
        self,
        loader: DatasetLoader,
        searcher: RelevanceSearcher,
        summarizer: Summarizer,
    ) -> None:
        self._loader = loader
        self._searcher = searcher
        self._summarizer = summarizer
        self._tokens = itertools.count(1)

        self._data: OperationState = Idle()
        self._search: OperationState = Idle()
        self._summary: OperationState = Idle()

        self._facets = FilterOptions()
        self._filters = FilterState()
        self._filtered_cache: tuple[FilterState, list[StatRecord]] | None = None
        self._search_query = ""
        self._detail: StatRecord | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def data_state(self) -> OperationState:
        return self._data

    @property
    def search_state(self) -> OperationState:
        return self._search

    @property
    def summary_state(self) -> OperationState:
        return self._summary

    @property
    def active_view(self) -> ActiveView:
        return active_view(self._data, self._search)

    @property
    def summary_status(self) -> SummaryStatus:
        return summary_status(self._summary)

    @property
    def records(self) -> tuple[StatRecord, ...]:
        if isinstance(self._data, Succeeded):
            return self._data.value
        return ()

    @property
    def data_error(self) -> str | None:
        return self._data.error if isinstance(self._data, Failed) else None

    @property
    def filter_state(self) -> FilterState:
        return self._filters

    @property
    def filter_options(self) -> FilterOptions:
        return self._facets

    @property
    def filtered_records(self) -> list[StatRecord]:
        """Records visible in the browse view under the current filters."""
        if self._filtered_cache is None or self._filtered_cache[0] != self._filters:
            self._filtered_cache = (self._filters, apply_filter_state(self.records, self._filters))
        return list(self._filtered_cache[1])

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def search_results(self) -> list[AIResult]:
        if isinstance(self._search, Succeeded):
            return list(self._search.value)
        return []

    @property
    def search_error(self) -> str | None:
        return self._search.error if isinstance(self._search, Failed) else None

    @property
    def summary(self) -> str | None:
        return self._summary.value if isinstance(self._summary, Succeeded) else None

    @property
    def summary_error(self) -> str | None:
        return self._summary.error if isinstance(self._summary, Failed) else None

    @property
    def detail(self) -> StatRecord | None:
        """Record shown in the detail overlay, if open."""
        return self._detail

    @property
    def can_submit_search(self) -> bool:
        return self.active_view in _SEARCH_ENTRY_VIEWS and bool(self._search_query.strip())

    @property
    def can_generate_summary(self) -> bool:
        return (
            self.active_view == ActiveView.AI_RESULTS
            and bool(self.search_results)
            and isinstance(self._summary, Idle)
        )

    # ------------------------------------------------------------------
    # Dataset
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Load the dataset once. Failure leaves the session in DATA_ERROR."""
        if not isinstance(self._data, Idle):
            logger.debug("Dataset load already started, ignoring")
            return

        self._data = Loading(next(self._tokens))
        try:
            records = await self._loader.load()
        except StatFinderError as e:
            logger.error("Dataset load failed: %s", e)
            self._data = Failed(str(e))
            return
        except Exception:
            logger.exception("Unexpected error while loading the dataset")
            self._data = Failed(DATA_LOAD_FAILED_MESSAGE)
            return

        self._data = Succeeded(tuple(records))
        self._facets = derive_facets(records)
        self._filtered_cache = None
        logger.info("Dataset ready: %d stats", len(records))

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def toggle_topic(self, topic: str) -> None:
        self._filters = self._filters.toggle_topic(topic)

    def toggle_company(self, company: str) -> None:
        self._filters = self._filters.toggle_company(company)

    def toggle_date(self, date: str) -> None:
        self._filters = self._filters.toggle_date(date)

    def set_search_term(self, term: str) -> None:
        self._filters = self._filters.with_term(term)

    def reset_filters(self) -> None:
        """Clear every facet selection and the term. Also dismisses a finished summary."""
        self._filters = FilterState()
        self.dismiss_summary()

    # ------------------------------------------------------------------
    # AI search
    # ------------------------------------------------------------------

    def set_search_query(self, query: str) -> None:
        self._search_query = query

    async def submit_search(self) -> None:
        """Run a relevance search for the current query.

        Ignored when the query is blank, the dataset is not loaded, or a
        search is already in flight. Prior results and any summary are
        discarded before the request is sent.
        """
        if self.active_view not in _SEARCH_ENTRY_VIEWS:
            logger.debug("Search not available in view %s, ignoring", self.active_view)
            return
        query = self._search_query.strip()
        if not query:
            logger.debug("Blank search query, ignoring")
            return

        token = next(self._tokens)
        self._search = Loading(token)
        self._summary = Idle()

        outcome: OperationState
        try:
            results = await self._searcher.search(query, self.records)
            outcome = Succeeded(tuple(results))
        except StatFinderError as e:
            logger.warning("AI search failed: %s", e)
            outcome = Failed(str(e))
        except Exception:
            logger.exception("Unexpected error during AI search")
            outcome = Failed(SEARCH_FAILED_MESSAGE)

        if self._search != Loading(token):
            logger.debug("Discarding stale search response (token %d)", token)
            return
        self._search = outcome

    def clear_search(self) -> None:
        """Return to the browse view, dropping results, errors, query and summary."""
        self._search = Idle()
        self._summary = Idle()
        self._search_query = ""

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    async def generate_summary(self) -> None:
        """Summarize the current AI results. Ignored unless a summary can start."""
        if not self.can_generate_summary:
            logger.debug("Summary not available, ignoring")
            return

        token = next(self._tokens)
        self._summary = Loading(token)

        outcome: OperationState
        try:
            text = await self._summarizer.summarize(self.search_results)
            outcome = Succeeded(text)
        except StatFinderError as e:
            logger.warning("AI summary failed: %s", e)
            outcome = Failed(str(e))
        except Exception:
            logger.exception("Unexpected error during AI summary")
            outcome = Failed(SUMMARY_FAILED_MESSAGE)

        if self._summary != Loading(token):
            logger.debug("Discarding stale summary response (token %d)", token)
            return
        self._summary = outcome

    def dismiss_summary(self) -> None:
        """Close a ready or failed summary so it can be regenerated."""
        if isinstance(self._summary, (Succeeded, Failed)):
            self._summary = Idle()

    # ------------------------------------------------------------------
    # Detail overlay
    # ------------------------------------------------------------------

    def open_detail(self, record: StatRecord) -> None:
        if self.active_view not in _DETAIL_VIEWS:
            logger.debug("Detail not available in view %s, ignoring", self.active_view)
            return
        self._detail = record

    def close_detail(self) -> None:
        self._detail = None

    def handle_key(self, key: str) -> None:
        if key == ESCAPE_KEY:
            self.close_detail()

    def detail_citation(self) -> str | None:
        """Citation text for the open record, or None without a record or source."""
        if self._detail is None:
            return None
        return self._detail.citation()
