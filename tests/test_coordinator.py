"""Tests for ViewCoordinator."""

import asyncio
from collections.abc import Sequence
from unittest.mock import AsyncMock

import pytest

from statfinder.coordinator import (
    ActiveView,
    Failed,
    Idle,
    Loading,
    Succeeded,
    SummaryStatus,
    ViewCoordinator,
)
from statfinder.data import AIResult, StatRecord
from statfinder.errors import (
    DATA_LOAD_FAILED_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    SUMMARY_FAILED_MESSAGE,
    DataLoadError,
    SearchError,
    SummaryError,
)
from statfinder.search.claude import ClaudeRelevanceSearcher

# -- Fakes --


class FakeLoader:
    def __init__(
        self, records: list[StatRecord] | None = None, error: Exception | None = None
    ) -> None:
        self.records = records or []
        self.error = error
        self.calls = 0

    async def load(self) -> list[StatRecord]:
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.records)


class FakeSearcher:
    """Searcher that waits on ``gate`` before answering, so tests can interleave."""

    def __init__(
        self, results: list[AIResult] | None = None, error: Exception | None = None
    ) -> None:
        self.results = results or []
        self.error = error
        self.gate = asyncio.Event()
        self.gate.set()
        self.calls: list[tuple[str, list[StatRecord]]] = []

    async def search(self, query: str, corpus: Sequence[StatRecord]) -> list[AIResult]:
        self.calls.append((query, list(corpus)))
        await self.gate.wait()
        if self.error:
            raise self.error
        return list(self.results)


class FakeSummarizer:
    def __init__(self, text: str = "Phishing dominates.", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.gate = asyncio.Event()
        self.gate.set()
        self.calls: list[list[StatRecord]] = []

    async def summarize(self, records: Sequence[StatRecord]) -> str:
        self.calls.append(list(records))
        await self.gate.wait()
        if self.error:
            raise self.error
        return self.text


# -- Fixtures --


@pytest.fixture
def records() -> list[StatRecord]:
    return [
        StatRecord(
            stat="60% of breaches involve phishing",
            resource_name="Report A",
            company="Acme",
            topic="Phishing",
            technology="Email",
            date="2024-01-01",
            source="http://x",
        ),
        StatRecord(
            stat="Ransomware payments doubled",
            resource_name="Report B",
            company="Globex",
            topic="Ransomware",
            technology="Endpoint",
            date="2023-06-01",
        ),
    ]


@pytest.fixture
def ai_results() -> list[AIResult]:
    return [
        AIResult(
            stat="60% of breaches involve phishing",
            resource_name="Report A",
            source="http://x",
            reason="Directly about phishing.",
        )
    ]


@pytest.fixture
def searcher(ai_results: list[AIResult]) -> FakeSearcher:
    return FakeSearcher(results=ai_results)


@pytest.fixture
def summarizer() -> FakeSummarizer:
    return FakeSummarizer()


@pytest.fixture
def coordinator(
    records: list[StatRecord], searcher: FakeSearcher, summarizer: FakeSummarizer
) -> ViewCoordinator:
    return ViewCoordinator(FakeLoader(records), searcher, summarizer)


@pytest.fixture
async def loaded(coordinator: ViewCoordinator) -> ViewCoordinator:
    await coordinator.load()
    return coordinator


@pytest.fixture
async def with_results(loaded: ViewCoordinator) -> ViewCoordinator:
    loaded.set_search_query("phishing stats")
    await loaded.submit_search()
    return loaded


# -- Dataset loading --


class TestLoad:
    def test_initial_view_is_loading(self, coordinator: ViewCoordinator) -> None:
        assert coordinator.active_view == ActiveView.LOADING
        assert coordinator.records == ()

    async def test_load_success_enters_browse(
        self, loaded: ViewCoordinator, records: list[StatRecord]
    ) -> None:
        assert loaded.active_view == ActiveView.BROWSE
        assert loaded.records == tuple(records)
        assert loaded.filter_options.topics == ("Phishing", "Ransomware")
        assert loaded.filtered_records == records

    async def test_load_failure_enters_data_error(
        self, searcher: FakeSearcher, summarizer: FakeSummarizer
    ) -> None:
        coordinator = ViewCoordinator(FakeLoader(error=DataLoadError()), searcher, summarizer)
        await coordinator.load()

        assert coordinator.active_view == ActiveView.DATA_ERROR
        assert coordinator.data_error == DATA_LOAD_FAILED_MESSAGE
        assert isinstance(coordinator.data_state, Failed)

    async def test_unexpected_load_failure_is_contained(
        self, searcher: FakeSearcher, summarizer: FakeSummarizer
    ) -> None:
        coordinator = ViewCoordinator(FakeLoader(error=RuntimeError("boom")), searcher, summarizer)
        await coordinator.load()

        assert coordinator.active_view == ActiveView.DATA_ERROR
        assert coordinator.data_error == DATA_LOAD_FAILED_MESSAGE

    async def test_data_error_is_terminal(
        self, searcher: FakeSearcher, summarizer: FakeSummarizer
    ) -> None:
        loader = FakeLoader(error=DataLoadError())
        coordinator = ViewCoordinator(loader, searcher, summarizer)
        await coordinator.load()
        await coordinator.load()
        coordinator.set_search_query("phishing")
        await coordinator.submit_search()

        assert loader.calls == 1
        assert searcher.calls == []
        assert coordinator.active_view == ActiveView.DATA_ERROR

    async def test_empty_dataset_is_browsable(
        self, searcher: FakeSearcher, summarizer: FakeSummarizer
    ) -> None:
        coordinator = ViewCoordinator(FakeLoader([]), searcher, summarizer)
        await coordinator.load()

        assert coordinator.active_view == ActiveView.BROWSE
        assert coordinator.filtered_records == []
        assert coordinator.filter_options.dates == ()


# -- Filters --


class TestFilters:
    async def test_toggle_topic(self, loaded: ViewCoordinator) -> None:
        loaded.toggle_topic("Ransomware")
        assert [r.resource_name for r in loaded.filtered_records] == ["Report B"]
        loaded.toggle_topic("Ransomware")
        assert len(loaded.filtered_records) == 2

    async def test_company_and_date_combine(self, loaded: ViewCoordinator) -> None:
        loaded.toggle_company("Acme")
        loaded.toggle_date("2023-06-01")
        assert loaded.filtered_records == []

    async def test_search_term_scenario(self, loaded: ViewCoordinator) -> None:
        loaded.set_search_term("PHISHING")
        assert [r.resource_name for r in loaded.filtered_records] == ["Report A"]
        loaded.set_search_term("malware")
        assert loaded.filtered_records == []

    async def test_reset_filters(self, loaded: ViewCoordinator) -> None:
        loaded.toggle_topic("Phishing")
        loaded.toggle_company("Acme")
        loaded.set_search_term("breach")
        loaded.reset_filters()

        assert loaded.filter_state.is_empty
        assert len(loaded.filtered_records) == 2

    async def test_filters_do_not_change_view(self, with_results: ViewCoordinator) -> None:
        with_results.toggle_topic("Ransomware")
        assert with_results.active_view == ActiveView.AI_RESULTS


# -- AI search --


class TestSearch:
    async def test_blank_query_is_ignored(
        self, loaded: ViewCoordinator, searcher: FakeSearcher
    ) -> None:
        loaded.set_search_query("   ")
        assert not loaded.can_submit_search
        await loaded.submit_search()

        assert loaded.active_view == ActiveView.BROWSE
        assert searcher.calls == []

    async def test_search_success_enters_results(
        self,
        with_results: ViewCoordinator,
        searcher: FakeSearcher,
        ai_results: list[AIResult],
        records: list[StatRecord],
    ) -> None:
        assert with_results.active_view == ActiveView.AI_RESULTS
        assert with_results.search_results == ai_results
        assert searcher.calls == [("phishing stats", records)]

    async def test_query_is_stripped(self, loaded: ViewCoordinator, searcher: FakeSearcher) -> None:
        loaded.set_search_query("  ransomware  ")
        await loaded.submit_search()
        assert searcher.calls[0][0] == "ransomware"

    async def test_zero_results_is_distinct_from_error(
        self, loaded: ViewCoordinator, searcher: FakeSearcher
    ) -> None:
        searcher.results = []
        loaded.set_search_query("quantum")
        await loaded.submit_search()

        assert loaded.active_view == ActiveView.AI_RESULTS
        assert loaded.search_results == []
        assert loaded.search_error is None
        assert not loaded.can_generate_summary

    async def test_search_failure_then_clear(
        self, loaded: ViewCoordinator, searcher: FakeSearcher
    ) -> None:
        searcher.error = SearchError()
        loaded.set_search_query("phishing")
        await loaded.submit_search()

        assert loaded.active_view == ActiveView.AI_ERROR
        assert loaded.search_error == SEARCH_FAILED_MESSAGE

        loaded.clear_search()
        assert loaded.active_view == ActiveView.BROWSE
        assert loaded.search_query == ""
        assert loaded.search_error is None

    async def test_transport_failure_through_claude_client(
        self, records: list[StatRecord], summarizer: FakeSummarizer
    ) -> None:
        searcher = ClaudeRelevanceSearcher(api_key="test-key")
        object.__setattr__(
            searcher._client.messages, "create", AsyncMock(side_effect=Exception("network"))
        )
        coordinator = ViewCoordinator(FakeLoader(records), searcher, summarizer)
        await coordinator.load()
        coordinator.set_search_query("phishing")
        await coordinator.submit_search()

        assert coordinator.active_view == ActiveView.AI_ERROR
        assert coordinator.search_error == "Failed to get a response from the AI. Please try again."

    async def test_unexpected_search_exception_is_contained(
        self, loaded: ViewCoordinator, searcher: FakeSearcher
    ) -> None:
        searcher.error = KeyError("surprise")
        loaded.set_search_query("phishing")
        await loaded.submit_search()

        assert loaded.active_view == ActiveView.AI_ERROR
        assert loaded.search_error == SEARCH_FAILED_MESSAGE

    async def test_retry_after_error(self, loaded: ViewCoordinator, searcher: FakeSearcher) -> None:
        searcher.error = SearchError()
        loaded.set_search_query("phishing")
        await loaded.submit_search()
        searcher.error = None
        await loaded.submit_search()

        assert loaded.active_view == ActiveView.AI_RESULTS
        assert len(searcher.calls) == 2

    async def test_searching_state_while_in_flight(
        self, loaded: ViewCoordinator, searcher: FakeSearcher
    ) -> None:
        searcher.gate.clear()
        loaded.set_search_query("phishing")
        task = asyncio.create_task(loaded.submit_search())
        await asyncio.sleep(0)

        assert loaded.active_view == ActiveView.AI_SEARCHING
        assert isinstance(loaded.search_state, Loading)
        assert not loaded.can_submit_search

        searcher.gate.set()
        await task
        assert loaded.active_view == ActiveView.AI_RESULTS

    async def test_duplicate_submission_is_ignored(
        self, loaded: ViewCoordinator, searcher: FakeSearcher
    ) -> None:
        searcher.gate.clear()
        loaded.set_search_query("phishing")
        task = asyncio.create_task(loaded.submit_search())
        await asyncio.sleep(0)
        await loaded.submit_search()

        assert len(searcher.calls) == 1
        searcher.gate.set()
        await task

    async def test_research_discards_prior_results_immediately(
        self, with_results: ViewCoordinator, searcher: FakeSearcher
    ) -> None:
        searcher.gate.clear()
        with_results.set_search_query("ransomware")
        task = asyncio.create_task(with_results.submit_search())
        await asyncio.sleep(0)

        assert with_results.active_view == ActiveView.AI_SEARCHING
        assert with_results.search_results == []

        searcher.gate.set()
        await task
        assert with_results.active_view == ActiveView.AI_RESULTS

    async def test_stale_response_after_clear_is_dropped(
        self, loaded: ViewCoordinator, searcher: FakeSearcher
    ) -> None:
        searcher.gate.clear()
        loaded.set_search_query("phishing")
        task = asyncio.create_task(loaded.submit_search())
        await asyncio.sleep(0)

        loaded.clear_search()
        searcher.gate.set()
        await task

        assert loaded.active_view == ActiveView.BROWSE
        assert loaded.search_results == []

    async def test_stale_response_after_restart_is_dropped(
        self, loaded: ViewCoordinator, searcher: FakeSearcher, ai_results: list[AIResult]
    ) -> None:
        searcher.gate.clear()
        loaded.set_search_query("first")
        first = asyncio.create_task(loaded.submit_search())
        await asyncio.sleep(0)

        loaded.clear_search()
        searcher.results = []
        loaded.set_search_query("second")
        second = asyncio.create_task(loaded.submit_search())
        await asyncio.sleep(0)

        searcher.gate.set()
        await asyncio.gather(first, second)

        assert [q for q, _ in searcher.calls] == ["first", "second"]
        assert loaded.active_view == ActiveView.AI_RESULTS
        assert loaded.search_results == []


# -- Summary --


class TestSummary:
    async def test_initial_summary_state(self, with_results: ViewCoordinator) -> None:
        assert with_results.summary_status == SummaryStatus.NO_SUMMARY
        assert with_results.can_generate_summary

    async def test_generate_summary(
        self,
        with_results: ViewCoordinator,
        summarizer: FakeSummarizer,
        ai_results: list[AIResult],
    ) -> None:
        await with_results.generate_summary()

        assert with_results.summary_status == SummaryStatus.READY
        assert with_results.summary == "Phishing dominates."
        assert summarizer.calls == [ai_results]
        assert not with_results.can_generate_summary

    async def test_summary_not_available_in_browse(
        self, loaded: ViewCoordinator, summarizer: FakeSummarizer
    ) -> None:
        await loaded.generate_summary()
        assert summarizer.calls == []
        assert loaded.summary_status == SummaryStatus.NO_SUMMARY

    async def test_summary_failure_then_dismiss_and_regenerate(
        self, with_results: ViewCoordinator, summarizer: FakeSummarizer
    ) -> None:
        summarizer.error = SummaryError()
        await with_results.generate_summary()

        assert with_results.summary_status == SummaryStatus.ERROR
        assert with_results.summary_error == SUMMARY_FAILED_MESSAGE
        assert with_results.active_view == ActiveView.AI_RESULTS

        with_results.dismiss_summary()
        assert with_results.summary_status == SummaryStatus.NO_SUMMARY

        summarizer.error = None
        await with_results.generate_summary()
        assert with_results.summary_status == SummaryStatus.READY

    async def test_dismiss_ready_summary(self, with_results: ViewCoordinator) -> None:
        await with_results.generate_summary()
        with_results.dismiss_summary()

        assert with_results.summary_status == SummaryStatus.NO_SUMMARY
        assert with_results.summary is None

    async def test_duplicate_generate_is_ignored(
        self, with_results: ViewCoordinator, summarizer: FakeSummarizer
    ) -> None:
        summarizer.gate.clear()
        task = asyncio.create_task(with_results.generate_summary())
        await asyncio.sleep(0)

        assert with_results.summary_status == SummaryStatus.SUMMARIZING
        await with_results.generate_summary()
        assert len(summarizer.calls) == 1

        summarizer.gate.set()
        await task
        assert with_results.summary_status == SummaryStatus.READY

    async def test_dismiss_does_not_cancel_in_flight_summary(
        self, with_results: ViewCoordinator, summarizer: FakeSummarizer
    ) -> None:
        summarizer.gate.clear()
        task = asyncio.create_task(with_results.generate_summary())
        await asyncio.sleep(0)

        with_results.dismiss_summary()
        assert with_results.summary_status == SummaryStatus.SUMMARIZING

        summarizer.gate.set()
        await task
        assert with_results.summary_status == SummaryStatus.READY

    async def test_clear_search_resets_summary(self, with_results: ViewCoordinator) -> None:
        await with_results.generate_summary()
        with_results.clear_search()
        assert with_results.summary_status == SummaryStatus.NO_SUMMARY
        assert isinstance(with_results.summary_state, Idle)

    async def test_research_resets_summary(self, with_results: ViewCoordinator) -> None:
        await with_results.generate_summary()
        await with_results.submit_search()
        assert with_results.summary_status == SummaryStatus.NO_SUMMARY

    async def test_stale_summary_after_clear_is_dropped(
        self, with_results: ViewCoordinator, summarizer: FakeSummarizer
    ) -> None:
        summarizer.gate.clear()
        task = asyncio.create_task(with_results.generate_summary())
        await asyncio.sleep(0)

        with_results.clear_search()
        summarizer.gate.set()
        await task

        assert with_results.summary_status == SummaryStatus.NO_SUMMARY
        assert with_results.summary is None

    async def test_reset_filters_dismisses_ready_summary(
        self, with_results: ViewCoordinator
    ) -> None:
        await with_results.generate_summary()
        with_results.reset_filters()
        assert with_results.summary_status == SummaryStatus.NO_SUMMARY


# -- Detail overlay --


class TestDetail:
    async def test_open_and_close(
        self, loaded: ViewCoordinator, records: list[StatRecord]
    ) -> None:
        loaded.open_detail(records[0])
        assert loaded.detail == records[0]
        assert loaded.active_view == ActiveView.BROWSE

        loaded.close_detail()
        assert loaded.detail is None

    async def test_escape_closes(self, loaded: ViewCoordinator, records: list[StatRecord]) -> None:
        loaded.open_detail(records[0])
        loaded.handle_key("Enter")
        assert loaded.detail is not None
        loaded.handle_key("Escape")
        assert loaded.detail is None

    async def test_open_from_results_keeps_reason(
        self, with_results: ViewCoordinator, ai_results: list[AIResult]
    ) -> None:
        with_results.open_detail(ai_results[0])

        detail = with_results.detail
        assert isinstance(detail, AIResult)
        assert detail.reason == "Directly about phishing."
        assert with_results.active_view == ActiveView.AI_RESULTS

    async def test_filter_change_keeps_detail_open(
        self, loaded: ViewCoordinator, records: list[StatRecord]
    ) -> None:
        loaded.open_detail(records[1])
        loaded.toggle_topic("Phishing")
        assert loaded.detail == records[1]

    def test_not_available_while_loading(
        self, coordinator: ViewCoordinator, records: list[StatRecord]
    ) -> None:
        coordinator.open_detail(records[0])
        assert coordinator.detail is None

    async def test_detail_citation(
        self, loaded: ViewCoordinator, records: list[StatRecord]
    ) -> None:
        assert loaded.detail_citation() is None
        loaded.open_detail(records[0])
        assert loaded.detail_citation() == '"60% of breaches involve phishing" (Source: http://x)'
        loaded.open_detail(records[1])
        assert loaded.detail_citation() is None


def test_succeeded_state_carries_value() -> None:
    assert Succeeded((1, 2)).value == (1, 2)
    assert Loading(3) == Loading(3)
    assert Loading(3) != Loading(4)
