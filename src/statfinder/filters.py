"""Facet derivation and filtering over the loaded dataset.

Everything here is a pure function of its arguments.
"""

from collections.abc import Collection, Sequence
from datetime import datetime, timedelta

from dateutil import parser as date_parser

from statfinder.data import FilterOptions, FilterState, StatRecord

# Fills in the parts a free-form date leaves out ("2024" -> 2024-01-01).
_DATE_DEFAULT = datetime(1900, 1, 1)


def parse_date(value: str) -> datetime | None:
    """Parse a free-form display date, or return None if it is not a date."""
    try:
        parsed = date_parser.parse(value, default=_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    return parsed.replace(tzinfo=None)


def _date_sort_key(value: str) -> tuple[int, timedelta, str]:
    """Most recent first; unparseable dates last, by raw value."""
    parsed = parse_date(value)
    if parsed is None:
        return (1, timedelta(0), value)
    return (0, datetime.min - parsed, value)


def derive_facets(records: Sequence[StatRecord]) -> FilterOptions:
    """Collect the distinct non-empty topics, companies and dates.

    Topics and companies are sorted lexicographically. Dates are sorted by
    calendar value, most recent first, with unparseable dates at the end.
    """
    topics: set[str] = set()
    companies: set[str] = set()
    dates: set[str] = set()
    for record in records:
        if record.topic:
            topics.add(record.topic)
        if record.company:
            companies.add(record.company)
        if record.date:
            dates.add(record.date)

    return FilterOptions(
        topics=tuple(sorted(topics)),
        companies=tuple(sorted(companies)),
        dates=tuple(sorted(dates, key=_date_sort_key)),
    )


def _matches_term(record: StatRecord, term: str) -> bool:
    needle = term.lower()
    return any(
        needle in field.lower()
        for field in (
            record.stat,
            record.resource_name,
            record.company,
            record.topic,
            record.technology,
        )
    )


def apply_filters(
    records: Sequence[StatRecord],
    topics: Collection[str],
    companies: Collection[str],
    dates: Collection[str],
    term: str,
) -> list[StatRecord]:
    """Return the records passing every active facet and the search term.

    A facet with no selected values lets every record through; otherwise the
    record's value must be one of the selected ones. The term matches when it
    is a case-insensitive substring of the stat, resource name, company,
    topic or technology. Input order is preserved.
    """
    return [
        record
        for record in records
        if (not topics or record.topic in topics)
        and (not companies or record.company in companies)
        and (not dates or record.date in dates)
        and (not term or _matches_term(record, term))
    ]


def apply_filter_state(records: Sequence[StatRecord], state: FilterState) -> list[StatRecord]:
    """Apply a FilterState to the records."""
    return apply_filters(records, state.topics, state.companies, state.dates, state.term)
