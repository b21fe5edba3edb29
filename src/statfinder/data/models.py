"""Core data models for StatFinder."""

from dataclasses import dataclass, fields, replace
from typing import Any

# Remote column spellings accepted for each StatRecord field.
_ROW_KEYS: dict[str, tuple[str, ...]] = {
    "date": ("Date", "date"),
    "company": ("Company", "company"),
    "topic": ("Topic", "topic"),
    "technology": ("Technology", "technology"),
    "source": ("Source", "source"),
    "stat": ("stat", "Stat"),
    "resource_name": ("ResourceName", "resourceName", "resource_name"),
}

# Field name -> key used when a record is serialized into an LLM prompt.
_PROMPT_KEYS: dict[str, str] = {
    "date": "date",
    "company": "company",
    "topic": "topic",
    "technology": "technology",
    "source": "source",
    "stat": "stat",
    "resource_name": "resourceName",
}


def _clean(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


@dataclass(frozen=True)
class StatRecord:
    """One cybersecurity statistic from the curated table.

    ``stat`` and ``resource_name`` are expected to be populated. Every other
    field may be an empty string, which means the value is absent.
    """

    date: str = ""
    company: str = ""
    topic: str = ""
    technology: str = ""
    source: str = ""
    stat: str = ""
    resource_name: str = ""

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "StatRecord":
        """Normalize a row from the dataset store.

        Accepts the store's column names (``Date``, ``ResourceName``, ...) as
        well as camelCase and snake_case keys. Missing and null values
        become empty strings.
        """
        values: dict[str, str] = {}
        for name, keys in _ROW_KEYS.items():
            raw: object = None
            for key in keys:
                if key in row:
                    raw = row[key]
                    break
            values[name] = _clean(raw)
        return cls(**values)

    def to_prompt_dict(self) -> dict[str, str]:
        """Serialize the statistic fields for inclusion in a prompt."""
        return {_PROMPT_KEYS[f.name]: getattr(self, f.name) for f in fields(StatRecord)}

    def citation(self) -> str | None:
        """Text copied to the clipboard from the detail view, if the stat has a source."""
        if not self.source:
            return None
        return f'"{self.stat}" (Source: {self.source})'

    def detail_rows(self) -> list[tuple[str, str]]:
        """Labelled metadata rows for the detail view, skipping absent values."""
        rows = [
            ("Publisher", self.company),
            ("Topic", self.topic),
            ("Technology", self.technology),
            ("Date", self.date),
        ]
        return [(label, value) for label, value in rows if value]


@dataclass(frozen=True)
class AIResult(StatRecord):
    """A statistic selected by the relevance search, with the model's rationale."""

    reason: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, object]) -> "AIResult | None":
        """Parse one result object produced by the model.

        Returns ``None`` when a required field (``stat``, ``resourceName``,
        ``reason``) is missing or blank, or when any field is not a string.
        """
        values: dict[str, str] = {}
        for name, keys in _ROW_KEYS.items():
            value: object = ""
            for key in keys:
                if key in raw:
                    value = raw[key]
                    break
            if value is None:
                value = ""
            if not isinstance(value, str):
                return None
            values[name] = value.strip()

        reason = raw.get("reason")
        if not isinstance(reason, str) or not reason.strip():
            return None
        if not values["stat"] or not values["resource_name"]:
            return None
        return cls(reason=reason.strip(), **values)


@dataclass(frozen=True)
class FilterOptions:
    """Facet values available for filtering, derived from the dataset."""

    topics: tuple[str, ...] = ()
    companies: tuple[str, ...] = ()
    dates: tuple[str, ...] = ()


def _toggled(values: tuple[str, ...], value: str) -> tuple[str, ...]:
    if value in values:
        return tuple(v for v in values if v != value)
    return (*values, value)


@dataclass(frozen=True)
class FilterState:
    """Selected facet values plus the free-text term. Empty means no filter."""

    topics: tuple[str, ...] = ()
    companies: tuple[str, ...] = ()
    dates: tuple[str, ...] = ()
    term: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.topics or self.companies or self.dates or self.term)

    def toggle_topic(self, topic: str) -> "FilterState":
        return replace(self, topics=_toggled(self.topics, topic))

    def toggle_company(self, company: str) -> "FilterState":
        return replace(self, companies=_toggled(self.companies, company))

    def toggle_date(self, date: str) -> "FilterState":
        return replace(self, dates=_toggled(self.dates, date))

    def with_term(self, term: str) -> "FilterState":
        return replace(self, term=term)
