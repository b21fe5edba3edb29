"""Protocol for dataset loading."""

from typing import Any, Protocol

from statfinder.data import StatRecord
from statfinder.errors import DataLoadError


class DatasetLoader(Protocol):
    """Interface for fetching the full statistics table."""

    async def load(self) -> list[StatRecord]:
        """Fetch every row and normalize it into StatRecords.

        Returns:
            The full dataset, in store order.

        Raises:
            DataLoadError: If the fetch or parse fails.
        """
        ...


def parse_rows(payload: Any) -> list[StatRecord]:
    """Normalize a decoded JSON payload into StatRecords.

    Raises:
        DataLoadError: If the payload is not a list of objects.
    """
    if not isinstance(payload, list):
        raise DataLoadError()
    records: list[StatRecord] = []
    for row in payload:
        if not isinstance(row, dict):
            raise DataLoadError()
        records.append(StatRecord.from_row(row))
    return records
