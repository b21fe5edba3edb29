from collections.abc import Sequence
from typing import Protocol

from statfinder.data import StatRecord

NO_DATA_MESSAGE = "No data available to generate a summary."


class Summarizer(Protocol):
    """Interface for writing an executive summary of selected records."""

    async def summarize(self, records: Sequence[StatRecord]) -> str:
        """Synthesize narrative prose from the records.

        Returns ``NO_DATA_MESSAGE`` without contacting the model when
        ``records`` is empty.

        Raises:
            SummaryError: If the model call fails.
        """
        ...
