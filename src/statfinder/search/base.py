from collections.abc import Sequence
from typing import Protocol

from statfinder.data import AIResult, StatRecord


class RelevanceSearcher(Protocol):
    """Interface for selecting the records relevant to a research query."""

    async def search(self, query: str, corpus: Sequence[StatRecord]) -> list[AIResult]:
        """Find the records in the corpus that address the query.

        Args:
            query: Free-text research request. Must not be blank.
            corpus: Candidate records offered to the model.

        Returns:
            Relevant records, each annotated with a reason. Empty when nothing
            matches.

        Raises:
            SearchError: If the model call or response parsing fails.
        """
        ...
