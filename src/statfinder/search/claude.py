"""Claude-based relevance search using a schema-constrained tool call."""

import json
import logging
import os
import random
from collections.abc import Callable, Sequence
from typing import Any

import anthropic

from statfinder.data import AIResult, StatRecord
from statfinder.errors import SearchError

logger = logging.getLogger(__name__)

Sampler = Callable[[Sequence[StatRecord], int], list[StatRecord]]

MAX_CORPUS_RECORDS = 200
RESULTS_TOOL_NAME = "record_relevant_stats"

SYSTEM_PROMPT = """\
You are an expert cybersecurity research assistant. Analysts send you a \
research request together with a list of cybersecurity statistics, and you \
pick out the statistics that support their work.

Instructions:
1. Read the research request carefully and work out what the analyst needs.
2. Go through the available data and select only the entries that genuinely \
address the request. Match on keywords, topics and concepts.
3. For every entry you select, give a one-sentence "reason" explaining why it \
fits the request.
4. Copy each selected entry's original fields unchanged and add your "reason".
5. If nothing in the data is relevant, return an empty list. Never invent \
statistics.

Report your selection with the record_relevant_stats tool.\
"""

_OPTIONAL_FIELD = {"type": "string"}

RESULT_ITEM_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "date": _OPTIONAL_FIELD,
        "company": _OPTIONAL_FIELD,
        "topic": _OPTIONAL_FIELD,
        "technology": _OPTIONAL_FIELD,
        "source": _OPTIONAL_FIELD,
        "stat": {"type": "string", "minLength": 1},
        "resourceName": {"type": "string", "minLength": 1},
        "reason": {
            "type": "string",
            "minLength": 1,
            "description": (
                "A brief explanation of why this data point is relevant to the research request."
            ),
        },
    },
    "required": ["stat", "resourceName", "reason"],
}

RESULTS_TOOL: dict[str, Any] = {
    "name": RESULTS_TOOL_NAME,
    "description": "Record the statistics that are relevant to the research request.",
    "input_schema": {
        "type": "object",
        "properties": {"results": {"type": "array", "items": RESULT_ITEM_SCHEMA}},
        "required": ["results"],
    },
}


def _strip_fences(text: str) -> str:
    """Remove markdown code fences around a JSON reply."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines).strip()
    return cleaned


class ClaudeRelevanceSearcher:
    """Select relevant statistics for a research query using Claude.

    Large corpora are reduced to a random sample before prompting to bound
    request size and cost.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_corpus_records: Largest corpus sent to the model in one request.
        max_tokens: Output token limit for the reply.
        sampler: Draws ``k`` distinct records from a corpus. Defaults to
            ``random.sample``.
    """

    def __init__(
        self,
        *,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        max_corpus_records: int = MAX_CORPUS_RECORDS,
        max_tokens: int = 8192,
        sampler: Sampler | None = None,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_corpus = max_corpus_records
        self._max_tokens = max_tokens
        self._sampler: Sampler = sampler or random.sample

    def select_corpus(self, corpus: Sequence[StatRecord]) -> list[StatRecord]:
        """Return the records to send: the whole corpus, or a sample of the maximum size."""
        if len(corpus) > self._max_corpus:
            return list(self._sampler(corpus, self._max_corpus))
        return list(corpus)

    def build_prompt(self, query: str, records: Sequence[StatRecord]) -> str:
        data = json.dumps([r.to_prompt_dict() for r in records], ensure_ascii=False)
        return f'RESEARCH REQUEST:\n"{query}"\n\nAVAILABLE DATA (JSON):\n{data}'

    async def search(self, query: str, corpus: Sequence[StatRecord]) -> list[AIResult]:
        """Ask Claude which records in the corpus address the query.

        Args:
            query: Free-text research request. Must not be blank.
            corpus: Candidate records.

        Returns:
            Relevant records with reasons. Empty when the model finds nothing,
            replies with blank text, or replies with something other than a list.

        Raises:
            SearchError: If the API call fails or the reply cannot be parsed.
        """
        records = self.select_corpus(corpus)
        user_prompt = self.build_prompt(query, records)

        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                tools=[RESULTS_TOOL],
                tool_choice={"type": "tool", "name": RESULTS_TOOL_NAME},
                messages=[{"role": "user", "content": user_prompt}],
            )
            payload = self._extract_payload(response)
        except Exception as e:
            logger.error("Error calling Claude API for relevance search: %s", e)
            raise SearchError() from e

        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.warning("AI did not return a JSON array. Response: %r", payload)
            return []

        results: list[AIResult] = []
        for item in payload:
            result = AIResult.from_dict(item) if isinstance(item, dict) else None
            if result is None:
                logger.warning("Skipping malformed search result: %r", item)
                continue
            results.append(result)

        logger.info("Relevance search selected %d of %d records", len(results), len(records))
        return results

    def _extract_payload(self, response: Any) -> object | None:
        """Pull the results payload out of the reply.

        Prefers the forced tool call; falls back to a JSON text reply.
        Returns None for a blank reply.
        """
        text = ""
        for block in response.content:
            if block.type == "tool_use" and block.name == RESULTS_TOOL_NAME:
                tool_input = block.input
                if isinstance(tool_input, dict):
                    return tool_input.get("results", tool_input)
                return tool_input
            if block.type == "text":
                text += block.text

        cleaned = _strip_fences(text)
        if not cleaned:
            return None
        return json.loads(cleaned)
