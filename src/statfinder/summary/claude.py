import json
import logging
import os
from collections.abc import Sequence

import anthropic

from statfinder.data import StatRecord
from statfinder.errors import SummaryError
from statfinder.summary.base import NO_DATA_MESSAGE

logger = logging.getLogger(__name__)

MAX_SUMMARY_RECORDS = 50

SYSTEM_PROMPT = """\
You are a senior industry analyst specializing in cybersecurity. Your readers \
are CISOs, CTOs and other senior technology leaders.

Write a concise, authoritative executive summary of the statistics you are \
given, in the style of an analyst research note:
1. Identify the dominant strategic narrative: what overall story do these data \
points tell about the current threat landscape?
2. Ground the analysis in concrete figures, citing specific percentages and \
numbers.
3. Synthesize rather than list. Weave the data into one coherent analysis \
instead of restating each statistic.
4. Keep a forward-looking tone: what do these trends imply, and what should \
leaders be thinking about next?
5. Use short paragraphs and bullet points, opening with a strong topic sentence.\
"""


class ClaudeSummarizer:
    """Generate an executive summary of selected statistics using Claude.

    Only the first ``max_records`` records are sent, in order. The search
    ``reason`` attached to AI results is left out of the prompt.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_records: Largest number of records included in the prompt.
        max_tokens: Output token limit for the reply.
    """

    def __init__(
        self,
        *,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        max_records: int = MAX_SUMMARY_RECORDS,
        max_tokens: int = 2048,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_records = max_records
        self._max_tokens = max_tokens

    def build_prompt(self, records: Sequence[StatRecord]) -> str:
        subset = records[: self._max_records]
        # to_prompt_dict carries only the statistic fields, never the reason
        data = json.dumps([r.to_prompt_dict() for r in subset], indent=2, ensure_ascii=False)
        return f"DATA:\n{data}\n\nProduce the executive summary."

    async def summarize(self, records: Sequence[StatRecord]) -> str:
        if not records:
            return NO_DATA_MESSAGE

        user_prompt = self.build_prompt(records)
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except Exception as e:
            logger.error("Error calling Claude API for summary: %s", e)
            raise SummaryError() from e

        text = ""
        for block in response.content:
            if block.type == "text":
                text += block.text
        return text.strip()
