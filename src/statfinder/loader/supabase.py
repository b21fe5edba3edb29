import logging
import os

import httpx

from statfinder.data import StatRecord
from statfinder.errors import DataLoadError
from statfinder.loader.base import parse_rows

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "cyber_stats"


class SupabaseLoader:
    """Load the statistics table from a Supabase project over its REST API.

    Reads every row with a single ``select=*`` request. Tables are expected
    to be protected by row-level security, so the anon key is sufficient.

    Args:
        url: Project URL (defaults to SUPABASE_URL env var).
        api_key: Anon key (defaults to SUPABASE_ANON_KEY env var).
        table: Table holding the statistics.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        *,
        url: str | None = None,
        api_key: str | None = None,
        table: str = DEFAULT_TABLE,
        timeout: float = 30.0,
    ) -> None:
        self._url = url or os.environ.get("SUPABASE_URL")
        self._api_key = api_key or os.environ.get("SUPABASE_ANON_KEY")
        if not self._url or not self._api_key:
            raise ValueError(
                "Supabase credentials required. Pass url and api_key or set "
                "SUPABASE_URL and SUPABASE_ANON_KEY env vars."
            )
        self._table = table
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self._url.rstrip('/')}/rest/v1/{self._table}"  # type: ignore[union-attr]

    async def load(self) -> list[StatRecord]:
        """Fetch all rows of the statistics table.

        Returns:
            The full dataset, in store order.

        Raises:
            DataLoadError: If the request fails or the body is not a list of rows.
        """
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(
                    self.endpoint,
                    params={"select": "*"},
                    headers=headers,  # type: ignore[arg-type]
                )
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to fetch table %s: %s", self._table, e)
            raise DataLoadError() from e

        records = parse_rows(payload)
        logger.info("Loaded %d stats from %s", len(records), self._table)
        return records
