"""Loader for a statistics table exported to a local JSON file."""

import json
import logging
from pathlib import Path

from statfinder.data import StatRecord
from statfinder.errors import DataLoadError
from statfinder.loader.base import parse_rows

logger = logging.getLogger(__name__)


class JsonFileLoader:
    """Read the statistics table from a JSON array of row objects.

    Rows use the same column names as the hosted table.

    Args:
        path: Path to the JSON file.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    async def load(self) -> list[StatRecord]:
        try:
            with self._path.open(encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to read %s: %s", self._path, e)
            raise DataLoadError() from e

        records = parse_rows(payload)
        logger.info("Loaded %d stats from %s", len(records), self._path)
        return records
