#!/usr/bin/env python
"""CLI for the StatFinder research assistant."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from statfinder.config import create_from_config, get_default_config_path, load_config
from statfinder.coordinator import ActiveView, SummaryStatus, ViewCoordinator
from statfinder.data import StatRecord

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    query: str | None = None
    config: Path
    topics: list[str] = []
    companies: list[str] = []
    dates: list[str] = []
    term: str = ""
    summary: bool = False

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def _print_record(index: int, record: StatRecord, reason: str | None = None) -> None:
    print(f"{index}. {record.stat or 'Stat not available'}")
    print(f"   Resource: {record.resource_name or 'Untitled Resource'}")
    for label, value in record.detail_rows():
        print(f"   {label}: {value}")
    if record.source:
        print(f"   Source: {record.source}")
    if reason:
        print(f"   Why: {reason}")


def _browse(coordinator: ViewCoordinator, args: CLIArgs) -> None:
    for topic in args.topics:
        coordinator.toggle_topic(topic)
    for company in args.companies:
        coordinator.toggle_company(company)
    for date in args.dates:
        coordinator.toggle_date(date)
    coordinator.set_search_term(args.term)

    records = coordinator.filtered_records
    print(f"\nBrowse Database ({len(records)} stats found):\n")
    for i, record in enumerate(records, 1):
        _print_record(i, record)


async def _search(coordinator: ViewCoordinator, args: CLIArgs) -> None:
    coordinator.set_search_query(args.query or "")
    await coordinator.submit_search()

    if coordinator.active_view == ActiveView.AI_ERROR:
        logger.error(coordinator.search_error)
        return

    results = coordinator.search_results
    print(f"\nAI found {len(results)} relevant stat{'s' if len(results) != 1 else ''}:\n")
    for i, result in enumerate(results, 1):
        _print_record(i, result, reason=result.reason)

    if args.summary and coordinator.can_generate_summary:
        await coordinator.generate_summary()
        if coordinator.summary_status == SummaryStatus.READY:
            print("\n--- Executive Analysis ---\n")
            print(coordinator.summary)
        else:
            logger.error(coordinator.summary_error)


async def run(args: CLIArgs) -> int:
    """Load the dataset, then browse or search it.

    Args:
        args: Validated CLI arguments.

    Returns:
        Process exit code.
    """
    config = load_config(args.config)
    logging.getLogger().setLevel(config.logging.level)
    coordinator = create_from_config(config)

    logger.info(f"Config: {args.config}")
    await coordinator.load()
    if coordinator.active_view == ActiveView.DATA_ERROR:
        logger.error(coordinator.data_error)
        return 1

    if args.query and args.query.strip():
        await _search(coordinator, args)
    else:
        _browse(coordinator, args)
    return 0


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Find cybersecurity statistics that support your research."
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Research request for the AI search (omit to browse the database)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument("--topic", action="append", default=[], help="Filter by topic")
    parser.add_argument("--company", action="append", default=[], help="Filter by company")
    parser.add_argument("--date", action="append", default=[], help="Filter by date")
    parser.add_argument("--term", default="", help="Keyword to match in the browse view")
    parser.add_argument(
        "--summary",
        action="store_true",
        default=False,
        help="Generate an executive summary of the AI search results",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            query=ns.query,
            config=config_path,
            topics=ns.topic,
            companies=ns.company,
            dates=ns.date,
            term=ns.term,
            summary=ns.summary,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
