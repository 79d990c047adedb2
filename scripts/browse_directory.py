#!/usr/bin/env python3
"""
Browse the people directory from the command line.

Loads configuration, starts a directory session (live API or --mock),
applies an optional search term and grouping criterion and prints the
resulting groups.

Usage:
    python scripts/browse_directory.py --mock --search anna --group nationality
    python scripts/browse_directory.py --config config/default.yaml --profile throttled
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import people_directory
from people_directory.adapters import MockRecordSource
from people_directory.config import ConfigLoader, DirectoryConfig, with_overrides
from people_directory.directory import DirectoryController
from people_directory.domain import GroupingCriterion

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOADER = ConfigLoader(PROJECT_ROOT / "config")

# One-shot run: no follow-up loads
ONE_SHOT = {"auto_continuation": {"enabled": False}}


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--config", default=None, help="YAML config file (config/default.yaml)")
    parser.add_argument(
        "--profile",
        choices=LOADER.available_profiles(),
        help="Profile under config/profiles/",
    )
    parser.add_argument("--mock", action="store_true", help="Use the deterministic mock source")
    parser.add_argument("--mock-records", type=int, default=250, help="Mock dataset size")
    parser.add_argument("--search", default="", help="Search term")
    parser.add_argument(
        "--group",
        default=None,
        choices=[c.value for c in GroupingCriterion],
        help="Grouping criterion",
    )
    parser.add_argument("--limit", type=int, default=3, help="Members shown per group")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def load(args: argparse.Namespace) -> DirectoryConfig:
    config_path = Path(args.config) if args.config else LOADER.default_path
    if not config_path.exists():
        print(f"⚠️  Config not found: {config_path}, using defaults")
        return with_overrides(DirectoryConfig(), ONE_SHOT)
    return LOADER.load(config_path, profile=args.profile, overrides=ONE_SHOT)


async def wait_for_grouping(directory: DirectoryController, timeout: float = 30.0) -> None:
    """Wait until no grouping request is outstanding."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while directory.coordinator.pending_count or directory.grouping_loading.value:
        if loop.time() > deadline:
            print("⚠️  Grouping did not settle in time")
            return
        await asyncio.sleep(0.05)


async def browse(args: argparse.Namespace) -> int:
    config = load(args)
    source = MockRecordSource(total_records=args.mock_records) if args.mock else None

    async with DirectoryController.from_config(config, source=source) as directory:
        await directory.start()

        if args.group:
            directory.set_criterion(args.group)
        if args.search:
            directory.on_search_input(args.search)
            await asyncio.sleep(config.search.debounce_seconds + 0.05)
        await wait_for_grouping(directory)

        error = directory.error.value
        if error:
            print(f"❌ {error}")

        state = directory.pagination.value
        print(
            f"📇 {directory.total_records} records loaded "
            f"(next page {state.page}, more available: {state.has_more})"
        )
        criterion = GroupingCriterion.parse(directory.criterion.value)
        heading = criterion.label if criterion else str(directory.criterion.value)
        print(f"🔎 search={directory.search_term.value!r}  grouping={heading}")
        print("-" * 60)

        for group in directory.groups.value:
            print(f"{group.label} ({group.count})")
            for person in group.members[: args.limit]:
                print(f"    {person.full_name:<30} {person.nationality_name:<16} {person.age_display}")
            if group.count > args.limit:
                print(f"    ... {group.count - args.limit} more")

        print("-" * 60)
        print(f"{directory.total_groups} groups, {len(directory.visible_records())} visible records")
        return 1 if error else 0


def main() -> int:
    args = parse_args()
    people_directory.configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(browse(args))


if __name__ == "__main__":
    sys.exit(main())
