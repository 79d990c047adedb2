"""
People Directory - Grouping & Query Orchestration for Person Records.

Loads a large, paginated collection of person records from the Random User
API and presents it as a searchable, groupable directory. Grouping of
multi-thousand record sets runs in a background worker process so the
event loop stays responsive, with an inline fallback where worker
processes are unavailable.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Observable state cells with a single writer each
    - Strategy Pattern for the grouping backend
    - Configuration-driven behavior via YAML

Main Components:
    - domain: Core entities (Person, PersonGroup, PaginationState, ...)
    - grouping: Partition engine, worker channel, backends, coordinator
    - search: Matching, debouncing and the search orchestrator
    - pagination: Paged acquisition and the auto-continuation policy
    - directory: Composition root wiring everything together
    - adapters: Record sources (HTTP client, deterministic mock)
    - config: Configuration models and loaders

Example:
    >>> from people_directory.directory import DirectoryController
    >>> async with DirectoryController.from_config(config) as directory:
    ...     await directory.start()
    ...     directory.on_search_input("berlin")

"""

import logging

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for People Directory.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import people_directory
        >>> people_directory.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("people_directory").setLevel(level)
