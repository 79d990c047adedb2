"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import List

import pytest

from people_directory.adapters.mock_provider import MockRecordSource
from people_directory.config.models import (
    AutoContinuationConfig,
    DirectoryConfig,
    GroupingConfig,
    LoggingConfig,
    PaginationConfig,
    SearchConfig,
)
from people_directory.domain.entities import Person
from people_directory.grouping.backends import InlineGroupingBackend
from people_directory.grouping.coordinator import GroupingCoordinator
from people_directory.observability.observability_manager import ObservabilityManager
from tests.fixtures.people import make_person


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def sample_people() -> List[Person]:
    """A small, varied directory including sparse records."""
    return [
        make_person("Anna", last_name="Schmidt", nationality="DE", age=34, gender="female",
                    city="Berlin", country="Germany", phone="030-1234567"),
        make_person("Émile", last_name="Moreau", nationality="FR", age=17, gender="male",
                    city="Lyon", country="France", email="emile.moreau@example.com"),
        make_person("ben", last_name="Taylor", nationality="GB", age=65, gender="male",
                    city="Leeds", country="United Kingdom"),
        make_person("Zoë", last_name="Nielsen", nationality="DK", age=24, gender="female",
                    city="Aarhus", country="Denmark"),
        make_person("Fatma", last_name="Kaya", nationality="TR", age=45, gender="female",
                    city="Izmir", country="Turkey", phone="0232-555-0101"),
        make_person(None, last_name="Anonymous", nationality=None, age=None, gender=None),
        make_person("", last_name="Blank", nationality="XX", age=18, gender="female"),
    ]


@pytest.fixture
def mock_source() -> MockRecordSource:
    """Deterministic record source with 250 records."""
    return MockRecordSource(seed=42, total_records=250)


@pytest.fixture
def observability() -> ObservabilityManager:
    """Observability manager with console rendering."""
    return ObservabilityManager(use_json=False)


@pytest.fixture
def inline_coordinator(observability: ObservabilityManager) -> GroupingCoordinator:
    """Coordinator computing in the event loop."""
    return GroupingCoordinator(backend=InlineGroupingBackend(), observability=observability)


@pytest.fixture
def default_config() -> DirectoryConfig:
    """Create default directory configuration."""
    return DirectoryConfig()


@pytest.fixture
def fast_config() -> DirectoryConfig:
    """Small pages, short timers, inline grouping, no auto-continuation."""
    return DirectoryConfig(
        pagination=PaginationConfig(page_size=100),
        search=SearchConfig(debounce_seconds=0.01),
        grouping=GroupingConfig(backend="inline"),
        auto_continuation=AutoContinuationConfig(
            enabled=False,
            initial_delay_seconds=0,
            step_delay_seconds=0,
            follow_up_delay_seconds=0,
        ),
        logging=LoggingConfig(level="DEBUG", use_json=False),
    )
