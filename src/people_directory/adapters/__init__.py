"""
Adapters Package - Record Source Implementations.

Concrete implementations of the RecordSource protocol:
    - RandomUserClient: httpx client for the Random User API
    - MockRecordSource: Deterministic in-memory source for tests and demos
"""

from people_directory.adapters.mock_provider import MockRecordSource
from people_directory.adapters.randomuser_client import RandomUserClient

__all__ = ["MockRecordSource", "RandomUserClient"]
