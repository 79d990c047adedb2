"""
Mock Record Source.

A fake record source for development and testing. Generates deterministic
raw records shaped like Random User API results, serves them page by page
and can be scripted to fail on chosen calls.
"""

from __future__ import annotations

import asyncio
import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from people_directory.domain.lookup_tables import NATIONALITY_NAMES
from people_directory.domain.value_objects import ApiInfo, ApiPage, RawRecord
from people_directory.validation.request_validator import UPSTREAM_MAX_PAGE_SIZE


class MockRecordSource:
    """Fake record source for development and testing."""

    FIRST_NAMES = [
        "Anna", "Ben", "Chloé", "David", "Émile", "Fatma", "Gustav", "Hanna",
        "Ilse", "Jonas", "Kerem", "Laura", "Mateo", "Nora", "Oskar", "Pia",
        "Quentin", "Rosa", "Sven", "Tomás", "Ursula", "Vera", "Wout", "Yara",
        "Zoë",
    ]

    LAST_NAMES = [
        "Andersen", "Bauer", "Costa", "Dubois", "Eriksen", "Fischer", "García",
        "Hansen", "Iyer", "Jensen", "Kaya", "Lambert", "Moreau", "Nielsen",
        "Öztürk", "Petrov", "Rossi", "Schmidt", "Taylor", "Vidal", "Wagner",
    ]

    GENDERS = ["female", "male"]

    CITIES = [
        ("Berlin", "Berlin", "Germany"),
        ("Lyon", "Auvergne-Rhône-Alpes", "France"),
        ("Bergen", "Vestland", "Norway"),
        ("Cork", "Munster", "Ireland"),
        ("Austin", "Texas", "United States"),
        ("Puebla", "Puebla", "Mexico"),
    ]

    # Reference instant for date-of-birth generation
    REFERENCE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __init__(
        self,
        seed: int = 42,
        total_records: int = 250,
        latency_seconds: float = 0.0,
        failures: Optional[Dict[int, Exception]] = None,
        missing_field_every: int = 0,
    ) -> None:
        """
        Initialize mock source.

        Args:
            seed: Random seed for reproducibility
            total_records: Size of the simulated dataset; pages past the end
                come back short or empty
            latency_seconds: Artificial delay per fetch
            failures: Map of 1-based call number to the exception that call
                should raise
            missing_field_every: When > 0, every n-th record lacks its name,
                nationality and age
        """
        self._seed = seed
        self.total_records = total_records
        self.latency_seconds = latency_seconds
        self._failures = dict(failures or {})
        self._missing_field_every = missing_field_every
        self._records: Dict[int, RawRecord] = {}
        self.calls: List[Dict[str, object]] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def fail_on_call(self, call_number: int, error: Exception) -> None:
        """Script the given (1-based) call to raise `error`."""
        self._failures[call_number] = error

    async def fetch_page(self, page: int, page_size: int, seed: str) -> ApiPage:
        """Serve one slice of the simulated dataset."""
        self.calls.append({"page": page, "page_size": page_size, "seed": seed})

        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)

        error = self._failures.pop(len(self.calls), None)
        if error is not None:
            raise error

        size = min(page_size, UPSTREAM_MAX_PAGE_SIZE)
        start = (page - 1) * size
        end = min(start + size, self.total_records)
        results = [self.record_at(i) for i in range(start, end)]

        return ApiPage(
            results=results,
            info=ApiInfo(seed=seed, results=len(results), page=page, version="1.4"),
        )

    async def close(self) -> None:
        self.closed = True

    def record_at(self, index: int) -> RawRecord:
        """Raw record at a dataset position (stable across calls)."""
        if index not in self._records:
            self._records[index] = self._generate_record(index)
        return self._records[index]

    def _generate_record(self, index: int) -> RawRecord:
        rng = random.Random(f"{self._seed}:{index}")

        first = rng.choice(self.FIRST_NAMES)
        last = rng.choice(self.LAST_NAMES)
        gender = rng.choice(self.GENDERS)
        nat = rng.choice(sorted(NATIONALITY_NAMES))
        age = rng.randint(16, 80)
        city, state, country = rng.choice(self.CITIES)
        born = self.REFERENCE_DATE - timedelta(days=age * 365 + rng.randint(0, 364))
        email = f"{first.lower()}.{last.lower()}.{index}@example.com"

        record: RawRecord = {
            "gender": gender,
            "name": {"title": "", "first": first, "last": last},
            "location": {
                "city": city,
                "state": state,
                "country": country,
                "postcode": rng.randint(10000, 99999),
            },
            "email": email,
            "login": {
                "uuid": str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                "username": f"{first.lower()}{index}",
            },
            "dob": {"date": born.isoformat().replace("+00:00", "Z"), "age": age},
            "phone": f"0{rng.randint(100, 999)}-{rng.randint(1000000, 9999999)}",
            "picture": {
                "medium": f"https://randomuser.me/api/portraits/med/"
                f"{'women' if gender == 'female' else 'men'}/{index % 100}.jpg",
            },
            "nat": nat,
        }

        # Sparse records exercise the Unknown buckets
        if self._missing_field_every and (index + 1) % self._missing_field_every == 0:
            record["name"] = {"title": "", "first": "", "last": last}
            record["nat"] = None
            record["dob"] = {"date": None, "age": None}

        return record
