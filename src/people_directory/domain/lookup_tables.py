"""
Lookup Tables - Static Display Data.

Pure data used for labeling: nationality code to display name and the
fixed age bucket rules. No state, no I/O.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional

UNKNOWN_KEY = "Unknown"
CATCH_ALL_KEY = "All"


NATIONALITY_NAMES: Dict[str, str] = {
    "AU": "Australia",
    "BR": "Brazil",
    "CA": "Canada",
    "CH": "Switzerland",
    "DE": "Germany",
    "DK": "Denmark",
    "ES": "Spain",
    "FI": "Finland",
    "FR": "France",
    "GB": "United Kingdom",
    "IE": "Ireland",
    "IN": "India",
    "IR": "Iran",
    "MX": "Mexico",
    "NL": "Netherlands",
    "NO": "Norway",
    "NZ": "New Zealand",
    "RS": "Serbia",
    "TR": "Turkey",
    "UA": "Ukraine",
    "US": "United States",
}


class AgeBucket(NamedTuple):
    """Half-open age range [lower, upper) with its key and label."""

    key: str
    label: str
    lower: int
    upper: Optional[int]

    def contains(self, age: int) -> bool:
        if age < self.lower:
            return False
        return self.upper is None or age < self.upper


# Ordered, contiguous, covering [0, inf)
AGE_BUCKETS: List[AgeBucket] = [
    AgeBucket("0-17", "Under 18", 0, 18),
    AgeBucket("18-24", "18-24 years", 18, 25),
    AgeBucket("25-34", "25-34 years", 25, 35),
    AgeBucket("35-44", "35-44 years", 35, 45),
    AgeBucket("45-54", "45-54 years", 45, 55),
    AgeBucket("55-64", "55-64 years", 55, 65),
    AgeBucket("65+", "65+ years", 65, None),
]

_AGE_BUCKETS_BY_KEY: Dict[str, AgeBucket] = {b.key: b for b in AGE_BUCKETS}


def nationality_name(code: str) -> str:
    """Display name for a nationality code, or the code itself if unmapped."""
    return NATIONALITY_NAMES.get(code) or code


def age_bucket_for(age: Optional[int]) -> AgeBucket:
    """
    Bucket for an age.

    A missing age counts as 0, so it lands in "0-17" rather than in an
    "Unknown" group. Negative ages are clamped the same way.
    """
    value = age or 0
    for bucket in AGE_BUCKETS:
        if bucket.contains(value):
            return bucket
    return AGE_BUCKETS[0]


def age_bucket_label(key: str) -> str:
    """Human-readable label for an age bucket key."""
    bucket = _AGE_BUCKETS_BY_KEY.get(key)
    return bucket.label if bucket else key
