import math
import re
from collections import Counter
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from users_csv import UserRecord

UNPARSEABLE_AGE = -1

OTHER_REGION = "Other"

# Ages must fit a signed 32-bit int; leading zeros do not count toward the width.
MIN_AGE_VALUE = -(2 ** 31)
MAX_AGE_VALUE = 2 ** 31 - 1

_AGE_RE = re.compile(r"([+-]?)0*([0-9]{1,10})")

REGIONS: Mapping[str, str] = MappingProxyType(
    {
        "Finland": "Europe",
        "Germany": "Europe",
        "France": "Europe",
        "UK": "Europe",
        "USA": "North America",
        "Canada": "North America",
        "Brazil": "South America",
        "India": "Asia",
        "Japan": "Asia",
        "Australia": "Oceania",
    }
)


def parse_age(value: str) -> int:
    """Return the age as an int, or UNPARSEABLE_AGE if it is not a whole number
    in the signed 32-bit range."""
    m = _AGE_RE.fullmatch(value.strip())
    if not m:
        return UNPARSEABLE_AGE

    age = int(m.group(1) + m.group(2))
    if not MIN_AGE_VALUE <= age <= MAX_AGE_VALUE:
        return UNPARSEABLE_AGE
    return age


def _sorted_counts(keys: Iterable[str]) -> Dict[str, int]:
    counts: Counter[str] = Counter(keys)
    return {k: counts[k] for k in sorted(counts.keys())}


def filter_users_by_minimum_age(users: List[UserRecord], threshold: int) -> List[UserRecord]:
    return [u for u in users if parse_age(u.age) >= threshold]


def count_users_by_country(users: List[UserRecord]) -> Dict[str, int]:
    return _sorted_counts(u.country for u in users)


def calculate_users_average_age(users: List[UserRecord]) -> float:
    """Mean of the parseable ages, rounded half up to one decimal; 0.0 if there are none."""
    ages = [a for a in (parse_age(u.age) for u in users) if a >= 0]
    if not ages:
        return 0.0

    avg = sum(ages) / len(ages)
    return math.floor(avg * 10 + 0.5) / 10


def get_top_n_oldest_users(users: List[UserRecord], n: int) -> List[UserRecord]:
    # sorted() is stable with reverse=True, so equal ages keep file order.
    if n <= 0:
        return []
    return sorted(users, key=lambda u: parse_age(u.age), reverse=True)[:n]


def region_for_country(country: str) -> str:
    return REGIONS.get(country, OTHER_REGION)


def count_users_by_region(users: List[UserRecord]) -> Dict[str, int]:
    return _sorted_counts(region_for_country(u.country) for u in users)
