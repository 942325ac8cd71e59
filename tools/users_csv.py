"""Load the users CSV (name, age, country) into UserRecord values."""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

log = logging.getLogger("users_csv")

COLUMNS = ("name", "age", "country")


@dataclass(frozen=True)
class UserRecord:
    name: str
    age: str
    country: str


def _find_column(headers: List[str], key: str) -> Optional[int]:
    key = key.lower()
    for i, h in enumerate(headers):
        if h.lower() == key:
            return i
    return None


def _col(row: List[str], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx]


def _is_blank(row: List[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def load_users(path: Union[str, Path]) -> List[UserRecord]:
    """Read users from a comma-separated file whose first line is a header.

    Columns are matched by name, case-insensitively and in any order. A missing
    column or a short row gives an empty string for that field. Commas always
    separate fields; quotes are kept as literal text.

    A missing or unreadable file is logged and gives an empty list. A read
    error part way through is logged and the rows read before it are returned.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        log.error(f"Could not read CSV at {csv_path.resolve()}")
        return []

    users: List[UserRecord] = []
    try:
        with csv_path.open("r", encoding="utf-8-sig", errors="replace", newline="") as f:
            reader = csv.reader(f, quoting=csv.QUOTE_NONE)
            header = next(reader, None)
            if header is None:
                return []

            headers = [h.strip() for h in header]
            name_idx, age_idx, country_idx = (_find_column(headers, c) for c in COLUMNS)

            for row in reader:
                if _is_blank(row):
                    continue

                cols = [c.strip() for c in row]
                users.append(
                    UserRecord(
                        name=_col(cols, name_idx),
                        age=_col(cols, age_idx),
                        country=_col(cols, country_idx),
                    )
                )
    except (OSError, csv.Error) as e:
        log.error(f"Error reading CSV: {e}")
        return users

    log.info(f"Loaded {len(users)} users from {csv_path}")
    return users
