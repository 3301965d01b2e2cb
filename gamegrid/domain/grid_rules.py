"""Daily grid rules that are independent from HTTP and DB.

Rule of thumb:
- OK: seeded selection, dedup, query sanitizing, date arithmetic on given dates.
- Not OK: touching DB sessions, httpx, FastAPI, datetime.now(), etc.

The selection transform is part of the public contract: every grid ever served
was produced by ``frac(sin(seed) * 10000)``. Changing it changes the content of
all future grids, not only their representation.
"""

import math
import re
from datetime import date, datetime, timezone
from typing import Iterable, List, Sequence, TypeVar

T = TypeVar("T")

GRID_SIZE = 9
MIN_QUERY_LENGTH = 2
LAUNCH_DATE = date(2025, 1, 1)

# Characters that would let a caller break out of the quoted upstream search term.
_UNSAFE_QUERY_CHARS = re.compile(r'["\\;]')

# Upper bound on seed offsets tried per pool entry before giving up on unseen indexes.
_MAX_ATTEMPTS_PER_ENTRY = 1000


class QueryValidationError(ValueError):
    pass


def seeded_random(seed: float) -> float:
    """Return a float in [0, 1) derived only from ``seed``."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def date_seed(date_str: str) -> int:
    """Epoch milliseconds of UTC midnight for a ``YYYY-MM-DD`` string."""
    day = datetime.strptime(date_str, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    return int(day.timestamp()) * 1000


def select_games_for_date(games: Sequence[T], date_str: str, count: int = GRID_SIZE) -> List[T]:
    """Pick ``count`` distinct entries of ``games`` for ``date_str``.

    The result depends only on the pool (contents and order) and the date, so
    every process computes the same grid for the same day. A pool smaller than
    ``count`` yields the whole pool in seed order.
    """
    pool_size = len(games)
    if pool_size == 0 or count <= 0:
        return []

    seed = date_seed(date_str)
    selected: List[T] = []
    used_indexes = set()
    max_attempts = pool_size * _MAX_ATTEMPTS_PER_ENTRY

    seed_offset = 0
    while len(selected) < count and len(used_indexes) < pool_size:
        if seed_offset >= max_attempts:
            break
        idx = math.floor(seeded_random(seed + seed_offset) * pool_size)
        if idx not in used_indexes:
            selected.append(games[idx])
            used_indexes.add(idx)
        seed_offset += 1

    return selected


def dedupe_by_name(games: Iterable[T]) -> List[T]:
    """Drop entries whose ``name`` was already seen, keeping the first occurrence."""
    unique: List[T] = []
    seen_names = set()
    for game in games:
        name = game["name"] if isinstance(game, dict) else game.name
        if name in seen_names:
            continue
        unique.append(game)
        seen_names.add(name)
    return unique


def sanitize_query(query: str | None) -> str:
    """Strip characters unsafe inside the upstream query and validate the length.

    Raises:
        QueryValidationError: the query is missing or shorter than two characters,
            either as given or after sanitizing.
    """
    if query is None or len(query.strip()) < MIN_QUERY_LENGTH:
        raise QueryValidationError(f"Query must be at least {MIN_QUERY_LENGTH} characters")
    sanitized = _UNSAFE_QUERY_CHARS.sub("", query).strip()
    if len(sanitized) < MIN_QUERY_LENGTH:
        raise QueryValidationError(f"Query must be at least {MIN_QUERY_LENGTH} characters")
    return sanitized


def month_start_timestamp(today: date) -> int:
    """Unix seconds of the first day of ``today``'s month, UTC midnight."""
    first = datetime(today.year, today.month, 1, tzinfo=timezone.utc)
    return int(first.timestamp())


def grid_number(date_str: str) -> int:
    """Sequential grid number; the launch date is grid #1."""
    current = datetime.strptime(date_str, "%Y-%m-%d").date()
    return (current - LAUNCH_DATE).days + 1
