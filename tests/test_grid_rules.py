"""Tests for the pure daily grid rules."""

from datetime import date

import pytest
from hypothesis import given, settings, strategies as st

from gamegrid.domain.grid_rules import (
    QueryValidationError,
    date_seed,
    dedupe_by_name,
    grid_number,
    month_start_timestamp,
    sanitize_query,
    seeded_random,
    select_games_for_date,
)
from conftest import make_game, make_pool

valid_dates = st.dates(min_value=date(2025, 1, 1), max_value=date(2035, 12, 31)).map(date.isoformat)


class TestSelectGamesForDate:
    def test_same_pool_and_date_give_same_grid(self, pool):
        first = select_games_for_date(pool, "2025-06-01")
        second = select_games_for_date(list(pool), "2025-06-01")

        assert len(first) == 9
        assert [game.id for game in first] == [game.id for game in second]

    def test_no_duplicate_names(self, pool):
        selected = select_games_for_date(pool, "2025-06-01", 9)
        names = [game.name for game in selected]
        assert len(names) == len(set(names))

    def test_short_pool_returns_whole_pool(self):
        short_pool = make_pool(5)
        selected = select_games_for_date(short_pool, "2025-06-01", 9)

        assert len(selected) == 5
        assert {game.id for game in selected} == {game.id for game in short_pool}

    def test_empty_pool(self):
        assert select_games_for_date([], "2025-06-01") == []

    def test_count_is_respected(self, pool):
        assert len(select_games_for_date(pool, "2025-06-01", 3)) == 3

    def test_selection_is_a_prefix_of_larger_selection(self, pool):
        small = select_games_for_date(pool, "2025-06-01", 4)
        large = select_games_for_date(pool, "2025-06-01", 9)
        assert large[:4] == small

    @pytest.mark.parametrize(
        "pool_size, date_str, expected",
        [
            (50, "2025-06-01", [17, 23, 0, 44, 38, 41, 42, 24, 28]),
            (5, "2025-06-01", [1, 2, 0, 4, 3]),
            (500, "2025-06-01", [171, 236, 9, 449, 444, 445, 383, 412, 6]),
            (500, "2025-01-01", [402, 35, 39, 227, 125, 484, 178, 147, 408]),
            (100, "2026-10-19", [86, 50, 27, 20, 77, 9, 11, 10, 98]),
        ],
    )
    def test_matches_grids_already_served(self, pool_size, date_str, expected):
        assert select_games_for_date(list(range(pool_size)), date_str) == expected

    @given(st.integers(min_value=1, max_value=60), valid_dates)
    @settings(deadline=None, max_examples=50)
    def test_size_and_uniqueness_for_any_pool(self, size, date_str):
        games = make_pool(size)
        selected = select_games_for_date(games, date_str, 9)

        assert len(selected) == min(size, 9)
        assert len({game.id for game in selected}) == len(selected)
        assert selected == select_games_for_date(games, date_str, 9)


class TestSeed:
    def test_date_seed_is_utc_midnight_in_milliseconds(self):
        assert date_seed("2025-06-01") == 1_748_736_000_000
        assert date_seed("1970-01-01") == 0

    def test_date_seed_rejects_malformed_dates(self):
        with pytest.raises(ValueError):
            date_seed("June 1st")

    @given(st.integers(min_value=0, max_value=date_seed("2100-01-01") + 100_000))
    def test_seeded_random_in_unit_interval(self, seed):
        value = seeded_random(seed)
        assert 0.0 <= value < 1.0

    def test_seeded_random_at_zero(self):
        assert seeded_random(0) == 0.0


class TestDedupeByName:
    def test_keeps_first_occurrence(self):
        games = [make_game(1, "Doom"), make_game(2, "Quake"), make_game(3, "Doom")]
        unique = dedupe_by_name(games)
        assert [game.id for game in unique] == [1, 2]

    def test_accepts_plain_dicts(self):
        games = [{"name": "Doom", "id": 1}, {"name": "Doom", "id": 2}]
        assert dedupe_by_name(games) == [{"name": "Doom", "id": 1}]


class TestSanitizeQuery:
    @pytest.mark.parametrize("query", [None, "", "a", "  a  "])
    def test_too_short(self, query):
        with pytest.raises(QueryValidationError):
            sanitize_query(query)

    def test_two_characters_pass(self):
        assert sanitize_query("ab") == "ab"

    def test_strips_quotes_backslashes_and_semicolons(self):
        assert sanitize_query('Half"-Life; 2\\') == "Half-Life 2"

    def test_trims_whitespace(self):
        assert sanitize_query("  Portal  ") == "Portal"

    def test_revalidates_after_stripping(self):
        with pytest.raises(QueryValidationError):
            sanitize_query(' a"; ')

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError, match="at least 2 characters"):
            sanitize_query("x")


def test_month_start_timestamp():
    assert month_start_timestamp(date(2025, 6, 15)) == 1_748_736_000
    assert month_start_timestamp(date(2025, 6, 1)) == 1_748_736_000


@pytest.mark.parametrize(
    "date_str, expected",
    [("2025-01-01", 1), ("2025-01-02", 2), ("2025-02-01", 32), ("2026-01-01", 366)],
)
def test_grid_number(date_str, expected):
    assert grid_number(date_str) == expected
