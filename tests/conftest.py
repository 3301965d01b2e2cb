from datetime import date

import pytest

from gamegrid.models.dc_models import GameModel


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCatalog:
    """Stands in for CatalogGateway; records every call."""

    def __init__(self, pool=None, search_results=None, error=None):
        self.pool = pool if pool is not None else []
        self.search_results = search_results if search_results is not None else []
        self.error = error
        self.fetch_calls: list[date] = []
        self.search_calls: list[str] = []

    async def fetch_pool(self, today: date):
        self.fetch_calls.append(today)
        if self.error is not None:
            raise self.error
        return list(self.pool)

    async def search(self, query: str):
        self.search_calls.append(query)
        if self.error is not None:
            raise self.error
        return list(self.search_results)


def make_game(index: int, name: str | None = None) -> GameModel:
    return GameModel(
        id=index,
        name=name or f"Game {index}",
        cover={"url": f"//images.igdb.com/cover/{index}.jpg"},
        screenshots=[{"url": f"//images.igdb.com/screenshot/{index}.jpg"}],
        first_release_date=1_000_000_000 + index,
    )


def make_pool(size: int) -> list[GameModel]:
    return [make_game(i) for i in range(1, size + 1)]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def pool() -> list[GameModel]:
    return make_pool(50)
