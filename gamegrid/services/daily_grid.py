"""Use case: today's grid.

Cache order is memory slot, durable store, then the catalog. A freshly
computed grid goes back into both tiers before it is returned.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable

from gamegrid.domain.grid_rules import GRID_SIZE, dedupe_by_name, select_games_for_date
from gamegrid.models.schema_models import DailyGridSchema
from gamegrid.services.catalog import CatalogGateway
from gamegrid.services.grid_cache import GridCache


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class DailyGridService:
    def __init__(
        self,
        catalog: CatalogGateway,
        cache: GridCache,
        grid_size: int = GRID_SIZE,
        today: Callable[[], date] = utc_today,
    ):
        self.catalog = catalog
        self.cache = cache
        self.grid_size = grid_size
        self.today = today

    async def get_todays_grid(self) -> DailyGridSchema:
        today = self.today()
        date_str = today.isoformat()

        cached = await self.cache.get_grid(date_str)
        if cached is not None:
            return cached

        pool = dedupe_by_name(await self.catalog.fetch_pool(today))
        games = select_games_for_date(pool, date_str, self.grid_size)
        if not games:
            raise RuntimeError(f"Catalog returned no candidate games for {date_str}")
        logging.info(f"Selected {len(games)} games for {date_str} from a pool of {len(pool)}")

        grid = DailyGridSchema(date=date_str, games=games)
        self.cache.put_grid(grid)
        return grid
