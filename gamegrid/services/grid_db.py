"""DB service layer for the daily grid table.

- The grid cache does not touch DB sessions directly; it calls this module.
- This layer owns session/transaction boundaries.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from gamegrid.crud import CreateData, ReadData
from gamegrid.models.schema_models import DailyGridSchema


class GridStore:
    """Durable date -> games mapping backed by a SQLAlchemy async engine."""

    def __init__(self, engine: AsyncEngine, Session: async_sessionmaker):
        self.engine = engine
        self.Session = Session

    async def create_table(self) -> None:
        await CreateData.create_table(self.engine)

    async def read_grid(self, date: str) -> DailyGridSchema | None:
        async with self.Session() as session:
            return await ReadData.read_daily_grid(date, session)

    async def insert_grid(self, daily_grid: DailyGridSchema) -> bool:
        async with self.Session() as session:
            return await CreateData.create_daily_grid_if_absent(daily_grid, session)
