from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgres_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
import logging

from gamegrid.models.schemas import Base, DailyGrid
from gamegrid.models.schema_models import DailyGridSchema


class CreateData:
    @staticmethod
    async def create_table(engine: AsyncEngine) -> None:
        """Create the daily_grid table if it does not exist yet"""
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @staticmethod
    async def create_daily_grid_if_absent(daily_grid: DailyGridSchema, session: AsyncSession) -> bool:
        """Insert the grid for its date unless a row for that date already exists.

        Args:
            daily_grid (DailyGridSchema): date and selected games
            session (AsyncSession): session owned by the caller

        Returns:
            bool: True if this call inserted the row, False if another writer was first
        """
        games = [game.model_dump(exclude_none=True) for game in daily_grid.games]
        dialect = session.bind.dialect.name
        if dialect == "postgresql":
            stmt = postgres_insert(DailyGrid).values(date=daily_grid.date, games=games)
        elif dialect == "sqlite":
            stmt = sqlite_insert(DailyGrid).values(date=daily_grid.date, games=games)
        else:
            raise NotImplementedError(f"Unsupported database dialect: {dialect}")
        stmt = stmt.on_conflict_do_nothing(index_elements=[DailyGrid.date])

        result = await session.execute(stmt)
        await session.commit()
        inserted = result.rowcount == 1
        if not inserted:
            logging.info(f"Grid for {daily_grid.date} already stored, keeping the existing row")
        return inserted


class ReadData:
    @staticmethod
    async def read_daily_grid(date: str, session: AsyncSession) -> DailyGridSchema | None:
        """Read the stored grid for a date

        Args:
            date (str): YYYY-MM-DD

        Returns:
            DailyGridSchema | None: the stored grid, None if the date has no row
        """
        stmt = select(DailyGrid).where(DailyGrid.date == date)
        result = await session.execute(stmt)
        row = result.scalars().first()
        if row is None:
            return None
        return DailyGridSchema(date=row.date, games=row.games)
