"""Two-tier cache for today's grid.

The memory slot holds a single grid and is the source of truth for the process.
The optional GridStore mirrors it by date so a restart serves the same grid.
Durable writes are detached tasks: the request path never awaits them and a
failed write is only logged.
"""

import asyncio
import logging
from threading import RLock
from typing import Optional, Set

from gamegrid.models.schema_models import DailyGridSchema
from gamegrid.services.grid_db import GridStore


class GridCache:
    def __init__(self, store: Optional[GridStore] = None):
        self.store = store
        self._slot: Optional[DailyGridSchema] = None
        self._lock = RLock()
        self._pending_writes: Set[asyncio.Task] = set()

    def get_cached(self, date: str) -> Optional[DailyGridSchema]:
        """Return the memory slot if it holds a non-empty grid for ``date``."""
        with self._lock:
            grid = self._slot
        if grid is not None and grid.date == date and grid.games:
            return grid
        return None

    async def get_grid(self, date: str) -> Optional[DailyGridSchema]:
        """Memory slot first, then the durable store. None is a miss in both tiers."""
        grid = self.get_cached(date)
        if grid is not None:
            return grid
        if self.store is None:
            return None

        try:
            grid = await self.store.read_grid(date)
        except Exception as e:
            logging.error(f"DB read error, falling back to catalog: {e}")
            return None
        if grid is None or not grid.games:
            return None

        with self._lock:
            self._slot = grid
        return grid

    def put_grid(self, grid: DailyGridSchema) -> Optional[asyncio.Task]:
        """Overwrite the memory slot and start a best-effort durable write.

        Returns:
            asyncio.Task | None: the detached write, None when no store is configured
        """
        with self._lock:
            self._slot = grid
        if self.store is None:
            return None

        task = asyncio.create_task(self.store.insert_grid(grid))
        self._pending_writes.add(task)
        task.add_done_callback(self._on_write_done)
        return task

    def _on_write_done(self, task: asyncio.Task) -> None:
        self._pending_writes.discard(task)
        if task.cancelled():
            logging.warning("DB write cancelled before completion")
            return
        error = task.exception()
        if error is not None:
            logging.error(f"DB write error: {error}")

    async def drain(self) -> None:
        """Wait for durable writes still in flight (used on shutdown)."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    async def create_table(self) -> None:
        """Create the durable table if missing. Failures are logged, not raised."""
        if self.store is None:
            return
        try:
            await self.store.create_table()
        except Exception as e:
            logging.error(f"DB setup error: {e}")
