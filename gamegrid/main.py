from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging
from contextlib import asynccontextmanager
from types import SimpleNamespace

import httpx
import uvicorn
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from gamegrid import load_secrets
from gamegrid.create_engine import engine
from gamegrid.db import Session
from gamegrid.rate_limiter import RateLimiter
from gamegrid.routers import grid
from gamegrid.services.catalog import CatalogGateway
from gamegrid.services.daily_grid import DailyGridService
from gamegrid.services.grid_cache import GridCache
from gamegrid.services.grid_db import GridStore
from gamegrid.services.token_manager import AccessTokenManager

logging.basicConfig(level=logging.INFO)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


def build_services(store: GridStore | None = None) -> SimpleNamespace:
    """Wire the cache, limiter and catalog clients shared by every request."""
    http_client = httpx.AsyncClient(timeout=httpx.Timeout(load_secrets.upstream_timeout))
    token_manager = AccessTokenManager(
        http_client,
        load_secrets.twitch_client_id,
        load_secrets.twitch_client_secret,
    )
    catalog = CatalogGateway(
        http_client,
        token_manager,
        load_secrets.twitch_client_id,
        pool_limit=load_secrets.pool_limit,
        search_limit=load_secrets.search_limit,
        min_rating=load_secrets.min_rating,
        min_rating_count=load_secrets.min_rating_count,
    )
    grid_cache = GridCache(store)
    return SimpleNamespace(
        http_client=http_client,
        token_manager=token_manager,
        catalog=catalog,
        grid_cache=grid_cache,
        daily_grid_service=DailyGridService(catalog, grid_cache, grid_size=load_secrets.grid_size),
        rate_limiter=RateLimiter(
            max_requests=load_secrets.search_rate_limit,
            window_seconds=load_secrets.search_rate_window_seconds,
        ),
    )


def create_app(store: GridStore | None = None) -> FastAPI:
    services = build_services(store)
    scheduler = AsyncIOScheduler()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the grid table, then sweep expired rate-limit records on a schedule."""
        missing = load_secrets.missing_credentials()
        if missing:
            logging.warning(f"Missing env vars (catalog calls will fail): {', '.join(missing)}")
        if services.grid_cache.store is None:
            logging.info("DATABASE_URL not set, caching today's grid in memory only")
        await services.grid_cache.create_table()

        scheduler.add_job(
            services.rate_limiter.sweep,
            "interval",
            minutes=load_secrets.rate_limit_sweep_minutes,
        )
        scheduler.start()
        try:
            yield
        finally:
            scheduler.shutdown()
            await services.grid_cache.drain()
            await services.http_client.aclose()
            if services.grid_cache.store is not None:
                await services.grid_cache.store.engine.dispose()
            logging.info("Stop Server")

    app = FastAPI(title="Game Grid API", lifespan=lifespan)
    app.state.daily_grid_service = services.daily_grid_service
    app.state.catalog = services.catalog
    app.state.rate_limiter = services.rate_limiter
    app.state.trust_forwarded_for = load_secrets.trust_forwarded_for
    app.state.services = services

    if load_secrets.allowed_origin:
        app.add_middleware(CORSMiddleware, allow_origins=[load_secrets.allowed_origin])
    else:
        app.add_middleware(CORSMiddleware, allow_origins=["*"])
    app.include_router(grid.grid_router)
    return app


app = create_app(GridStore(engine, Session) if engine is not None else None)


if __name__ == "__main__":
    uvicorn.run(app, host=load_secrets.host, port=load_secrets.port)
