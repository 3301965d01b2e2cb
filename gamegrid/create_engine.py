from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from gamegrid.load_secrets import database_url

SUPPORTED_DIALECTS = ("postgresql", "sqlite")


def normalize_database_url(url: str) -> str:
    """Map a plain database URL onto the async driver SQLAlchemy should use.

    Hosted Postgres providers hand out ``postgres://...?sslmode=require`` URLs;
    asyncpg wants the ``postgresql+asyncpg`` scheme and an ``ssl`` parameter.
    """
    if url.startswith("postgres://"):
        url = "postgresql+asyncpg://" + url[len("postgres://"):]
    elif url.startswith("postgresql://"):
        url = "postgresql+asyncpg://" + url[len("postgresql://"):]
    elif url.startswith("sqlite://"):
        url = "sqlite+aiosqlite://" + url[len("sqlite://"):]

    if url.startswith("postgresql+asyncpg://"):
        url = url.replace("sslmode=", "ssl=")
    return url


def create_engine_from_url(url: str | None) -> AsyncEngine | None:
    """Create the async engine, or None when no durable store is configured.

    Raises:
        ValueError: the URL names a database the grid table inserts do not support
    """
    if not url:
        return None
    url = normalize_database_url(url)
    dialect = url.split("://", 1)[0].split("+", 1)[0]
    if dialect not in SUPPORTED_DIALECTS:
        raise ValueError(f"Unsupported DATABASE_URL dialect: {dialect} (expected postgres or sqlite)")
    if dialect == "sqlite":
        return create_async_engine(url=url, echo=False)
    return create_async_engine(url, pool_size=5, max_overflow=5, pool_pre_ping=True)


engine = create_engine_from_url(database_url)
