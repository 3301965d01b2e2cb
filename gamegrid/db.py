from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from gamegrid.create_engine import engine


def create_session_factory(bind: AsyncEngine | None) -> async_sessionmaker | None:
    """Centralized session factory; None means the service runs memory-only."""
    if bind is None:
        return None
    return async_sessionmaker(
        autocommit=False,
        class_=AsyncSession,
        autoflush=True,
        bind=bind,
    )


Session = create_session_factory(engine)
