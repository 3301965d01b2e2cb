from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import JSON, TEXT
from sqlalchemy.dialects.postgresql import JSONB


class Base(DeclarativeBase):
    pass


class DailyGrid(Base):
    __tablename__ = "daily_grid"
    date = Column(TEXT, primary_key=True)
    games = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
