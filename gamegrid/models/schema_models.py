from pydantic import BaseModel
from typing import List

from gamegrid.models.dc_models import GameModel


class DailyGridSchema(BaseModel):
    date: str
    games: List[GameModel]

    class Config:
        from_attributes = True


class AccessTokenSchema(BaseModel):
    value: str
    expires_at: float  # epoch seconds


class RateLimitRecordSchema(BaseModel):
    count: int
    window_reset_at: float  # clock seconds
